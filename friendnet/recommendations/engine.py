from __future__ import annotations

from collections.abc import Iterable
from dataclasses import dataclass

from ..directory.store import User

MUTUAL_FRIEND_WEIGHT = 2
MUTUAL_INTEREST_WEIGHT = 1


@dataclass(frozen=True)
class Recommendation:
    user: User
    mutual_friends: int
    mutual_interests: int

    @property
    def score(self) -> int:
        return (
            self.mutual_friends * MUTUAL_FRIEND_WEIGHT
            + self.mutual_interests * MUTUAL_INTEREST_WEIGHT
        )


def exclusion_set(subject: User) -> set[str]:
    """Ids that must never be recommended to ``subject``."""
    return (
        set(subject.friends)
        | set(subject.sent_friend_requests)
        | set(subject.pending_friend_requests)
        | {subject.id}
    )


def _dedupe(candidates: Iterable[User], excluded: set[str]) -> list[User]:
    """First occurrence of each id wins; excluded ids are dropped."""
    seen: set[str] = set()
    unique: list[User] = []
    for candidate in candidates:
        if candidate.id in excluded or candidate.id in seen:
            continue
        seen.add(candidate.id)
        unique.append(candidate)
    return unique


def score_candidate(subject: User, candidate: User) -> Recommendation:
    return Recommendation(
        user=candidate,
        mutual_friends=len(set(candidate.friends) & set(subject.friends)),
        mutual_interests=len(set(candidate.interests) & set(subject.interests)),
    )


def recommend(
    subject: User,
    candidate_pool: Iterable[User],
    max_results: int = 5,
) -> list[Recommendation]:
    """
    Rank candidate friends for ``subject``.

    Candidates are deduplicated by id, scored on mutual friends (weight 2)
    and mutual interests (weight 1), stripped of anything scoring zero, then
    sorted by score descending with ties broken by id ascending.
    """
    if max_results <= 0:
        raise ValueError("max_results must be a positive integer")

    candidates = _dedupe(candidate_pool, exclusion_set(subject))
    scored = [score_candidate(subject, c) for c in candidates]
    ranked = sorted(
        (rec for rec in scored if rec.score > 0),
        key=lambda rec: (-rec.score, rec.user.id),
    )
    return ranked[:max_results]
