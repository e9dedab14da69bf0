from __future__ import annotations

import logging
import time

from ..config import DEFAULT_SETTINGS
from ..directory.store import User, find_all, find_with_interests, get_user
from .engine import Recommendation, exclusion_set, recommend
from .models import RecommendationItem, UserOut

logger = logging.getLogger(__name__)


def gather_candidates(subject: User) -> list[User]:
    """Collect the interest pool followed by the mutual-friend pool.

    Both pools skip the subject's exclusion set. A user may appear in both;
    the engine scores each id once.
    """
    excluded = exclusion_set(subject)

    similar_interests: list[User] = []
    if subject.interests:
        similar_interests = find_with_interests(subject.interests, excluded)

    mutual_friends: list[User] = []
    if subject.friends:
        mutual_friends = [
            u for u in find_all(excluded) if u.friends & subject.friends
        ]

    return similar_interests + mutual_friends


def _to_item(rec: Recommendation) -> RecommendationItem:
    return RecommendationItem(
        user=UserOut.from_user(rec.user),
        mutual_friends=rec.mutual_friends,
        mutual_interests=rec.mutual_interests,
        score=rec.score,
    )


def get_recommendations(
    user_id: str,
    max_results: int = DEFAULT_SETTINGS.max_recommendations,
) -> list[RecommendationItem]:
    start_time = time.time()

    # Fresh snapshot so concurrent relationship changes never leak in mid-scoring
    subject = get_user(user_id)
    if subject is None:
        return []

    candidates = gather_candidates(subject)
    ranked = recommend(subject, candidates, max_results=max_results)

    elapsed_ms = round((time.time() - start_time) * 1000, 1)
    logger.info(
        "Recommendations for %s: %d candidates, %d returned in %.1f ms",
        user_id, len(candidates), len(ranked), elapsed_ms,
    )
    return [_to_item(rec) for rec in ranked]
