from __future__ import annotations

import threading
import time
import uuid
from collections.abc import Iterable, Iterator
from contextlib import contextmanager
from dataclasses import dataclass, field, replace


class DirectoryError(Exception):
    """The directory could not serve a lookup or mutation."""


class DuplicateUsernameError(Exception):
    pass


@dataclass
class User:
    id: str
    username: str
    password_hash: str
    interests: list[str] = field(default_factory=list)
    friends: set[str] = field(default_factory=set)
    sent_friend_requests: set[str] = field(default_factory=set)
    pending_friend_requests: set[str] = field(default_factory=set)
    created_at: float = field(default_factory=time.time)

    def snapshot(self) -> User:
        """Return a copy whose collections are independent of this record."""
        return replace(
            self,
            interests=list(self.interests),
            friends=set(self.friends),
            sent_friend_requests=set(self.sent_friend_requests),
            pending_friend_requests=set(self.pending_friend_requests),
        )


_users: dict[str, User] = {}
_lock = threading.RLock()


def normalize_interests(interests: Iterable[str]) -> list[str]:
    """Strip whitespace, drop blanks and repeats, keep first-seen order."""
    return list(dict.fromkeys(s.strip() for s in interests if s.strip()))


def create_user(username: str, password_hash: str, interests: Iterable[str] = ()) -> User:
    with _lock:
        if any(u.username == username for u in _users.values()):
            raise DuplicateUsernameError(username)
        user = User(
            id=uuid.uuid4().hex,
            username=username,
            password_hash=password_hash,
            interests=normalize_interests(interests),
        )
        _users[user.id] = user
        return user.snapshot()


def get_user(user_id: str) -> User | None:
    with _lock:
        user = _users.get(user_id)
        return user.snapshot() if user else None


def get_users(user_ids: Iterable[str]) -> list[User]:
    """Resolve ids to snapshots ordered by username.

    Every id must exist; a dangling relationship is a directory failure.
    """
    with _lock:
        resolved = []
        for uid in user_ids:
            user = _users.get(uid)
            if user is None:
                raise DirectoryError(f"Dangling user reference: {uid}")
            resolved.append(user.snapshot())
    return sorted(resolved, key=lambda u: u.username)


def find_by_username(username: str) -> User | None:
    with _lock:
        for user in _users.values():
            if user.username == username:
                return user.snapshot()
    return None


def search_by_prefix(prefix: str, exclude_id: str, limit: int) -> list[User]:
    """Case-insensitive username prefix match, excluding ``exclude_id``."""
    prefix_lower = prefix.lower()
    with _lock:
        matches = [
            u.snapshot()
            for u in _users.values()
            if u.id != exclude_id and u.username.lower().startswith(prefix_lower)
        ]
    matches.sort(key=lambda u: u.username)
    return matches[:limit]


def find_with_interests(interests: Iterable[str], exclude_ids: set[str]) -> list[User]:
    """Users outside ``exclude_ids`` holding at least one of ``interests``."""
    wanted = set(interests)
    if not wanted:
        return []
    with _lock:
        return [
            u.snapshot()
            for u in _users.values()
            if u.id not in exclude_ids and wanted.intersection(u.interests)
        ]


def find_all(exclude_ids: set[str]) -> list[User]:
    with _lock:
        return [u.snapshot() for u in _users.values() if u.id not in exclude_ids]


@contextmanager
def edit(*user_ids: str) -> Iterator[list[User | None]]:
    """Hold the directory lock and yield the live records for ``user_ids``.

    Changes made to the yielded records are visible to later lookups.
    Unknown ids yield ``None``.
    """
    with _lock:
        yield [_users.get(uid) for uid in user_ids]


def clear_directory() -> None:
    with _lock:
        _users.clear()
