from __future__ import annotations

from fastapi import HTTPException, Request

from ..directory.store import User, get_user


def get_current_user(request: Request) -> User | None:
    """Return the session's user snapshot, or ``None``."""
    user_id = request.session.get("user_id")
    return get_user(user_id) if user_id else None


def require_user(request: Request) -> User:
    """Raise 401 if no user is logged in or the session user is gone."""
    user = get_current_user(request)
    if user is None:
        raise HTTPException(status_code=401, detail="Not authenticated")
    return user
