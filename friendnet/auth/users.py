from __future__ import annotations

import logging
from collections.abc import Iterable

import bcrypt

from ..config import DEFAULT_SETTINGS
from ..directory.store import User, create_user, find_by_username
from ..recommendations.models import MAX_PASSWORD_BYTES

logger = logging.getLogger(__name__)


class AuthenticationError(Exception):
    def __init__(self, message: str) -> None:
        super().__init__(message)
        self.message = message


def _hash_password(plain: str) -> str:
    return bcrypt.hashpw(
        plain.encode(), bcrypt.gensalt(rounds=DEFAULT_SETTINGS.bcrypt_rounds)
    ).decode()


def _verify_password(plain: str, hashed: str) -> bool:
    # Nothing longer than 72 bytes was ever hashed, and bcrypt 5 rejects it
    if len(plain.encode()) > MAX_PASSWORD_BYTES:
        return False
    return bcrypt.checkpw(plain.encode(), hashed.encode())


def register(username: str, password: str, interests: Iterable[str] = ()) -> User:
    """Create a user with a hashed password. Raises ``DuplicateUsernameError``."""
    user = create_user(username, _hash_password(password), interests)
    logger.info("Registered user %s (%s)", user.username, user.id)
    return user


def authenticate(username: str, password: str) -> User:
    """Verify credentials and return the user, or raise ``AuthenticationError``."""
    user = find_by_username(username)
    if user is None:
        logger.warning("Login attempt for unknown user %s", username)
        raise AuthenticationError("User not found")
    if not _verify_password(password, user.password_hash):
        logger.warning("Invalid password for user %s", username)
        raise AuthenticationError("Invalid credentials")
    return user
