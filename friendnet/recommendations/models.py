from __future__ import annotations

from enum import Enum

from pydantic import BaseModel, ConfigDict, Field, field_validator
from pydantic.alias_generators import to_camel

from ..directory.store import User

MAX_PASSWORD_BYTES = 72


class _CamelModel(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class RegisterRequest(BaseModel):
    username: str = Field(..., min_length=1, max_length=64)
    password: str = Field(..., min_length=1, max_length=128)
    interests: list[str] = Field(default_factory=list, max_length=50)

    @field_validator("password")
    @classmethod
    def _password_fits_bcrypt(cls, value: str) -> str:
        # bcrypt only accepts the first 72 bytes of input
        if len(value.encode("utf-8")) > MAX_PASSWORD_BYTES:
            raise ValueError(f"password must be at most {MAX_PASSWORD_BYTES} bytes in UTF-8")
        return value


class LoginRequest(BaseModel):
    username: str
    password: str


class UserOut(_CamelModel):
    id: str
    username: str
    interests: list[str]
    friends: list[str]
    sent_friend_requests: list[str]
    pending_friend_requests: list[str]
    created_at: float

    @classmethod
    def from_user(cls, user: User) -> UserOut:
        return cls(
            id=user.id,
            username=user.username,
            interests=list(user.interests),
            friends=sorted(user.friends),
            sent_friend_requests=sorted(user.sent_friend_requests),
            pending_friend_requests=sorted(user.pending_friend_requests),
            created_at=user.created_at,
        )


class AuthResponse(_CamelModel):
    status: str
    user_id: str
    user: UserOut


class RequestStatus(str, Enum):
    requested = "requested"
    friend = "friend"
    none = "none"


class SearchResultOut(UserOut):
    request_status: RequestStatus


class MessageResponse(BaseModel):
    message: str


class FriendRequestResponse(BaseModel):
    message: str
    status: str


class RecommendationItem(_CamelModel):
    user: UserOut
    mutual_friends: int
    mutual_interests: int
    score: int
