from __future__ import annotations

import logging

from fastapi import Depends, FastAPI, HTTPException, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from starlette.middleware.sessions import SessionMiddleware

from .auth.dependencies import require_user
from .auth.users import AuthenticationError, authenticate, register
from .config import DEFAULT_SETTINGS
from .directory.store import DirectoryError, DuplicateUsernameError, User
from .friends.service import (
    FriendRequestError,
    UserNotFoundError,
    accept_friend_request,
    list_friends,
    list_pending,
    search_users,
    toggle_friend_request,
    unfriend,
)
from .recommendations.models import (
    AuthResponse,
    FriendRequestResponse,
    LoginRequest,
    MessageResponse,
    RecommendationItem,
    RegisterRequest,
    SearchResultOut,
    UserOut,
)
from .recommendations.retrieval import get_recommendations

logging.basicConfig(level=DEFAULT_SETTINGS.log_level)
logger = logging.getLogger(__name__)

app = FastAPI(title="Friend Network API", version="1.0.0")
app.add_middleware(SessionMiddleware, secret_key=DEFAULT_SETTINGS.session_secret)
app.add_middleware(
    CORSMiddleware,
    allow_origins=list(DEFAULT_SETTINGS.cors_origins),
    allow_methods=["*"],
    allow_headers=["*"],
)


@app.exception_handler(DirectoryError)
def directory_error_handler(request: Request, exc: DirectoryError) -> JSONResponse:
    logger.exception("Directory failure on %s %s", request.method, request.url.path, exc_info=exc)
    return JSONResponse(status_code=500, content={"detail": "Internal server error"})


def _domain_error(exc: UserNotFoundError | FriendRequestError) -> HTTPException:
    status = 404 if isinstance(exc, UserNotFoundError) else 400
    return HTTPException(status_code=status, detail=exc.message)


# ── Public endpoints ─────────────────────────────────────────────────────


@app.get("/health")
def health() -> dict[str, str]:
    return {"status": "ok"}


# ── Auth endpoints ───────────────────────────────────────────────────────


@app.post("/auth/register", response_model=AuthResponse, status_code=201)
def register_user(body: RegisterRequest, request: Request) -> AuthResponse:
    try:
        user = register(body.username, body.password, body.interests)
    except DuplicateUsernameError:
        raise HTTPException(status_code=400, detail="Username already exists")
    request.session["user_id"] = user.id
    return AuthResponse(status="ok", user_id=user.id, user=UserOut.from_user(user))


@app.post("/auth/login", response_model=AuthResponse)
def login(body: LoginRequest, request: Request) -> AuthResponse:
    try:
        user = authenticate(body.username, body.password)
    except AuthenticationError as exc:
        raise HTTPException(status_code=400, detail=exc.message)
    request.session["user_id"] = user.id
    return AuthResponse(status="ok", user_id=user.id, user=UserOut.from_user(user))


@app.post("/auth/logout")
def logout(request: Request) -> dict:
    request.session.clear()
    return {"status": "logged_out"}


@app.get("/auth/me", response_model=UserOut)
def auth_me(user: User = Depends(require_user)) -> UserOut:
    return UserOut.from_user(user)


# ── Friend endpoints ─────────────────────────────────────────────────────


@app.get("/friends", response_model=list[UserOut])
def friends(user: User = Depends(require_user)) -> list[UserOut]:
    return [UserOut.from_user(f) for f in list_friends(user)]


@app.get("/friends/search", response_model=list[SearchResultOut])
def search(
    username: str | None = None,
    user: User = Depends(require_user),
) -> list[SearchResultOut]:
    return search_users(user, username)


@app.get("/friends/pending", response_model=list[UserOut])
def pending(user: User = Depends(require_user)) -> list[UserOut]:
    return [UserOut.from_user(p) for p in list_pending(user)]


@app.get("/friends/recommendations", response_model=list[RecommendationItem])
def recommendations(user: User = Depends(require_user)) -> list[RecommendationItem]:
    return get_recommendations(user.id)


@app.post("/friends/request/{user_id}", response_model=FriendRequestResponse)
def send_request(user_id: str, user: User = Depends(require_user)) -> FriendRequestResponse:
    try:
        status = toggle_friend_request(user.id, user_id)
    except (UserNotFoundError, FriendRequestError) as exc:
        raise _domain_error(exc)
    if status == "cancelled":
        return FriendRequestResponse(message="Friend request cancelled", status=status)
    return FriendRequestResponse(message="Friend request sent", status=status)


@app.post("/friends/accept/{user_id}", response_model=MessageResponse)
def accept_request(user_id: str, user: User = Depends(require_user)) -> MessageResponse:
    try:
        accept_friend_request(user.id, user_id)
    except (UserNotFoundError, FriendRequestError) as exc:
        raise _domain_error(exc)
    return MessageResponse(message="Friend request accepted")


@app.post("/friends/unfriend/{user_id}", response_model=MessageResponse)
def remove_friend(user_id: str, user: User = Depends(require_user)) -> MessageResponse:
    try:
        unfriend(user.id, user_id)
    except UserNotFoundError as exc:
        raise _domain_error(exc)
    return MessageResponse(message="Friend removed")
