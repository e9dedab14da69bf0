from __future__ import annotations

import logging

from ..config import DEFAULT_SETTINGS
from ..directory.store import User, edit, get_users, search_by_prefix
from ..recommendations.models import RequestStatus, SearchResultOut, UserOut

logger = logging.getLogger(__name__)


class UserNotFoundError(Exception):
    def __init__(self, message: str = "User not found") -> None:
        super().__init__(message)
        self.message = message


class FriendRequestError(Exception):
    def __init__(self, message: str) -> None:
        super().__init__(message)
        self.message = message


def list_friends(user: User) -> list[User]:
    return get_users(user.friends)


def list_pending(user: User) -> list[User]:
    return get_users(user.pending_friend_requests)


def request_status(viewer: User, other: User) -> RequestStatus:
    if other.id in viewer.sent_friend_requests:
        return RequestStatus.requested
    if other.id in viewer.friends:
        return RequestStatus.friend
    return RequestStatus.none


def search_users(
    viewer: User,
    term: str | None,
    limit: int = DEFAULT_SETTINGS.search_limit,
) -> list[SearchResultOut]:
    """Username prefix search annotated with the viewer's request status."""
    if not term:
        return []
    return [
        SearchResultOut(
            **UserOut.from_user(other).model_dump(),
            request_status=request_status(viewer, other),
        )
        for other in search_by_prefix(term, exclude_id=viewer.id, limit=limit)
    ]


def toggle_friend_request(sender_id: str, receiver_id: str) -> str:
    """
    Send a friend request, or cancel it if one is already outstanding.

    Returns ``"requested"`` or ``"cancelled"``.
    """
    with edit(sender_id, receiver_id) as (sender, receiver):
        if receiver is None or sender is None:
            raise UserNotFoundError()
        if sender.id == receiver.id:
            raise FriendRequestError("Cannot send a friend request to yourself")
        if receiver.id in sender.friends:
            raise FriendRequestError("Already friends")

        if receiver.id in sender.sent_friend_requests:
            sender.sent_friend_requests.discard(receiver.id)
            receiver.pending_friend_requests.discard(sender.id)
            logger.info("Friend request %s -> %s cancelled", sender.id, receiver.id)
            return "cancelled"

        if receiver.id in sender.pending_friend_requests:
            raise FriendRequestError("Friend request already pending")

        sender.sent_friend_requests.add(receiver.id)
        receiver.pending_friend_requests.add(sender.id)
        logger.info("Friend request %s -> %s sent", sender.id, receiver.id)
        return "requested"


def accept_friend_request(receiver_id: str, sender_id: str) -> None:
    with edit(receiver_id, sender_id) as (receiver, sender):
        if sender is None or receiver is None:
            raise UserNotFoundError()
        if sender.id not in receiver.pending_friend_requests:
            raise FriendRequestError("No pending friend request")

        receiver.pending_friend_requests.discard(sender.id)
        sender.sent_friend_requests.discard(receiver.id)
        receiver.friends.add(sender.id)
        sender.friends.add(receiver.id)
        logger.info("Friend request %s -> %s accepted", sender.id, receiver.id)


def unfriend(user_id: str, friend_id: str) -> None:
    with edit(user_id, friend_id) as (user, friend):
        if friend is None or user is None:
            raise UserNotFoundError()
        user.friends.discard(friend.id)
        friend.friends.discard(user.id)
        logger.info("Friendship %s <-> %s removed", user.id, friend.id)
