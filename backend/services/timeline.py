"""Message publishing and feed retrieval."""

from __future__ import annotations

import logging
from datetime import datetime, timezone

from db.store import FeedMessage, TimelineStore
from models import Message, User

from .errors import UnknownUserError
from .user_directory import UserRef, resolve_user_id

logger = logging.getLogger(__name__)


def _check_limit(limit: int) -> None:
    if limit < 0:
        raise ValueError("limit must be non-negative")


async def get_global_feed(store: TimelineStore, limit: int) -> list[FeedMessage]:
    """Return the newest non-flagged messages from every author."""
    _check_limit(limit)
    if limit == 0:
        return []
    return await store.list_messages(limit=limit)


async def get_user_feed(
    store: TimelineStore,
    user: User,
    limit: int,
) -> list[FeedMessage]:
    """Return the newest non-flagged messages authored by ``user``."""
    _check_limit(limit)
    if user.id is None:
        raise UnknownUserError(user.username)
    if limit == 0:
        return []
    return await store.list_messages(limit=limit, author_id=user.id)


async def get_followed_feed(
    store: TimelineStore,
    viewer: UserRef,
    limit: int,
) -> list[FeedMessage]:
    """Return the newest non-flagged messages by users ``viewer`` follows.

    A viewer that does not resolve gets an empty feed rather than an error.
    """
    _check_limit(limit)
    try:
        viewer_id = await resolve_user_id(store, viewer)
    except UnknownUserError:
        return []
    if limit == 0:
        return []
    return await store.list_followed_messages(viewer_id, limit=limit)


async def create_message(
    store: TimelineStore,
    content: str,
    author: UserRef,
) -> Message:
    """Publish ``content`` as ``author``; surrounding whitespace is dropped."""
    author_id = await resolve_user_id(store, author)
    message = await store.add_message(
        author_id=author_id,
        text=content.strip(),
        published_at=datetime.now(timezone.utc),
    )
    logger.info(
        "Published message",
        extra={"author_id": author_id, "message_id": message.id},
    )
    return message


__all__ = [
    "get_global_feed",
    "get_user_feed",
    "get_followed_feed",
    "create_message",
]
