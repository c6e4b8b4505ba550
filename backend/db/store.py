"""Persistence interface used by the directory and timeline services."""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from typing import Protocol

from models import Message, User


@dataclass(frozen=True, slots=True)
class FeedMessage:
    """A feed row: a message joined with its author's username."""

    id: int
    author_id: int
    author_username: str
    text: str
    published_at: datetime


class TimelineStore(Protocol):
    """Named queries over users, follows and messages.

    Implementations own no session lifecycle. Insert methods raise
    ``UniqueConstraintError`` when a uniqueness constraint rejects the row and
    leave no partial write behind on failure or cancellation.
    """

    async def get_user_by_id(self, user_id: int) -> User | None: ...

    async def get_user_by_username(self, username: str) -> User | None: ...

    async def get_user_by_email(self, email: str) -> User | None: ...

    async def add_user(
        self,
        *,
        username: str,
        email: str,
        password_hash: str,
    ) -> User: ...

    async def follow_exists(self, *, follower_id: int, followee_id: int) -> bool: ...

    async def add_follow(self, *, follower_id: int, followee_id: int) -> None: ...

    async def delete_follow(self, *, follower_id: int, followee_id: int) -> bool:
        """Delete the relation; return False when no row matched."""
        ...

    async def list_followers(self, followee_id: int, *, limit: int) -> list[User]:
        """Return followers ordered by relation creation time, then user id."""
        ...

    async def add_message(
        self,
        *,
        author_id: int,
        text: str,
        published_at: datetime,
    ) -> Message: ...

    async def list_messages(
        self,
        *,
        limit: int,
        author_id: int | None = None,
    ) -> list[FeedMessage]:
        """Return non-flagged messages newest first, optionally for one author."""
        ...

    async def list_followed_messages(
        self,
        viewer_id: int,
        *,
        limit: int,
    ) -> list[FeedMessage]:
        """Return non-flagged messages by users the viewer follows, newest first."""
        ...
