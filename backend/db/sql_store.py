"""SQLAlchemy-backed implementation of the timeline store."""

from __future__ import annotations

import asyncio
from collections.abc import AsyncIterator
from contextlib import asynccontextmanager
from datetime import datetime, timezone
from typing import Any, cast

from sqlalchemy import Select, delete, insert, select
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.sql import ColumnElement

from models import Follow, Message, User

from .errors import UniqueConstraintError, is_unique_violation
from .store import FeedMessage


def _eq(column: Any, value: Any) -> ColumnElement[bool]:
    return cast(ColumnElement[bool], column == value)


def _asc(column: Any) -> Any:
    return cast(Any, column).asc()


def _desc(column: Any) -> Any:
    return cast(Any, column).desc()


def _feed_query() -> Select[Any]:
    return (
        select(
            cast(ColumnElement[int], Message.id),
            cast(ColumnElement[int], Message.author_id),
            cast(ColumnElement[str], User.username),
            cast(ColumnElement[str], Message.text),
            cast(ColumnElement[datetime], Message.published_at),
        )
        .join(User, _eq(User.id, Message.author_id))
        .where(_eq(Message.is_flagged, False))
        .order_by(_desc(Message.published_at), _desc(Message.id))
    )


class SqlTimelineStore:
    """Store bound to a caller-owned ``AsyncSession``.

    Every write is committed on its own. Integrity failures and cancellation
    roll the session back before the error propagates.
    """

    def __init__(self, session: AsyncSession) -> None:
        self._session = session

    @asynccontextmanager
    async def _write(self) -> AsyncIterator[None]:
        try:
            yield
            await self._session.commit()
        except asyncio.CancelledError:
            await asyncio.shield(self._session.rollback())
            raise
        except Exception:
            await self._session.rollback()
            raise

    async def _insert_row(self, row: Any) -> None:
        async with self._write():
            self._session.add(row)
        await self._session.refresh(row)

    async def get_user_by_id(self, user_id: int) -> User | None:
        result = await self._session.execute(select(User).where(_eq(User.id, user_id)))
        return result.scalar_one_or_none()

    async def get_user_by_username(self, username: str) -> User | None:
        result = await self._session.execute(
            select(User).where(_eq(User.username, username)).limit(1)
        )
        return result.scalar_one_or_none()

    async def get_user_by_email(self, email: str) -> User | None:
        result = await self._session.execute(
            select(User).where(_eq(User.email, email)).limit(1)
        )
        return result.scalar_one_or_none()

    async def add_user(
        self,
        *,
        username: str,
        email: str,
        password_hash: str,
    ) -> User:
        user = User(username=username, email=email, password_hash=password_hash)
        try:
            await self._insert_row(user)
        except IntegrityError as exc:
            if not is_unique_violation(exc):
                raise
            # The driver message is not portable; look up which key won the race.
            taken = await self.get_user_by_username(username)
            raise UniqueConstraintError("username" if taken is not None else "email") from exc
        return user

    async def follow_exists(self, *, follower_id: int, followee_id: int) -> bool:
        result = await self._session.execute(
            select(Follow).where(
                _eq(Follow.follower_id, follower_id),
                _eq(Follow.followee_id, followee_id),
            )
        )
        return result.scalar_one_or_none() is not None

    async def add_follow(self, *, follower_id: int, followee_id: int) -> None:
        try:
            async with self._write():
                await self._session.execute(
                    insert(Follow).values(
                        follower_id=follower_id,
                        followee_id=followee_id,
                        # The server default only has one-second resolution on SQLite.
                        created_at=datetime.now(timezone.utc),
                    )
                )
        except IntegrityError as exc:
            if not is_unique_violation(exc):
                raise
            raise UniqueConstraintError("follow") from exc

    async def delete_follow(self, *, follower_id: int, followee_id: int) -> bool:
        async with self._write():
            result = await self._session.execute(
                delete(Follow).where(
                    _eq(Follow.follower_id, follower_id),
                    _eq(Follow.followee_id, followee_id),
                )
            )
        return int(cast(Any, result).rowcount or 0) > 0

    async def list_followers(self, followee_id: int, *, limit: int) -> list[User]:
        result = await self._session.execute(
            select(User)
            .join(Follow, _eq(Follow.follower_id, User.id))
            .where(_eq(Follow.followee_id, followee_id))
            .order_by(_asc(Follow.created_at), _asc(User.id))
            .limit(limit)
        )
        return list(result.scalars().all())

    async def add_message(
        self,
        *,
        author_id: int,
        text: str,
        published_at: datetime,
    ) -> Message:
        message = Message(
            author_id=author_id,
            text=text,
            published_at=published_at,
            is_flagged=False,
        )
        await self._insert_row(message)
        return message

    async def list_messages(
        self,
        *,
        limit: int,
        author_id: int | None = None,
    ) -> list[FeedMessage]:
        query = _feed_query()
        if author_id is not None:
            query = query.where(_eq(Message.author_id, author_id))
        result = await self._session.execute(query.limit(limit))
        return [FeedMessage(*row) for row in result.all()]

    async def list_followed_messages(
        self,
        viewer_id: int,
        *,
        limit: int,
    ) -> list[FeedMessage]:
        query = (
            _feed_query()
            .join(Follow, _eq(Follow.followee_id, Message.author_id))
            .where(_eq(Follow.follower_id, viewer_id))
            .limit(limit)
        )
        result = await self._session.execute(query)
        return [FeedMessage(*row) for row in result.all()]


__all__ = ["SqlTimelineStore"]
