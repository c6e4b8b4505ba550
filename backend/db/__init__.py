"""Database helpers."""

from .errors import UniqueConstraintError, is_unique_violation
from .session import AsyncSessionMaker, async_engine, get_session
from .sql_store import SqlTimelineStore
from .store import FeedMessage, TimelineStore

__all__ = [
    "AsyncSessionMaker",
    "FeedMessage",
    "SqlTimelineStore",
    "TimelineStore",
    "UniqueConstraintError",
    "async_engine",
    "get_session",
    "is_unique_violation",
]
