"""Timeline message model."""

from __future__ import annotations

from datetime import datetime

from sqlalchemy import Boolean, Column, DateTime, ForeignKey, Index, Integer, Text
from sqlalchemy import text as sql_text
from sqlmodel import Field, SQLModel


class Message(SQLModel, table=True):
    """Short message published by a user."""

    __tablename__ = "messages"
    __table_args__ = (
        Index("ix_messages_flagged_published_at", "is_flagged", "published_at"),
        Index("ix_messages_author_published_at", "author_id", "published_at"),
    )

    id: int | None = Field(
        default=None,
        sa_column=Column(Integer, primary_key=True, autoincrement=True),
    )
    author_id: int = Field(
        sa_column=Column(
            Integer,
            ForeignKey("users.id", ondelete="CASCADE"),
            nullable=False,
        )
    )
    text: str = Field(sa_column=Column(Text, nullable=False))
    published_at: datetime = Field(
        sa_column=Column(DateTime(timezone=True), nullable=False)
    )
    # Moderation state is set outside this service; flagged rows never reach feeds.
    is_flagged: bool = Field(
        default=False,
        sa_column=Column(
            Boolean,
            nullable=False,
            server_default=sql_text("false"),
        ),
    )
