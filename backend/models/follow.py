"""Directed follower relationship model."""

from __future__ import annotations

from datetime import datetime

from sqlalchemy import Column, DateTime, ForeignKey, Index, Integer, func
from sqlmodel import Field, SQLModel


class Follow(SQLModel, table=True):
    """Represents a follower -> followee relationship."""

    __tablename__ = "follows"
    __table_args__ = (
        Index("ix_follows_followee_created_at", "followee_id", "created_at"),
    )

    # The composite primary key allows one row per ordered pair.
    follower_id: int = Field(
        sa_column=Column(
            Integer,
            ForeignKey("users.id", ondelete="CASCADE"),
            primary_key=True,
        )
    )
    followee_id: int = Field(
        sa_column=Column(
            Integer,
            ForeignKey("users.id", ondelete="CASCADE"),
            primary_key=True,
        )
    )
    created_at: datetime | None = Field(
        default=None,
        sa_column=Column(
            DateTime(timezone=True),
            server_default=func.now(),
            nullable=False,
        ),
    )
