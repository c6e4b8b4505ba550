"""Database seed script for local development.

Usage:
    uv run python scripts/seed.py

Creates a handful of users, follow relations and messages through the service
layer. Running it again skips rows that already exist.
"""

from __future__ import annotations

import asyncio
import logging
import sys
from collections.abc import Sequence
from dataclasses import dataclass
from pathlib import Path

ROOT_DIR = Path(__file__).resolve().parents[1]
if str(ROOT_DIR) not in sys.path:
    sys.path.append(str(ROOT_DIR))

from core import settings  # noqa: E402
from db import AsyncSessionMaker, SqlTimelineStore  # noqa: E402
from db.store import TimelineStore  # noqa: E402
from services import (  # noqa: E402
    DuplicateFollowerError,
    DuplicateUserError,
    add_follower,
    create_message,
    create_user,
    get_user_feed,
    get_user_by_username,
)

logger = logging.getLogger("scripts.seed")
SEED_PASSWORD = "Sup3rSecret!"


@dataclass(frozen=True)
class SeedUser:
    username: str
    email: str
    messages: Sequence[str] = ()


BASE_USERS: Sequence[SeedUser] = [
    SeedUser(
        username="demo_alex",
        email="alex@example.com",
        messages=("Hello timeline!", "Second post from Alex."),
    ),
    SeedUser(
        username="demo_bri",
        email="bri@example.com",
        messages=("Bri checking in.",),
    ),
    SeedUser(
        username="demo_cam",
        email="cam@example.com",
        messages=("Cam says hi.", "Anyone around?"),
    ),
]

# (follower, followee)
BASE_FOLLOWS: Sequence[tuple[str, str]] = [
    ("demo_bri", "demo_alex"),
    ("demo_cam", "demo_alex"),
    ("demo_alex", "demo_cam"),
]


async def ensure_user(store: TimelineStore, payload: SeedUser) -> bool:
    try:
        await create_user(
            store,
            username=payload.username,
            email=payload.email,
            password=SEED_PASSWORD,
        )
    except DuplicateUserError:
        return False
    return True


async def ensure_messages(store: TimelineStore, payload: SeedUser) -> int:
    user = await get_user_by_username(store, payload.username)
    feed = await get_user_feed(store, user, settings.default_page_size)
    existing = {entry.text for entry in feed}
    created = 0
    for content in payload.messages:
        if content in existing:
            continue
        await create_message(store, content, payload.username)
        created += 1
    return created


async def ensure_follows(store: TimelineStore, follows: Sequence[tuple[str, str]]) -> int:
    created = 0
    for follower, followee in follows:
        try:
            await add_follower(store, follower, followee)
        except DuplicateFollowerError:
            continue
        created += 1
    return created


async def seed() -> None:
    logging.basicConfig(level=settings.log_level)
    async with AsyncSessionMaker() as session:
        store = SqlTimelineStore(session)
        created_users = 0
        created_messages = 0
        for payload in BASE_USERS:
            if await ensure_user(store, payload):
                created_users += 1
            created_messages += await ensure_messages(store, payload)
        created_follows = await ensure_follows(store, BASE_FOLLOWS)

    logger.info(
        "Seed complete",
        extra={
            "created_users": created_users,
            "created_messages": created_messages,
            "created_follows": created_follows,
        },
    )


if __name__ == "__main__":
    asyncio.run(seed())
