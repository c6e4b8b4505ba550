"""User identity, registration and follower-graph operations."""

from __future__ import annotations

import logging

from core.security import hash_password, verify_password
from db.errors import UniqueConstraintError
from db.store import TimelineStore
from models import User

from .errors import (
    DuplicateFollowerError,
    DuplicateUserError,
    UnknownFollowerRelationError,
    UnknownUserError,
)

# Callers may refer to a user by username or by numeric id.
UserRef = int | str

logger = logging.getLogger(__name__)


def normalize_email(value: str) -> str:
    return value.strip().lower()


def _require_user_id(user: User) -> int:
    if user.id is None:
        raise RuntimeError("User record missing identifier")
    return user.id


async def create_user(
    store: TimelineStore,
    *,
    username: str,
    email: str,
    password: str,
) -> User:
    """Register a new user with a salted password digest.

    Raises ``DuplicateUserError`` naming the conflicting field. The lookups
    give the common case a precise message; the store's unique constraints
    decide concurrent registrations.
    """
    normalized_email = normalize_email(email)
    if await store.get_user_by_username(username) is not None:
        raise DuplicateUserError("username")
    if await store.get_user_by_email(normalized_email) is not None:
        raise DuplicateUserError("email")

    try:
        user = await store.add_user(
            username=username,
            email=normalized_email,
            password_hash=hash_password(password),
        )
    except UniqueConstraintError as exc:
        logger.warning(
            "Concurrent registration rejected by store",
            extra={"username": username, "field": exc.field},
        )
        raise DuplicateUserError(exc.field) from exc

    logger.info("Registered user", extra={"user_id": user.id, "username": username})
    return user


async def get_user_by_username(store: TimelineStore, username: str) -> User:
    user = await store.get_user_by_username(username)
    if user is None:
        raise UnknownUserError(username)
    return user


async def get_user_by_id(store: TimelineStore, user_id: int) -> User:
    user = await store.get_user_by_id(user_id)
    if user is None:
        raise UnknownUserError(user_id)
    return user


async def resolve_user_id(store: TimelineStore, ref: UserRef) -> int:
    """Resolve a username or id to an existing user id."""
    if isinstance(ref, str):
        user = await get_user_by_username(store, ref)
    else:
        user = await get_user_by_id(store, ref)
    return _require_user_id(user)


async def authenticate_user(
    store: TimelineStore,
    *,
    username: str,
    password: str,
) -> User | None:
    """Return the user when the password matches its stored digest."""
    user = await store.get_user_by_username(username)
    if user is None or not verify_password(password, user.password_hash):
        return None
    return user


async def is_following(
    store: TimelineStore,
    follower_id: int,
    followee_username: str,
) -> bool:
    # An unknown followee is reported as "not following", not as an error.
    followee = await store.get_user_by_username(followee_username)
    if followee is None or followee.id is None:
        return False
    return await store.follow_exists(follower_id=follower_id, followee_id=followee.id)


async def get_followers(
    store: TimelineStore,
    username: str,
    limit: int,
) -> list[User]:
    """Return up to ``limit`` users following ``username``, oldest relation first."""
    if limit < 0:
        raise ValueError("limit must be non-negative")
    user = await get_user_by_username(store, username)
    if limit == 0:
        return []
    return await store.list_followers(_require_user_id(user), limit=limit)


async def _insert_follow(
    store: TimelineStore,
    *,
    follower_id: int,
    followee_id: int,
) -> None:
    if await store.follow_exists(follower_id=follower_id, followee_id=followee_id):
        raise DuplicateFollowerError(follower_id, followee_id)
    try:
        await store.add_follow(follower_id=follower_id, followee_id=followee_id)
    except UniqueConstraintError as exc:
        logger.warning(
            "Concurrent follow rejected by store",
            extra={"follower_id": follower_id, "followee_id": followee_id},
        )
        raise DuplicateFollowerError(follower_id, followee_id) from exc
    logger.info(
        "Added follower",
        extra={"follower_id": follower_id, "followee_id": followee_id},
    )


async def _delete_follow(
    store: TimelineStore,
    *,
    follower_id: int,
    followee_id: int,
) -> None:
    deleted = await store.delete_follow(follower_id=follower_id, followee_id=followee_id)
    if not deleted:
        raise UnknownFollowerRelationError(follower_id, followee_id)
    logger.info(
        "Removed follower",
        extra={"follower_id": follower_id, "followee_id": followee_id},
    )


async def add_follower(
    store: TimelineStore,
    follower: UserRef,
    followee_username: str,
) -> None:
    """Make ``follower`` (username or id) follow ``followee_username``."""
    follower_id = await resolve_user_id(store, follower)
    followee_id = await resolve_user_id(store, followee_username)
    await _insert_follow(store, follower_id=follower_id, followee_id=followee_id)


async def remove_follower(
    store: TimelineStore,
    follower: UserRef,
    followee_username: str,
) -> None:
    """Remove the relation ``follower`` -> ``followee_username``."""
    follower_id = await resolve_user_id(store, follower)
    followee_id = await resolve_user_id(store, followee_username)
    await _delete_follow(store, follower_id=follower_id, followee_id=followee_id)


__all__ = [
    "UserRef",
    "normalize_email",
    "create_user",
    "get_user_by_username",
    "get_user_by_id",
    "resolve_user_id",
    "authenticate_user",
    "is_following",
    "get_followers",
    "add_follower",
    "remove_follower",
]
