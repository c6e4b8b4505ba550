"""Business logic services."""

from .errors import (
    DuplicateFollowerError,
    DuplicateUserError,
    TimelineDomainError,
    UnknownFollowerRelationError,
    UnknownUserError,
)
from .timeline import (
    create_message,
    get_followed_feed,
    get_global_feed,
    get_user_feed,
)
from .user_directory import (
    UserRef,
    add_follower,
    authenticate_user,
    create_user,
    get_followers,
    get_user_by_id,
    get_user_by_username,
    is_following,
    normalize_email,
    remove_follower,
    resolve_user_id,
)

__all__ = [
    "TimelineDomainError",
    "DuplicateUserError",
    "UnknownUserError",
    "DuplicateFollowerError",
    "UnknownFollowerRelationError",
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
    "get_global_feed",
    "get_user_feed",
    "get_followed_feed",
    "create_message",
]
