"""Domain errors raised by the directory and timeline services.

Store and driver failures are never wrapped in these types; they propagate
as ``SQLAlchemyError`` (or whatever the store raises) to the caller.
"""

from __future__ import annotations


class TimelineDomainError(Exception):
    """Base class for expected, caller-presentable failures."""

    code = "domain_error"


class DuplicateUserError(TimelineDomainError):
    code = "duplicate_user"

    def __init__(self, field: str) -> None:
        super().__init__(f"The {field} is already taken")
        self.field = field


class UnknownUserError(TimelineDomainError):
    code = "unknown_user"

    def __init__(self, reference: str | int) -> None:
        super().__init__(f"Unknown user: {reference}")
        self.reference = reference


class DuplicateFollowerError(TimelineDomainError):
    code = "duplicate_follower"

    def __init__(self, follower_id: int, followee_id: int) -> None:
        super().__init__(f"User {follower_id} already follows user {followee_id}")
        self.follower_id = follower_id
        self.followee_id = followee_id


class UnknownFollowerRelationError(TimelineDomainError):
    code = "unknown_follower_relation"

    def __init__(self, follower_id: int, followee_id: int) -> None:
        super().__init__(f"User {follower_id} does not follow user {followee_id}")
        self.follower_id = follower_id
        self.followee_id = followee_id


__all__ = [
    "TimelineDomainError",
    "DuplicateUserError",
    "UnknownUserError",
    "DuplicateFollowerError",
    "UnknownFollowerRelationError",
]
