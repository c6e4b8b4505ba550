"""SQLModel models package."""

from .follow import Follow
from .message import Message
from .user import User

__all__ = [
    "User",
    "Follow",
    "Message",
]
