"""Core configuration and security helpers."""

from .config import settings
from .security import hash_password, verify_password

__all__ = ["settings", "hash_password", "verify_password"]
