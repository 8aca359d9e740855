"""
User management module.

Usage:
    from macroclaw.features.users import User, UserRepository
"""

from .models import User
from .repository import UserRepository

__all__ = [
    "User",
    "UserRepository",
]
