"""
Core utilities package for the MusicStore.

This package contains shared utilities used by controllers:
- security: Authentication and access control
"""

from .security import (
    hash_password,
    verify_password_hash,
    login_user,
    logout_user,
    get_current_user,
    current_user_has_role,
    require_role,
    require_admin,
)

__all__ = [
    "hash_password",
    "verify_password_hash",
    "login_user",
    "logout_user",
    "get_current_user",
    "current_user_has_role",
    "require_role",
    "require_admin",
]
