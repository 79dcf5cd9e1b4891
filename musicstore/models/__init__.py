"""
Database models for the MusicStore.

This package contains SQLAlchemy models for all database entities.
The db instance is created here and should be initialized with the Flask app
using db.init_app(app) in the application factory.
"""

from datetime import datetime, timezone

from flask_sqlalchemy import SQLAlchemy

# Create the shared SQLAlchemy instance
db = SQLAlchemy()


def utcnow() -> datetime:
    """Current time in UTC, used for timestamp column defaults."""
    return datetime.now(timezone.utc)


# Import models after db is created to avoid circular imports
from .user import Role, User, user_roles
from .catalog import Genre, Artist, Album

__all__ = [
    "db",
    "utcnow",
    "Role",
    "User",
    "user_roles",
    "Genre",
    "Artist",
    "Album",
]
