"""
Database-backed identity stores.

Uses the Flask-SQLAlchemy session, so every call needs an application
context. Unique-constraint violations become AlreadyExists errors; any other
database error becomes StoreUnavailable after the session is rolled back.
"""

import logging
from contextlib import contextmanager
from typing import Iterator, Optional

from sqlalchemy.exc import IntegrityError, SQLAlchemyError

from musicstore.models import db, Role, User

from .errors import RoleAlreadyExists, StoreUnavailable, UserAlreadyExists
from .passwords import PasswordPolicy, enforce_password
from .stores import RoleStore, UserStore

logger = logging.getLogger(__name__)


@contextmanager
def _store_errors(action: str) -> Iterator[None]:
    """Translate database errors into StoreUnavailable."""
    try:
        yield
    except SQLAlchemyError as e:
        db.session.rollback()
        logger.error(f"Identity store error while {action}: {e}")
        raise StoreUnavailable(f"Identity store unavailable while {action}") from e


class SqlAlchemyRoleStore(RoleStore):
    """Roles stored in the roles table."""

    def role_exists(self, name: str) -> bool:
        with _store_errors("checking role"):
            return db.session.query(Role.id).filter_by(name=name).first() is not None

    def create_role(self, name: str) -> None:
        with _store_errors("creating role"):
            try:
                db.session.add(Role(name=name))
                db.session.commit()
            except IntegrityError:
                db.session.rollback()
                raise RoleAlreadyExists(name)


class SqlAlchemyUserStore(UserStore):
    """Users stored in the users table, memberships in user_roles."""

    def __init__(self, password_policy: Optional[PasswordPolicy] = None):
        self._policy = password_policy

    def find_by_username(self, username: str) -> Optional[User]:
        with _store_errors("looking up user"):
            return User.query.filter_by(username=username).first()

    def create_user(self, username: str, password: str) -> int:
        enforce_password(self._policy, password)
        with _store_errors("creating user"):
            user = User(username=username)
            user.set_password(password)
            try:
                db.session.add(user)
                db.session.commit()
            except IntegrityError:
                db.session.rollback()
                raise UserAlreadyExists(username)
            return user.id

    def add_user_to_role(self, user_id: int, role_name: str) -> None:
        with _store_errors("assigning role"):
            user = db.session.get(User, user_id)
            if user is None:
                raise KeyError(f"User {user_id} not found")
            role = Role.query.filter_by(name=role_name).first()
            if role is None:
                raise KeyError(f"Role '{role_name}' not found")
            if role not in user.roles:
                user.roles.append(role)
                db.session.commit()

    def record_login(self, user_id: int) -> None:
        with _store_errors("recording log on"):
            user = db.session.get(User, user_id)
            if user is None:
                raise KeyError(f"User {user_id} not found")
            user.update_last_login()
            db.session.commit()
