"""
In-process identity stores.

State lives for the lifetime of the process. Useful when no database is
configured for identity and as the store used by the bootstrap tests.
"""

import copy
import itertools
import threading
from datetime import datetime, timezone
from typing import Dict, FrozenSet, Optional, Set

from musicstore.core.security import hash_password, verify_password_hash

from .errors import RoleAlreadyExists, UserAlreadyExists
from .passwords import PasswordPolicy, enforce_password
from .stores import RoleStore, UserStore


class InMemoryUser:
    """
    User record held by InMemoryUserStore.

    The store hands out copies, so changing a returned record does not
    change the stored user.
    """

    def __init__(self, user_id: int, username: str, password_hash: str):
        self.id = user_id
        self.username = username
        self.password_hash = password_hash
        self.roles: FrozenSet[str] = frozenset()
        self.last_login: Optional[datetime] = None

    def __repr__(self) -> str:
        return f"<InMemoryUser {self.username}>"

    @property
    def role_names(self) -> frozenset:
        return self.roles

    def check_password(self, password: str) -> bool:
        """Check if the provided password matches the stored hash."""
        return verify_password_hash(self.password_hash, password)


class InMemoryRoleStore(RoleStore):
    """Role names kept in a set."""

    def __init__(self, lock: Optional[threading.Lock] = None):
        self._lock = lock or threading.Lock()
        self._roles: Set[str] = set()

    def role_exists(self, name: str) -> bool:
        with self._lock:
            return name in self._roles

    def create_role(self, name: str) -> None:
        with self._lock:
            if name in self._roles:
                raise RoleAlreadyExists(name)
            self._roles.add(name)

    @property
    def names(self) -> frozenset:
        with self._lock:
            return frozenset(self._roles)


class InMemoryUserStore(UserStore):
    """
    Users kept in a dictionary keyed by id.

    Role assignment checks role names against the given role store, so the
    two stores must be constructed as a pair.
    """

    def __init__(
        self,
        role_store: InMemoryRoleStore,
        password_policy: Optional[PasswordPolicy] = None,
        lock: Optional[threading.Lock] = None,
    ):
        self._role_store = role_store
        self._policy = password_policy
        self._lock = lock or threading.Lock()
        self._users: Dict[int, InMemoryUser] = {}
        self._ids = itertools.count(1)

    def find_by_username(self, username: str) -> Optional[InMemoryUser]:
        with self._lock:
            for user in self._users.values():
                if user.username == username:
                    return copy.copy(user)
        return None

    def create_user(self, username: str, password: str) -> int:
        enforce_password(self._policy, password)
        password_hash = hash_password(password)
        with self._lock:
            if any(u.username == username for u in self._users.values()):
                raise UserAlreadyExists(username)
            user = InMemoryUser(next(self._ids), username, password_hash)
            self._users[user.id] = user
        return user.id

    def add_user_to_role(self, user_id: int, role_name: str) -> None:
        if not self._role_store.role_exists(role_name):
            raise KeyError(f"Role '{role_name}' not found")
        with self._lock:
            user = self._users.get(user_id)
            if user is None:
                raise KeyError(f"User {user_id} not found")
            user.roles = user.roles | {role_name}

    def record_login(self, user_id: int) -> None:
        with self._lock:
            user = self._users.get(user_id)
            if user is None:
                raise KeyError(f"User {user_id} not found")
            user.last_login = datetime.now(timezone.utc)

    def all_users(self) -> list:
        with self._lock:
            return [copy.copy(user) for user in self._users.values()]
