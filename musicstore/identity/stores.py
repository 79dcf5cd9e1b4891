"""
Role and user store interfaces.

The admin bootstrap and the account pages only talk to these interfaces.
Two backends implement them: in-process dictionaries (identity.memory) and
the application database (identity.sql).
"""

from abc import ABC, abstractmethod
from typing import Any, NamedTuple, Optional


class RoleStore(ABC):
    """Storage for named roles."""

    @abstractmethod
    def role_exists(self, name: str) -> bool:
        """Return True if a role with this name exists."""

    @abstractmethod
    def create_role(self, name: str) -> None:
        """
        Create a role.

        Raises:
            RoleAlreadyExists: A role with this name already exists.
            StoreUnavailable: The backing store could not be reached.
        """


class UserStore(ABC):
    """Storage for users, their credentials and role memberships."""

    @abstractmethod
    def find_by_username(self, username: str) -> Optional[Any]:
        """
        Look up a user by name.

        Returns:
            An object exposing id, username, role_names and check_password(),
            or None if no such user exists.
        """

    @abstractmethod
    def create_user(self, username: str, password: str) -> Any:
        """
        Create a user with the given password.

        Returns:
            The new user's id.

        Raises:
            CredentialRejected: The password violates the password policy.
            UserAlreadyExists: A user with this name already exists.
            StoreUnavailable: The backing store could not be reached.
        """

    @abstractmethod
    def add_user_to_role(self, user_id: Any, role_name: str) -> None:
        """
        Grant a role to a user. Granting a held role is a no-op.

        Raises:
            KeyError: The user or the role does not exist.
            StoreUnavailable: The backing store could not be reached.
        """

    @abstractmethod
    def record_login(self, user_id: Any) -> None:
        """
        Stamp the user's last log on time.

        Raises:
            KeyError: The user does not exist.
            StoreUnavailable: The backing store could not be reached.
        """


class IdentityStores(NamedTuple):
    roles: RoleStore
    users: UserStore
