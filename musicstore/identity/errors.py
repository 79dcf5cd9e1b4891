"""
Identity error taxonomy.

BootstrapError subclasses are the failures an admin bootstrap can surface.
AlreadyExists subclasses are raised by stores on unique-name conflicts and
are treated as success by the bootstrapper.
"""

from typing import Iterable, List


class IdentityError(Exception):
    """Base class for identity store errors."""


class BootstrapError(IdentityError):
    """Admin bootstrap could not complete."""


class CredentialRejected(BootstrapError):
    """The password does not satisfy the password policy."""

    def __init__(self, violations: Iterable[str]):
        self.violations: List[str] = list(violations)
        super().__init__("Password rejected: " + "; ".join(self.violations))


class StoreUnavailable(BootstrapError):
    """The backing store could not be reached."""


class AlreadyExists(IdentityError):
    """An entity with the same unique name already exists."""

    kind = "Entity"

    def __init__(self, name: str):
        self.name = name
        super().__init__(f"{self.kind} '{name}' already exists")


class RoleAlreadyExists(AlreadyExists):
    kind = "Role"


class UserAlreadyExists(AlreadyExists):
    kind = "User"
