"""
Identity package for the MusicStore.

Provides the role/user store interfaces, their in-memory and database
backends, the password policy and the default administrator bootstrap.
"""

from flask import Flask

from .errors import (
    IdentityError,
    BootstrapError,
    CredentialRejected,
    StoreUnavailable,
    AlreadyExists,
    RoleAlreadyExists,
    UserAlreadyExists,
)
from .passwords import PasswordPolicy
from .stores import RoleStore, UserStore, IdentityStores
from .memory import InMemoryRoleStore, InMemoryUserStore
from .sql import SqlAlchemyRoleStore, SqlAlchemyUserStore
from .bootstrap import AdminBootstrapper, BootstrapResult, bootstrap_admin

_EXTENSION_KEY = "musicstore.identity"


def build_identity_stores(backend: str, password_policy: PasswordPolicy) -> IdentityStores:
    """Create a role/user store pair for the named backend ('sql' or 'memory')."""
    if backend == "memory":
        roles = InMemoryRoleStore()
        return IdentityStores(roles, InMemoryUserStore(roles, password_policy))
    if backend == "sql":
        return IdentityStores(SqlAlchemyRoleStore(), SqlAlchemyUserStore(password_policy))
    raise ValueError(f"Unknown identity store backend: {backend!r}")


def init_identity(app: Flask) -> IdentityStores:
    """Create the application's identity stores and attach them to app."""
    stores = build_identity_stores(
        app.config.get("IDENTITY_STORE", "sql"),
        PasswordPolicy.from_config(app.config),
    )
    app.extensions[_EXTENSION_KEY] = stores
    return stores


def get_identity_stores(app: Flask) -> IdentityStores:
    """Return the identity stores attached to app, creating them if needed."""
    stores = app.extensions.get(_EXTENSION_KEY)
    if stores is None:
        stores = init_identity(app)
    return stores


__all__ = [
    "IdentityError",
    "BootstrapError",
    "CredentialRejected",
    "StoreUnavailable",
    "AlreadyExists",
    "RoleAlreadyExists",
    "UserAlreadyExists",
    "PasswordPolicy",
    "RoleStore",
    "UserStore",
    "IdentityStores",
    "InMemoryRoleStore",
    "InMemoryUserStore",
    "SqlAlchemyRoleStore",
    "SqlAlchemyUserStore",
    "AdminBootstrapper",
    "BootstrapResult",
    "bootstrap_admin",
    "build_identity_stores",
    "init_identity",
    "get_identity_stores",
]
