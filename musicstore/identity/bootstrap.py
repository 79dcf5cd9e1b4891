"""
Default administrator bootstrap.

Ensures a named role and a named user holding that role exist. Every step is
idempotent, so the bootstrap runs on every process start and is safe when
several processes race against a shared database on first run.
"""

import logging
from typing import Any, NamedTuple, Optional

from flask import Flask

from musicstore.config import PLACEHOLDER_ADMIN_PASSWORD

from .errors import BootstrapError, RoleAlreadyExists, UserAlreadyExists
from .stores import RoleStore, UserStore

logger = logging.getLogger(__name__)


class BootstrapResult(NamedTuple):
    role_created: bool
    user_created: bool
    user_id: Optional[Any] = None

    @property
    def changed(self) -> bool:
        return self.role_created or self.user_created


class AdminBootstrapper:
    """Creates the administrator role and account when they are missing."""

    def __init__(self, role_store: RoleStore, user_store: UserStore):
        self.role_store = role_store
        self.user_store = user_store

    def ensure_admin(self, username: str, password: str, role_name: str) -> BootstrapResult:
        """
        Ensure role_name exists and that username exists holding it.

        An existing user is left untouched: its password and memberships are
        not changed, even if it lacks the role.

        Raises:
            ValueError: username or role_name is empty.
            CredentialRejected: The user store's password policy rejected password.
            StoreUnavailable: A store could not be reached.
        """
        if not username:
            raise ValueError("username must not be empty")
        if not role_name:
            raise ValueError("role_name must not be empty")

        role_created = self._ensure_role(role_name)

        if self.user_store.find_by_username(username) is not None:
            logger.info(f"Admin bootstrap: user '{username}' already exists")
            return BootstrapResult(role_created=role_created, user_created=False)

        try:
            user_id = self.user_store.create_user(username, password)
        except UserAlreadyExists:
            # Another process created the account between lookup and insert
            logger.info(f"Admin bootstrap: user '{username}' created concurrently")
            return BootstrapResult(role_created=role_created, user_created=False)

        self.user_store.add_user_to_role(user_id, role_name)
        logger.info(f"Admin bootstrap: created user '{username}' in role '{role_name}'")
        return BootstrapResult(role_created=role_created, user_created=True, user_id=user_id)

    def _ensure_role(self, role_name: str) -> bool:
        if self.role_store.role_exists(role_name):
            return False
        try:
            self.role_store.create_role(role_name)
        except RoleAlreadyExists:
            logger.info(f"Admin bootstrap: role '{role_name}' created concurrently")
            return False
        logger.info(f"Admin bootstrap: created role '{role_name}'")
        return True


def bootstrap_admin(app: Flask) -> Optional[BootstrapResult]:
    """
    Run the admin bootstrap with the credentials configured on app.

    Failures are logged and swallowed so the storefront still starts without
    an administrator. Must be called inside an application context when the
    database stores are configured.

    Returns:
        The bootstrap result, or None if the bootstrap was skipped or failed.
    """
    from . import get_identity_stores

    username = app.config.get("DEFAULT_ADMIN_USERNAME")
    password = app.config.get("DEFAULT_ADMIN_PASSWORD")
    role_name = app.config.get("ADMIN_ROLE_NAME")

    if not password:
        app.logger.info("Admin bootstrap skipped: no default admin password configured")
        return None

    if not username or not role_name:
        app.logger.warning(
            "Admin bootstrap skipped: the admin username and role name must not be empty"
        )
        return None

    if password == PLACEHOLDER_ADMIN_PASSWORD and not app.config.get(
        "ALLOW_PLACEHOLDER_ADMIN_PASSWORD"
    ):
        app.logger.warning(
            "Admin bootstrap skipped: the placeholder admin password is not allowed "
            "outside development. Set MUSICSTORE_ADMIN_PASSWORD."
        )
        return None

    stores = get_identity_stores(app)
    bootstrapper = AdminBootstrapper(stores.roles, stores.users)
    try:
        return bootstrapper.ensure_admin(username, password, role_name)
    except (BootstrapError, KeyError) as e:
        app.logger.warning(f"Admin bootstrap failed, continuing without admin account: {e}")
        return None
