"""
Security utilities for the MusicStore.

Provides password hashing, session login helpers and access control decorators.
"""

from functools import wraps
from typing import Any, Callable, Optional

from flask import abort, current_app, flash, redirect, request, session
from werkzeug.security import generate_password_hash, check_password_hash


def hash_password(password: str) -> str:
    """Hash a password using PBKDF2 SHA256."""
    return generate_password_hash(password, method="pbkdf2:sha256")


def verify_password_hash(stored_hash: str, password: str) -> bool:
    """Verify a password against a stored hash."""
    return check_password_hash(stored_hash, password)


def login_user(user: Any) -> None:
    """Store the authenticated user in the session."""
    session.clear()
    session["user_id"] = user.id
    session["username"] = user.username
    session["roles"] = sorted(user.role_names)


def logout_user() -> None:
    """Remove the authenticated user from the session."""
    session.clear()


def get_current_user() -> Optional[dict]:
    """Get current logged in user."""
    if "user_id" not in session:
        return None
    return {
        "id": session["user_id"],
        "username": session.get("username"),
        "roles": list(session.get("roles", [])),
    }


def current_user_has_role(role_name: str) -> bool:
    """Check if the logged in user holds the given role."""
    return role_name in session.get("roles", [])


def _login_redirect():
    from musicstore.routing import action_url

    flash("Please log in to access this page", "error")
    return redirect(action_url("Account", "LogOn", next=request.path))


def require_role(role_name: str) -> Callable[[Callable[..., Any]], Callable[..., Any]]:
    """
    Decorator to require membership in a role.

    Anonymous users are redirected to the log on page; logged in users
    without the role get 403.
    """

    def decorator(f: Callable[..., Any]) -> Callable[..., Any]:
        @wraps(f)
        def decorated_function(*args: Any, **kwargs: Any) -> Any:
            if "user_id" not in session:
                return _login_redirect()
            if not current_user_has_role(role_name):
                abort(403)
            return f(*args, **kwargs)

        return decorated_function

    return decorator


def require_admin(f: Callable[..., Any]) -> Callable[..., Any]:
    """Decorator to require the configured administrator role."""

    @wraps(f)
    def decorated_function(*args: Any, **kwargs: Any) -> Any:
        role_name = current_app.config.get("ADMIN_ROLE_NAME", "Administrator")
        return require_role(role_name)(f)(*args, **kwargs)

    return decorated_function
