"""
Flask Application Factory.

This module provides the create_app() factory function for creating
and configuring the Flask application instance.
"""

import logging
import traceback
from typing import Any, Mapping, Optional

from flask import Flask, render_template
from flask.logging import default_handler
from flask_migrate import Migrate
from sqlalchemy.exc import SQLAlchemyError

from musicstore.config import get_config, ProductionConfig
from musicstore.models import db

# Global migrate instance for CLI commands
migrate = Migrate()


def create_app(
    config_name: Optional[str] = None,
    config_overrides: Optional[Mapping[str, Any]] = None,
) -> Flask:
    """
    Create and configure the Flask application.

    The startup sequence finishes before the application is returned, so the
    default administrator and the demo catalogue exist before the first
    request is served.

    Args:
        config_name: Configuration environment name ('development', 'production',
                    'testing'). If None, uses FLASK_ENV environment variable
                    or defaults to 'development'.
        config_overrides: Values applied on top of the configuration class.

    Returns:
        Configured Flask application instance.

    Raises:
        RuntimeError: If SECRET_KEY is not set in production mode.
    """
    app = Flask(
        __name__,
        template_folder="templates",
        static_folder="static",
    )

    # Load configuration
    config_class = get_config(config_name)
    app.config.from_object(config_class)
    if config_overrides:
        app.config.update(config_overrides)

    # Validate production configuration
    if config_class == ProductionConfig:
        if not app.config.get("SECRET_KEY"):
            raise RuntimeError(
                "FLASK_SECRET_KEY environment variable must be set in production. "
                "Generate one with: python -c \"import secrets; print(secrets.token_hex(32))\""
            )

    _configure_logging(app)

    _init_extensions(app)

    _register_blueprints(app)

    _register_error_handlers(app)

    # Add health check endpoint
    @app.route("/health")
    def health_check() -> dict:
        """Health check endpoint for container orchestration."""
        return {"status": "healthy", "service": "musicstore"}

    _run_startup_tasks(app)

    return app


def _configure_logging(app: Flask) -> None:
    """
    Route package loggers through Flask's default handler.

    Args:
        app: Flask application instance.
    """
    package_logger = logging.getLogger("musicstore")
    package_logger.setLevel(app.config.get("LOG_LEVEL", "INFO"))
    if default_handler not in package_logger.handlers:
        package_logger.addHandler(default_handler)


def _init_extensions(app: Flask) -> None:
    """
    Initialize Flask extensions.

    Args:
        app: Flask application instance.
    """
    from musicstore.identity import init_identity

    # Initialize Flask-SQLAlchemy
    db.init_app(app)

    # Initialize Flask-Migrate for database migrations
    migrate.init_app(app, db)

    # Role and user stores for the configured backend
    init_identity(app)


def _register_blueprints(app: Flask) -> None:
    """
    Register application blueprints.

    Args:
        app: Flask application instance.
    """
    # Importing the controllers registers them with the router
    import musicstore.controllers  # noqa: F401
    from musicstore.core.security import current_user_has_role, get_current_user
    from musicstore.routing import action_url, mvc_bp

    app.register_blueprint(mvc_bp)

    app.jinja_env.globals["action_url"] = action_url

    @app.context_processor
    def inject_user() -> dict:
        role_name = app.config.get("ADMIN_ROLE_NAME", "Administrator")
        return {
            "current_user": get_current_user(),
            "is_admin": current_user_has_role(role_name),
        }


def _register_error_handlers(app: Flask) -> None:
    """
    Register error handlers for the application.

    Args:
        app: Flask application instance.
    """

    @app.errorhandler(403)
    def forbidden_error(error):
        """Handle 403 Forbidden errors."""
        return render_template("error.html", status=403, title="Forbidden"), 403

    @app.errorhandler(404)
    def not_found_error(error):
        """Handle 404 Not Found errors."""
        return render_template("error.html", status=404, title="Not Found"), 404

    @app.errorhandler(500)
    def internal_error(error):
        """Handle 500 Internal Server errors."""
        details = None
        original = getattr(error, "original_exception", None)
        if app.config.get("SHOW_ERROR_DETAILS") and original is not None:
            details = "".join(
                traceback.format_exception(type(original), original, original.__traceback__)
            )
        return (
            render_template(
                "error.html", status=500, title="Internal Server Error", details=details
            ),
            500,
        )


def _run_startup_tasks(app: Flask) -> None:
    """
    Run the startup sequence: schema, admin account, demo catalogue.

    None of these steps can stop the application from starting; failures
    are logged.

    Args:
        app: Flask application instance.
    """
    from musicstore.identity import bootstrap_admin
    from musicstore.sample_data import initialize_music_store_database

    with app.app_context():
        if app.config.get("CREATE_SCHEMA_ON_STARTUP"):
            try:
                db.create_all()
            except SQLAlchemyError as e:
                app.logger.warning(f"Could not create database schema: {e}")

        if app.config.get("ADMIN_BOOTSTRAP_ON_STARTUP"):
            bootstrap_admin(app)

        if app.config.get("SEED_SAMPLE_DATA"):
            try:
                initialize_music_store_database()
            except SQLAlchemyError as e:
                db.session.rollback()
                app.logger.warning(f"Sample data not loaded: {e}")
