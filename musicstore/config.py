"""
Flask application configuration classes.

Supports three environments: Development, Production, and Testing.
Configuration values are read from environment variables where appropriate.
"""

import os
from typing import Optional

# Placeholder shipped with the sample; only development/testing may use it.
PLACEHOLDER_ADMIN_PASSWORD = "YouShouldChangeThisPassword"


def _env_flag(name: str, default: bool = False) -> bool:
    value = os.environ.get(name)
    if value is None:
        return default
    return value.strip().lower() in ("1", "true", "t", "yes", "y")


class Config:
    """Base configuration class with common settings."""

    # Flask core settings - no default value, must be explicitly set
    SECRET_KEY: str = os.environ.get("FLASK_SECRET_KEY") or ""

    # Database settings
    SQLALCHEMY_DATABASE_URI: str = os.environ.get(
        "DATABASE_URL", "sqlite:///musicstore.db"
    )
    SQLALCHEMY_TRACK_MODIFICATIONS: bool = False

    # Session settings
    SESSION_COOKIE_SECURE: bool = True
    SESSION_COOKIE_HTTPONLY: bool = True
    SESSION_COOKIE_SAMESITE: str = "Lax"

    # Identity store backend: "sql" (database) or "memory" (process lifetime)
    IDENTITY_STORE: str = os.environ.get("MUSICSTORE_IDENTITY_STORE", "sql")

    # Default administrator account
    DEFAULT_ADMIN_USERNAME: str = os.environ.get(
        "MUSICSTORE_ADMIN_USERNAME", "Administrator"
    )
    DEFAULT_ADMIN_PASSWORD: Optional[str] = os.environ.get("MUSICSTORE_ADMIN_PASSWORD")
    ADMIN_ROLE_NAME: str = os.environ.get("MUSICSTORE_ADMIN_ROLE", "Administrator")
    ALLOW_PLACEHOLDER_ADMIN_PASSWORD: bool = False

    # Startup sequence
    ADMIN_BOOTSTRAP_ON_STARTUP: bool = True
    SEED_SAMPLE_DATA: bool = _env_flag("MUSICSTORE_SEED_SAMPLE_DATA", True)
    CREATE_SCHEMA_ON_STARTUP: bool = False

    # Error pages
    SHOW_ERROR_DETAILS: bool = False

    # Password policy
    PASSWORD_MIN_LENGTH: int = 8
    PASSWORD_REQUIRE_DIGIT: bool = True
    PASSWORD_REQUIRE_UPPERCASE: bool = True
    PASSWORD_REQUIRE_NON_ALPHANUMERIC: bool = False

    # Logging
    LOG_LEVEL: str = os.environ.get("LOG_LEVEL", "INFO").upper()


class DevelopmentConfig(Config):
    """Development configuration with debugging enabled."""

    DEBUG: bool = True
    TESTING: bool = False

    # Allow insecure cookies in development
    SESSION_COOKIE_SECURE: bool = False

    SQLALCHEMY_DATABASE_URI: str = os.environ.get(
        "DATABASE_URL", "sqlite:///musicstore_dev.db"
    )

    # Development secret key (only if not set via env var)
    SECRET_KEY: str = os.environ.get("FLASK_SECRET_KEY", "dev-secret-key-change-in-prod")

    DEFAULT_ADMIN_PASSWORD: Optional[str] = os.environ.get(
        "MUSICSTORE_ADMIN_PASSWORD", PLACEHOLDER_ADMIN_PASSWORD
    )
    ALLOW_PLACEHOLDER_ADMIN_PASSWORD: bool = True

    CREATE_SCHEMA_ON_STARTUP: bool = True

    # The placeholder admin password has no digit
    PASSWORD_REQUIRE_DIGIT: bool = False

    # Detailed error pages are for development only
    SHOW_ERROR_DETAILS: bool = True

    LOG_LEVEL: str = os.environ.get("LOG_LEVEL", "DEBUG").upper()


class ProductionConfig(Config):
    """Production configuration with security hardened settings."""

    DEBUG: bool = False
    TESTING: bool = False

    # Require SECRET_KEY in production - validated in create_app()
    SECRET_KEY: str = os.environ.get("FLASK_SECRET_KEY") or ""

    # Strict security settings
    SESSION_COOKIE_SECURE: bool = True
    SESSION_COOKIE_HTTPONLY: bool = True
    SESSION_COOKIE_SAMESITE: str = "Strict"


class TestingConfig(Config):
    """Testing configuration for unit and integration tests."""

    DEBUG: bool = False
    TESTING: bool = True

    # Use in-memory SQLite for fast tests
    SQLALCHEMY_DATABASE_URI: str = "sqlite:///:memory:"

    SECRET_KEY: str = "test-secret-key-for-testing-only"

    SESSION_COOKIE_SECURE: bool = False

    IDENTITY_STORE: str = "sql"

    DEFAULT_ADMIN_PASSWORD: Optional[str] = PLACEHOLDER_ADMIN_PASSWORD
    ALLOW_PLACEHOLDER_ADMIN_PASSWORD: bool = True

    # Tests create the schema and run startup steps explicitly
    ADMIN_BOOTSTRAP_ON_STARTUP: bool = False
    SEED_SAMPLE_DATA: bool = False

    # Keep password fixtures short
    PASSWORD_MIN_LENGTH: int = 6
    PASSWORD_REQUIRE_DIGIT: bool = False
    PASSWORD_REQUIRE_UPPERCASE: bool = False


# Configuration mapping for easy access
config = {
    "development": DevelopmentConfig,
    "production": ProductionConfig,
    "testing": TestingConfig,
    "default": DevelopmentConfig,
}


def get_config(config_name: Optional[str] = None) -> type:
    """
    Get configuration class by name.

    Args:
        config_name: Configuration environment name. If None, uses
                    FLASK_ENV environment variable or defaults to 'development'.

    Returns:
        Configuration class for the specified environment.
    """
    if config_name is None:
        config_name = os.environ.get("FLASK_ENV", "development")

    return config.get(config_name, DevelopmentConfig)
