#!/usr/bin/env python3
"""
Database initialization script for the MusicStore.

This script initializes the database for first-time setup:
1. Creates all tables using Alembic migrations
2. Stamps the database with the current migration version
3. Seeds the demo catalogue
4. Ensures the default administrator account exists

Usage:
    python scripts/init_db.py                    # Full initialization
    python scripts/init_db.py --bootstrap-admin  # Re-run admin bootstrap only
    python scripts/init_db.py --reset            # Drop everything and reinitialize

Environment Variables:
    DATABASE_URL: Database connection string (optional, defaults to config)
    FLASK_ENV: Application environment (development|production|testing)
    MUSICSTORE_ADMIN_USERNAME / MUSICSTORE_ADMIN_PASSWORD: admin credentials
"""

import os
import sys

# Add project root to path for imports
project_root = os.path.dirname(os.path.dirname(os.path.abspath(__file__)))
sys.path.insert(0, project_root)

from flask_migrate import upgrade, stamp

from musicstore.app import create_app
from musicstore.identity import bootstrap_admin
from musicstore.models import db
from musicstore.sample_data import initialize_music_store_database

# The script runs each step itself and reports the outcome
_SCRIPT_OVERRIDES = {
    "ADMIN_BOOTSTRAP_ON_STARTUP": False,
    "SEED_SAMPLE_DATA": False,
    "CREATE_SCHEMA_ON_STARTUP": False,
}


def _create_app(env: str):
    return create_app(env, _SCRIPT_OVERRIDES)


def init_database() -> bool:
    """
    Initialize the database with migrations, seed data and the admin account.

    Returns:
        True if successful, False otherwise
    """
    env = os.environ.get("FLASK_ENV", "development")
    print(f"Initializing database for environment: {env}")

    app = _create_app(env)

    with app.app_context():
        try:
            print("Running database migrations...")
            upgrade(directory=os.path.join(project_root, "migrations"))

            print("Stamping database with current migration version...")
            stamp(directory=os.path.join(project_root, "migrations"))

            print("Seeding sample data...")
            created = initialize_music_store_database()
            if created:
                print(f"  Created {created} albums...")
            else:
                print("  Catalogue already exists, skipping...")

            return run_admin_bootstrap(app)

        except Exception as e:
            print(f"Error initializing database: {e}")
            import traceback
            traceback.print_exc()
            return False


def run_admin_bootstrap(app) -> bool:
    """
    Ensure the default administrator account exists.

    Returns:
        True if the account exists afterwards, False otherwise
    """
    print("Ensuring default administrator account...")
    result = bootstrap_admin(app)
    if result is None:
        print("  Admin bootstrap did not complete, see log output")
        return False
    if result.user_created:
        print(f"  Created user '{app.config['DEFAULT_ADMIN_USERNAME']}'")
    else:
        print("  Administrator account already exists, skipping...")
    return True


def bootstrap_admin_only() -> bool:
    """Re-run the admin bootstrap against an initialized database."""
    env = os.environ.get("FLASK_ENV", "development")
    app = _create_app(env)
    with app.app_context():
        return run_admin_bootstrap(app)


def reset_database() -> bool:
    """
    Reset the database by dropping all tables and reinitializing.

    WARNING: This will delete all data!

    Returns:
        True if successful, False otherwise
    """
    env = os.environ.get("FLASK_ENV", "development")

    # Safety check - don't allow reset in production without explicit override
    if env == "production" and not os.environ.get("ALLOW_DB_RESET"):
        print("ERROR: Cannot reset database in production without ALLOW_DB_RESET=1")
        return False

    print(f"WARNING: This will delete ALL data in the {env} database!")
    confirm = input("Type 'RESET' to confirm: ")
    if confirm != "RESET":
        print("Reset cancelled.")
        return False

    app = _create_app(env)

    with app.app_context():
        try:
            print("Dropping all tables...")
            db.drop_all()
            db.session.execute(db.text("DROP TABLE IF EXISTS alembic_version"))
            db.session.commit()
        except Exception as e:
            print(f"Error resetting database: {e}")
            return False

    print("Recreating tables...")
    return init_database()


if __name__ == "__main__":
    import argparse

    parser = argparse.ArgumentParser(description="MusicStore Database Initialization")
    group = parser.add_mutually_exclusive_group()
    group.add_argument(
        "--reset",
        action="store_true",
        help="Reset database (WARNING: deletes all data)",
    )
    group.add_argument(
        "--bootstrap-admin",
        action="store_true",
        help="Only ensure the default administrator account exists",
    )
    args = parser.parse_args()

    if args.reset:
        success = reset_database()
    elif args.bootstrap_admin:
        success = bootstrap_admin_only()
    else:
        success = init_database()

    sys.exit(0 if success else 1)
