"""
Pytest configuration and fixtures for MusicStore tests.

This file provides shared fixtures for all tests, including:
- Flask application factory
- Test client
- Database setup/teardown
- Test data seeding
"""

import os
import pytest
from typing import Generator

# Set testing environment before importing app
os.environ["FLASK_ENV"] = "testing"

from musicstore.app import create_app
from musicstore.models import db, Role, User
from musicstore.sample_data import initialize_music_store_database


@pytest.fixture(scope="session")
def app():
    """
    Create a Flask application configured for testing.

    This fixture creates a single application instance for the entire
    test session with an in-memory SQLite database.
    """
    application = create_app("testing")

    # Create application context and database tables
    with application.app_context():
        db.create_all()
        yield application
        db.drop_all()


@pytest.fixture(scope="function")
def client(app):
    """
    Create a test client for the Flask application.

    This fixture provides a test client that can be used to make
    requests to the application without running a server.
    """
    return app.test_client()


@pytest.fixture(scope="function")
def db_session(app) -> Generator:
    """
    Create a clean database session for each test.

    This fixture creates all tables before the test and clears
    them after, ensuring test isolation.
    """
    with app.app_context():
        db.create_all()
        yield db.session
        db.session.rollback()
        # Clean up all tables
        for table in reversed(db.metadata.sorted_tables):
            db.session.execute(table.delete())
        db.session.commit()


def _make_user(db_session, username: str, password: str, role_names: list) -> User:
    user = User(username=username)
    user.set_password(password)
    for name in role_names:
        role = Role.query.filter_by(name=name).first() or Role(name=name)
        user.roles.append(role)
    db_session.add(user)
    db_session.commit()
    return user


@pytest.fixture
def admin_user(db_session) -> User:
    """
    Create an administrator for testing.

    Returns a user in the Administrator role.
    """
    return _make_user(db_session, "Administrator", "TestPassword123!", ["Administrator"])


@pytest.fixture
def regular_user(db_session) -> User:
    """
    Create a regular user for testing.

    Returns a user in the Guest role only.
    """
    return _make_user(db_session, "testuser", "TestPassword123!", ["Guest"])


@pytest.fixture
def catalog(db_session) -> int:
    """Seed the demo catalogue and return the number of albums."""
    return initialize_music_store_database()


@pytest.fixture
def log_on(client):
    """Return a helper that posts the log on form with the test client."""

    def _log_on(username: str, password: str):
        return client.post(
            "/Account/LogOn",
            data={"username": username, "password": password},
        )

    return _log_on
