"""
Tests for the storefront controllers.

Covers store browsing, log on/log off and the administrator-only store
manager.
"""

import pytest

from musicstore.app import create_app
from musicstore.identity import get_identity_stores
from musicstore.models import Album, Genre, User


class TestStore:
    """Tests for the Store controller."""

    def test_genre_list(self, client, catalog):
        response = client.get("/Store")
        assert response.status_code == 200
        assert b"Select from 10 genres" in response.data
        assert b"Store/Browse?genre=Rock" in response.data

    def test_browse_genre(self, client, catalog):
        """Test that browsing a genre lists only its albums."""
        response = client.get("/Store/Browse?genre=Metal")
        assert response.status_code == 200
        assert b"Master Of Puppets" in response.data
        assert b"Thriller" not in response.data

    @pytest.mark.parametrize("query", ["", "?genre=", "?genre=Polka"])
    def test_browse_unknown_genre(self, client, catalog, query):
        response = client.get(f"/Store/Browse{query}")
        assert response.status_code == 404

    def test_details(self, client, catalog, db_session):
        album = Album.query.filter_by(title="Kind of Blue").one()
        response = client.get(f"/Store/Details?id={album.id}")
        assert response.status_code == 200
        assert b"Kind of Blue" in response.data
        assert b"Miles Davis" in response.data
        assert b"8.99" in response.data

    @pytest.mark.parametrize("query", ["", "?id=abc", "?id=100000"])
    def test_details_not_found(self, client, catalog, query):
        response = client.get(f"/Store/Details{query}")
        assert response.status_code == 404

    def test_home_lists_featured_albums(self, client, catalog):
        response = client.get("/")
        assert response.status_code == 200
        assert response.data.count(b"Store/Details?id=") == 6


class TestAccount:
    """Tests for log on and log off."""

    def test_logon_form(self, client, db_session):
        response = client.get("/Account/LogOn")
        assert response.status_code == 200
        assert b'name="username"' in response.data
        assert b'name="password"' in response.data

    def test_logon_success(self, client, admin_user, log_on):
        """Test that valid credentials log the user on."""
        response = log_on("Administrator", "TestPassword123!")
        assert response.status_code == 302
        assert response.headers["Location"].endswith("/Home/Index")

        with client.session_transaction() as session:
            assert session["username"] == "Administrator"
            assert session["roles"] == ["Administrator"]

    def test_logon_records_last_login(self, client, admin_user, log_on, db_session):
        """Test that a successful log on stamps the user's last log on time."""
        assert admin_user.last_login is None
        log_on("Administrator", "TestPassword123!")
        db_session.expire_all()
        assert User.query.filter_by(username="Administrator").one().last_login is not None

    def test_failed_logon_leaves_last_login(self, client, admin_user, log_on, db_session):
        log_on("Administrator", "wrong")
        db_session.expire_all()
        assert User.query.filter_by(username="Administrator").one().last_login is None

    def test_logon_bad_password(self, client, admin_user, log_on):
        response = log_on("Administrator", "wrong")
        assert response.status_code == 200
        assert b"Invalid username or password" in response.data
        with client.session_transaction() as session:
            assert "user_id" not in session

    def test_logon_unknown_user(self, client, db_session, log_on):
        response = log_on("nobody", "whatever")
        assert response.status_code == 200
        assert b"Invalid username or password" in response.data

    def test_logon_redirects_to_next(self, client, admin_user):
        response = client.post(
            "/Account/LogOn?next=/StoreManager",
            data={"username": "Administrator", "password": "TestPassword123!"},
        )
        assert response.status_code == 302
        assert response.headers["Location"].endswith("/StoreManager")

    def test_logon_ignores_external_next(self, client, admin_user):
        """Test that only local paths are followed after log on."""
        response = client.post(
            "/Account/LogOn?next=//evil.example.com/",
            data={"username": "Administrator", "password": "TestPassword123!"},
        )
        assert response.status_code == 302
        assert "evil.example.com" not in response.headers["Location"]

    def test_logoff(self, client, admin_user, log_on):
        log_on("Administrator", "TestPassword123!")
        response = client.get("/Account/LogOff")
        assert response.status_code == 302
        with client.session_transaction() as session:
            assert "user_id" not in session

    def test_logon_with_memory_store(self):
        """Test that log on uses the configured in-memory user store."""
        app = create_app(
            "testing",
            {
                "IDENTITY_STORE": "memory",
                "CREATE_SCHEMA_ON_STARTUP": True,
                "ADMIN_BOOTSTRAP_ON_STARTUP": True,
                "DEFAULT_ADMIN_PASSWORD": "memory-password",
            },
        )
        client = app.test_client()
        response = client.post(
            "/Account/LogOn",
            data={"username": "Administrator", "password": "memory-password"},
        )
        assert response.status_code == 302
        assert client.get("/StoreManager").status_code == 200
        user = get_identity_stores(app).users.find_by_username("Administrator")
        assert user.last_login is not None

    def test_logon_store_unavailable(self):
        """Test that an unreachable user store yields 503 rather than 500."""
        app = create_app("testing")
        response = app.test_client().post(
            "/Account/LogOn",
            data={"username": "Administrator", "password": "whatever"},
        )
        assert response.status_code == 503


class TestStoreManager:
    """Tests for the administrator-only store manager."""

    def test_anonymous_is_redirected_to_logon(self, client, db_session):
        response = client.get("/StoreManager")
        assert response.status_code == 302
        assert "/Account/LogOn" in response.headers["Location"]
        assert "next=" in response.headers["Location"]

    def test_non_admin_is_forbidden(self, client, regular_user, log_on):
        log_on("testuser", "TestPassword123!")
        response = client.get("/StoreManager")
        assert response.status_code == 403
        assert b"permission" in response.data

    def test_admin_sees_albums(self, client, catalog, admin_user, log_on):
        log_on("Administrator", "TestPassword123!")
        response = client.get("/StoreManager/Index")
        assert response.status_code == 200
        assert b"Store Manager" in response.data
        assert b"Master Of Puppets" in response.data

    def test_admin_link_only_for_admins(self, client, catalog, admin_user, regular_user, log_on):
        log_on("testuser", "TestPassword123!")
        assert b">Admin<" not in client.get("/").data
        client.get("/Account/LogOff")
        log_on("Administrator", "TestPassword123!")
        assert b">Admin<" in client.get("/").data


class TestSampleData:
    """Tests for the demo catalogue."""

    def test_seeding_is_idempotent(self, db_session):
        from musicstore.sample_data import ALBUMS, initialize_music_store_database

        assert initialize_music_store_database() == len(ALBUMS)
        assert initialize_music_store_database() == 0
        assert Album.query.count() == len(ALBUMS)
        assert Genre.query.count() == 10

    def test_every_album_has_genre_and_artist(self, catalog, db_session):
        for album in Album.query.all():
            assert album.genre is not None
            assert album.artist is not None
            assert album.price > 0
