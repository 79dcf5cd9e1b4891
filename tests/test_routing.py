"""
Tests for controller/action routing.

Covers route template expansion and dispatch through the test client.
"""

import pytest
from flask import Flask

from musicstore.routing import (
    ROUTE_TEMPLATES,
    build_url_rules,
    expand_route_template,
    mvc_bp,
    resolve_action,
)
from musicstore.controllers import HomeController, StoreController


class TestRouteTemplates:
    """Tests for template expansion."""

    def test_controller_action_with_defaults(self):
        """Test that defaulted trailing placeholders may be omitted."""
        rules = expand_route_template(
            "{controller}/{action}", {"controller": "Home", "action": "Index"}
        )
        assert rules == [
            ("/<controller>/<action>", {}),
            ("/<controller>", {"action": "Index"}),
            ("/", {"controller": "Home", "action": "Index"}),
        ]

    def test_placeholder_without_default_is_required(self):
        """Test that expansion stops at a placeholder with no default."""
        rules = expand_route_template("{controller}/{action}", {"action": "Index"})
        assert rules == [
            ("/<controller>/<action>", {}),
            ("/<controller>", {"action": "Index"}),
        ]

    def test_literal_segments_are_kept(self):
        """Test that literal segments are never dropped."""
        rules = expand_route_template("api/{controller}", {"controller": "Home"})
        assert rules == [
            ("/api/<controller>", {}),
            ("/api", {"controller": "Home"}),
        ]

    def test_registered_templates(self):
        """Test the two application templates and their precedence."""
        assert ROUTE_TEMPLATES == [
            ("{controller}/{action}", {"controller": "Home", "action": "Index"}),
            ("{controller}", {"controller": "Home"}),
        ]
        # The second template only repeats URLs of the first one
        assert build_url_rules() == [
            ("/<controller>/<action>", {}),
            ("/<controller>", {"action": "Index"}),
            ("/", {"controller": "Home", "action": "Index"}),
        ]

    def test_later_template_adds_new_urls(self):
        """Test that a later template contributes URLs not seen before."""
        rules = build_url_rules(
            [
                ("{controller}", {}),
                ("shop/{controller}", {"controller": "Store"}),
            ]
        )
        assert rules == [
            ("/<controller>", {}),
            ("/shop/<controller>", {}),
            ("/shop", {"controller": "Store"}),
        ]

    def test_blueprint_registers_every_rule(self):
        """Test that the mvc blueprint registers on a fresh app, including rules without defaults."""
        app = Flask(__name__)
        app.register_blueprint(mvc_bp)
        rules = {
            rule.rule: dict(rule.defaults or {})
            for rule in app.url_map.iter_rules()
            if rule.endpoint.startswith("mvc.")
        }
        assert rules == {
            "/<controller>/<action>": {},
            "/<controller>": {"action": "Index"},
            "/": {"controller": "Home", "action": "Index"},
        }


class TestResolveAction:
    """Tests for controller/action lookup."""

    def test_case_insensitive(self):
        """Test that names are matched regardless of case."""
        cls, func = resolve_action("store", "BROWSE")
        assert cls is StoreController
        assert func is StoreController.browse

    def test_home_index(self):
        cls, func = resolve_action("Home", "Index")
        assert cls is HomeController
        assert func is HomeController.index

    @pytest.mark.parametrize(
        "controller_name, action_name",
        [("Nope", "Index"), ("Store", "Nope"), ("Store", "__init__")],
    )
    def test_unknown(self, controller_name, action_name):
        """Test that unknown controllers and non-action attributes are refused."""
        with pytest.raises(LookupError):
            resolve_action(controller_name, action_name)


class TestDispatch:
    """Tests for request dispatch through the Flask app."""

    @pytest.mark.parametrize("path", ["/", "/Home", "/Home/Index", "/home/index"])
    def test_home_urls(self, client, catalog, path):
        """Test that every form of the home URL renders the home page."""
        response = client.get(path)
        assert response.status_code == 200
        assert b"Fresh" in response.data

    @pytest.mark.parametrize("path", ["/Store", "/Store/Index"])
    def test_store_index_urls(self, client, catalog, path):
        """Test that the action defaults to Index."""
        response = client.get(path)
        assert response.status_code == 200
        assert b"Browse Genres" in response.data

    @pytest.mark.parametrize("path", ["/Missing", "/Store/Missing", "/Store/Browse/Extra"])
    def test_unknown_paths(self, client, db_session, path):
        """Test that unknown controllers and actions are 404."""
        response = client.get(path)
        assert response.status_code == 404

    def test_method_not_allowed(self, client, db_session):
        """Test that POST to a GET-only action is 405."""
        response = client.post("/Store/Index")
        assert response.status_code == 405

    def test_health_is_not_a_controller(self, client):
        """Test that fixed routes take precedence over the controller rule."""
        response = client.get("/health")
        assert response.status_code == 200
        assert response.get_json() == {"status": "healthy", "service": "musicstore"}

    def test_static_files_are_served(self, client):
        """Test that static files are served ahead of controller routing."""
        response = client.get("/static/Content/Site.css")
        assert response.status_code == 200
        assert b"font-family" in response.data
        response.close()
