"""Tests for the application wiring."""

from main import app


class TestHealth:
    """Tests for GET /health."""

    def test_health_check(self, client):
        response = client.get("/health")
        assert response.status_code == 200
        assert response.json() == {"status": "ok"}


class TestRoutes:
    """The users and preferences routers are mounted."""

    def test_routes_registered(self):
        paths = {route.path for route in app.routes}
        assert "/api/users" in paths
        assert "/api/users/{user_id}/preferences/{name}" in paths
        assert "/api/preferences/definitions" in paths

    def test_unknown_route(self, client):
        assert client.get("/api/accounts").status_code == 404
