"""Tests for the health endpoint."""


class TestHealth:
    """GET /health."""

    async def test_healthy(self, client):
        response = await client.get("/api/v1/health")

        assert response.status_code == 200
        body = response.json()
        assert body["status"] == "healthy"
        assert body["checks"] == {"database": "healthy", "redis": "disabled"}

    async def test_root(self, client):
        response = await client.get("/")

        assert response.status_code == 200
        assert response.json()["name"] == "JobNest API"
