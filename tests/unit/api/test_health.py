"""Tests for the health check router."""

from unittest.mock import Mock

from src.bookshelf.core.services import DbSessionService, InMemoryBookStore


class TestHealth:
    def test_liveness(self, client_factory):
        client = client_factory(InMemoryBookStore())

        response = client.get("/health")

        assert response.status_code == 200
        assert response.json()["status"] == "healthy"

    def test_ready_with_database(self, client_factory, database_service, sql_store):
        client = client_factory(sql_store, database_service)

        response = client.get("/health/ready")

        assert response.status_code == 200
        body = response.json()
        assert body["status"] == "ready"
        assert body["checks"]["database"] == {"status": "healthy", "type": "sqlite"}

    def test_not_ready_when_database_is_down(self, client_factory, sql_store):
        broken = Mock(spec=DbSessionService)
        broken.health_check.return_value = False
        broken.dialect = "postgresql"
        client = client_factory(sql_store, broken)

        response = client.get("/health/ready")

        assert response.status_code == 503
        assert response.json()["status"] == "not_ready"
        assert response.json()["checks"]["database"]["status"] == "unhealthy"

    def test_ready_on_memory_store(self, client_factory):
        client = client_factory(InMemoryBookStore())

        response = client.get("/health/ready")

        assert response.status_code == 200
        assert response.json()["checks"]["database"]["status"] == "disabled"
