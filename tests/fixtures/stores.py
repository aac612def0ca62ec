from __future__ import annotations

from collections.abc import Generator

import pytest
from fastapi.testclient import TestClient

from src.bookshelf.api.http.app import app
from src.bookshelf.api.http.app_data import ApplicationDependencies
from src.bookshelf.core.errors import StoreError
from src.bookshelf.core.services import (
    BookStore,
    DbSessionService,
    InMemoryBookStore,
    SqlBookStore,
)
from src.bookshelf.entities.book import Book


class RecordingBookStore(InMemoryBookStore):
    """In-memory store that remembers which operations were called."""

    def __init__(self) -> None:
        super().__init__()
        self.calls: list[str] = []

    async def find_many(self) -> list[Book]:
        self.calls.append("find_many")
        return await super().find_many()

    async def find_unique(self, book_id: int) -> Book | None:
        self.calls.append("find_unique")
        return await super().find_unique(book_id)

    async def create(self, title: str) -> Book:
        self.calls.append("create")
        return await super().create(title)

    async def update(self, book_id: int, title: str) -> Book:
        self.calls.append("update")
        return await super().update(book_id, title)

    async def delete(self, book_id: int) -> None:
        self.calls.append("delete")
        await super().delete(book_id)


class BrokenBookStore:
    """Store whose every operation fails, as if the database were unreachable."""

    def __init__(self, error: Exception | None = None) -> None:
        self._error = error or StoreError("connection refused")

    async def find_many(self) -> list[Book]:
        raise self._error

    async def find_unique(self, book_id: int) -> Book | None:
        raise self._error

    async def create(self, title: str) -> Book:
        raise self._error

    async def update(self, book_id: int, title: str) -> Book:
        raise self._error

    async def delete(self, book_id: int) -> None:
        raise self._error


@pytest.fixture
def memory_store() -> InMemoryBookStore:
    return InMemoryBookStore()


@pytest.fixture
def sql_store(database_service: DbSessionService) -> SqlBookStore:
    return SqlBookStore(database_service)


@pytest.fixture(params=["memory", "sql"])
def book_store(request: pytest.FixtureRequest) -> BookStore:
    """Run the test once per store implementation."""
    if request.param == "memory":
        return InMemoryBookStore()
    return request.getfixturevalue("sql_store")


@pytest.fixture
def client_factory() -> Generator:
    """Build a TestClient whose app serves the given store."""
    previous = getattr(app.state, "app_dependencies", None)

    def _make(
        store: BookStore, database_service: DbSessionService | None = None
    ) -> TestClient:
        app.state.app_dependencies = ApplicationDependencies(
            database_service=database_service, book_store=store
        )
        return TestClient(app)

    try:
        yield _make
    finally:
        app.state.app_dependencies = previous


@pytest.fixture
def client(client_factory, book_store: BookStore) -> TestClient:
    return client_factory(book_store)
