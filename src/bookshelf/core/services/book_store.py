"""Book persistence behind an async interface.

Handlers only depend on :class:`BookStore`. Two implementations ship with the
application: :class:`SqlBookStore` backed by SQLModel and
:class:`InMemoryBookStore` for tests and throwaway local runs. Every failure
raised by an implementation is a :class:`StoreError`.
"""

from __future__ import annotations

import asyncio
from collections.abc import Callable
from typing import Protocol, TypeVar, runtime_checkable

from starlette.concurrency import run_in_threadpool

from src.bookshelf.core.errors import StoreError
from src.bookshelf.core.services.database.db_session import DbSessionService
from src.bookshelf.entities.book import Book, BookRepository

T = TypeVar("T")


@runtime_checkable
class BookStore(Protocol):
    """CRUD-by-id capability set the books router relies on."""

    async def find_many(self) -> list[Book]: ...

    async def find_unique(self, book_id: int) -> Book | None: ...

    async def create(self, title: str) -> Book: ...

    async def update(self, book_id: int, title: str) -> Book: ...

    async def delete(self, book_id: int) -> None: ...


class SqlBookStore:
    """BookStore over a relational database.

    Each call opens its own session scope and runs the blocking ORM work in
    the threadpool.
    """

    def __init__(self, database_service: DbSessionService) -> None:
        self._db = database_service

    async def _run(self, operation: str, work: Callable[[BookRepository], T]) -> T:
        def _in_session() -> T:
            with self._db.session_scope() as session:
                return work(BookRepository(session))

        try:
            return await run_in_threadpool(_in_session)
        except Exception as e:
            raise StoreError(f"{operation} failed: {e}") from e

    async def find_many(self) -> list[Book]:
        return await self._run("find_many", lambda repo: repo.list_all())

    async def find_unique(self, book_id: int) -> Book | None:
        return await self._run("find_unique", lambda repo: repo.get(book_id))

    async def create(self, title: str) -> Book:
        return await self._run("create", lambda repo: repo.create(title))

    async def update(self, book_id: int, title: str) -> Book:
        return await self._run("update", lambda repo: repo.update(book_id, title))

    async def delete(self, book_id: int) -> None:
        def _delete(repo: BookRepository) -> None:
            if not repo.delete(book_id):
                raise ValueError(f"Book {book_id} not found")

        await self._run("delete", _delete)


class InMemoryBookStore:
    """BookStore kept in a dict; ids count up from 1 in insertion order."""

    def __init__(self) -> None:
        self._books: dict[int, Book] = {}
        self._next_id = 1
        self._lock = asyncio.Lock()

    async def find_many(self) -> list[Book]:
        return list(self._books.values())

    async def find_unique(self, book_id: int) -> Book | None:
        return self._books.get(book_id)

    async def create(self, title: str) -> Book:
        async with self._lock:
            book = Book(id=self._next_id, title=title)
            self._books[book.id] = book
            self._next_id += 1
            return book

    async def update(self, book_id: int, title: str) -> Book:
        async with self._lock:
            if book_id not in self._books:
                raise StoreError(f"update failed: Book {book_id} not found")
            book = Book(id=book_id, title=title)
            self._books[book_id] = book
            return book

    async def delete(self, book_id: int) -> None:
        async with self._lock:
            if self._books.pop(book_id, None) is None:
                raise StoreError(f"delete failed: Book {book_id} not found")
