"""FastAPI dependency implementations."""

from __future__ import annotations

from fastapi import Request

from src.bookshelf.api.http.app_data import ApplicationDependencies
from src.bookshelf.core.services import BookStore, DbSessionService


def get_app_dependencies(request: Request) -> ApplicationDependencies:
    return request.app.state.app_dependencies


def get_book_store(request: Request) -> BookStore:
    """Get the book store instance."""
    return get_app_dependencies(request).book_store


def get_database_service(request: Request) -> DbSessionService | None:
    """Get the database service, or None when running on the in-memory store."""
    return get_app_dependencies(request).database_service
