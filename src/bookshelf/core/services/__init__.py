"""Core services exports."""

from .book_store import BookStore, InMemoryBookStore, SqlBookStore
from .database.db_manage import DbManageService
from .database.db_session import DbSessionService

__all__ = [
    "BookStore",
    "InMemoryBookStore",
    "SqlBookStore",
    "DbManageService",
    "DbSessionService",
]
