from dataclasses import dataclass

from src.bookshelf.core.services import BookStore, DbSessionService


@dataclass
class ApplicationDependencies:
    database_service: DbSessionService | None
    book_store: BookStore
