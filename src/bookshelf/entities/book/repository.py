from sqlmodel import Session, select

from .entity import Book
from .table import BookTable


class BookRepository:
    """Data-access layer for books."""

    def __init__(self, session: Session) -> None:
        self._session = session

    def list_all(self) -> list[Book]:
        rows = self._session.exec(select(BookTable).order_by(BookTable.id)).all()
        return [Book.model_validate(row, from_attributes=True) for row in rows]

    def get(self, book_id: int) -> Book | None:
        row = self._session.get(BookTable, book_id)
        if row is None:
            return None
        return Book.model_validate(row, from_attributes=True)

    def create(self, title: str) -> Book:
        row = BookTable(title=title)
        self._session.add(row)
        self._session.flush()
        self._session.refresh(row)
        return Book.model_validate(row, from_attributes=True)

    def update(self, book_id: int, title: str) -> Book:
        row = self._session.get(BookTable, book_id)
        if row is None:
            raise ValueError(f"Book {book_id} not found")
        row.title = title
        self._session.add(row)
        self._session.flush()
        self._session.refresh(row)
        return Book.model_validate(row, from_attributes=True)

    def delete(self, book_id: int) -> bool:
        row = self._session.get(BookTable, book_id)
        if row is None:
            return False
        self._session.delete(row)
        self._session.flush()
        return True
