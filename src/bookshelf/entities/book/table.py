"""Book database table model."""

from sqlmodel import Field, SQLModel


class BookTable(SQLModel, table=True):
    """Database persistence model for books.

    Kept separate from the ``Book`` entity; the integer primary key is
    assigned by the database on insert.
    """

    __tablename__ = "book"

    id: int | None = Field(default=None, primary_key=True)
    title: str = Field(nullable=False)
