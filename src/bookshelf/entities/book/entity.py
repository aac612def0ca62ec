"""Entity: Book."""

from pydantic import BaseModel, Field


class Book(BaseModel):
    """Book entity as returned by the API.

    The id is assigned by the store when the book is created and never
    changes afterwards.
    """

    id: int = Field(description="Store-assigned identifier")
    title: str = Field(min_length=1, description="Title")


class BookPayload(BaseModel):
    """Request body for creating or updating a book.

    ``title`` is optional at the schema level so the handlers can answer a
    missing title with their own 400 message.
    """

    title: str | None = Field(default=None, description="Title")
