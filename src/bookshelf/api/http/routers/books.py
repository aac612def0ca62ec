"""Book API router with CRUD operations."""

import re

from fastapi import APIRouter, Body, Depends, Response, status
from loguru import logger

from src.bookshelf.api.http.deps import get_book_store
from src.bookshelf.core.errors import NotFoundError, ValidationError
from src.bookshelf.core.services import BookStore
from src.bookshelf.entities.book import Book, BookPayload

router = APIRouter(prefix="/books", tags=["books"])

_DECIMAL_ID = re.compile(r"\s*[+-]?[0-9]+\s*")
# Ids are stored in a signed 64-bit integer column
_MIN_ID = -(2**63)
_MAX_ID = 2**63 - 1


def parse_book_id(raw_id: str) -> int | None:
    """Coerce a path segment into a book id.

    Only plain decimal integers are accepted. Anything else, and values
    outside the 64-bit id range, give None, which no stored book matches.
    """
    if not _DECIMAL_ID.fullmatch(raw_id):
        return None
    book_id = int(raw_id)
    if not _MIN_ID <= book_id <= _MAX_ID:
        return None
    return book_id


async def _require_book(store: BookStore, raw_id: str) -> Book:
    book_id = parse_book_id(raw_id)
    book = None if book_id is None else await store.find_unique(book_id)
    if book is None:
        raise NotFoundError.for_book(raw_id)
    return book


def _title_of(payload: BookPayload | None) -> str | None:
    return payload.title if payload is not None else None


@router.get("", response_model=list[Book])
@router.get("/", response_model=list[Book], include_in_schema=False)
async def list_books(store: BookStore = Depends(get_book_store)) -> list[Book]:
    """List all books."""
    return await store.find_many()


@router.get("/{book_id}", response_model=Book)
async def get_book(book_id: str, store: BookStore = Depends(get_book_store)) -> Book:
    """Get a book by ID."""
    return await _require_book(store, book_id)


@router.put("/{book_id}", response_model=Book)
async def update_book(
    book_id: str,
    payload: BookPayload | None = Body(default=None),
    store: BookStore = Depends(get_book_store),
) -> Book:
    """Replace the title of an existing book."""
    title = _title_of(payload)
    if not title:
        raise ValidationError("A new title must be provided.")

    book = await _require_book(store, book_id)
    updated = await store.update(book.id, title)
    logger.info("Updated book {}", updated.id)
    return updated


@router.post("", response_model=Book, status_code=status.HTTP_201_CREATED)
@router.post(
    "/",
    response_model=Book,
    status_code=status.HTTP_201_CREATED,
    include_in_schema=False,
)
async def create_book(
    payload: BookPayload | None = Body(default=None),
    store: BookStore = Depends(get_book_store),
) -> Book:
    """Create a new book."""
    title = _title_of(payload)
    if not title:
        raise ValidationError("Title must be provided for a new book.")

    created = await store.create(title)
    logger.info("Created book {}", created.id)
    return created


@router.delete(
    "/{book_id}", status_code=status.HTTP_204_NO_CONTENT, response_class=Response
)
async def delete_book(book_id: str, store: BookStore = Depends(get_book_store)) -> Response:
    """Delete a book."""
    book = await _require_book(store, book_id)
    await store.delete(book.id)
    logger.info("Deleted book {}", book.id)
    return Response(status_code=status.HTTP_204_NO_CONTENT)
