"""
Routes for the books resource.

Handlers validate input, call the data access object and return JSON
envelopes. They never catch errors: every failure is a ``BookAPIError`` (or
bubbles up as one of the framework's own) and is rendered by the handlers
registered in ``api.main``.
"""

from typing import Any, Optional

import structlog
from fastapi import APIRouter, Body, Depends, status
from pydantic import ValidationError

from api.database import BookDAO
from api.deps import get_book_dao
from api.errors import BookValidationError
from api.models import BookListResponse, BookQueryParams, BookResponse, MessageResponse
from api.schemas import CreateBookSchema, UpdateBookSchema, format_errors, validate_payload

logger = structlog.get_logger(__name__)

router = APIRouter(tags=["Books"])


@router.get("", response_model=BookListResponse)
async def list_books(
    title: Optional[str] = None,
    author: Optional[str] = None,
    publisher: Optional[str] = None,
    language: Optional[str] = None,
    pages: Optional[int] = None,
    year: Optional[int] = None,
    min_pages: Optional[int] = None,
    max_pages: Optional[int] = None,
    min_year: Optional[int] = None,
    max_year: Optional[int] = None,
    dao: BookDAO = Depends(get_book_dao),
):
    """
    Get all books ordered by title.

    - **title**, **author**, **publisher**: case-insensitive substring match
    - **language**: case-insensitive exact match
    - **pages**, **year**: exact match
    - **min_pages**, **max_pages**, **min_year**, **max_year**: inclusive ranges
    """
    try:
        query_params = BookQueryParams(
            title=title,
            author=author,
            publisher=publisher,
            language=language,
            pages=pages,
            year=year,
            min_pages=min_pages,
            max_pages=max_pages,
            min_year=min_year,
            max_year=max_year,
        )
    except ValidationError as e:
        raise BookValidationError("Invalid query parameters", errors=format_errors(e.errors())) from e

    books = await dao.find_all(query_params)
    return BookListResponse(books=books)


@router.get("/{isbn}", response_model=BookResponse)
async def get_book(isbn: str, dao: BookDAO = Depends(get_book_dao)):
    """Get a single book by isbn."""
    book = await dao.find_one(isbn)
    return BookResponse(book=book)


@router.post("", response_model=BookResponse, status_code=status.HTTP_201_CREATED)
async def create_book(payload: Any = Body(None), dao: BookDAO = Depends(get_book_dao)):
    """Create a book. The body must satisfy the create schema."""
    validation = validate_payload(CreateBookSchema, payload)
    if not validation.valid:
        logger.info("Rejected book creation", errors=validation.errors)
        raise BookValidationError(errors=validation.errors)

    book = await dao.create(validation.payload())
    return BookResponse(book=book)


@router.put("/{isbn}", response_model=BookResponse)
async def update_book(isbn: str, payload: Any = Body(None), dao: BookDAO = Depends(get_book_dao)):
    """
    Update a book. Fields left out of the body keep their stored values.

    The isbn is the resource key and may not appear in the body.
    """
    if isinstance(payload, dict) and "isbn" in payload:
        raise BookValidationError("The isbn not allowed in request body.")

    validation = validate_payload(UpdateBookSchema, payload)
    if not validation.valid:
        logger.info("Rejected book update", isbn=isbn, errors=validation.errors)
        raise BookValidationError(errors=validation.errors)

    book = await dao.update(isbn, validation.payload())
    return BookResponse(book=book)


@router.delete("/{isbn}", response_model=MessageResponse)
async def delete_book(isbn: str, dao: BookDAO = Depends(get_book_dao)):
    """Delete a book by isbn."""
    await dao.remove(isbn)
    return MessageResponse(message="Book deleted")
