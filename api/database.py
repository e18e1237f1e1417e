"""
Data access layer for books.
"""

from typing import Any, Dict, List, Optional

import structlog
from sqlalchemy import delete, func, insert, select, update
from sqlalchemy.engine import RowMapping
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncConnection, AsyncEngine

from api.errors import BookNotFoundError, StorageError
from api.models import Book, BookQueryParams
from storage.tables import UPDATABLE_COLUMNS, books_table

logger = structlog.get_logger(__name__)


class BookDAO:
    """
    Stateless facade over the ``books`` table.

    Every call checks out a connection from the engine pool, runs inside a
    single transaction and maps rows to ``Book`` records. Values are always
    bound as statement parameters.
    """

    def __init__(self, engine: AsyncEngine):
        self.engine = engine

    @staticmethod
    def _to_book(row: RowMapping) -> Book:
        return Book(**dict(row))

    async def _fetch(self, conn: AsyncConnection, isbn: str) -> Optional[RowMapping]:
        stmt = select(books_table).where(books_table.c.isbn == isbn)
        result = await conn.execute(stmt)
        return result.mappings().first()

    async def find_all(self, filters: Optional[BookQueryParams] = None) -> List[Book]:
        """
        Get books ordered by title, narrowed by any filters supplied.

        Args:
            filters: Query parameters; unset fields do not filter

        Returns:
            List of matching books
        """
        stmt = select(books_table)

        if filters is not None:
            c = books_table.c
            if filters.title:
                stmt = stmt.where(c.title.icontains(filters.title, autoescape=True))
            if filters.author:
                stmt = stmt.where(c.author.icontains(filters.author, autoescape=True))
            if filters.publisher:
                stmt = stmt.where(c.publisher.icontains(filters.publisher, autoescape=True))
            if filters.language:
                stmt = stmt.where(func.lower(c.language) == filters.language.lower())
            if filters.pages is not None:
                stmt = stmt.where(c.pages == filters.pages)
            if filters.year is not None:
                stmt = stmt.where(c.year == filters.year)
            if filters.min_pages is not None:
                stmt = stmt.where(c.pages >= filters.min_pages)
            if filters.max_pages is not None:
                stmt = stmt.where(c.pages <= filters.max_pages)
            if filters.min_year is not None:
                stmt = stmt.where(c.year >= filters.min_year)
            if filters.max_year is not None:
                stmt = stmt.where(c.year <= filters.max_year)

        stmt = stmt.order_by(books_table.c.title.asc(), books_table.c.isbn.asc())

        try:
            async with self.engine.connect() as conn:
                result = await conn.execute(stmt)
                books = [self._to_book(row) for row in result.mappings()]
        except SQLAlchemyError as e:
            logger.error("Failed to get books", error=str(e))
            raise StorageError("Failed to retrieve books") from e

        logger.debug("Retrieved books", count=len(books))
        return books

    async def find_one(self, isbn: str) -> Book:
        """
        Get a single book by isbn.

        Raises:
            BookNotFoundError: No book has this isbn
        """
        try:
            async with self.engine.connect() as conn:
                row = await self._fetch(conn, isbn)
        except SQLAlchemyError as e:
            logger.error("Failed to get book", isbn=isbn, error=str(e))
            raise StorageError("Failed to retrieve book") from e

        if row is None:
            logger.warning("Book not found", isbn=isbn)
            raise BookNotFoundError(isbn)
        return self._to_book(row)

    async def create(self, data: Dict[str, Any]) -> Book:
        """
        Insert a new book and return the stored record.

        Args:
            data: Book fields; must include isbn and title

        Raises:
            StorageError: Insert failed, e.g. the isbn already exists
        """
        values = {name: data.get(name) for name in books_table.c.keys()}

        try:
            async with self.engine.begin() as conn:
                await conn.execute(insert(books_table).values(**values))
                row = await self._fetch(conn, values["isbn"])
        except SQLAlchemyError as e:
            logger.error("Failed to insert book", isbn=values["isbn"], error=str(e))
            raise StorageError("Failed to create book") from e

        logger.info("Book created", isbn=values["isbn"])
        return self._to_book(row)

    async def update(self, isbn: str, data: Dict[str, Any]) -> Book:
        """
        Overlay supplied fields onto an existing book.

        The current row is read and merged with ``data`` inside the same
        transaction, then written back with one statement covering every
        updatable column, so omitted fields keep their stored values.

        Args:
            isbn: Key of the book to update
            data: Fields to change; ``isbn`` is ignored

        Raises:
            BookNotFoundError: No book has this isbn
        """
        try:
            async with self.engine.begin() as conn:
                current = await self._fetch(conn, isbn)
                if current is None:
                    logger.warning("Book not found for update", isbn=isbn)
                    raise BookNotFoundError(isbn)

                merged = dict(current)
                merged.update({k: v for k, v in data.items() if k in UPDATABLE_COLUMNS})

                stmt = (
                    update(books_table)
                    .where(books_table.c.isbn == isbn)
                    .values({name: merged[name] for name in UPDATABLE_COLUMNS})
                )
                await conn.execute(stmt)
        except SQLAlchemyError as e:
            logger.error("Failed to update book", isbn=isbn, error=str(e))
            raise StorageError("Failed to update book") from e

        logger.info("Book updated", isbn=isbn, fields=sorted(k for k in data if k in UPDATABLE_COLUMNS))
        return Book(**merged)

    async def remove(self, isbn: str) -> None:
        """
        Delete a book by isbn.

        Raises:
            BookNotFoundError: Nothing was deleted
        """
        try:
            async with self.engine.begin() as conn:
                result = await conn.execute(delete(books_table).where(books_table.c.isbn == isbn))
                deleted = result.rowcount
        except SQLAlchemyError as e:
            logger.error("Failed to delete book", isbn=isbn, error=str(e))
            raise StorageError("Failed to delete book") from e

        if deleted == 0:
            logger.warning("Book not found for deletion", isbn=isbn)
            raise BookNotFoundError(isbn)

        logger.info("Book deleted", isbn=isbn)
