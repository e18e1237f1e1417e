"""
SQLAlchemy table definitions for book storage.
"""

from sqlalchemy import Column, Integer, MetaData, Table, Text

metadata = MetaData()

books_table = Table(
    "books",
    metadata,
    Column("isbn", Text, primary_key=True),
    Column("amazon_url", Text),
    Column("author", Text),
    Column("language", Text),
    Column("pages", Integer),
    Column("publisher", Text),
    Column("title", Text, nullable=False),
    Column("year", Integer),
)

# Columns an update may overwrite; isbn is the immutable key.
UPDATABLE_COLUMNS = (
    "title",
    "author",
    "language",
    "pages",
    "publisher",
    "amazon_url",
    "year",
)

# Range of the Integer columns (32-bit on PostgreSQL).
INTEGER_MIN = -(2**31)
INTEGER_MAX = 2**31 - 1
