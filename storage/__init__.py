"""
Relational storage layer for the Books API.

Holds the table definitions and the async engine manager used by the
data access object in ``api.database``.
"""
