"""
FastAPI dependencies.
"""

from fastapi import Request

from api.database import BookDAO
from api.errors import StorageError


def get_book_dao(request: Request) -> BookDAO:
    """Build a BookDAO on the engine opened by the application lifespan."""
    db_manager = getattr(request.app.state, "db_manager", None)
    if db_manager is None or db_manager.engine is None:
        raise StorageError("Database service not available")
    return BookDAO(db_manager.engine)
