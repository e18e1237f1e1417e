"""
API models and schemas for the FastAPI application.
"""

from datetime import datetime
from typing import List, Optional

from pydantic import BaseModel, Field, ValidationInfo, field_validator

from storage.tables import INTEGER_MAX, INTEGER_MIN


class Book(BaseModel):
    """Book record as stored and returned by the API."""
    isbn: str = Field(..., description="International Standard Book Number")
    amazon_url: Optional[str] = Field(None, description="Link to the book on Amazon")
    author: Optional[str] = Field(None, description="Book author")
    language: Optional[str] = Field(None, description="Language the book is written in")
    pages: Optional[int] = Field(None, description="Number of pages")
    publisher: Optional[str] = Field(None, description="Publisher name")
    title: str = Field(..., description="Book title")
    year: Optional[int] = Field(None, description="Publication year")

    model_config = {
        "json_schema_extra": {
            "example": {
                "isbn": "0691161518",
                "amazon_url": "http://a.co/eobPtX2",
                "author": "Matthew Lane",
                "language": "english",
                "pages": 264,
                "publisher": "Princeton University Press",
                "title": "Power-Up: Unlocking the Hidden Mathematics in Video Games",
                "year": 2017,
            }
        }
    }


class BookResponse(BaseModel):
    """Envelope for a single book."""
    book: Book


class BookListResponse(BaseModel):
    """Envelope for a list of books."""
    books: List[Book] = Field(..., description="List of books ordered by title")


class MessageResponse(BaseModel):
    """Plain message envelope."""
    message: str


class BookQueryParams(BaseModel):
    """Query parameters for book listing. Unset parameters do not filter."""
    title: Optional[str] = Field(None, description="Case-insensitive title substring")
    author: Optional[str] = Field(None, description="Case-insensitive author substring")
    publisher: Optional[str] = Field(None, description="Case-insensitive publisher substring")
    language: Optional[str] = Field(None, description="Language, case-insensitive exact match")
    pages: Optional[int] = Field(None, ge=1, le=INTEGER_MAX, description="Exact page count")
    year: Optional[int] = Field(None, ge=INTEGER_MIN, le=INTEGER_MAX, description="Exact publication year")
    min_pages: Optional[int] = Field(None, ge=1, le=INTEGER_MAX, description="Minimum page count")
    max_pages: Optional[int] = Field(None, ge=1, le=INTEGER_MAX, description="Maximum page count")
    min_year: Optional[int] = Field(None, ge=INTEGER_MIN, le=INTEGER_MAX, description="Earliest publication year")
    max_year: Optional[int] = Field(None, ge=INTEGER_MIN, le=INTEGER_MAX, description="Latest publication year")

    @field_validator('max_pages')
    @classmethod
    def validate_pages_range(cls, v, info: ValidationInfo):
        """Validate that max_pages is not below min_pages."""
        min_pages = info.data.get('min_pages')
        if v is not None and min_pages is not None and v < min_pages:
            raise ValueError('max_pages must be greater than or equal to min_pages')
        return v

    @field_validator('max_year')
    @classmethod
    def validate_year_range(cls, v, info: ValidationInfo):
        """Validate that max_year is not below min_year."""
        min_year = info.data.get('min_year')
        if v is not None and min_year is not None and v < min_year:
            raise ValueError('max_year must be greater than or equal to min_year')
        return v


class ErrorDetail(BaseModel):
    """Body of an error response."""
    message: str = Field(..., description="Error message")
    status: int = Field(..., description="HTTP status code")
    errors: Optional[List[str]] = Field(None, description="Individual validation failures")


class ErrorResponse(BaseModel):
    """Error response model."""
    error: ErrorDetail


class HealthResponse(BaseModel):
    """Health check response model."""
    status: str = Field(..., description="Service status")
    timestamp: datetime = Field(..., description="Current timestamp")
    version: str = Field(..., description="API version")
    database_status: str = Field(..., description="Database connection status")
