"""
Request body schemas for creating and updating books.

Bodies are checked strictly: integers must be JSON integers, strings must
be JSON strings, explicit nulls and unknown fields are rejected. Validation
never raises; it returns a ``ValidationResult`` the caller acts on.
"""

from dataclasses import dataclass, field
from typing import Any, Dict, Iterable, List, Optional, Type

from pydantic import BaseModel, ConfigDict, Field, ValidationError

from storage.tables import INTEGER_MAX, INTEGER_MIN


class UpdateBookSchema(BaseModel):
    """Fields accepted by ``PUT /books/{isbn}``. ``isbn`` is not updatable."""

    model_config = ConfigDict(extra="forbid", strict=True)

    # Optional fields default to None but an explicit null is still rejected,
    # so a stored value can never be cleared by accident.
    amazon_url: str = Field(None, description="Link to the book on Amazon")
    author: str = Field(None, description="Book author")
    language: str = Field(None, description="Language the book is written in")
    pages: int = Field(None, gt=0, le=INTEGER_MAX, description="Number of pages")
    publisher: str = Field(None, description="Publisher name")
    title: str = Field(..., min_length=1, description="Book title")
    year: int = Field(None, ge=INTEGER_MIN, le=INTEGER_MAX, description="Publication year")


class CreateBookSchema(UpdateBookSchema):
    """Fields accepted by ``POST /books``."""

    isbn: str = Field(..., min_length=1, description="International Standard Book Number")


@dataclass
class ValidationResult:
    """Outcome of validating a request body against a schema."""

    valid: bool
    errors: List[str] = field(default_factory=list)
    data: Optional[BaseModel] = None

    def payload(self) -> Dict[str, Any]:
        """Fields the caller actually supplied, in schema order."""
        if self.data is None:
            return {}
        return self.data.model_dump(exclude_unset=True)


def format_errors(errors: Iterable[Dict[str, Any]]) -> List[str]:
    """Render pydantic error entries as ``"<field path>: <reason>"`` strings."""
    messages = []
    for error in errors:
        path = ".".join(str(part) for part in error["loc"]) or "body"
        messages.append(f"{path}: {error['msg']}")
    return messages


def validate_payload(schema: Type[BaseModel], payload: Any) -> ValidationResult:
    """
    Validate a decoded JSON body against a schema.

    Args:
        schema: Schema class to validate against
        payload: Decoded request body

    Returns:
        ValidationResult with the cleaned model or the violation messages
    """
    try:
        data = schema.model_validate(payload)
    except ValidationError as exc:
        return ValidationResult(valid=False, errors=format_errors(exc.errors()))
    return ValidationResult(valid=True, data=data)
