"""
Unit tests for the create and update request schemas.
"""

import pytest

from api.schemas import CreateBookSchema, UpdateBookSchema, validate_payload


class TestCreateBookSchema:
    """Test cases for create validation."""

    def test_valid_payload(self, sample_book_data):
        result = validate_payload(CreateBookSchema, sample_book_data)

        assert result.valid
        assert result.errors == []
        assert result.payload() == sample_book_data

    def test_payload_only_contains_supplied_fields(self):
        result = validate_payload(CreateBookSchema, {"isbn": "1", "title": "t"})

        assert result.payload() == {"isbn": "1", "title": "t"}

    def test_missing_required_fields_are_listed(self):
        result = validate_payload(CreateBookSchema, {})

        assert not result.valid
        assert result.data is None
        assert result.payload() == {}
        assert sorted(result.errors) == ["isbn: Field required", "title: Field required"]

    @pytest.mark.parametrize(
        "field, value",
        [
            ("pages", "100"),
            ("pages", 1.5),
            ("pages", -3),
            ("year", "2008"),
            ("year", False),
            ("pages", 2**31),
            ("year", 10**20),
            ("year", -(2**31) - 1),
            ("author", 12),
            ("title", ""),
            ("isbn", ""),
            ("publisher", None),
        ],
    )
    def test_rejects_invalid_values(self, sample_book_data, field, value):
        sample_book_data[field] = value

        result = validate_payload(CreateBookSchema, sample_book_data)

        assert not result.valid
        assert len(result.errors) == 1
        assert result.errors[0].startswith(f"{field}:")

    def test_rejects_non_object(self):
        result = validate_payload(CreateBookSchema, "isbn=1")

        assert not result.valid
        assert result.errors[0].startswith("body:")


class TestUpdateBookSchema:
    """Test cases for update validation."""

    def test_title_only(self):
        result = validate_payload(UpdateBookSchema, {"title": "new"})

        assert result.valid
        assert result.payload() == {"title": "new"}

    def test_isbn_is_not_a_field(self):
        result = validate_payload(UpdateBookSchema, {"title": "new", "isbn": "1"})

        assert not result.valid
        assert result.errors == ["isbn: Extra inputs are not permitted"]

    def test_requires_title(self):
        result = validate_payload(UpdateBookSchema, {"author": "someone"})

        assert not result.valid
        assert result.errors == ["title: Field required"]
