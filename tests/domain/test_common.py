"""Tests for the shared primitive schemas."""

from datetime import datetime

import pytest
from pydantic import TypeAdapter, ValidationError

from medschemas.domain.common import (
    ApiResponse,
    AuditedEntity,
    DateString,
    ObjectId,
    Pagination,
    Reference,
)
from medschemas.domain.company import Company

object_id = TypeAdapter(ObjectId)
date_string = TypeAdapter(DateString)


class TestObjectId:
    """Test suite for the 24-character identifier."""

    @pytest.mark.parametrize("value", ["0" * 24, "x" * 24, "!" * 24, "64b7f0c2e4b0a1a2b3c4d5e6"])
    def test_accepts_any_24_characters(self, value):
        """Test that content is not checked, only length."""
        assert object_id.validate_python(value) == value

    @pytest.mark.parametrize("value", ["", "a" * 23, "a" * 25])
    def test_rejects_other_lengths(self, value):
        """Test that identifiers shorter or longer than 24 characters fail."""
        with pytest.raises(ValidationError):
            object_id.validate_python(value)

    def test_entity_identifier_length(self, org_id):
        """Test that an entity's _id is checked the same way."""
        with pytest.raises(ValidationError) as exc_info:
            Company.model_validate({"_id": "abc", "nombre": "Acme", "organization": org_id})
        assert exc_info.value.errors()[0]["loc"] == ("_id",)


class TestDateString:
    """Test suite for ISO-8601 / YYYY-MM-DD strings."""

    @pytest.mark.parametrize("value", [
        "2024-01-15",
        "2024-02-29",
        "2024-01-15T10:30",
        "2024-01-15T10:30:00Z",
        "2024-01-15T10:30:00.123-03:00",
    ])
    def test_accepts_dates_and_datetimes(self, value):
        """Test that valid values are kept as strings."""
        assert date_string.validate_python(value) == value

    @pytest.mark.parametrize("value", [
        "2023-02-29",
        "2024-13-01",
        "15/01/2024",
        "2024-01-15 10:30:00",
        "2024-01-15T25:00:00Z",
        "",
        "2024-01-15\n",
        "2024-01-01T10:00:00Z\n",
        "٢٠٢٤-01-15",
    ])
    def test_rejects_malformed_values(self, value):
        """Test that non-ISO formats and impossible dates fail."""
        with pytest.raises(ValidationError) as exc_info:
            date_string.validate_python(value)
        assert exc_info.value.errors()[0]["type"] == "date_string"


class TestPagination:
    """Test suite for the pagination block."""

    def test_defaults(self):
        """Test that page and limit default to 1 and 10."""
        pagination = Pagination()
        assert pagination.page == 1
        assert pagination.limit == 10
        assert pagination.total is None

    @pytest.mark.parametrize("payload", [
        {"page": 0},
        {"limit": 0},
        {"limit": 101},
        {"total": -1},
        {"totalPages": -1},
    ])
    def test_rejects_out_of_range(self, payload):
        """Test page >= 1, 1 <= limit <= 100 and non-negative totals."""
        with pytest.raises(ValidationError):
            Pagination.model_validate(payload)

    def test_wire_keys(self):
        """Test that totalPages is the wire key."""
        pagination = Pagination.model_validate({"page": 2, "limit": 20, "total": 45, "totalPages": 3})
        assert pagination.model_dump(by_alias=True) == {
            "page": 2,
            "limit": 20,
            "total": 45,
            "totalPages": 3,
        }


class TestAuditedEntity:
    """Test suite for the authoring mixin."""

    def test_modified_by_defaults_to_empty(self):
        """Test that the modification history defaults to an empty list."""
        assert AuditedEntity().modified_by == []

    def test_modified_by_order_is_preserved(self, make_id):
        """Test that modification records are neither reordered nor pruned."""
        history = [
            {"user": make_id(9), "updatedAt": "2024-03-01T10:00:00"},
            {"user": make_id(5), "updatedAt": "2024-01-01T10:00:00", "action": "alta"},
            {"user": make_id(9), "updatedAt": "2024-03-01T10:00:00"},
        ]
        entity = AuditedEntity.model_validate({"modifiedBy": history})

        assert [record.user for record in entity.modified_by] == [make_id(9), make_id(5), make_id(9)]
        assert entity.modified_by[1].action == "alta"
        assert entity.modified_by[0].updated_at == datetime(2024, 3, 1, 10, 0)


class TestReference:
    """Test suite for the bare-identifier reference."""

    def test_validates_from_bare_string(self, org_id):
        """Test that a bare identifier becomes a Reference."""
        reference = Reference.model_validate(org_id)
        assert reference.id == org_id

    def test_serializes_to_bare_string(self, org_id):
        """Test that a Reference dumps back to the bare identifier."""
        assert Reference.model_validate(org_id).model_dump() == org_id

    def test_rejects_bad_identifier(self):
        """Test that the identifier rules apply to references."""
        with pytest.raises(ValidationError):
            Reference.model_validate("short")


class TestApiResponse:
    """Test suite for the response envelope."""

    def test_success_envelope(self):
        """Test {success, data} with optional error and message."""
        response = ApiResponse[int].model_validate({"success": True, "data": 5})
        assert response.data == 5
        assert response.error is None
        assert response.message is None

    def test_failure_envelope(self):
        """Test that error and message travel alongside the payload."""
        response = ApiResponse[list[str]](success=False, data=[], error="not_found", message="No existe")
        assert response.model_dump() == {
            "success": False,
            "data": [],
            "error": "not_found",
            "message": "No existe",
        }

    def test_data_is_validated(self):
        """Test that the payload type parameter is enforced."""
        with pytest.raises(ValidationError):
            ApiResponse[int].model_validate({"success": True, "data": "many"})
