"""Primitive schemas shared by every entity module.

This module defines the atomic building blocks the entity schemas are composed
from: the identifier format, date strings, pagination, the authoring (audit
trail) mixin, the polymorphic bare reference and the response envelope that
crosses the boundary between this package and its consumers.

Architecture:
    - Pure domain models with zero infrastructure dependencies
    - Entity modules import from here; nothing here imports an entity module
    - Models are immutable and validated before use
"""

import re
from datetime import date, datetime
from typing import Annotated, Any, Generic, Optional, TypeVar

from pydantic import (
    AfterValidator,
    BaseModel,
    ConfigDict,
    Field,
    StringConstraints,
    model_serializer,
    model_validator,
)
from pydantic.alias_generators import to_camel
from pydantic_core import PydanticCustomError

from medschemas.domain.text import OptionalText

T = TypeVar("T")

OBJECT_ID_LENGTH = 24

ObjectId = Annotated[
    str,
    StringConstraints(min_length=OBJECT_ID_LENGTH, max_length=OBJECT_ID_LENGTH),
]
"""Opaque 24-character identifier; the only foreign-key representation.

Only the length is checked. Referential integrity is the consumer's concern.
"""

_BARE_DATE = re.compile(r"[0-9]{4}-[0-9]{2}-[0-9]{2}")
_ISO_DATETIME = re.compile(
    r"([0-9]{4}-[0-9]{2}-[0-9]{2})T([0-9]{2}):([0-9]{2})"
    r"(?::([0-9]{2})(?:\.[0-9]+)?)?(?:Z|[+-][0-9]{2}:?[0-9]{2})?"
)


def is_calendar_date(text: str) -> bool:
    """True if ``text`` is a ``YYYY-MM-DD`` string naming a real calendar day."""
    if not _BARE_DATE.fullmatch(text):
        return False
    try:
        date.fromisoformat(text)
    except ValueError:
        return False
    return True


def is_iso_datetime(text: str) -> bool:
    """True if ``text`` is an ISO-8601 date-time with a real day and clock time."""
    match = _ISO_DATETIME.fullmatch(text)
    if match is None or not is_calendar_date(match.group(1)):
        return False
    hour, minute, second = match.group(2), match.group(3), match.group(4) or "00"
    return int(hour) < 24 and int(minute) < 60 and int(second) < 60


def _check_date_string(value: str) -> str:
    if is_calendar_date(value) or is_iso_datetime(value):
        return value
    raise PydanticCustomError(
        "date_string",
        "Debe ser una fecha ISO-8601 o con formato YYYY-MM-DD",
    )


DateString = Annotated[str, AfterValidator(_check_date_string)]
"""ISO-8601 date-time string or bare ``YYYY-MM-DD``; the value stays a string."""

Count = Annotated[int, Field(strict=True, ge=0)]
"""Non-negative tally; booleans and numeric strings are shape errors."""

PageNumber = Annotated[int, Field(ge=1)]
PageSize = Annotated[int, Field(ge=1, le=100)]

DEFAULT_PAGE_SIZE = 10
ADMIN_PAGE_SIZE = 50


class EntityModel(BaseModel):
    """Base class for every schema in the package.

    Wire keys are camelCase (explicit aliases override the generator where the
    original contract uses Spanish keys). Unknown keys are silently dropped.
    """

    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        frozen=True,
        extra="ignore",
    )


class StrictEntityModel(EntityModel):
    """Base class for compliance-sensitive schemas.

    Only wire keys are accepted: an unknown key, or a Python field name in
    place of its alias, is reported as an unknown field.
    """

    model_config = ConfigDict(extra="forbid", populate_by_name=False)


def is_strict(model: type[BaseModel]) -> bool:
    return model.model_config.get("extra") == "forbid"


class PageQuery(EntityModel):
    """Page/limit pair accepted by every filter schema.

    Filters subclass this; those listing admin data override ``limit`` with a
    default of ``ADMIN_PAGE_SIZE``.
    """

    page: PageNumber = Field(default=1, description="1-based page number")
    limit: PageSize = Field(default=DEFAULT_PAGE_SIZE, description="Page size (1-100)")


class Pagination(PageQuery):
    """Pagination block. ``total`` and ``totalPages`` are producer-supplied."""

    total: Optional[int] = Field(None, ge=0, description="Total number of records")
    total_pages: Optional[int] = Field(None, ge=0, description="Total number of pages")


class ModificationRecord(EntityModel):
    """One entry in an entity's append-only modification history."""

    user: ObjectId = Field(..., description="User who made the change")
    updated_at: datetime = Field(..., description="When the change happened")
    action: OptionalText = Field(None, description="Free-text action label")


class AuditedEntity(EntityModel):
    """Authoring fields mixed into nearly every entity.

    The backend fills these; form and update variants exclude them. The
    ``modified_by`` sequence is kept in the order received.
    """

    created_by: Optional[ObjectId] = Field(None, description="Creator user id")
    updated_by: Optional[ObjectId] = Field(None, description="Last updater user id")
    modified_by: list[ModificationRecord] = Field(
        default_factory=list,
        description="Append-only modification history",
    )
    created_at: Optional[datetime] = Field(None, description="Creation timestamp")
    updated_at: Optional[datetime] = Field(None, description="Last update timestamp")


class Reference(EntityModel):
    """Bare-identifier variant of a polymorphic reference.

    Validates from a bare 24-character string and serializes back to it, so a
    reference round-trips through JSON unchanged. The populated variant is an
    entity-specific summary model (see :mod:`medschemas.domain.user`).
    """

    id: ObjectId = Field(..., alias="_id", description="Referenced entity id")

    @model_validator(mode="before")
    @classmethod
    def from_bare_id(cls, data: Any) -> Any:
        if isinstance(data, str):
            return {"_id": data}
        return data

    @model_serializer
    def as_bare_id(self) -> str:
        return self.id


class ApiResponse(EntityModel, Generic[T]):
    """Transport envelope: ``{success, data, error?, message?}``."""

    success: bool = Field(..., description="Whether the operation succeeded")
    data: T = Field(..., description="Operation payload")
    error: Optional[str] = Field(None, description="Error description on failure")
    message: Optional[str] = Field(None, description="Human-readable message")
