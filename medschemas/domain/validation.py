"""Structured validation outcomes and the package exception hierarchy.

Validating a payload never raises for bad data: callers receive a
``ValidationResult`` carrying either the validated value or every failing
``(field path, message)`` pair. Consumers translate that list into UI or API
errors; this layer does not log it.

Exceptions are reserved for programming and configuration errors (a schema
derivation that names a missing field, an unknown entity name, ...).

Architecture:
    - Pure domain code; pydantic's ValidationError is translated here and does
      not leak to consumers that use ``validate_payload``
    - Validation is atomic: a failure never returns a partially defaulted value
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Generic, Optional, TypeVar, Union

from pydantic import BaseModel, ValidationError as PydanticValidationError

T = TypeVar("T")

PathItem = Union[str, int]


# ============================================================================
# Error taxonomy
# ============================================================================

class ErrorKind(str, Enum):
    """Category of a field error."""

    SHAPE = "shape"  # wrong primitive type or missing value
    CONSTRAINT = "constraint"  # right type, outside bounds / enum / pattern
    CROSS_FIELD = "cross_field"
    IMMUTABLE = "immutable"
    UNKNOWN_FIELD = "unknown_field"


CROSS_FIELD_ERROR_TYPES = frozenset({"password_mismatch"})
IMMUTABLE_ERROR_TYPE = "immutable_field"
LEGACY_CONFLICT_ERROR_TYPE = "legacy_conflict"

_SHAPE_ERROR_TYPES = frozenset({
    "missing",
    "model_type",
    "model_attributes_type",
    "dict_type",
    "list_type",
    "set_type",
    "frozen_set_type",
    "string_type",
    "int_type",
    "int_parsing",
    "int_from_float",
    "float_type",
    "float_parsing",
    "bool_type",
    "bool_parsing",
    "datetime_type",
    "datetime_parsing",
    "datetime_from_date_parsing",
    "date_type",
    "date_parsing",
    "none_required",
    "union_tag_invalid",
    "union_tag_not_found",
    "is_instance_of",
})


def classify_error(error_type: str) -> ErrorKind:
    """Map a pydantic (or custom) error type code to an :class:`ErrorKind`."""
    if error_type in CROSS_FIELD_ERROR_TYPES:
        return ErrorKind.CROSS_FIELD
    if error_type == IMMUTABLE_ERROR_TYPE:
        return ErrorKind.IMMUTABLE
    if error_type == "extra_forbidden":
        return ErrorKind.UNKNOWN_FIELD
    if error_type in _SHAPE_ERROR_TYPES:
        return ErrorKind.SHAPE
    return ErrorKind.CONSTRAINT


@dataclass(frozen=True)
class FieldError:
    """One validation failure attached to a field path.

    Attributes:
        path: Location of the failing value, by wire key (list indexes are ints)
        message: Human-readable message
        error_type: Machine-readable error code (pydantic type or custom code)
        kind: Taxonomy category derived from ``error_type``
    """

    path: tuple[PathItem, ...]
    message: str
    error_type: str
    kind: ErrorKind

    @property
    def location(self) -> str:
        """Dotted rendering of ``path`` (``registeredPatients.0.status``)."""
        return ".".join(str(part) for part in self.path)

    @classmethod
    def from_pydantic(cls, error: dict) -> "FieldError":
        error_type = error["type"]
        return cls(
            path=tuple(error["loc"]),
            message=error["msg"],
            error_type=error_type,
            kind=classify_error(error_type),
        )


# ============================================================================
# Result type
# ============================================================================

@dataclass(frozen=True)
class ValidationResult(Generic[T]):
    """Result of validating a payload against a schema.

    Attributes:
        success: True if the payload satisfied the schema
        value: The validated (normalized) model instance; None on failure
        errors: Every field error found; empty on success

    Example:
        ```python
        result = validate_payload(PatientForm, body)
        if result.is_failure():
            return {"errors": result.error_map()}
        save(result.value)
        ```
    """

    success: bool
    value: Optional[T] = None
    errors: tuple[FieldError, ...] = field(default_factory=tuple)

    @classmethod
    def success_result(cls, value: T) -> "ValidationResult[T]":
        return cls(success=True, value=value, errors=())

    @classmethod
    def failure_result(cls, errors: list[FieldError]) -> "ValidationResult[T]":
        return cls(success=False, value=None, errors=tuple(errors))

    def is_success(self) -> bool:
        return self.success

    def is_failure(self) -> bool:
        return not self.success

    def error_map(self) -> dict[str, list[str]]:
        """Group error messages by dotted field location."""
        grouped: dict[str, list[str]] = {}
        for error in self.errors:
            grouped.setdefault(error.location, []).append(error.message)
        return grouped

    def errors_at(self, *path: PathItem) -> list[FieldError]:
        """Return the errors located exactly at ``path``."""
        return [error for error in self.errors if error.path == tuple(path)]


def validate_payload(schema: type[BaseModel], payload: Any) -> ValidationResult:
    """Validate ``payload`` against ``schema`` and return a structured result.

    Parameters:
        schema: Any schema class of the package (canonical or derived)
        payload: Decoded JSON value (normally a dict) or a model instance

    Returns:
        ValidationResult with the validated instance, or with every field error
    """
    try:
        value = schema.model_validate(payload)
    except PydanticValidationError as exc:
        return ValidationResult.failure_result(
            [FieldError.from_pydantic(error) for error in exc.errors()]
        )
    return ValidationResult.success_result(value)


# ============================================================================
# Custom Exception Hierarchy
# ============================================================================

class SchemaError(Exception):
    """Base exception for schema definition and lookup errors.

    Raised for programming mistakes, never for invalid payloads.
    """


class SchemaDefinitionError(SchemaError):
    """Raised when a derivation refers to fields the source schema lacks."""

    def __init__(self, message: str, model_name: str, fields: list[str]):
        super().__init__(message)
        self.model_name = model_name
        self.fields = fields


class UnknownEntityError(SchemaError, KeyError):
    """Raised when the registry has no entity with the requested name."""

    def __init__(self, name: str):
        super().__init__(f"Unknown entity: {name!r}")
        self.name = name

    def __str__(self) -> str:
        return self.args[0]


class UnknownVariantError(SchemaError, KeyError):
    """Raised when an entity has no variant with the requested kind."""

    def __init__(self, entity: str, variant: str, available: list[str]):
        super().__init__(
            f"Entity {entity!r} has no variant {variant!r}. Available: {available}"
        )
        self.entity = entity
        self.variant = variant
        self.available = available

    def __str__(self) -> str:
        return self.args[0]


class LegacyPayloadError(SchemaError):
    """Raised when a legacy key and its canonical key carry different values.

    Attributes:
        legacy_key: Wire key in the legacy vocabulary (e.g. ``client``)
        canonical_key: Wire key it maps to (e.g. ``organization``)
        path: Location of the object holding both keys
    """

    def __init__(self, legacy_key: str, canonical_key: str, path: tuple[PathItem, ...] = ()):
        super().__init__(
            f"Conflicting values for legacy key {legacy_key!r} and {canonical_key!r}"
        )
        self.legacy_key = legacy_key
        self.canonical_key = canonical_key
        self.path = path

    def to_field_error(self) -> FieldError:
        return FieldError(
            path=self.path + (self.legacy_key,),
            message=str(self),
            error_type=LEGACY_CONFLICT_ERROR_TYPE,
            kind=classify_error(LEGACY_CONFLICT_ERROR_TYPE),
        )
