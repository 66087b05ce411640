"""Free-text normalization applied by the entity schemas.

Optional free-text fields follow one contract: surrounding whitespace is
trimmed and a value that is blank after trimming becomes ``None``. Downstream
presence and uniqueness checks therefore never see whitespace-only input as a
real value.

The helpers here are exposed as ``Annotated`` types so the rules travel with
the field annotation into every derived schema.
"""

import re
from functools import partial
from typing import Annotated, Any, Optional

from pydantic import AfterValidator, BeforeValidator, EmailStr
from pydantic_core import PydanticCustomError

_DIGITS = re.compile(r"[0-9]+", re.ASCII)


def blank_to_none(value: Any) -> Any:
    """Trim strings and coerce blank ones to ``None``; other values pass through."""
    if isinstance(value, str):
        return value.strip() or None
    return value


def strip_text(value: Any) -> Any:
    if isinstance(value, str):
        return value.strip()
    return value


def _require_non_empty(value: str, message: str) -> str:
    if not value:
        raise PydanticCustomError("required", message)
    return value


def required_text(message: str) -> Any:
    """Build a trimmed, non-empty string type that fails with ``message``."""
    return Annotated[
        str,
        BeforeValidator(strip_text),
        AfterValidator(partial(_require_non_empty, message=message)),
    ]


def non_empty(message: str) -> Any:
    """Build a non-empty string type that keeps whitespace (for secrets)."""
    return Annotated[str, AfterValidator(partial(_require_non_empty, message=message))]


def _require_min_length(value: str, length: int, message: str) -> str:
    if len(value) < length:
        raise PydanticCustomError("too_short", message)
    return value


def min_length_text(length: int, message: str) -> Any:
    """Build an untrimmed string type of at least ``length`` characters."""
    return Annotated[
        str,
        AfterValidator(partial(_require_min_length, length=length, message=message)),
    ]


def _check_digits(value: str) -> str:
    if not value:
        raise PydanticCustomError("required", "DNI es requerido")
    if not _DIGITS.fullmatch(value):
        raise PydanticCustomError("digits_only", "DNI debe contener solo números")
    return value


OptionalText = Annotated[Optional[str], BeforeValidator(blank_to_none)]
"""Trimmed optional text; blank input becomes ``None``."""

OptionalEmail = Annotated[Optional[EmailStr], BeforeValidator(blank_to_none)]
"""Optional email address; blank input becomes ``None``."""

NationalId = Annotated[str, BeforeValidator(strip_text), AfterValidator(_check_digits)]
"""Required national id (DNI): trimmed, digits only."""
