"""Domain layer for medschemas.

This package holds the canonical entity schemas, their derived variants and the
registry that maps entity names to them. Everything here is pure pydantic with
no I/O.
"""

from .validation import (
    ErrorKind,
    FieldError,
    ValidationResult,
    validate_payload,
)
from .organization import Organization
from .team import Team
from .role import Role
from .user import User, UserPublic
from .invitation import Invitation, Notification
from .company import Company
from .patient import Patient
from .clinical_record import ClinicalRecord
from .scheduled_exam import ScheduledExam
from .audit import AuditLog
from .registry import REGISTRY, EntitySchemas, SchemaRegistry

__all__ = [
    "ErrorKind",
    "FieldError",
    "ValidationResult",
    "validate_payload",
    "Organization",
    "Team",
    "Role",
    "User",
    "UserPublic",
    "Invitation",
    "Notification",
    "Company",
    "Patient",
    "ClinicalRecord",
    "ScheduledExam",
    "AuditLog",
    "REGISTRY",
    "EntitySchemas",
    "SchemaRegistry",
]
