"""Compliance audit-log schemas.

Audit logs are append-only; archiving is the only lifecycle transition. Every
schema in this module is strict: an undocumented key, at any nesting level, is
a validation error rather than silently dropped.

Security Impact:
    - ``ipAddress`` is mandatory on every entry
    - ``patientId``, ``businessAssociate`` and ``purpose`` support disclosure
      accounting for PHI access
    - ``oldValues``/``newValues`` may hold PHI; consumers must not log them
"""

from datetime import datetime
from typing import Any, Optional

from pydantic import ConfigDict, Field

from medschemas.domain.common import (
    ADMIN_PAGE_SIZE,
    Count,
    DateString,
    ObjectId,
    PageQuery,
    PageSize,
    StrictEntityModel,
)
from medschemas.domain.derivation import document_variant, form_variant
from medschemas.domain.enums import AuditAction, AuditResource, AuditSeverity, SortOrder
from medschemas.domain.text import OptionalText, required_text

AuditDescription = required_text("Descripción es requerida")
IpAddress = required_text("Dirección IP es requerida")


class GeoLocation(StrictEntityModel):
    country: OptionalText = None
    region: OptionalText = None
    city: OptionalText = None
    latitude: Optional[float] = Field(None, ge=-90, le=90)
    longitude: Optional[float] = Field(None, ge=-180, le=180)


class DeviceInfo(StrictEntityModel):
    user_agent: OptionalText = None
    browser: OptionalText = None
    os: OptionalText = None
    device: OptionalText = None


class AuditLog(StrictEntityModel):
    """Canonical audit-log entry."""

    id: Optional[ObjectId] = Field(None, alias="_id", description="Audit entry id")

    action: AuditAction = Field(..., description="What happened")
    resource: AuditResource = Field(..., description="Kind of resource affected")
    resource_id: OptionalText = Field(None, description="Identifier of the affected resource")
    description: AuditDescription = Field(..., description="Human-readable description")

    user_id: Optional[ObjectId] = Field(None, description="Acting user")
    user_name: OptionalText = Field(None, description="Acting user's name at the time")
    organization: Optional[ObjectId] = Field(None, description="Organization context")

    timestamp: datetime = Field(default_factory=datetime.now, description="When it happened")
    ip_address: IpAddress = Field(..., description="Client IP address")
    location: Optional[GeoLocation] = None
    device: Optional[DeviceInfo] = None
    session_id: OptionalText = None

    severity: AuditSeverity = Field(default=AuditSeverity.LOW)

    metadata: Optional[dict[str, Any]] = Field(None, description="Free-form context")
    old_values: Optional[dict[str, Any]] = Field(None, description="State before a modification")
    new_values: Optional[dict[str, Any]] = Field(None, description="State after a modification")

    patient_id: Optional[ObjectId] = Field(None, description="Patient whose data was touched")
    business_associate: OptionalText = Field(None, description="Third party the data went to")
    purpose: OptionalText = Field(None, description="Stated purpose of the disclosure")

    success: bool = Field(default=True, description="Whether the action succeeded")
    error_message: OptionalText = None

    retention_date: Optional[datetime] = Field(None, description="Earliest purge date")
    archived: bool = Field(default=False, description="Moved to cold storage")


CreateAuditLog = form_variant(
    AuditLog,
    name="CreateAuditLog",
    tenant=["organization"],
    generated=["archived"],
)
AuditLogDocument = document_variant(AuditLog, name="AuditLogDocument")


class ArchiveAuditLogs(StrictEntityModel):
    """Archive a batch of entries."""

    log_ids: list[ObjectId] = Field(..., min_length=1, description="Entries to archive")
    reason: OptionalText = None


class AuditLogFilters(PageQuery):
    """Query parameters of the audit-log search."""

    model_config = ConfigDict(extra="forbid", populate_by_name=False)

    limit: PageSize = Field(default=ADMIN_PAGE_SIZE, description="Page size (1-100)")
    offset: Optional[int] = Field(None, ge=0)

    user_id: Optional[ObjectId] = None
    patient_id: Optional[ObjectId] = None
    action: Optional[AuditAction] = None
    resource: Optional[AuditResource] = None
    resource_id: OptionalText = None
    severity: Optional[AuditSeverity] = None
    search: OptionalText = None
    start_date: Optional[DateString] = None
    end_date: Optional[DateString] = None

    sort_by: str = Field(default="timestamp")
    sort_order: SortOrder = Field(default=SortOrder.DESC)
    include_archived: Optional[bool] = None


class AuditStats(StrictEntityModel):
    """Audit statistics for a period, with per-action/severity/resource histograms."""

    total_events: Count
    failed_events: Count = 0
    unique_users: Count = 0
    by_action: dict[AuditAction, Count] = Field(default_factory=dict)
    by_severity: dict[AuditSeverity, Count] = Field(default_factory=dict)
    by_resource: dict[AuditResource, Count] = Field(default_factory=dict)
    period_start: Optional[datetime] = None
    period_end: Optional[datetime] = None
