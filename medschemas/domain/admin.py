"""Admin and dashboard aggregate schemas.

These are read-side output contracts: they validate the shape a reporting
service must produce. Nothing here computes the figures.
"""

from datetime import datetime
from typing import Any, Optional

from pydantic import Field

from medschemas.domain.common import ADMIN_PAGE_SIZE, Count, EntityModel, ObjectId, PageQuery, PageSize
from medschemas.domain.derivation import document_variant, form_variant
from medschemas.domain.enums import UserStatusFilter
from medschemas.domain.text import OptionalText


class AdminStats(EntityModel):
    """Entity counts shown on the admin overview."""

    users: Count
    roles: Count
    organizations: Count
    teams: Count
    permissions: Count


class PatientsByCompany(EntityModel):
    company_name: str = Field(..., alias="empresaName")
    count: Count
    company_id: ObjectId = Field(..., alias="empresaId")


class RecordsByPatient(EntityModel):
    patient_id: ObjectId = Field(..., alias="pacienteId")
    patient_name: str = Field(..., alias="pacienteName")
    count: Count


class UserCount(EntityModel):
    user_id: ObjectId
    user_name: str
    count: Count


class StatsByUser(EntityModel):
    """Records created per user, by kind."""

    patients: list[UserCount] = Field(..., alias="pacientes")
    companies: list[UserCount] = Field(..., alias="empresas")
    records: list[UserCount] = Field(..., alias="historias")


class DashboardRelationships(EntityModel):
    patients_by_company: list[PatientsByCompany] = Field(..., alias="pacientesByEmpresa")
    records_by_patient: list[RecordsByPatient] = Field(..., alias="historiasByPaciente")
    stats_by_user: StatsByUser


class DashboardStats(EntityModel):
    """Tenant dashboard counters with an optional relationship breakdown."""

    patients: Count = Field(..., alias="pacientes")
    companies: Count = Field(..., alias="empresas")
    clinical_records: Count = Field(..., alias="historiasClinicas")
    users: Count = Field(..., alias="usuarios")
    relationships: Optional[DashboardRelationships] = None


class ActivityLog(EntityModel):
    """Lightweight user-activity entry (see :mod:`medschemas.domain.audit` for compliance logs)."""

    id: Optional[ObjectId] = Field(None, alias="_id")
    user: ObjectId = Field(..., description="Acting user")
    action: str = Field(..., description="Free-form action label")
    resource: str = Field(..., description="Free-form resource label")
    resource_id: Optional[ObjectId] = None
    details: Optional[dict[str, Any]] = None
    timestamp: datetime
    ip: OptionalText = None
    user_agent: OptionalText = None
    organization: ObjectId = Field(..., description="Organization context of the activity")


ActivityLogForm = form_variant(ActivityLog, name="ActivityLogForm", tenant=["organization"])
ActivityLogDocument = document_variant(ActivityLog, name="ActivityLogDocument")


class UserManagementFilters(PageQuery):
    """Query parameters of the admin user list."""

    limit: PageSize = Field(default=ADMIN_PAGE_SIZE, description="Page size (1-100)")
    search: OptionalText = None
    status: UserStatusFilter = Field(default=UserStatusFilter.ALL)
    role: Optional[ObjectId] = None
    team: Optional[ObjectId] = None
