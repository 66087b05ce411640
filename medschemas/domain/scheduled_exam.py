"""Scheduled exam schemas.

A scheduled exam is a planned occupational-exam event for one company. Patients
are registered into it and clinical records are generated from it. The event
status (:class:`ScheduledExamStatus`) is advisory and exists only as a search
filter; the per-patient registration status is the validated sub-state.

Architecture:
    - Registrations are embedded sub-records; the patient is referenced by id
    - ``generatedHistorias`` and ``stats`` are maintained by the backend
"""

from datetime import date, datetime, time
from typing import Annotated, Any, Optional

from pydantic import BeforeValidator, Field
from pydantic_core import PydanticCustomError

from medschemas.domain.common import (
    AuditedEntity,
    Count,
    DateString,
    EntityModel,
    ObjectId,
    PageQuery,
    is_calendar_date,
    is_iso_datetime,
)
from medschemas.domain.derivation import document_variant, form_variant, omit_fields, update_variant
from medschemas.domain.enums import (
    ExamType,
    PatientAction,
    RegistrationStatus,
    ScheduledExamStatus,
)
from medschemas.domain.text import OptionalText, required_text

ExamName = required_text("Nombre del examen programado es requerido")
Location = required_text("Ubicación es requerida")


def _date_to_datetime(value: Any) -> Any:
    # datetime is a subclass of date
    if isinstance(value, datetime):
        return value
    if isinstance(value, date):
        return datetime.combine(value, time.min)
    if not isinstance(value, str):
        raise PydanticCustomError("datetime_type", "Fecha del examen debe ser una fecha")
    text = value.strip()
    if is_calendar_date(text):
        return datetime.combine(date.fromisoformat(text), time.min)
    if is_iso_datetime(text):
        return text
    raise PydanticCustomError(
        "datetime_parsing",
        "Fecha del examen debe tener formato YYYY-MM-DD o ISO-8601",
    )


ExamDateTime = Annotated[datetime, BeforeValidator(_date_to_datetime)]
"""Accepts a date, a datetime or a date/date-time string; always a datetime."""


class PatientRegistration(EntityModel):
    """One patient's registration in a scheduled exam.

    ``completed`` should coincide with a generated clinical record; that link
    is checked by the consumer, not here.
    """

    patient: ObjectId = Field(..., description="Registered patient")
    status: RegistrationStatus = Field(default=RegistrationStatus.REGISTERED)
    registered_at: datetime = Field(default_factory=datetime.now)
    confirmed_at: Optional[datetime] = None
    completed_at: Optional[datetime] = None
    notes: OptionalText = Field(None, description="Special instructions for this patient")
    priority: int = Field(default=0, description="0 = normal, higher = priority")


class ExamStats(EntityModel):
    """Computed statistics block."""

    total_registered: Count = 0
    total_completed: Count = 0
    completion_rate: float = Field(default=0, ge=0)
    last_updated: Optional[datetime] = None


class ScheduledExam(AuditedEntity):
    """Canonical scheduled exam."""

    id: Optional[ObjectId] = Field(None, alias="_id", description="Scheduled exam id")

    name: ExamName = Field(..., description="Event name")
    description: OptionalText = Field(None, description="Event description")
    exam_date: ExamDateTime = Field(..., description="Date of the event")
    location: Location = Field(..., description="Where the exams take place")

    company: ObjectId = Field(..., description="Company whose workers are examined")
    exam_type: ExamType = Field(..., description="Kind of occupational exam")

    assigned_staff: list[ObjectId] = Field(default_factory=list, description="Medical staff")
    registered_patients: list[PatientRegistration] = Field(default_factory=list)
    generated_records: list[ObjectId] = Field(
        default_factory=list,
        alias="generatedHistorias",
        description="Clinical records created from this event",
    )

    organization: ObjectId = Field(..., description="Owning organization")
    stats: Optional[ExamStats] = Field(None, description="Computed statistics")


CreateScheduledExam = form_variant(
    ScheduledExam,
    name="CreateScheduledExam",
    tenant=["organization"],
    generated=["generated_records", "stats"],
)
UpdateScheduledExam = update_variant(
    ScheduledExam,
    name="UpdateScheduledExam",
    immutable=["organization"],
    generated=["generated_records", "stats"],
)
ScheduledExamDocument = document_variant(ScheduledExam, name="ScheduledExamDocument")

RegistrationData = omit_fields(
    PatientRegistration,
    ["patient"],
    name="RegistrationData",
    doc="Registration attributes supplied alongside a patient id.",
)


class PatientActionItem(EntityModel):
    patient_id: ObjectId
    action: PatientAction
    registration_data: Optional[RegistrationData] = None


class ManagePatients(EntityModel):
    """Add, remove or update several registrations of one scheduled exam."""

    scheduled_exam_id: ObjectId
    patients: list[PatientActionItem]


class UpdatePatientRegistration(EntityModel):
    scheduled_exam_id: ObjectId
    patient_id: ObjectId
    status: RegistrationStatus
    notes: OptionalText = None


class RecordPrefill(EntityModel):
    """Values copied into every generated clinical record."""

    fecha: OptionalText = None
    tipo_examen: Optional[ExamType] = Field(None, alias="tipoExamen")


class GenerateHistorias(EntityModel):
    """Generate clinical records; all registered patients when ``patientIds`` is omitted."""

    scheduled_exam_id: ObjectId
    patient_ids: Optional[list[ObjectId]] = None
    prefill_data: Optional[RecordPrefill] = None


class ScheduledExamFilters(PageQuery):
    """Query parameters for listing scheduled exams."""

    search: OptionalText = Field(None, description="Free-text search")
    status: Optional[ScheduledExamStatus] = None
    exam_type: Optional[ExamType] = None
    company: Optional[ObjectId] = None
    assigned_staff: Optional[ObjectId] = None
    date_from: Optional[DateString] = None
    date_to: Optional[DateString] = None
    location: OptionalText = None
