"""Clinical record (historia clínica) schemas.

A clinical record documents one occupational exam of one patient. Its patient
and organization references are fixed at creation: the update variant rejects
both. The medical sections mirror the paper form; every sub-field is defaulted
so a partially filled form still validates.

Security Impact:
    - Contains PHI; this layer validates shape only and never logs values
    - Immutable foreign keys prevent moving a record to another patient/tenant
"""

from typing import Optional

from pydantic import Field

from medschemas.domain.common import AuditedEntity, DateString, EntityModel, ObjectId, PageQuery
from medschemas.domain.derivation import document_variant, form_variant, update_variant
from medschemas.domain.enums import ExamType, FitnessMark, Preexisting
from medschemas.domain.text import OptionalText, required_text

ExamDate = required_text("Fecha es requerida")


# ============================================================================
# Medical sections
# ============================================================================

class PersonalFamilyHistory(EntityModel):
    """Antecedentes personales y familiares."""

    checkboxes: dict[str, bool] = Field(default_factory=dict)
    values: dict[str, str] = Field(default_factory=dict, alias="valores")
    immunizations: list[str] = Field(default_factory=list, alias="inmunizaciones")
    notes: str = Field(default="", alias="observaciones")


class OccupationalHistory(EntityModel):
    """Antecedentes laborales."""

    previous_jobs: str = Field(default="", alias="trabajosPrevios")
    risk_exposure: str = Field(default="", alias="exposicionRiesgos")
    work_accidents: str = Field(default="", alias="accidentesTrabajo")
    disabilities: str = Field(default="", alias="incapacidadesSecuelas")


class ExamCheckbox(EntityModel):
    fitness: FitnessMark = Field(default=FitnessMark.UNSET, alias="aptitud")


class PhysicalExam(EntityModel):
    """Examen físico: free-form keyed values plus a fitness mark per item."""

    values: dict[str, str] = Field(default_factory=dict, alias="valores")
    checkboxes: dict[str, ExamCheckbox] = Field(default_factory=dict)
    notes: str = Field(default="", alias="observaciones")
    xray_number: str = Field(default="", alias="numeroRX")


class ComplementaryExam(EntityModel):
    requested: bool = Field(default=False, alias="solicitado")
    date: str = Field(default="", alias="fecha")
    n: bool = False
    a: bool = False
    fitness: FitnessMark = Field(default=FitnessMark.UNSET, alias="aptitud")


class ComplementaryExams(EntityModel):
    exams: dict[str, ComplementaryExam] = Field(default_factory=dict, alias="examenes")
    notes: str = Field(default="", alias="observaciones")


class FitnessClassification(EntityModel):
    fitness: Optional[FitnessMark] = Field(None, alias="aptitud")
    preexisting: Optional[Preexisting] = Field(None, alias="conPreexistencias")


class Signatures(EntityModel):
    employee: str = Field(default="", alias="firmaEmpleado")
    physician: str = Field(default="", alias="firmaMedico")


class SwornDeclaration(EntityModel):
    signatures: Signatures = Field(default_factory=Signatures, alias="firmas")


# ============================================================================
# Clinical record
# ============================================================================

class ClinicalRecord(AuditedEntity):
    """Canonical clinical record."""

    id: Optional[ObjectId] = Field(None, alias="_id", description="Record id")
    exam_date: ExamDate = Field(..., alias="fecha", description="Exam date as entered")
    exam_type: Optional[ExamType] = Field(None, alias="tipoExamen")

    patient: ObjectId = Field(..., alias="paciente", description="Examined patient")
    organization: ObjectId = Field(..., description="Owning organization")
    scheduled_exam: Optional[ObjectId] = Field(
        None, alias="scheduledExam", description="Scheduling event that produced this record"
    )

    personal_family_history: Optional[PersonalFamilyHistory] = Field(
        None, alias="antecedentesPersonalesFamiliares"
    )
    occupational_history: Optional[OccupationalHistory] = Field(
        None, alias="antecedentesLaborales"
    )
    physical_exam: Optional[PhysicalExam] = Field(None, alias="examen")
    complementary_exams: Optional[ComplementaryExams] = Field(
        None, alias="examenesComplementarios"
    )
    tasks: OptionalText = Field(None, alias="tareasDesempenar", description="Tasks to perform")
    employer_rating: OptionalText = Field(None, alias="calificacionEmpresarial")
    fitness_classification: Optional[FitnessClassification] = Field(
        None, alias="clasificacionAptitud"
    )
    findings: OptionalText = Field(None, alias="informeHallazgos", description="Findings narrative")
    sworn_declaration: Optional[SwornDeclaration] = Field(None, alias="declaracionJurada")


ClinicalRecordCreate = form_variant(
    ClinicalRecord,
    name="ClinicalRecordCreate",
    tenant=["organization"],
)
ClinicalRecordUpdate = update_variant(
    ClinicalRecord,
    name="ClinicalRecordUpdate",
    immutable=["organization", "patient"],
)
ClinicalRecordDocument = document_variant(ClinicalRecord, name="ClinicalRecordDocument")


class ClinicalRecordFilters(PageQuery):
    """Query parameters for listing clinical records."""

    search: OptionalText = Field(None, description="Free-text search")
    patient: Optional[ObjectId] = Field(None, alias="paciente")
    company: Optional[ObjectId] = Field(None, alias="empresa")
    exam_type: Optional[ExamType] = Field(None, alias="tipoExamen")
    date_from: Optional[DateString] = Field(None, alias="fechaDesde")
    date_to: Optional[DateString] = Field(None, alias="fechaHasta")
