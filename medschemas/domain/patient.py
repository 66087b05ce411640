"""Patient (paciente) schemas.

The canonical patient is the strict historical variant: the national id (DNI)
is required and digits-only, sex uses the ``M``/``F``/``Otro`` codes and
marital status the labels of :class:`MaritalStatus`. Blank sex or marital
status means "not provided". Callers still sending descriptive words
(``male``, ``casado``) go through :mod:`medschemas.domain.compat` first.

Security Impact:
    - Identity fields are trimmed before validation
    - Optional free-text fields drop whitespace-only input
"""

from typing import Annotated, Optional

from pydantic import BeforeValidator, Field

from medschemas.domain.common import AuditedEntity, EntityModel, ObjectId, PageQuery
from medschemas.domain.derivation import document_variant, form_variant, update_variant
from medschemas.domain.enums import MaritalStatus, Sex
from medschemas.domain.text import (
    NationalId,
    OptionalEmail,
    OptionalText,
    blank_to_none,
    required_text,
)

LastName = required_text("Apellido es requerido")
FirstNames = required_text("Nombres es requerido")

OptionalSex = Annotated[Optional[Sex], BeforeValidator(blank_to_none)]
OptionalMaritalStatus = Annotated[Optional[MaritalStatus], BeforeValidator(blank_to_none)]

MAX_AGE = 120
MAX_CHILD_AGE = 50


class Child(EntityModel):
    """Dependent child (hijo) of a patient."""

    age: int = Field(..., alias="edad", strict=True, ge=0, le=MAX_CHILD_AGE, description="Age in years")
    notes: OptionalText = Field(None, alias="observaciones")


class Patient(AuditedEntity):
    """Canonical patient record."""

    id: Optional[ObjectId] = Field(None, alias="_id", description="Patient id")

    last_name: LastName = Field(..., alias="apellido")
    first_names: FirstNames = Field(..., alias="nombres")
    national_id: NationalId = Field(..., alias="dni", description="DNI, digits only")
    cuil: OptionalText = Field(None, alias="cuil", description="CUIL labour id")
    nationality: OptionalText = Field(None, alias="nacionalidad")
    birth_date: OptionalText = Field(None, alias="fechaNacimiento", description="As entered")
    age: Optional[int] = Field(None, alias="edad", strict=True, ge=0, le=MAX_AGE)
    sex: OptionalSex = Field(None, alias="sexo")
    marital_status: OptionalMaritalStatus = Field(None, alias="estadoCivil")
    address: OptionalText = Field(None, alias="domicilio")
    phone: OptionalText = Field(None, alias="telefono")
    email: OptionalEmail = Field(None, alias="email")
    job_title: OptionalText = Field(None, alias="puesto")
    hire_date: OptionalText = Field(None, alias="fechaIngreso", description="As entered")
    children: list[Child] = Field(default_factory=list, alias="hijos")
    education: OptionalText = Field(None, alias="estudios")
    degrees: OptionalText = Field(None, alias="titulos")

    company: Optional[ObjectId] = Field(None, alias="empresa", description="Employer company")
    organization: ObjectId = Field(..., description="Owning organization")
    scheduled_exams: list[ObjectId] = Field(
        default_factory=list,
        alias="scheduledExams",
        description="Scheduled exams the patient is enrolled in",
    )

    is_active: bool = Field(default=True, alias="activo", description="Soft-deactivation flag")


PatientForm = form_variant(
    Patient,
    name="PatientForm",
    tenant=["organization"],
    generated=["scheduled_exams"],
)
PatientUpdate = update_variant(
    Patient,
    name="PatientUpdate",
    immutable=["organization"],
    generated=["scheduled_exams"],
)
PatientDocument = document_variant(Patient, name="PatientDocument")


class PatientFilters(PageQuery):
    """Query parameters for listing patients."""

    search: OptionalText = Field(None, description="Free-text search")
    company: Optional[ObjectId] = Field(None, alias="empresa")
    is_active: Optional[bool] = Field(None, alias="activo")
    sex: OptionalSex = Field(None, alias="sexo")
