"""Schema registry: entity name to canonical schema and derived variants.

The registry is built once at import time and never mutated afterwards, so it
can be shared freely between threads.

Example:
    ```python
    from medschemas.domain.registry import REGISTRY

    result = REGISTRY.validate("patient", body, variant="form", legacy=True)
    if result.is_failure():
        ...
    ```
"""

import logging
from dataclasses import dataclass, field
from types import MappingProxyType
from typing import Any, Iterator, Mapping, Optional

from pydantic import BaseModel

from medschemas.domain import (
    admin,
    audit,
    clinical_record,
    company,
    invitation,
    organization,
    patient,
    role,
    scheduled_exam,
    team,
    user,
)
from medschemas.domain.common import is_strict
from medschemas.domain.compat import canonical_entity_name, upgrade_legacy_payload
from medschemas.domain.validation import (
    LegacyPayloadError,
    UnknownEntityError,
    UnknownVariantError,
    ValidationResult,
    validate_payload,
)

logger = logging.getLogger(__name__)

CANONICAL = "canonical"


@dataclass(frozen=True)
class EntitySchemas:
    """Every schema registered for one entity.

    Attributes:
        name: Registry name (``patient``, ``clinical_record``, ...)
        variants: Read-only mapping of variant kind to schema; always holds
            ``canonical``
        tenant_field: Attribute naming the owning organization, if tenant-scoped
    """

    name: str
    variants: Mapping[str, type[BaseModel]]
    tenant_field: Optional[str] = None

    @property
    def canonical(self) -> type[BaseModel]:
        return self.variants[CANONICAL]

    @property
    def strict(self) -> bool:
        return is_strict(self.canonical)

    def variant(self, kind: str) -> type[BaseModel]:
        try:
            return self.variants[kind]
        except KeyError:
            raise UnknownVariantError(self.name, kind, sorted(self.variants)) from None


def _entity(name: str, tenant_field: Optional[str] = None, **variants: type[BaseModel]) -> EntitySchemas:
    return EntitySchemas(
        name=name,
        variants=MappingProxyType(dict(variants)),
        tenant_field=tenant_field,
    )


@dataclass(frozen=True)
class SchemaRegistry:
    """Immutable lookup of :class:`EntitySchemas` by entity name."""

    entities: Mapping[str, EntitySchemas] = field(default_factory=dict)

    @classmethod
    def build(cls, entities: list[EntitySchemas]) -> "SchemaRegistry":
        registry = cls(MappingProxyType({entity.name: entity for entity in entities}))
        logger.debug(
            f"Registered {len(registry.entities)} entities",
            extra={"entities": len(registry.entities)},
        )
        return registry

    def __iter__(self) -> Iterator[EntitySchemas]:
        return iter(self.entities.values())

    def __len__(self) -> int:
        return len(self.entities)

    def __contains__(self, name: object) -> bool:
        return isinstance(name, str) and canonical_entity_name(name) in self.entities

    def names(self) -> list[str]:
        return sorted(self.entities)

    def get(self, name: str) -> EntitySchemas:
        """Look up an entity by canonical or legacy name.

        Raises:
            UnknownEntityError: If no such entity is registered
        """
        try:
            return self.entities[canonical_entity_name(name)]
        except KeyError:
            raise UnknownEntityError(name) from None

    def schema(self, entity: str, variant: str = CANONICAL) -> type[BaseModel]:
        return self.get(entity).variant(variant)

    def validate(
        self,
        entity: str,
        payload: Any,
        variant: str = CANONICAL,
        legacy: bool = False,
    ) -> ValidationResult:
        """Validate ``payload`` against one variant of ``entity``.

        Parameters:
            entity: Entity name (legacy names accepted)
            payload: Decoded JSON value
            variant: Variant kind (``canonical``, ``form``, ``update``, ...)
            legacy: Translate legacy vocabulary first; a conflicting legacy
                key is reported as a field error at that key

        Raises:
            UnknownEntityError, UnknownVariantError: For bad lookups only;
                invalid payloads never raise
        """
        entry = self.get(entity)
        schema = entry.variant(variant)
        if legacy:
            try:
                payload = upgrade_legacy_payload(entry.name, payload)
            except LegacyPayloadError as exc:
                return ValidationResult.failure_result([exc.to_field_error()])
        return validate_payload(schema, payload)


REGISTRY = SchemaRegistry.build([
    _entity(
        "organization",
        canonical=organization.Organization,
        form=organization.OrganizationForm,
        update=organization.OrganizationUpdate,
        document=organization.OrganizationDocument,
        filters=organization.OrganizationFilters,
    ),
    _entity(
        "team",
        tenant_field="organization",
        canonical=team.Team,
        form=team.TeamForm,
        update=team.TeamUpdate,
        document=team.TeamDocument,
    ),
    _entity(
        "role",
        canonical=role.Role,
        form=role.RoleForm,
        update=role.RoleUpdate,
        document=role.RoleDocument,
    ),
    _entity(
        "user",
        canonical=user.User,
        form=user.UserForm,
        update=user.UserUpdate,
        public=user.UserPublic,
        document=user.UserDocument,
        filters=admin.UserManagementFilters,
        profile_update=user.UserProfileUpdate,
        change_password=user.ChangePassword,
        login=user.Login,
    ),
    _entity(
        "invitation",
        tenant_field="organization",
        canonical=invitation.Invitation,
        form=invitation.CreateInvitation,
        update=invitation.InvitationUpdate,
        document=invitation.InvitationDocument,
        filters=invitation.InvitationFilters,
        respond=invitation.RespondToInvitation,
    ),
    _entity(
        "notification",
        canonical=invitation.Notification,
        form=invitation.CreateNotification,
        document=invitation.NotificationDocument,
        mark_read=invitation.MarkNotificationRead,
    ),
    _entity(
        "company",
        tenant_field="organization",
        canonical=company.Company,
        form=company.CompanyForm,
        update=company.CompanyUpdate,
        document=company.CompanyDocument,
        filters=company.CompanyFilters,
    ),
    _entity(
        "patient",
        tenant_field="organization",
        canonical=patient.Patient,
        form=patient.PatientForm,
        update=patient.PatientUpdate,
        document=patient.PatientDocument,
        filters=patient.PatientFilters,
    ),
    _entity(
        "clinical_record",
        tenant_field="organization",
        canonical=clinical_record.ClinicalRecord,
        form=clinical_record.ClinicalRecordCreate,
        update=clinical_record.ClinicalRecordUpdate,
        document=clinical_record.ClinicalRecordDocument,
        filters=clinical_record.ClinicalRecordFilters,
    ),
    _entity(
        "scheduled_exam",
        tenant_field="organization",
        canonical=scheduled_exam.ScheduledExam,
        form=scheduled_exam.CreateScheduledExam,
        update=scheduled_exam.UpdateScheduledExam,
        document=scheduled_exam.ScheduledExamDocument,
        filters=scheduled_exam.ScheduledExamFilters,
        registration=scheduled_exam.PatientRegistration,
        manage_patients=scheduled_exam.ManagePatients,
        update_registration=scheduled_exam.UpdatePatientRegistration,
        generate_records=scheduled_exam.GenerateHistorias,
    ),
    _entity(
        "activity_log",
        tenant_field="organization",
        canonical=admin.ActivityLog,
        form=admin.ActivityLogForm,
        document=admin.ActivityLogDocument,
    ),
    _entity(
        "audit_log",
        tenant_field="organization",
        canonical=audit.AuditLog,
        form=audit.CreateAuditLog,
        document=audit.AuditLogDocument,
        filters=audit.AuditLogFilters,
        archive=audit.ArchiveAuditLogs,
        stats=audit.AuditStats,
    ),
    _entity("admin_stats", canonical=admin.AdminStats),
    _entity("dashboard_stats", canonical=admin.DashboardStats),
])
