"""Organization (tenant root) schemas.

An organization owns every tenant-scoped record. It is created by an admin
actor and soft-deactivated through ``isActive``; this layer never models a hard
delete. The legacy "client" naming is handled by
:mod:`medschemas.domain.compat` only.
"""

from typing import Optional

from pydantic import Field

from medschemas.domain.common import AuditedEntity, EntityModel, ObjectId, PageQuery
from medschemas.domain.derivation import document_variant, form_variant, update_variant
from medschemas.domain.text import OptionalText, required_text

DEFAULT_TIMEZONE = "America/Argentina/Buenos_Aires"
DEFAULT_LANGUAGE = "es"
DEFAULT_CURRENCY = "ARS"
DEFAULT_DATE_FORMAT = "DD/MM/YYYY"

OrganizationName = required_text("Nombre de la organización es requerido")


class OrganizationSettings(EntityModel):
    """Per-tenant display and access settings. Every field is defaulted."""

    timezone: str = Field(default=DEFAULT_TIMEZONE, description="IANA timezone")
    language: str = Field(default=DEFAULT_LANGUAGE, description="UI language code")
    currency: str = Field(default=DEFAULT_CURRENCY, description="ISO 4217 currency")
    date_format: str = Field(default=DEFAULT_DATE_FORMAT, description="Display date format")
    allow_cross_organization_access: bool = Field(
        default=False,
        description="Whether members may read other organizations' data",
    )


class Organization(AuditedEntity):
    """Canonical organization record."""

    id: Optional[ObjectId] = Field(None, alias="_id", description="Organization id")
    name: OrganizationName = Field(..., description="Organization name")
    description: OptionalText = Field(None, description="Free-text description")
    is_active: bool = Field(default=True, description="Soft-deactivation flag")
    settings: Optional[OrganizationSettings] = Field(None, description="Tenant settings")


class OrganizationFilters(PageQuery):
    """Query parameters for listing organizations."""

    search: OptionalText = Field(None, description="Free-text search")
    is_active: Optional[bool] = Field(None, description="Filter by active flag")


OrganizationForm = form_variant(Organization, name="OrganizationForm")
OrganizationUpdate = update_variant(Organization, name="OrganizationUpdate")
OrganizationDocument = document_variant(Organization, name="OrganizationDocument")
