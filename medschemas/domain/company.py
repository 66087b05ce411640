"""Company (empresa) schemas.

A company is an employer whose workers are examined. It belongs to one
organization; the wire keys follow the Spanish contract of the intake forms.

Security Impact:
    - Contact fields are trimmed and blank values become absent, so a
      whitespace-only CUIT never counts as present in uniqueness checks
"""

from typing import Optional

from pydantic import Field

from medschemas.domain.common import AuditedEntity, ObjectId, PageQuery
from medschemas.domain.derivation import document_variant, form_variant, update_variant
from medschemas.domain.enums import Sector, SectorFilter
from medschemas.domain.text import OptionalEmail, OptionalText, required_text

CompanyName = required_text("Nombre de la empresa es requerido")


class Company(AuditedEntity):
    """Canonical company record."""

    id: Optional[ObjectId] = Field(None, alias="_id", description="Company id")
    name: CompanyName = Field(..., alias="nombre", description="Company name")
    tax_id: OptionalText = Field(None, alias="cuit", description="CUIT tax id")
    sector: Optional[Sector] = Field(None, alias="sector", description="Industry sector")
    description: OptionalText = Field(None, alias="descripcion")
    address: OptionalText = Field(None, alias="direccion")
    phone: OptionalText = Field(None, alias="telefono")
    email: OptionalEmail = Field(None, alias="email")
    contact: OptionalText = Field(None, alias="contacto", description="Contact person")

    organization: ObjectId = Field(..., description="Owning organization")

    is_active: bool = Field(default=True, alias="activa", description="Soft-deactivation flag")


CompanyForm = form_variant(Company, name="CompanyForm", tenant=["organization"])
CompanyUpdate = update_variant(Company, name="CompanyUpdate", immutable=["organization"])
CompanyDocument = document_variant(Company, name="CompanyDocument")


class CompanyFilters(PageQuery):
    """Query parameters for listing companies."""

    search: OptionalText = Field(None, description="Free-text search")
    sector: Optional[SectorFilter] = Field(None, description="Sector, or 'todos'")
    is_active: Optional[bool] = Field(None, alias="activa", description="Filter by active flag")
