"""Team schemas. A team belongs to exactly one organization."""

from typing import Optional

from pydantic import Field

from medschemas.domain.common import AuditedEntity, EntityModel, ObjectId
from medschemas.domain.derivation import document_variant, form_variant, update_variant
from medschemas.domain.enums import Permission
from medschemas.domain.text import OptionalText, required_text

TeamName = required_text("Nombre del equipo es requerido")


class TeamSettings(EntityModel):
    allow_cross_team_access: bool = Field(default=False, description="Read access across teams")
    default_permissions: frozenset[Permission] = Field(
        default_factory=frozenset,
        description="Permissions granted to new members",
    )
    max_members: Optional[int] = Field(None, ge=1, description="Member cap")


class Team(AuditedEntity):
    """Canonical team record."""

    id: Optional[ObjectId] = Field(None, alias="_id", description="Team id")
    name: TeamName = Field(..., description="Team name")
    description: OptionalText = Field(None, description="Free-text description")
    organization: ObjectId = Field(..., description="Owning organization")
    is_active: bool = Field(default=True, description="Soft-deactivation flag")
    settings: Optional[TeamSettings] = Field(None, description="Team settings")


TeamForm = form_variant(Team, name="TeamForm", tenant=["organization"])
TeamUpdate = update_variant(Team, name="TeamUpdate", immutable=["organization"])
TeamDocument = document_variant(Team, name="TeamDocument")
