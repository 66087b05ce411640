"""Role schemas and the permission vocabulary.

Only the vocabulary is defined here. Which permission allows which operation is
decided by the consumers.
"""

from typing import Optional

from pydantic import Field

from medschemas.domain.common import AuditedEntity, ObjectId
from medschemas.domain.derivation import document_variant, form_variant, update_variant
from medschemas.domain.enums import Permission
from medschemas.domain.text import OptionalText, required_text

PERMISSIONS: dict[str, str] = {member.name: member.value for member in Permission}
"""Constant name to token, e.g. ``PERMISSIONS["USER_READ"] == "user_read"``."""

RoleName = required_text("Nombre del rol es requerido")


class Role(AuditedEntity):
    """Canonical role record.

    ``permissions`` has set semantics: duplicates collapse and order is not
    significant. System roles (``isSystem``) are protected from deletion by
    convention; nothing here enforces it.
    """

    id: Optional[ObjectId] = Field(None, alias="_id", description="Role id")
    name: RoleName = Field(..., description="Role name")
    description: OptionalText = Field(None, description="Free-text description")
    permissions: frozenset[Permission] = Field(
        default_factory=frozenset,
        description="Granted permission tokens",
    )
    is_active: bool = Field(default=True, description="Soft-deactivation flag")
    is_system: bool = Field(default=False, description="Built-in role flag")


RoleForm = form_variant(Role, name="RoleForm", generated=["is_system"])
RoleUpdate = update_variant(Role, name="RoleUpdate", generated=["is_system"])
RoleDocument = document_variant(Role, name="RoleDocument")
