"""User, authentication and profile schemas.

A user's organizations, team and role arrive either as bare identifiers or as
populated summary objects, depending on whether the producer expanded them.
Both shapes validate into a tagged union so consumers pattern-match instead of
guessing:

    ```python
    match user.role:
        case Reference(id=role_id):
            ...
        case RoleSummary(name=name, permissions=permissions):
            ...
    ```

Security Impact:
    - ``password`` only exists on create/update payloads; ``UserPublic`` drops it
    - Passwords are never trimmed or otherwise normalized
"""

from datetime import datetime
from typing import Annotated, Any, Optional, Union

from pydantic import (
    Discriminator,
    EmailStr,
    Field,
    Tag,
    ValidationInfo,
    field_validator,
)
from pydantic_core import PydanticCustomError

from medschemas.domain.common import AuditedEntity, EntityModel, ObjectId, Reference
from medschemas.domain.derivation import (
    document_variant,
    form_variant,
    public_variant,
    update_variant,
)
from medschemas.domain.enums import Permission, Theme
from medschemas.domain.text import OptionalText, min_length_text, non_empty, required_text

UserName = required_text("Nombre de usuario es requerido")
PersonName = required_text("Nombre es requerido")
CurrentPassword = non_empty("Contraseña actual es requerida")
LoginPassword = non_empty("Contraseña es requerida")
NewPassword = min_length_text(6, "La nueva contraseña debe tener al menos 6 caracteres")

PASSWORD_MISMATCH = "password_mismatch"


# ============================================================================
# Polymorphic references
# ============================================================================

class OrganizationSummary(EntityModel):
    """Populated organization reference."""

    id: Optional[ObjectId] = Field(None, alias="_id")
    name: str


class TeamSummary(EntityModel):
    """Populated team reference."""

    id: Optional[ObjectId] = Field(None, alias="_id")
    name: str


class RoleSummary(EntityModel):
    """Populated role reference."""

    id: Optional[ObjectId] = Field(None, alias="_id")
    name: str
    permissions: Optional[frozenset[Permission]] = None


def _reference_kind(value: Any) -> str:
    if isinstance(value, (str, Reference)):
        return "reference"
    return "summary"


OrganizationRef = Annotated[
    Union[
        Annotated[Reference, Tag("reference")],
        Annotated[OrganizationSummary, Tag("summary")],
    ],
    Discriminator(_reference_kind),
]

TeamRef = Annotated[
    Union[
        Annotated[Reference, Tag("reference")],
        Annotated[TeamSummary, Tag("summary")],
    ],
    Discriminator(_reference_kind),
]

RoleRef = Annotated[
    Union[
        Annotated[Reference, Tag("reference")],
        Annotated[RoleSummary, Tag("summary")],
    ],
    Discriminator(_reference_kind),
]


def reference_id(ref: Union[Reference, OrganizationSummary, TeamSummary, RoleSummary, None]) -> Optional[str]:
    """Return the identifier carried by either variant of a reference."""
    if ref is None:
        return None
    return ref.id


# ============================================================================
# Profile and preferences
# ============================================================================

class UserProfile(EntityModel):
    avatar: OptionalText = Field(None, description="Avatar URL")
    phone: OptionalText = Field(None, description="Contact phone")
    department: OptionalText = Field(None, description="Department")
    position: OptionalText = Field(None, description="Job position")
    bio: OptionalText = Field(None, description="Short biography")
    address: OptionalText = Field(None, description="Postal address")


class NotificationPreferences(EntityModel):
    email: bool = True
    push: bool = True
    sms: bool = False
    browser: bool = True


class UserPreferences(EntityModel):
    theme: Theme = Field(default=Theme.LIGHT, description="UI theme")
    language: str = Field(default="es", description="UI language code")
    notifications: Optional[NotificationPreferences] = Field(
        None, description="Notification channels"
    )


# ============================================================================
# User
# ============================================================================

class User(AuditedEntity):
    """Canonical user record.

    A user belongs to one or many organizations; ``organizations`` lists them
    either as references or as populated summaries.
    """

    id: Optional[ObjectId] = Field(None, alias="_id", description="User id")
    user_name: UserName = Field(..., description="Login name")
    email: EmailStr = Field(..., description="Email address")
    password: Optional[str] = Field(None, description="Only present on create/update payloads")
    name: PersonName = Field(..., description="First name")
    last_name: OptionalText = Field(None, description="Last name")

    organizations: Optional[list[OrganizationRef]] = Field(
        None, description="Organizations the user belongs to"
    )
    team: Optional[TeamRef] = Field(None, description="Team membership")
    role: Optional[RoleRef] = Field(None, description="Assigned role")

    profile: Optional[UserProfile] = Field(None, description="Profile information")

    is_active: bool = Field(default=True, description="Soft-deactivation flag")
    is_email_verified: bool = Field(default=False, description="Email ownership confirmed")
    is_verified: bool = Field(default=False, description="Account verified by an admin")
    last_login: Optional[datetime] = Field(None, description="Last successful login")

    preferences: Optional[UserPreferences] = Field(None, description="User preferences")


UserForm = form_variant(User, name="UserForm", generated=["last_login"])
UserUpdate = update_variant(User, name="UserUpdate", generated=["last_login"])
UserPublic = public_variant(User, name="UserPublic")
UserDocument = document_variant(User, name="UserDocument")


class UserProfileUpdate(EntityModel):
    """Self-service profile edit."""

    name: PersonName = Field(..., description="First name")
    last_name: OptionalText = Field(None, description="Last name")
    email: EmailStr = Field(..., description="Email address")
    profile: Optional[UserProfile] = None
    preferences: Optional[UserPreferences] = None


class ChangePassword(EntityModel):
    """Password change request.

    ``confirmPassword`` must equal ``newPassword`` byte for byte; a mismatch is
    reported on ``confirmPassword``.
    """

    current_password: CurrentPassword = Field(..., description="Current password")
    new_password: NewPassword = Field(..., description="New password (min. 6 characters)")
    confirm_password: str = Field(..., description="Repeat of the new password")

    @field_validator("confirm_password")
    @classmethod
    def passwords_match(cls, value: str, info: ValidationInfo) -> str:
        # new_password is absent from info.data when its own rules failed
        new_password = info.data.get("new_password")
        if new_password is not None and value != new_password:
            raise PydanticCustomError(PASSWORD_MISMATCH, "Las contraseñas no coinciden")
        return value


class Login(EntityModel):
    user_name: UserName = Field(..., description="Login name")
    password: LoginPassword = Field(..., description="Password")


class AuthState(EntityModel):
    """Client-side authentication state. Every key is required but nullable."""

    user: Optional[UserPublic] = Field(..., description="Authenticated user")
    token: Optional[str] = Field(..., description="Session token")
    is_loading: bool = Field(..., description="Authentication in progress")
    error: Optional[str] = Field(..., description="Last authentication error")
