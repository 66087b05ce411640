"""Invitation and notification schemas.

Invitations move through a terminal-once-resolved lifecycle: ``pending`` is
the only non-terminal status (see :class:`InvitationStatus`). Notifications are
created as side effects of invitation and role events by the backend.

Security Impact:
    - Invitation tokens are server-generated and never accepted on create
    - Read state of a notification is owned by the server
"""

from datetime import datetime, timedelta
from typing import Optional

from pydantic import EmailStr, Field, ValidationInfo, field_validator

from medschemas.domain.common import AuditedEntity, EntityModel, ObjectId, PageQuery
from medschemas.domain.derivation import document_variant, form_variant, update_variant
from medschemas.domain.enums import (
    InvitationResponse,
    InvitationRole,
    InvitationStatus,
    NotificationType,
    RelatedEntityType,
)
from medschemas.domain.text import OptionalText

INVITATION_TTL = timedelta(days=7)


def default_expiry(sent_at: datetime) -> datetime:
    """Expiry of an invitation sent at ``sent_at``."""
    return sent_at + INVITATION_TTL


class Invitation(AuditedEntity):
    """Canonical invitation record.

    ``expiresAt`` defaults to ``sentAt`` plus seven days when omitted.
    """

    id: Optional[ObjectId] = Field(None, alias="_id", description="Invitation id")

    email: EmailStr = Field(..., description="Invitee email")
    invited_by: ObjectId = Field(..., description="User who sent the invitation")
    organization: ObjectId = Field(..., description="Organization the invitee joins")
    role: InvitationRole = Field(default=InvitationRole.USER, description="Role granted on acceptance")

    status: InvitationStatus = Field(default=InvitationStatus.PENDING, description="Lifecycle status")
    message: OptionalText = Field(None, description="Optional note from the inviter")

    sent_at: datetime = Field(default_factory=datetime.now, description="When the invitation was sent")
    expires_at: Optional[datetime] = Field(
        None,
        validate_default=True,
        description="Expiry; sentAt + 7 days when omitted",
    )
    responded_at: Optional[datetime] = Field(None, description="When the invitee answered")
    responded_by: Optional[ObjectId] = Field(None, description="Registered user who answered")

    invitation_token: str = Field(..., min_length=1, description="Opaque token for email links")

    @field_validator("expires_at")
    @classmethod
    def fill_expiry(cls, value: Optional[datetime], info: ValidationInfo) -> Optional[datetime]:
        if value is None and info.data.get("sent_at") is not None:
            return default_expiry(info.data["sent_at"])
        return value


CreateInvitation = form_variant(
    Invitation,
    name="CreateInvitation",
    tenant=["organization"],
    generated=[
        "status",
        "sent_at",
        "expires_at",
        "responded_at",
        "responded_by",
        "invitation_token",
    ],
)
InvitationUpdate = update_variant(
    Invitation,
    name="InvitationUpdate",
    immutable=["organization", "invited_by", "email", "invitation_token", "sent_at"],
)
InvitationDocument = document_variant(Invitation, name="InvitationDocument")


class RespondToInvitation(EntityModel):
    invitation_token: str = Field(..., min_length=1, description="Token from the email link")
    response: InvitationResponse = Field(..., description="accept or decline")


class InvitationFilters(PageQuery):
    """Query parameters for listing an organization's invitations."""

    status: Optional[InvitationStatus] = Field(None, description="Filter by status")
    email: OptionalText = Field(None, description="Filter by invitee email")


# ============================================================================
# Notifications
# ============================================================================

class Notification(AuditedEntity):
    """Canonical notification record, scoped to its recipient."""

    id: Optional[ObjectId] = Field(None, alias="_id", description="Notification id")

    user_id: ObjectId = Field(..., description="Recipient user")

    type: NotificationType = Field(..., description="Lifecycle event")
    title: str = Field(..., description="Short title")
    message: str = Field(..., description="Body text")

    related_id: Optional[ObjectId] = Field(None, description="Related entity id")
    related_type: Optional[RelatedEntityType] = Field(None, description="Related entity kind")

    is_read: bool = Field(default=False, description="Read flag")
    read_at: Optional[datetime] = Field(None, description="When it was read")

    action_label: OptionalText = Field(None, description="Call-to-action label")
    action_url: OptionalText = Field(None, description="Call-to-action target")


CreateNotification = form_variant(
    Notification,
    name="CreateNotification",
    generated=["is_read", "read_at"],
)
NotificationDocument = document_variant(Notification, name="NotificationDocument")


class MarkNotificationRead(EntityModel):
    notification_id: ObjectId = Field(..., description="Notification to mark as read")
