"""Tests for invitation and notification schemas."""

from datetime import datetime, timedelta

import pytest

from medschemas.domain.enums import (
    InvitationResponse,
    InvitationStatus,
    NotificationType,
)
from medschemas.domain.invitation import (
    INVITATION_TTL,
    CreateInvitation,
    CreateNotification,
    Invitation,
    InvitationFilters,
    InvitationUpdate,
    Notification,
    RespondToInvitation,
    default_expiry,
)
from medschemas.domain.validation import ErrorKind, validate_payload


@pytest.fixture
def invitation_payload(org_id, user_id):
    return {
        "email": "nuevo@clinica.com.ar",
        "invitedBy": user_id,
        "organization": org_id,
        "invitationToken": "tok_8f1c2a",
    }


class TestInvitationStatus:
    """Test suite for the invitation lifecycle."""

    def test_pending_is_the_only_non_terminal_state(self):
        """Test terminal flags."""
        assert not InvitationStatus.PENDING.is_terminal
        for status in (InvitationStatus.ACCEPTED, InvitationStatus.DECLINED, InvitationStatus.EXPIRED):
            assert status.is_terminal

    def test_transitions(self):
        """Test that only pending may move, and only to a terminal state."""
        assert InvitationStatus.PENDING.can_transition_to(InvitationStatus.ACCEPTED)
        assert InvitationStatus.PENDING.can_transition_to(InvitationStatus.EXPIRED)
        assert not InvitationStatus.PENDING.can_transition_to(InvitationStatus.PENDING)
        assert not InvitationStatus.ACCEPTED.can_transition_to(InvitationStatus.DECLINED)
        assert not InvitationStatus.EXPIRED.can_transition_to(InvitationStatus.PENDING)

    def test_response_maps_to_status(self):
        """Test the status produced by each response."""
        assert InvitationResponse.ACCEPT.resulting_status is InvitationStatus.ACCEPTED
        assert InvitationResponse.DECLINE.resulting_status is InvitationStatus.DECLINED


class TestInvitation:
    """Test suite for the canonical invitation."""

    def test_defaults(self, invitation_payload):
        """Test role, status and timestamps defaults."""
        invitation = Invitation.model_validate(invitation_payload)

        assert invitation.role.value == "user"
        assert invitation.status is InvitationStatus.PENDING
        assert isinstance(invitation.sent_at, datetime)
        assert invitation.expires_at == invitation.sent_at + timedelta(days=7)

    def test_expiry_follows_sent_at(self, invitation_payload):
        """Test that the default expiry is computed from a supplied sentAt."""
        invitation = Invitation.model_validate({**invitation_payload, "sentAt": "2024-05-01T09:00:00"})
        assert invitation.expires_at == datetime(2024, 5, 8, 9, 0)

    def test_explicit_expiry_is_kept(self, invitation_payload):
        """Test that an explicit expiresAt is not overwritten."""
        invitation = Invitation.model_validate({
            **invitation_payload,
            "sentAt": "2024-05-01T09:00:00",
            "expiresAt": "2024-05-02T09:00:00",
        })
        assert invitation.expires_at == datetime(2024, 5, 2, 9, 0)

    def test_default_expiry_helper(self):
        """Test the seven-day time-to-live."""
        sent = datetime(2024, 12, 28, 12, 0)
        assert INVITATION_TTL == timedelta(days=7)
        assert default_expiry(sent) == datetime(2025, 1, 4, 12, 0)

    def test_token_required(self, invitation_payload):
        """Test that the stored invitation needs a token."""
        invitation_payload["invitationToken"] = ""
        result = validate_payload(Invitation, invitation_payload)
        assert result.errors_at("invitationToken")

    def test_create_payload(self):
        """Test that server-owned fields are absent from the create schema."""
        fields = set(CreateInvitation.model_fields)

        assert fields == {"email", "invited_by", "role", "message"}
        created = CreateInvitation.model_validate({
            "email": "nuevo@clinica.com.ar",
            "invitedBy": "u" * 24,
            "status": "accepted",
            "invitationToken": "forged",
        })
        assert "status" not in created.model_dump()

    def test_update_rejects_identity_fields(self, user_id):
        """Test that inviter and token cannot change."""
        result = validate_payload(InvitationUpdate, {"status": "accepted", "invitedBy": user_id})

        [error] = result.errors
        assert error.path == ("invitedBy",)
        assert error.kind is ErrorKind.IMMUTABLE

    def test_update_status(self):
        """Test that the status can be resolved through an update."""
        update = InvitationUpdate.model_validate({"status": "expired"})
        assert update.status is InvitationStatus.EXPIRED

    def test_respond(self):
        """Test the accept/decline payload."""
        respond = RespondToInvitation.model_validate({"invitationToken": "tok", "response": "decline"})
        assert respond.response is InvitationResponse.DECLINE
        assert validate_payload(RespondToInvitation, {"invitationToken": "tok", "response": "maybe"}).is_failure()

    def test_filters(self):
        """Test invitation filters."""
        filters = InvitationFilters.model_validate({"status": "pending", "email": "  "})
        assert filters.status is InvitationStatus.PENDING
        assert filters.email is None
        assert filters.page == 1


class TestNotification:
    """Test suite for notifications."""

    def test_defaults(self, user_id):
        """Test the unread default."""
        notification = Notification.model_validate({
            "userId": user_id,
            "type": "invitation_received",
            "title": "Nueva invitación",
            "message": "Te invitaron a Clínica Norte",
        })
        assert notification.is_read is False
        assert notification.read_at is None
        assert notification.type is NotificationType.INVITATION_RECEIVED

    def test_legacy_types_are_rejected(self, user_id):
        """Test that the canonical schema does not accept client-era types."""
        result = validate_payload(Notification, {
            "userId": user_id,
            "type": "user_joined_client",
            "title": "t",
            "message": "m",
            "relatedType": "client",
        })
        assert {error.path for error in result.errors} == {("type",), ("relatedType",)}

    def test_create_omits_read_state(self):
        """Test that read state is server-owned."""
        assert "is_read" not in CreateNotification.model_fields
        assert "read_at" not in CreateNotification.model_fields
        assert "user_id" in CreateNotification.model_fields
