"""Tests for legacy vocabulary translation."""

import logging

import pytest

from medschemas.domain.compat import (
    KeyRename,
    canonical_entity_name,
    key_renames,
    upgrade_legacy_payload,
)
from medschemas.domain.patient import PatientForm
from medschemas.domain.validation import LegacyPayloadError


class TestEntityNames:
    """Test suite for legacy entity names."""

    @pytest.mark.parametrize("legacy,canonical", [
        ("client", "organization"),
        ("empresa", "company"),
        ("paciente", "patient"),
        ("historia_clinica", "clinical_record"),
        ("patient", "patient"),
    ])
    def test_resolution(self, legacy, canonical):
        """Test that legacy names resolve and canonical names pass through."""
        assert canonical_entity_name(legacy) == canonical

    def test_tenant_rename_only_on_tenant_scoped_entities(self):
        """Test that client becomes organization only where a tenant exists."""
        assert KeyRename("client", "organization") in key_renames("patient")
        assert KeyRename("client", "organization") not in key_renames("role")


class TestKeyRenames:
    """Test suite for key renaming."""

    def test_client_to_organization(self, org_id):
        """Test the tenant key rename."""
        upgraded = upgrade_legacy_payload("company", {"nombre": "Acme", "client": org_id})
        assert upgraded == {"nombre": "Acme", "organization": org_id}

    def test_equal_values_are_accepted(self, org_id):
        """Test that both keys may be present when they agree."""
        upgraded = upgrade_legacy_payload("company", {"client": org_id, "organization": org_id})
        assert upgraded == {"organization": org_id}

    def test_conflicting_values_raise(self, org_id, make_id):
        """Test that disagreeing keys are rejected."""
        with pytest.raises(LegacyPayloadError) as exc_info:
            upgrade_legacy_payload("company", {"client": org_id, "organization": make_id(9)})

        assert exc_info.value.legacy_key == "client"
        assert exc_info.value.canonical_key == "organization"

    def test_input_is_not_mutated(self, org_id):
        """Test that the caller's payload is left untouched."""
        payload = {"client": org_id, "settings": {"allowCrossClientAccess": True}}
        upgrade_legacy_payload("organization", payload)
        assert payload == {"client": org_id, "settings": {"allowCrossClientAccess": True}}

    def test_nested_rename(self):
        """Test the organization settings flag."""
        upgraded = upgrade_legacy_payload("client", {"name": "Clínica", "settings": {"allowCrossClientAccess": True}})
        assert upgraded["settings"] == {"allowCrossOrganizationAccess": True}

    def test_nested_conflict_path(self):
        """Test that a nested conflict reports the containing object."""
        with pytest.raises(LegacyPayloadError) as exc_info:
            upgrade_legacy_payload("organization", {
                "settings": {"allowCrossClientAccess": True, "allowCrossOrganizationAccess": False},
            })
        assert exc_info.value.path == ("settings",)

    def test_user_settings_to_preferences(self):
        """Test the user preferences rename."""
        upgraded = upgrade_legacy_payload("user", {"userName": "mgomez", "settings": {"theme": "dark"}})
        assert upgraded == {"userName": "mgomez", "preferences": {"theme": "dark"}}

    def test_admin_stats_clients(self):
        """Test the admin counter rename."""
        assert upgrade_legacy_payload("admin_stats", {"clients": 3}) == {"organizations": 3}

    def test_organization_has_no_client_key_rename(self, org_id):
        """Test that an organization payload keeps an unrelated client key."""
        assert upgrade_legacy_payload("organization", {"client": org_id}) == {"client": org_id}


class TestValueTranslation:
    """Test suite for enum token translation."""

    @pytest.mark.parametrize("word,code", [
        ("male", "M"),
        ("Masculino", "M"),
        (" femenino ", "F"),
        ("mujer", "F"),
        ("other", "Otro"),
        ("M", "M"),
    ])
    def test_sex_words(self, word, code):
        """Test descriptive sex words."""
        assert upgrade_legacy_payload("paciente", {"sexo": word})["sexo"] == code

    @pytest.mark.parametrize("word,label", [
        ("casado", "Casado/a"),
        ("Soltera", "Soltero/a"),
        ("widowed", "Viudo/a"),
        ("unión civil", "Unión Civil"),
    ])
    def test_marital_words(self, word, label):
        """Test descriptive marital status words."""
        assert upgrade_legacy_payload("patient", {"estadoCivil": word})["estadoCivil"] == label

    def test_unknown_words_pass_through(self):
        """Test that untranslatable values are left for the schema to reject."""
        assert upgrade_legacy_payload("patient", {"sexo": "x"})["sexo"] == "x"

    def test_notification_types(self):
        """Test the client-era notification vocabulary."""
        upgraded = upgrade_legacy_payload("notification", {"type": "user_joined_client", "relatedType": "client"})
        assert upgraded == {"type": "user_joined_organization", "relatedType": "organization"}

    def test_notification_types_are_exact_match(self):
        """Test that notification tokens are not case-folded."""
        upgraded = upgrade_legacy_payload("notification", {"type": "CLIENT_CREATED"})
        assert upgraded["type"] == "CLIENT_CREATED"

    def test_upgraded_payload_validates(self, patient_payload):
        """Test that a legacy patient form becomes a valid canonical form."""
        payload = {**patient_payload, "sexo": "masculino", "estadoCivil": "casada"}
        form = PatientForm.model_validate(upgrade_legacy_payload("patient", payload))
        assert form.sex.value == "M"


class TestPassthrough:
    """Test suite for inputs that need no translation."""

    @pytest.mark.parametrize("payload", [None, [1, 2], "text", 3])
    def test_non_object_payloads(self, payload):
        """Test that non-dict payloads are returned unchanged."""
        assert upgrade_legacy_payload("patient", payload) is payload

    def test_logs_summary(self, caplog, org_id):
        """Test that translations are summarized without values."""
        with caplog.at_level(logging.INFO, logger="medschemas.domain.compat"):
            upgrade_legacy_payload("patient", {"client": org_id, "sexo": "male"})

        assert "Upgraded 2 legacy field(s) in patient payload" in caplog.text
        assert org_id not in caplog.text

    def test_log_records_carry_context(self, caplog, org_id):
        """Test that each record names the entity and the legacy key."""
        with caplog.at_level(logging.DEBUG, logger="medschemas.domain.compat"):
            upgrade_legacy_payload("paciente", {"client": org_id, "sexo": "male"})

        renamed, translated, summary = caplog.records
        assert {record.entity for record in caplog.records} == {"patient"}
        assert renamed.legacy_key == "client"
        assert translated.legacy_key == "sexo"
        assert summary.translations == 2

    def test_canonical_payload_is_not_logged(self, caplog, org_id):
        """Test that a canonical payload produces no summary."""
        with caplog.at_level(logging.INFO, logger="medschemas.domain.compat"):
            upgrade_legacy_payload("patient", {"organization": org_id})
        assert caplog.text == ""
