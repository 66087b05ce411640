"""Tests for admin and dashboard aggregate schemas."""

from medschemas.domain.admin import (
    ActivityLog,
    ActivityLogDocument,
    ActivityLogForm,
    AdminStats,
    DashboardStats,
    UserManagementFilters,
)
from medschemas.domain.enums import UserStatusFilter
from medschemas.domain.validation import ErrorKind, validate_payload


class TestAdminStats:
    """Test suite for the admin overview counters."""

    def test_counts(self):
        """Test a complete counter block."""
        stats = AdminStats.model_validate({"users": 12, "roles": 4, "organizations": 2, "teams": 3, "permissions": 21})
        assert stats.permissions == 21

    def test_negative_counts_rejected(self):
        """Test that counters are non-negative."""
        result = validate_payload(AdminStats, {"users": -1, "roles": 0, "organizations": 0, "teams": 0, "permissions": 0})
        assert [error.path for error in result.errors] == [("users",)]

    def test_all_counters_required(self):
        """Test that a missing counter is a shape error."""
        result = validate_payload(AdminStats, {"users": 1})
        assert len(result.errors) == 4

    def test_counts_must_be_integers(self):
        """Test that booleans and numeric strings are not coerced."""
        result = validate_payload(AdminStats, {"users": True, "roles": "4", "organizations": 2, "teams": 3, "permissions": 21})

        assert [error.path for error in result.errors] == [("users",), ("roles",)]
        assert {error.kind for error in result.errors} == {ErrorKind.SHAPE}


class TestDashboardStats:
    """Test suite for the tenant dashboard."""

    def test_without_relationships(self):
        """Test the counters-only form."""
        stats = DashboardStats.model_validate({"pacientes": 40, "empresas": 3, "historiasClinicas": 55, "usuarios": 6})

        assert stats.clinical_records == 55
        assert stats.relationships is None

    def test_relationships(self, make_id):
        """Test the nested breakdown and its wire keys."""
        stats = DashboardStats.model_validate({
            "pacientes": 1,
            "empresas": 1,
            "historiasClinicas": 2,
            "usuarios": 1,
            "relationships": {
                "pacientesByEmpresa": [{"empresaName": "Acme SA", "count": 1, "empresaId": make_id(3)}],
                "historiasByPaciente": [{"pacienteId": make_id(5), "pacienteName": "Pérez, Juan", "count": 2}],
                "statsByUser": {
                    "pacientes": [{"userId": make_id(2), "userName": "mgomez", "count": 1}],
                    "empresas": [],
                    "historias": [],
                },
            },
        })

        relationships = stats.relationships
        assert relationships.patients_by_company[0].company_name == "Acme SA"
        assert relationships.records_by_patient[0].count == 2
        assert relationships.stats_by_user.patients[0].user_name == "mgomez"

        wire = stats.model_dump(by_alias=True)
        assert set(wire["relationships"]) == {"pacientesByEmpresa", "historiasByPaciente", "statsByUser"}


class TestActivityLog:
    """Test suite for activity log entries."""

    def test_form_has_no_tenant_or_id(self):
        """Test the fields of the create form."""
        fields = set(ActivityLogForm.model_fields)

        assert "organization" not in fields
        assert "id" not in fields
        assert {"user", "action", "resource", "timestamp"} <= fields

    def test_canonical(self, user_id, org_id):
        """Test a stored entry and its optional blanks."""
        entry = ActivityLog.model_validate({
            "user": user_id,
            "action": "login",
            "resource": "session",
            "timestamp": "2024-03-15T10:00:00Z",
            "ip": " ",
            "organization": org_id,
        })
        assert entry.ip is None
        assert entry.details is None

    def test_document_requires_id(self, user_id, org_id):
        """Test the persisted shape."""
        result = validate_payload(ActivityLogDocument, {
            "user": user_id,
            "action": "login",
            "resource": "session",
            "timestamp": "2024-03-15T10:00:00Z",
            "organization": org_id,
        })
        assert result.errors_at("_id")


class TestUserManagementFilters:
    """Test suite for the admin user list filters."""

    def test_admin_page_size(self):
        """Test the larger admin default page size."""
        filters = UserManagementFilters()

        assert filters.limit == 50
        assert filters.page == 1
        assert filters.status is UserStatusFilter.ALL

    def test_status_vocabulary(self):
        """Test status filter values."""
        assert UserManagementFilters.model_validate({"status": "inactive"}).status is UserStatusFilter.INACTIVE
        assert validate_payload(UserManagementFilters, {"status": "banned"}).is_failure()
