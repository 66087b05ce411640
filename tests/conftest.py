"""Shared fixtures for the schema test suite."""

import pytest


@pytest.fixture
def make_id():
    """Build a deterministic 24-character identifier from an integer."""
    def _make_id(index: int) -> str:
        return f"{index:024x}"
    return _make_id


@pytest.fixture
def org_id(make_id):
    return make_id(1)


@pytest.fixture
def user_id(make_id):
    return make_id(2)


@pytest.fixture
def company_payload():
    """Company form payload as sent by the intake UI."""
    return {
        "nombre": "  Acme SA  ",
        "cuit": "30-71234567-9",
        "sector": "construccion",
        "telefono": "   ",
        "email": "",
        "contacto": "María Gómez",
    }


@pytest.fixture
def patient_payload(make_id):
    """Patient form payload (no tenant, no audit block)."""
    return {
        "apellido": " Pérez ",
        "nombres": "Juan Carlos",
        "dni": " 30123456 ",
        "edad": 42,
        "sexo": "M",
        "estadoCivil": "Casado/a",
        "domicilio": "Av. Siempreviva 742",
        "puesto": "Operario",
        "hijos": [{"edad": 7}, {"edad": 12, "observaciones": "  asma  "}],
        "empresa": make_id(3),
    }


@pytest.fixture
def audit_payload(user_id):
    """Minimal audit-log creation payload."""
    return {
        "action": "VIEW",
        "resource": "PATIENT",
        "description": "Consulta de historia clínica",
        "userId": user_id,
        "ipAddress": "10.0.0.12",
    }
