"""Tests for registration and password validation schemas."""

import pytest
from pydantic import ValidationError

from app.modules.users.schemas import RegisterRequest, validate_password_complexity


def _payload(**overrides):
    data = {
        "email": "owner@muralla.cl",
        "password": "SecretoMuralla1",
        "full_name": "Dueña",
        "tenant_name": "Muralla Café",
    }
    data.update(overrides)
    return data


def test_password_complexity_accepts_mixed_password():
    assert validate_password_complexity("SecretoMuralla1") == "SecretoMuralla1"


def test_password_complexity_names_missing_rules():
    with pytest.raises(ValueError, match="uppercase letter, digit"):
        validate_password_complexity("secretosecreto")


def test_register_accepts_valid_rut():
    request = RegisterRequest(**_payload(tenant_rut="76.123.456-0"))
    assert request.tenant_rut == "76.123.456-0"


def test_register_rut_is_optional():
    assert RegisterRequest(**_payload()).tenant_rut is None


def test_register_rejects_bad_rut_check_digit():
    with pytest.raises(ValidationError, match="Invalid RUT"):
        RegisterRequest(**_payload(tenant_rut="76.123.456-1"))


def test_register_rejects_weak_password():
    with pytest.raises(ValidationError):
        RegisterRequest(**_payload(password="alllowercase1"))
