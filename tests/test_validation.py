"""Tests for login form validation messages."""
from src.services.validation import validate_email, validate_login_form, validate_password


class TestValidateEmail:

    def test_empty(self):
        assert validate_email("") == "El email es obligatorio."
        assert validate_email("   ") == "El email es obligatorio."
        assert validate_email(None) == "El email es obligatorio."

    def test_malformed(self):
        assert validate_email("ana") == "Introduce un email válido."
        assert validate_email("ana@example") == "Introduce un email válido."
        assert validate_email("ana @example.com") == "Introduce un email válido."

    def test_too_long(self):
        email = "a" * 250 + "@x.com"
        assert validate_email(email) == "Email demasiado largo."

    def test_valid_with_surrounding_spaces(self):
        assert validate_email("  ana@example.com  ") is None


class TestValidatePassword:

    def test_empty(self):
        assert validate_password("") == "La contraseña es obligatoria."

    def test_length_bounds(self):
        assert validate_password("1234567") == "Mínimo 8 caracteres."
        assert validate_password("x" * 73) == "Máximo 72 caracteres."
        assert validate_password("12345678") is None
        assert validate_password("x" * 72) is None


def test_login_form_collects_all_errors():
    assert validate_login_form("", "") == {
        "email": "El email es obligatorio.",
        "password": "La contraseña es obligatoria.",
    }
    assert validate_login_form("ana@example.com", "short") == {"password": "Mínimo 8 caracteres."}
    assert validate_login_form("ana@example.com", "long-enough") == {}
