"""
Tests for the sign-up validation layer.
"""

from datetime import date

import pytest

from utils.validators import SignupValidationError, validate_signup


def _payload(**overrides):
    data = {
        "firstName": "Ada",
        "lastName": "Lovelace",
        "email": "ada@example.com",
        "password": "verysecret",
    }
    data.update(overrides)
    return {k: v for k, v in data.items() if v is not None}


class TestValidSignup:
    def test_minimal_payload(self):
        req = validate_signup(_payload())
        assert req.first_name == "Ada"
        assert req.email == "ada@example.com"
        assert req.phone is None
        assert req.church_role is None

    def test_optional_fields_are_normalized(self):
        req = validate_signup(_payload(
            phone="+2348012345678",
            dateOfBirth="1815-12-10",
            gender="female",
            address="12 St James's Square, London",
            churchRole="usher",
        ))
        assert req.date_of_birth == date(1815, 12, 10)
        assert req.gender == "female"
        assert req.church_role == "usher"

    def test_email_case_is_preserved(self):
        req = validate_signup(_payload(email="Ada.Lovelace@Example.COM"))
        assert req.email == "Ada.Lovelace@Example.COM"

    def test_unknown_keys_are_ignored(self):
        req = validate_signup(_payload(confirmPassword="verysecret"))
        assert not hasattr(req, "confirmPassword")

    def test_long_password_has_no_upper_bound(self):
        req = validate_signup(_payload(password="x" * 500))
        assert len(req.password) == 500


class TestInvalidSignup:
    def _errors(self, payload):
        with pytest.raises(SignupValidationError) as exc_info:
            validate_signup(payload)
        return exc_info.value.errors

    @pytest.mark.parametrize("field", ["firstName", "lastName", "email", "password"])
    def test_missing_required_field_is_named(self, field):
        payload = _payload()
        del payload[field]
        errors = self._errors(payload)
        assert any(e.startswith(field) for e in errors)

    def test_collects_every_violation(self):
        errors = self._errors(_payload(firstName="A", email="not-an-email", password="short"))
        fields = {e.split(":")[0] for e in errors}
        assert {"firstName", "email", "password"} <= fields

    @pytest.mark.parametrize("phone", ["0123456", "+0123", "12345678901234567", "12-34", "abc"])
    def test_bad_phone(self, phone):
        errors = self._errors(_payload(phone=phone))
        assert any(e.startswith("phone") for e in errors)

    @pytest.mark.parametrize("phone", ["1", "+15551234567", "9" * 16])
    def test_good_phone(self, phone):
        assert validate_signup(_payload(phone=phone)).phone == phone

    def test_gender_outside_closed_set(self):
        errors = self._errors(_payload(gender="unknown"))
        assert errors == ["gender: must be one of male, female, other"]

    def test_bad_date_of_birth(self):
        errors = self._errors(_payload(dateOfBirth="not-a-date"))
        assert any(e.startswith("dateOfBirth") for e in errors)

    def test_length_limits(self):
        errors = self._errors(_payload(
            firstName="x" * 101,
            address="x" * 501,
            churchRole="x" * 51,
        ))
        fields = {e.split(":")[0] for e in errors}
        assert fields == {"firstName", "address", "churchRole"}

    def test_non_string_name(self):
        errors = self._errors(_payload(firstName=42))
        assert any(e.startswith("firstName") for e in errors)

    @pytest.mark.parametrize("payload", [None, [], "text", 3])
    def test_non_object_payload(self, payload):
        assert self._errors(payload) == ["body: must be a JSON object"]

    def test_snake_case_keys_are_not_accepted(self):
        payload = {
            "first_name": "Ada",
            "last_name": "Lovelace",
            "email": "ada@example.com",
            "password": "verysecret",
        }
        fields = {e.split(":")[0] for e in self._errors(payload)}
        assert fields == {"firstName", "lastName"}

    def test_empty_optional_strings_are_rejected(self):
        fields = {e.split(":")[0] for e in self._errors(_payload(address="", churchRole=""))}
        assert fields == {"address", "churchRole"}
