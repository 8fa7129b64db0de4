"""Unit tests for client form validation."""

from datetime import date

import pytest

from fitcrm.core.clients.models import Gender, Goal
from fitcrm.core.clients.validation import (
    extract_client_fields,
    is_valid_email,
    is_valid_phone,
    validate_client_form,
)


class TestValidateClientForm:
    """Tests for validate_client_form."""

    def test_valid_form_passes(self, valid_form):
        result = validate_client_form(valid_form)
        assert result.valid is True
        assert result.errors == {}

    def test_every_field_reported_at_once(self):
        """All problems come back together, not just the first one."""
        result = validate_client_form({
            "fullName": "A",
            "age": "0",
            "gender": "",
            "email": "a@b",
            "phone": "12",
            "goal": "",
            "startDate": "",
        })

        assert result.valid is False
        assert result.errors == {
            "fullName": "Name must be at least 2 characters",
            "age": "Age must be between 1 and 120",
            "gender": "Please select a gender",
            "email": "Please enter a valid email address",
            "phone": "Please enter a valid phone number",
            "goal": "Please select a fitness goal",
            "startDate": "Membership start date is required",
        }

    def test_empty_form_reports_required_fields(self):
        errors = validate_client_form({}).errors
        assert errors["fullName"] == "Full name is required"
        assert errors["age"] == "Age is required"
        assert errors["email"] == "Email is required"
        assert errors["phone"] == "Phone number is required"

    def test_non_text_values_reported_per_field(self, valid_form):
        """Numbers and lists where text belongs are treated as missing."""
        valid_form.update({"fullName": 12, "email": ["a@b.co"], "age": 30.5})

        assert validate_client_form(valid_form).errors == {
            "fullName": "Full name is required",
            "email": "Email is required",
            "age": "Age must be a whole number",
        }

    def test_name_is_trimmed_before_length_check(self, valid_form):
        valid_form["fullName"] = "  A  "
        assert "fullName" in validate_client_form(valid_form).errors

    @pytest.mark.parametrize("age", ["1", "120", 45, " 30 "])
    def test_age_in_range_accepted(self, valid_form, age):
        valid_form["age"] = age
        assert "age" not in validate_client_form(valid_form).errors

    @pytest.mark.parametrize("age", ["0", "121", -3])
    def test_age_out_of_range(self, valid_form, age):
        valid_form["age"] = age
        assert validate_client_form(valid_form).errors["age"] == "Age must be between 1 and 120"

    @pytest.mark.parametrize("age", ["thirty", "30.5", True])
    def test_age_must_be_whole_number(self, valid_form, age):
        valid_form["age"] = age
        assert validate_client_form(valid_form).errors["age"] == "Age must be a whole number"

    def test_unknown_gender_rejected(self, valid_form):
        valid_form["gender"] = "Robot"
        assert validate_client_form(valid_form).errors == {"gender": "Please select a gender"}

    def test_enum_values_accepted(self, valid_form):
        valid_form["gender"] = Gender.FEMALE
        valid_form["goal"] = Goal.OTHER
        assert validate_client_form(valid_form).valid

    def test_unparseable_start_date(self, valid_form):
        valid_form["startDate"] = "2025-13-40"
        assert validate_client_form(valid_form).errors == {"startDate": "Please enter a valid date"}

    def test_date_object_accepted(self, valid_form):
        valid_form["startDate"] = date(2024, 2, 29)
        assert validate_client_form(valid_form).valid


class TestPatterns:
    """Tests for the email and phone checks."""

    @pytest.mark.parametrize("email", ["a@b.co", "first.last@example.com"])
    def test_valid_emails(self, email):
        assert is_valid_email(email)

    @pytest.mark.parametrize("email", ["a@b", "a b@c.de", "@b.co", "a@@b.co"])
    def test_invalid_emails(self, email):
        assert not is_valid_email(email)

    @pytest.mark.parametrize("phone", ["1234567", "+20 10 1234 5678", "(010) 123-4567"])
    def test_valid_phones(self, phone):
        assert is_valid_phone(phone)

    @pytest.mark.parametrize("phone", ["123456", "123456789012345678901", "call me"])
    def test_invalid_phones(self, phone):
        assert not is_valid_phone(phone)


class TestExtractClientFields:
    """Tests for turning a valid form into repository fields."""

    def test_fields_are_converted(self, valid_form):
        valid_form["fullName"] = "  Al  "
        fields = extract_client_fields(valid_form)

        assert fields == {
            "full_name": "Al",
            "age": 30,
            "gender": Gender.MALE,
            "email": "a@b.co",
            "phone": "1234567",
            "goal": Goal.WEIGHT_LOSS,
            "goal_text": "",
            "start_date": date(2025, 1, 1),
        }

    def test_bad_age_raises(self, valid_form):
        valid_form["age"] = "old"
        with pytest.raises(ValueError):
            extract_client_fields(valid_form)
