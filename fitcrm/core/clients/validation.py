"""
Client form validation.

Works on the raw values a form submits, keyed by the form's field names
(``fullName``, ``startDate`` and so on). Every rule runs on its own so
the caller gets all problems at once, not just the first one.

Validation never touches storage. Showing the messages next to the
inputs is the caller's job.
"""

import re
from dataclasses import dataclass, field
from datetime import date
from typing import Any, Mapping, Optional

from .formatting import parse_date
from .models import Gender, Goal

EMAIL_PATTERN = re.compile(r"[^\s@]+@[^\s@]+\.[^\s@]+")
PHONE_PATTERN = re.compile(r"[0-9\s\-()+]{7,20}")
INTEGER_PATTERN = re.compile(r"[+-]?[0-9]+")

MIN_NAME_LENGTH = 2
MIN_AGE = 1
MAX_AGE = 120

GENDER_VALUES = frozenset(g.value for g in Gender)
GOAL_VALUES = frozenset(g.value for g in Goal)


@dataclass
class ValidationResult:
    """Outcome of validating a form: a flag plus field name -> message."""
    valid: bool
    errors: dict[str, str] = field(default_factory=dict)


def _text(form: Mapping[str, Any], name: str) -> str:
    """
    Trimmed string value of a text field.

    Missing values and values that aren't text (numbers, lists, objects
    from a JSON body) read as empty.
    """
    value = form.get(name)
    if isinstance(value, Gender) or isinstance(value, Goal):
        return value.value
    if not isinstance(value, str):
        return ""
    return value.strip()


def _parse_age(value: Any) -> Optional[int]:
    if isinstance(value, bool):
        return None
    if isinstance(value, int):
        return value
    text = str(value).strip()
    if not INTEGER_PATTERN.fullmatch(text):
        return None
    return int(text)


def is_valid_email(email: str) -> bool:
    return EMAIL_PATTERN.fullmatch(email) is not None


def is_valid_phone(phone: str) -> bool:
    """Digits, spaces, hyphens, parentheses and plus; 7 to 20 characters."""
    return PHONE_PATTERN.fullmatch(phone) is not None


def validate_client_form(form: Mapping[str, Any]) -> ValidationResult:
    errors: dict[str, str] = {}

    full_name = _text(form, "fullName")
    if not full_name:
        errors["fullName"] = "Full name is required"
    elif len(full_name) < MIN_NAME_LENGTH:
        errors["fullName"] = "Name must be at least 2 characters"

    raw_age = form.get("age")
    if raw_age is None or (isinstance(raw_age, str) and not raw_age.strip()):
        errors["age"] = "Age is required"
    else:
        age = _parse_age(raw_age)
        if age is None:
            errors["age"] = "Age must be a whole number"
        elif not MIN_AGE <= age <= MAX_AGE:
            errors["age"] = "Age must be between 1 and 120"

    if _text(form, "gender") not in GENDER_VALUES:
        errors["gender"] = "Please select a gender"

    email = _text(form, "email")
    if not email:
        errors["email"] = "Email is required"
    elif not is_valid_email(email):
        errors["email"] = "Please enter a valid email address"

    phone = _text(form, "phone")
    if not phone:
        errors["phone"] = "Phone number is required"
    elif not is_valid_phone(phone):
        errors["phone"] = "Please enter a valid phone number"

    if _text(form, "goal") not in GOAL_VALUES:
        errors["goal"] = "Please select a fitness goal"

    # No range check; any calendar date is accepted
    if not isinstance(form.get("startDate"), date):
        start_date = _text(form, "startDate")
        if not start_date:
            errors["startDate"] = "Membership start date is required"
        else:
            try:
                parse_date(start_date)
            except ValueError:
                errors["startDate"] = "Please enter a valid date"

    return ValidationResult(valid=not errors, errors=errors)


def extract_client_fields(form: Mapping[str, Any]) -> dict[str, Any]:
    """
    Turn a validated form into repository fields.

    Strings are trimmed and age is parsed. Call this only after
    ``validate_client_form`` passed; bad values raise ValueError.
    """
    age = _parse_age(form.get("age"))
    if age is None:
        raise ValueError("age is not a whole number")

    start_date = form.get("startDate")
    if not isinstance(start_date, date):
        start_date = parse_date(_text(form, "startDate"))

    return {
        "full_name": _text(form, "fullName"),
        "age": age,
        "gender": Gender(_text(form, "gender")),
        "email": _text(form, "email"),
        "phone": _text(form, "phone"),
        "goal": Goal(_text(form, "goal")),
        "goal_text": _text(form, "goalText"),
        "start_date": start_date,
    }
