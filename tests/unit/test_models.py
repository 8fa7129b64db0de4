"""
Unit tests for the client domain models and date helpers.

These tests verify the core models without touching external services
(no HTTP, no storage, no file system).

Testing philosophy:
- Test behavior, not implementation
- Each test should have a clear "given/when/then" structure
- Use descriptive names that explain what we're testing
- Prefer real objects over mocks where practical
"""

from datetime import date, datetime, timezone

import pytest

from fitcrm.core.clients.formatting import (
    format_date,
    format_date_for_input,
    format_timestamp,
    parse_date,
    parse_timestamp,
)
from fitcrm.core.clients.models import Client, ExerciseEntry, Gender, Goal, utc_now


def make_client(**overrides) -> Client:
    values = {
        "id": "client_1735722000000_abcdefghi",
        "full_name": "Omar Hassan",
        "age": 32,
        "gender": "Male",
        "email": "omar.hassan@example.com",
        "phone": "+20 12 2345 6789",
        "goal": "Muscle Gain",
        "start_date": "2025-08-15",
        "created_at": "2025-08-15T10:00:00.000Z",
    }
    values.update(overrides)
    return Client(**values)


# ---------------------------------------------------------------------------
# Client and ExerciseEntry Tests
# ---------------------------------------------------------------------------

class TestClient:
    """Tests for the Client aggregate."""

    def test_string_fields_are_coerced(self):
        """Records from forms or storage can be passed straight in."""
        client = make_client()

        assert client.gender is Gender.MALE
        assert client.goal is Goal.MUSCLE_GAIN
        assert client.start_date == date(2025, 8, 15)
        assert client.created_at == datetime(2025, 8, 15, 10, 0, tzinfo=timezone.utc)
        assert client.updated_at is None

    def test_unknown_goal_is_rejected(self):
        with pytest.raises(ValueError):
            make_client(goal="Marathon")

    def test_goal_display_prefers_free_text(self):
        """The coach's own wording wins over the category label."""
        client = make_client(goal="Other", goal_text="Train for a 10k")
        assert client.goal_display == "Train for a 10k"

    def test_goal_display_falls_back_to_category(self):
        client = make_client(goal_text="")
        assert client.goal_display == "Muscle Gain"

    def test_history_defaults_to_empty(self):
        client = make_client()
        assert client.exercise_history == []
        assert client.entry_ids == set()

    def test_entry_ids_cover_history(self):
        client = make_client(exercise_history=[
            ExerciseEntry(id="entry_1", date="2025-09-01", title="Cardio"),
            ExerciseEntry(id="entry_2", date="2025-09-03", title="Legs"),
        ])
        assert client.entry_ids == {"entry_1", "entry_2"}


class TestExerciseEntry:
    """Tests for the ExerciseEntry model."""

    def test_date_string_is_parsed(self):
        entry = ExerciseEntry(id="entry_1", date="2025-09-12", title="HIIT Exercise")
        assert entry.date == date(2025, 9, 12)
        assert entry.notes == ""
        assert entry.tags == []

    def test_tags_are_copied(self):
        """Mutating the caller's list must not reach into the entry."""
        tags = ["Burpees"]
        entry = ExerciseEntry(id="entry_1", date="2025-09-12", title="HIIT", tags=tags)
        tags.append("Jump Rope")
        assert entry.tags == ["Burpees"]


def test_utc_now_has_millisecond_precision():
    now = utc_now()
    assert now.tzinfo is not None
    assert now.microsecond % 1000 == 0


# ---------------------------------------------------------------------------
# Formatting Tests
# ---------------------------------------------------------------------------

class TestTimestamps:
    """Tests for the stored timestamp format."""

    def test_format_uses_milliseconds_and_z(self):
        value = datetime(2025, 1, 1, 12, 0, 0, 123456, tzinfo=timezone.utc)
        assert format_timestamp(value) == "2025-01-01T12:00:00.123Z"

    def test_naive_datetime_is_taken_as_utc(self):
        assert format_timestamp(datetime(2025, 1, 1)) == "2025-01-01T00:00:00.000Z"

    def test_parse_z_suffix(self):
        parsed = parse_timestamp("2025-01-01T12:00:00.123Z")
        assert parsed == datetime(2025, 1, 1, 12, 0, 0, 123000, tzinfo=timezone.utc)

    def test_parse_then_format_is_stable(self):
        text = "2025-09-01T08:30:00.250Z"
        assert format_timestamp(parse_timestamp(text)) == text


class TestDates:
    """Tests for date parsing and display."""

    def test_parse_plain_date(self):
        assert parse_date("2025-01-05") == date(2025, 1, 5)

    def test_parse_keeps_date_part_of_timestamp(self):
        assert parse_date("2025-01-05T23:00:00.000Z") == date(2025, 1, 5)

    def test_parse_rejects_garbage(self):
        with pytest.raises(ValueError):
            parse_date("05/01/2025")

    def test_long_display_form(self):
        assert format_date("2025-01-05") == "January 5, 2025"
        assert format_date(date(2025, 12, 31)) == "December 31, 2025"

    def test_missing_date_displays_placeholder(self):
        assert format_date(None) == "N/A"
        assert format_date("") == "N/A"

    def test_input_form(self):
        assert format_date_for_input(datetime(2025, 3, 7, 15, 0)) == "2025-03-07"
        assert format_date_for_input(None) == ""
