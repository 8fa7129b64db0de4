"""Unit tests for client and entry ID generation."""

import random
import re
from datetime import datetime, timezone

import pytest

from fitcrm.core.clients.identifiers import ENTRY_ID_PREFIX, IdGenerator

FIXED_TIME = datetime(2025, 1, 1, 9, 0, tzinfo=timezone.utc)


class TestIdGenerator:
    """Tests for IdGenerator."""

    def test_client_id_format(self):
        """prefix, creation millis, nine base36 characters"""
        generated = IdGenerator().generate()
        assert re.fullmatch(r"client_\d+_[0-9a-z]{9}", generated)

    def test_entry_prefix(self):
        generated = IdGenerator(ENTRY_ID_PREFIX).generate()
        assert generated.startswith("entry_")

    def test_timestamp_comes_from_clock(self):
        ids = IdGenerator(clock=lambda: FIXED_TIME)
        millis = int(FIXED_TIME.timestamp() * 1000)
        assert ids.generate().split("_")[1] == str(millis)

    def test_pinned_clock_and_seed_are_deterministic(self):
        first = IdGenerator(rng=random.Random(7), clock=lambda: FIXED_TIME)
        second = IdGenerator(rng=random.Random(7), clock=lambda: FIXED_TIME)
        assert [first.generate() for _ in range(3)] == [second.generate() for _ in range(3)]

    def test_ids_in_same_millisecond_differ(self):
        ids = IdGenerator(rng=random.Random(7), clock=lambda: FIXED_TIME)
        generated = {ids.generate() for _ in range(100)}
        assert len(generated) == 100

    def test_empty_prefix_rejected(self):
        with pytest.raises(ValueError, match="prefix"):
            IdGenerator("")
