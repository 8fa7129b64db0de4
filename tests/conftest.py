"""
Shared fixtures.

Everything here is in-memory: no files, no network. Clocks and random
sources are pinned so IDs and timestamps are predictable.
"""

import random
from datetime import datetime, timedelta, timezone

import pytest

from fitcrm.core.clients.identifiers import CLIENT_ID_PREFIX, ENTRY_ID_PREFIX, IdGenerator
from fitcrm.core.clients.repository import ClientRepository
from fitcrm.infrastructure.storage.client import MemoryKeyValueStore
from fitcrm.infrastructure.storage.clients import JsonClientStore


class TickingClock:
    """Returns a time one second later on every call."""

    def __init__(self, start: datetime) -> None:
        self._now = start

    def __call__(self) -> datetime:
        current = self._now
        self._now = current + timedelta(seconds=1)
        return current


@pytest.fixture
def clock() -> TickingClock:
    return TickingClock(datetime(2025, 1, 1, 9, 0, tzinfo=timezone.utc))


@pytest.fixture
def key_value_store() -> MemoryKeyValueStore:
    return MemoryKeyValueStore()


@pytest.fixture
def client_store(key_value_store) -> JsonClientStore:
    return JsonClientStore(key_value_store)


@pytest.fixture
def repository(client_store, clock) -> ClientRepository:
    return ClientRepository(
        client_store,
        id_generator=IdGenerator(CLIENT_ID_PREFIX, rng=random.Random(1), clock=clock),
        entry_id_generator=IdGenerator(ENTRY_ID_PREFIX, rng=random.Random(2), clock=clock),
        clock=clock,
    )


@pytest.fixture
def client_fields() -> dict:
    """Repository fields for a valid client."""
    return {
        "full_name": "Sara Ahmed",
        "age": 28,
        "gender": "Female",
        "email": "sara.ahmed@example.com",
        "phone": "+20 10 1234 5678",
        "goal": "Weight Loss",
        "goal_text": "",
        "start_date": "2025-09-01",
    }


@pytest.fixture
def valid_form() -> dict:
    """A client form submission that passes validation."""
    return {
        "fullName": "Al",
        "age": "30",
        "gender": "Male",
        "email": "a@b.co",
        "phone": "1234567",
        "goal": "Weight Loss",
        "startDate": "2025-01-01",
    }
