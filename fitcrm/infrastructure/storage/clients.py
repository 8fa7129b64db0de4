"""
Persistence adapter for the client collection.

Stores the full collection as one JSON array under one key. The adapter
translates between the domain models and the stored records, which use
camelCase field names:

    [{"id", "fullName", "age", "gender", "email", "phone", "goal",
      "goalText", "startDate", "createdAt", "updatedAt"?,
      "exerciseHistory": [{"id", "date", "title", "notes", "tags"}]}]

Those names are a compatibility surface; anything already reading the
stored collection depends on them.

Loading fails soft. A missing key, malformed JSON or records that don't
decode all read as an empty collection. No attempt is made to salvage
the readable records out of a damaged blob.
"""

import json
import logging
from typing import Any, Optional

from ...core.clients.formatting import format_timestamp
from ...core.clients.models import Client, ExerciseEntry
from .client import KeyValueStore

logger = logging.getLogger(__name__)

DEFAULT_STORAGE_KEY = "fitcrm_clients"


def entry_to_record(entry: ExerciseEntry) -> dict[str, Any]:
    return {
        "id": entry.id,
        "date": entry.date.isoformat(),
        "title": entry.title,
        "notes": entry.notes,
        "tags": list(entry.tags),
    }


def _string(record: dict[str, Any], name: str) -> str:
    value = record[name]
    if not isinstance(value, str):
        raise TypeError(f"{name} must be a string, got {type(value).__name__}")
    return value


def _optional_string(record: dict[str, Any], name: str) -> Optional[str]:
    if record.get(name) is None:
        return None
    return _string(record, name)


def entry_from_record(record: dict[str, Any]) -> ExerciseEntry:
    tags = record.get("tags") or []
    if not isinstance(tags, list) or not all(isinstance(t, str) for t in tags):
        raise TypeError("tags must be a list of strings")
    return ExerciseEntry(
        id=_string(record, "id"),
        date=_string(record, "date"),
        title=_string(record, "title"),
        notes=_optional_string(record, "notes") or "",
        tags=tags,
    )


def client_to_record(client: Client) -> dict[str, Any]:
    record = {
        "id": client.id,
        "fullName": client.full_name,
        "age": client.age,
        "gender": client.gender.value,
        "email": client.email,
        "phone": client.phone,
        "goal": client.goal.value,
        "goalText": client.goal_text,
        "startDate": client.start_date.isoformat(),
        "createdAt": format_timestamp(client.created_at),
    }
    # Absent until the first update
    if client.updated_at is not None:
        record["updatedAt"] = format_timestamp(client.updated_at)
    record["exerciseHistory"] = [
        entry_to_record(entry) for entry in client.exercise_history
    ]
    return record


def client_from_record(record: dict[str, Any]) -> Client:
    history = record.get("exerciseHistory") or []
    if not isinstance(history, list):
        raise TypeError("exerciseHistory must be a list")
    return Client(
        id=_string(record, "id"),
        full_name=_string(record, "fullName"),
        age=int(record["age"]),
        gender=record["gender"],
        email=_string(record, "email"),
        phone=_string(record, "phone"),
        goal=record["goal"],
        goal_text=_optional_string(record, "goalText") or "",
        start_date=_string(record, "startDate"),
        created_at=_string(record, "createdAt"),
        updated_at=_optional_string(record, "updatedAt"),
        exercise_history=[entry_from_record(entry) for entry in history],
    )


class JsonClientStore:
    """
    Reads and writes the client collection as a single JSON blob.

    Implements the ClientStore protocol the repository depends on.
    """

    def __init__(self, store: KeyValueStore, key: str = DEFAULT_STORAGE_KEY) -> None:
        self._store = store
        self._key = key

    @property
    def key(self) -> str:
        return self._key

    def load(self) -> list[Client]:
        raw = self._store.get(self._key)
        if raw is None:
            return []

        try:
            records = json.loads(raw)
        except json.JSONDecodeError as e:
            logger.warning(
                "Stored client collection is not valid JSON, treating as empty",
                extra={"key": self._key, "error": str(e)}
            )
            return []

        if not isinstance(records, list):
            logger.warning(
                "Stored client collection is not a list, treating as empty",
                extra={"key": self._key, "type": type(records).__name__}
            )
            return []

        try:
            return [client_from_record(record) for record in records]
        except (KeyError, TypeError, ValueError, AttributeError) as e:
            logger.warning(
                "Stored client records could not be decoded, treating as empty",
                extra={"key": self._key, "error": str(e)}
            )
            return []

    def save(self, clients: list[Client]) -> None:
        payload = json.dumps([client_to_record(c) for c in clients])
        self._store.set(self._key, payload)

        logger.debug(
            "Saved client collection",
            extra={"key": self._key, "count": len(clients)}
        )
