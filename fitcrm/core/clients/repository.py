"""
Client repository.

The repository owns every change to the client collection. Each call
reads the whole collection from the store, changes an in-memory copy and
writes the whole collection back. There is no locking: two writers
working from the same snapshot will silently overwrite each other, and
the last save wins. That is acceptable for a single coach working in a
single place, which is the only setup this serves.

Lookups that miss return ``None`` rather than raising. Callers check
before use.
"""

import dataclasses
import logging
from datetime import datetime
from typing import Any, Callable, Mapping, Optional, Protocol

from .identifiers import CLIENT_ID_PREFIX, ENTRY_ID_PREFIX, IdGenerator
from .models import Client, ExerciseEntry, utc_now

logger = logging.getLogger(__name__)


# ---------------------------------------------------------------------------
# Protocols (interfaces)
# ---------------------------------------------------------------------------

class ClientStore(Protocol):
    """
    Read-all / write-all access to the persisted collection.

    Using a protocol here means the repository doesn't know whether the
    collection lives in a file, an R2 bucket or a test double.
    """

    def load(self) -> list[Client]:
        """Return every stored client; an empty or unreadable store gives []."""
        ...

    def save(self, clients: list[Client]) -> None:
        """Replace the stored collection."""
        ...


# Managed by the repository, never taken from callers
MANAGED_FIELDS = frozenset({"id", "created_at", "updated_at"})

CLIENT_FIELDS = frozenset(f.name for f in dataclasses.fields(Client))
ENTRY_FIELDS = frozenset(f.name for f in dataclasses.fields(ExerciseEntry)) - {"id"}


def _check_fields(fields: Mapping[str, Any], allowed: frozenset) -> None:
    managed = sorted(set(fields) & MANAGED_FIELDS)
    if managed:
        raise ValueError(f"Field cannot be set directly: {', '.join(managed)}")
    unknown = sorted(set(fields) - allowed)
    if unknown:
        raise ValueError(f"Unknown field: {', '.join(unknown)}")


class ClientRepository:
    """
    CRUD operations over the client collection.

    Field mappings use the Client attribute names (``full_name``,
    ``start_date`` and so on). Updates are shallow merges: supplied fields
    overwrite, anything not supplied is kept. There is no way to "unset"
    a field other than supplying an explicit empty value.
    """

    def __init__(
        self,
        store: ClientStore,
        id_generator: Optional[IdGenerator] = None,
        entry_id_generator: Optional[IdGenerator] = None,
        clock: Optional[Callable[[], datetime]] = None,
    ) -> None:
        self._store = store
        self._clock = clock or utc_now
        self._ids = id_generator or IdGenerator(CLIENT_ID_PREFIX, clock=self._clock)
        self._entry_ids = entry_id_generator or IdGenerator(ENTRY_ID_PREFIX, clock=self._clock)

    def list_clients(self) -> list[Client]:
        return self._store.load()

    def get_by_id(self, client_id: str) -> Optional[Client]:
        for client in self._store.load():
            if client.id == client_id:
                return client
        return None

    def search(self, query: str) -> list[Client]:
        """
        Case-insensitive substring match on the client's full name.

        A blank query returns the whole collection unfiltered.
        """
        clients = self._store.load()
        if not query or not query.strip():
            return clients

        needle = query.lower()
        return [c for c in clients if needle in c.full_name.lower()]

    def add(self, fields: Mapping[str, Any]) -> Client:
        """
        Store a new client and return the stored record.

        The repository assigns the id and creation time and starts the
        client with an empty exercise history.
        """
        _check_fields(fields, CLIENT_FIELDS)
        values = dict(fields)
        values["exercise_history"] = []

        clients = self._store.load()
        client = Client(
            id=self._ids.generate(),
            created_at=self._clock(),
            **values,
        )
        clients.append(client)
        self._store.save(clients)

        logger.info(
            "Added client",
            extra={"client_id": client.id, "total_clients": len(clients)}
        )

        return client

    def update(self, client_id: str, fields: Mapping[str, Any]) -> Optional[Client]:
        """
        Shallow-merge fields over an existing client.

        Returns the updated record, or None when no client has that id.
        ``updated_at`` is stamped even when no fields are supplied.
        """
        _check_fields(fields, CLIENT_FIELDS)

        clients = self._store.load()
        index = self._index_of(clients, client_id)
        if index is None:
            logger.debug("Update skipped, client not found", extra={"client_id": client_id})
            return None

        updated = dataclasses.replace(
            clients[index],
            updated_at=self._clock(),
            **fields,
        )
        clients[index] = updated
        self._store.save(clients)

        logger.info(
            "Updated client",
            extra={"client_id": client_id, "fields": sorted(fields)}
        )

        return updated

    def delete(self, client_id: str) -> bool:
        """Remove a client. Returns False, and writes nothing, if none matched."""
        clients = self._store.load()
        remaining = [c for c in clients if c.id != client_id]
        if len(remaining) == len(clients):
            return False

        self._store.save(remaining)

        logger.info(
            "Deleted client",
            extra={"client_id": client_id, "total_clients": len(remaining)}
        )

        return True

    def add_history_entry(
        self,
        client_id: str,
        entry_fields: Mapping[str, Any],
    ) -> Optional[Client]:
        """
        Append a workout to a client's exercise history.

        Entries keep insertion order; they are not sorted by date.
        Persists through ``update``, so ``updated_at`` is stamped too.
        """
        _check_fields(entry_fields, ENTRY_FIELDS)

        client = self.get_by_id(client_id)
        if client is None:
            return None

        existing_ids = client.entry_ids
        entry_id = self._entry_ids.generate()
        while entry_id in existing_ids:
            entry_id = self._entry_ids.generate()

        entry = ExerciseEntry(id=entry_id, **entry_fields)
        history = client.exercise_history + [entry]

        return self.update(client_id, {"exercise_history": history})

    def _index_of(self, clients: list[Client], client_id: str) -> Optional[int]:
        for i, client in enumerate(clients):
            if client.id == client_id:
                return i
        return None
