"""In-memory client store ordered by most recent activity."""

import threading
import time
from typing import Any, Callable, Iterable

from app.domain.models.client import Client


class ClientStore:
    """Authoritative ordered collection of clients.

    Index 0 is the most recently created or upserted client. Data lives for
    the lifetime of the process only; nothing is persisted across restarts.

    Single reads and writes are atomic. Callers that find a client and then
    mutate it must hold ``lock`` across both steps.
    """

    def __init__(self, clients: Iterable[Client] | None = None):
        """Initialize the store, optionally with clients in display order."""
        self.lock = threading.RLock()
        self._clients: list[Client] = list(clients or [])
        self._last_id = 0

    def __len__(self) -> int:
        return len(self._clients)

    def list(self) -> list[Client]:
        """Return a snapshot of all clients in store order."""
        with self.lock:
            return list(self._clients)

    def insert_front(self, client: Client) -> Client:
        """Prepend a client. No uniqueness check is performed."""
        with self.lock:
            self._clients.insert(0, client)
        return client

    def find_by_predicate(self, pred: Callable[[Client], bool]) -> Client | None:
        """Return the first client in store order matching ``pred``."""
        with self.lock:
            for client in self._clients:
                if pred(client):
                    return client
        return None

    def get_by_id(self, client_id: str) -> Client | None:
        """Get client by id."""
        return self.find_by_predicate(lambda c: c.id == client_id)

    def remove_by_id(self, client_id: str) -> bool:
        """Remove a client if present.

        Returns:
            True if a client was removed, False if the id was unknown
        """
        with self.lock:
            index = self._index_of(client_id)
            if index is None:
                return False
            del self._clients[index]
            return True

    def replace_by_id(self, client_id: str, patch: dict[str, Any]) -> Client | None:
        """Merge ``patch`` into an existing client without moving it.

        The patch is keyed by field name and validated together with the
        existing record. ``id`` is never changed.

        Returns:
            The merged client, or None if the id was unknown

        Raises:
            pydantic.ValidationError: If the merged record is invalid
        """
        with self.lock:
            index = self._index_of(client_id)
            if index is None:
                return None
            data = self._clients[index].model_dump()
            data.update({k: v for k, v in patch.items() if k != "id"})
            merged = Client.model_validate(data)
            self._clients[index] = merged
            return merged

    def move_to_front(self, client_id: str) -> Client | None:
        """Relocate an existing client to index 0."""
        with self.lock:
            index = self._index_of(client_id)
            if index is None:
                return None
            client = self._clients.pop(index)
            self._clients.insert(0, client)
            return client

    def next_id(self) -> str:
        """Allocate a millisecond-timestamp id, strictly increasing per store."""
        with self.lock:
            candidate = int(time.time() * 1000)
            if candidate <= self._last_id:
                candidate = self._last_id + 1
            self._last_id = candidate
            return str(candidate)

    def load(self, clients: Iterable[Client]) -> None:
        """Replace the contents of the store, keeping the given order."""
        with self.lock:
            self._clients = list(clients)

    def clear(self) -> None:
        with self.lock:
            self._clients.clear()

    def _index_of(self, client_id: str) -> int | None:
        for index, client in enumerate(self._clients):
            if client.id == client_id:
                return index
        return None
