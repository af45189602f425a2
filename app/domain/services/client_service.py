"""Client service for manual CRUD, search and document/reminder edits."""

import logging
from datetime import date, datetime
from typing import Any, Iterable, Mapping

from app.core.clock import display_timezone, ensure_aware, now_local, today_local
from app.domain.errors import (
    ClientNotFoundError,
    DuplicateClientIdError,
    LeadValidationError,
    SubRecordNotFoundError,
)
from app.domain.models.client import Client, Document, MortgageStatus, Reminder
from app.domain.services.lead_intake_service import LeadIntakeService, LeadPayload
from app.persistence.repositories.client_store import ClientStore

logger = logging.getLogger(__name__)

MAGIC_LINK_ACTION = "add"
MAGIC_LINK_SOURCE = "Magic Link"


def filter_clients(
    clients: Iterable[Client],
    search: str | None = None,
    status: MortgageStatus | None = None,
) -> list[Client]:
    """Filter clients the way the client list screen does.

    ``search`` matches a substring of "first last" or of the raw phone;
    ``status`` must match exactly. Store order is preserved.
    """
    term = (search or "").strip()
    results = []
    for client in clients:
        if term and term not in f"{client.first_name} {client.last_name}" and term not in client.phone:
            continue
        if status is not None and client.status != status:
            continue
        results.append(client)
    return results


def sort_reminders(reminders: Iterable[Reminder]) -> list[Reminder]:
    """Order reminders by due date and time, earliest first."""
    return sorted(reminders, key=lambda r: (r.due_date, r.due_time))


def _document_type(name: str) -> str:
    if "." in name:
        extension = name.rsplit(".", 1)[1].strip()
        if extension:
            return extension.upper()
    return "FILE"


class ClientService:
    """Service for manual client management on top of the client store."""

    def __init__(self, store: ClientStore) -> None:
        """Initialize client service."""
        self.store = store

    def list_clients(
        self, search: str | None = None, status: MortgageStatus | None = None
    ) -> list[Client]:
        """List clients in store order, optionally filtered."""
        return filter_clients(self.store.list(), search=search, status=status)

    def get_client(self, client_id: str) -> Client:
        """Get a client by id.

        Raises:
            ClientNotFoundError: If the id is unknown
        """
        client = self.store.get_by_id(client_id)
        if client is None:
            raise ClientNotFoundError(client_id)
        return client

    def create_client(self, data: dict[str, Any], now: datetime | None = None) -> Client:
        """Create a client from manual entry and put it at the front.

        No phone dedup is done here; a later webhook for the same phone
        merges into whichever matching client comes first.

        Args:
            data: Client fields keyed by field name; ``id`` is optional
            now: Reference time, defaults to the current time

        Returns:
            The stored client

        Raises:
            DuplicateClientIdError: If an explicit id is already in use
            pydantic.ValidationError: If the fields are invalid
        """
        now = ensure_aware(now) if now else now_local()
        fields = {k: v for k, v in data.items() if v is not None}
        with self.store.lock:
            client_id = fields.pop("id", None) or self.store.next_id()
            if self.store.get_by_id(client_id) is not None:
                raise DuplicateClientIdError(client_id)
            fields.setdefault("joined_date", now.astimezone(display_timezone()).date())
            fields.setdefault("created_at", now)
            client = Client.model_validate({"id": client_id, **fields})
            self.store.insert_front(client)

        logger.info(f"Client created manually (ID: {client.id})", extra={"client_id": client.id})
        return client

    def update_client(self, client_id: str, patch: dict[str, Any]) -> Client:
        """Merge a partial update into a client. The client keeps its position.

        Raises:
            ClientNotFoundError: If the id is unknown
            pydantic.ValidationError: If the merged client is invalid
        """
        client = self.store.replace_by_id(client_id, patch)
        if client is None:
            raise ClientNotFoundError(client_id)
        logger.info(
            f"Client updated (ID: {client_id})",
            extra={"client_id": client_id, "fields": sorted(patch)},
        )
        return client

    def delete_client(self, client_id: str) -> None:
        """Delete a client with its documents and reminders.

        Raises:
            ClientNotFoundError: If the id is unknown
        """
        if not self.store.remove_by_id(client_id):
            raise ClientNotFoundError(client_id)
        logger.info(f"Client deleted (ID: {client_id})", extra={"client_id": client_id})

    def create_from_magic_link(
        self, params: Mapping[str, str], now: datetime | None = None
    ) -> Client:
        """Create a client from magic-link query parameters.

        Expects ``action=add`` plus ``fname`` and ``phone``; ``lname``,
        ``amount`` and ``email`` are optional. Always creates, never merges.

        Raises:
            LeadValidationError: If the action is not "add" or a required
                parameter is missing
        """
        if params.get("action") != MAGIC_LINK_ACTION:
            raise LeadValidationError("Unsupported magic link action")
        if not (params.get("fname") or "").strip():
            raise LeadValidationError("Missing first name")

        payload = LeadPayload(
            first_name=params.get("fname"),
            last_name=params.get("lname") or None,
            phone=params.get("phone"),
            email=params.get("email") or None,
            requested_amount=params.get("amount") or None,
            source=MAGIC_LINK_SOURCE,
        )
        return LeadIntakeService(self.store).create_lead(payload, now=now)

    # --- Documents ---

    def add_document(
        self,
        client_id: str,
        name: str,
        doc_type: str | None = None,
        is_signed: bool = False,
        upload_date: date | None = None,
    ) -> Client:
        """Attach a document to a client. Type defaults to the file extension."""
        with self.store.lock:
            client = self.get_client(client_id)
            document = Document(
                id=f"doc_{self.store.next_id()}",
                name=name,
                type=doc_type or _document_type(name),
                is_signed=is_signed,
                upload_date=upload_date or today_local(),
            )
            return self._replace(client_id, documents=[*client.documents, document])

    def toggle_document_signed(self, client_id: str, document_id: str) -> Client:
        """Flip the signed flag of a document."""
        with self.store.lock:
            client = self.get_client(client_id)
            self._require(client.documents, document_id, "document")
            documents = [
                d.model_copy(update={"is_signed": not d.is_signed}) if d.id == document_id else d
                for d in client.documents
            ]
            return self._replace(client_id, documents=documents)

    def remove_document(self, client_id: str, document_id: str) -> Client:
        with self.store.lock:
            client = self.get_client(client_id)
            self._require(client.documents, document_id, "document")
            return self._replace(
                client_id, documents=[d for d in client.documents if d.id != document_id]
            )

    # --- Reminders ---

    def list_reminders(self, client_id: str) -> list[Reminder]:
        """Reminders of a client, earliest due first."""
        return sort_reminders(self.get_client(client_id).reminders)

    def add_reminder(self, client_id: str, due_date: date, due_time: str, note: str) -> Client:
        with self.store.lock:
            client = self.get_client(client_id)
            reminder = Reminder(
                id=self.store.next_id(),
                due_date=due_date,
                due_time=due_time,
                note=note,
            )
            return self._replace(client_id, reminders=[*client.reminders, reminder])

    def toggle_reminder(self, client_id: str, reminder_id: str) -> Client:
        """Flip the completed flag of a reminder."""
        with self.store.lock:
            client = self.get_client(client_id)
            self._require(client.reminders, reminder_id, "reminder")
            reminders = [
                r.model_copy(update={"is_completed": not r.is_completed}) if r.id == reminder_id else r
                for r in client.reminders
            ]
            return self._replace(client_id, reminders=reminders)

    def remove_reminder(self, client_id: str, reminder_id: str) -> Client:
        with self.store.lock:
            client = self.get_client(client_id)
            self._require(client.reminders, reminder_id, "reminder")
            return self._replace(
                client_id, reminders=[r for r in client.reminders if r.id != reminder_id]
            )

    def _replace(self, client_id: str, **patch: Any) -> Client:
        client = self.store.replace_by_id(client_id, patch)
        if client is None:
            raise ClientNotFoundError(client_id)
        return client

    @staticmethod
    def _require(records: Iterable[Document | Reminder], record_id: str, kind: str) -> None:
        if not any(r.id == record_id for r in records):
            raise SubRecordNotFoundError(kind, record_id)
