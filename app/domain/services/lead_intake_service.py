"""Lead intake: create-or-merge of inbound bot leads keyed by phone number."""

import logging
import math
from dataclasses import dataclass
from datetime import datetime
from typing import Any, Literal

from pydantic import ValidationError, field_validator

from app.core.clock import display_timezone, ensure_aware, now_local
from app.core.phone import normalize_phone_digits
from app.domain.errors import LeadValidationError
from app.domain.models.client import CamelModel, Client, MortgageStatus
from app.persistence.repositories.client_store import ClientStore

logger = logging.getLogger(__name__)

DEFAULT_FIRST_NAME = "לקוח"
DEFAULT_LAST_NAME = "חדש"
DEFAULT_SOURCE = "Bot"
DEFAULT_UPDATE_NOTE = "הלקוח יצר קשר נוסף"

OUTCOME_CREATED = "created"
OUTCOME_UPDATED = "updated"


class LeadPayload(CamelModel):
    """Lead reported by the chat-bot. Only ``phone`` is required."""

    first_name: str | None = None
    last_name: str | None = None
    phone: str | None = None
    email: str | None = None
    requested_amount: int | None = None
    source: str | None = None
    notes: str | None = None

    @field_validator("first_name", "last_name", "phone", "email", "source", "notes", mode="before")
    @classmethod
    def _stringify(cls, value: Any) -> Any:
        # Bots sometimes send phone numbers as JSON numbers
        if isinstance(value, int) and not isinstance(value, bool):
            return str(value)
        return value

    @field_validator("requested_amount", mode="before")
    @classmethod
    def _coerce_amount(cls, value: Any) -> int | None:
        """Accept numbers and numeric strings; anything else counts as absent."""
        if value is None or isinstance(value, bool):
            return None
        if isinstance(value, str):
            try:
                value = float(value.strip().replace(",", ""))
            except ValueError:
                return None
        if isinstance(value, float) and not math.isfinite(value):
            return None
        if isinstance(value, (int, float)) and value >= 0:
            return int(value)
        return None


@dataclass
class IntakeOutcome:
    """Result of reconciling one lead."""

    status: Literal["created", "updated"]
    client: Client

    @property
    def client_id(self) -> str:
        return self.client.id

    @property
    def message(self) -> str:
        if self.status == OUTCOME_CREATED:
            return "New client created"
        return "Client found and updated"


def validate_lead_payload(data: LeadPayload | dict[str, Any] | None) -> LeadPayload:
    """Validate raw webhook data into a LeadPayload.

    Args:
        data: Parsed JSON body or an already-built payload

    Returns:
        Payload with a non-blank phone

    Raises:
        LeadValidationError: If the payload is empty, malformed or has no phone
    """
    if not data:
        raise LeadValidationError("Missing phone number")

    if isinstance(data, LeadPayload):
        payload = data
    elif isinstance(data, dict):
        try:
            payload = LeadPayload.model_validate(data)
        except ValidationError as exc:
            raise LeadValidationError(f"Invalid lead payload: {exc.error_count()} invalid field(s)") from exc
    else:
        raise LeadValidationError("Lead payload must be a JSON object")

    if not payload.phone or not payload.phone.strip():
        raise LeadValidationError("Missing phone number")
    return payload


def apply_lead_defaults(payload: LeadPayload) -> dict[str, Any]:
    """Resolve the field values of a client created from ``payload``.

    Missing names become generic placeholders, amounts and scores start at
    zero and the status is always NEW. Dates, notes and sub-records are set
    by the caller.

    Returns:
        Client field values keyed by field name
    """
    return {
        "first_name": payload.first_name or DEFAULT_FIRST_NAME,
        "last_name": payload.last_name or DEFAULT_LAST_NAME,
        "phone": payload.phone,
        "email": payload.email or "",
        "requested_amount": payload.requested_amount or 0,
        "status": MortgageStatus.NEW,
        "monthly_income": 0,
        "credit_score": 0,
    }


def format_update_note(notes: str | None, now: datetime) -> str:
    """Build the timestamped line appended to a client on repeat contact."""
    local = now.astimezone(display_timezone())
    return f"[{local:%d.%m.%Y} {local:%H:%M}] עדכון מהבוט: {notes or DEFAULT_UPDATE_NOTE}"


def creation_note(payload: LeadPayload) -> str:
    """Initial notes of a client created by the bot."""
    if payload.notes:
        return f"ליד חדש מהבוט: {payload.notes}"
    return f"ליד נקלט אוטומטית ממקור: {payload.source or DEFAULT_SOURCE}"


def _phone_matches(client: Client, raw_phone: str, key: str) -> bool:
    if client.phone == raw_phone:
        return True
    # An all-punctuation phone must not match every client without digits
    return bool(key) and normalize_phone_digits(client.phone) == key


class LeadIntakeService:
    """Decide create-vs-merge for inbound leads and apply it to the store.

    The first client in store order whose phone matches (raw, or after
    stripping non-digits) is the merge target. Duplicates that entered the
    store through other paths are not detected or merged.
    """

    def __init__(self, store: ClientStore):
        """Initialize lead intake service.

        Args:
            store: Client store to reconcile leads into
        """
        self.store = store

    def reconcile(
        self,
        data: LeadPayload | dict[str, Any] | None,
        now: datetime | None = None,
    ) -> IntakeOutcome:
        """Create a client for a new phone or merge into the existing one.

        Either way the affected client ends up at the front of the store.

        Args:
            data: Lead payload (raw dict or LeadPayload)
            now: Reference time, defaults to the current time

        Returns:
            IntakeOutcome with status "created" or "updated"

        Raises:
            LeadValidationError: If the payload has no phone. The store is
                left untouched.
        """
        payload = validate_lead_payload(data)
        now = ensure_aware(now) if now else now_local()
        key = normalize_phone_digits(payload.phone)

        with self.store.lock:
            existing = self.store.find_by_predicate(
                lambda c: _phone_matches(c, payload.phone, key)
            )
            if existing is not None:
                client = self._merge(existing, payload, now)
                outcome = IntakeOutcome(status=OUTCOME_UPDATED, client=client)
            else:
                client = self._create(payload, now)
                outcome = IntakeOutcome(status=OUTCOME_CREATED, client=client)

        logger.info(
            f"Lead {outcome.status}: {client.first_name} (ID: {client.id})",
            extra={
                "client_id": client.id,
                "intake_status": outcome.status,
                "source": payload.source or DEFAULT_SOURCE,
            },
        )
        return outcome

    def create_lead(
        self,
        data: LeadPayload | dict[str, Any] | None,
        now: datetime | None = None,
    ) -> Client:
        """Always create a new client from a lead, skipping the phone match.

        Used by intake paths that do not upsert, such as magic links.

        Raises:
            LeadValidationError: If the payload has no phone
        """
        payload = validate_lead_payload(data)
        now = ensure_aware(now) if now else now_local()
        client = self._create(payload, now)
        logger.info(
            f"Lead created: {client.first_name} (ID: {client.id})",
            extra={"client_id": client.id, "source": payload.source or DEFAULT_SOURCE},
        )
        return client

    def _merge(self, existing: Client, payload: LeadPayload, now: datetime) -> Client:
        line = format_update_note(payload.notes, now)
        patch: dict[str, Any] = {
            "notes": f"{existing.notes}\n{line}" if existing.notes else line,
        }
        # Only truthy values overwrite what we already know
        if payload.email:
            patch["email"] = payload.email
        if payload.requested_amount:
            patch["requested_amount"] = payload.requested_amount
        if payload.first_name:
            patch["first_name"] = payload.first_name
        if payload.last_name:
            patch["last_name"] = payload.last_name

        self.store.replace_by_id(existing.id, patch)
        return self.store.move_to_front(existing.id)

    def _create(self, payload: LeadPayload, now: datetime) -> Client:
        client = Client(
            id=self.store.next_id(),
            joined_date=now.astimezone(display_timezone()).date(),
            created_at=now,
            notes=creation_note(payload),
            **apply_lead_defaults(payload),
        )
        return self.store.insert_front(client)


def reconcile(
    store: ClientStore,
    data: LeadPayload | dict[str, Any] | None,
    now: datetime | None = None,
) -> IntakeOutcome:
    """Shorthand for ``LeadIntakeService(store).reconcile(data, now)``."""
    return LeadIntakeService(store).reconcile(data, now=now)
