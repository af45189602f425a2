"""Request/response schemas for client endpoints."""

from datetime import date, datetime
from typing import Any

from pydantic import Field, field_validator

from app.domain.models.client import CamelModel, Document, MortgageStatus, Reminder


class ClientCreate(CamelModel):
    """Manual client entry. Everything is optional, including ``id``."""

    id: str | None = None
    first_name: str | None = None
    last_name: str | None = None
    phone: str | None = None
    email: str | None = None
    requested_amount: int | None = Field(default=None, ge=0)
    monthly_income: int | None = Field(default=None, ge=0)
    credit_score: int | None = None
    status: MortgageStatus | None = None
    joined_date: date | None = None
    created_at: datetime | None = None
    notes: str | None = None
    documents: list[Document] | None = None
    reminders: list[Reminder] | None = None

    @field_validator("status", mode="before")
    @classmethod
    def _status_by_name(cls, value: Any) -> Any:
        return MortgageStatus.parse(value)


class ClientPatch(CamelModel):
    """Partial client update. ``id`` is not accepted and never changes."""

    first_name: str | None = None
    last_name: str | None = None
    phone: str | None = None
    email: str | None = None
    requested_amount: int | None = Field(default=None, ge=0)
    monthly_income: int | None = Field(default=None, ge=0)
    credit_score: int | None = None
    status: MortgageStatus | None = None
    joined_date: date | None = None
    created_at: datetime | None = None
    notes: str | None = None
    documents: list[Document] | None = None
    reminders: list[Reminder] | None = None

    @field_validator("status", mode="before")
    @classmethod
    def _status_by_name(cls, value: Any) -> Any:
        return MortgageStatus.parse(value)


class DeleteClientResponse(CamelModel):
    message: str
    id: str


class DocumentCreate(CamelModel):
    """Document upload metadata."""

    name: str = Field(min_length=1)
    type: str | None = None
    is_signed: bool = False


class ReminderCreate(CamelModel):
    due_date: date
    due_time: str = Field(pattern=r"^\d{2}:\d{2}$")
    note: str = Field(min_length=1)
