"""Client records tracked through the mortgage pipeline."""

from datetime import date, datetime
from enum import Enum
from typing import Any

from pydantic import BaseModel, ConfigDict, Field, field_validator
from pydantic.alias_generators import to_camel


class MortgageStatus(str, Enum):
    """Pipeline stage of a client file.

    Values are the labels the frontend displays; member names are accepted
    as input aliases (``"NEW"`` parses to ``MortgageStatus.NEW``).
    """

    NEW = "חדש"
    IN_PROCESS = "בתהליך"
    APPROVED = "אושר"
    REJECTED = "נדחה"
    PAID = "שולם"

    @classmethod
    def parse(cls, value: Any) -> Any:
        """Map a member name to its member, leaving anything else untouched."""
        if isinstance(value, str):
            member = cls.__members__.get(value.strip().upper())
            if member is not None:
                return member
        return value


ACTIVE_STATUSES = (MortgageStatus.NEW, MortgageStatus.IN_PROCESS)
DECIDED_STATUSES = (MortgageStatus.APPROVED, MortgageStatus.REJECTED)


class CamelModel(BaseModel):
    """Base model serialized with camelCase keys, populated by either name."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class Document(CamelModel):
    """A document attached to a client file."""

    id: str
    name: str
    type: str = "FILE"
    is_signed: bool = False
    upload_date: date


class Reminder(CamelModel):
    """A follow-up reminder on a client file."""

    id: str
    due_date: date
    due_time: str = Field(pattern=r"^\d{2}:\d{2}$")  # HH:MM
    note: str
    is_completed: bool = False


class Client(CamelModel):
    """A mortgage lead/customer."""

    id: str
    first_name: str = ""
    last_name: str = ""
    phone: str = ""
    email: str = ""
    requested_amount: int = Field(default=0, ge=0)
    monthly_income: int = Field(default=0, ge=0)
    credit_score: int = 0  # 0 = not yet assessed
    status: MortgageStatus = MortgageStatus.NEW
    joined_date: date
    created_at: datetime | None = None
    notes: str = ""
    documents: list[Document] = Field(default_factory=list)
    reminders: list[Reminder] = Field(default_factory=list)

    @field_validator("status", mode="before")
    @classmethod
    def _status_by_name(cls, value: Any) -> Any:
        return MortgageStatus.parse(value)

    @property
    def full_name(self) -> str:
        return f"{self.first_name} {self.last_name}".strip()

    def __repr__(self) -> str:
        return f"<Client(id={self.id}, phone={self.phone}, status={self.status.name})>"
