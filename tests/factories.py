"""Test data builders."""

from datetime import date

from app.domain.models.client import Client, MortgageStatus


def make_client(
    id: str,
    phone: str = "",
    status: MortgageStatus | str = MortgageStatus.NEW,
    **fields,
) -> Client:
    """Build a client with sensible defaults for tests."""
    fields.setdefault("first_name", f"Client {id}")
    fields.setdefault("joined_date", date(2024, 1, 15))
    return Client(id=id, phone=phone, status=status, **fields)
