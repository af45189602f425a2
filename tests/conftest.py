"""Pytest configuration and fixtures."""

from datetime import date, datetime

import pytest
import pytz

from app.api.deps import get_client_store
from app.domain.models.client import Document, MortgageStatus
from app.persistence.repositories.client_store import ClientStore
from tests.factories import make_client

TZ = pytz.timezone("Asia/Jerusalem")


@pytest.fixture
def now() -> datetime:
    """Fixed reference time in the display timezone."""
    return TZ.localize(datetime(2024, 3, 10, 14, 30))


@pytest.fixture
def store() -> ClientStore:
    """Empty client store."""
    return ClientStore()


@pytest.fixture
def seeded_store() -> ClientStore:
    """Store with a small mixed pipeline, newest first."""
    return ClientStore([
        make_client("3", phone="054-5555555", status=MortgageStatus.NEW, requested_amount=2200000, credit_score=680),
        make_client(
            "2",
            phone="052-9876543",
            status=MortgageStatus.APPROVED,
            requested_amount=850000,
            credit_score=750,
            documents=[Document(id="d1", name="ID", type="PDF", is_signed=False, upload_date=date(2024, 1, 16))],
        ),
        make_client("1", phone="050-1234567", status=MortgageStatus.IN_PROCESS, requested_amount=1500000, credit_score=820),
    ])


@pytest.fixture
def client(seeded_store):
    """Create a test FastAPI client backed by ``seeded_store``."""
    from fastapi.testclient import TestClient
    from app.main import app

    app.dependency_overrides[get_client_store] = lambda: seeded_store

    with TestClient(app) as test_client:
        yield test_client

    app.dependency_overrides.clear()
