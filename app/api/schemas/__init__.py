"""API schemas package."""

from app.api.schemas.client import (
    ClientCreate,
    ClientPatch,
    DeleteClientResponse,
    DocumentCreate,
    ReminderCreate,
)
from app.api.schemas.dashboard import ChartsResponse, DrillDownResponse, KpisResponse

__all__ = [
    "ChartsResponse",
    "ClientCreate",
    "ClientPatch",
    "DeleteClientResponse",
    "DocumentCreate",
    "DrillDownResponse",
    "KpisResponse",
    "ReminderCreate",
]
