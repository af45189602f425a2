"""FastAPI dependencies for store and service resolution."""

from typing import Annotated

from fastapi import Depends, Request

from app.domain.services.client_service import ClientService
from app.domain.services.lead_intake_service import LeadIntakeService
from app.persistence.repositories.client_store import ClientStore


def get_client_store(request: Request) -> ClientStore:
    """Return the process-wide client store created in the app lifespan.

    Args:
        request: Current request

    Returns:
        The shared ClientStore
    """
    return request.app.state.client_store


def get_client_service(
    store: Annotated[ClientStore, Depends(get_client_store)],
) -> ClientService:
    return ClientService(store)


def get_lead_intake_service(
    store: Annotated[ClientStore, Depends(get_client_store)],
) -> LeadIntakeService:
    return LeadIntakeService(store)
