"""Magic-link intake endpoint."""

from typing import Annotated

from fastapi import APIRouter, Depends, HTTPException, Request, status

from app.api.deps import get_client_service
from app.domain.errors import LeadValidationError
from app.domain.models.client import Client
from app.domain.services.client_service import ClientService

router = APIRouter()


@router.get("", response_model=Client, status_code=status.HTTP_201_CREATED)
async def magic_link_intake(
    request: Request,
    service: Annotated[ClientService, Depends(get_client_service)],
) -> Client:
    """Create a client from ``?action=add&fname=...&phone=...`` parameters.

    Optional parameters: ``lname``, ``amount``, ``email``. Always creates a
    new client; use the webhook for create-or-update.
    """
    try:
        return service.create_from_magic_link(dict(request.query_params))
    except LeadValidationError as e:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(e))
