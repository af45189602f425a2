"""Client API endpoints."""

import logging
from typing import Annotated

from fastapi import APIRouter, Depends, HTTPException, Query, status
from pydantic import ValidationError

from app.api.deps import get_client_service
from app.api.schemas.client import (
    ClientCreate,
    ClientPatch,
    DeleteClientResponse,
    DocumentCreate,
    ReminderCreate,
)
from app.domain.errors import ClientNotFoundError, DuplicateClientIdError, SubRecordNotFoundError
from app.domain.models.client import Client, MortgageStatus, Reminder
from app.domain.services.client_service import ClientService

logger = logging.getLogger(__name__)

router = APIRouter()


def _not_found(exc: ClientNotFoundError | SubRecordNotFoundError) -> HTTPException:
    return HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=str(exc))


def _invalid(exc: ValidationError) -> HTTPException:
    return HTTPException(
        status_code=status.HTTP_422_UNPROCESSABLE_ENTITY,
        detail=exc.errors(include_url=False, include_context=False, include_input=False),
    )


def _parse_status(value: str | None) -> MortgageStatus | None:
    if not value or value == "all":
        return None
    try:
        return MortgageStatus(MortgageStatus.parse(value))
    except ValueError:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail=f"Invalid status. Must be one of: {[s.name for s in MortgageStatus]}",
        )


@router.get("", response_model=list[Client])
async def list_clients(
    service: Annotated[ClientService, Depends(get_client_service)],
    q: str | None = Query(None, description="Substring of full name or phone"),
    status_filter: str | None = Query(None, alias="status"),
) -> list[Client]:
    """List clients, most recently active first, optionally filtered."""
    return service.list_clients(search=q, status=_parse_status(status_filter))


@router.post("", response_model=Client, status_code=status.HTTP_201_CREATED)
async def create_client(
    payload: ClientCreate,
    service: Annotated[ClientService, Depends(get_client_service)],
) -> Client:
    """Create a client from manual entry."""
    try:
        return service.create_client(payload.model_dump(exclude_unset=True))
    except DuplicateClientIdError as e:
        raise HTTPException(status_code=status.HTTP_409_CONFLICT, detail=str(e))
    except ValidationError as e:
        raise _invalid(e)


@router.get("/{client_id}", response_model=Client)
async def get_client(
    client_id: str,
    service: Annotated[ClientService, Depends(get_client_service)],
) -> Client:
    """Get a specific client by ID."""
    try:
        return service.get_client(client_id)
    except ClientNotFoundError as e:
        raise _not_found(e)


@router.put("/{client_id}", response_model=Client)
async def update_client(
    client_id: str,
    patch: ClientPatch,
    service: Annotated[ClientService, Depends(get_client_service)],
) -> Client:
    """Merge a partial update into a client."""
    try:
        return service.update_client(client_id, patch.model_dump(exclude_unset=True))
    except ClientNotFoundError as e:
        raise _not_found(e)
    except ValidationError as e:
        raise _invalid(e)


@router.delete("/{client_id}", response_model=DeleteClientResponse)
async def delete_client(
    client_id: str,
    service: Annotated[ClientService, Depends(get_client_service)],
) -> DeleteClientResponse:
    """Delete a client with its documents and reminders."""
    try:
        service.delete_client(client_id)
    except ClientNotFoundError as e:
        raise _not_found(e)
    return DeleteClientResponse(message="Client deleted", id=client_id)


# --- Documents ---

@router.post(
    "/{client_id}/documents",
    response_model=Client,
    status_code=status.HTTP_201_CREATED,
)
async def add_document(
    client_id: str,
    document: DocumentCreate,
    service: Annotated[ClientService, Depends(get_client_service)],
) -> Client:
    """Attach a document to a client."""
    try:
        return service.add_document(
            client_id,
            name=document.name,
            doc_type=document.type,
            is_signed=document.is_signed,
        )
    except ClientNotFoundError as e:
        raise _not_found(e)


@router.patch("/{client_id}/documents/{document_id}/toggle-signed", response_model=Client)
async def toggle_document_signed(
    client_id: str,
    document_id: str,
    service: Annotated[ClientService, Depends(get_client_service)],
) -> Client:
    try:
        return service.toggle_document_signed(client_id, document_id)
    except (ClientNotFoundError, SubRecordNotFoundError) as e:
        raise _not_found(e)


@router.delete("/{client_id}/documents/{document_id}", response_model=Client)
async def remove_document(
    client_id: str,
    document_id: str,
    service: Annotated[ClientService, Depends(get_client_service)],
) -> Client:
    try:
        return service.remove_document(client_id, document_id)
    except (ClientNotFoundError, SubRecordNotFoundError) as e:
        raise _not_found(e)


# --- Reminders ---

@router.get("/{client_id}/reminders", response_model=list[Reminder])
async def list_reminders(
    client_id: str,
    service: Annotated[ClientService, Depends(get_client_service)],
) -> list[Reminder]:
    """Reminders of a client ordered by due date and time."""
    try:
        return service.list_reminders(client_id)
    except ClientNotFoundError as e:
        raise _not_found(e)


@router.post(
    "/{client_id}/reminders",
    response_model=Client,
    status_code=status.HTTP_201_CREATED,
)
async def add_reminder(
    client_id: str,
    reminder: ReminderCreate,
    service: Annotated[ClientService, Depends(get_client_service)],
) -> Client:
    try:
        return service.add_reminder(
            client_id,
            due_date=reminder.due_date,
            due_time=reminder.due_time,
            note=reminder.note,
        )
    except ClientNotFoundError as e:
        raise _not_found(e)


@router.patch("/{client_id}/reminders/{reminder_id}/toggle", response_model=Client)
async def toggle_reminder(
    client_id: str,
    reminder_id: str,
    service: Annotated[ClientService, Depends(get_client_service)],
) -> Client:
    try:
        return service.toggle_reminder(client_id, reminder_id)
    except (ClientNotFoundError, SubRecordNotFoundError) as e:
        raise _not_found(e)


@router.delete("/{client_id}/reminders/{reminder_id}", response_model=Client)
async def remove_reminder(
    client_id: str,
    reminder_id: str,
    service: Annotated[ClientService, Depends(get_client_service)],
) -> Client:
    try:
        return service.remove_reminder(client_id, reminder_id)
    except (ClientNotFoundError, SubRecordNotFoundError) as e:
        raise _not_found(e)
