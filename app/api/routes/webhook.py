"""Chat-bot webhook endpoints for lead intake."""

import json
import logging
from typing import Annotated

from fastapi import APIRouter, Depends, Request
from fastapi.responses import JSONResponse, PlainTextResponse

from app.api.deps import get_lead_intake_service
from app.domain.errors import LeadValidationError
from app.domain.services.lead_intake_service import LeadIntakeService

logger = logging.getLogger(__name__)

router = APIRouter()


def _error(message: str) -> JSONResponse:
    return JSONResponse(content={"status": "error", "message": message}, status_code=400)


@router.get("", response_class=PlainTextResponse)
async def webhook_status() -> str:
    """Liveness check for bot developers wiring up the webhook."""
    return "Webhook is active. Use POST to send data."


@router.post("")
async def receive_lead(
    request: Request,
    intake: Annotated[LeadIntakeService, Depends(get_lead_intake_service)],
) -> JSONResponse:
    """Create or update a client from a bot lead.

    Request body schema:
    {
        "firstName": "ישראל",
        "lastName": "ישראלי",
        "phone": "050-1234567",          (required)
        "email": "israel@example.com",
        "requestedAmount": 1200000,
        "source": "whatsapp_bot",
        "notes": "free text"
    }

    A client whose phone matches (ignoring punctuation) is updated and a
    timestamped line is appended to its notes; otherwise a new client is
    created. Either way the client moves to the top of the list.
    """
    raw = await request.body()
    try:
        body = json.loads(raw) if raw.strip() else {}
    except (json.JSONDecodeError, UnicodeDecodeError) as e:
        logger.warning(f"Invalid webhook payload: {e}")
        return _error("Invalid JSON body")

    logger.info(
        "Webhook received",
        extra={
            "fields": sorted(body) if isinstance(body, dict) else None,
            "source": body.get("source") if isinstance(body, dict) else None,
        },
    )

    try:
        outcome = intake.reconcile(body)
    except LeadValidationError as e:
        logger.warning(f"Rejected webhook lead: {e}")
        return _error(str(e))

    return JSONResponse(
        content={
            "status": outcome.status,
            "clientId": outcome.client_id,
            "message": outcome.message,
        },
        status_code=200,
    )
