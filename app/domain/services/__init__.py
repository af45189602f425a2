"""Domain services."""

from app.domain.services.client_service import ClientService
from app.domain.services.lead_intake_service import LeadIntakeService

__all__ = ["ClientService", "LeadIntakeService"]
