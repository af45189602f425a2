"""Domain exceptions raised by CRM services."""


class CRMError(Exception):
    """Base class for CRM domain errors."""


class LeadValidationError(CRMError):
    """Raised when an inbound lead payload is empty or has no phone number."""


class ClientNotFoundError(CRMError):
    """Raised when a client id does not exist in the store."""

    def __init__(self, client_id: str):
        super().__init__(f"Client not found: {client_id}")
        self.client_id = client_id


class SubRecordNotFoundError(CRMError):
    """Raised when a document or reminder id does not exist on a client."""

    def __init__(self, kind: str, record_id: str):
        super().__init__(f"{kind.capitalize()} not found: {record_id}")
        self.kind = kind
        self.record_id = record_id


class InvalidDrillDownError(CRMError):
    """Raised for an unknown dashboard KPI key."""


class DuplicateClientIdError(CRMError):
    """Raised when a manually created client reuses an existing id."""

    def __init__(self, client_id: str):
        super().__init__(f"Client id already exists: {client_id}")
        self.client_id = client_id
