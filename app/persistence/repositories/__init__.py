"""Repository implementations."""

from app.persistence.repositories.client_store import ClientStore

__all__ = ["ClientStore"]
