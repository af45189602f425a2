"""API routes."""

from fastapi import APIRouter

from app.api.routes import clients, dashboard, intake, webhook

api_router = APIRouter()

# Inbound lead sources
api_router.include_router(webhook.router, prefix="/webhook", tags=["webhook"])
api_router.include_router(intake.router, prefix="/intake", tags=["intake"])

api_router.include_router(clients.router, prefix="/clients", tags=["clients"])
api_router.include_router(dashboard.router, prefix="/dashboard", tags=["dashboard"])
