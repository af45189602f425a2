"""Dashboard API endpoints.

KPI cards, chart series and KPI drill-downs, all recomputed from the
current client snapshot on every request.
"""

from typing import Annotated

from fastapi import APIRouter, Depends, HTTPException, status

from app.api.deps import get_client_store
from app.api.schemas.dashboard import ChartsResponse, DrillDownResponse, KpisResponse
from app.core.clock import now_local
from app.domain.errors import InvalidDrillDownError
from app.domain.services import dashboard_service
from app.persistence.repositories.client_store import ClientStore

router = APIRouter()


@router.get("/kpis", response_model=KpisResponse)
async def get_kpis(
    store: Annotated[ClientStore, Depends(get_client_store)],
) -> KpisResponse:
    """Values for the KPI cards."""
    kpis = dashboard_service.compute_kpis(store.list(), now_local())
    return KpisResponse.from_kpis(kpis)


@router.get("/charts", response_model=ChartsResponse)
async def get_charts(
    store: Annotated[ClientStore, Depends(get_client_store)],
) -> ChartsResponse:
    """Series for the trend, status and income-vs-loan charts."""
    clients = store.list()
    return ChartsResponse.build(
        trend=dashboard_service.monthly_trend(clients),
        distribution=dashboard_service.status_distribution(clients),
        volumes=dashboard_service.volume_by_status(clients),
        income=dashboard_service.income_vs_loan(clients),
    )


@router.get("/drilldown/{kpi}", response_model=DrillDownResponse)
async def get_drill_down(
    kpi: str,
    store: Annotated[ClientStore, Depends(get_client_store)],
) -> DrillDownResponse:
    """Clients behind a KPI card (TOTAL, ACTIVE, VOLUME, DOCS, CREDIT, RATES, WAIT_TIME)."""
    try:
        clients = dashboard_service.drill_down(store.list(), kpi.upper(), now_local())
    except InvalidDrillDownError as e:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=str(e))
    return DrillDownResponse(kpi=kpi.upper(), clients=clients, total=len(clients))
