"""Pydantic schemas for dashboard endpoints."""

from app.domain.models.client import CamelModel, Client, MortgageStatus
from app.domain.services.dashboard_service import (
    DashboardKpis,
    IncomeVsLoanPoint,
    MonthBucket,
    StatusBucket,
)


# --- KPIs ---

class WaitTimeResponse(CamelModel):
    average_hours: float = 0.0
    waiting_clients: int = 0
    is_critical: bool = False


class KpisResponse(CamelModel):
    total_clients: int = 0
    active_clients: int = 0
    approved_volume: int = 0
    pending_documents: int = 0
    average_credit_score: int = 0
    approval_rate: int = 0  # percent
    wait_time: WaitTimeResponse = WaitTimeResponse()

    @classmethod
    def from_kpis(cls, kpis: DashboardKpis) -> "KpisResponse":
        return cls(
            total_clients=kpis.total_clients,
            active_clients=kpis.active_clients,
            approved_volume=kpis.approved_volume,
            pending_documents=kpis.pending_documents,
            average_credit_score=kpis.average_credit_score,
            approval_rate=kpis.approval_rate,
            wait_time=WaitTimeResponse(
                average_hours=round(kpis.wait_time.average_hours, 2),
                waiting_clients=kpis.wait_time.waiting_clients,
                is_critical=kpis.wait_time.is_critical,
            ),
        )


# --- Charts ---

class MonthBucketResponse(CamelModel):
    month: int  # 1-12
    label: str
    count: int


class StatusBucketResponse(CamelModel):
    status: MortgageStatus
    key: str  # enum member name, e.g. "IN_PROCESS"
    count: int
    volume: int = 0

    @classmethod
    def from_bucket(cls, bucket: StatusBucket) -> "StatusBucketResponse":
        return cls(
            status=bucket.status,
            key=bucket.status.name,
            count=bucket.count,
            volume=bucket.volume,
        )


class IncomeVsLoanResponse(CamelModel):
    name: str
    monthly_income: int
    requested_amount_scaled: float


class ChartsResponse(CamelModel):
    monthly_trend: list[MonthBucketResponse] = []
    status_distribution: list[StatusBucketResponse] = []
    volume_by_status: list[StatusBucketResponse] = []
    income_vs_loan: list[IncomeVsLoanResponse] = []

    @classmethod
    def build(
        cls,
        trend: list[MonthBucket],
        distribution: list[StatusBucket],
        volumes: list[StatusBucket],
        income: list[IncomeVsLoanPoint],
    ) -> "ChartsResponse":
        return cls(
            monthly_trend=[MonthBucketResponse(month=b.month, label=b.label, count=b.count) for b in trend],
            status_distribution=[StatusBucketResponse.from_bucket(b) for b in distribution],
            volume_by_status=[StatusBucketResponse.from_bucket(b) for b in volumes],
            income_vs_loan=[
                IncomeVsLoanResponse(
                    name=p.name,
                    monthly_income=p.monthly_income,
                    requested_amount_scaled=p.requested_amount_scaled,
                )
                for p in income
            ],
        )


# --- Drill-down ---

class DrillDownResponse(CamelModel):
    kpi: str
    clients: list[Client] = []
    total: int = 0
