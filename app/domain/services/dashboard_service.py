"""Dashboard aggregates computed from a snapshot of clients.

Every function here is pure: it reads the clients it is given, never mutates
them, and returns a fresh value. All of them accept an empty list.
"""

import math
from collections import Counter
from dataclasses import dataclass, field
from datetime import datetime
from enum import Enum
from typing import Sequence

from app.core.clock import ensure_aware, local_midnight
from app.domain.errors import InvalidDrillDownError
from app.domain.models.client import (
    ACTIVE_STATUSES,
    DECIDED_STATUSES,
    Client,
    MortgageStatus,
)
from app.settings import settings

HEBREW_MONTHS = (
    "ינואר", "פברואר", "מרץ", "אפריל", "מאי", "יוני",
    "יולי", "אוגוסט", "ספטמבר", "אוקטובר", "נובמבר", "דצמבר",
)

INCOME_VS_LOAN_SAMPLE_SIZE = 7
LOAN_SCALE_DIVISOR = 100


class KpiType(str, Enum):
    """KPI cards that can be drilled down into."""

    TOTAL = "TOTAL"
    ACTIVE = "ACTIVE"
    VOLUME = "VOLUME"
    DOCS = "DOCS"
    CREDIT = "CREDIT"
    RATES = "RATES"
    WAIT_TIME = "WAIT_TIME"


@dataclass
class WaitTimeSummary:
    """Average time NEW leads have been waiting for a first touch."""

    average_hours: float = 0.0
    waiting_clients: int = 0
    is_critical: bool = False


@dataclass
class MonthBucket:
    month: int  # 1-12
    label: str
    count: int


@dataclass
class StatusBucket:
    status: MortgageStatus
    count: int
    volume: int = 0


@dataclass
class IncomeVsLoanPoint:
    name: str
    monthly_income: int
    requested_amount_scaled: float


@dataclass
class DashboardKpis:
    total_clients: int = 0
    active_clients: int = 0
    approved_volume: int = 0
    pending_documents: int = 0
    average_credit_score: int = 0
    approval_rate: int = 0
    wait_time: WaitTimeSummary = field(default_factory=WaitTimeSummary)


def _round_half_up(value: float) -> int:
    return int(math.floor(value + 0.5))


def total_clients(clients: Sequence[Client]) -> int:
    return len(clients)


def active_clients(clients: Sequence[Client]) -> int:
    """Count clients that are NEW or IN_PROCESS."""
    return sum(1 for c in clients if c.status in ACTIVE_STATUSES)


def approved_volume(clients: Sequence[Client]) -> int:
    """Sum of requested amounts over APPROVED clients."""
    return sum(c.requested_amount for c in clients if c.status == MortgageStatus.APPROVED)


def pending_documents(clients: Sequence[Client]) -> int:
    """Number of unsigned documents across all clients."""
    return sum(1 for c in clients for d in c.documents if not d.is_signed)


def average_credit_score(clients: Sequence[Client]) -> int:
    """Mean credit score, rounded half up.

    Clients with a score of 0 (not assessed) are counted too, which pulls the
    average down.
    """
    if not clients:
        return 0
    return _round_half_up(sum(c.credit_score for c in clients) / len(clients))


def approval_rate(clients: Sequence[Client]) -> int:
    """Percentage of decided files (APPROVED or REJECTED) that were approved."""
    decided = sum(1 for c in clients if c.status in DECIDED_STATUSES)
    if decided == 0:
        return 0
    approved = sum(1 for c in clients if c.status == MortgageStatus.APPROVED)
    return _round_half_up(approved / decided * 100)


def hours_waiting(client: Client, now: datetime) -> float:
    """Hours since the client was created.

    Legacy clients without ``created_at`` count from midnight of their
    joined date in the display timezone.
    """
    created = ensure_aware(client.created_at) if client.created_at else local_midnight(client.joined_date)
    return (ensure_aware(now) - created).total_seconds() / 3600


def is_wait_critical(hours: float, threshold: float | None = None) -> bool:
    """A wait is critical when strictly longer than the threshold."""
    limit = settings.wait_time_critical_hours if threshold is None else threshold
    return hours > limit


def average_wait_time(
    clients: Sequence[Client], now: datetime, threshold: float | None = None
) -> WaitTimeSummary:
    """Average wait in hours over NEW clients."""
    waits = [hours_waiting(c, now) for c in clients if c.status == MortgageStatus.NEW]
    if not waits:
        return WaitTimeSummary()
    average = sum(waits) / len(waits)
    return WaitTimeSummary(
        average_hours=average,
        waiting_clients=len(waits),
        is_critical=is_wait_critical(average, threshold),
    )


def monthly_trend(clients: Sequence[Client]) -> list[MonthBucket]:
    """New clients per calendar month of ``joined_date``.

    Buckets ignore the year, so data spanning several years collapses into
    at most twelve buckets. Only months with clients are returned, January
    first.
    """
    counts = Counter(c.joined_date.month for c in clients)
    return [
        MonthBucket(month=month, label=HEBREW_MONTHS[month - 1], count=counts[month])
        for month in sorted(counts)
    ]


def status_distribution(clients: Sequence[Client]) -> list[StatusBucket]:
    """Client count per status, omitting empty statuses, in pipeline order."""
    return [bucket for bucket in volume_by_status(clients) if bucket.count > 0]


def volume_by_status(clients: Sequence[Client]) -> list[StatusBucket]:
    """Client count and requested volume for every status, in pipeline order."""
    buckets = {status: StatusBucket(status=status, count=0) for status in MortgageStatus}
    for client in clients:
        bucket = buckets[client.status]
        bucket.count += 1
        bucket.volume += client.requested_amount
    return list(buckets.values())


def income_vs_loan(
    clients: Sequence[Client], limit: int = INCOME_VS_LOAN_SAMPLE_SIZE
) -> list[IncomeVsLoanPoint]:
    """Income next to the (scaled down) requested loan for the first clients."""
    return [
        IncomeVsLoanPoint(
            name=c.first_name,
            monthly_income=c.monthly_income,
            requested_amount_scaled=c.requested_amount / LOAN_SCALE_DIVISOR,
        )
        for c in clients[:limit]
    ]


def drill_down(clients: Sequence[Client], kpi: KpiType | str, now: datetime) -> list[Client]:
    """Clients behind a KPI card.

    Raises:
        InvalidDrillDownError: If ``kpi`` is not a known KPI key
    """
    try:
        kpi = KpiType(kpi)
    except ValueError as exc:
        raise InvalidDrillDownError(f"Unknown KPI: {kpi}") from exc

    if kpi == KpiType.ACTIVE:
        return [c for c in clients if c.status in ACTIVE_STATUSES]
    if kpi == KpiType.VOLUME:
        return [c for c in clients if c.status == MortgageStatus.APPROVED]
    if kpi == KpiType.DOCS:
        return [c for c in clients if any(not d.is_signed for d in c.documents)]
    if kpi == KpiType.CREDIT:
        return sorted(clients, key=lambda c: c.credit_score, reverse=True)
    if kpi == KpiType.RATES:
        return [c for c in clients if c.status in DECIDED_STATUSES]
    if kpi == KpiType.WAIT_TIME:
        waiting = [c for c in clients if c.status == MortgageStatus.NEW]
        return sorted(waiting, key=lambda c: hours_waiting(c, now), reverse=True)
    return list(clients)


def compute_kpis(
    clients: Sequence[Client], now: datetime, threshold: float | None = None
) -> DashboardKpis:
    """All KPI card values for one snapshot."""
    return DashboardKpis(
        total_clients=total_clients(clients),
        active_clients=active_clients(clients),
        approved_volume=approved_volume(clients),
        pending_documents=pending_documents(clients),
        average_credit_score=average_credit_score(clients),
        approval_rate=approval_rate(clients),
        wait_time=average_wait_time(clients, now, threshold),
    )
