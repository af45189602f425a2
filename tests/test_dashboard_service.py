"""Tests for dashboard aggregates."""

from datetime import date, datetime, timedelta

import pytest

from app.domain.errors import InvalidDrillDownError
from app.domain.models.client import Document, MortgageStatus
from app.domain.services import dashboard_service as ds
from tests.factories import make_client


def _doc(id: str, signed: bool) -> Document:
    return Document(id=id, name=id, is_signed=signed, upload_date=date(2024, 1, 1))


@pytest.fixture
def pipeline():
    return [
        make_client("1", status=MortgageStatus.NEW, requested_amount=100, credit_score=700,
                    joined_date=date(2023, 10, 25), documents=[_doc("a", False), _doc("b", True)]),
        make_client("2", status=MortgageStatus.IN_PROCESS, requested_amount=200, credit_score=800,
                    joined_date=date(2024, 10, 3)),
        make_client("3", status=MortgageStatus.APPROVED, requested_amount=300, credit_score=751,
                    joined_date=date(2023, 9, 20), documents=[_doc("c", False)]),
        make_client("4", status=MortgageStatus.APPROVED, requested_amount=400, credit_score=0,
                    joined_date=date(2023, 1, 5)),
        make_client("5", status=MortgageStatus.REJECTED, requested_amount=500, credit_score=540,
                    joined_date=date(2023, 10, 1)),
    ]


class TestEmptySnapshot:
    """Every aggregate tolerates an empty client list."""

    def test_counts_are_zero(self, now):
        assert ds.total_clients([]) == 0
        assert ds.active_clients([]) == 0
        assert ds.approved_volume([]) == 0
        assert ds.pending_documents([]) == 0
        assert ds.average_credit_score([]) == 0
        assert ds.approval_rate([]) == 0

    def test_series_are_empty(self, now):
        assert ds.monthly_trend([]) == []
        assert ds.status_distribution([]) == []
        assert ds.income_vs_loan([]) == []
        assert all(b.count == 0 for b in ds.volume_by_status([]))
        assert ds.average_wait_time([], now) == ds.WaitTimeSummary()


def test_kpi_values(pipeline, now):
    kpis = ds.compute_kpis(pipeline, now)

    assert kpis.total_clients == 5
    assert kpis.active_clients == 2
    assert kpis.approved_volume == 700
    assert kpis.pending_documents == 2
    # (700 + 800 + 751 + 0 + 540) / 5 = 558.2, zero scores included
    assert kpis.average_credit_score == 558
    # 2 approved of 3 decided
    assert kpis.approval_rate == 67


def test_approved_volume_without_approved_clients():
    clients = [make_client("1", status=MortgageStatus.NEW, requested_amount=1000)]
    assert ds.approved_volume(clients) == 0


def test_average_credit_score_rounds_half_up():
    clients = [make_client("1", credit_score=700), make_client("2", credit_score=701)]
    assert ds.average_credit_score(clients) == 701


def test_approval_rate_without_decisions():
    clients = [make_client("1", status=MortgageStatus.PAID)]
    assert ds.approval_rate(clients) == 0


class TestWaitTime:
    def test_exactly_threshold_is_not_critical(self, now):
        client = make_client("1", created_at=now - timedelta(hours=2))
        hours = ds.hours_waiting(client, now)

        assert hours == pytest.approx(2.0)
        assert ds.is_wait_critical(hours, threshold=2) is False
        assert ds.average_wait_time([client], now, threshold=2).is_critical is False

    def test_just_over_threshold_is_critical(self, now):
        client = make_client("1", created_at=now - timedelta(hours=2.01))

        summary = ds.average_wait_time([client], now, threshold=2)

        assert summary.is_critical is True
        assert summary.waiting_clients == 1
        assert summary.average_hours == pytest.approx(2.01)

    def test_legacy_client_counts_from_joined_midnight(self, now):
        # now is 2024-03-10 14:30 local
        client = make_client("1", joined_date=date(2024, 3, 10))
        assert ds.hours_waiting(client, now) == pytest.approx(14.5)

    def test_only_new_clients_are_averaged(self, now):
        clients = [
            make_client("1", created_at=now - timedelta(hours=1)),
            make_client("2", created_at=now - timedelta(hours=3)),
            make_client("3", status=MortgageStatus.IN_PROCESS, created_at=now - timedelta(hours=100)),
        ]

        summary = ds.average_wait_time(clients, now, threshold=2)

        assert summary.average_hours == pytest.approx(2.0)
        assert summary.waiting_clients == 2
        assert summary.is_critical is False

    def test_naive_created_at_is_display_local(self, now):
        client = make_client("1", created_at=datetime(2024, 3, 10, 13, 30))
        assert ds.hours_waiting(client, now) == pytest.approx(1.0)


def test_monthly_trend_ignores_year(pipeline):
    trend = ds.monthly_trend(pipeline)

    assert [(b.month, b.count) for b in trend] == [(1, 1), (9, 1), (10, 3)]
    assert trend[0].label == "ינואר"
    assert trend[-1].label == "אוקטובר"


def test_status_distribution_skips_empty_statuses(pipeline):
    distribution = ds.status_distribution(pipeline)

    assert [(b.status, b.count) for b in distribution] == [
        (MortgageStatus.NEW, 1),
        (MortgageStatus.IN_PROCESS, 1),
        (MortgageStatus.APPROVED, 2),
        (MortgageStatus.REJECTED, 1),
    ]


def test_volume_by_status_covers_every_status(pipeline):
    volumes = {b.status: (b.count, b.volume) for b in ds.volume_by_status(pipeline)}

    assert volumes[MortgageStatus.APPROVED] == (2, 700)
    assert volumes[MortgageStatus.PAID] == (0, 0)
    assert list(volumes) == list(MortgageStatus)


def test_income_vs_loan_samples_first_clients():
    clients = [make_client(str(i), monthly_income=i * 1000, requested_amount=i * 100000) for i in range(1, 10)]

    points = ds.income_vs_loan(clients)

    assert len(points) == 7
    assert points[0].name == "Client 1"
    assert points[0].monthly_income == 1000
    assert points[0].requested_amount_scaled == 1000


def test_aggregates_do_not_mutate_input(pipeline, now):
    before = [c.model_dump() for c in pipeline]

    ds.compute_kpis(pipeline, now)
    ds.monthly_trend(pipeline)
    ds.volume_by_status(pipeline)
    ds.drill_down(pipeline, "CREDIT", now)

    assert [c.model_dump() for c in pipeline] == before


class TestDrillDown:
    @pytest.mark.parametrize(
        "kpi,expected",
        [
            ("TOTAL", ["1", "2", "3", "4", "5"]),
            ("ACTIVE", ["1", "2"]),
            ("VOLUME", ["3", "4"]),
            ("DOCS", ["1", "3"]),
            ("CREDIT", ["2", "3", "1", "5", "4"]),
            ("RATES", ["3", "4", "5"]),
            ("WAIT_TIME", ["1"]),
        ],
    )
    def test_subsets(self, pipeline, now, kpi, expected):
        assert [c.id for c in ds.drill_down(pipeline, kpi, now)] == expected

    def test_wait_time_longest_first(self, now):
        clients = [
            make_client("short", created_at=now - timedelta(minutes=30)),
            make_client("long", created_at=now - timedelta(hours=5)),
        ]
        assert [c.id for c in ds.drill_down(clients, ds.KpiType.WAIT_TIME, now)] == ["long", "short"]

    def test_unknown_kpi(self, pipeline, now):
        with pytest.raises(InvalidDrillDownError):
            ds.drill_down(pipeline, "REVENUE", now)
