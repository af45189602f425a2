"""Tests for display-timezone helpers."""

from datetime import date, datetime, timedelta

import pytz

from app.core.clock import ensure_aware, local_midnight, now_local, resolve_timezone


def test_resolve_timezone():
    assert resolve_timezone("Asia/Jerusalem") == "Asia/Jerusalem"
    assert resolve_timezone("Mars/Olympus") == "UTC"
    assert resolve_timezone(None) == "UTC"


def test_local_midnight_uses_dst_offset():
    winter = local_midnight(date(2024, 1, 15))
    summer = local_midnight(date(2024, 7, 15))

    assert winter.utcoffset() == timedelta(hours=2)
    assert summer.utcoffset() == timedelta(hours=3)


def test_ensure_aware_localizes_naive_values():
    value = ensure_aware(datetime(2024, 3, 10, 12, 0))

    assert value.tzinfo is not None
    assert value.astimezone(pytz.UTC).hour == 10


def test_ensure_aware_keeps_aware_values():
    value = pytz.UTC.localize(datetime(2024, 3, 10, 12, 0))
    assert ensure_aware(value) is value


def test_now_local_is_aware():
    assert now_local().tzinfo is not None
