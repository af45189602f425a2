"""Tests for request id resolution and scoping."""

import pytest

from app.core.request_context import current_request_id, request_scope, resolve_request_id


def test_well_formed_incoming_id_is_reused():
    assert resolve_request_id("  trace-42:a.b_c ") == "trace-42:a.b_c"


@pytest.mark.parametrize("incoming", [None, "", "   ", "has space", "x" * 129, "line\nbreak"])
def test_unusable_incoming_id_is_replaced(incoming):
    request_id = resolve_request_id(incoming)

    assert len(request_id) == 32
    assert request_id != incoming


def test_scope_restores_previous_id():
    assert current_request_id() is None

    with request_scope("outer"):
        with request_scope("inner"):
            assert current_request_id() == "inner"
        assert current_request_id() == "outer"

    assert current_request_id() is None


def test_scope_is_reset_when_handler_raises():
    with pytest.raises(RuntimeError):
        with request_scope("failing"):
            raise RuntimeError("boom")

    assert current_request_id() is None
