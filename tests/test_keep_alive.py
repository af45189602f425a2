"""Tests for the keep-alive self-ping."""

import asyncio

import httpx
import pytest

from app.infrastructure import keep_alive
from app.infrastructure.keep_alive import keep_alive_url, ping_once, run_keep_alive


def test_keep_alive_url():
    assert keep_alive_url("https://crm.example.com") == "https://crm.example.com/health"
    assert keep_alive_url("https://crm.example.com/") == "https://crm.example.com/health"


@pytest.mark.asyncio
async def test_ping_once_success():
    seen = []

    def handler(request: httpx.Request) -> httpx.Response:
        seen.append(str(request.url))
        return httpx.Response(200, json={"status": "healthy"})

    async with httpx.AsyncClient(transport=httpx.MockTransport(handler)) as client:
        assert await ping_once(client, "https://crm.example.com/health") is True

    assert seen == ["https://crm.example.com/health"]


@pytest.mark.asyncio
async def test_ping_once_server_error():
    def handler(request: httpx.Request) -> httpx.Response:
        return httpx.Response(503)

    async with httpx.AsyncClient(transport=httpx.MockTransport(handler)) as client:
        assert await ping_once(client, "https://crm.example.com/health") is False


@pytest.mark.asyncio
async def test_ping_once_timeout():
    def handler(request: httpx.Request) -> httpx.Response:
        raise httpx.ConnectTimeout("timed out", request=request)

    async with httpx.AsyncClient(transport=httpx.MockTransport(handler)) as client:
        assert await ping_once(client, "https://crm.example.com/health") is False


@pytest.mark.asyncio
async def test_run_keep_alive_pings_until_cancelled(monkeypatch):
    pings = []

    async def fake_ping(client, url):
        pings.append(url)
        if len(pings) == 2:
            raise asyncio.CancelledError
        return True

    monkeypatch.setattr(keep_alive, "ping_once", fake_ping)

    with pytest.raises(asyncio.CancelledError):
        await run_keep_alive("https://crm.example.com", interval_seconds=0.001)

    assert pings == ["https://crm.example.com/health"] * 2
