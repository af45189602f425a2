"""Self-ping loop that keeps free-tier hosts from idling the service."""

import asyncio
import logging

import httpx

from app.settings import settings

logger = logging.getLogger(__name__)


def keep_alive_url(base_url: str) -> str:
    """Health URL pinged under ``base_url``."""
    return f"{base_url.rstrip('/')}/health"


async def ping_once(client: httpx.AsyncClient, url: str) -> bool:
    """Ping ``url`` once.

    Returns:
        True if the service answered with a success status
    """
    try:
        resp = await client.get(url)
        resp.raise_for_status()
        return True
    except httpx.TimeoutException:
        logger.warning(f"[KEEP-ALIVE] Timeout pinging {url}")
    except httpx.HTTPError as e:
        logger.warning(f"[KEEP-ALIVE] Ping to {url} failed: {e}")
    return False


async def run_keep_alive(base_url: str, interval_seconds: float | None = None) -> None:
    """Ping the service's own health endpoint until cancelled.

    Args:
        base_url: Externally reachable base URL of this service
        interval_seconds: Seconds between pings, defaults to settings
    """
    interval = interval_seconds or settings.keep_alive_interval_seconds
    url = keep_alive_url(base_url)
    logger.info(f"[KEEP-ALIVE] Pinging {url} every {interval}s")

    async with httpx.AsyncClient(timeout=10.0) as client:
        while True:
            await asyncio.sleep(interval)
            await ping_once(client, url)
