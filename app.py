"""
Main Entry Point for Ask George
Builds the orchestrator with its store and provider clients
"""
from typing import Optional

import httpx

from config import HTTP_TIMEOUT_SECONDS
from clients import BitlyShortener, GoogleMapsClient
from core import MemoryStore, RedisStore, SessionOrchestrator
from utils import GeocodeCache

# ============================================
# INITIALIZATION FUNCTIONS
# ============================================

def build_orchestrator(store=None, http_client: Optional[httpx.AsyncClient] = None,
                       use_memory_store: bool = False) -> SessionOrchestrator:
    """
    Wire the orchestrator with production collaborators

    Args:
        store: Store to use (defaults to Redis, or memory when requested)
        http_client: Shared httpx client for the provider APIs
        use_memory_store: Use an in-process store instead of Redis

    Returns:
        SessionOrchestrator instance
    """
    if store is None:
        store = MemoryStore() if use_memory_store else RedisStore()

    http_client = http_client or httpx.AsyncClient(timeout=HTTP_TIMEOUT_SECONDS)
    maps = GoogleMapsClient(http_client=http_client, cache=GeocodeCache())

    return SessionOrchestrator(
        store=store,
        geocoder=maps,
        places=maps,
        shortener=BitlyShortener(http_client=http_client),
    )


# Initialize once (cached)
_orchestrator = None

async def get_orchestrator() -> SessionOrchestrator:
    """
    Get or create singleton orchestrator

    Runs on the event loop with no await between the check and the
    assignment, so concurrent first requests share one instance.
    """
    global _orchestrator
    if _orchestrator is None:
        _orchestrator = build_orchestrator()
    return _orchestrator


async def shutdown_orchestrator():
    """Flush pending writes and release connections"""
    global _orchestrator
    if _orchestrator is None:
        return
    await _orchestrator.drain()
    await _orchestrator.geocoder.aclose()
    await _orchestrator.store.close()
    _orchestrator = None


__all__ = [
    'build_orchestrator',
    'get_orchestrator',
    'shutdown_orchestrator',
]
