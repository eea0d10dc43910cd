# src/noderesources/api/dependencies.py
"""
FastAPI dependency injection functions.

The application owns one inventory provider and one last-result cache,
created in the app factory and stored on ``app.state``. Route handlers get
them through Depends() so tests can override either.
"""

from fastapi import Request

from noderesources.collectors.base_inventory import InventoryProvider
from noderesources.core.cache import LastResultCache


async def get_inventory(request: Request) -> InventoryProvider:
    """Provides the application's inventory provider."""
    return request.app.state.inventory


async def get_cache(request: Request) -> LastResultCache:
    """Provides the application's last-result cache."""
    return request.app.state.cache
