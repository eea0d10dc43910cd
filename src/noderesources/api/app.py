# src/noderesources/api/app.py
"""
FastAPI application factory for the cluster-node-resources server mode.

The factory creates the single inventory provider and the single last-result
cache the routes share for the lifetime of the application. Tests pass their
own inventory and skip the lifespan handler.
"""

import logging
from contextlib import asynccontextmanager
from typing import Optional

import uvicorn
from fastapi import FastAPI

from noderesources import __version__
from noderesources.api.routers import health
from noderesources.api.routers import metrics
from noderesources.collectors.base_inventory import InventoryProvider
from noderesources.collectors.kubernetes_inventory import KubernetesInventory
from noderesources.core.cache import LastResultCache
from noderesources.core.config import config

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Manage application startup and shutdown."""
    logger.info("Starting cluster-node-resources server (default node type: %s)...", config.SERVER_NODE_TYPE)
    yield
    logger.info("Shutting down cluster-node-resources server...")
    await app.state.inventory.close()
    logger.info("Inventory client closed.")


def create_app(
    inventory: Optional[InventoryProvider] = None,
    cache: Optional[LastResultCache] = None,
    kubeconfig: Optional[str] = None,
    use_lifespan: bool = False,
) -> FastAPI:
    """Create and configure the FastAPI application.

    Args:
        inventory: Inventory provider to use; a KubernetesInventory is created when omitted.
        cache: Last-result cache to use; a fresh one is created when omitted.
        kubeconfig: Kubeconfig path for the default KubernetesInventory.
        use_lifespan: If True, attach the lifespan handler that closes the
                      inventory client on shutdown. Set to False for testing.

    Returns:
        A configured FastAPI application instance.
    """
    app = FastAPI(
        title="Cluster Node Resources",
        description="Per-node and cluster-wide CPU/memory capacity, requests, limits and usage.",
        version=__version__,
        docs_url="/api/v1/docs",
        openapi_url="/api/v1/openapi.json",
        lifespan=lifespan if use_lifespan else None,
    )

    app.state.inventory = inventory or KubernetesInventory(kubeconfig=kubeconfig)
    app.state.cache = cache or LastResultCache()

    app.include_router(metrics.dashboard_router, tags=["Dashboard"])
    app.include_router(metrics.router, prefix="/api/v1", tags=["Metrics"])
    app.include_router(health.router, prefix="/api/v1", tags=["Health"])

    return app


def serve(host: Optional[str] = None, port: Optional[int] = None, kubeconfig: Optional[str] = None) -> None:
    """Run the API server until interrupted."""
    app = create_app(kubeconfig=kubeconfig or config.KUBECONFIG, use_lifespan=True)
    host = host or config.API_HOST
    port = port or config.API_PORT
    logger.info("Server starting on %s:%s", host, port)
    uvicorn.run(app, host=host, port=port)


def main():
    """Entry point for the cluster-node-resources-api console script."""
    logging.basicConfig(
        level=config.LOG_LEVEL.upper(),
        format="%(asctime)s - %(levelname)s - %(message)s",
    )
    serve()
