# src/noderesources/api/routers/metrics.py
"""
API routes that run an aggregation pass: the HTML dashboard, its JSON
counterpart and the spreadsheet download of the last computed result.
"""

import logging
from email.utils import format_datetime
from typing import Optional

from fastapi import APIRouter, Depends, HTTPException, Query, Response
from fastapi.responses import HTMLResponse

from noderesources.api.dependencies import get_cache, get_inventory
from noderesources.collectors.base_inventory import InventoryProvider
from noderesources.core.cache import LastResultCache
from noderesources.core.cluster_aggregator import calculate_cluster_metrics
from noderesources.core.config import config
from noderesources.core.exceptions import InvalidNodeTypeError, NodeResourcesError
from noderesources.exporters.excel_exporter import CONTENT_TYPE, ExcelExporter
from noderesources.models.resources import ClusterMetrics
from noderesources.reporters.console_reporter import ConsoleReporter
from noderesources.reporters.html_reporter import HTMLReporter

logger = logging.getLogger(__name__)

dashboard_router = APIRouter()
router = APIRouter()

_NODE_TYPE_QUERY = Query(
    None,
    alias="node-type",
    description="Node type filter: all, worker, master or infra.",
)


async def run_pass(inventory: InventoryProvider, cache: LastResultCache, node_type: Optional[str]) -> ClusterMetrics:
    """Compute fresh cluster metrics, store them as the last result, map failures to HTTP errors."""
    node_type = node_type or config.SERVER_NODE_TYPE
    try:
        metrics = await calculate_cluster_metrics(inventory, node_type)
    except InvalidNodeTypeError as e:
        raise HTTPException(status_code=400, detail=str(e))
    except NodeResourcesError as e:
        logger.error("Aggregation pass failed (node type: %s): %s", node_type, e)
        raise HTTPException(status_code=500, detail=f"Could not compute cluster metrics: {e}")
    cache.set(metrics)
    return metrics


@dashboard_router.get("/metrics", response_class=HTMLResponse)
async def metrics_dashboard(
    node_type: Optional[str] = _NODE_TYPE_QUERY,
    inventory: InventoryProvider = Depends(get_inventory),
    cache: LastResultCache = Depends(get_cache),
):
    """Run a pass and render the HTML dashboard."""
    metrics = await run_pass(inventory, cache, node_type)
    ConsoleReporter().report(metrics)
    return HTMLResponse(content=HTMLReporter().render(metrics))


@dashboard_router.get("/download/excel")
async def download_excel(cache: LastResultCache = Depends(get_cache)):
    """Return the last computed result as an .xlsx attachment."""
    metrics, computed_at = cache.snapshot()
    if metrics is None:
        raise HTTPException(status_code=404, detail="No cluster metrics computed yet. Open /metrics first.")
    content = ExcelExporter().to_bytes(metrics)
    return Response(
        content=content,
        media_type=CONTENT_TYPE,
        headers={
            "Content-Disposition": f"attachment; filename={config.EXPORT_FILENAME}",
            "Last-Modified": format_datetime(computed_at, usegmt=True),
        },
    )


@router.get("/metrics", response_model=ClusterMetrics)
async def metrics_json(
    node_type: Optional[str] = _NODE_TYPE_QUERY,
    inventory: InventoryProvider = Depends(get_inventory),
    cache: LastResultCache = Depends(get_cache),
):
    """Run a pass and return the cluster metrics as JSON."""
    return await run_pass(inventory, cache, node_type)
