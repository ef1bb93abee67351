"""
Monitoring and health check API routes
"""

from datetime import datetime, timezone

from fastapi import APIRouter
from fastapi.responses import Response

from config import config
from server.metrics import get_metrics_text


router = APIRouter()


@router.get("/api/health")
async def health_check():
    """Health check endpoint

    Does not touch the calendar; the source is only fetched on demand.
    """
    return {
        "status": "healthy",
        "service": "fleetmotd",
        "timestamp": datetime.now(timezone.utc).isoformat(),
        "base_url": config.BASE_URL,
    }


@router.get("/metrics")
async def prometheus_metrics():
    """Prometheus metrics endpoint

    Returns metrics in Prometheus text format for scraping.
    """
    return Response(
        content=get_metrics_text(),
        media_type="text/plain; version=0.0.4; charset=utf-8",
    )
