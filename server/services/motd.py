"""
MOTD service - fetch, extract and render in one request-scoped pass

Failures never escape as exceptions: the chat client polls this endpoint
and shows whatever text comes back, so errors become "Error: ..." strings.
"""

from datetime import datetime, timezone
from typing import Optional

from config import get_logger
from exceptions import ExtractionError, FleetMotdError, TransportError
from render.motd import render_motd
from server.metrics import metrics
from vendors.adapters.spectre_adapter import SpectreFleetAdapter

logger = get_logger(__name__).bind(component="motd")


def build_motd(adapter: SpectreFleetAdapter, now: Optional[datetime] = None) -> str:
    """
    Build the MOTD for the next fleets on the calendar.

    Args:
        adapter: Calendar source
        now: Current time (defaults to the UTC clock)

    Returns:
        Rendered MOTD, "" for an empty calendar, or "Error: <message>"
    """
    if now is None:
        now = datetime.now(timezone.utc)

    try:
        fleets = adapter.fetch_fleets()
    except FleetMotdError as e:
        metrics.motd_builds.labels(outcome=_outcome(e)).inc()
        logger.warning("motd build failed", error=str(e), error_type=type(e).__name__, retryable=e.is_retryable)
        return format_error(e)

    motd = render_motd(fleets, now)
    metrics.motd_builds.labels(outcome="success").inc()
    logger.info("built motd", fleet_count=len(fleets), motd_length=len(motd))
    return motd


def format_error(error: FleetMotdError) -> str:
    return f"Error: {error.message}"


def _outcome(error: FleetMotdError) -> str:
    if isinstance(error, TransportError):
        return "transport_error"
    if isinstance(error, ExtractionError):
        return "extraction_error"
    return "error"
