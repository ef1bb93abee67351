"""
Spectre Fleet Adapter - HTML scraping of the public fleet calendar

The calendar is a single server-rendered page at the site root. Every call
re-fetches it; nothing is cached between requests.
"""

from typing import List

import requests

from config import config
from exceptions import ExtractionError, TransportError
from fleets.models import Fleet
from server.metrics import metrics
from vendors.adapters.base_adapter import BaseAdapter, logger
from vendors.adapters.parsers.calendar_parser import parse_calendar


class SpectreFleetAdapter(BaseAdapter):
    """Adapter for the Spectre Fleet schedule page"""

    def __init__(self, base_url: str = None, **kwargs):
        """
        Initialize Spectre Fleet adapter.

        Args:
            base_url: Site origin, also prefixed to doctrine links (defaults to config)
        """
        super().__init__(base_url or config.BASE_URL, vendor="spectre", **kwargs)

    def fetch_html(self) -> str:
        """
        Fetch the calendar page as text.

        Raises:
            TransportError: request failed or body is not UTF-8
        """
        try:
            response = self._get(self.base_url)
        except requests.HTTPError as e:
            raise TransportError(url=self.base_url, status_code=e.response.status_code, original_error=e) from e
        except requests.RequestException as e:
            raise TransportError(url=self.base_url, original_error=e) from e

        try:
            return response.content.decode("utf-8")
        except UnicodeDecodeError as e:
            metrics.record_error(component="vendor", error=e)
            logger.error("calendar body is not utf-8", vendor=self.vendor, url=self.base_url)
            raise TransportError(url=self.base_url, original_error=e) from e

    def fetch_fleets(self) -> List[Fleet]:
        """
        Fetch and parse the calendar.

        Returns:
            Fleets in page order

        Raises:
            TransportError: page could not be fetched
            ExtractionError: page did not match the calendar layout
        """
        html = self.fetch_html()

        try:
            fleets = parse_calendar(html, base_url=self.base_url)
        except ExtractionError as e:
            metrics.extraction_failures.labels(vendor=self.vendor).inc()
            logger.error("calendar layout mismatch", vendor=self.vendor, error=str(e))
            raise

        metrics.fleets_extracted.labels(vendor=self.vendor).inc(len(fleets))
        return fleets
