"""
Base Adapter - Shared HTTP logic for calendar sources

Extracts common patterns:
- HTTP session with retry logic
- Request/response logging and metrics
"""

import time
import requests
from typing import Optional

from requests.adapters import HTTPAdapter
from urllib3.util.retry import Retry

from config import config, get_logger
from server.metrics import metrics

logger = get_logger(__name__).bind(component="vendor")

# Browser-like headers; the calendar sits behind a CDN that dislikes bare clients
DEFAULT_HEADERS = {
    "User-Agent": "Mozilla/5.0 (Windows NT 10.0; Win64; x64) AppleWebKit/537.36 (KHTML, like Gecko) Chrome/119.0.0.0 Safari/537.36",
    "Accept": "text/html,application/xhtml+xml,application/xml;q=0.9,*/*;q=0.8",
    "Accept-Language": "en-US,en;q=0.9",
    "Connection": "keep-alive",
}


class BaseAdapter:
    """
    Base adapter with shared HTTP session.

    Source-specific adapters extend this and implement fetch_fleets().
    """

    def __init__(self, base_url: str, vendor: str, timeout: Optional[int] = None, retries: Optional[int] = None):
        """
        Initialize adapter with source origin and vendor name.

        Args:
            base_url: Origin of the calendar site (e.g., "https://www.spectre-fleet.space")
            vendor: Vendor name for logging and metrics (e.g., "spectre")
            timeout: Per-request timeout in seconds (defaults to config)
            retries: Retry budget for 5xx responses (defaults to config)
        """
        if not base_url:
            raise ValueError(f"base_url required for {vendor}")

        self.base_url = base_url.rstrip("/")
        self.vendor = vendor
        self.timeout = timeout if timeout is not None else config.FETCH_TIMEOUT
        self.retries = retries if retries is not None else config.FETCH_RETRIES
        self.session = self._create_session()

        logger.debug("initialized adapter", vendor=vendor, base_url=self.base_url)

    def __enter__(self):
        return self

    def __exit__(self, exc_type, exc_val, exc_tb):
        self.close()
        return False

    def close(self):
        """Explicit cleanup method for non-context-manager usage"""
        if hasattr(self, "session"):
            self.session.close()

    def _create_session(self) -> requests.Session:
        """
        Create HTTP session with retry logic and proper headers.

        Retry strategy:
        - self.retries total retries
        - Exponential backoff (1s, 2s, 4s)
        - Retry on 500, 502, 503, 504 (server errors only)
        """
        session = requests.Session()
        session.headers.update(DEFAULT_HEADERS)

        retry_strategy = Retry(
            total=self.retries,
            backoff_factor=1,
            status_forcelist=[500, 502, 503, 504],
            allowed_methods=["GET", "HEAD"],
        )

        adapter = HTTPAdapter(max_retries=retry_strategy)
        session.mount("http://", adapter)
        session.mount("https://", adapter)

        return session

    def _get(self, url: str, **kwargs) -> requests.Response:
        """
        Make GET request with error handling and logging.

        Args:
            url: URL to fetch
            **kwargs: Additional arguments for session.get

        Returns:
            Response object

        Raises:
            requests.RequestException on failure
        """
        kwargs.setdefault("timeout", self.timeout)

        start_time = time.time()

        try:
            logger.debug("vendor request", vendor=self.vendor, method="GET", url=url[:100])
            response = self.session.get(url, **kwargs)

            # Log response details BEFORE raise_for_status so we see failures
            duration = time.time() - start_time
            logger.debug(
                "vendor response",
                vendor=self.vendor,
                status_code=response.status_code,
                content_length=len(response.content),
                content_type=response.headers.get('content-type', 'unknown'),
                duration_seconds=round(duration, 2)
            )

            response.raise_for_status()

            metrics.source_requests.labels(vendor=self.vendor, status="success").inc()
            metrics.source_request_duration.labels(vendor=self.vendor).observe(duration)

            return response
        except requests.Timeout as e:
            duration = time.time() - start_time
            metrics.source_requests.labels(vendor=self.vendor, status="timeout").inc()
            metrics.record_error(component="vendor", error=e)
            logger.error("vendor request timeout", vendor=self.vendor, url=url[:100], duration_seconds=round(duration, 2))
            raise
        except requests.HTTPError as e:
            duration = time.time() - start_time
            metrics.source_requests.labels(vendor=self.vendor, status=f"http_{e.response.status_code}").inc()
            metrics.record_error(component="vendor", error=e)
            logger.error("vendor http error", vendor=self.vendor, status_code=e.response.status_code, url=url[:100], duration_seconds=round(duration, 2))
            raise
        except requests.RequestException as e:
            duration = time.time() - start_time
            metrics.source_requests.labels(vendor=self.vendor, status="error").inc()
            metrics.record_error(component="vendor", error=e)
            logger.error("vendor request failed", vendor=self.vendor, url=url[:100], error=str(e), error_type=type(e).__name__, duration_seconds=round(duration, 2))
            raise
