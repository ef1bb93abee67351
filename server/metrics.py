"""
Prometheus Metrics Module

Provides instrumentation for the MOTD pipeline and API:
- Calendar page fetches (status, duration)
- Fleet extraction (fleets found, parse failures)
- MOTD builds by outcome
- API requests
- Error tracking

Usage:
    from server.metrics import metrics
    metrics.source_requests.labels(vendor="spectre", status="success").inc()
"""

from prometheus_client import Counter, Histogram, generate_latest, REGISTRY


class FleetMotdMetrics:
    """Centralized metrics for fleetmotd pipeline and API"""

    def __init__(self):
        # Source metrics
        self.source_requests = Counter(
            'fleetmotd_source_requests_total',
            'Total calendar page requests',
            ['vendor', 'status']
        )

        self.source_request_duration = Histogram(
            'fleetmotd_source_request_duration_seconds',
            'Calendar page request duration',
            ['vendor'],
            buckets=[0.1, 0.25, 0.5, 1, 2, 5, 10, 30]
        )

        # Extraction metrics
        self.fleets_extracted = Counter(
            'fleetmotd_fleets_extracted_total',
            'Total fleets extracted from the calendar',
            ['vendor']
        )

        self.extraction_failures = Counter(
            'fleetmotd_extraction_failures_total',
            'Calendar pages that did not match the expected layout',
            ['vendor']
        )

        # MOTD metrics
        self.motd_builds = Counter(
            'fleetmotd_motd_builds_total',
            'MOTD builds by outcome',
            ['outcome']  # success/transport_error/extraction_error
        )

        # API metrics
        self.api_requests = Counter(
            'fleetmotd_api_requests_total',
            'Total API requests',
            ['endpoint', 'method', 'status_code']
        )

        self.api_request_duration = Histogram(
            'fleetmotd_api_request_duration_seconds',
            'API request duration',
            ['endpoint', 'method'],
            buckets=[0.05, 0.1, 0.25, 0.5, 1, 2, 5, 10, 30]
        )

        # Error tracking
        self.errors = Counter(
            'fleetmotd_errors_total',
            'Total errors by component',
            ['component', 'error_type']
        )

    def record_error(self, component: str, error: Exception):
        """Record an error

        Args:
            component: Component name (vendor/parser/api)
            error: Exception instance
        """
        error_type = type(error).__name__
        self.errors.labels(component=component, error_type=error_type).inc()


# Global metrics instance
metrics = FleetMotdMetrics()


def get_metrics_text() -> str:
    """Get Prometheus metrics in text format

    Returns:
        Metrics text suitable for /metrics endpoint
    """
    return generate_latest(REGISTRY).decode('utf-8')
