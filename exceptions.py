"""
Custom Exception Hierarchy - Domain-specific error types

Two request-scoped failure kinds exist: the calendar page could not be
fetched (TransportError) or it was fetched but did not have the expected
shape (ExtractionError). Both inherit from FleetMotdError so the MOTD
endpoint can catch them with a single except clause.

- Exceptions are data: include context for debugging
- `message` is the short text shown to chat users, str() adds the context
"""

from typing import Optional, Dict, Any


class FleetMotdError(Exception):
    """Base exception for all fleetmotd errors"""

    # Default: errors are not retryable (permanent failure)
    _retryable: bool = False

    def __init__(self, message: str, context: Optional[Dict[str, Any]] = None):
        self.message = message
        self.context = context or {}
        super().__init__(message)

    @property
    def is_retryable(self) -> bool:
        """Check if this error represents a transient failure.

        Returns:
            True for transient failures (network, timeouts, 5xx)
            False for permanent failures (parse errors, bad configuration)
        """
        return self._retryable

    def __str__(self):
        base_msg = super().__str__()
        if self.context:
            context_str = ", ".join(f"{k}={v}" for k, v in self.context.items())
            return f"{base_msg} (context: {context_str})"
        return base_msg


# ========== Source Errors ==========


class TransportError(FleetMotdError):
    """Calendar page could not be retrieved or decoded as text

    Examples:
    - Connection refused / DNS failure
    - Timeout
    - 4xx/5xx response
    - Body is not valid UTF-8
    """

    def __init__(
        self,
        message: str = "Failed to fetch",
        url: Optional[str] = None,
        status_code: Optional[int] = None,
        original_error: Optional[Exception] = None,
    ):
        self.url = url
        self.status_code = status_code
        self.original_error = original_error

        context = {}
        if url:
            context['url'] = url
        if status_code:
            context['status_code'] = status_code
        if original_error:
            context['original_error'] = str(original_error)

        super().__init__(message, context)

    @property
    def is_retryable(self) -> bool:
        """5xx errors and network failures are retryable, 4xx are not"""
        if self.status_code is None:
            return True
        return self.status_code >= 500


class ExtractionError(FleetMotdError):
    """Calendar page did not match the expected layout

    Examples:
    - Row without a doctrine link
    - Start time not in "Month DD, YYYY HH:MM" form
    - Fleet type marker span missing
    """

    def __init__(
        self,
        message: str = "Failed to parse",
        row: Optional[int] = None,
        reason: Optional[str] = None,
        original_error: Optional[Exception] = None,
    ):
        self.row = row
        self.reason = reason
        self.original_error = original_error

        context = {}
        if row is not None:
            context['row'] = row
        if reason:
            context['reason'] = reason
        if original_error:
            context['original_error'] = str(original_error)

        super().__init__(message, context)


# ========== Configuration Errors ==========


class ConfigurationError(FleetMotdError):
    """Invalid environment configuration"""

    def __init__(self, message: str, config_key: Optional[str] = None):
        self.config_key = config_key
        context = {}
        if config_key:
            context['config_key'] = config_key
        super().__init__(message, context)
