"""
Request/response logging middleware
"""


import time
from fastapi import Request

from config import get_logger

logger = get_logger(__name__)


async def log_requests(request: Request, call_next):
    """Log incoming requests and responses"""
    # Skip logging for metrics endpoint (Prometheus scraping noise)
    if request.url.path == "/metrics":
        return await call_next(request)

    start_time = time.time()

    try:
        response = await call_next(request)
        duration = time.time() - start_time
        logger.info(
            f"{request.method} {request.url.path} → {response.status_code} ({duration:.3f}s)"
        )
        return response

    except Exception as e:
        duration = time.time() - start_time
        logger.error(
            f"{request.method} {request.url.path} → ERROR ({duration:.3f}s): {str(e)}"
        )
        raise
