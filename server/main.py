"""
fleetmotd API Server

Serves the Spectre Fleet MOTD as plain text at "/".
Routes, services, and utilities are organized into focused modules.
"""

from fastapi import FastAPI

from config import config, get_logger
from server.middleware.logging import log_requests
from server.middleware.metrics import metrics_middleware
from server.middleware.request_id import RequestIDMiddleware
from server.routes import monitoring, motd

logger = get_logger(__name__)


app = FastAPI(title="fleetmotd", description="Spectre Fleet schedule as an EVE MOTD")

# Request ID middleware (must be early in stack for tracing)
app.add_middleware(RequestIDMiddleware)


# Register middleware (execution order: metrics -> logging)
# FastAPI middleware stack: last registered runs first, so register in reverse order
@app.middleware("http")
async def log_requests_middleware(request, call_next):
    return await log_requests(request, call_next)


@app.middleware("http")
async def metrics_middleware_wrapper(request, call_next):
    return await metrics_middleware(request, call_next)


# Mount routers
app.include_router(motd.router)        # MOTD endpoint
app.include_router(monitoring.router)  # Health and metrics endpoints


if __name__ == "__main__":
    import uvicorn

    logger.info("starting fleetmotd server")
    logger.info("configuration", config_summary=config.summary())

    uvicorn.run(
        app,
        host=config.API_HOST,
        port=config.API_PORT,
        access_log=False,  # Custom middleware logging replaces uvicorn's
    )
