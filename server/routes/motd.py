"""
MOTD API routes
"""

from fastapi import APIRouter, Depends
from fastapi.responses import PlainTextResponse

from server.dependencies import get_adapter
from server.services.motd import build_motd
from vendors.adapters.spectre_adapter import SpectreFleetAdapter


router = APIRouter()


# Sync handler: FastAPI runs it in the threadpool, the fetch is blocking requests
@router.get("/", response_class=PlainTextResponse)
def get_motd(adapter: SpectreFleetAdapter = Depends(get_adapter)):
    """Next fleets as EVE chat markup, or "Error: ..." on failure"""
    return build_motd(adapter)
