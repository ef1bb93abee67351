"""FastAPI Dependencies

Centralized dependency injection for reuse across route modules.
"""

from typing import Iterator

from vendors.adapters.spectre_adapter import SpectreFleetAdapter


def get_adapter() -> Iterator[SpectreFleetAdapter]:
    """Dependency yielding a fresh calendar adapter per request

    Usage in routes:
        @router.get("/endpoint")
        def endpoint(adapter: SpectreFleetAdapter = Depends(get_adapter)):
            fleets = adapter.fetch_fleets()

    The HTTP session is closed once the response is produced.
    Tests replace it via app.dependency_overrides[get_adapter].
    """
    with SpectreFleetAdapter() as adapter:
        yield adapter
