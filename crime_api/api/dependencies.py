"""Request Dependencies — hands the process-wide IncidentStore to route handlers.

Invariants:
    - The store lives on app.state, set by the lifespan; handlers receive it via Depends
    - Tests replace the store through app.dependency_overrides[get_store]
"""

from fastapi import Request

from crime_api.infrastructure.database import IncidentStore


def get_store(request: Request) -> IncidentStore:
    """FastAPI dependency for the incident store."""
    store = getattr(request.app.state, "store", None)
    if store is None:
        raise RuntimeError("Incident store not initialized")
    return store
