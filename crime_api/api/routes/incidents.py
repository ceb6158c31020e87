"""Incident Routes — list, create and remove crime incidents.

Invariants:
    - Query strings and bodies are validated before the handler runs
    - GET answers a JSON array; POST and DELETE answer plain text
    - Failures are raised as CrimeApiError and rendered by api/error_handlers.py
"""

from typing import Annotated

from fastapi import APIRouter, Depends, Query, status
from fastapi.responses import JSONResponse, PlainTextResponse

from crime_api.api.dependencies import get_store
from crime_api.infrastructure.database import IncidentStore
from crime_api.schemas.incident import IncidentQuery, NewIncident, RemoveIncident
from crime_api.services import incident_service

router = APIRouter(tags=["incidents"])


@router.get("/incidents")
async def list_incidents(
    query: Annotated[IncidentQuery, Query()],
    store: IncidentStore = Depends(get_store),
):
    """Incidents matching the filters, newest first."""
    rows = await incident_service.list_incidents(store, query)
    return JSONResponse(rows, status_code=status.HTTP_200_OK)


@router.post("/new-incident", response_class=PlainTextResponse)
async def create_incident(
    body: NewIncident, store: IncidentStore = Depends(get_store),
):
    await incident_service.create_incident(store, body)
    return PlainTextResponse("OK", status_code=status.HTTP_200_OK)


@router.delete("/remove-incident", response_class=PlainTextResponse)
async def remove_incident(
    body: RemoveIncident, store: IncidentStore = Depends(get_store),
):
    await incident_service.remove_incident(store, body.case_number)
    return PlainTextResponse(
        f"Case number {body.case_number} has been deleted.",
        status_code=status.HTTP_200_OK,
    )
