"""Incident Service — list, create and remove incidents against an IncidentStore.

Invariants:
    - Inputs are already validated by the request schemas
    - list_incidents returns rows with display-form date_time
    - remove_incident is one conditional DELETE; zero affected rows raises IncidentNotFoundError

Design Decisions:
    - Single DELETE with rowcount over SELECT-then-DELETE: no window in which another
      request can remove the row between check and delete
    - Store errors propagate unchanged; the API layer maps them to responses
"""

import logging
from typing import Protocol, Sequence, Any

from crime_api.core.errors import CrimeApiError, ErrorContext, IncidentNotFoundError
from crime_api.core.incident_query import (
    build_delete_statement,
    build_insert_statement,
    build_list_statement,
    shape_incident_rows,
)
from crime_api.schemas.incident import IncidentQuery, NewIncident

logger = logging.getLogger(__name__)


class Store(Protocol):
    """Contract the services need from the persistence layer."""
    async def select(self, query: str, params: Sequence[Any] = ()) -> list[dict]: ...
    async def run(self, query: str, params: Sequence[Any] = ()) -> int: ...


async def list_incidents(store: Store, query: IncidentQuery) -> list[dict]:
    """Filtered incidents, newest first."""
    statement = build_list_statement(query.model_dump(exclude_none=True))
    rows = await store.select(statement.sql, statement.params)
    return shape_incident_rows(rows)


async def create_incident(store: Store, incident: NewIncident) -> None:
    """Insert one incident."""
    statement = build_insert_statement(incident.model_dump())
    try:
        await store.run(statement.sql, statement.params)
    except CrimeApiError as e:
        e.context.case_number = incident.case_number
        logger.error(
            f"Failed to create incident: {e.message}",
            extra={"case_number": incident.case_number, "error_code": e.code},
        )
        raise
    logger.info("Incident created", extra={"case_number": incident.case_number})


async def remove_incident(store: Store, case_number: str) -> int:
    """Delete every incident with the case number; returns rows removed."""
    statement = build_delete_statement(case_number)
    try:
        deleted = await store.run(statement.sql, statement.params)
        if deleted == 0:
            raise IncidentNotFoundError(
                case_number, ErrorContext(operation="delete"),
            )
    except CrimeApiError as e:
        logger.error(
            f"Failed to remove incident: {e.message}",
            extra={"case_number": case_number, "error_code": e.code},
        )
        raise
    logger.info(
        "Incident removed",
        extra={"case_number": case_number, "row_count": deleted},
    )
    return deleted
