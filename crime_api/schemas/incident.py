"""Incident Schemas — declarative validation for the three incident endpoints.

Invariants:
    - Unknown keys are rejected on every schema (extra="forbid")
    - Comma lists are ASCII digits only, no whitespace: ^[0-9]+(,[0-9]+)*$
    - Dates are YYYY-MM-DD, times HH:MM:SS (shape only, not calendar-checked)
    - IncidentQuery.limit is 1..MAX_LIMIT; absence means DEFAULT_LIMIT downstream
    - NewIncident has no optional fields: partial incidents never reach the store

Design Decisions:
    - Constraints declared as Field(pattern/gt/le/min_length) data; the only validator code refuses booleans
    - [0-9] over \\d: pydantic's regex engine treats \\d as any Unicode digit
    - Numeric fields stay lax: JSON "12" is coerced to 12, but booleans are refused
    - Integers capped at MAX_SAFE_INTEGER: larger values overflow the sqlite driver
"""

from pydantic import BaseModel, ConfigDict, Field, field_validator

from crime_api.core.incident_query import MAX_LIMIT

COMMA_INTEGERS = r"^[0-9]+(,[0-9]+)*$"
DATE_PATTERN = r"^[0-9]{4}-[0-9]{2}-[0-9]{2}$"
TIME_PATTERN = r"^[0-9]{2}:[0-9]{2}:[0-9]{2}$"

# Largest integer a JSON number represents exactly; also fits sqlite INTEGER
MAX_SAFE_INTEGER = 2**53 - 1


class IncidentQuery(BaseModel):
    """GET /incidents query string."""
    model_config = ConfigDict(extra="forbid")

    code: str | None = Field(None, pattern=COMMA_INTEGERS)
    neighborhood: str | None = Field(None, pattern=COMMA_INTEGERS)
    grid: str | None = Field(None, pattern=COMMA_INTEGERS)
    limit: int | None = Field(None, gt=0, le=MAX_LIMIT)
    start_date: str | None = Field(None, pattern=DATE_PATTERN)
    end_date: str | None = Field(None, pattern=DATE_PATTERN)


class NewIncident(BaseModel):
    """POST /new-incident body."""
    model_config = ConfigDict(extra="forbid")

    case_number: str = Field(min_length=1)
    date: str = Field(pattern=DATE_PATTERN)
    time: str = Field(pattern=TIME_PATTERN)
    code: int = Field(gt=0, le=MAX_SAFE_INTEGER)
    incident: str = Field(min_length=1)
    police_grid: int = Field(gt=0, le=MAX_SAFE_INTEGER)
    neighborhood_number: int = Field(gt=0, le=MAX_SAFE_INTEGER)
    block: str = Field(min_length=1)

    @field_validator("code", "police_grid", "neighborhood_number", mode="before")
    @classmethod
    def reject_booleans(cls, v):
        """JSON true/false are not numbers; lax int would store them as 1/0."""
        if isinstance(v, bool):
            raise ValueError("must be a number, not a boolean")
        return v


class RemoveIncident(BaseModel):
    """DELETE /remove-incident body."""
    model_config = ConfigDict(extra="forbid")

    case_number: str = Field(min_length=1)
