"""Incident Query Construction — pure SQL builders for the Incidents table.

Invariants:
    - User-supplied values NEVER appear in SQL text; they flow through `?` placeholders
    - Every filter is an explicit (clause, params) pair folded into one statement
    - Stored date_time always uses `/` between date parts; displayed date_time always `-`
    - LIMIT is bound as a parameter; its ceiling is enforced by the query schema

Design Decisions:
    - qmark placeholders (`?`): the sqlite driver's native paramstyle, executed
      through the store's driver-level API
    - Filter values stay strings: sqlite applies column affinity on comparison
"""

from dataclasses import dataclass, field
from typing import Any, Mapping

TABLE = "Incidents"
DEFAULT_LIMIT = 1000
MAX_LIMIT = 1000

STORED_DATE_SEPARATOR = "/"
DISPLAY_DATE_SEPARATOR = "-"

# query-string key -> column
FILTER_COLUMNS: dict[str, str] = {
    "code": "code",
    "neighborhood": "neighborhood_number",
    "grid": "police_grid",
}

INCIDENT_COLUMNS = (
    "case_number",
    "date_time",
    "code",
    "incident",
    "police_grid",
    "neighborhood_number",
    "block",
)


@dataclass(frozen=True)
class FilterClause:
    """One SQL boolean fragment plus the values bound to its placeholders."""
    clause: str = ""
    params: list[str] = field(default_factory=list)

    def __bool__(self) -> bool:
        return bool(self.clause)


@dataclass(frozen=True)
class SqlStatement:
    """A complete parameterized statement ready for the store."""
    sql: str
    params: list[Any] = field(default_factory=list)


# ─── Filters ─────────────────────────────────────────────────────

def build_filter_clause(column: str, raw: str | None) -> FilterClause:
    """`column IN (?, ?, ...)` for a comma-separated value, or an empty clause.

    Splits on `,` only: no trimming, no de-duplication, no coercion.
    """
    if not raw:
        return FilterClause()
    values = raw.split(",")
    placeholders = ", ".join("?" for _ in values)
    return FilterClause(f"{column} IN ({placeholders})", values)


def build_date_clause(operator: str, date: str | None) -> FilterClause:
    """`date_time <op> ?` with the date converted to the stored separator."""
    if not date:
        return FilterClause()
    return FilterClause(f"date_time {operator} ?", [to_stored_date(date)])


def collect_filters(query: Mapping[str, Any]) -> list[FilterClause]:
    """All non-empty filter clauses for a validated listing query, in order."""
    clauses = [
        build_filter_clause(column, query.get(key))
        for key, column in FILTER_COLUMNS.items()
    ]
    clauses.append(build_date_clause(">=", query.get("start_date")))
    clauses.append(build_date_clause("<=", query.get("end_date")))
    return [c for c in clauses if c]


# ─── Statements ──────────────────────────────────────────────────

def build_list_statement(query: Mapping[str, Any]) -> SqlStatement:
    """SELECT for GET /incidents: filters, newest first, limited."""
    sql = f"SELECT * FROM {TABLE}"
    params: list[Any] = []
    filters = collect_filters(query)
    if filters:
        sql += " WHERE " + " AND ".join(f.clause for f in filters)
        for f in filters:
            params.extend(f.params)
    sql += " ORDER BY date_time DESC"
    limit = query.get("limit") or DEFAULT_LIMIT
    sql += " LIMIT ?"
    params.append(int(limit))
    return SqlStatement(sql, params)


def build_insert_statement(incident: Mapping[str, Any]) -> SqlStatement:
    """INSERT of one incident; date and time are joined into stored date_time."""
    columns = ", ".join(INCIDENT_COLUMNS)
    placeholders = ",".join("?" for _ in INCIDENT_COLUMNS)
    params = [
        incident["case_number"],
        compose_stored_date_time(incident["date"], incident["time"]),
        incident["code"],
        incident["incident"],
        incident["police_grid"],
        incident["neighborhood_number"],
        incident["block"],
    ]
    return SqlStatement(
        f"INSERT INTO {TABLE} ({columns}) VALUES ({placeholders})", params,
    )


def build_delete_statement(case_number: str) -> SqlStatement:
    """DELETE of every row with the case number; affected rows decide not-found."""
    return SqlStatement(
        f"DELETE FROM {TABLE} WHERE case_number = ?", [case_number],
    )


# ─── Timestamps ──────────────────────────────────────────────────

def to_stored_date(date: str) -> str:
    """YYYY-MM-DD -> YYYY/MM/DD."""
    return date.replace(DISPLAY_DATE_SEPARATOR, STORED_DATE_SEPARATOR)


def compose_stored_date_time(date: str, time: str) -> str:
    """Join a YYYY-MM-DD date and HH:MM:SS time into the stored form."""
    return f"{to_stored_date(date)} {time}"


def to_display_date_time(stored: str | None) -> str | None:
    """YYYY/MM/DD HH:MM:SS -> YYYY-MM-DD HH:MM:SS."""
    if stored is None:
        return None
    return stored.replace(STORED_DATE_SEPARATOR, DISPLAY_DATE_SEPARATOR)


def shape_incident_rows(rows: list[dict]) -> list[dict]:
    """Copy rows with date_time converted to its display form."""
    return [
        {**row, "date_time": to_display_date_time(row.get("date_time"))}
        for row in rows
    ]
