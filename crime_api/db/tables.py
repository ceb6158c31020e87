"""Incidents Table — SQLAlchemy Core definition of the St. Paul crime table.

Invariants:
    - case_number is the primary key: duplicate inserts are rejected by the store
    - date_time is TEXT in YYYY/MM/DD HH:MM:SS form (lexical order == time order)

Design Decisions:
    - Core Table over ORM model: handlers run raw parameterized SQL, no identity map
    - Used for create_all in tests and on CREATE_TABLES=true; never for migrations
"""

from sqlalchemy import Column, Integer, MetaData, Table, Text

metadata = MetaData()

incidents = Table(
    "Incidents",
    metadata,
    Column("case_number", Text, primary_key=True, nullable=False),
    Column("date_time", Text),
    Column("code", Integer),
    Column("incident", Text),
    Column("police_grid", Integer),
    Column("neighborhood_number", Integer),
    Column("block", Text),
)
