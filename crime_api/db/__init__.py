"""Database Metadata — SQLAlchemy Core table definitions.

Invariants:
    - metadata is the single source of truth for table shape
"""
