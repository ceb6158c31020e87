"""API Layer — FastAPI routes, dependencies and error handlers.

Invariants:
    - Routes registered explicitly in main.py (no auto-discovery)
    - Incident endpoints answer JSON on success for reads, plain text otherwise

Design Decisions:
    - Thin routes delegate to services (functional core, imperative shell)
"""
