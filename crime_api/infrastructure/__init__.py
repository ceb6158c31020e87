"""Infrastructure Layer — store client and cross-cutting concerns.

Invariants:
    - Infrastructure never imports from services/ or api/
    - Every engine failure is mapped to StoreError (core/errors.py)
"""
