"""St. Paul Crime API Package — filtered listing, insertion and removal of incidents.

Invariants:
    - Package root contains no executable code (import side-effects prohibited)

Design Decisions:
    - Empty __init__.py: explicit imports only, no star exports
"""
