"""Services Layer — imperative shell around the pure query builders.

Invariants:
    - Services receive the store explicitly; they never look it up
    - One or zero store calls per operation
"""
