"""Core Layer — pure domain logic, no IO, no async, no DB.

Invariants:
    - No module in core/ imports from services/, api/, infrastructure/, or db/
    - All functions are pure and deterministic (identity_proof stamps verifiedAt only)

Design Decisions:
    - Functional core separated from imperative shell: routes and services do the IO
"""
