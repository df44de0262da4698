"""Pydantic Schemas — request/response validation for API endpoints.

Invariants:
    - Schemas validate at system boundary (request bodies, API responses)
    - JSON keys are camelCase on the wire, snake_case in Python
    - Domain enums from core/ used for constrained fields

Design Decisions:
    - Separate from models: schemas are API contracts, models are persistence
"""
