"""API Layer — FastAPI routes and error handlers.

Invariants:
    - Routes registered explicitly in main.py (no auto-discovery)
    - Success bodies carry success/message/data; error bodies carry error

Design Decisions:
    - Thin routes delegate to services
"""
