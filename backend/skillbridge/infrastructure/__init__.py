"""Infrastructure Layer — external service clients and cross-cutting concerns.

Invariants:
    - Infrastructure never imports domain logic beyond core/errors and core value types
    - All external calls wrapped with retry/timeout/fallback and error mapping

Design Decisions:
    - Resilient wrappers over raw clients: routes never see a transport exception
"""
