"""Services Layer — request handlers over an AsyncSession, plus read fallbacks.

Invariants:
    - Handlers receive the session; they never open their own (except fallback reads,
      which take the manager so an outage can be caught and masked)
    - Write handlers never fall back to mock data

Design Decisions:
    - One handler class per resource for locality (funding, onboarding, marketplace,
      connections)
"""
