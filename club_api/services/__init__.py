"""Services Layer — one class per bounded concern, each bound to a request session.

Invariants:
    - Services own their transaction boundaries (commit on success, rollback on failure)
    - Services raise ClubError subclasses; they never build HTTP responses

Design Decisions:
    - The Registration Facade sees the other services only through core Protocols
"""
