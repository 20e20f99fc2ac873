"""Pydantic Schemas — request/response validation for API endpoints.

Invariants:
    - Schemas validate at the system boundary (request bodies, query values, responses)
    - Domain enums from core/ are used for status fields

Design Decisions:
    - Separate from models: schemas are API contracts, models are persistence
"""
