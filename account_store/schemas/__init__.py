"""Pydantic Schemas — request/response validation for API endpoints.

Invariants:
    - Schemas validate at system boundary (request bodies, API responses)
    - No schema carries a password hash

Design Decisions:
    - Separate from models: schemas are API contracts, models are persistence
"""
