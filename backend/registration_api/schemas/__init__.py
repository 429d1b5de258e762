"""Pydantic Schemas — request/response validation for API endpoints.

Invariants:
    - Schemas validate at the system boundary (request bodies, response envelopes)
    - Separate from core/domain_types: schemas are API contracts, User is the store record
"""
