"""Pydantic Schemas: request/response contracts for the registry API.

Invariants:
    - Schemas validate at the system boundary (request bodies, outbound views)
    - Wire names are camelCase; Python attributes stay snake_case

Design Decisions:
    - Separate from models: schemas are API contracts, models are persistence
"""
