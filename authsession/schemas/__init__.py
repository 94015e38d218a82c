"""Pydantic Schemas — request/response validation for the identity backend.

Invariants:
    - Schemas validate at the system boundary (backend responses)
    - Domain types from core/ stay free of pydantic
"""
