"""Pydantic Schemas — request/response validation for API endpoints.

Invariants:
    - Schemas validate at system boundary (user input, API responses)
    - Question bodies stay plain dicts: type-specific fields are checked in core

Design Decisions:
    - Response models keep the camelCase keys stored in the documents
"""
