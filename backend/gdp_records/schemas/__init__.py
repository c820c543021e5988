"""Pydantic Schemas — request/response validation for GDP records.

Invariants:
    - Schemas validate at the system boundary (API payloads, API responses)
    - Domain enums from core/ used for constrained fields
"""
