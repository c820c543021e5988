"""Core Layer — pure domain logic, no IO, no async, no DB.

Invariants:
    - No module in core/ imports from api/, infrastructure/, client/ or db/
    - All functions are pure and deterministic (current_year reads the clock, nothing else)
"""
