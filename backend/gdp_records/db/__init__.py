"""Database Infrastructure — SQLAlchemy declarative base.

Invariants:
    - Single async engine per process (initialized via init_db)
"""
