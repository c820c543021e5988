"""Infrastructure Layer — database access, record store, logging setup.

Invariants:
    - All SQLAlchemy exceptions are translated to core.errors types before leaving this layer
"""
