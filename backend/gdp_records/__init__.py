"""GDP Records — country/year GDP observations behind a REST API.

Invariants:
    - Package root contains no executable code (import side-effects prohibited)
"""
