"""Client Layer — async controller that consumes the GDP records API.

Invariants:
    - Client never imports from api/, infrastructure/ or db/ (talks HTTP only)
    - Rendering happens exclusively through the GdpView protocol
"""
