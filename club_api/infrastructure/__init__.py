"""Infrastructure — database session management, logging setup and metrics.

Invariants:
    - Only infrastructure/ talks to the engine or the Prometheus registry directly
"""
