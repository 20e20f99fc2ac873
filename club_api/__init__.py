"""Club API Package — members, events and capacity-bounded event registrations.

Invariants:
    - Package root contains no executable code (import side-effects prohibited)
"""

__version__ = "1.0.0"
