"""Core — domain types, error hierarchy and boundary protocols.

Invariants:
    - Nothing in core/ performs IO or imports from services/, api/ or infrastructure/
"""
