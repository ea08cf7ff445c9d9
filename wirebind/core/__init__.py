"""Core Layer: pure conversion primitives, no IO, no logging.

Invariants:
    - No module in core/ imports from services/, api/ or infrastructure/
    - Failures are raised as WirebindError subclasses, never logged here

Design Decisions:
    - Functional core separated from the engine shell (ADR: impureim sandwich)
"""
