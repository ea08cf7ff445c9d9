"""Services Layer: the conversion engine and its converter registry.

Invariants:
    - Stateless per call: nothing converted is retained after a call returns
    - Debug traces only; every failure is raised, never logged-and-swallowed

Design Decisions:
    - One class per direction of travel (ADR: no god objects)
"""
