"""API Layer: transport-boundary glue for FastAPI hosts.

Invariants:
    - ConversionError surfaces to clients as a structured JSON envelope
    - Routes registered explicitly in main.py (no auto-discovery)
"""
