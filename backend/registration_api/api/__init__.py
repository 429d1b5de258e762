"""API Layer — FastAPI routes, dependency wiring, and error handlers.

Invariants:
    - Routes registered explicitly in main.py (no auto-discovery)
    - All endpoints return the {success, message, data} envelope
"""
