"""Registration API Package — user registration over FastAPI and PostgreSQL.

Invariants:
    - Package root contains no executable code (import side-effects prohibited)
"""
