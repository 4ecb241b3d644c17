"""
fittrack.db

Persistence package (SQLAlchemy async).

Responsibilities:
- Provide ORM models for the Postgres-backed tables, engine/session setup, and repositories.
"""

# Package marker.
