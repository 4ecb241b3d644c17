"""
fittrack.auth

Server-side authentication/authorization package.

Responsibilities:
- Validate Supabase-issued access tokens (PyJWT).
- FastAPI auth dependencies (Principal + administrator gate).
"""

# Package marker.
