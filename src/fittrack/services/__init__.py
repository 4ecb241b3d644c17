"""
fittrack.services

Service-layer package.

Responsibilities:
- Pure domain calculations (calorie formulas, progress statistics).
- The AI-coach proxy that sits between the API and the language model client.
"""

# Package marker.


# --- Module Notes -----------------------------------------------------------
# Services should be pure Python and easily testable with fake clients/sessions.
