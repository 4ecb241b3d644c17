"""
fittrack.clients

External service clients.

Responsibilities:
- Bind the session core's contracts to Supabase Auth and PostgREST over httpx.
- Wrap the generative-language SDK used by the AI coach.
"""

# Package marker.


# --- Module Notes -----------------------------------------------------------
# Callers depend on these boundaries (not on raw HTTP), so providers can be swapped in tests.
