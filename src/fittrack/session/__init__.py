"""
fittrack.session

Client-side session core.

Responsibilities:
- Keep the current session, composite user and derived administrator flag consistent with the
  auth provider's change notifications (`SessionSynchronizer`).
- Define the contracts the synchronizer consumes (credential gateway, profile store, storage).
"""

# Package marker; import from submodules.


# --- Module Notes -----------------------------------------------------------
# Concrete Supabase adapters live in `fittrack.clients`; this package has no HTTP dependency.
