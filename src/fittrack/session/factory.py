"""
fittrack.session.factory

Composition helper for the client-side session core.

Responsibilities:
- Wire the Supabase gateway, the PostgREST profile store and local storage into a
  `SessionSynchronizer` configured from `Settings`.
"""

from __future__ import annotations

import httpx

from fittrack.clients.supabase_auth import SupabaseAuthGateway
from fittrack.clients.supabase_profiles import PostgrestProfileStore
from fittrack.session.contracts import KeyValueStorage
from fittrack.session.synchronizer import SessionSynchronizer
from fittrack.settings import Settings


def build_synchronizer(
    *,
    settings: Settings,
    http: httpx.AsyncClient,
    durable_storage: KeyValueStorage,
    session_storage: KeyValueStorage,
) -> tuple[SessionSynchronizer, SupabaseAuthGateway]:
    # The gateway is returned too: sign-up/sign-in screens call it directly.
    gateway = SupabaseAuthGateway(settings=settings, http=http, storage=durable_storage)
    profiles = PostgrestProfileStore(
        settings=settings, http=http, access_token=gateway.access_token
    )
    synchronizer = SessionSynchronizer(
        gateway=gateway,
        profiles=profiles,
        durable_storage=durable_storage,
        session_storage=session_storage,
        namespace_prefix=settings.storage_key_prefix,
        admin_plan=settings.admin_plan,
    )
    return synchronizer, gateway
