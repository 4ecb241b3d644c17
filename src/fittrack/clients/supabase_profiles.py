"""
fittrack.clients.supabase_profiles

PostgREST client implementing the profile store contract.

Responsibilities:
- Point-lookup a single profile row by identity id.
- Send the caller's access token so row-level access policies apply.
- Report missing rows and failures as `ProfileLookupError`.
"""

from __future__ import annotations

from collections.abc import Awaitable, Callable
from typing import Any

import httpx

from fittrack.session.errors import ProfileLookupError
from fittrack.session.models import Profile
from fittrack.settings import Settings

AccessTokenProvider = Callable[[], Awaitable[str | None]]

# PostgREST returns a bare object (and 406 when the row count is not exactly one).
_SINGLE_OBJECT = "application/vnd.pgrst.object+json"


class PostgrestProfileStore:
    def __init__(
        self,
        *,
        settings: Settings,
        http: httpx.AsyncClient,
        access_token: AccessTokenProvider,
    ) -> None:
        self._settings = settings
        self._http = http
        self._access_token = access_token
        base = settings.supabase_url.rstrip("/")
        self._table_url = f"{base}/rest/v1/{settings.profiles_table}"

    async def get_profile(self, identity_id: str) -> Profile:
        token = await self._access_token()
        try:
            r = await self._http.get(
                self._table_url,
                params={"id": f"eq.{identity_id}", "select": "*"},
                headers={
                    "apikey": self._settings.supabase_anon_key,
                    "Authorization": f"Bearer {token or self._settings.supabase_anon_key}",
                    "Accept": _SINGLE_OBJECT,
                },
            )
        except httpx.HTTPError as e:
            raise ProfileLookupError(identity_id, "error", str(e) or type(e).__name__) from e

        if r.status_code in (404, 406):
            raise ProfileLookupError(identity_id, "not_found")
        if r.is_error:
            raise ProfileLookupError(identity_id, "error", f"HTTP {r.status_code}")

        try:
            row = r.json()
        except ValueError as e:
            raise ProfileLookupError(identity_id, "error", "malformed response") from e
        if not isinstance(row, dict) or not row.get("id"):
            raise ProfileLookupError(identity_id, "not_found")
        return profile_from_row(row)


def profile_from_row(row: dict[str, Any]) -> Profile:
    return Profile(
        id=str(row["id"]),
        username=row.get("username"),
        full_name=row.get("full_name"),
        avatar_url=row.get("avatar_url"),
        plan=row.get("plan"),
    )
