"""
fittrack.clients.supabase_auth

Supabase Auth (GoTrue) client implementing the credential gateway contract.

Responsibilities:
- Sign up, sign in and sign out against `/auth/v1/*`.
- Persist the current session in durable storage under the provider namespace.
- Refresh expired sessions and emit change notifications to subscribers, in order.
- Translate HTTP/transport failures into typed `GatewayError`s.
"""

from __future__ import annotations

import json
from dataclasses import dataclass, field
from typing import Any

import httpx

from fittrack.observability.logging import get_logger
from fittrack.session.contracts import KeyValueStorage, SessionChangeCallback
from fittrack.session.errors import (
    AUTH_SESSION_MISSING_MESSAGE,
    GatewayError,
    GatewayErrorKind,
)
from fittrack.session.models import Identity, Session, SessionEvent
from fittrack.settings import Settings

log = get_logger(__name__)

# Refresh slightly before expiry so a token never expires mid-request.
EXPIRY_LEEWAY_SECONDS = 30

# Sign-out responses that still mean "the server no longer knows this session".
_SIGNED_OUT_STATUSES = frozenset({401, 403, 404})


@dataclass(eq=False, slots=True)
class _Subscription:
    callback: SessionChangeCallback
    registry: list[_Subscription] = field(repr=False)

    def unsubscribe(self) -> None:
        if self in self.registry:
            self.registry.remove(self)


class SupabaseAuthGateway:
    def __init__(
        self,
        *,
        settings: Settings,
        http: httpx.AsyncClient,
        storage: KeyValueStorage,
    ) -> None:
        self._settings = settings
        self._http = http
        self._storage = storage
        self._storage_key = settings.auth_storage_key
        self._subscribers: list[_Subscription] = []

    # -- contract ----------------------------------------------------------------

    def on_session_change(self, callback: SessionChangeCallback) -> _Subscription:
        sub = _Subscription(callback=callback, registry=self._subscribers)
        self._subscribers.append(sub)
        return sub

    async def get_current_session(self) -> Session | None:
        stored = self._load_session()
        if stored is None:
            return None
        if not stored.is_expired(leeway_seconds=EXPIRY_LEEWAY_SECONDS):
            return stored

        if stored.refresh_token:
            try:
                return await self._refresh(stored.refresh_token)
            except GatewayError as e:
                log.warning("session_refresh_failed", kind=str(e.kind), error=e.message)

        self._storage.remove_item(self._storage_key)
        await self._notify(SessionEvent.signed_out, None)
        return None

    async def sign_up(self, email: str, password: str) -> Session | None:
        payload = await self._post("/auth/v1/signup", body={"email": email, "password": password})
        if "access_token" not in payload:
            # Email confirmation pending: the account exists but no session is issued yet.
            log.info("sign_up_confirmation_pending", email=email)
            return None
        session = _session_from_payload(payload)
        await self._store_and_notify(SessionEvent.signed_in, session)
        return session

    async def sign_in(self, email: str, password: str) -> Session:
        payload = await self._post(
            "/auth/v1/token",
            params={"grant_type": "password"},
            body={"email": email, "password": password},
        )
        session = _session_from_payload(payload)
        await self._store_and_notify(SessionEvent.signed_in, session)
        return session

    async def sign_out(self) -> None:
        stored = self._load_session()
        if stored is None:
            raise GatewayError(GatewayErrorKind.no_session, AUTH_SESSION_MISSING_MESSAGE)

        try:
            await self._post("/auth/v1/logout", token=stored.access_token)
        except GatewayError as e:
            if e.status_code not in _SIGNED_OUT_STATUSES:
                raise
            log.info("sign_out_remote_session_gone", status_code=e.status_code)

        self._storage.remove_item(self._storage_key)
        await self._notify(SessionEvent.signed_out, None)

    # -- helpers -------------------------------------------------------------------

    async def access_token(self) -> str | None:
        session = await self.get_current_session()
        return session.access_token if session is not None else None

    async def _refresh(self, refresh_token: str) -> Session:
        payload = await self._post(
            "/auth/v1/token",
            params={"grant_type": "refresh_token"},
            body={"refresh_token": refresh_token},
        )
        session = _session_from_payload(payload)
        await self._store_and_notify(SessionEvent.token_refreshed, session)
        return session

    async def _store_and_notify(self, event: SessionEvent, session: Session) -> None:
        self._storage.set_item(self._storage_key, json.dumps(_session_to_payload(session)))
        await self._notify(event, session)

    async def _notify(self, event: SessionEvent, session: Session | None) -> None:
        log.info("auth_state_changed", auth_event=str(event), has_session=session is not None)
        for sub in list(self._subscribers):
            await sub.callback(event, session)

    def _load_session(self) -> Session | None:
        raw = self._storage.get_item(self._storage_key)
        if raw is None:
            return None
        try:
            return _session_from_payload(json.loads(raw))
        except (ValueError, KeyError, TypeError) as e:
            # Corrupted cache entry: treat as signed out rather than failing every call.
            log.warning("stored_session_unreadable", error=str(e))
            self._storage.remove_item(self._storage_key)
            return None

    def _headers(self, token: str | None) -> dict[str, str]:
        return {
            "apikey": self._settings.supabase_anon_key,
            "Authorization": f"Bearer {token or self._settings.supabase_anon_key}",
        }

    async def _post(
        self,
        path: str,
        *,
        body: dict[str, Any] | None = None,
        params: dict[str, str] | None = None,
        token: str | None = None,
    ) -> dict[str, Any]:
        try:
            r = await self._http.post(
                f"{self._settings.supabase_url.rstrip('/')}{path}",
                params=params,
                json=body,
                headers=self._headers(token),
            )
        except httpx.HTTPError as e:
            raise GatewayError(GatewayErrorKind.network, str(e) or type(e).__name__) from e

        if r.is_error:
            raise GatewayError.from_response(_error_message(r), r.status_code)
        if not r.content:
            return {}
        data = r.json()
        return data if isinstance(data, dict) else {}


def _error_message(r: httpx.Response) -> str:
    try:
        body = r.json()
    except ValueError:
        return r.text or r.reason_phrase
    if isinstance(body, dict):
        for key in ("msg", "error_description", "message", "error"):
            value = body.get(key)
            if isinstance(value, str) and value:
                return value
    return r.reason_phrase


def _session_from_payload(payload: dict[str, Any]) -> Session:
    user = payload.get("user")
    identity = None
    if isinstance(user, dict) and user.get("id"):
        identity = Identity(
            id=str(user["id"]),
            email=user.get("email"),
            metadata=dict(user.get("user_metadata") or {}),
        )
    expires_at = payload.get("expires_at")
    return Session(
        access_token=str(payload["access_token"]),
        identity=identity,
        refresh_token=payload.get("refresh_token"),
        expires_at=int(expires_at) if expires_at is not None else None,
        token_type=str(payload.get("token_type", "bearer")),
    )


def _session_to_payload(session: Session) -> dict[str, Any]:
    user = None
    if session.identity is not None:
        user = {
            "id": session.identity.id,
            "email": session.identity.email,
            "user_metadata": session.identity.metadata,
        }
    return {
        "access_token": session.access_token,
        "refresh_token": session.refresh_token,
        "expires_at": session.expires_at,
        "token_type": session.token_type,
        "user": user,
    }


# --- Module Notes -----------------------------------------------------------
# Only this module and `session.errors` know Supabase's error wording; the synchronizer
# reasons purely in `GatewayErrorKind`.
