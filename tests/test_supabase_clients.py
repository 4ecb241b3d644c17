"""
tests.test_supabase_clients

Supabase Auth gateway and PostgREST profile store over `httpx.MockTransport`.

Responsibilities:
- Verify request shapes, session persistence/refresh and error translation.
- Exercise the factory-built synchronizer end to end against a fake Supabase project.
"""

from __future__ import annotations

import json
import time
from pathlib import Path
from typing import Any

import httpx
import pytest

from fittrack.clients.supabase_auth import SupabaseAuthGateway
from fittrack.clients.supabase_profiles import PostgrestProfileStore
from fittrack.session.errors import GatewayError, GatewayErrorKind, ProfileLookupError
from fittrack.session.factory import build_synchronizer
from fittrack.session.models import Profile, Session, SessionEvent
from fittrack.session.storage import JsonFileStorage, MemoryStorage
from fittrack.settings import Settings

SETTINGS = Settings(
    env="test",
    supabase_url="https://abcd.supabase.co",
    supabase_anon_key="anon",
)
STORAGE_KEY = "sb-abcd-auth-token"


def _session_payload(user_id: str = "u1", *, expires_in: int = 3600) -> dict[str, Any]:
    return {
        "access_token": f"access-{user_id}",
        "refresh_token": f"refresh-{user_id}",
        "token_type": "bearer",
        "expires_in": expires_in,
        "expires_at": int(time.time()) + expires_in,
        "user": {"id": user_id, "email": f"{user_id}@example.com", "user_metadata": {}},
    }


class FakeSupabase:
    """
    Minimal Supabase project: password/refresh grants, logout, and a profiles table.
    """

    def __init__(self) -> None:
        self.profiles: dict[str, dict[str, Any]] = {}
        self.requests: list[httpx.Request] = []
        self.logout_status = 204
        self.refresh_status = 200

    def __call__(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        path = request.url.path
        if path == "/auth/v1/token":
            grant = request.url.params.get("grant_type")
            body = json.loads(request.content)
            if grant == "password":
                if body["password"] != "secret":
                    return httpx.Response(
                        400,
                        json={
                            "error": "invalid_grant",
                            "error_description": "Invalid login credentials",
                        },
                    )
                return httpx.Response(200, json=_session_payload(body["email"].split("@")[0]))
            if grant == "refresh_token":
                if self.refresh_status != 200:
                    return httpx.Response(
                        self.refresh_status, json={"msg": "Invalid Refresh Token: Not Found"}
                    )
                return httpx.Response(200, json=_session_payload("u1"))
        if path == "/auth/v1/signup":
            return httpx.Response(200, json={"id": "new-user", "email": "new@example.com"})
        if path == "/auth/v1/logout":
            return httpx.Response(self.logout_status)
        if path == "/rest/v1/profiles":
            user_id = request.url.params["id"].removeprefix("eq.")
            row = self.profiles.get(user_id)
            if row is None:
                return httpx.Response(406, json={"code": "PGRST116"})
            return httpx.Response(200, json=row)
        return httpx.Response(404, json={"message": "no route"})


@pytest.fixture
def supabase() -> FakeSupabase:
    return FakeSupabase()


@pytest.fixture
def http(supabase: FakeSupabase) -> httpx.AsyncClient:
    return httpx.AsyncClient(transport=httpx.MockTransport(supabase))


@pytest.mark.asyncio
async def test_sign_in_persists_session_and_notifies(http: httpx.AsyncClient) -> None:
    storage = MemoryStorage()
    gateway = SupabaseAuthGateway(settings=SETTINGS, http=http, storage=storage)
    events: list[tuple[SessionEvent, Session | None]] = []

    async def record(event: SessionEvent, session: Session | None) -> None:
        events.append((event, session))

    gateway.on_session_change(record)
    session = await gateway.sign_in("u1@example.com", "secret")

    assert session.identity is not None and session.identity.id == "u1"
    assert json.loads(storage.get_item(STORAGE_KEY) or "{}")["access_token"] == "access-u1"
    assert events == [(SessionEvent.signed_in, session)]
    assert await gateway.get_current_session() == session


@pytest.mark.asyncio
async def test_sign_in_with_bad_password_is_invalid_credentials(http: httpx.AsyncClient) -> None:
    gateway = SupabaseAuthGateway(settings=SETTINGS, http=http, storage=MemoryStorage())

    with pytest.raises(GatewayError) as exc:
        await gateway.sign_in("u1@example.com", "wrong")

    assert exc.value.kind is GatewayErrorKind.invalid_credentials
    assert exc.value.status_code == 400


@pytest.mark.asyncio
async def test_sign_up_pending_confirmation_returns_none(
    http: httpx.AsyncClient, supabase: FakeSupabase
) -> None:
    storage = MemoryStorage()
    gateway = SupabaseAuthGateway(settings=SETTINGS, http=http, storage=storage)

    assert await gateway.sign_up("new@example.com", "secret") is None
    assert storage.keys() == []
    assert supabase.requests[0].headers["apikey"] == "anon"


@pytest.mark.asyncio
async def test_sign_out_without_session_is_no_session(http: httpx.AsyncClient) -> None:
    gateway = SupabaseAuthGateway(settings=SETTINGS, http=http, storage=MemoryStorage())

    with pytest.raises(GatewayError) as exc:
        await gateway.sign_out()

    assert exc.value.kind is GatewayErrorKind.no_session
    assert exc.value.message == "Auth session missing!"


@pytest.mark.asyncio
async def test_sign_out_treats_remote_401_as_signed_out(
    http: httpx.AsyncClient, supabase: FakeSupabase
) -> None:
    storage = MemoryStorage()
    gateway = SupabaseAuthGateway(settings=SETTINGS, http=http, storage=storage)
    await gateway.sign_in("u1@example.com", "secret")
    supabase.logout_status = 401

    await gateway.sign_out()

    assert storage.get_item(STORAGE_KEY) is None
    logout = supabase.requests[-1]
    assert logout.headers["authorization"] == "Bearer access-u1"


@pytest.mark.asyncio
async def test_sign_out_server_error_keeps_session(
    http: httpx.AsyncClient, supabase: FakeSupabase
) -> None:
    storage = MemoryStorage()
    gateway = SupabaseAuthGateway(settings=SETTINGS, http=http, storage=storage)
    await gateway.sign_in("u1@example.com", "secret")
    supabase.logout_status = 500

    with pytest.raises(GatewayError) as exc:
        await gateway.sign_out()

    assert exc.value.kind is GatewayErrorKind.unavailable
    assert storage.get_item(STORAGE_KEY) is not None


@pytest.mark.asyncio
async def test_expired_session_is_refreshed(http: httpx.AsyncClient) -> None:
    storage = MemoryStorage({STORAGE_KEY: json.dumps(_session_payload("u1", expires_in=-60))})
    gateway = SupabaseAuthGateway(settings=SETTINGS, http=http, storage=storage)
    events: list[SessionEvent] = []

    async def record(event: SessionEvent, _: Session | None) -> None:
        events.append(event)

    gateway.on_session_change(record)
    session = await gateway.get_current_session()

    assert session is not None
    assert not session.is_expired()
    assert events == [SessionEvent.token_refreshed]


@pytest.mark.asyncio
async def test_failed_refresh_signs_out_locally(
    http: httpx.AsyncClient, supabase: FakeSupabase
) -> None:
    storage = MemoryStorage({STORAGE_KEY: json.dumps(_session_payload("u1", expires_in=-60))})
    supabase.refresh_status = 400
    gateway = SupabaseAuthGateway(settings=SETTINGS, http=http, storage=storage)
    events: list[SessionEvent] = []

    async def record(event: SessionEvent, _: Session | None) -> None:
        events.append(event)

    gateway.on_session_change(record)

    assert await gateway.get_current_session() is None
    assert storage.keys() == []
    assert events == [SessionEvent.signed_out]


@pytest.mark.asyncio
async def test_corrupted_stored_session_is_dropped(http: httpx.AsyncClient) -> None:
    storage = MemoryStorage({STORAGE_KEY: "{not json"})
    gateway = SupabaseAuthGateway(settings=SETTINGS, http=http, storage=storage)

    assert await gateway.get_current_session() is None
    assert storage.keys() == []


@pytest.mark.asyncio
async def test_transport_failure_is_network_error() -> None:
    def boom(request: httpx.Request) -> httpx.Response:
        raise httpx.ConnectError("connection refused", request=request)

    async with httpx.AsyncClient(transport=httpx.MockTransport(boom)) as http:
        gateway = SupabaseAuthGateway(settings=SETTINGS, http=http, storage=MemoryStorage())
        with pytest.raises(GatewayError) as exc:
            await gateway.sign_in("u1@example.com", "secret")

    assert exc.value.kind is GatewayErrorKind.network


@pytest.mark.asyncio
async def test_unsubscribed_callback_is_not_called(http: httpx.AsyncClient) -> None:
    gateway = SupabaseAuthGateway(settings=SETTINGS, http=http, storage=MemoryStorage())
    calls: list[SessionEvent] = []

    async def record(event: SessionEvent, _: Session | None) -> None:
        calls.append(event)

    gateway.on_session_change(record).unsubscribe()
    await gateway.sign_in("u1@example.com", "secret")

    assert calls == []


# --- profile store ----------------------------------------------------------------


async def _token() -> str | None:
    return "user-token"


@pytest.mark.asyncio
async def test_profile_lookup_returns_profile(
    http: httpx.AsyncClient, supabase: FakeSupabase
) -> None:
    supabase.profiles["u1"] = {"id": "u1", "username": "lifter", "plan": "Premium"}
    store = PostgrestProfileStore(settings=SETTINGS, http=http, access_token=_token)

    profile = await store.get_profile("u1")

    assert profile == Profile(id="u1", username="lifter", plan="Premium")
    request = supabase.requests[-1]
    assert request.url.params["id"] == "eq.u1"
    assert request.headers["accept"] == "application/vnd.pgrst.object+json"
    assert request.headers["authorization"] == "Bearer user-token"


@pytest.mark.asyncio
async def test_profile_lookup_missing_row_is_not_found(http: httpx.AsyncClient) -> None:
    store = PostgrestProfileStore(settings=SETTINGS, http=http, access_token=_token)

    with pytest.raises(ProfileLookupError) as exc:
        await store.get_profile("ghost")

    assert exc.value.reason == "not_found"


@pytest.mark.asyncio
async def test_profile_lookup_server_error_is_error() -> None:
    def fail(request: httpx.Request) -> httpx.Response:
        return httpx.Response(500, json={"message": "db down"})

    async with httpx.AsyncClient(transport=httpx.MockTransport(fail)) as http:
        store = PostgrestProfileStore(settings=SETTINGS, http=http, access_token=_token)
        with pytest.raises(ProfileLookupError) as exc:
            await store.get_profile("u1")

    assert exc.value.reason == "error"


# --- wired synchronizer -------------------------------------------------------------


@pytest.mark.asyncio
async def test_synchronizer_tracks_supabase_sign_in_and_logout(
    http: httpx.AsyncClient, supabase: FakeSupabase
) -> None:
    supabase.profiles["u2"] = {"id": "u2", "username": "boss", "plan": "Administrator"}
    durable, ephemeral = MemoryStorage({"theme": "dark"}), MemoryStorage()
    sync, gateway = build_synchronizer(
        settings=SETTINGS, http=http, durable_storage=durable, session_storage=ephemeral
    )

    async with sync:
        assert sync.loading is False
        assert sync.user is None

        await gateway.sign_in("u2@example.com", "secret")
        assert sync.user is not None and sync.user.display_name == "boss"
        assert sync.is_admin is True

        await sync.logout()
        assert sync.user is None
        assert sync.is_admin is False
        assert durable.keys() == ["theme"]
        assert supabase.requests[-1].url.path == "/auth/v1/logout"


@pytest.mark.asyncio
async def test_synchronizer_clear_all_sessions_after_remote_logout(
    http: httpx.AsyncClient, supabase: FakeSupabase
) -> None:
    durable = MemoryStorage({STORAGE_KEY: json.dumps(_session_payload("u1")), "theme": "dark"})
    ephemeral = MemoryStorage({"sb-abcd-code-verifier": "v"})
    supabase.logout_status = 404
    sync, _ = build_synchronizer(
        settings=SETTINGS, http=http, durable_storage=durable, session_storage=ephemeral
    )

    async with sync:
        assert sync.user is not None and sync.user.profile is None
        await sync.clear_all_sessions()

        assert sync.session is None
        assert durable.keys() == ["theme"]
        assert ephemeral.keys() == []


def _unavailable(request: httpx.Request) -> httpx.Response:
    return httpx.Response(500, json={"message": "upstream down"})


@pytest.mark.asyncio
async def test_synchronizer_recovers_from_corrupted_credential_file(tmp_path: Path) -> None:
    path = tmp_path / "storage.json"
    path.write_text("{not json", encoding="utf-8")
    durable, ephemeral = JsonFileStorage(path), MemoryStorage({"sb-x": "1", "app": "2"})

    async with httpx.AsyncClient(transport=httpx.MockTransport(_unavailable)) as http:
        sync, _ = build_synchronizer(
            settings=SETTINGS, http=http, durable_storage=durable, session_storage=ephemeral
        )
        state = await sync.start()
        assert state.loading is False
        assert state.user is None

        await sync.logout()
        assert sync.session is None

        await sync.clear_all_sessions()

    assert sync.state.loading is False
    assert sync.user is None
    assert ephemeral.keys() == ["app"]
    assert durable.keys() == []
    assert path.with_suffix(".json.corrupt").read_text(encoding="utf-8") == "{not json"


@pytest.mark.asyncio
async def test_clear_all_sessions_repairs_corrupted_file_before_start(tmp_path: Path) -> None:
    path = tmp_path / "storage.json"
    path.write_text("{not json", encoding="utf-8")
    ephemeral = MemoryStorage({"sb-x": "1", "app": "2"})

    async with httpx.AsyncClient(transport=httpx.MockTransport(_unavailable)) as http:
        sync, gateway = build_synchronizer(
            settings=SETTINGS,
            http=http,
            durable_storage=JsonFileStorage(path),
            session_storage=ephemeral,
        )
        await sync.clear_all_sessions()

        assert ephemeral.keys() == ["app"]
        assert sync.initial_resolution_done is False
        assert await gateway.get_current_session() is None
