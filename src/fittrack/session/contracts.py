"""
fittrack.session.contracts

Contracts consumed by the session synchronizer.

Responsibilities:
- Describe the credential gateway (sign-up/in/out, current session, change notifications).
- Describe the profile store (point lookup by identity id).
- Describe Web-Storage-like key/value persistence shared with the gateway.
"""

from __future__ import annotations

from collections.abc import Awaitable, Callable, Iterable
from typing import Protocol

from fittrack.session.models import Profile, Session, SessionEvent

SessionChangeCallback = Callable[[SessionEvent, Session | None], Awaitable[None]]


class Subscription(Protocol):
    def unsubscribe(self) -> None: ...


class CredentialGateway(Protocol):
    async def get_current_session(self) -> Session | None: ...

    def on_session_change(self, callback: SessionChangeCallback) -> Subscription: ...

    async def sign_out(self) -> None:
        """Raises `GatewayError`; kind `no_session` means there was nothing to sign out."""
        ...

    async def sign_up(self, email: str, password: str) -> Session | None: ...

    async def sign_in(self, email: str, password: str) -> Session: ...


class ProfileStore(Protocol):
    async def get_profile(self, identity_id: str) -> Profile:
        """Raises `ProfileLookupError` when the record is missing or the lookup fails."""
        ...


class KeyValueStorage(Protocol):
    def keys(self) -> Iterable[str]: ...

    def get_item(self, key: str) -> str | None: ...

    def set_item(self, key: str, value: str) -> None: ...

    def remove_item(self, key: str) -> None: ...
