"""
fittrack.session.errors

Typed errors for the session core.

Responsibilities:
- Classify credential-gateway failures into a closed set of kinds.
- Keep the provider's free-text error matching in exactly one function.
- Represent profile lookup failures (not found vs error).
"""

from __future__ import annotations

import enum
from typing import Literal

# Text the Supabase auth client uses when there is no session to act on.
AUTH_SESSION_MISSING_MESSAGE = "Auth session missing!"

_INVALID_CREDENTIALS_MARKERS = (
    "invalid login credentials",
    "invalid_grant",
    "invalid refresh token",
)


class GatewayErrorKind(enum.StrEnum):
    no_session = "NO_SESSION"
    invalid_credentials = "INVALID_CREDENTIALS"
    rejected = "REJECTED"
    unavailable = "UNAVAILABLE"
    network = "NETWORK"


class GatewayError(Exception):
    def __init__(
        self,
        kind: GatewayErrorKind,
        message: str,
        *,
        status_code: int | None = None,
    ) -> None:
        super().__init__(message)
        self.kind = kind
        self.message = message
        self.status_code = status_code

    @property
    def is_benign_sign_out(self) -> bool:
        return self.kind is GatewayErrorKind.no_session

    @classmethod
    def from_response(cls, message: str, status_code: int | None) -> GatewayError:
        return cls(classify_gateway_error(message, status_code), message, status_code=status_code)


def classify_gateway_error(message: str, status_code: int | None = None) -> GatewayErrorKind:
    """
    Map provider error text/status to a `GatewayErrorKind`.

    The exact-text match on the missing-session message depends on the provider's wording and
    may break across provider versions; it must not be duplicated elsewhere.
    """

    if message.strip() == AUTH_SESSION_MISSING_MESSAGE:
        return GatewayErrorKind.no_session
    lowered = message.lower()
    if any(marker in lowered for marker in _INVALID_CREDENTIALS_MARKERS):
        return GatewayErrorKind.invalid_credentials
    if status_code is None:
        return GatewayErrorKind.network
    if status_code >= 500:
        return GatewayErrorKind.unavailable
    return GatewayErrorKind.rejected


class ProfileLookupError(Exception):
    def __init__(
        self, user_id: str, reason: Literal["not_found", "error"], detail: str = ""
    ) -> None:
        super().__init__(f"profile lookup failed for {user_id}: {reason} {detail}".strip())
        self.user_id = user_id
        self.reason = reason
        self.detail = detail
