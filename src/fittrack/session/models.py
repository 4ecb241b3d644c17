"""
fittrack.session.models

Session domain models.

Responsibilities:
- Define the gateway-owned types (`Identity`, `Session`) and the application-owned `Profile`.
- Define the synchronizer's composite user and the immutable state snapshot exposed to views.
- Compute the derived administrator flag as a pure function of the profile.
"""

from __future__ import annotations

import enum
from dataclasses import dataclass, field
from datetime import UTC, datetime
from typing import Any


class Plan(enum.StrEnum):
    free = "Free"
    premium = "Premium"
    administrator = "Administrator"


class SessionEvent(enum.StrEnum):
    # Event names follow the auth provider's notification vocabulary.
    initial_session = "INITIAL_SESSION"
    signed_in = "SIGNED_IN"
    signed_out = "SIGNED_OUT"
    token_refreshed = "TOKEN_REFRESHED"
    user_updated = "USER_UPDATED"


@dataclass(frozen=True, slots=True)
class Identity:
    id: str
    email: str | None = None
    metadata: dict[str, Any] = field(default_factory=dict)


@dataclass(frozen=True, slots=True)
class Session:
    """
    Credentials issued by the auth provider. Observed, never mutated.
    """

    access_token: str
    identity: Identity | None
    refresh_token: str | None = None
    expires_at: int | None = None
    token_type: str = "bearer"

    def is_expired(self, *, now: datetime | None = None, leeway_seconds: int = 0) -> bool:
        if self.expires_at is None:
            return False
        current = now or datetime.now(tz=UTC)
        return self.expires_at <= int(current.timestamp()) + leeway_seconds


@dataclass(frozen=True, slots=True)
class Profile:
    id: str
    username: str | None = None
    full_name: str | None = None
    avatar_url: str | None = None
    plan: str | None = None


@dataclass(frozen=True, slots=True)
class CompositeUser:
    identity: Identity
    profile: Profile | None

    @property
    def id(self) -> str:
        return self.identity.id

    @property
    def email(self) -> str | None:
        return self.identity.email

    @property
    def display_name(self) -> str | None:
        if self.profile is not None and self.profile.username:
            return self.profile.username
        if self.email:
            return self.email.split("@")[0]
        return None


def is_admin_profile(profile: Profile | None, *, admin_plan: str = Plan.administrator) -> bool:
    # Fail closed: no profile means no elevated role.
    return profile is not None and profile.plan == admin_plan


def assignable_plans(*, admin_plan: str = Plan.administrator) -> frozenset[str]:
    # The administrator label is deployment-specific; the member plans are fixed.
    return frozenset({Plan.free.value, Plan.premium.value, str(admin_plan)})


@dataclass(frozen=True, slots=True)
class AuthState:
    session: Session | None = None
    user: CompositeUser | None = None
    is_admin: bool = False
    loading: bool = True

    @property
    def is_authenticated(self) -> bool:
        return self.user is not None


# --- Module Notes -----------------------------------------------------------
# `is_admin_profile` is also used by the API service so both halves derive the role identically.
