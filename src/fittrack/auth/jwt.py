"""
fittrack.auth.jwt

Access-token helpers.

Responsibilities:
- Decode and validate access tokens issued by Supabase Auth (HS256 with the project JWT secret,
  audience "authenticated").
- Issue tokens of the same shape for local development and tests.
"""

from __future__ import annotations

from dataclasses import dataclass
from datetime import UTC, datetime, timedelta
from typing import Any

import jwt
from jwt import InvalidTokenError

from fittrack.settings import Settings


@dataclass(frozen=True, slots=True)
class JwtConfig:
    alg: str
    audience: str
    secret: str

    @classmethod
    def from_settings(cls, settings: Settings) -> JwtConfig:
        return cls(alg=settings.jwt_alg, audience=settings.jwt_audience, secret=settings.jwt_secret)


class JwtValidationError(Exception):
    pass


def issue_token(
    *,
    cfg: JwtConfig,
    subject: str,
    email: str | None = None,
    ttl: timedelta = timedelta(hours=1),
) -> str:
    now = datetime.now(tz=UTC)
    payload: dict[str, Any] = {
        "aud": cfg.audience,
        "sub": subject,
        "role": "authenticated",
        "iat": int(now.timestamp()),
        "exp": int((now + ttl).timestamp()),
    }
    if email is not None:
        payload["email"] = email
    return jwt.encode(payload, cfg.secret, algorithm=cfg.alg)


def decode_and_validate(*, cfg: JwtConfig, token: str) -> dict[str, Any]:
    try:
        return jwt.decode(
            token,
            cfg.secret,
            algorithms=[cfg.alg],
            audience=cfg.audience,
            options={"require": ["exp", "sub", "aud"]},
        )
    except InvalidTokenError as e:
        raise JwtValidationError(str(e)) from e


# --- Module Notes -----------------------------------------------------------
# The plan is not read from the token: it lives on the profile row and is
# looked up per request, so plan changes take effect without re-issuing tokens.
