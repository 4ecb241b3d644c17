"""
fittrack.settings

Central configuration model (Pydantic Settings).

Responsibilities:
- Provide strongly-typed, env-driven settings for the API service and the client session core.
- Hide secrets from repr/logging (JWT secret, Supabase anon key, Gemini API key).
- Offer a cached settings instance for dependency injection.
"""

from __future__ import annotations

from functools import lru_cache
from typing import Literal
from urllib.parse import urlparse

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """
    Single settings object shared by:
    - the FastAPI service (auth, persistence, coach proxy)
    - the client-side session synchronizer (Supabase endpoints, storage namespace, admin plan)
    """

    model_config = SettingsConfigDict(env_prefix="FITTRACK_", case_sensitive=False)

    env: Literal["dev", "test", "prod"] = "dev"
    service_name: str = "fittrack"
    log_level: str = "INFO"

    api_host: str = "0.0.0.0"
    api_port: int = 8080

    # Supabase project (auth + PostgREST)
    supabase_url: str = "http://localhost:54321"
    supabase_anon_key: str = Field(default="dev-anon-key", repr=False)
    # Web-storage namespace the auth client persists under; purged by clear_all_sessions.
    storage_key_prefix: str = "sb-"
    profiles_table: str = "profiles"
    request_timeout_seconds: float = 10.0

    # Access tokens are minted by Supabase Auth and verified here with the project JWT secret.
    jwt_alg: str = "HS256"
    jwt_audience: str = "authenticated"
    jwt_secret: str = Field(default="dev-secret-change-me-at-least-32-bytes", repr=False)

    # Profile plan label that grants the administrator role.
    admin_plan: str = "Administrator"

    # Persistence
    database_url: str = "sqlite+aiosqlite:///./fittrack.db"

    # AI coach
    gemini_api_key: str | None = Field(default=None, repr=False)
    gemini_model: str = "gemini-1.5-flash"

    @property
    def supabase_project_ref(self) -> str:
        # https://<ref>.supabase.co -> <ref>; local stacks fall back to the host name.
        host = urlparse(self.supabase_url).hostname or "localhost"
        return host.split(".")[0]

    @property
    def auth_storage_key(self) -> str:
        return f"{self.storage_key_prefix}{self.supabase_project_ref}-auth-token"


@lru_cache(maxsize=1)
def get_settings() -> Settings:
    # Cache avoids re-parsing env vars for each request dependency.
    return Settings()


# --- Module Notes -----------------------------------------------------------
# The client-side session core and the API service read the same settings model so the
# administrator plan label and storage namespace cannot drift between the two halves.
