"""
fittrack.auth.models

Auth domain models.

Responsibilities:
- Define the authenticated caller (`Principal`) injected into endpoints.
"""

from __future__ import annotations

import uuid
from dataclasses import dataclass


@dataclass(frozen=True, slots=True)
class Principal:
    """
    Authenticated caller identity with the role derived from its profile row.
    """

    user_id: uuid.UUID
    email: str | None
    plan: str | None
    is_admin: bool
