"""
dealbook.auth.models

Auth domain models.

Responsibilities:
- Define the authenticated identity type (`Principal`) injected into endpoints.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any


@dataclass(frozen=True, slots=True)
class Principal:
    """
    Authenticated caller identity, resolved by the identity provider.
    """

    user_id: str
    email: str | None = None

    @classmethod
    def from_user_payload(cls, user: dict[str, Any]) -> Principal:
        raw_id = user.get("id")
        email = user.get("email")
        return cls(
            user_id=str(raw_id).strip() if raw_id is not None else "",
            email=str(email) if email else None,
        )


# --- Module Notes -----------------------------------------------------------
# A Principal lives for one request only and is never persisted.
