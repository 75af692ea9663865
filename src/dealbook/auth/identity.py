"""
dealbook.auth.identity

HTTP client boundary for the identity provider (Supabase Auth).

Responsibilities:
- Resolve a bearer token into the provider's user payload.
- Translate provider responses into "user", "no user" or `IdentityProviderError`.
"""

from __future__ import annotations

from typing import Any, Protocol

import httpx
from starlette.status import (
    HTTP_200_OK,
    HTTP_401_UNAUTHORIZED,
    HTTP_403_FORBIDDEN,
    HTTP_404_NOT_FOUND,
)

from dealbook.settings import Settings

# Statuses the provider uses for "token does not map to a user".
_NO_USER_STATUSES = frozenset({HTTP_401_UNAUTHORIZED, HTTP_403_FORBIDDEN, HTTP_404_NOT_FOUND})


class IdentityProviderError(Exception):
    pass


class IdentityProvider(Protocol):
    async def get_user(self, token: str) -> dict[str, Any] | None: ...


class SupabaseIdentityClient:
    """
    Calls `GET /auth/v1/user` with the caller's token; the service role key is sent as
    the project `apikey`.
    """

    def __init__(self, *, settings: Settings, http: httpx.AsyncClient) -> None:
        self._settings = settings
        self._http = http

    def _headers(self, token: str) -> dict[str, str]:
        return {
            "Authorization": f"Bearer {token}",
            "apikey": self._settings.supabase_service_role_key,
        }

    async def get_user(self, token: str) -> dict[str, Any] | None:
        try:
            r = await self._http.get("/auth/v1/user", headers=self._headers(token))
        except httpx.HTTPError as e:
            raise IdentityProviderError(f"identity provider unreachable: {type(e).__name__}") from e

        if r.status_code in _NO_USER_STATUSES:
            return None
        if r.status_code != HTTP_200_OK:
            raise IdentityProviderError(f"identity provider returned {r.status_code}")

        try:
            payload = r.json()
        except ValueError as e:
            raise IdentityProviderError("identity provider returned a non-JSON body") from e

        # Some provider versions wrap the user object: {"user": {...}}.
        if isinstance(payload, dict) and isinstance(payload.get("user"), dict):
            payload = payload["user"]
        if not isinstance(payload, dict) or not payload:
            return None
        return payload


def create_identity_http(settings: Settings) -> httpx.AsyncClient:
    # One pooled client per process, shared by all requests.
    return httpx.AsyncClient(
        base_url=settings.supabase_url.rstrip("/"),
        timeout=settings.identity_timeout_seconds,
    )


# --- Module Notes -----------------------------------------------------------
# Exception messages never include the token; callers may log them verbatim.
