"""
dealbook.auth.deps

FastAPI dependency functions for authentication.

Responsibilities:
- Extract the bearer credential from the `Authorization` header.
- Convert it into a typed `Principal` via the identity provider.
- Enforce that the principal carries a usable owner identifier.
"""

from __future__ import annotations

import structlog
from fastapi import Depends, Header
from fastapi.security.utils import get_authorization_scheme_param

from dealbook.api.deps import identity_provider_from_app
from dealbook.auth.identity import IdentityProvider, IdentityProviderError
from dealbook.auth.models import Principal
from dealbook.errors import InvalidCredential, MalformedCredential, MissingHeader, MissingOwner
from dealbook.observability.logging import get_logger

log = get_logger(__name__)


def parse_bearer(authorization: str | None) -> str:
    """
    Return the token segment of a `Bearer <token>` header value.
    """

    if not authorization:
        raise MissingHeader()
    scheme, token = get_authorization_scheme_param(authorization)
    if scheme.lower() != "bearer" or not token.strip():
        raise MalformedCredential()
    return token.strip()


async def get_principal(
    authorization: str | None = Header(default=None),
    identity: IdentityProvider = Depends(identity_provider_from_app),
) -> Principal:
    token = parse_bearer(authorization)

    try:
        user = await identity.get_user(token)
    except IdentityProviderError as e:
        log.warning("identity_lookup_failed", reason=str(e))
        raise InvalidCredential("Authentication failed.") from e

    if user is None:
        raise InvalidCredential()

    principal = Principal.from_user_payload(user)
    # Every later log line of this request carries the caller's id.
    structlog.contextvars.bind_contextvars(user_id=principal.user_id or None)
    return principal


def require_owner(principal: Principal = Depends(get_principal)) -> Principal:
    if not principal.user_id:
        raise MissingOwner()
    return principal


# --- Module Notes -----------------------------------------------------------
# Routes depend on `require_owner`; `get_principal` alone only proves the token is valid.
