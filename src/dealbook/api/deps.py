"""
dealbook.api.deps

FastAPI dependency wiring for the API layer.

Responsibilities:
- Provide dependency functions for settings and DB sessions.
- Encapsulate app.state access patterns (sessionmaker, identity client, checkout gateway).
"""

from __future__ import annotations

from collections.abc import AsyncIterator

from fastapi import Depends, Request
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker

from dealbook.auth.identity import IdentityProvider
from dealbook.payments.checkout import CheckoutGateway
from dealbook.settings import Settings, get_settings


def settings_dep() -> Settings:
    return get_settings()


def sessionmaker_from_app(request: Request) -> async_sessionmaker[AsyncSession]:
    # Created during app lifespan in `dealbook.api.app.create_app`.
    return request.app.state.sessionmaker  # type: ignore[attr-defined]


async def db_session(
    session_factory: async_sessionmaker[AsyncSession] = Depends(sessionmaker_from_app),
) -> AsyncIterator[AsyncSession]:
    # Request-scoped DB session. Commit is explicit in the write routes.
    async with session_factory() as session:
        yield session


def identity_provider_from_app(request: Request) -> IdentityProvider:
    return request.app.state.identity  # type: ignore[attr-defined]


def checkout_gateway_from_app(request: Request) -> CheckoutGateway:
    return request.app.state.checkout  # type: ignore[attr-defined]
