"""
tests.conftest

Shared fixtures: an app wired to a throwaway SQLite file, with the identity provider
and checkout gateway replaced by in-memory fakes.
"""

from __future__ import annotations

from collections.abc import AsyncIterator
from typing import Any

import httpx
import pytest
import pytest_asyncio
from fastapi import FastAPI

from dealbook.api.app import create_app
from dealbook.api.deps import checkout_gateway_from_app, identity_provider_from_app
from dealbook.auth.identity import IdentityProviderError
from dealbook.settings import Settings

ALICE_TOKEN = "token-alice"
BOB_TOKEN = "token-bob"


class FakeIdentity:
    def __init__(self, users: dict[str, dict[str, Any]]) -> None:
        self.users = users
        self.calls: list[str] = []
        self.fail = False

    async def get_user(self, token: str) -> dict[str, Any] | None:
        self.calls.append(token)
        if self.fail:
            raise IdentityProviderError("identity provider returned 503")
        return self.users.get(token)


class FakeCheckout:
    def __init__(self) -> None:
        self.calls: list[str] = []

    async def create_subscription_session(self, owner_id: str) -> str:
        self.calls.append(owner_id)
        return f"https://checkout.stripe.test/c/pay/cs_test_{owner_id}"


def bearer(token: str) -> dict[str, str]:
    return {"Authorization": f"Bearer {token}"}


@pytest.fixture
def settings(tmp_path) -> Settings:
    return Settings(
        env="test",
        database_url=f"sqlite+aiosqlite:///{tmp_path / 'dealbook.db'}",
        stripe_secret_key="sk_test_dummy",
        stripe_license_price_id="price_test_yearly",
        client_url="https://app.example.test",
    )


@pytest.fixture
def identity() -> FakeIdentity:
    return FakeIdentity(
        {
            ALICE_TOKEN: {"id": "user-alice", "email": "alice@example.test"},
            BOB_TOKEN: {"id": "user-bob", "email": "bob@example.test"},
            "token-no-id": {"email": "ghost@example.test"},
        }
    )


@pytest.fixture
def checkout() -> FakeCheckout:
    return FakeCheckout()


@pytest_asyncio.fixture
async def app(
    settings: Settings, identity: FakeIdentity, checkout: FakeCheckout
) -> AsyncIterator[FastAPI]:
    app = create_app(settings=settings)
    app.dependency_overrides[identity_provider_from_app] = lambda: identity
    app.dependency_overrides[checkout_gateway_from_app] = lambda: checkout
    # httpx ASGITransport does not run the lifespan; enter it explicitly.
    async with app.router.lifespan_context(app):
        yield app


@pytest_asyncio.fixture
async def client(app: FastAPI) -> AsyncIterator[httpx.AsyncClient]:
    transport = httpx.ASGITransport(app=app)
    async with httpx.AsyncClient(transport=transport, base_url="http://test") as http:
        yield http
