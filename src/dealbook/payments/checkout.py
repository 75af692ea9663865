"""
dealbook.payments.checkout

Checkout session gateway.

Responsibilities:
- Create a Stripe Checkout session for the yearly license subscription.
- Fail fast with `ConfigurationError` when the price reference is unset.
- Convert provider failures into `GatewayFailure`.
"""

from __future__ import annotations

from typing import Any

import stripe
from starlette.concurrency import run_in_threadpool

from dealbook.errors import ConfigurationError, GatewayFailure
from dealbook.observability.logging import get_logger
from dealbook.settings import Settings

log = get_logger(__name__)

# Resolved by Stripe at redirect time.
SESSION_ID_PLACEHOLDER = "{CHECKOUT_SESSION_ID}"


class CheckoutGateway:
    def __init__(self, *, settings: Settings) -> None:
        self._api_key = settings.stripe_secret_key
        self._price_id = settings.stripe_license_price_id
        self._client_url = settings.client_url.rstrip("/")

    @property
    def configured(self) -> bool:
        return bool(self._price_id)

    def session_params(self, owner_id: str) -> dict[str, Any]:
        if not self._price_id:
            raise ConfigurationError("Stripe price ID is not configured.")
        return {
            "mode": "subscription",
            "line_items": [{"price": self._price_id, "quantity": 1}],
            # Links the session to the user for later fulfillment.
            "metadata": {"supabaseUserId": owner_id},
            "success_url": f"{self._client_url}/success?session_id={SESSION_ID_PLACEHOLDER}",
            "cancel_url": f"{self._client_url}/cancel",
        }

    async def create_subscription_session(self, owner_id: str) -> str:
        params = self.session_params(owner_id)
        try:
            # The SDK is blocking; keep it off the event loop.
            session = await run_in_threadpool(
                stripe.checkout.Session.create, api_key=self._api_key, **params
            )
        except stripe.StripeError as e:
            log.error(
                "checkout_session_failed",
                error_type=type(e).__name__,
                stripe_code=getattr(e, "code", None),
            )
            raise GatewayFailure("Failed to create checkout session.") from e

        url = getattr(session, "url", None)
        if not url:
            raise GatewayFailure("Failed to create checkout session.")
        log.info("checkout_session_created", session_id=getattr(session, "id", None))
        return url


# --- Module Notes -----------------------------------------------------------
# Reconciliation of completed sessions (webhooks) is handled outside this service.
