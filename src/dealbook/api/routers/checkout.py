"""
dealbook.api.routers.checkout

Subscription checkout endpoint (`POST /create-checkout-session`).
"""

from __future__ import annotations

from fastapi import APIRouter, Depends

from dealbook.api.deps import checkout_gateway_from_app
from dealbook.auth.deps import require_owner
from dealbook.auth.models import Principal
from dealbook.payments.checkout import CheckoutGateway

router = APIRouter(tags=["checkout"])


@router.post("/create-checkout-session")
async def create_checkout_session(
    principal: Principal = Depends(require_owner),
    checkout: CheckoutGateway = Depends(checkout_gateway_from_app),
) -> dict[str, str]:
    # ConfigurationError / GatewayFailure propagate to the app-level handler.
    url = await checkout.create_subscription_session(principal.user_id)
    return {"url": url}
