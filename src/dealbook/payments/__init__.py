"""
dealbook.payments

Payment provider boundary (Stripe Checkout).
"""

# Package marker.
