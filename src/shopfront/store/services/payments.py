"""Stripe Checkout integration.

Amounts are Decimal currency values everywhere else in the shop; the
conversion to Stripe's integer minor units happens only in
``to_minor_units``.
"""

import logging
from decimal import ROUND_HALF_UP, Decimal

import stripe
from django.conf import settings

from shopfront.core.conf import get_setting
from shopfront.core.exceptions import PaymentError, ValidationError

logger = logging.getLogger(__name__)

MINOR_UNITS_PER_UNIT = 100


def to_minor_units(amount: Decimal) -> int:
    """Convert a decimal currency amount to integer cents.

    >>> to_minor_units(Decimal("10.50"))
    1050
    """
    cents = Decimal(amount).quantize(Decimal("0.01"), rounding=ROUND_HALF_UP)
    return int(cents * MINOR_UNITS_PER_UNIT)


def build_line_items(cart, currency: str) -> list[dict]:
    return [
        {
            "price_data": {
                "currency": currency,
                "unit_amount": to_minor_units(line.product.price),
                "product_data": {
                    "name": line.product.title,
                    "description": line.product.description,
                },
            },
            "quantity": line.quantity,
        }
        for line in cart.lines
    ]


def create_checkout_session(cart, success_url: str, cancel_url: str, customer_email: str = None) -> str:
    """Create a Stripe Checkout session for the cart and return its id.

    Raises:
        ValidationError: The cart is empty
        PaymentError: Stripe is not configured or rejected the request
    """
    if cart.is_empty:
        raise ValidationError("Your cart is empty.")
    if not settings.STRIPE_SECRET_KEY:
        raise PaymentError("Payments are not configured.")

    currency = get_setting("CURRENCY", "usd")
    try:
        session = stripe.checkout.Session.create(
            api_key=settings.STRIPE_SECRET_KEY,
            mode="payment",
            payment_method_types=["card"],
            line_items=build_line_items(cart, currency),
            customer_email=customer_email,
            success_url=success_url,
            cancel_url=cancel_url,
        )
    except stripe.StripeError as e:
        logger.error("Stripe checkout session failed: %s", e, exc_info=True)
        raise PaymentError("Could not start checkout.") from e

    logger.info("Stripe checkout session %s created", session.id)
    return session.id


def get_paid_session(session_id: str):
    """The Checkout session when Stripe reports it paid, else None.

    The returned session carries ``id`` and ``amount_total`` (minor units),
    which ``place_order`` checks against the cart.
    """
    if not session_id:
        return None
    try:
        session = stripe.checkout.Session.retrieve(session_id, api_key=settings.STRIPE_SECRET_KEY)
    except stripe.StripeError:
        logger.warning("Could not retrieve checkout session %s", session_id, exc_info=True)
        return None
    if getattr(session, "payment_status", None) != "paid":
        return None
    return session
