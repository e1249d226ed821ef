"""Order service layer.

An order is recorded and the cart cleared in one transaction: a failure
at any step leaves both the orders table and the cart as they were.
"""

import logging
import uuid

from django.db import DatabaseError, IntegrityError, transaction

from shopfront.core.exceptions import (
    NotFoundError,
    PaymentError,
    PersistenceError,
    ValidationError,
)

from ..models import CartItem, Order, OrderItem
from .cart import resolve_items
from .payments import to_minor_units

logger = logging.getLogger(__name__)


def place_order(user, payment_session_id=None, amount_paid=None) -> Order:
    """Snapshot the user's cart into a new Order and empty the cart.

    Product fields are copied by value, so later edits to a product never
    change a recorded order. Cart entries whose product was deleted are
    dropped along with the rest of the cart.

    Args:
        user: The purchaser
        payment_session_id: Stripe Checkout session paying for this order.
            Each session can back at most one order.
        amount_paid: What the session charged, in minor units. Must equal
            the cart total.

    Returns:
        The created Order

    Raises:
        ValidationError: The cart has no purchasable items, or the payment
            session already backs an order
        PaymentError: The amount paid does not match the cart
        PersistenceError: The order could not be recorded
    """
    try:
        with transaction.atomic():
            if payment_session_id and Order.objects.filter(stripe_session_id=payment_session_id).exists():
                raise ValidationError("This payment has already been used for an order.")

            items = list(CartItem.objects.select_for_update().filter(user=user))
            cart = resolve_items(items)
            if cart.is_empty:
                raise ValidationError("Your cart is empty.")

            cart_amount = to_minor_units(cart.total)
            if amount_paid is not None and cart_amount != amount_paid:
                logger.warning(
                    "Session %s paid %s but cart of %s totals %s",
                    payment_session_id,
                    amount_paid,
                    user.pk,
                    cart_amount,
                )
                raise PaymentError("Your cart changed after payment. Please check out again.")

            order = Order.objects.create(
                user=user,
                user_email=user.email,
                stripe_session_id=payment_session_id or None,
            )
            OrderItem.objects.bulk_create([
                OrderItem(
                    order=order,
                    position=position,
                    product_id=line.product.pk,
                    title=line.product.title,
                    price=line.product.price,
                    description=line.product.description,
                    image_url=line.product.image_url,
                    quantity=line.quantity,
                )
                for position, line in enumerate(cart.lines)
            ])
            CartItem.objects.filter(pk__in=[item.pk for item in items]).delete()
    except IntegrityError as e:
        if not payment_session_id:
            logger.error("Placing order for %s failed", user.pk, exc_info=True)
            raise PersistenceError("Could not place your order.") from e
        raise ValidationError("This payment has already been used for an order.") from e
    except DatabaseError as e:
        logger.error("Placing order for %s failed", user.pk, exc_info=True)
        raise PersistenceError("Could not place your order.") from e

    logger.info(
        "Order %s placed by %s with %d line(s)",
        order.pk,
        user.pk,
        len(cart.lines),
    )
    return order


def list_orders(user):
    """All orders placed by ``user``, newest first.

    Unpaginated; fine for a storefront-sized order history.
    """
    try:
        return list(Order.objects.filter(user=user).prefetch_related("items"))
    except DatabaseError as e:
        raise PersistenceError("Could not load your orders.") from e


def get_order(order_id) -> Order:
    """Fetch an order with its items.

    Raises:
        NotFoundError: No order with that id, or the id is malformed.
    """
    try:
        order_uuid = uuid.UUID(str(order_id))
    except ValueError:
        raise NotFoundError("No order found.", order_id=str(order_id))

    try:
        return Order.objects.prefetch_related("items").get(pk=order_uuid)
    except Order.DoesNotExist:
        raise NotFoundError("No order found.", order_id=str(order_id))
    except DatabaseError as e:
        raise PersistenceError("Could not load order.") from e
