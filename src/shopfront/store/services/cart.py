"""Cart service layer.

Every mutation runs in its own transaction. Increments happen in the
database (``F("quantity") + 1``) on a locked row, so two concurrent adds
of the same product always end with quantity 2.
"""

import logging
import uuid
from dataclasses import dataclass, field
from decimal import Decimal

from django.db import DatabaseError, transaction
from django.db.models import F

from shopfront.catalog.models import Product
from shopfront.core.exceptions import PersistenceError

from ..models import CartItem

logger = logging.getLogger(__name__)


@dataclass
class CartLine:
    """A cart entry resolved to its live product."""

    product: Product
    quantity: int

    @property
    def line_total(self) -> Decimal:
        return self.product.price * self.quantity


@dataclass
class Cart:
    """A user's cart as displayed: live lines plus any stale references."""

    lines: list = field(default_factory=list)
    stale_product_ids: list = field(default_factory=list)

    @property
    def total(self) -> Decimal:
        return sum((line.line_total for line in self.lines), Decimal("0.00"))

    @property
    def item_count(self) -> int:
        return sum(line.quantity for line in self.lines)

    @property
    def is_empty(self) -> bool:
        return not self.lines


def add_to_cart(user, product: Product) -> CartItem:
    """Add one unit of ``product`` to the user's cart.

    Creates the entry with quantity 1, or increments an existing one.

    Raises:
        PersistenceError: The cart could not be written.
    """
    try:
        with transaction.atomic():
            item, created = CartItem.objects.select_for_update().get_or_create(
                user=user,
                product=product,
                defaults={"quantity": 1},
            )
            if not created:
                CartItem.objects.filter(pk=item.pk).update(quantity=F("quantity") + 1)
                item.refresh_from_db(fields=["quantity"])
    except DatabaseError as e:
        logger.error("Adding product %s to cart of %s failed", product.pk, user.pk, exc_info=True)
        raise PersistenceError("Could not update your cart.") from e

    logger.debug("Cart of %s: product %s now x%s", user.pk, product.pk, item.quantity)
    return item


def remove_from_cart(user, product_id) -> int:
    """Drop the entry for ``product_id``. Returns the number of rows removed.

    Absent or malformed ids are a no-op.
    """
    try:
        product_uuid = uuid.UUID(str(product_id))
    except ValueError:
        return 0

    try:
        deleted, _ = CartItem.objects.filter(user=user, product_id=product_uuid).delete()
    except DatabaseError as e:
        raise PersistenceError("Could not update your cart.") from e
    return deleted


def clear_cart(user) -> int:
    """Empty the user's cart."""
    try:
        deleted, _ = CartItem.objects.filter(user=user).delete()
    except DatabaseError as e:
        raise PersistenceError("Could not clear your cart.") from e
    return deleted


def resolve_items(items) -> Cart:
    """Pair cart rows with their live products, setting aside stale rows."""
    products = Product.objects.in_bulk([item.product_id for item in items])
    cart = Cart()
    for item in items:
        product = products.get(item.product_id)
        if product is None:
            cart.stale_product_ids.append(item.product_id)
            continue
        cart.lines.append(CartLine(product=product, quantity=item.quantity))

    if cart.stale_product_ids:
        logger.info("Skipping %d cart entries for deleted products", len(cart.stale_product_ids))
    return cart


def get_cart(user) -> Cart:
    """Load the user's cart for display."""
    try:
        items = list(CartItem.objects.filter(user=user))
        return resolve_items(items)
    except DatabaseError as e:
        raise PersistenceError("Could not load your cart.") from e


def cart_item_count(user) -> int:
    """Total units in the cart, ignoring stale entries."""
    return get_cart(user).item_count
