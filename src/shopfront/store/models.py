"""Store models: cart entries and immutable orders."""

import uuid
from decimal import Decimal

from django.conf import settings
from django.core.validators import MinValueValidator
from django.db import models


class CartItem(models.Model):
    """One product line in a user's cart.

    The product reference is soft: deleting a product leaves the row in
    place, and readers skip entries whose product is gone.
    """

    user = models.ForeignKey(
        settings.AUTH_USER_MODEL,
        on_delete=models.CASCADE,
        related_name="cart_items",
    )
    product = models.ForeignKey(
        "catalog.Product",
        on_delete=models.DO_NOTHING,
        db_constraint=False,
        related_name="+",
    )
    quantity = models.PositiveIntegerField(default=1, validators=[MinValueValidator(1)])
    added_at = models.DateTimeField(auto_now_add=True)

    class Meta:
        ordering = ["added_at", "id"]
        constraints = [
            models.UniqueConstraint(
                fields=["user", "product"],
                name="store_cartitem_unique_product_per_user",
            ),
            models.CheckConstraint(
                condition=models.Q(quantity__gte=1),
                name="store_cartitem_quantity_positive",
            ),
        ]

    def __str__(self):
        return f"{self.product_id} x {self.quantity}"


class ImmutableOrderError(Exception):
    """An existing order was about to be modified."""


class Order(models.Model):
    """Point-in-time snapshot of a cart plus the purchaser's identity."""

    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)
    user = models.ForeignKey(
        settings.AUTH_USER_MODEL,
        on_delete=models.PROTECT,
        related_name="orders",
    )
    user_email = models.EmailField()
    stripe_session_id = models.CharField(max_length=255, unique=True, null=True, blank=True, editable=False)
    created_at = models.DateTimeField(auto_now_add=True)

    class Meta:
        ordering = ["-created_at"]

    def __str__(self):
        return f"Order {self.pk}"

    def save(self, *args, **kwargs):
        if not self._state.adding:
            raise ImmutableOrderError(f"Order {self.pk} cannot be modified")
        super().save(*args, **kwargs)

    @property
    def total(self) -> Decimal:
        return sum((item.line_total for item in self.items.all()), Decimal("0.00"))


class OrderItem(models.Model):
    """A product line copied by value into an order."""

    order = models.ForeignKey(Order, on_delete=models.CASCADE, related_name="items")
    position = models.PositiveIntegerField()
    product_id = models.UUIDField(null=True, blank=True)
    title = models.CharField(max_length=200)
    price = models.DecimalField(max_digits=10, decimal_places=2)
    description = models.TextField(blank=True)
    image_url = models.CharField(max_length=500, blank=True)
    quantity = models.PositiveIntegerField(validators=[MinValueValidator(1)])

    class Meta:
        ordering = ["order", "position"]
        constraints = [
            models.UniqueConstraint(
                fields=["order", "position"],
                name="store_orderitem_unique_position",
            ),
        ]

    def __str__(self):
        return f"{self.title} x {self.quantity}"

    @property
    def line_total(self) -> Decimal:
        return self.price * self.quantity
