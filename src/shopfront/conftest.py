"""Shared pytest fixtures for Shopfront tests."""

from decimal import Decimal

import pytest
from django.contrib.auth import get_user_model
from django.core.files.uploadedfile import SimpleUploadedFile
from django.test import Client


User = get_user_model()


@pytest.fixture(autouse=True)
def isolated_storage(settings, tmp_path):
    """Keep uploaded images and invoices inside the test's tmp dir."""
    settings.MEDIA_ROOT = tmp_path / "media"
    settings.SHOP = {**settings.SHOP, "INVOICE_ROOT": tmp_path / "invoices"}
    return tmp_path


@pytest.fixture
def client():
    """Return a Django test client."""
    return Client()


@pytest.fixture
def user(db):
    """Create a test user."""
    return User.objects.create_user(
        email="shopper@example.com",
        password="testpass123",
    )


@pytest.fixture
def other_user(db):
    """Create a second, unrelated user."""
    return User.objects.create_user(
        email="other@example.com",
        password="testpass123",
    )


@pytest.fixture
def auth_client(client, user):
    """Client logged in as ``user``."""
    client.force_login(user)
    return client


def image_upload(name="product.png"):
    return SimpleUploadedFile(name, b"\x89PNG\r\n\x1a\nfake", content_type="image/png")


@pytest.fixture
def make_product(db, user):
    """Factory for products, owned by ``user`` unless told otherwise."""
    from shopfront.catalog.models import Product

    def _make(title="Widget", price="10.00", owner=None, description="A useful widget."):
        slug = title.lower().replace(" ", "-")
        return Product.objects.create(
            owner=owner or user,
            title=title,
            price=Decimal(price),
            description=description,
            image=image_upload(f"{slug}.png"),
        )

    return _make


@pytest.fixture
def make_order(db, user):
    """Factory for orders from ``(title, price, quantity)`` tuples."""
    from shopfront.store.models import Order, OrderItem

    def _make(items, owner=None):
        owner = owner or user
        order = Order.objects.create(user=owner, user_email=owner.email)
        OrderItem.objects.bulk_create([
            OrderItem(
                order=order,
                position=position,
                title=title,
                price=Decimal(price),
                quantity=quantity,
            )
            for position, (title, price, quantity) in enumerate(items)
        ])
        return order

    return _make
