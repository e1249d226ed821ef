"""Tests for the seed_catalog management command."""

from io import StringIO

from django.contrib.auth import get_user_model
from django.core.management import call_command

from shopfront.catalog.models import Product


def test_seed_catalog_creates_owner_and_products(db):
    out = StringIO()

    call_command("seed_catalog", stdout=out)

    owner = get_user_model().objects.get(email="owner@shopfront.local")
    assert Product.objects.filter(owner=owner).count() == 5
    assert "Created owner" in out.getvalue()


def test_seed_catalog_is_idempotent(db):
    call_command("seed_catalog", stdout=StringIO())
    out = StringIO()

    call_command("seed_catalog", stdout=out)

    assert Product.objects.count() == 5
    assert "Skipping existing product" in out.getvalue()


def test_force_recreates(db):
    call_command("seed_catalog", stdout=StringIO())
    first_ids = set(Product.objects.values_list("pk", flat=True))

    call_command("seed_catalog", "--force", stdout=StringIO())

    assert Product.objects.count() == 5
    assert first_ids.isdisjoint(Product.objects.values_list("pk", flat=True))
