"""Tests for error translation and core views."""

import uuid
from unittest.mock import patch

import pytest
from django.contrib.messages import get_messages

from shopfront.core.exceptions import PaymentError, PersistenceError, ValidationError


class TestShopErrorMiddleware:

    def test_missing_product_redirects_home_with_message(self, client, db):
        response = client.get(f"/products/{uuid.uuid4()}")

        assert response.status_code == 302
        assert response.url == "/"
        messages = [str(m) for m in get_messages(response.wsgi_request)]
        assert "Product not found." in messages

    def test_persistence_error_renders_error_page(self, client, db):
        with patch(
            "shopfront.catalog.services.paginate_products",
            side_effect=PersistenceError("Could not load products."),
        ):
            response = client.get("/")

        assert response.status_code == 503
        assert b"Could not load products." in response.content

    def test_payment_error_renders_error_page_with_500(self, client, db):
        with patch(
            "shopfront.catalog.services.paginate_products",
            side_effect=PaymentError("Could not start checkout."),
        ):
            response = client.get("/")

        assert response.status_code == 500
        assert b"Could not start checkout." in response.content

    def test_validation_error_returns_to_same_site_referer(self, client, db):
        with patch(
            "shopfront.catalog.services.paginate_products",
            side_effect=ValidationError("Bad page."),
        ):
            response = client.get("/", HTTP_REFERER="http://testserver/products?page=2")

        assert response.status_code == 302
        assert response.url == "http://testserver/products?page=2"

    @pytest.mark.parametrize(
        "referer",
        ["https://evil.example/login", "//evil.example/login", "javascript:alert(1)"],
    )
    def test_validation_error_ignores_foreign_referer(self, client, db, referer):
        with patch(
            "shopfront.catalog.services.paginate_products",
            side_effect=ValidationError("Bad page."),
        ):
            response = client.get("/", HTTP_REFERER=referer)

        assert response.status_code == 302
        assert response.url == "/"

    def test_unknown_url_is_404(self, client, db):
        response = client.get("/no-such-page/at-all")

        assert response.status_code == 404


class TestHealthCheck:

    def test_reports_healthy_database(self, client, db):
        response = client.get("/health/")

        assert response.status_code == 200
        assert response.json() == {"status": "healthy", "database": "connected"}
