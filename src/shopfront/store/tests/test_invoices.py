"""Tests for invoice generation and download."""

import uuid
from decimal import Decimal

import pytest

from shopfront.core.exceptions import AuthorizationError, NotFoundError
from shopfront.store.services.invoices import (
    DIVIDER,
    generate_invoice,
    invoice_lines,
    invoice_path,
)


@pytest.fixture
def order(make_order):
    return make_order([("Lamp", "10.00", 2), ("Vase", "5.50", 1)])


class TestInvoiceContent:

    def test_lines_use_snapshot_prices(self, order):
        assert invoice_lines(order) == [
            "Invoice",
            DIVIDER,
            "Lamp - 2 x $10.00",
            "Vase - 1 x $5.50",
            DIVIDER,
            "Total Price: $25.50",
        ]

    def test_single_item(self, make_order):
        order = make_order([("Teapot", "7", 3)])

        assert invoice_lines(order)[-1] == "Total Price: $21.00"


class TestGenerateInvoice:

    def test_renders_and_stores_pdf(self, order, user):
        invoice = generate_invoice(order.pk, user)

        assert invoice.filename == f"invoice-{order.pk}.pdf"
        assert invoice.total == Decimal("25.50")
        assert invoice.stored is True
        assert invoice.cached is False
        assert invoice.content.startswith(b"%PDF")
        assert invoice_path(order.pk).read_bytes() == invoice.content

    def test_second_request_serves_cached_file(self, order, user):
        first = generate_invoice(order.pk, user)
        invoice_path(order.pk).write_bytes(b"%PDF-cached")

        second = generate_invoice(order.pk, user)

        assert first.cached is False
        assert second.cached is True
        assert second.content == b"%PDF-cached"

    def test_other_users_order_is_refused(self, order, other_user):
        with pytest.raises(AuthorizationError):
            generate_invoice(order.pk, other_user)

        assert not invoice_path(order.pk).exists()

    @pytest.mark.parametrize("order_id", ["not-an-id", str(uuid.uuid4())])
    def test_missing_order(self, user, order_id):
        with pytest.raises(NotFoundError):
            generate_invoice(order_id, user)

    def test_unwritable_cache_still_returns_pdf(self, order, user, settings, tmp_path):
        blocker = tmp_path / "blocker"
        blocker.write_text("not a directory")
        settings.SHOP = {**settings.SHOP, "INVOICE_ROOT": blocker / "invoices"}

        invoice = generate_invoice(order.pk, user)

        assert invoice.stored is False
        assert invoice.content.startswith(b"%PDF")


class TestInvoiceView:

    def test_owner_downloads_pdf(self, auth_client, order):
        response = auth_client.get(f"/orders/{order.pk}/invoice")

        assert response.status_code == 200
        assert response["Content-Type"] == "application/pdf"
        assert f'filename="invoice-{order.pk}.pdf"' in response["Content-Disposition"]
        assert b"".join(response.streaming_content).startswith(b"%PDF")

    def test_other_user_is_forbidden(self, client, order, other_user):
        client.force_login(other_user)

        response = client.get(f"/orders/{order.pk}/invoice")

        assert response.status_code == 403

    def test_missing_order_redirects_to_orders(self, auth_client):
        response = auth_client.get(f"/orders/{uuid.uuid4()}/invoice")

        assert response.status_code == 302
        assert response.url == "/orders"

    def test_requires_login(self, client, order):
        response = client.get(f"/orders/{order.pk}/invoice")

        assert response.status_code == 302
        assert response.url == "/login"
