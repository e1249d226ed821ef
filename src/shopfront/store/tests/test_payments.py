"""Tests for Stripe checkout."""

from decimal import Decimal
from unittest.mock import MagicMock, patch

import pytest
import stripe

from shopfront.core.exceptions import PaymentError, ValidationError
from shopfront.store.models import CartItem, Order
from shopfront.store.services.cart import add_to_cart, get_cart
from shopfront.store.services.payments import (
    create_checkout_session,
    get_paid_session,
    to_minor_units,
)


@pytest.mark.parametrize(
    "amount, cents",
    [
        ("0", 0),
        ("10", 1000),
        ("10.50", 1050),
        ("19.99", 1999),
        ("10.005", 1001),
        ("0.004", 0),
    ],
)
def test_to_minor_units(amount, cents):
    assert to_minor_units(Decimal(amount)) == cents


class TestCreateCheckoutSession:

    def test_sends_cart_lines_in_cents(self, user, make_product):
        lamp = make_product(title="Lamp", price="10.00")
        vase = make_product(title="Vase", price="5.50")
        add_to_cart(user, lamp)
        add_to_cart(user, lamp)
        add_to_cart(user, vase)

        with patch("stripe.checkout.Session.create", return_value=MagicMock(id="cs_test_123")) as create:
            session_id = create_checkout_session(
                get_cart(user),
                success_url="http://testserver/checkout/success",
                cancel_url="http://testserver/checkout/cancel",
                customer_email=user.email,
            )

        assert session_id == "cs_test_123"
        kwargs = create.call_args.kwargs
        assert kwargs["api_key"] == "sk_test_shopfront"
        assert kwargs["mode"] == "payment"
        assert kwargs["customer_email"] == "shopper@example.com"
        assert [
            (li["price_data"]["product_data"]["name"], li["price_data"]["unit_amount"], li["quantity"])
            for li in kwargs["line_items"]
        ] == [("Lamp", 1000, 2), ("Vase", 550, 1)]
        assert kwargs["line_items"][0]["price_data"]["currency"] == "usd"

    def test_empty_cart_is_rejected(self, user):
        with patch("stripe.checkout.Session.create") as create:
            with pytest.raises(ValidationError):
                create_checkout_session(get_cart(user), "http://s", "http://c")

        create.assert_not_called()

    def test_missing_key_is_a_payment_error(self, user, make_product, settings):
        settings.STRIPE_SECRET_KEY = ""
        add_to_cart(user, make_product())

        with pytest.raises(PaymentError):
            create_checkout_session(get_cart(user), "http://s", "http://c")

    def test_stripe_failure_is_a_payment_error(self, user, make_product):
        add_to_cart(user, make_product())

        with patch("stripe.checkout.Session.create", side_effect=stripe.StripeError("card declined")):
            with pytest.raises(PaymentError) as exc_info:
                create_checkout_session(get_cart(user), "http://s", "http://c")

        assert exc_info.value.message == "Could not start checkout."


def paid_session(session_id="cs_test_123", amount_total=1000, payment_status="paid"):
    return MagicMock(id=session_id, amount_total=amount_total, payment_status=payment_status)


class TestGetPaidSession:

    def test_paid(self):
        session = paid_session()

        with patch("stripe.checkout.Session.retrieve", return_value=session) as retrieve:
            assert get_paid_session("cs_test_123") is session

        assert retrieve.call_args.kwargs["api_key"] == "sk_test_shopfront"

    def test_unpaid(self):
        with patch("stripe.checkout.Session.retrieve", return_value=paid_session(payment_status="unpaid")):
            assert get_paid_session("cs_test_123") is None

    def test_unknown_session(self):
        with patch("stripe.checkout.Session.retrieve", side_effect=stripe.StripeError("No such session")):
            assert get_paid_session("cs_missing") is None

    def test_blank_id(self):
        with patch("stripe.checkout.Session.retrieve") as retrieve:
            assert get_paid_session("") is None

        retrieve.assert_not_called()


class TestCheckoutViews:

    def test_empty_cart_redirects_to_cart(self, auth_client):
        response = auth_client.get("/checkout")

        assert response.status_code == 302
        assert response.url == "/cart"

    def test_checkout_page(self, auth_client, user, make_product):
        add_to_cart(user, make_product(price="12.00"))

        with patch("shopfront.store.views.create_checkout_session", return_value="cs_test_123") as create:
            response = auth_client.get("/checkout")

        assert response.status_code == 200
        assert response.context["session_id"] == "cs_test_123"
        assert response.context["total_sum"] == Decimal("12.00")
        assert response.context["stripe_publishable_key"] == "pk_test_shopfront"
        kwargs = create.call_args.kwargs
        assert kwargs["success_url"] == (
            "http://testserver/checkout/success?session_id={CHECKOUT_SESSION_ID}"
        )
        assert kwargs["cancel_url"] == "http://testserver/checkout/cancel"

    def test_payment_error_returns_to_cart(self, auth_client, user, make_product):
        add_to_cart(user, make_product())

        with patch(
            "shopfront.store.views.create_checkout_session",
            side_effect=PaymentError("Could not start checkout."),
        ):
            response = auth_client.get("/checkout")

        assert response.status_code == 302
        assert response.url == "/cart"

    def test_paid_success_places_order(self, auth_client, user, make_product):
        add_to_cart(user, make_product(price="10.00"))

        with patch("stripe.checkout.Session.retrieve", return_value=paid_session()) as retrieve:
            response = auth_client.get("/checkout/success", {"session_id": "cs_test_123"})

        assert retrieve.call_args.args == ("cs_test_123",)
        assert response.status_code == 302
        assert response.url == "/orders"
        order = Order.objects.get(user=user)
        assert order.stripe_session_id == "cs_test_123"
        assert not CartItem.objects.filter(user=user).exists()

    def test_unpaid_success_places_nothing(self, auth_client, user, make_product):
        add_to_cart(user, make_product())

        with patch("stripe.checkout.Session.retrieve", return_value=paid_session(payment_status="unpaid")):
            response = auth_client.get("/checkout/success", {"session_id": "cs_test_123"})

        assert response.status_code == 302
        assert response.url == "/checkout"
        assert not Order.objects.exists()
        assert CartItem.objects.filter(user=user).count() == 1

    def test_replayed_session_places_one_order(self, auth_client, user, make_product):
        add_to_cart(user, make_product(title="Cheap", price="1.00"))

        with patch("stripe.checkout.Session.retrieve", return_value=paid_session("cs_1", amount_total=100)):
            first = auth_client.get("/checkout/success", {"session_id": "cs_1"})
            add_to_cart(user, make_product(title="Pricey", price="999.00"))
            second = auth_client.get("/checkout/success", {"session_id": "cs_1"})

        assert first.url == "/orders"
        assert second.status_code == 302
        assert second.url == "/cart"
        orders = list(Order.objects.filter(user=user))
        assert len(orders) == 1
        assert [item.title for item in orders[0].items.all()] == ["Cheap"]
        assert CartItem.objects.filter(user=user).count() == 1

    def test_cart_changed_after_payment_places_nothing(self, auth_client, user, make_product):
        add_to_cart(user, make_product(price="10.00"))
        add_to_cart(user, make_product(title="Extra", price="5.00"))

        with patch("stripe.checkout.Session.retrieve", return_value=paid_session(amount_total=1000)):
            response = auth_client.get("/checkout/success", {"session_id": "cs_test_123"})

        assert response.status_code == 302
        assert response.url == "/cart"
        assert not Order.objects.exists()
        assert CartItem.objects.filter(user=user).count() == 2

    def test_cancel_returns_to_checkout(self, auth_client):
        response = auth_client.get("/checkout/cancel")

        assert response.status_code == 302
        assert response.url == "/checkout"
