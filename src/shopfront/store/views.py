"""Store views: cart, checkout, orders and invoices."""

import io
import logging

from django.conf import settings
from django.contrib import messages
from django.core.exceptions import PermissionDenied
from django.http import FileResponse
from django.shortcuts import redirect, render
from django.urls import reverse
from django.views import View
from django.views.generic import TemplateView

from shopfront.catalog.services import get_product
from shopfront.core.exceptions import (
    AuthorizationError,
    NotFoundError,
    PaymentError,
    ValidationError,
)
from shopfront.core.mixins import ShopLoginRequiredMixin

from .services import cart as cart_service
from .services import orders as order_service
from .services.invoices import generate_invoice
from .services.payments import create_checkout_session, get_paid_session

logger = logging.getLogger(__name__)


class CartView(ShopLoginRequiredMixin, View):
    """GET/POST /cart"""

    def get(self, request):
        cart = cart_service.get_cart(request.user)
        if cart.stale_product_ids:
            messages.warning(
                request,
                f"{len(cart.stale_product_ids)} item(s) in your cart are no longer available.",
            )
        return render(request, "shop/cart.html", {
            "title": "Your Cart",
            "path": "/cart",
            "cart": cart,
            "products": cart.lines,
        })

    def post(self, request):
        product = get_product(request.POST.get("productId", ""))
        cart_service.add_to_cart(request.user, product)
        return redirect("/cart")


class CartDeleteItemView(ShopLoginRequiredMixin, View):
    """POST /cart-delete-item"""

    def post(self, request):
        cart_service.remove_from_cart(request.user, request.POST.get("productId", ""))
        return redirect("/cart")


class OrderListView(ShopLoginRequiredMixin, TemplateView):
    """GET /orders"""

    template_name = "shop/orders.html"

    def get_context_data(self, **kwargs):
        context = super().get_context_data(**kwargs)
        context.update({
            "title": "Your Orders",
            "path": "/orders",
            "orders": order_service.list_orders(self.request.user),
        })
        return context


class CreateOrderView(ShopLoginRequiredMixin, View):
    """POST /create-order"""

    def post(self, request):
        try:
            order_service.place_order(request.user)
        except ValidationError as e:
            messages.error(request, e.message)
            return redirect("/cart")
        return redirect("/orders")


class InvoiceView(ShopLoginRequiredMixin, View):
    """GET /orders/<order_id>/invoice

    Someone else's order is a 403, not a redirect.
    """

    def get(self, request, order_id):
        try:
            invoice = generate_invoice(order_id, request.user)
        except NotFoundError as e:
            messages.error(request, e.message)
            return redirect("/orders")
        except AuthorizationError as e:
            logger.warning("User %s requested invoice for order %s", request.user.pk, order_id)
            raise PermissionDenied(e.message) from e

        if not invoice.stored:
            logger.warning("Invoice %s served without a stored copy", invoice.filename)

        return FileResponse(
            io.BytesIO(invoice.content),
            content_type="application/pdf",
            filename=invoice.filename,
        )


class CheckoutView(ShopLoginRequiredMixin, View):
    """GET /checkout: start a Stripe Checkout session for the cart."""

    def get(self, request):
        cart = cart_service.get_cart(request.user)
        if cart.is_empty:
            messages.error(request, "Your cart is empty.")
            return redirect("/cart")

        success_url = request.build_absolute_uri(reverse("store:checkout-success"))
        cancel_url = request.build_absolute_uri(reverse("store:checkout-cancel"))
        try:
            session_id = create_checkout_session(
                cart,
                success_url=f"{success_url}?session_id={{CHECKOUT_SESSION_ID}}",
                cancel_url=cancel_url,
                customer_email=request.user.email,
            )
        except PaymentError as e:
            messages.error(request, e.message)
            return redirect("/cart")

        return render(request, "shop/checkout.html", {
            "title": "Checkout",
            "path": "/checkout",
            "cart": cart,
            "products": cart.lines,
            "total_sum": cart.total,
            "session_id": session_id,
            "stripe_publishable_key": settings.STRIPE_PUBLISHABLE_KEY,
        })


class CheckoutSuccessView(ShopLoginRequiredMixin, View):
    """GET /checkout/success: record the order once Stripe confirms payment.

    The order is tied to the paid session, so replaying the URL or changing
    the cart after paying never yields an order the payment did not cover.
    """

    def get(self, request):
        session = get_paid_session(request.GET.get("session_id", ""))
        if session is None:
            messages.error(request, "Payment was not completed.")
            return redirect("/checkout")
        try:
            order_service.place_order(
                request.user,
                payment_session_id=session.id,
                amount_paid=session.amount_total,
            )
        except (ValidationError, PaymentError) as e:
            messages.error(request, e.message)
            return redirect("/cart")
        return redirect("/orders")


class CheckoutCancelView(ShopLoginRequiredMixin, View):
    """GET /checkout/cancel"""

    def get(self, request):
        return redirect("/checkout")
