"""Store URL patterns."""

from django.urls import path

from . import views

app_name = "store"

urlpatterns = [
    # Cart
    path("cart", views.CartView.as_view(), name="cart"),
    path("cart-delete-item", views.CartDeleteItemView.as_view(), name="cart-delete-item"),

    # Checkout
    path("checkout", views.CheckoutView.as_view(), name="checkout"),
    path("checkout/success", views.CheckoutSuccessView.as_view(), name="checkout-success"),
    path("checkout/cancel", views.CheckoutCancelView.as_view(), name="checkout-cancel"),

    # Orders
    path("orders", views.OrderListView.as_view(), name="orders"),
    path("create-order", views.CreateOrderView.as_view(), name="create-order"),
    path("orders/<str:order_id>/invoice", views.InvoiceView.as_view(), name="invoice"),
]
