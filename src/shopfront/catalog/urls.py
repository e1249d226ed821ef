"""Public catalog URL patterns."""

from django.urls import path

from . import views

app_name = "catalog"

urlpatterns = [
    path("", views.IndexView.as_view(), name="index"),
    path("products", views.ProductListView.as_view(), name="product-list"),
    path("products/<str:product_id>", views.ProductDetailView.as_view(), name="product-detail"),
]
