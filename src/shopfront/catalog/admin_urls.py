"""Product admin URL patterns (owner-scoped, not the Django admin site)."""

from django.urls import path

from . import views

app_name = "catalog-admin"

urlpatterns = [
    path("add-product", views.AddProductView.as_view(), name="add-product"),
    path("products", views.AdminProductListView.as_view(), name="products"),
    path("edit-product", views.EditProductView.as_view(), name="edit-product-submit"),
    path("edit-product/<str:product_id>", views.EditProductFormView.as_view(), name="edit-product"),
    path("product/<str:product_id>", views.DeleteProductView.as_view(), name="delete-product"),
]
