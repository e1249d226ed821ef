"""Catalog views: public browsing and the owner's product admin."""

import logging

from django.contrib import messages
from django.http import JsonResponse
from django.shortcuts import redirect, render
from django.views import View
from django.views.generic import TemplateView

from shopfront.core.exceptions import (
    AuthorizationError,
    NotFoundError,
    PersistenceError,
)
from shopfront.core.mixins import OwnerRequiredMixin, ShopLoginRequiredMixin
from shopfront.core.permissions import is_owner

from . import services
from .forms import ProductForm

logger = logging.getLogger(__name__)


class CatalogPageMixin:
    """Paginated product listing driven by the ``page`` query parameter."""

    page_title = ""
    page_path = "/"

    def get_owner(self):
        return None

    def get_context_data(self, **kwargs):
        context = super().get_context_data(**kwargs)
        page = services.list_products(
            page=self.request.GET.get("page", 1),
            owner=self.get_owner(),
        )
        context.update({
            "title": self.page_title,
            "path": self.page_path,
            "products": page.products,
            "pagination": page,
            "current_page": page.current_page,
            "has_next_page": page.has_next_page,
            "has_previous_page": page.has_previous_page,
            "next_page": page.next_page,
            "previous_page": page.previous_page,
            "last_page": page.last_page,
        })
        return context


class IndexView(CatalogPageMixin, TemplateView):
    template_name = "shop/index.html"
    page_title = "Shop"
    page_path = "/"


class ProductListView(CatalogPageMixin, TemplateView):
    template_name = "shop/product_list.html"
    page_title = "All Products"
    page_path = "/products"


class ProductDetailView(TemplateView):
    template_name = "shop/product_detail.html"

    def get_context_data(self, **kwargs):
        context = super().get_context_data(**kwargs)
        product = services.get_product(self.kwargs["product_id"])
        context.update({
            "product": product,
            "title": product.title,
            "path": "/products",
        })
        return context


# =============================================================================
# Product admin (owner only)
# =============================================================================


def render_product_form(request, form, *, editing, product=None, status=200):
    return render(
        request,
        "admin/edit_product.html",
        {
            "title": "Edit Product" if editing else "Add Product",
            "path": "/admin/edit-product" if editing else "/admin/add-product",
            "editing": editing,
            "form": form,
            "product": product,
            "has_error": form.is_bound and bool(form.errors),
        },
        status=status,
    )


class AddProductView(ShopLoginRequiredMixin, View):
    """GET/POST /admin/add-product"""

    def get(self, request):
        return render_product_form(request, ProductForm(), editing=False)

    def post(self, request):
        form = ProductForm(request.POST, request.FILES, editing=False)
        if not form.is_valid():
            return render_product_form(request, form, editing=False, status=422)

        services.create_product(
            owner=request.user,
            title=form.cleaned_data["title"],
            price=form.cleaned_data["price"],
            description=form.cleaned_data["description"],
            image=form.cleaned_data["image"],
        )
        messages.success(request, "Product added.")
        return redirect("/")


class EditProductFormView(OwnerRequiredMixin, View):
    """GET /admin/edit-product/<product_id>?edit=true"""

    def get_owned_object(self):
        return services.get_product(self.kwargs["product_id"])

    def get(self, request, product_id):
        if not request.GET.get("edit"):
            return redirect("/")
        form = ProductForm(
            initial={
                "title": self.object.title,
                "price": self.object.price,
                "description": self.object.description,
            },
            editing=True,
        )
        return render_product_form(request, form, editing=True, product=self.object)


class EditProductView(ShopLoginRequiredMixin, View):
    """POST /admin/edit-product"""

    def post(self, request):
        product_id = request.POST.get("productId", "")
        try:
            product = services.get_product(product_id)
        except NotFoundError:
            return redirect("/")
        if not is_owner(product.owner_id, request.user):
            return redirect("/")

        form = ProductForm(request.POST, request.FILES, editing=True)
        if not form.is_valid():
            return render_product_form(request, form, editing=True, product=product, status=422)

        try:
            services.update_product(
                product,
                request.user,
                title=form.cleaned_data["title"],
                price=form.cleaned_data["price"],
                description=form.cleaned_data["description"],
                image=form.cleaned_data.get("image"),
            )
        except AuthorizationError:
            return redirect("/")

        messages.success(request, "Product updated.")
        return redirect("/admin/products")


class AdminProductListView(ShopLoginRequiredMixin, CatalogPageMixin, TemplateView):
    """GET /admin/products: products owned by the current user."""

    template_name = "admin/products.html"
    page_title = "Admin Products"
    page_path = "/admin/products"

    def get_owner(self):
        return self.request.user


class DeleteProductView(View):
    """DELETE /admin/product/<product_id> -> JSON {message}"""

    http_method_names = ["delete"]

    def delete(self, request, product_id):
        if not request.user.is_authenticated:
            return JsonResponse({"message": "Login required."}, status=401)
        try:
            services.delete_product(product_id, request.user)
        except NotFoundError as e:
            return JsonResponse({"message": e.message}, status=404)
        except AuthorizationError as e:
            return JsonResponse({"message": e.message}, status=403)
        except PersistenceError:
            logger.exception("Deleting product %s failed", product_id)
            return JsonResponse({"message": "Deleting product failed."}, status=500)
        return JsonResponse({"message": "Success!"})
