from django.contrib import admin

from .models import Product


@admin.register(Product)
class ProductAdmin(admin.ModelAdmin):
    list_display = ("title", "price", "owner", "created_at")
    list_select_related = ("owner",)
    search_fields = ("title", "description", "owner__email")
    readonly_fields = ("created_at", "updated_at")
