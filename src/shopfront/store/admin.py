from django.contrib import admin

from .models import CartItem, Order, OrderItem


class OrderItemInline(admin.TabularInline):
    model = OrderItem
    extra = 0
    can_delete = False
    readonly_fields = ("position", "product_id", "title", "price", "quantity", "description", "image_url")

    def has_add_permission(self, request, obj=None):
        return False


@admin.register(Order)
class OrderAdmin(admin.ModelAdmin):
    """Orders are immutable; the admin only shows them."""

    list_display = ("id", "user_email", "created_at")
    search_fields = ("id", "user_email", "stripe_session_id")
    readonly_fields = ("id", "user", "user_email", "stripe_session_id", "created_at")
    inlines = [OrderItemInline]

    def has_add_permission(self, request):
        return False

    def has_change_permission(self, request, obj=None):
        return False

    def has_delete_permission(self, request, obj=None):
        return False


@admin.register(CartItem)
class CartItemAdmin(admin.ModelAdmin):
    list_display = ("user", "product_id", "quantity", "added_at")
    list_select_related = ("user",)
    search_fields = ("user__email",)
