from __future__ import annotations

from django.contrib import admin, messages

from .models import Cart, CartItem, Order, OrderLine
from .services import set_order_status


class CartItemInline(admin.TabularInline):
    model = CartItem
    extra = 0
    readonly_fields = ("unit_price", "unit_purchase_price", "unit_weight")


@admin.register(Cart)
class CartAdmin(admin.ModelAdmin):
    list_display = ("id", "code", "client", "delivery_mode", "updated_at")
    inlines = (CartItemInline,)


class OrderLineInline(admin.TabularInline):
    model = OrderLine
    extra = 0
    can_delete = False
    fields = (
        "product",
        "variant",
        "product_name",
        "variant_name",
        "quantity",
        "unit_price",
        "unit_purchase_price",
        "unit_weight",
    )
    readonly_fields = fields

    def has_add_permission(self, request, obj=None):
        return False


@admin.register(Order)
class OrderAdmin(admin.ModelAdmin):
    list_display = ("id", "client_name", "status", "payment_method", "delivery_mode", "total", "created_at")
    list_filter = ("status", "payment_method", "delivery_mode")
    search_fields = ("client_name", "client_email", "client_city")
    date_hierarchy = "created_at"
    inlines = (OrderLineInline,)

    # Totals and the client snapshot are frozen when the order is created.
    readonly_fields = (
        "client_source_id",
        "client_name",
        "client_email",
        "client_phone",
        "client_address",
        "client_city",
        "client_postal_code",
        "client_notes",
        "delivery_mode",
        "delivery_fee",
        "total_weight",
        "subtotal",
        "vat_rate",
        "vat_amount",
        "total",
        "created_at",
        "updated_at",
    )

    actions = ("mark_validated", "mark_paid", "mark_shipped", "mark_delivered")

    def _set_status(self, request, queryset, status: str) -> None:
        for o in queryset:
            set_order_status(order_id=o.id, status=status)
        self.message_user(request, f"{queryset.count()} order(s) updated.", level=messages.SUCCESS)

    @admin.action(description="Mark selected orders as validated")
    def mark_validated(self, request, queryset):
        self._set_status(request, queryset, Order.Status.VALIDATED)

    @admin.action(description="Mark selected orders as paid")
    def mark_paid(self, request, queryset):
        self._set_status(request, queryset, Order.Status.PAID)

    @admin.action(description="Mark selected orders as shipped")
    def mark_shipped(self, request, queryset):
        self._set_status(request, queryset, Order.Status.SHIPPED)

    @admin.action(description="Mark selected orders as delivered")
    def mark_delivered(self, request, queryset):
        self._set_status(request, queryset, Order.Status.DELIVERED)
