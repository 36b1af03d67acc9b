from __future__ import annotations

from decimal import Decimal

from django.db import models
from django.utils import timezone

from shipping.models import DeliveryMode


class Cart(models.Model):
    # The shop runs a single working cart; code keeps room for more later.
    code = models.SlugField(max_length=50, unique=True, default="default")

    client = models.ForeignKey(
        "clients.Client",
        null=True,
        blank=True,
        on_delete=models.SET_NULL,
        related_name="+",
    )
    delivery_mode = models.CharField(
        max_length=20, choices=DeliveryMode.choices, default=DeliveryMode.COLISSIMO)

    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    def __str__(self) -> str:
        return f"cart:{self.code}"


class CartItem(models.Model):
    cart = models.ForeignKey(
        Cart, on_delete=models.CASCADE, related_name="items")
    product = models.ForeignKey(
        "catalog.Product",
        null=True,
        blank=True,
        on_delete=models.SET_NULL,
        related_name="cart_items",
    )
    variant = models.ForeignKey(
        "catalog.ProductVariant",
        null=True,
        blank=True,
        on_delete=models.SET_NULL,
        related_name="cart_items",
    )

    product_name = models.CharField(max_length=255)
    variant_name = models.CharField(max_length=255, blank=True, default="")

    quantity = models.PositiveIntegerField(default=1)

    # Resolved once when the item is added; later catalogue edits don't touch them.
    unit_price = models.DecimalField(max_digits=12, decimal_places=2)
    unit_purchase_price = models.DecimalField(
        max_digits=12, decimal_places=2, null=True, blank=True)
    unit_weight = models.DecimalField(max_digits=16, decimal_places=6)

    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        ordering = ["id"]
        constraints = [
            models.CheckConstraint(condition=models.Q(
                quantity__gte=1), name="chk_cart_item_quantity_gte_1"),
        ]

    def __str__(self) -> str:
        return f"cart:{self.cart_id} {self.product_name} x{self.quantity}"


class Order(models.Model):
    class Status(models.TextChoices):
        PENDING_VALIDATION = "pending_validation", "Pending validation"
        VALIDATED = "validated", "Validated"
        UNPAID = "unpaid", "Unpaid"
        PAID = "paid", "Paid"
        SHIPPED = "shipped", "Shipped"
        DELIVERED = "delivered", "Delivered"

    class PaymentMethod(models.TextChoices):
        BANK_TRANSFER = "bank_transfer", "Bank transfer"
        CARD = "card", "Card"
        PAYMENT_LINK = "payment_link", "Payment link"
        CASH = "cash", "Cash"

    status = models.CharField(
        max_length=32, choices=Status.choices, default=Status.PENDING_VALIDATION)
    payment_method = models.CharField(
        max_length=32, choices=PaymentMethod.choices, blank=True, default="")

    # Client snapshot (copied from clients.Client when the order is created)
    client_source_id = models.BigIntegerField(null=True, blank=True)
    client_name = models.CharField(max_length=200, blank=True, default="")
    client_email = models.CharField(max_length=254, blank=True, default="")
    client_phone = models.CharField(max_length=32, blank=True, default="")
    client_address = models.CharField(max_length=255, blank=True, default="")
    client_city = models.CharField(max_length=120, blank=True, default="")
    client_postal_code = models.CharField(max_length=32, blank=True, default="")
    client_notes = models.TextField(blank=True, default="")

    delivery_mode = models.CharField(max_length=20, choices=DeliveryMode.choices)

    # Totals are computed once at creation and never recalculated.
    delivery_fee = models.DecimalField(
        max_digits=12, decimal_places=2, default=Decimal("0.00"))
    total_weight = models.DecimalField(
        max_digits=18, decimal_places=6, default=Decimal("0"))
    subtotal = models.DecimalField(
        max_digits=14, decimal_places=2, default=Decimal("0.00"))
    vat_rate = models.DecimalField(
        max_digits=5, decimal_places=2, default=Decimal("0"))
    vat_amount = models.DecimalField(
        max_digits=18, decimal_places=6, default=Decimal("0"))
    total = models.DecimalField(
        max_digits=18, decimal_places=6, default=Decimal("0"))

    notes = models.TextField(blank=True, default="")

    created_at = models.DateTimeField(default=timezone.now)
    updated_at = models.DateTimeField(default=timezone.now)

    class Meta:
        indexes = [
            models.Index(fields=["status", "-created_at"], name="checkout_order_status_idx"),
            models.Index(fields=["-created_at"], name="checkout_order_created_idx"),
        ]
        ordering = ["-created_at", "-id"]

    def __str__(self) -> str:
        return f"order:{self.id} {self.status}"

    @property
    def has_client(self) -> bool:
        return self.client_source_id is not None or bool(self.client_name)


class OrderLine(models.Model):
    order = models.ForeignKey(
        Order, on_delete=models.CASCADE, related_name="lines")
    product = models.ForeignKey(
        "catalog.Product",
        null=True,
        blank=True,
        on_delete=models.SET_NULL,
        related_name="order_lines",
    )
    variant = models.ForeignKey(
        "catalog.ProductVariant",
        null=True,
        blank=True,
        on_delete=models.SET_NULL,
        related_name="order_lines",
    )

    product_name = models.CharField(max_length=255)
    variant_name = models.CharField(max_length=255, blank=True, default="")

    quantity = models.PositiveIntegerField(default=1)
    unit_price = models.DecimalField(max_digits=12, decimal_places=2)
    unit_purchase_price = models.DecimalField(
        max_digits=12, decimal_places=2, null=True, blank=True)
    unit_weight = models.DecimalField(max_digits=16, decimal_places=6)

    class Meta:
        ordering = ["id"]

    def __str__(self) -> str:
        return f"order:{self.order_id} {self.product_name} x{self.quantity}"
