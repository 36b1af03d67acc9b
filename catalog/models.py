from __future__ import annotations

from decimal import Decimal

from django.db import models


class Product(models.Model):
    name = models.CharField(max_length=255)
    description = models.TextField(blank=True, default="")
    image = models.CharField(max_length=500, blank=True, default="")

    # kg, > 0
    weight = models.DecimalField(max_digits=10, decimal_places=3)

    # Purchase cost is optional; products without it are left out of profit.
    purchase_price = models.DecimalField(
        max_digits=12,
        decimal_places=2,
        null=True,
        blank=True,
    )
    sale_price = models.DecimalField(max_digits=12, decimal_places=2)

    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        ordering = ["name", "id"]

    def __str__(self) -> str:
        return self.name


class ProductVariant(models.Model):
    product = models.ForeignKey(
        Product, on_delete=models.CASCADE, related_name="variants")
    name = models.CharField(max_length=255)

    # Overrides the product prices (not added to them)
    sale_price = models.DecimalField(max_digits=12, decimal_places=2)
    purchase_price = models.DecimalField(
        max_digits=12,
        decimal_places=2,
        null=True,
        blank=True,
    )
    # Multiplier of the product weight
    weight_modifier = models.DecimalField(
        max_digits=8, decimal_places=3, default=Decimal("1"))

    sort_order = models.IntegerField(default=0)

    class Meta:
        ordering = ["sort_order", "id"]

    def __str__(self) -> str:
        return f"{self.product.name} - {self.name}"
