from __future__ import annotations

from decimal import Decimal

from django.db import models


class DeliveryMode(models.TextChoices):
    COLISSIMO = "colissimo", "Colissimo"
    GLS = "gls", "GLS"


class DeliveryRule(models.Model):
    """Weight tier: shipments of ``delivery_mode`` weighing [min_weight, max_weight) kg cost ``price``."""

    delivery_mode = models.CharField(max_length=20, choices=DeliveryMode.choices)

    # kg; min inclusive, max exclusive
    min_weight = models.DecimalField(max_digits=10, decimal_places=3, default=Decimal("0"))
    max_weight = models.DecimalField(max_digits=10, decimal_places=3)

    price = models.DecimalField(max_digits=12, decimal_places=2, default=Decimal("0.00"))

    # Lookup order of the fee calculator (first match wins)
    sort_order = models.IntegerField(default=0)

    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        ordering = ["sort_order", "id"]
        indexes = [
            models.Index(fields=["delivery_mode", "min_weight"], name="shipping_rule_mode_min_idx"),
        ]
        constraints = [
            models.CheckConstraint(
                condition=models.Q(price__gte=0), name="chk_delivery_rule_price_gte_0"
            ),
        ]

    def __str__(self) -> str:
        return f"{self.delivery_mode} [{self.min_weight}; {self.max_weight}): {self.price}"
