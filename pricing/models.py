from __future__ import annotations

from decimal import Decimal

from django.db import models


class VatSettings(models.Model):
    # Single row keyed by code; read through pricing.services.get_vat_settings().
    code = models.SlugField(max_length=50, unique=True, default="default")

    enabled = models.BooleanField(default=False)
    # Percent, e.g. 20 for 20%
    rate = models.DecimalField(max_digits=5, decimal_places=2, default=Decimal("20"))

    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        verbose_name = "VAT settings"
        verbose_name_plural = "VAT settings"

    def __str__(self) -> str:
        state = "on" if self.enabled else "off"
        return f"VAT {self.rate}% ({state})"
