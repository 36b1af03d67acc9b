from __future__ import annotations

import logging
from dataclasses import dataclass
from decimal import Decimal

from django.conf import settings


logger = logging.getLogger(__name__)

HUNDRED = Decimal("100")


@dataclass(frozen=True)
class LinePricing:
    unit_price: Decimal
    unit_purchase_price: Decimal | None
    unit_weight: Decimal


def to_decimal(value) -> Decimal | None:
    if value is None:
        return None
    if isinstance(value, Decimal):
        return value
    # str() keeps 15.9 as Decimal("15.9") instead of the binary float expansion
    return Decimal(str(value))


def resolve_line(*, product, variant=None) -> LinePricing:
    """Resolve the frozen unit pricing of a product (optionally a variant of it).

    A variant fully overrides the product's sale and purchase prices; its weight
    is the product weight scaled by ``weight_modifier``. Inputs are expected to
    be valid already (positive weight and sale price).
    """
    if variant is None:
        return LinePricing(
            unit_price=to_decimal(product.sale_price),
            unit_purchase_price=to_decimal(product.purchase_price),
            unit_weight=to_decimal(product.weight),
        )

    purchase = to_decimal(variant.purchase_price)
    if purchase is None:
        purchase = to_decimal(product.purchase_price)

    return LinePricing(
        unit_price=to_decimal(variant.sale_price),
        unit_purchase_price=purchase,
        unit_weight=to_decimal(product.weight) * to_decimal(variant.weight_modifier),
    )


def effective_vat_rate(*, enabled: bool, rate) -> Decimal:
    if not enabled:
        return Decimal("0")
    return to_decimal(rate)


def compute_vat_amount(*, subtotal: Decimal, vat_rate: Decimal) -> Decimal:
    return to_decimal(subtotal) * (to_decimal(vat_rate) / HUNDRED)


def get_vat_settings():
    from .models import VatSettings

    obj, created = VatSettings.objects.get_or_create(
        code="default",
        defaults={
            "enabled": bool(getattr(settings, "DEFAULT_VAT_ENABLED", False)),
            "rate": Decimal(str(getattr(settings, "DEFAULT_VAT_RATE", "20"))),
        },
    )
    if created:
        logger.info("Created VAT settings from defaults", extra={"enabled": obj.enabled, "rate": str(obj.rate)})
    return obj


def current_vat_rate() -> Decimal:
    vs = get_vat_settings()
    return effective_vat_rate(enabled=vs.enabled, rate=vs.rate)


def update_vat_settings(*, enabled: bool | None = None, rate=None):
    vs = get_vat_settings()
    fields: list[str] = []

    if rate is not None:
        rate_d = to_decimal(rate)
        if rate_d < 0 or rate_d > HUNDRED:
            raise ValueError("VAT rate must be between 0 and 100")
        vs.rate = rate_d
        fields.append("rate")
    if enabled is not None:
        vs.enabled = bool(enabled)
        fields.append("enabled")

    if fields:
        vs.save(update_fields=fields + ["updated_at"])
        logger.info("VAT settings updated", extra={"enabled": vs.enabled, "rate": str(vs.rate)})
    return vs
