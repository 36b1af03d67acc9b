from __future__ import annotations

import logging
from dataclasses import dataclass
from decimal import Decimal, InvalidOperation
from typing import Iterable

from django.db import transaction

from pricing.services import to_decimal

from .models import DeliveryMode, DeliveryRule


logger = logging.getLogger(__name__)

ZERO = Decimal("0")


class DeliveryRuleError(ValueError):
    pass


@dataclass(frozen=True)
class DeliveryTier:
    delivery_mode: str
    min_weight: Decimal
    max_weight: Decimal
    price: Decimal


def parse_delivery_mode(value: str) -> str:
    mode = (value or "").strip().lower()
    if mode not in DeliveryMode.values:
        raise ValueError(f"Unknown delivery mode: {value!r}")
    return mode


def compute_fee(*, weight: Decimal, mode: str, rules: Iterable) -> Decimal:
    """Flat delivery price for a shipment of ``weight`` kg sent with ``mode``.

    Rules are scanned in iteration order and the first one whose
    ``[min_weight, max_weight)`` range contains the weight wins, so an
    overlapping (malformed) rule set resolves to its earliest matching tier.
    A weight outside every configured range costs nothing.
    """
    w = to_decimal(weight)
    for r in rules:
        if r.delivery_mode != mode:
            continue
        if to_decimal(r.min_weight) <= w < to_decimal(r.max_weight):
            return to_decimal(r.price)
    return ZERO


def sort_delivery_rules(rules: Iterable) -> list:
    return sorted(rules, key=lambda r: (str(r.delivery_mode), to_decimal(r.min_weight)))


def validate_delivery_rules(rules: Iterable) -> None:
    by_mode: dict[str, list] = {}
    for r in rules:
        if r.delivery_mode not in DeliveryMode.values:
            raise DeliveryRuleError(f"Unknown delivery mode: {r.delivery_mode!r}")
        by_mode.setdefault(r.delivery_mode, []).append(r)

    for mode, mode_rules in by_mode.items():
        ordered = sorted(mode_rules, key=lambda r: to_decimal(r.min_weight))
        prev = None
        for idx, r in enumerate(ordered, start=1):
            min_w = to_decimal(r.min_weight)
            max_w = to_decimal(r.max_weight)
            if min_w < 0:
                raise DeliveryRuleError(f"{mode} rule {idx}: minimum weight cannot be negative")
            if min_w >= max_w:
                raise DeliveryRuleError(f"{mode} rule {idx}: minimum weight must be below maximum weight")
            if to_decimal(r.price) < 0:
                raise DeliveryRuleError(f"{mode} rule {idx}: price cannot be negative")
            # Sorted by min, so checking the neighbour covers every pair.
            if prev is not None and min_w < to_decimal(prev.max_weight):
                raise DeliveryRuleError(f"{mode} rules: overlapping weight ranges")
            prev = r


def get_delivery_rules() -> list[DeliveryRule]:
    return list(DeliveryRule.objects.all().order_by("sort_order", "id"))


def tier_from_values(*, delivery_mode: str, min_weight, max_weight, price) -> DeliveryTier:
    if min_weight is None or max_weight is None or price is None:
        raise DeliveryRuleError("Weights and price are required")
    try:
        return DeliveryTier(
            delivery_mode=(delivery_mode or "").strip().lower(),
            min_weight=to_decimal(min_weight),
            max_weight=to_decimal(max_weight),
            price=to_decimal(price),
        )
    except InvalidOperation:
        raise DeliveryRuleError("Weights and price must be numbers")


def replace_delivery_rules(tiers: Iterable) -> list[DeliveryRule]:
    tiers = list(tiers)
    if not tiers:
        raise DeliveryRuleError("At least one delivery rule is required")

    validate_delivery_rules(tiers)
    ordered = sort_delivery_rules(tiers)

    with transaction.atomic():
        DeliveryRule.objects.all().delete()
        DeliveryRule.objects.bulk_create(
            [
                DeliveryRule(
                    delivery_mode=t.delivery_mode,
                    min_weight=to_decimal(t.min_weight),
                    max_weight=to_decimal(t.max_weight),
                    price=to_decimal(t.price),
                    sort_order=i,
                )
                for i, t in enumerate(ordered)
            ]
        )

    logger.info("Delivery rules replaced", extra={"rule_count": len(ordered)})
    return get_delivery_rules()
