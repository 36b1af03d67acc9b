"""Plain record builders for tests that need no database."""

from datetime import datetime
from decimal import Decimal
from types import SimpleNamespace


def rule(mode, min_weight, max_weight, price):
    return SimpleNamespace(
        delivery_mode=mode,
        min_weight=Decimal(str(min_weight)),
        max_weight=Decimal(str(max_weight)),
        price=Decimal(str(price)),
    )


def line(unit_price, quantity, unit_weight, unit_purchase_price=None, name="Item"):
    return SimpleNamespace(
        product_id=None,
        product_name=name,
        variant_id=None,
        variant_name="",
        quantity=quantity,
        unit_price=Decimal(str(unit_price)),
        unit_purchase_price=(Decimal(str(unit_purchase_price)) if unit_purchase_price is not None else None),
        unit_weight=Decimal(str(unit_weight)),
    )


def order(
    *,
    created_at: datetime,
    total="0",
    delivery_fee="0",
    vat_amount="0",
    status="pending_validation",
    payment_method=None,
    delivery_mode="colissimo",
    lines=(),
):
    return SimpleNamespace(
        created_at=created_at,
        total=Decimal(str(total)),
        delivery_fee=Decimal(str(delivery_fee)),
        vat_amount=Decimal(str(vat_amount)),
        status=status,
        payment_method=payment_method,
        delivery_mode=delivery_mode,
        lines=tuple(lines),
    )
