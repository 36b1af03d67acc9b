from __future__ import annotations

from decimal import Decimal

from ninja import Schema


class DeliveryRuleIn(Schema):
    delivery_mode: str
    min_weight: Decimal
    max_weight: Decimal
    price: Decimal


class DeliveryRuleOut(Schema):
    id: int
    delivery_mode: str
    min_weight: Decimal
    max_weight: Decimal
    price: Decimal


class DeliveryQuoteOut(Schema):
    delivery_mode: str
    weight: Decimal
    price: Decimal
