from __future__ import annotations

from decimal import Decimal

from ninja import Schema


class BucketOut(Schema):
    count: int
    value: Decimal


class DashboardOut(Schema):
    currency: str = "EUR"
    period: str
    order_count: int
    products_with_purchase_price: Decimal
    products_without_purchase_price: Decimal
    total_profit: Decimal
    total_vat_collected: Decimal
    delivery_revenue_by_mode: dict[str, Decimal]
    orders_by_status: dict[str, BucketOut]
    orders_by_payment_method: dict[str, BucketOut]
    orders_by_delivery_mode: dict[str, BucketOut]
