from __future__ import annotations

from decimal import Decimal

from ninja import Schema


class TotalsOut(Schema):
    currency: str = "EUR"
    subtotal: Decimal
    total_weight: Decimal
    delivery_mode: str
    delivery_fee: Decimal
    vat_rate: Decimal
    vat_amount: Decimal
    total: Decimal


class ClientSnapshotOut(Schema):
    id: int | None = None
    name: str
    email: str = ""
    phone: str = ""
    address: str = ""
    city: str = ""
    postal_code: str = ""
    notes: str = ""


class CartItemOut(Schema):
    id: int
    product_id: int | None = None
    product_name: str
    variant_id: int | None = None
    variant_name: str = ""
    quantity: int
    unit_price: Decimal
    unit_purchase_price: Decimal | None = None
    unit_weight: Decimal
    line_total: Decimal


class CartOut(Schema):
    client: ClientSnapshotOut | None = None
    delivery_mode: str
    items: list[CartItemOut]
    totals: TotalsOut


class CartItemAddIn(Schema):
    product_id: int
    variant_id: int | None = None
    quantity: int = 1


class CartItemUpdateIn(Schema):
    quantity: int


class CartClientIn(Schema):
    client_id: int | None = None


class CartDeliveryModeIn(Schema):
    delivery_mode: str


class OrderCreateIn(Schema):
    notes: str | None = None


class OrderStatusIn(Schema):
    status: str
    payment_method: str | None = None


class OrderLineOut(Schema):
    product_id: int | None = None
    product_name: str
    variant_id: int | None = None
    variant_name: str = ""
    quantity: int
    unit_price: Decimal
    unit_purchase_price: Decimal | None = None
    unit_weight: Decimal
    line_total: Decimal


class OrderOut(Schema):
    id: int
    status: str
    payment_method: str | None = None
    client: ClientSnapshotOut | None = None
    lines: list[OrderLineOut]
    totals: TotalsOut
    notes: str = ""
    created_at: str
    updated_at: str
