from __future__ import annotations

from decimal import Decimal

from ninja import Schema


class VariantIn(Schema):
    name: str
    sale_price: Decimal
    purchase_price: Decimal | None = None
    weight_modifier: Decimal = Decimal("1")


class VariantOut(Schema):
    id: int
    name: str
    sale_price: Decimal
    purchase_price: Decimal | None = None
    weight_modifier: Decimal


class ProductIn(Schema):
    name: str
    description: str
    image: str = ""
    weight: Decimal
    purchase_price: Decimal | None = None
    sale_price: Decimal
    variants: list[VariantIn] = []


class ProductUpdateIn(Schema):
    name: str | None = None
    description: str | None = None
    image: str | None = None
    weight: Decimal | None = None
    purchase_price: Decimal | None = None
    sale_price: Decimal | None = None
    variants: list[VariantIn] | None = None


class ProductOut(Schema):
    id: int
    name: str
    description: str
    image: str = ""
    weight: Decimal
    purchase_price: Decimal | None = None
    sale_price: Decimal
    variants: list[VariantOut]
    created_at: str
    updated_at: str
