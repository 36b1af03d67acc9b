from __future__ import annotations

import logging
from decimal import Decimal, InvalidOperation
from typing import Any, Iterable

from django.db import transaction
from django.db.models import Q

from .models import Product, ProductVariant


logger = logging.getLogger(__name__)


class CatalogValidationError(ValueError):
    pass


def _decimal_or_none(value: Any, *, model, field: str) -> Decimal | None:
    """Parse a value bound for a DecimalField of ``model``.

    Values the column cannot store exactly are rejected rather than rounded
    on save.
    """
    if value is None or value == "":
        return None
    try:
        d = Decimal(str(value))
    except InvalidOperation:
        raise CatalogValidationError(f"{field} must be a number")
    if not d.is_finite():
        raise CatalogValidationError(f"{field} must be a number")

    column = model._meta.get_field(field)
    if d and d.adjusted() >= column.max_digits - column.decimal_places:
        raise CatalogValidationError(f"{field} is too large")
    stored = d.quantize(Decimal(1).scaleb(-column.decimal_places))
    if stored != d:
        raise CatalogValidationError(f"{field} allows at most {column.decimal_places} decimal places")
    return stored


def _require_positive(value: Decimal | None, *, field: str) -> Decimal:
    if value is None or value <= 0:
        raise CatalogValidationError(f"{field} must be greater than zero")
    return value


def _optional_non_negative(value: Decimal | None, *, field: str) -> Decimal | None:
    if value is not None and value < 0:
        raise CatalogValidationError(f"{field} cannot be negative")
    return value


def clean_variant(data: dict) -> dict:
    name = (data.get("name") or "").strip()
    if not name:
        raise CatalogValidationError("Variant name is required")
    return {
        "name": name,
        "sale_price": _require_positive(
            _decimal_or_none(data.get("sale_price"), model=ProductVariant, field="sale_price"), field="Variant sale_price"
        ),
        "purchase_price": _optional_non_negative(
            _decimal_or_none(data.get("purchase_price"), model=ProductVariant, field="purchase_price"), field="Variant purchase_price"
        ),
        "weight_modifier": _require_positive(
            _decimal_or_none(data.get("weight_modifier", 1), model=ProductVariant, field="weight_modifier"), field="weight_modifier"
        ),
    }


def clean_product(data: dict, *, partial: bool = False) -> dict:
    """Validate product fields at the edit boundary.

    With ``partial`` only the keys present in ``data`` are checked, mirroring a
    PATCH-style update. Returns the normalized values.
    """
    out: dict[str, Any] = {}

    if not partial or "name" in data:
        name = (data.get("name") or "").strip()
        if not name:
            raise CatalogValidationError("Product name is required")
        out["name"] = name

    if not partial or "description" in data:
        description = (data.get("description") or "").strip()
        if not description:
            raise CatalogValidationError("Product description is required")
        out["description"] = description

    if not partial or "image" in data:
        out["image"] = (data.get("image") or "").strip()

    if not partial or "weight" in data:
        out["weight"] = _require_positive(
            _decimal_or_none(data.get("weight"), model=Product, field="weight"), field="weight"
        )

    if not partial or "sale_price" in data:
        out["sale_price"] = _require_positive(
            _decimal_or_none(data.get("sale_price"), model=Product, field="sale_price"), field="sale_price"
        )

    if not partial or "purchase_price" in data:
        out["purchase_price"] = _optional_non_negative(
            _decimal_or_none(data.get("purchase_price"), model=Product, field="purchase_price"), field="purchase_price"
        )

    if data.get("variants") is not None:
        out["variants"] = [clean_variant(v) for v in data["variants"]]

    return out


def _replace_variants(product: Product, variants: Iterable[dict]) -> None:
    product.variants.all().delete()
    ProductVariant.objects.bulk_create(
        [ProductVariant(product=product, sort_order=i, **v) for i, v in enumerate(variants)]
    )


def create_product(data: dict) -> Product:
    cleaned = clean_product(data)
    variants = cleaned.pop("variants", [])

    with transaction.atomic():
        product = Product.objects.create(**cleaned)
        if variants:
            _replace_variants(product, variants)

    logger.info("Product created", extra={"product_id": product.id})
    return product


def get_product(product_id: int) -> Product:
    product = Product.objects.prefetch_related("variants").filter(id=int(product_id)).first()
    if not product:
        raise LookupError("Product not found")
    return product


def update_product(product_id: int, data: dict) -> Product:
    product = get_product(product_id)
    cleaned = clean_product(data, partial=True)
    variants = cleaned.pop("variants", None)

    with transaction.atomic():
        for field, value in cleaned.items():
            setattr(product, field, value)
        product.save()
        if variants is not None:
            _replace_variants(product, variants)

    logger.info("Product updated", extra={"product_id": product.id})
    return get_product(product.id)


def delete_product(product_id: int) -> None:
    deleted, _ = Product.objects.filter(id=int(product_id)).delete()
    if not deleted:
        raise LookupError("Product not found")
    logger.info("Product deleted", extra={"product_id": int(product_id)})


def search_products(q: str | None = None):
    qs = Product.objects.prefetch_related("variants").order_by("name", "id")
    q = (q or "").strip()
    if q:
        qs = qs.filter(Q(name__icontains=q) | Q(description__icontains=q))
    return qs
