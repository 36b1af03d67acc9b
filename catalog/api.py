from __future__ import annotations

from ninja import Router
from ninja.errors import HttpError

from .models import Product
from .schemas import ProductIn, ProductOut, ProductUpdateIn
from .services import (
    CatalogValidationError,
    create_product,
    delete_product,
    get_product,
    search_products,
    update_product,
)

router = Router(tags=["catalog"])


def _product_out(p: Product) -> dict:
    return {
        "id": p.id,
        "name": p.name,
        "description": p.description or "",
        "image": p.image or "",
        "weight": p.weight,
        "purchase_price": p.purchase_price,
        "sale_price": p.sale_price,
        "variants": [
            {
                "id": v.id,
                "name": v.name,
                "sale_price": v.sale_price,
                "purchase_price": v.purchase_price,
                "weight_modifier": v.weight_modifier,
            }
            for v in p.variants.all()
        ],
        "created_at": p.created_at.isoformat(),
        "updated_at": p.updated_at.isoformat(),
    }


@router.get("/products", response=list[ProductOut])
def products(request, q: str | None = None):
    return [_product_out(p) for p in search_products(q)]


@router.post("/products", response={201: ProductOut})
def product_create(request, payload: ProductIn):
    try:
        product = create_product(payload.model_dump())
    except CatalogValidationError as exc:
        raise HttpError(400, str(exc))
    return 201, _product_out(get_product(product.id))


@router.get("/products/{product_id}", response=ProductOut)
def product_detail(request, product_id: int):
    try:
        return _product_out(get_product(product_id))
    except LookupError:
        raise HttpError(404, "Product not found")


@router.put("/products/{product_id}", response=ProductOut)
def product_update(request, product_id: int, payload: ProductUpdateIn):
    try:
        product = update_product(product_id, payload.model_dump(exclude_unset=True))
    except LookupError:
        raise HttpError(404, "Product not found")
    except CatalogValidationError as exc:
        raise HttpError(400, str(exc))
    return _product_out(product)


@router.delete("/products/{product_id}", response={204: None})
def product_delete(request, product_id: int):
    try:
        delete_product(product_id)
    except LookupError:
        raise HttpError(404, "Product not found")
    return 204, None
