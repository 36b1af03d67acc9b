from __future__ import annotations

from django.conf import settings
from ninja import Router
from ninja.errors import HttpError

from .models import Order
from .schemas import (
    CartClientIn,
    CartDeliveryModeIn,
    CartItemAddIn,
    CartItemUpdateIn,
    CartOut,
    OrderCreateIn,
    OrderOut,
    OrderStatusIn,
)
from .services import (
    EmptyCartError,
    OrderNotFoundError,
    add_to_cart,
    cart_items,
    cart_totals,
    clear_cart,
    create_order,
    get_cart,
    get_order,
    order_history,
    order_snapshot,
    parse_status,
    pending_orders,
    remove_cart_item,
    select_client,
    select_delivery_mode,
    set_order_status,
    snapshot_client,
    update_cart_item,
)


router = Router(tags=["checkout"])


def _currency() -> str:
    return getattr(settings, "CURRENCY", "EUR")


def _client_out(c) -> dict | None:
    if c is None:
        return None
    return {
        "id": c.id,
        "name": c.name,
        "email": c.email,
        "phone": c.phone,
        "address": c.address,
        "city": c.city,
        "postal_code": c.postal_code,
        "notes": c.notes,
    }


def _totals_out(t) -> dict:
    return {
        "currency": _currency(),
        "subtotal": t.subtotal,
        "total_weight": t.total_weight,
        "delivery_mode": t.delivery_mode,
        "delivery_fee": t.delivery_fee,
        "vat_rate": t.vat_rate,
        "vat_amount": t.vat_amount,
        "total": t.total,
    }


def _line_out(ln) -> dict:
    return {
        "product_id": ln.product_id,
        "product_name": ln.product_name,
        "variant_id": ln.variant_id,
        "variant_name": ln.variant_name or "",
        "quantity": ln.quantity,
        "unit_price": ln.unit_price,
        "unit_purchase_price": ln.unit_purchase_price,
        "unit_weight": ln.unit_weight,
        "line_total": ln.unit_price * ln.quantity,
    }


def _cart_out() -> dict:
    cart = get_cart()
    items = cart_items(cart)
    return {
        "client": _client_out(snapshot_client(cart.client)),
        "delivery_mode": cart.delivery_mode,
        "items": [{"id": i.id, **_line_out(i)} for i in items],
        "totals": _totals_out(cart_totals(cart)),
    }


def _order_out(order: Order) -> dict:
    snap = order_snapshot(order)
    return {
        "id": snap.id,
        "status": snap.status,
        "payment_method": snap.payment_method,
        "client": _client_out(snap.client),
        "lines": [_line_out(ln) for ln in snap.lines],
        "totals": {
            "currency": _currency(),
            "subtotal": snap.subtotal,
            "total_weight": snap.total_weight,
            "delivery_mode": snap.delivery_mode,
            "delivery_fee": snap.delivery_fee,
            "vat_rate": snap.vat_rate,
            "vat_amount": snap.vat_amount,
            "total": snap.total,
        },
        "notes": snap.notes,
        "created_at": snap.created_at.isoformat(),
        "updated_at": snap.updated_at.isoformat(),
    }


@router.get("/cart", response=CartOut)
def cart_get(request):
    return _cart_out()


@router.delete("/cart", response=CartOut)
def cart_clear(request):
    clear_cart()
    return _cart_out()


@router.post("/cart/items", response={201: CartOut})
def cart_add_item(request, payload: CartItemAddIn):
    try:
        add_to_cart(product_id=payload.product_id, variant_id=payload.variant_id, quantity=payload.quantity)
    except LookupError as exc:
        raise HttpError(404, str(exc))
    except ValueError as exc:
        raise HttpError(400, str(exc))
    return 201, _cart_out()


@router.patch("/cart/items/{item_id}", response=CartOut)
def cart_update_item(request, item_id: int, payload: CartItemUpdateIn):
    try:
        update_cart_item(item_id=item_id, quantity=payload.quantity)
    except LookupError:
        raise HttpError(404, "Cart item not found")
    return _cart_out()


@router.delete("/cart/items/{item_id}", response=CartOut)
def cart_remove_item(request, item_id: int):
    try:
        remove_cart_item(item_id=item_id)
    except LookupError:
        raise HttpError(404, "Cart item not found")
    return _cart_out()


@router.put("/cart/client", response=CartOut)
def cart_set_client(request, payload: CartClientIn):
    try:
        select_client(client_id=payload.client_id)
    except LookupError:
        raise HttpError(404, "Client not found")
    return _cart_out()


@router.put("/cart/delivery-mode", response=CartOut)
def cart_set_delivery_mode(request, payload: CartDeliveryModeIn):
    try:
        select_delivery_mode(mode=payload.delivery_mode)
    except ValueError as exc:
        raise HttpError(400, str(exc))
    return _cart_out()


@router.post("/orders", response={201: OrderOut})
def order_create(request, payload: OrderCreateIn):
    try:
        order = create_order(notes=payload.notes)
    except EmptyCartError as exc:
        raise HttpError(400, str(exc))
    return 201, _order_out(get_order(order.id))


@router.get("/orders", response=list[OrderOut])
def orders(request, status: str | None = None):
    qs = Order.objects.prefetch_related("lines").order_by("-created_at", "-id")
    if status:
        try:
            qs = qs.filter(status=parse_status(status))
        except ValueError as exc:
            raise HttpError(400, str(exc))
    return [_order_out(o) for o in qs]


@router.get("/orders/pending", response=list[OrderOut])
def orders_pending(request):
    return [_order_out(o) for o in pending_orders()]


@router.get("/orders/history", response=list[OrderOut])
def orders_history(request, status: str | None = None, start: str | None = None, end: str | None = None):
    try:
        rows = order_history(status=status, start=start, end=end)
    except ValueError as exc:
        raise HttpError(400, str(exc))
    return [_order_out(o) for o in rows]


@router.get("/orders/{order_id}", response=OrderOut)
def order_detail(request, order_id: int):
    try:
        return _order_out(get_order(order_id))
    except OrderNotFoundError:
        raise HttpError(404, "Order not found")


@router.post("/orders/{order_id}/status", response=OrderOut)
def order_set_status(request, order_id: int, payload: OrderStatusIn):
    try:
        set_order_status(order_id=order_id, status=payload.status, payment_method=payload.payment_method)
    except OrderNotFoundError:
        raise HttpError(404, "Order not found")
    except ValueError as exc:
        raise HttpError(400, str(exc))
    return _order_out(get_order(order_id))
