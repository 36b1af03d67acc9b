from __future__ import annotations

import logging
from dataclasses import dataclass
from datetime import datetime
from decimal import Decimal
from typing import Iterable

from django.conf import settings
from django.db import transaction
from django.utils import timezone

from analytics.services import PeriodFilter, matches_period
from catalog.models import Product
from clients.services import get_client
from pricing.services import compute_vat_amount, current_vat_rate, resolve_line, to_decimal
from shipping.models import DeliveryMode
from shipping.services import compute_fee, get_delivery_rules, parse_delivery_mode

from .models import Cart, CartItem, Order, OrderLine


logger = logging.getLogger(__name__)

ZERO = Decimal("0")


class EmptyCartError(ValueError):
    pass


class OrderNotFoundError(LookupError):
    pass


@dataclass(frozen=True)
class CartLine:
    product_id: int | None
    product_name: str
    variant_id: int | None
    variant_name: str
    quantity: int
    unit_price: Decimal
    unit_purchase_price: Decimal | None
    unit_weight: Decimal


@dataclass(frozen=True)
class ClientSnapshot:
    id: int | None
    name: str
    email: str = ""
    phone: str = ""
    address: str = ""
    city: str = ""
    postal_code: str = ""
    notes: str = ""


@dataclass(frozen=True)
class OrderTotals:
    subtotal: Decimal
    total_weight: Decimal
    delivery_mode: str
    delivery_fee: Decimal
    vat_rate: Decimal
    vat_amount: Decimal
    total: Decimal


@dataclass(frozen=True)
class OrderDraft:
    client: ClientSnapshot | None
    lines: tuple[CartLine, ...]
    totals: OrderTotals
    status: str
    notes: str
    created_at: datetime
    updated_at: datetime


@dataclass(frozen=True)
class OrderSnapshot:
    id: int | None
    client: ClientSnapshot | None
    lines: tuple[CartLine, ...]
    delivery_mode: str
    delivery_fee: Decimal
    total_weight: Decimal
    subtotal: Decimal
    vat_rate: Decimal
    vat_amount: Decimal
    total: Decimal
    status: str
    payment_method: str | None
    notes: str
    created_at: datetime
    updated_at: datetime


def parse_status(value: str) -> str:
    status = (value or "").strip()
    if status not in Order.Status.values:
        raise ValueError(f"Unknown order status: {value!r}")
    return status


def parse_payment_method(value: str) -> str:
    method = (value or "").strip()
    if method not in Order.PaymentMethod.values:
        raise ValueError(f"Unknown payment method: {value!r}")
    return method


def default_delivery_mode() -> str:
    return parse_delivery_mode(getattr(settings, "DEFAULT_DELIVERY_MODE", DeliveryMode.COLISSIMO))


# --- pure core ---------------------------------------------------------------


def compute_totals(*, cart: Iterable, rules: Iterable, mode: str, vat_rate: Decimal) -> OrderTotals:
    """Totals of a cart shipped with ``mode``.

    VAT is charged on the product subtotal only, never on the delivery fee.
    No rounding happens here; amounts stay exact Decimals.
    """
    items = list(cart)
    vat_rate_d = to_decimal(vat_rate)

    subtotal = sum((to_decimal(i.unit_price) * int(i.quantity) for i in items), ZERO)
    total_weight = sum((to_decimal(i.unit_weight) * int(i.quantity) for i in items), ZERO)
    delivery_fee = compute_fee(weight=total_weight, mode=mode, rules=rules)
    vat_amount = compute_vat_amount(subtotal=subtotal, vat_rate=vat_rate_d)

    return OrderTotals(
        subtotal=subtotal,
        total_weight=total_weight,
        delivery_mode=mode,
        delivery_fee=delivery_fee,
        vat_rate=vat_rate_d,
        vat_amount=vat_amount,
        total=subtotal + delivery_fee + vat_amount,
    )


def snapshot_line(item) -> CartLine:
    if isinstance(item, CartLine):
        return item
    purchase = item.unit_purchase_price
    return CartLine(
        product_id=getattr(item, "product_id", None),
        product_name=getattr(item, "product_name", "") or "",
        variant_id=getattr(item, "variant_id", None),
        variant_name=getattr(item, "variant_name", "") or "",
        quantity=int(item.quantity),
        unit_price=to_decimal(item.unit_price),
        unit_purchase_price=(to_decimal(purchase) if purchase is not None else None),
        unit_weight=to_decimal(item.unit_weight),
    )


def snapshot_client(client) -> ClientSnapshot | None:
    if client is None or isinstance(client, ClientSnapshot):
        return client
    return ClientSnapshot(
        id=getattr(client, "id", None),
        name=client.name,
        email=getattr(client, "email", "") or "",
        phone=getattr(client, "phone", "") or "",
        address=getattr(client, "address", "") or "",
        city=getattr(client, "city", "") or "",
        postal_code=getattr(client, "postal_code", "") or "",
        notes=getattr(client, "notes", "") or "",
    )


def build_order(
    *,
    cart: Iterable,
    client=None,
    mode: str,
    rules: Iterable,
    vat_rate: Decimal,
    notes: str | None = None,
    now: datetime | None = None,
) -> OrderDraft:
    lines = tuple(snapshot_line(i) for i in cart)
    if not lines:
        raise EmptyCartError("Cart is empty")

    mode = parse_delivery_mode(mode)
    totals = compute_totals(cart=lines, rules=rules, mode=mode, vat_rate=vat_rate)
    now = now or timezone.now()

    return OrderDraft(
        client=snapshot_client(client),
        lines=lines,
        totals=totals,
        status=Order.Status.PENDING_VALIDATION,
        notes=(notes or "").strip(),
        created_at=now,
        updated_at=now,
    )


# --- cart --------------------------------------------------------------------


def get_cart() -> Cart:
    cart, _ = Cart.objects.select_related("client").get_or_create(
        code="default", defaults={"delivery_mode": default_delivery_mode()}
    )
    return cart


def cart_items(cart: Cart) -> list[CartItem]:
    return list(cart.items.all().order_by("id"))


def cart_totals(cart: Cart | None = None) -> OrderTotals:
    cart = cart or get_cart()
    return compute_totals(
        cart=cart_items(cart),
        rules=get_delivery_rules(),
        mode=cart.delivery_mode,
        vat_rate=current_vat_rate(),
    )


def add_to_cart(*, product_id: int, variant_id: int | None = None, quantity: int = 1) -> CartItem:
    quantity = int(quantity)
    if quantity <= 0:
        raise ValueError("quantity must be positive")

    product = Product.objects.filter(id=int(product_id)).first()
    if not product:
        raise LookupError("Product not found")

    variant = None
    if variant_id is not None:
        variant = product.variants.filter(id=int(variant_id)).first()
        if not variant:
            raise LookupError("Variant not found")

    pricing = resolve_line(product=product, variant=variant)
    item = CartItem.objects.create(
        cart=get_cart(),
        product=product,
        variant=variant,
        product_name=product.name,
        variant_name=(variant.name if variant else ""),
        quantity=quantity,
        unit_price=pricing.unit_price,
        unit_purchase_price=pricing.unit_purchase_price,
        unit_weight=pricing.unit_weight,
    )
    logger.info("Cart item added", extra={"product_id": product.id, "variant_id": variant_id, "quantity": quantity})
    return item


def _get_cart_item(item_id: int) -> CartItem:
    item = CartItem.objects.filter(id=int(item_id), cart=get_cart()).first()
    if not item:
        raise LookupError("Cart item not found")
    return item


def update_cart_item(*, item_id: int, quantity: int) -> CartItem | None:
    item = _get_cart_item(item_id)
    quantity = int(quantity)
    if quantity <= 0:
        item.delete()
        return None
    item.quantity = quantity
    item.save(update_fields=["quantity", "updated_at"])
    return item


def remove_cart_item(*, item_id: int) -> None:
    _get_cart_item(item_id).delete()


def _reset_cart(cart: Cart) -> None:
    cart.items.all().delete()
    cart.client = None
    cart.delivery_mode = default_delivery_mode()
    cart.save(update_fields=["client", "delivery_mode", "updated_at"])


def clear_cart() -> Cart:
    cart = get_cart()
    with transaction.atomic():
        _reset_cart(cart)
    return cart


def select_client(*, client_id: int | None) -> Cart:
    cart = get_cart()
    cart.client = get_client(client_id) if client_id is not None else None
    cart.save(update_fields=["client", "updated_at"])
    return cart


def select_delivery_mode(*, mode: str) -> Cart:
    cart = get_cart()
    cart.delivery_mode = parse_delivery_mode(mode)
    cart.save(update_fields=["delivery_mode", "updated_at"])
    return cart


# --- orders ------------------------------------------------------------------


def create_order(*, cart: Cart | None = None, notes: str | None = None) -> Order:
    """Turn the working cart into an order.

    The cart, its selected client and delivery mode, the current delivery
    rules and the effective VAT rate are frozen into the order. On success the
    cart is emptied, the client unselected and the delivery mode reset; an
    empty cart raises EmptyCartError and leaves everything untouched.
    """
    with transaction.atomic():
        cart_id = cart.id if cart is not None else get_cart().id
        cart = Cart.objects.select_for_update().select_related("client").get(id=cart_id)

        draft = build_order(
            cart=cart_items(cart),
            client=cart.client,
            mode=cart.delivery_mode,
            rules=get_delivery_rules(),
            vat_rate=current_vat_rate(),
            notes=notes,
        )

        client = draft.client
        totals = draft.totals
        order = Order.objects.create(
            status=draft.status,
            client_source_id=(client.id if client else None),
            client_name=(client.name if client else ""),
            client_email=(client.email if client else ""),
            client_phone=(client.phone if client else ""),
            client_address=(client.address if client else ""),
            client_city=(client.city if client else ""),
            client_postal_code=(client.postal_code if client else ""),
            client_notes=(client.notes if client else ""),
            delivery_mode=totals.delivery_mode,
            delivery_fee=totals.delivery_fee,
            total_weight=totals.total_weight,
            subtotal=totals.subtotal,
            vat_rate=totals.vat_rate,
            vat_amount=totals.vat_amount,
            total=totals.total,
            notes=draft.notes,
            created_at=draft.created_at,
            updated_at=draft.updated_at,
        )
        OrderLine.objects.bulk_create(
            [
                OrderLine(
                    order=order,
                    product_id=ln.product_id,
                    variant_id=ln.variant_id,
                    product_name=ln.product_name,
                    variant_name=ln.variant_name,
                    quantity=ln.quantity,
                    unit_price=ln.unit_price,
                    unit_purchase_price=ln.unit_purchase_price,
                    unit_weight=ln.unit_weight,
                )
                for ln in draft.lines
            ]
        )

        _reset_cart(cart)

    logger.info(
        "Order created",
        extra={"order_id": order.id, "order_total": str(order.total), "line_count": len(draft.lines)},
    )
    return order


def get_order(order_id: int) -> Order:
    order = Order.objects.prefetch_related("lines").filter(id=int(order_id)).first()
    if not order:
        raise OrderNotFoundError(f"Order {order_id} not found")
    return order


def set_order_status(*, order_id: int, status: str, payment_method: str | None = None) -> Order:
    # Any status may follow any other; the usual flow is only a convention.
    status = parse_status(status)
    method = parse_payment_method(payment_method) if payment_method else None

    order = Order.objects.filter(id=int(order_id)).first()
    if not order:
        raise OrderNotFoundError(f"Order {order_id} not found")

    order.status = status
    fields = ["status", "updated_at"]
    if method is not None:
        order.payment_method = method
        fields.append("payment_method")
    order.updated_at = timezone.now()
    order.save(update_fields=fields)

    logger.info(
        "Order status updated",
        extra={"order_id": order.id, "order_status": order.status, "payment_method": order.payment_method},
    )
    return order


def pending_orders():
    return (
        Order.objects.filter(status=Order.Status.PENDING_VALIDATION)
        .prefetch_related("lines")
        .order_by("created_at", "id")
    )


def order_history(*, status: str | None = None, start=None, end=None) -> list[Order]:
    qs = Order.objects.exclude(status=Order.Status.PENDING_VALIDATION).prefetch_related("lines")
    if status:
        qs = qs.filter(status=parse_status(status))

    pf = PeriodFilter.custom(start, end)
    today = timezone.localdate()
    return [o for o in qs.order_by("-created_at", "-id") if matches_period(o.created_at, pf, today=today)]


def order_client_snapshot(order: Order) -> ClientSnapshot | None:
    if not order.has_client:
        return None
    return ClientSnapshot(
        id=order.client_source_id,
        name=order.client_name,
        email=order.client_email,
        phone=order.client_phone,
        address=order.client_address,
        city=order.client_city,
        postal_code=order.client_postal_code,
        notes=order.client_notes,
    )


def order_snapshot(order: Order) -> OrderSnapshot:
    return OrderSnapshot(
        id=order.id,
        client=order_client_snapshot(order),
        lines=tuple(snapshot_line(ln) for ln in order.lines.all()),
        delivery_mode=order.delivery_mode,
        delivery_fee=order.delivery_fee,
        total_weight=order.total_weight,
        subtotal=order.subtotal,
        vat_rate=order.vat_rate,
        vat_amount=order.vat_amount,
        total=order.total,
        status=order.status,
        payment_method=(order.payment_method or None),
        notes=order.notes or "",
        created_at=order.created_at,
        updated_at=order.updated_at,
    )


def all_order_snapshots() -> list[OrderSnapshot]:
    return [order_snapshot(o) for o in Order.objects.prefetch_related("lines").order_by("created_at", "id")]
