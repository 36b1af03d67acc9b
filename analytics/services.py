from __future__ import annotations

import logging
from dataclasses import asdict, dataclass
from datetime import date, datetime
from decimal import Decimal
from typing import Any, Iterable

from django.utils import timezone
from django.utils.dateparse import parse_date, parse_datetime

from checkout.models import Order
from pricing.services import to_decimal
from shipping.models import DeliveryMode


logger = logging.getLogger(__name__)

ZERO = Decimal("0")

PERIOD_ALL = "all"
PERIOD_CURRENT_MONTH = "current_month"
PERIOD_CURRENT_YEAR = "current_year"
PERIOD_CUSTOM = "custom"
PERIODS = (PERIOD_ALL, PERIOD_CURRENT_MONTH, PERIOD_CURRENT_YEAR, PERIOD_CUSTOM)


@dataclass(frozen=True)
class PeriodFilter:
    period: str = PERIOD_ALL
    start: Any = None
    end: Any = None

    def __post_init__(self):
        if self.period not in PERIODS:
            raise ValueError(f"Unknown period: {self.period!r}")

    @classmethod
    def custom(cls, start, end) -> "PeriodFilter":
        return cls(period=PERIOD_CUSTOM, start=start, end=end)


@dataclass
class Bucket:
    count: int = 0
    value: Decimal = ZERO


@dataclass(frozen=True)
class DashboardStats:
    order_count: int
    products_with_purchase_price: Decimal
    products_without_purchase_price: Decimal
    total_profit: Decimal
    total_vat_collected: Decimal
    delivery_revenue_by_mode: dict[str, Decimal]
    orders_by_status: dict[str, Bucket]
    orders_by_payment_method: dict[str, Bucket]
    orders_by_delivery_mode: dict[str, Bucket]

    def as_dict(self) -> dict:
        return asdict(self)


def parse_bound(value) -> date | None:
    """Parse a filter bound; ``None`` when missing or unparsable."""
    if value is None:
        return None
    if isinstance(value, datetime):
        return _local_date(value)
    if isinstance(value, date):
        return value

    text = str(value).strip()
    if not text:
        return None
    try:
        d = parse_date(text)
        if d is not None:
            return d
        dt = parse_datetime(text)
    except ValueError:
        # Well-formed but impossible, e.g. 2024-02-31
        return None
    return _local_date(dt) if dt is not None else None


def _local_date(dt: datetime) -> date:
    if timezone.is_aware(dt):
        return timezone.localtime(dt).date()
    return dt.date()


def matches_period(created_at, period_filter: PeriodFilter, *, today: date) -> bool:
    if period_filter.period == PERIOD_ALL:
        return True

    d = parse_bound(created_at)
    if d is None:
        # Unreadable creation date: kept, like an unreadable range bound.
        return True

    if period_filter.period == PERIOD_CURRENT_MONTH:
        return d.year == today.year and d.month == today.month
    if period_filter.period == PERIOD_CURRENT_YEAR:
        return d.year == today.year

    # Custom range: a missing, unparsable or inverted bound includes the order.
    start = parse_bound(period_filter.start)
    end = parse_bound(period_filter.end)
    if start is None or end is None or start > end:
        return True
    return start <= d <= end


def filter_orders(orders: Iterable, period_filter: PeriodFilter | None = None, *, now: datetime | None = None) -> list:
    pf = period_filter or PeriodFilter()
    today = _local_date(now or timezone.now())
    return [o for o in orders if matches_period(o.created_at, pf, today=today)]


def empty_buckets(keys: Iterable[str]) -> dict[str, Bucket]:
    return {k: Bucket() for k in keys}


def aggregate(orders: Iterable, period_filter: PeriodFilter | None = None, *, now: datetime | None = None) -> DashboardStats:
    """Reduce orders falling in the period into dashboard figures.

    Orders are read through attributes only (``status``, ``payment_method``,
    ``delivery_mode``, ``total``, ``delivery_fee``, ``vat_amount``,
    ``created_at`` and ``lines`` with ``unit_price``, ``unit_purchase_price``
    and ``quantity``), so snapshots and plain records both work.

    Every status, payment method and delivery mode key is present in the
    result, zeroed when no order falls into it. Profit only counts lines whose
    purchase price is known; an order without payment method is left out of
    the payment breakdown.
    """
    selected = filter_orders(orders, period_filter, now=now)

    with_purchase = ZERO
    without_purchase = ZERO
    profit = ZERO
    vat_collected = ZERO
    delivery_revenue = {m: ZERO for m in DeliveryMode.values}
    by_status = empty_buckets(Order.Status.values)
    by_payment = empty_buckets(Order.PaymentMethod.values)
    by_mode = empty_buckets(DeliveryMode.values)

    for o in selected:
        total = to_decimal(o.total)

        bucket = by_status.get(o.status)
        if bucket is None:
            logger.warning("Order with unknown status skipped from breakdown", extra={"order_status": o.status})
        else:
            bucket.count += 1
            bucket.value += total

        if o.payment_method:
            bucket = by_payment.get(o.payment_method)
            if bucket is not None:
                bucket.count += 1
                bucket.value += total

        bucket = by_mode.get(o.delivery_mode)
        if bucket is not None:
            bucket.count += 1
            bucket.value += total
            delivery_revenue[o.delivery_mode] += to_decimal(o.delivery_fee)

        vat_collected += to_decimal(o.vat_amount)

        for ln in o.lines:
            line_total = to_decimal(ln.unit_price) * int(ln.quantity)
            if ln.unit_purchase_price is None:
                without_purchase += line_total
            else:
                with_purchase += line_total
                profit += (to_decimal(ln.unit_price) - to_decimal(ln.unit_purchase_price)) * int(ln.quantity)

    return DashboardStats(
        order_count=len(selected),
        products_with_purchase_price=with_purchase,
        products_without_purchase_price=without_purchase,
        total_profit=profit,
        total_vat_collected=vat_collected,
        delivery_revenue_by_mode=delivery_revenue,
        orders_by_status=by_status,
        orders_by_payment_method=by_payment,
        orders_by_delivery_mode=by_mode,
    )
