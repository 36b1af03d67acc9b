"""Tests for the dashboard aggregator."""

from datetime import date, datetime, timezone
from decimal import Decimal
from types import SimpleNamespace

import pytest

from analytics.services import PeriodFilter, aggregate, matches_period, parse_bound
from tests.helpers import line, order

NOW = datetime(2024, 6, 15, 12, 0, tzinfo=timezone.utc)


@pytest.fixture
def orders():
    return [
        order(
            created_at=datetime(2024, 6, 3, 9, 0, tzinfo=timezone.utc),
            total="43.16",
            delivery_fee="5",
            vat_amount="6.36",
            status="paid",
            payment_method="card",
            delivery_mode="colissimo",
            lines=[line("15.90", 2, "0.5", unit_purchase_price="8.50")],
        ),
        order(
            created_at=datetime(2024, 2, 10, 9, 0, tzinfo=timezone.utc),
            total="18.50",
            delivery_fee="6",
            status="pending_validation",
            delivery_mode="gls",
            lines=[line("12.50", 1, "0.25")],
        ),
        order(
            created_at=datetime(2023, 11, 20, 9, 0, tzinfo=timezone.utc),
            total="32.90",
            delivery_fee="8",
            status="delivered",
            payment_method="bank_transfer",
            delivery_mode="colissimo",
            lines=[line("24.90", 1, "0.1", unit_purchase_price="12.00")],
        ),
    ]


class TestAggregate:
    """Test dashboard figures."""

    def test_zero_orders_has_every_key(self):
        stats = aggregate([], PeriodFilter(), now=NOW)
        assert stats.order_count == 0
        assert set(stats.orders_by_status) == {
            "pending_validation",
            "validated",
            "unpaid",
            "paid",
            "shipped",
            "delivered",
        }
        assert set(stats.orders_by_payment_method) == {"bank_transfer", "card", "payment_link", "cash"}
        assert set(stats.orders_by_delivery_mode) == {"colissimo", "gls"}
        assert set(stats.delivery_revenue_by_mode) == {"colissimo", "gls"}
        assert all(b.count == 0 and b.value == 0 for b in stats.orders_by_status.values())
        assert stats.total_profit == 0

    def test_all_period(self, orders):
        stats = aggregate(orders, PeriodFilter(), now=NOW)
        assert stats.order_count == 3
        assert stats.products_with_purchase_price == Decimal("56.70")
        assert stats.products_without_purchase_price == Decimal("12.50")
        assert stats.total_profit == Decimal("27.70")
        assert stats.total_vat_collected == Decimal("6.36")
        assert stats.delivery_revenue_by_mode == {"colissimo": Decimal("13"), "gls": Decimal("6")}

    def test_breakdowns(self, orders):
        stats = aggregate(orders, now=NOW)
        assert stats.orders_by_status["paid"].count == 1
        assert stats.orders_by_status["paid"].value == Decimal("43.16")
        assert stats.orders_by_delivery_mode["colissimo"].count == 2
        assert stats.orders_by_delivery_mode["colissimo"].value == Decimal("76.06")

    def test_order_without_payment_method_counts_nowhere(self, orders):
        stats = aggregate(orders, now=NOW)
        assert sum(b.count for b in stats.orders_by_payment_method.values()) == 2

    def test_current_month(self, orders):
        stats = aggregate(orders, PeriodFilter(period="current_month"), now=NOW)
        assert stats.order_count == 1
        assert stats.total_profit == Decimal("14.80")

    def test_current_year(self, orders):
        assert aggregate(orders, PeriodFilter(period="current_year"), now=NOW).order_count == 2

    def test_custom_range_is_inclusive(self, orders):
        pf = PeriodFilter.custom("2024-02-10", "2024-06-03")
        assert aggregate(orders, pf, now=NOW).order_count == 2

    def test_custom_unparsable_start_includes_all(self, orders):
        pf = PeriodFilter.custom("not a date", "2024-01-01")
        assert aggregate(orders, pf, now=NOW).order_count == 3

    def test_custom_missing_or_inverted_bound_includes_all(self, orders):
        assert aggregate(orders, PeriodFilter.custom(None, "2024-01-01"), now=NOW).order_count == 3
        assert aggregate(orders, PeriodFilter.custom("2024-12-31", "2024-01-01"), now=NOW).order_count == 3

    def test_unknown_period(self):
        with pytest.raises(ValueError):
            PeriodFilter(period="last_week")

    def test_as_dict(self, orders):
        data = aggregate(orders, now=NOW).as_dict()
        assert data["orders_by_status"]["paid"] == {"count": 1, "value": Decimal("43.16")}


class TestPeriodHelpers:
    """Test period bound parsing."""

    def test_parse_bound(self):
        assert parse_bound("2024-02-29") == date(2024, 2, 29)
        assert parse_bound("2024-02-31") is None
        assert parse_bound("") is None
        assert parse_bound(None) is None

    def test_matches_custom_day(self):
        pf = PeriodFilter.custom("2024-06-03", "2024-06-03")
        assert matches_period(date(2024, 6, 3), pf, today=NOW.date())
        assert not matches_period(date(2024, 6, 4), pf, today=NOW.date())


class TestPlainNumberOrders:
    """Test aggregation over orders holding float values."""

    def test_float_amounts_are_exact(self):
        orders = [
            SimpleNamespace(
                created_at=NOW,
                total=43.16,
                delivery_fee=5.0,
                vat_amount=6.36,
                status="paid",
                payment_method="card",
                delivery_mode="colissimo",
                lines=[SimpleNamespace(unit_price=15.90, unit_purchase_price=8.50, quantity=2)],
            )
        ]
        stats = aggregate(orders, now=NOW)
        assert stats.total_profit == Decimal("14.80")
        assert stats.products_with_purchase_price == Decimal("31.80")
        assert stats.total_vat_collected == Decimal("6.36")
        assert stats.orders_by_status["paid"].value == Decimal("43.16")


class TestUnreadableCreationDate:
    """Test orders whose creation date cannot be read."""

    @pytest.mark.parametrize("period", ["current_month", "current_year", "custom"])
    def test_included(self, period):
        pf = PeriodFilter(period=period, start="2024-06-01", end="2024-06-30")
        assert matches_period("not a date", pf, today=NOW.date())
        assert matches_period(None, pf, today=NOW.date())

    def test_iso_string_is_read(self):
        pf = PeriodFilter(period="current_month")
        assert matches_period("2024-06-03T09:00:00+00:00", pf, today=NOW.date())
        assert not matches_period("2023-06-03", pf, today=NOW.date())

    def test_aggregate_counts_it(self):
        orders = [order(created_at="garbage", total="10", status="paid")]
        stats = aggregate(orders, PeriodFilter(period="current_year"), now=NOW)
        assert stats.order_count == 1
        assert stats.orders_by_status["paid"].count == 1
