from __future__ import annotations

import json

from django.core.management.base import BaseCommand, CommandError
from django.core.serializers.json import DjangoJSONEncoder

from analytics.services import PERIOD_ALL, PERIODS, PeriodFilter, aggregate
from checkout.services import all_order_snapshots


class Command(BaseCommand):
    help = "Print dashboard figures (profit, VAT, breakdowns) for a period."

    def add_arguments(self, parser):
        parser.add_argument("--period", default=PERIOD_ALL, choices=PERIODS)
        parser.add_argument("--start", default=None, help="Custom period start (YYYY-MM-DD).")
        parser.add_argument("--end", default=None, help="Custom period end (YYYY-MM-DD).")
        parser.add_argument("--json", action="store_true", help="Print the raw figures as JSON.")

    def handle(self, *args, **options):
        try:
            pf = PeriodFilter(period=options["period"], start=options.get("start"), end=options.get("end"))
        except ValueError as exc:
            raise CommandError(str(exc))

        stats = aggregate(all_order_snapshots(), pf)

        if options.get("json"):
            self.stdout.write(json.dumps(stats.as_dict(), cls=DjangoJSONEncoder, indent=2))
            return

        self.stdout.write(f"period={pf.period} orders={stats.order_count}")
        self.stdout.write(f"sales with purchase price: {stats.products_with_purchase_price}")
        self.stdout.write(f"sales without purchase price: {stats.products_without_purchase_price}")
        self.stdout.write(f"profit: {stats.total_profit}")
        self.stdout.write(f"VAT collected: {stats.total_vat_collected}")
        for mode, fee in stats.delivery_revenue_by_mode.items():
            self.stdout.write(f"delivery {mode}: {fee}")
        for label, buckets in (
            ("status", stats.orders_by_status),
            ("payment", stats.orders_by_payment_method),
            ("mode", stats.orders_by_delivery_mode),
        ):
            for key, b in buckets.items():
                self.stdout.write(f"{label} {key}: count={b.count} value={b.value}")
