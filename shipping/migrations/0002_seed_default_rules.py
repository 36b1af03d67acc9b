from __future__ import annotations

from decimal import Decimal

from django.db import migrations


DEFAULT_TIERS = [
    ("colissimo", "0", "5", "5"),
    ("colissimo", "5", "10", "8"),
    ("colissimo", "10", "20", "12"),
    ("colissimo", "20", "999", "18"),
    ("gls", "0", "5", "6"),
    ("gls", "5", "10", "9"),
    ("gls", "10", "20", "14"),
    ("gls", "20", "999", "20"),
]


def seed_default_rules(apps, schema_editor):
    DeliveryRule = apps.get_model("shipping", "DeliveryRule")

    if DeliveryRule.objects.exists():
        return

    for i, (mode, min_w, max_w, price) in enumerate(DEFAULT_TIERS):
        DeliveryRule.objects.create(
            delivery_mode=mode,
            min_weight=Decimal(min_w),
            max_weight=Decimal(max_w),
            price=Decimal(price),
            sort_order=i,
        )


class Migration(migrations.Migration):

    dependencies = [
        ("shipping", "0001_initial"),
    ]

    operations = [
        migrations.RunPython(seed_default_rules, migrations.RunPython.noop),
    ]
