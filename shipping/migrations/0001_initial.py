from __future__ import annotations

from decimal import Decimal

from django.db import migrations, models


class Migration(migrations.Migration):

    initial = True

    dependencies = []

    operations = [
        migrations.CreateModel(
            name="DeliveryRule",
            fields=[
                ("id", models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name="ID")),
                ("delivery_mode", models.CharField(choices=[("colissimo", "Colissimo"), ("gls", "GLS")], max_length=20)),
                ("min_weight", models.DecimalField(decimal_places=3, default=Decimal("0"), max_digits=10)),
                ("max_weight", models.DecimalField(decimal_places=3, max_digits=10)),
                ("price", models.DecimalField(decimal_places=2, default=Decimal("0.00"), max_digits=12)),
                ("sort_order", models.IntegerField(default=0)),
                ("created_at", models.DateTimeField(auto_now_add=True)),
                ("updated_at", models.DateTimeField(auto_now=True)),
            ],
            options={
                "ordering": ["sort_order", "id"],
                "indexes": [models.Index(fields=["delivery_mode", "min_weight"], name="shipping_rule_mode_min_idx")],
                "constraints": [
                    models.CheckConstraint(condition=models.Q(price__gte=0), name="chk_delivery_rule_price_gte_0"),
                ],
            },
        ),
    ]
