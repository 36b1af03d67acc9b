from __future__ import annotations

from decimal import Decimal

from django.db import migrations, models
import django.db.models.deletion


class Migration(migrations.Migration):

    initial = True

    dependencies = []

    operations = [
        migrations.CreateModel(
            name="Product",
            fields=[
                ("id", models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name="ID")),
                ("name", models.CharField(max_length=255)),
                ("description", models.TextField(blank=True, default="")),
                ("image", models.CharField(blank=True, default="", max_length=500)),
                ("weight", models.DecimalField(decimal_places=3, max_digits=10)),
                ("purchase_price", models.DecimalField(blank=True, decimal_places=2, max_digits=12, null=True)),
                ("sale_price", models.DecimalField(decimal_places=2, max_digits=12)),
                ("created_at", models.DateTimeField(auto_now_add=True)),
                ("updated_at", models.DateTimeField(auto_now=True)),
            ],
            options={"ordering": ["name", "id"]},
        ),
        migrations.CreateModel(
            name="ProductVariant",
            fields=[
                ("id", models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name="ID")),
                ("name", models.CharField(max_length=255)),
                ("sale_price", models.DecimalField(decimal_places=2, max_digits=12)),
                ("purchase_price", models.DecimalField(blank=True, decimal_places=2, max_digits=12, null=True)),
                ("weight_modifier", models.DecimalField(decimal_places=3, default=Decimal("1"), max_digits=8)),
                ("sort_order", models.IntegerField(default=0)),
                ("product", models.ForeignKey(on_delete=django.db.models.deletion.CASCADE, related_name="variants", to="catalog.product")),
            ],
            options={"ordering": ["sort_order", "id"]},
        ),
    ]
