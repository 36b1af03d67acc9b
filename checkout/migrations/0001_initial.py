from __future__ import annotations

from decimal import Decimal

from django.db import migrations, models
import django.db.models.deletion
import django.utils.timezone


class Migration(migrations.Migration):

    initial = True

    dependencies = [
        ("catalog", "0001_initial"),
        ("clients", "0001_initial"),
    ]

    operations = [
        migrations.CreateModel(
            name="Cart",
            fields=[
                ("id", models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name="ID")),
                ("code", models.SlugField(default="default", unique=True)),
                (
                    "delivery_mode",
                    models.CharField(
                        choices=[("colissimo", "Colissimo"), ("gls", "GLS")], default="colissimo", max_length=20
                    ),
                ),
                ("created_at", models.DateTimeField(auto_now_add=True)),
                ("updated_at", models.DateTimeField(auto_now=True)),
                (
                    "client",
                    models.ForeignKey(
                        blank=True,
                        null=True,
                        on_delete=django.db.models.deletion.SET_NULL,
                        related_name="+",
                        to="clients.client",
                    ),
                ),
            ],
        ),
        migrations.CreateModel(
            name="CartItem",
            fields=[
                ("id", models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name="ID")),
                ("product_name", models.CharField(max_length=255)),
                ("variant_name", models.CharField(blank=True, default="", max_length=255)),
                ("quantity", models.PositiveIntegerField(default=1)),
                ("unit_price", models.DecimalField(decimal_places=2, max_digits=12)),
                ("unit_purchase_price", models.DecimalField(blank=True, decimal_places=2, max_digits=12, null=True)),
                ("unit_weight", models.DecimalField(decimal_places=6, max_digits=16)),
                ("created_at", models.DateTimeField(auto_now_add=True)),
                ("updated_at", models.DateTimeField(auto_now=True)),
                (
                    "cart",
                    models.ForeignKey(
                        on_delete=django.db.models.deletion.CASCADE, related_name="items", to="checkout.cart"
                    ),
                ),
                (
                    "product",
                    models.ForeignKey(
                        blank=True,
                        null=True,
                        on_delete=django.db.models.deletion.SET_NULL,
                        related_name="cart_items",
                        to="catalog.product",
                    ),
                ),
                (
                    "variant",
                    models.ForeignKey(
                        blank=True,
                        null=True,
                        on_delete=django.db.models.deletion.SET_NULL,
                        related_name="cart_items",
                        to="catalog.productvariant",
                    ),
                ),
            ],
            options={
                "ordering": ["id"],
                "constraints": [
                    models.CheckConstraint(condition=models.Q(quantity__gte=1), name="chk_cart_item_quantity_gte_1")
                ],
            },
        ),
        migrations.CreateModel(
            name="Order",
            fields=[
                ("id", models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name="ID")),
                (
                    "status",
                    models.CharField(
                        choices=[
                            ("pending_validation", "Pending validation"),
                            ("validated", "Validated"),
                            ("unpaid", "Unpaid"),
                            ("paid", "Paid"),
                            ("shipped", "Shipped"),
                            ("delivered", "Delivered"),
                        ],
                        default="pending_validation",
                        max_length=32,
                    ),
                ),
                (
                    "payment_method",
                    models.CharField(
                        blank=True,
                        choices=[
                            ("bank_transfer", "Bank transfer"),
                            ("card", "Card"),
                            ("payment_link", "Payment link"),
                            ("cash", "Cash"),
                        ],
                        default="",
                        max_length=32,
                    ),
                ),
                ("client_source_id", models.BigIntegerField(blank=True, null=True)),
                ("client_name", models.CharField(blank=True, default="", max_length=200)),
                ("client_email", models.CharField(blank=True, default="", max_length=254)),
                ("client_phone", models.CharField(blank=True, default="", max_length=32)),
                ("client_address", models.CharField(blank=True, default="", max_length=255)),
                ("client_city", models.CharField(blank=True, default="", max_length=120)),
                ("client_postal_code", models.CharField(blank=True, default="", max_length=32)),
                ("client_notes", models.TextField(blank=True, default="")),
                (
                    "delivery_mode",
                    models.CharField(choices=[("colissimo", "Colissimo"), ("gls", "GLS")], max_length=20),
                ),
                ("delivery_fee", models.DecimalField(decimal_places=2, default=Decimal("0.00"), max_digits=12)),
                ("total_weight", models.DecimalField(decimal_places=6, default=Decimal("0"), max_digits=18)),
                ("subtotal", models.DecimalField(decimal_places=2, default=Decimal("0.00"), max_digits=14)),
                ("vat_rate", models.DecimalField(decimal_places=2, default=Decimal("0"), max_digits=5)),
                ("vat_amount", models.DecimalField(decimal_places=6, default=Decimal("0"), max_digits=18)),
                ("total", models.DecimalField(decimal_places=6, default=Decimal("0"), max_digits=18)),
                ("notes", models.TextField(blank=True, default="")),
                ("created_at", models.DateTimeField(default=django.utils.timezone.now)),
                ("updated_at", models.DateTimeField(default=django.utils.timezone.now)),
            ],
            options={
                "ordering": ["-created_at", "-id"],
                "indexes": [
                    models.Index(fields=["status", "-created_at"], name="checkout_order_status_idx"),
                    models.Index(fields=["-created_at"], name="checkout_order_created_idx"),
                ],
            },
        ),
        migrations.CreateModel(
            name="OrderLine",
            fields=[
                ("id", models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name="ID")),
                ("product_name", models.CharField(max_length=255)),
                ("variant_name", models.CharField(blank=True, default="", max_length=255)),
                ("quantity", models.PositiveIntegerField(default=1)),
                ("unit_price", models.DecimalField(decimal_places=2, max_digits=12)),
                ("unit_purchase_price", models.DecimalField(blank=True, decimal_places=2, max_digits=12, null=True)),
                ("unit_weight", models.DecimalField(decimal_places=6, max_digits=16)),
                (
                    "order",
                    models.ForeignKey(
                        on_delete=django.db.models.deletion.CASCADE, related_name="lines", to="checkout.order"
                    ),
                ),
                (
                    "product",
                    models.ForeignKey(
                        blank=True,
                        null=True,
                        on_delete=django.db.models.deletion.SET_NULL,
                        related_name="order_lines",
                        to="catalog.product",
                    ),
                ),
                (
                    "variant",
                    models.ForeignKey(
                        blank=True,
                        null=True,
                        on_delete=django.db.models.deletion.SET_NULL,
                        related_name="order_lines",
                        to="catalog.productvariant",
                    ),
                ),
            ],
            options={"ordering": ["id"]},
        ),
    ]
