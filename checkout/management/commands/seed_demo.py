from __future__ import annotations

from django.core.management.base import BaseCommand
from django.db import transaction

from catalog.models import Product
from catalog.services import create_product
from clients.models import Client
from clients.services import create_client


DEMO_PRODUCTS = [
    {
        "name": "Café Premium Bio",
        "description": "Café arabica bio torréfié artisanalement",
        "weight": "0.5",
        "purchase_price": "8.50",
        "sale_price": "15.90",
    },
    {
        "name": "Thé Vert Sencha",
        "description": "Thé vert japonais de qualité supérieure",
        "weight": "0.1",
        "purchase_price": "12.00",
        "sale_price": "24.90",
        "variants": [
            {"name": "100g", "sale_price": "24.90", "purchase_price": "12.00", "weight_modifier": "1"},
            {"name": "200g", "sale_price": "45.90", "purchase_price": "22.00", "weight_modifier": "2"},
        ],
    },
    {
        "name": "Miel de Lavande",
        "description": "Miel de lavande de Provence",
        "weight": "0.25",
        "sale_price": "12.50",
    },
]

DEMO_CLIENTS = [
    {
        "name": "Marie Dupont",
        "email": "marie.dupont@example.com",
        "phone": "06 12 34 56 78",
        "address": "12 rue de la Paix",
        "city": "Paris",
        "postal_code": "75002",
    },
    {
        "name": "Jean Martin",
        "email": "jean.martin@example.com",
        "phone": "06 98 76 54 32",
        "address": "5 place Bellecour",
        "city": "Lyon",
        "postal_code": "69002",
    },
]


class Command(BaseCommand):
    help = "Create demo products and clients (skips names that already exist)."

    def add_arguments(self, parser):
        parser.add_argument(
            "--dry-run",
            action="store_true",
            help="Only print what would be created; do not change DB.",
        )

    def handle(self, *args, **options):
        dry_run: bool = bool(options.get("dry_run"))

        products = [p for p in DEMO_PRODUCTS if not Product.objects.filter(name=p["name"]).exists()]
        clients = [c for c in DEMO_CLIENTS if not Client.objects.filter(name=c["name"]).exists()]

        if dry_run:
            self.stdout.write(f"would create products={len(products)} clients={len(clients)}")
            return

        with transaction.atomic():
            for data in products:
                create_product(data)
            for data in clients:
                create_client(data)

        self.stdout.write(self.style.SUCCESS(f"created products={len(products)} clients={len(clients)}"))
