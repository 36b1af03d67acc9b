"""Pytest configuration for tests."""

import pytest

from tests.helpers import rule


@pytest.fixture
def default_rules():
    """Same tiers as the seeded delivery rules."""
    return [
        rule("colissimo", 0, 5, "5"),
        rule("colissimo", 5, 10, "8"),
        rule("colissimo", 10, 20, "12"),
        rule("colissimo", 20, 999, "18"),
        rule("gls", 0, 5, "6"),
        rule("gls", 5, 10, "9"),
        rule("gls", 10, 20, "14"),
        rule("gls", 20, 999, "20"),
    ]


@pytest.fixture
def coffee(db):
    from catalog.services import create_product

    return create_product(
        {
            "name": "Café Premium Bio",
            "description": "Café arabica bio",
            "weight": "0.5",
            "purchase_price": "8.50",
            "sale_price": "15.90",
        }
    )


@pytest.fixture
def tea(db):
    from catalog.services import create_product

    return create_product(
        {
            "name": "Thé Vert Sencha",
            "description": "Thé vert japonais",
            "weight": "0.1",
            "purchase_price": "12.00",
            "sale_price": "24.90",
            "variants": [
                {"name": "100g", "sale_price": "24.90", "purchase_price": "12.00", "weight_modifier": "1"},
                {"name": "200g", "sale_price": "45.90", "weight_modifier": "2"},
            ],
        }
    )


@pytest.fixture
def marie(db):
    from clients.services import create_client

    return create_client({"name": "Marie Dupont", "email": "marie@example.com", "city": "Paris"})


@pytest.fixture
def vat_20(db):
    from pricing.services import update_vat_settings

    return update_vat_settings(enabled=True, rate="20")


@pytest.fixture
def api_client():
    from ninja.testing import TestClient

    from api.api import api

    return TestClient(api)
