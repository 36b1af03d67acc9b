"""Tests for unit pricing resolution and VAT settings."""

from decimal import Decimal
from types import SimpleNamespace

import pytest

from pricing.services import (
    compute_vat_amount,
    current_vat_rate,
    effective_vat_rate,
    get_vat_settings,
    resolve_line,
    update_vat_settings,
)


def _product(**kw):
    data = {"sale_price": Decimal("24.90"), "purchase_price": Decimal("12.00"), "weight": Decimal("0.1")}
    data.update(kw)
    return SimpleNamespace(**data)


def _variant(**kw):
    data = {"sale_price": Decimal("45.90"), "purchase_price": Decimal("22.00"), "weight_modifier": Decimal("2")}
    data.update(kw)
    return SimpleNamespace(**data)


class TestResolveLine:
    """Test product and variant price resolution."""

    def test_product_without_variant(self):
        """Should take the product's own prices and weight."""
        p = resolve_line(product=_product())
        assert p.unit_price == Decimal("24.90")
        assert p.unit_purchase_price == Decimal("12.00")
        assert p.unit_weight == Decimal("0.1")

    def test_variant_overrides_prices(self):
        """Should use variant prices instead of adding them to the product's."""
        p = resolve_line(product=_product(), variant=_variant())
        assert p.unit_price == Decimal("45.90")
        assert p.unit_purchase_price == Decimal("22.00")

    def test_variant_scales_weight(self):
        """Should multiply the product weight by the variant modifier."""
        p = resolve_line(product=_product(), variant=_variant())
        assert p.unit_weight == Decimal("0.2")

    def test_variant_purchase_price_falls_back_to_product(self):
        """Should use the product purchase price when the variant has none."""
        p = resolve_line(product=_product(), variant=_variant(purchase_price=None))
        assert p.unit_purchase_price == Decimal("12.00")

    def test_zero_variant_purchase_price_is_kept(self):
        """Should treat a zero purchase price as known."""
        p = resolve_line(product=_product(), variant=_variant(purchase_price=Decimal("0")))
        assert p.unit_purchase_price == Decimal("0")

    def test_unknown_purchase_price(self):
        """Should leave the purchase price unknown when nobody sets it."""
        p = resolve_line(product=_product(purchase_price=None), variant=_variant(purchase_price=None))
        assert p.unit_purchase_price is None

    def test_float_inputs_are_exact(self):
        """Should not carry binary float noise into the result."""
        p = resolve_line(product=_product(sale_price=15.9, weight=0.5))
        assert p.unit_price == Decimal("15.9")
        assert p.unit_weight == Decimal("0.5")


class TestVat:
    """Test VAT rate and amount helpers."""

    def test_disabled_rate_is_zero(self):
        assert effective_vat_rate(enabled=False, rate=Decimal("20")) == Decimal("0")

    def test_enabled_rate(self):
        assert effective_vat_rate(enabled=True, rate=Decimal("5.5")) == Decimal("5.5")

    def test_vat_amount(self):
        assert compute_vat_amount(subtotal=Decimal("31.80"), vat_rate=Decimal("20")) == Decimal("6.36")


@pytest.mark.django_db
class TestVatSettings:
    """Test the stored VAT settings row."""

    def test_defaults_from_settings(self):
        """Should create the row disabled at 20% on first access."""
        vs = get_vat_settings()
        assert vs.enabled is False
        assert vs.rate == Decimal("20")
        assert current_vat_rate() == Decimal("0")

    def test_update(self):
        update_vat_settings(enabled=True, rate="5.5")
        assert current_vat_rate() == Decimal("5.5")

    def test_partial_update_keeps_rate(self):
        update_vat_settings(rate="10")
        vs = update_vat_settings(enabled=True)
        assert vs.rate == Decimal("10")
        assert vs.enabled is True

    def test_rejects_out_of_range_rate(self):
        with pytest.raises(ValueError):
            update_vat_settings(rate="120")
        with pytest.raises(ValueError):
            update_vat_settings(rate="-1")
