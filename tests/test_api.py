"""End-to-end tests of the HTTP API."""

from decimal import Decimal

import pytest

pytestmark = pytest.mark.django_db


def _dec(value):
    return Decimal(str(value))


class TestHealth:
    def test_health(self, api_client):
        assert api_client.get("/health").json() == {"status": "ok"}


class TestCatalogApi:
    """Test product endpoints."""

    def test_crud(self, api_client):
        resp = api_client.post(
            "/catalog/products",
            json={
                "name": "Café Premium Bio",
                "description": "Café arabica",
                "weight": "0.5",
                "sale_price": "15.90",
                "variants": [{"name": "1kg", "sale_price": "29.90", "weight_modifier": "2"}],
            },
        )
        assert resp.status_code == 201
        product = resp.json()
        assert product["variants"][0]["name"] == "1kg"

        resp = api_client.put(f"/catalog/products/{product['id']}", json={"sale_price": "16.50"})
        assert resp.status_code == 200
        assert _dec(resp.json()["sale_price"]) == Decimal("16.50")
        assert len(resp.json()["variants"]) == 1

        assert len(api_client.get("/catalog/products?q=arabica").json()) == 1
        assert api_client.delete(f"/catalog/products/{product['id']}").status_code == 204
        assert api_client.get(f"/catalog/products/{product['id']}").status_code == 404

    def test_validation_error(self, api_client):
        resp = api_client.post(
            "/catalog/products",
            json={"name": "X", "description": "Y", "weight": "0", "sale_price": "1"},
        )
        assert resp.status_code == 400


class TestClientsApi:
    """Test client endpoints."""

    def test_crud(self, api_client):
        resp = api_client.post("/clients", json={"name": "Jean Martin", "city": "Lyon"})
        assert resp.status_code == 201
        client_id = resp.json()["id"]

        assert api_client.put(f"/clients/{client_id}", json={"phone": "0600"}).json()["phone"] == "0600"
        assert [c["name"] for c in api_client.get("/clients?q=lyon").json()] == ["Jean Martin"]
        assert api_client.delete(f"/clients/{client_id}").status_code == 204
        assert api_client.get(f"/clients/{client_id}").status_code == 404

    def test_name_required(self, api_client):
        assert api_client.post("/clients", json={"name": ""}).status_code == 400


class TestSettingsApi:
    """Test delivery rules and VAT endpoints."""

    def test_rules(self, api_client):
        assert len(api_client.get("/shipping/rules").json()) == 8

        resp = api_client.put(
            "/shipping/rules",
            json=[{"delivery_mode": "gls", "min_weight": "0", "max_weight": "30", "price": "10"}],
        )
        assert resp.status_code == 200
        assert len(resp.json()) == 1

        quote = api_client.get("/shipping/quote?weight=7&mode=gls").json()
        assert _dec(quote["price"]) == Decimal("10")

    def test_overlapping_rules_rejected(self, api_client):
        resp = api_client.put(
            "/shipping/rules",
            json=[
                {"delivery_mode": "gls", "min_weight": "0", "max_weight": "6", "price": "6"},
                {"delivery_mode": "gls", "min_weight": "5", "max_weight": "10", "price": "9"},
            ],
        )
        assert resp.status_code == 400
        assert len(api_client.get("/shipping/rules").json()) == 8

    def test_quote_bad_mode(self, api_client):
        assert api_client.get("/shipping/quote?weight=1&mode=ups").status_code == 400

    def test_vat(self, api_client):
        body = api_client.get("/pricing/vat").json()
        assert body["enabled"] is False
        assert _dec(body["effective_rate"]) == 0

        body = api_client.put("/pricing/vat", json={"enabled": True, "rate": "20"}).json()
        assert _dec(body["effective_rate"]) == Decimal("20")

        assert api_client.put("/pricing/vat", json={"rate": "150"}).status_code == 400


class TestCheckoutApi:
    """Test the cart to order flow."""

    def test_flow(self, api_client, coffee, marie, vat_20):
        resp = api_client.post("/checkout/cart/items", json={"product_id": coffee.id, "quantity": 2})
        assert resp.status_code == 201
        cart = resp.json()
        assert _dec(cart["totals"]["total"]) == Decimal("43.16")

        item_id = cart["items"][0]["id"]
        cart = api_client.patch(f"/checkout/cart/items/{item_id}", json={"quantity": 3}).json()
        assert cart["items"][0]["quantity"] == 3

        cart = api_client.put("/checkout/cart/client", json={"client_id": marie.id}).json()
        assert cart["client"]["name"] == "Marie Dupont"
        cart = api_client.put("/checkout/cart/delivery-mode", json={"delivery_mode": "gls"}).json()
        assert cart["delivery_mode"] == "gls"

        resp = api_client.post("/checkout/orders", json={"notes": "fragile"})
        assert resp.status_code == 201
        order = resp.json()
        assert order["status"] == "pending_validation"
        assert order["payment_method"] is None
        assert order["client"]["name"] == "Marie Dupont"
        assert _dec(order["totals"]["subtotal"]) == Decimal("47.70")
        assert _dec(order["totals"]["delivery_fee"]) == Decimal("6")

        cart = api_client.get("/checkout/cart").json()
        assert cart["items"] == []
        assert cart["client"] is None
        assert cart["delivery_mode"] == "colissimo"

        assert [o["id"] for o in api_client.get("/checkout/orders/pending").json()] == [order["id"]]

        resp = api_client.post(
            f"/checkout/orders/{order['id']}/status", json={"status": "paid", "payment_method": "card"}
        )
        assert resp.status_code == 200
        assert resp.json()["payment_method"] == "card"
        assert [o["id"] for o in api_client.get("/checkout/orders/history").json()] == [order["id"]]

    def test_empty_cart_order(self, api_client):
        assert api_client.post("/checkout/orders", json={}).status_code == 400

    def test_unknown_order(self, api_client):
        assert api_client.get("/checkout/orders/9999").status_code == 404
        assert api_client.post("/checkout/orders/9999/status", json={"status": "paid"}).status_code == 404

    def test_bad_status(self, api_client, coffee):
        api_client.post("/checkout/cart/items", json={"product_id": coffee.id})
        order_id = api_client.post("/checkout/orders", json={}).json()["id"]
        assert api_client.post(f"/checkout/orders/{order_id}/status", json={"status": "lost"}).status_code == 400

    def test_list_filter_by_status(self, api_client, coffee):
        api_client.post("/checkout/cart/items", json={"product_id": coffee.id})
        api_client.post("/checkout/orders", json={})
        assert api_client.get("/checkout/orders?status=bogus").status_code == 400
        resp = api_client.get("/checkout/orders?status=pending_validation")
        assert resp.status_code == 200
        assert len(resp.json()) == 1
        assert api_client.get("/checkout/orders?status=paid").json() == []

    def test_unknown_product(self, api_client):
        assert api_client.post("/checkout/cart/items", json={"product_id": 9999}).status_code == 404


class TestDashboardApi:
    """Test the dashboard endpoint."""

    def test_empty(self, api_client):
        body = api_client.get("/analytics/dashboard").json()
        assert body["order_count"] == 0
        assert len(body["orders_by_status"]) == 6
        assert len(body["orders_by_payment_method"]) == 4

    def test_with_order(self, api_client, coffee):
        api_client.post("/checkout/cart/items", json={"product_id": coffee.id, "quantity": 2})
        api_client.post("/checkout/orders", json={})
        body = api_client.get("/analytics/dashboard?period=current_month").json()
        assert body["order_count"] == 1
        assert _dec(body["total_profit"]) == Decimal("14.80")
        assert body["orders_by_status"]["pending_validation"]["count"] == 1

    def test_unparsable_custom_start(self, api_client, coffee):
        api_client.post("/checkout/cart/items", json={"product_id": coffee.id})
        api_client.post("/checkout/orders", json={})
        body = api_client.get("/analytics/dashboard?period=custom&start=nope&end=2000-01-01").json()
        assert body["order_count"] == 1

    def test_unknown_period(self, api_client):
        assert api_client.get("/analytics/dashboard?period=weekly").status_code == 400
