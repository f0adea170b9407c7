"""
Tests for the product catalog endpoints.
"""

import uuid

import pytest
from fastapi.testclient import TestClient

from conftest import create_product, make_settings
from main import create_app


class TestCatalog:
    def test_create_and_fetch(self, client):
        product = create_product(client, name="Rose Toner", price=480.5, stock_quantity=12)
        assert product["name"] == "Rose Toner"
        assert product["stock_quantity"] == 12

        resp = client.get(f"/products/{product['id']}")
        assert resp.status_code == 200
        assert resp.json() == product

    def test_list(self, client):
        create_product(client, name="B Serum")
        create_product(client, name="A Cream")
        names = [p["name"] for p in client.get("/products").json()]
        assert names == ["A Cream", "B Serum"]

    @pytest.mark.parametrize("product_id", [str(uuid.uuid4()), "not-a-uuid"])
    def test_unknown_product(self, client, product_id):
        resp = client.get(f"/products/{product_id}")
        assert resp.status_code == 404
        assert resp.json()["detail"] == "Product not found"

    @pytest.mark.parametrize("missing", ["name", "price", "description", "stock_quantity"])
    def test_required_fields(self, client, missing):
        payload = {"name": "Mask", "price": 10, "description": "Clay mask", "stock_quantity": 3}
        del payload[missing]
        resp = client.post("/product", json=payload)
        assert resp.status_code == 400
        assert missing in resp.json()["detail"]

    @pytest.mark.parametrize(
        "field,value", [("name", "n" * 256), ("stock_quantity", 2**31)],
    )
    def test_values_beyond_column_limits(self, client, field, value):
        payload = {"name": "Mask", "price": 10, "description": "Clay mask", "stock_quantity": 3}
        payload[field] = value
        resp = client.post("/product", json=payload)
        assert resp.status_code == 400
        assert field in resp.json()["detail"]
        assert client.get("/products").json() == []

    def test_demo_product_seeded_once(self):
        app = create_app(make_settings(seed_catalog=True))
        with TestClient(app) as client:
            products = client.get("/products").json()
        assert [p["name"] for p in products] == ["Luminous Glow Foundation"]
        assert products[0]["stock_quantity"] == 60


class TestErrorHandling:
    def test_unhandled_error_is_generic_500(self, app):
        @app.get("/boom")
        async def boom():
            raise RuntimeError("internal detail")

        with TestClient(app, raise_server_exceptions=False) as client:
            resp = client.get("/boom")
        assert resp.status_code == 500
        assert resp.json() == {"detail": "Something broke!"}

    def test_malformed_json_is_client_error(self, client):
        resp = client.post(
            "/register", content=b"{not json", headers={"Content-Type": "application/json"},
        )
        assert resp.status_code == 400
