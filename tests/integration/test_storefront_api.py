import pytest
from fastapi.testclient import TestClient

from storefront.infrastructure.configuration import AppSettings, DataBackend, Settings, SupabaseSettings
from storefront.infrastructure.entrypoints.api import create_app
from storefront.infrastructure.resolution.container import StorefrontContainer

API = "/api/v1"


def _auth(user_id: str) -> dict[str, str]:
    return {"Authorization": f"Bearer {user_id}"}


@pytest.fixture()
def client(data_store):
    settings = Settings(
        app=AppSettings(data_backend=DataBackend.MEMORY, log_level="WARNING", retry_max_attempts=1),
        supabase=SupabaseSettings(url=None, anon_key=None, service_key=None),
    )
    app = create_app(settings, container=StorefrontContainer(settings, data_store=data_store))
    with TestClient(app) as test_client:
        yield test_client


class TestPublicEndpoints:
    def test_health(self, client):
        response = client.get("/health")

        assert response.status_code == 200
        assert response.json()["status"] == "ok"

    def test_catalog_search(self, client):
        response = client.get(f"{API}/products", params={"price_band": "150+"})

        assert response.status_code == 200
        body = response.json()
        assert [p["id"] for p in body] == ["prod-2"]
        assert body[0]["seller_name"] == "Tienda Uno"
        assert body[0]["rating"] == {"average": None, "count": 0}

    def test_unknown_product(self, client):
        response = client.get(f"{API}/products/nope")

        assert response.status_code == 404
        assert response.json()["code"] == "not_found"

    def test_unknown_price_band_is_a_schema_error(self, client):
        response = client.get(f"{API}/products", params={"price_band": "cheap"})

        assert response.status_code == 422
        assert response.json()["code"] == "invalid_request"


class TestAuthErrors:
    def test_cart_requires_a_token(self, client):
        response = client.get(f"{API}/cart")

        assert response.status_code == 401
        assert response.json() == {"error": "Authentication required.", "code": "unauthenticated"}

    def test_unknown_token(self, client):
        response = client.get(f"{API}/cart", headers=_auth("ghost"))

        assert response.status_code == 401

    def test_customer_cannot_create_products(self, client):
        response = client.post(
            f"{API}/products",
            json={"title": "Gorra", "price": "35000", "stock": 3},
            headers=_auth("user-1"),
        )

        assert response.status_code == 403
        assert response.json()["code"] == "forbidden"

    def test_duplicate_category(self, client):
        response = client.post(f"{API}/categories", json={"name": "Ropa"}, headers=_auth("admin-1"))

        assert response.status_code == 409
        assert response.json()["code"] == "conflict"


class TestShoppingFlow:
    def test_cart_checkout_review_and_return(self, client, data_store):
        customer = _auth("user-1")

        added = client.post(f"{API}/cart/items", json={"product_id": "prod-1", "quantity": 2}, headers=customer)
        assert added.status_code == 201
        assert added.json()["total"] == "110000.00"

        placed = client.post(f"{API}/orders", json={"address_id": "addr-1"}, headers=customer)
        assert placed.status_code == 201
        order = placed.json()["order"]
        assert (order["status"], order["total"]) == ("pending", "110000.00")
        assert placed.json()["cart_cleared"] is True

        assert client.get(f"{API}/cart", headers=customer).json()["lines"] == []
        assert client.get(f"{API}/products/prod-1").json()["product"]["stock"] == 3

        paid = client.patch(f"{API}/orders/{order['id']}/status", json={"status": "paid"}, headers=_auth("admin-1"))
        assert paid.status_code == 200

        review = client.post(
            f"{API}/products/prod-1/reviews",
            json={"rating": 5, "comment": "Tela suave y buena talla"},
            headers=customer,
        )
        assert review.status_code == 201
        assert review.json()["reviewer_name"] == "Ana Gómez"
        assert client.get(f"{API}/products/prod-1/rating").json() == {"average": 5.0, "count": 1}

        for status in ("shipped", "delivered"):
            moved = client.patch(
                f"{API}/orders/{order['id']}/status", json={"status": status}, headers=_auth("admin-1")
            )
            assert moved.status_code == 200

        returned = client.post(
            f"{API}/orders/{order['id']}/returns",
            json={"product_id": "prod-1", "reason_code": "size_change", "reason": "Me quedó pequeña"},
            headers=customer,
        )
        assert returned.status_code == 201
        assert returned.json()["quantity"] == 2
        assert client.get(f"{API}/orders/{order['id']}", headers=customer).json()["order"]["status"] == "in_return"

        dashboard = client.get(f"{API}/vendor/dashboard", headers=_auth("seller-1")).json()
        assert dashboard["order_count"] == 1
        assert dashboard["revenue"] == "100000.00"

    def test_empty_cart_checkout(self, client):
        response = client.post(f"{API}/orders", json={"address_id": "addr-1"}, headers=_auth("user-1"))

        assert response.status_code == 400
        assert response.json()["code"] == "validation_error"

    def test_zero_quantity_is_a_schema_error(self, client):
        response = client.post(
            f"{API}/cart/items", json={"product_id": "prod-1", "quantity": 0}, headers=_auth("user-1")
        )

        assert response.status_code == 422
        assert response.json()["details"]

    def test_foreign_order_is_forbidden(self, client):
        client.post(f"{API}/cart/items", json={"product_id": "prod-1"}, headers=_auth("user-1"))
        order_id = client.post(f"{API}/orders", json={"address_id": "addr-1"}, headers=_auth("user-1")).json()[
            "order"
        ]["id"]

        response = client.get(f"{API}/orders/{order_id}", headers=_auth("user-2"))

        assert response.status_code == 403

    def test_metrics_expose_workflow_counters(self, client):
        client.post(f"{API}/orders", json={"address_id": "addr-1"}, headers=_auth("user-1"))

        response = client.get("/metrics")

        assert response.status_code == 200
        assert "storefront_workflows_total" in response.text
