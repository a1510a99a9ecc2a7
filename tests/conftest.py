from decimal import Decimal
from typing import Any

import pytest

from storefront.core.application.ports import Table
from storefront.core.domain.identity import Principal, Role
from storefront.core.exceptions import StorageUnavailableError
from storefront.infrastructure.common.retry import RetryPolicy
from storefront.infrastructure.drivers.memory import InMemoryDataStore

CUSTOMER = Principal(user_id="user-1", email="ana@example.com", role=Role.CUSTOMER, name="Ana Gómez")
OTHER_CUSTOMER = Principal(user_id="user-2", email="luis@example.com", role=Role.CUSTOMER, name="Luis Pérez")
VENDOR = Principal(user_id="seller-1", email="ventas@tiendauno.co", role=Role.VENDOR, name="Tienda Uno")
OTHER_VENDOR = Principal(user_id="seller-2", email="ventas@tiendados.co", role=Role.VENDOR, name="Tienda Dos")
ADMIN = Principal(user_id="admin-1", email="admin@example.com", role=Role.ADMIN, name="Admin")


def _user_row(p: Principal) -> dict[str, Any]:
    return {"id": p.user_id, "name": p.name, "email": p.email, "role": p.role.value}


@pytest.fixture()
def customer() -> Principal:
    return CUSTOMER


@pytest.fixture()
def other_customer() -> Principal:
    return OTHER_CUSTOMER


@pytest.fixture()
def vendor() -> Principal:
    return VENDOR


@pytest.fixture()
def other_vendor() -> Principal:
    return OTHER_VENDOR


@pytest.fixture()
def admin() -> Principal:
    return ADMIN


@pytest.fixture()
def product_row():
    """Factory for product rows owned by seller-1 in category cat-1 by default."""

    def _make(product_id: str, **overrides: Any) -> dict[str, Any]:
        row = {
            "id": product_id,
            "title": f"Producto {product_id}",
            "description": "",
            "price": Decimal("50000.00"),
            "stock": 10,
            "state": "active",
            "seller_id": VENDOR.user_id,
            "category_id": "cat-1",
            "image_url": None,
            "created_at": "2026-01-01T00:00:00+00:00",
            "rating_sum": 0,
            "rating_count": 0,
        }
        row.update(overrides)
        return row

    return _make


@pytest.fixture()
def data_store(product_row) -> InMemoryDataStore:
    store = InMemoryDataStore()
    store.load(Table.USERS, [_user_row(p) for p in (CUSTOMER, OTHER_CUSTOMER, VENDOR, OTHER_VENDOR, ADMIN)])
    store.load(
        Table.CATEGORIES,
        [
            {"id": "cat-1", "name": "Ropa", "description": "Prendas de vestir"},
            {"id": "cat-2", "name": "Calzado", "description": ""},
        ],
    )
    store.load(
        Table.PRODUCTS,
        [
            product_row("prod-1", title="Camiseta básica", price=Decimal("50000.00"), stock=5),
            product_row("prod-2", title="Chaqueta de cuero", price=Decimal("180000.00"), stock=2),
        ],
    )
    store.load(
        Table.ADDRESSES,
        [
            {
                "id": "addr-1",
                "user_id": CUSTOMER.user_id,
                "full_name": "Ana Gómez",
                "phone": "3001234567",
                "street": "Calle 10 # 20-30",
                "city": "Medellín",
                "department": "Antioquia",
                "is_principal": True,
            }
        ],
    )
    return store


@pytest.fixture()
def retry_policy() -> RetryPolicy:
    return RetryPolicy(max_attempts=3, initial_wait=0, max_wait=0)


@pytest.fixture()
def lose_first_response():
    """Wrap a data-store method so its first call is applied but then reported as a timeout."""

    def wrap(real):
        calls = 0

        async def flaky(table, *args, **kwargs):
            nonlocal calls
            result = await real(table, *args, **kwargs)
            calls += 1
            if calls == 1:
                raise StorageUnavailableError(table=table, message="read timeout", status_code=504)
            return result

        return flaky

    return wrap


@pytest.fixture()
def order_row():
    """Factory for order rows placed by user-1 at address addr-1 by default."""

    def _make(order_id: str, **overrides: Any) -> dict[str, Any]:
        row = {
            "id": order_id,
            "user_id": CUSTOMER.user_id,
            "address_id": "addr-1",
            "subtotal": Decimal("50000.00"),
            "tax": Decimal("5000.00"),
            "shipping": Decimal("0.00"),
            "total": Decimal("55000.00"),
            "status": "delivered",
            "created_at": "2026-02-01T00:00:00+00:00",
        }
        row.update(overrides)
        return row

    return _make


@pytest.fixture()
def order_line_row():
    def _make(order_id: str, product_id: str, quantity: int = 1, unit_price: str = "50000.00") -> dict[str, Any]:
        price = Decimal(unit_price)
        return {
            "id": f"{order_id}:{product_id}",
            "order_id": order_id,
            "product_id": product_id,
            "quantity": quantity,
            "unit_price": price,
            "line_total": price * quantity,
        }

    return _make
