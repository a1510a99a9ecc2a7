import json
from decimal import Decimal

import httpx
import pytest
import respx

from storefront.core.application.ports import Filter, OrderBy, Query, RowKey, Table
from storefront.core.exceptions import ConfigurationError, DataStoreError, StorageUnavailableError, UniqueViolationError
from storefront.infrastructure.configuration import SupabaseSettings
from storefront.infrastructure.drivers.postgrest import PostgrestDataStore

BASE = "https://project.supabase.test"
REST = f"{BASE}/rest/v1"


@pytest.fixture()
def settings() -> SupabaseSettings:
    return SupabaseSettings(url=BASE, anon_key="anon-key", service_key="service-key")


@pytest.fixture()
def store(settings) -> PostgrestDataStore:
    return PostgrestDataStore(settings, client=httpx.AsyncClient())


class TestRequests:
    @respx.mock
    async def test_select_sends_filters_and_service_key(self, store):
        route = respx.get(f"{REST}/products").mock(return_value=httpx.Response(200, json=[{"id": "p1"}]))

        rows = await store.select(
            Table.PRODUCTS,
            Query.where(Filter.eq("state", "active"), order_by=(OrderBy("price"),), limit=5),
        )

        assert rows == [{"id": "p1"}]
        request = route.calls.last.request
        assert request.headers["apikey"] == "service-key"
        assert request.headers["Authorization"] == "Bearer service-key"
        assert list(request.url.params.multi_items()) == [
            ("select", "*"),
            ("state", "eq.active"),
            ("order", "price.asc.nullslast"),
            ("limit", "5"),
        ]

    @respx.mock
    async def test_insert_serializes_decimals_and_asks_for_the_row(self, store):
        route = respx.post(f"{REST}/orders").mock(return_value=httpx.Response(201, json=[{"id": "o-1"}]))

        row = await store.insert(Table.ORDERS, {"total": Decimal("110000.00")})

        assert row == {"id": "o-1"}
        request = route.calls.last.request
        assert json.loads(request.content) == {"total": "110000.00"}
        assert request.headers["Prefer"] == "return=representation"

    @respx.mock
    async def test_delete_counts_returned_rows(self, store):
        respx.delete(f"{REST}/cart_lines").mock(return_value=httpx.Response(200, json=[{"id": "a"}, {"id": "b"}]))

        assert await store.delete(Table.CART_LINES, (Filter.eq("user_id", "u1"),)) == 2

    @respx.mock
    async def test_increment_calls_the_rpc(self, store):
        route = respx.post(f"{REST}/rpc/increment_columns").mock(
            return_value=httpx.Response(200, json=[{"id": "p1", "stock": 2}])
        )

        rows = await store.increment(Table.PRODUCTS, (Filter.eq("id", "p1"),), {"stock": -1})

        assert rows == [{"id": "p1", "stock": 2}]
        assert json.loads(route.calls.last.request.content) == {
            "target_table": "products",
            "filters": [{"column": "id", "op": "eq", "value": "p1"}],
            "deltas": {"stock": -1},
            "floor": 0,
        }

    @respx.mock
    async def test_increment_forwards_request_key(self, store):
        route = respx.post(f"{REST}/rpc/increment_columns").mock(
            return_value=httpx.Response(200, json=[{"id": "p1", "stock": 7}])
        )

        await store.increment(
            Table.PRODUCTS, (Filter.eq("id", "p1"),), {"stock": 2}, floor=None, request_key="r-1:restock"
        )

        payload = json.loads(route.calls.last.request.content)
        assert (payload["request_key"], payload["floor"]) == ("r-1:restock", None)

    @respx.mock
    async def test_upsert_increment_accepts_object_result(self, store):
        route = respx.post(f"{REST}/rpc/upsert_increment").mock(
            return_value=httpx.Response(200, json={"id": "c1", "quantity": 3})
        )

        row = await store.upsert_increment(
            Table.CART_LINES, RowKey({"user_id": "u1", "product_id": "p1"}), "quantity", 1
        )

        assert row["quantity"] == 3
        assert json.loads(route.calls.last.request.content)["key"] == {"user_id": "u1", "product_id": "p1"}


class TestErrorMapping:
    @respx.mock
    async def test_unique_violation(self, store):
        respx.post(f"{REST}/reviews").mock(
            return_value=httpx.Response(409, json={"code": "23505", "message": "duplicate key value"})
        )

        with pytest.raises(UniqueViolationError) as exc_info:
            await store.insert(Table.REVIEWS, {"user_id": "u1", "product_id": "p1"})

        assert exc_info.value.error_code == "23505"

    @respx.mock
    async def test_server_error_is_retryable(self, store):
        respx.get(f"{REST}/products").mock(return_value=httpx.Response(503, text="upstream down"))

        with pytest.raises(StorageUnavailableError) as exc_info:
            await store.select(Table.PRODUCTS)

        assert exc_info.value.retryable

    @respx.mock
    async def test_transport_error_is_retryable(self, store):
        respx.get(f"{REST}/products").mock(side_effect=httpx.ConnectError("refused"))

        with pytest.raises(StorageUnavailableError):
            await store.select(Table.PRODUCTS)

    @respx.mock
    async def test_client_error_is_not_retryable(self, store):
        respx.patch(f"{REST}/products").mock(
            return_value=httpx.Response(400, json={"code": "42703", "message": "column does not exist"})
        )

        with pytest.raises(DataStoreError) as exc_info:
            await store.update(Table.PRODUCTS, (Filter.eq("id", "p1"),), {"colour": "red"})

        assert not exc_info.value.retryable
        assert not isinstance(exc_info.value, StorageUnavailableError)


def test_missing_credentials():
    with pytest.raises(ConfigurationError):
        PostgrestDataStore(SupabaseSettings(url=BASE, anon_key="anon-key", service_key=None))
