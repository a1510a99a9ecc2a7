import asyncio

import pytest

from storefront.core.application.ports import Filter, OrderBy, Query, RowKey, Table
from storefront.core.exceptions import UniqueViolationError
from storefront.infrastructure.drivers.memory import InMemoryDataStore


@pytest.fixture()
def store() -> InMemoryDataStore:
    return InMemoryDataStore(
        seed={
            Table.PRODUCTS: [
                {"id": "p1", "title": "Camisa", "price": 10, "stock": 3, "created_at": "2026-01-02"},
                {"id": "p2", "title": "Pantalón", "price": 30, "stock": 0, "created_at": None},
                {"id": "p3", "title": "Camiseta", "price": 20, "stock": 1, "created_at": "2026-01-03"},
            ]
        }
    )


class TestSelect:
    async def test_filters_sort_and_limit(self, store):
        rows = await store.select(
            Table.PRODUCTS,
            Query.where(Filter.gte("price", 15), order_by=(OrderBy("price", descending=True),), limit=1),
        )

        assert [r["id"] for r in rows] == ["p2"]

    async def test_nulls_sort_last_either_way(self, store):
        asc = await store.select(Table.PRODUCTS, Query(order_by=(OrderBy("created_at"),)))
        desc = await store.select(Table.PRODUCTS, Query(order_by=(OrderBy("created_at", descending=True),)))

        assert [r["id"] for r in asc] == ["p1", "p3", "p2"]
        assert [r["id"] for r in desc] == ["p3", "p1", "p2"]

    async def test_any_of_group_is_an_or(self, store):
        query = Query(any_of=((Filter.eq("id", "p2"), Filter.contains_text("title", "CAMISETA")),))

        rows = await store.select(Table.PRODUCTS, query)

        assert sorted(r["id"] for r in rows) == ["p2", "p3"]

    async def test_returned_rows_are_copies(self, store):
        (row,) = await store.select(Table.PRODUCTS, Query.where(Filter.eq("id", "p1")))
        row["stock"] = 99

        assert store.rows(Table.PRODUCTS)[0]["stock"] == 3


class TestWrites:
    async def test_insert_generates_id(self, store):
        row = await store.insert(Table.CATEGORIES, {"name": "Hogar"})

        assert row["id"]

    async def test_unique_key_enforced(self, store):
        await store.insert(Table.REVIEWS, {"user_id": "u1", "product_id": "p1", "rating": 5})

        with pytest.raises(UniqueViolationError) as exc_info:
            await store.insert(Table.REVIEWS, {"user_id": "u1", "product_id": "p1", "rating": 1})

        assert exc_info.value.error_code == "23505"

    async def test_insert_many_is_all_or_nothing(self, store):
        with pytest.raises(UniqueViolationError):
            await store.insert_many(
                Table.CATEGORIES, [{"name": "Hogar"}, {"name": "Deportes"}, {"name": "Hogar"}]
            )

        assert store.rows(Table.CATEGORIES) == []

    async def test_delete_returns_count(self, store):
        assert await store.delete(Table.PRODUCTS, (Filter.is_in("id", ["p1", "p3"]),)) == 2


class TestIncrement:
    async def test_refuses_to_cross_floor(self, store):
        assert await store.increment(Table.PRODUCTS, (Filter.eq("id", "p2"),), {"stock": -1}) == []
        (row,) = await store.increment(Table.PRODUCTS, (Filter.eq("id", "p1"),), {"stock": -3})

        assert row["stock"] == 0

    async def test_no_floor_allows_any_value(self, store):
        (row,) = await store.increment(Table.PRODUCTS, (Filter.eq("id", "p2"),), {"stock": -2}, floor=None)

        assert row["stock"] == -2

    async def test_request_key_applies_once(self, store):
        flt = (Filter.eq("id", "p1"),)
        await store.increment(Table.PRODUCTS, flt, {"stock": -1}, request_key="o-1:reserve:p1")
        (row,) = await store.increment(Table.PRODUCTS, flt, {"stock": -1}, request_key="o-1:reserve:p1")

        assert row["stock"] == 2

    async def test_refused_increment_does_not_use_up_its_key(self, store):
        flt = (Filter.eq("id", "p2"),)
        assert await store.increment(Table.PRODUCTS, flt, {"stock": -1}, request_key="k") == []
        await store.increment(Table.PRODUCTS, flt, {"stock": 2}, floor=None)
        (row,) = await store.increment(Table.PRODUCTS, flt, {"stock": -1}, request_key="k")

        assert row["stock"] == 1

    async def test_concurrent_decrements_never_oversell(self, store):
        results = await asyncio.gather(
            *(store.increment(Table.PRODUCTS, (Filter.eq("id", "p1"),), {"stock": -1}) for _ in range(5))
        )

        assert sum(1 for r in results if r) == 3
        assert store.rows(Table.PRODUCTS)[0]["stock"] == 0

    async def test_upsert_increment_inserts_then_adds(self, store):
        key = RowKey({"user_id": "u1", "product_id": "p1"})

        first = await store.upsert_increment(Table.CART_LINES, key, "quantity", 2)
        second = await store.upsert_increment(Table.CART_LINES, key, "quantity", 1)

        assert first["id"] == second["id"]
        assert second["quantity"] == 3
