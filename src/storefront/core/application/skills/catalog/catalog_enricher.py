from collections import defaultdict

from storefront.core.application.ports import DataStorePort, Filter, Query, Table
from storefront.core.application.skills.catalog.contracts import CatalogEntry
from storefront.core.domain.catalog import Product
from storefront.core.domain.review import RatingSummary


class CatalogEnricher:
    """Decorates products with seller display names and review aggregates.

    Two batched reads regardless of how many products are passed in.
    """

    def __init__(self, data_store: DataStorePort) -> None:
        self._store = data_store

    async def enrich(self, products: list[Product]) -> list[CatalogEntry]:
        if not products:
            return []
        names = await self.seller_names({p.seller_id for p in products})
        ratings = await self.ratings_for([p.id for p in products])
        return [
            CatalogEntry(
                product=p,
                seller_name=names.get(p.seller_id),
                rating=ratings.get(p.id, RatingSummary()),
            )
            for p in products
        ]

    async def seller_names(self, seller_ids: set[str]) -> dict[str, str]:
        if not seller_ids:
            return {}
        rows = await self._store.select(
            Table.USERS, Query.where(Filter.is_in("id", sorted(seller_ids)))
        )
        return {str(r["id"]): r.get("name") or "" for r in rows}

    async def ratings_for(self, product_ids: list[str]) -> dict[str, RatingSummary]:
        if not product_ids:
            return {}
        rows = await self._store.select(
            Table.REVIEWS, Query.where(Filter.is_in("product_id", product_ids))
        )
        grouped: dict[str, list[int]] = defaultdict(list)
        for row in rows:
            grouped[str(row["product_id"])].append(int(row["rating"]))
        return {pid: RatingSummary.from_ratings(values) for pid, values in grouped.items()}
