from storefront.core.application.exceptions import NotFoundError
from storefront.core.application.ports import DataStorePort, Filter, OrderBy, Query, Table
from storefront.core.application.skills.catalog.catalog_enricher import CatalogEnricher
from storefront.core.application.skills.catalog.contracts import StorePage
from storefront.core.application.skills.skill import BaseSkill
from storefront.core.domain.catalog import Product, ProductState
from storefront.core.domain.store import Store


class GetStorePageSkill(BaseSkill[str, StorePage]):
    """A vendor's public page: store details plus its active products."""

    def __init__(self, data_store: DataStorePort, enricher: CatalogEnricher) -> None:
        self._store = data_store
        self._enricher = enricher

    async def execute(self, input_data: str) -> StorePage:
        rows = await self._store.select(Table.STORES, Query.where(Filter.eq("id", input_data), limit=1))
        if not rows:
            raise NotFoundError("Store not found.", context={"store_id": input_data})
        store = Store.from_row(rows[0])

        product_rows = await self._store.select(
            Table.PRODUCTS,
            Query.where(
                Filter.eq("seller_id", store.seller_id),
                Filter.eq("state", ProductState.ACTIVE.value),
                order_by=(OrderBy("created_at", descending=True),),
            ),
        )
        entries = await self._enricher.enrich([Product.from_row(r) for r in product_rows])
        names = await self._enricher.seller_names({store.seller_id})
        return StorePage(store=store, seller_name=names.get(store.seller_id), products=entries)
