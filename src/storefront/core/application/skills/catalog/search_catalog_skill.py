import structlog

from storefront.core.application.ports import DataStorePort, Filter, OrderBy, Query, Table
from storefront.core.application.skills.catalog.catalog_enricher import CatalogEnricher
from storefront.core.application.skills.catalog.contracts import CatalogEntry
from storefront.core.application.skills.skill import BaseSkill
from storefront.core.domain.catalog import CatalogQuery, Product, ProductState

logger = structlog.get_logger()


class SearchCatalogSkill(BaseSkill[CatalogQuery, list[CatalogEntry]]):
    """Filters the catalog by category, price band and free text, then sorts."""

    def __init__(self, data_store: DataStorePort, enricher: CatalogEnricher) -> None:
        self._store = data_store
        self._enricher = enricher

    async def execute(self, input_data: CatalogQuery) -> list[CatalogEntry]:
        rows = await self._store.select(Table.PRODUCTS, self._build_query(input_data))
        products = [Product.from_row(r) for r in rows]
        logger.info(
            "Catalog searched",
            results=len(products),
            category_id=input_data.category_id,
            price_band=input_data.price_band,
            has_text=input_data.text is not None,
        )
        return await self._enricher.enrich(products)

    @staticmethod
    def _build_query(q: CatalogQuery) -> Query:
        filters: list[Filter] = []
        if not q.include_inactive:
            filters.append(Filter.eq("state", ProductState.ACTIVE.value))
        if q.category_id:
            filters.append(Filter.eq("category_id", q.category_id))
        if q.price_band is not None:
            low, high = q.price_band.bounds
            if low is not None:
                filters.append(Filter.gte("price", low))
            if high is not None:
                filters.append(Filter.lte("price", high))

        any_of: tuple[tuple[Filter, ...], ...] = ()
        if q.text:
            any_of = ((Filter.contains_text("title", q.text), Filter.contains_text("description", q.text)),)

        column, descending = q.sort.order_by()
        return Query(
            filters=tuple(filters),
            any_of=any_of,
            order_by=(OrderBy(column, descending),),
            limit=q.limit,
        )
