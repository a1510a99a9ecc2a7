from storefront.core.application.exceptions import NotFoundError
from storefront.core.application.ports import DataStorePort, Filter, OrderBy, Query, Table
from storefront.core.application.skills.catalog.catalog_enricher import CatalogEnricher
from storefront.core.application.skills.catalog.contracts import ProductDetail, ReviewView
from storefront.core.application.skills.skill import BaseSkill
from storefront.core.domain.catalog import Category, Product
from storefront.core.domain.review import RatingSummary, Review


class GetProductDetailSkill(BaseSkill[str, ProductDetail]):
    def __init__(self, data_store: DataStorePort, enricher: CatalogEnricher) -> None:
        self._store = data_store
        self._enricher = enricher

    async def execute(self, input_data: str) -> ProductDetail:
        rows = await self._store.select(Table.PRODUCTS, Query.where(Filter.eq("id", input_data), limit=1))
        if not rows:
            raise NotFoundError("Product not found.", context={"product_id": input_data})
        product = Product.from_row(rows[0])

        category = await self._load_category(product.category_id)
        review_rows = await self._store.select(
            Table.REVIEWS,
            Query.where(
                Filter.eq("product_id", product.id),
                order_by=(OrderBy("created_at", descending=True),),
            ),
        )
        reviews = [Review.from_row(r) for r in review_rows]
        names = await self._enricher.seller_names({product.seller_id} | {r.user_id for r in reviews})

        return ProductDetail(
            product=product,
            category=category,
            seller_name=names.get(product.seller_id),
            rating=RatingSummary.from_ratings(r.rating for r in reviews),
            reviews=[
                ReviewView(
                    id=r.id,
                    rating=r.rating,
                    comment=r.comment,
                    reviewer_name=names.get(r.user_id),
                    created_at=r.created_at,
                )
                for r in reviews
            ],
        )

    async def _load_category(self, category_id: str | None) -> Category | None:
        if not category_id:
            return None
        rows = await self._store.select(Table.CATEGORIES, Query.where(Filter.eq("id", category_id), limit=1))
        return Category.from_row(rows[0]) if rows else None
