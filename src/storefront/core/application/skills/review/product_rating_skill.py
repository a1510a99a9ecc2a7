from storefront.core.application.exceptions import NotFoundError
from storefront.core.application.ports import DataStorePort, Filter, Query, Table
from storefront.core.application.skills.skill import BaseSkill
from storefront.core.domain.review import RatingSummary


class ProductRatingSkill(BaseSkill[str, RatingSummary]):
    """Recomputes a product's rating from every stored review.

    The cached ``rating_sum``/``rating_count`` on the product row is only a
    shortcut for listings; this is the authoritative figure.
    """

    def __init__(self, data_store: DataStorePort) -> None:
        self._store = data_store

    async def execute(self, input_data: str) -> RatingSummary:
        if not await self._store.select(Table.PRODUCTS, Query.where(Filter.eq("id", input_data), limit=1)):
            raise NotFoundError("Product not found.", context={"product_id": input_data})
        rows = await self._store.select(Table.REVIEWS, Query.where(Filter.eq("product_id", input_data)))
        return RatingSummary.from_ratings(int(r["rating"]) for r in rows)
