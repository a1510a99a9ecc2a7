from storefront.core.application.ports import DataStorePort, OrderBy, Query, Table
from storefront.core.application.skills.skill import BaseSkill
from storefront.core.domain.catalog import Category


class ListCategoriesSkill(BaseSkill[None, list[Category]]):
    def __init__(self, data_store: DataStorePort) -> None:
        self._store = data_store

    async def execute(self, input_data: None = None) -> list[Category]:
        rows = await self._store.select(Table.CATEGORIES, Query(order_by=(OrderBy("name"),)))
        return [Category.from_row(r) for r in rows]
