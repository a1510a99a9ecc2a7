from dataclasses import dataclass

import structlog

from storefront.core.application.exceptions import ConflictError, ValidationError
from storefront.core.application.policies import AccessPolicy, Capability
from storefront.core.application.ports import DataStorePort, Filter, Query, Table
from storefront.core.application.skills.skill import BaseSkill
from storefront.core.domain.catalog import Category
from storefront.core.domain.identity import Principal

logger = structlog.get_logger()


@dataclass(frozen=True)
class CreateCategoryInput:
    principal: Principal | None
    name: str
    description: str = ""


class CreateCategorySkill(BaseSkill[CreateCategoryInput, Category]):
    def __init__(self, data_store: DataStorePort) -> None:
        self._store = data_store

    async def execute(self, input_data: CreateCategoryInput) -> Category:
        AccessPolicy.require(input_data.principal, Capability.ADMINISTER)
        name = input_data.name.strip()
        if not name:
            raise ValidationError("Category name is required.")

        existing = await self._store.select(Table.CATEGORIES, Query.where(Filter.eq("name", name), limit=1))
        if existing:
            raise ConflictError(f"Category '{name}' already exists.")

        row = await self._store.insert(
            Table.CATEGORIES, {"name": name, "description": input_data.description.strip()}
        )
        logger.info("Category created", category_id=row["id"])
        return Category.from_row(row)
