from enum import StrEnum


class CatalogSort(StrEnum):
    PRICE_ASC = "price_asc"
    PRICE_DESC = "price_desc"
    NEWEST = "newest"

    def order_by(self) -> tuple[str, bool]:
        """(column, descending) pair understood by the data store."""
        match self:
            case CatalogSort.PRICE_ASC:
                return "price", False
            case CatalogSort.PRICE_DESC:
                return "price", True
            case CatalogSort.NEWEST:
                return "created_at", True
