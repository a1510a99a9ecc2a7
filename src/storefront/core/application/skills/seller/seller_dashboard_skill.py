from storefront.core.application.policies import AccessPolicy, Capability
from storefront.core.application.ports import DataStorePort, Filter, Query, Table
from storefront.core.application.skills.seller.contracts import SellerDashboard, SellerDashboardInput
from storefront.core.application.skills.seller.seller_sales_reader import SellerSalesReader
from storefront.core.application.skills.skill import BaseSkill
from storefront.core.domain.review import RatingSummary
from storefront.core.domain.shared import ZERO, to_money


class SellerDashboardSkill(BaseSkill[SellerDashboardInput, SellerDashboard]):
    """Product count, distinct orders, revenue and average review score of one seller.

    Vendors see their own numbers; admins may ask for any seller by id.
    """

    def __init__(self, data_store: DataStorePort, sales: SellerSalesReader) -> None:
        self._store = data_store
        self._sales = sales

    async def execute(self, input_data: SellerDashboardInput) -> SellerDashboard:
        seller_id = _resolve_seller(input_data)
        products = await self._sales.products(seller_id)
        if not products:
            return SellerDashboard(seller_id=seller_id)

        product_ids = [p.id for p in products]
        orders, lines = await self._sales.sales(product_ids)
        review_rows = await self._store.select(Table.REVIEWS, Query.where(Filter.is_in("product_id", product_ids)))
        rating = RatingSummary.from_ratings(int(r["rating"]) for r in review_rows)
        return SellerDashboard(
            seller_id=seller_id,
            product_count=len(products),
            order_count=len(orders),
            revenue=to_money(sum((line.unit_price * line.quantity for line in lines), ZERO)),
            review_count=rating.count,
            average_rating=rating.average,
        )


def _resolve_seller(input_data: SellerDashboardInput) -> str:
    if input_data.seller_id is None:
        return AccessPolicy.require(input_data.principal, Capability.SELL).user_id
    principal = AccessPolicy.require(input_data.principal, Capability.SHOP)
    if input_data.seller_id != principal.user_id:
        AccessPolicy.require(principal, Capability.ADMINISTER)
    return input_data.seller_id
