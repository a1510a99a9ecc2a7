from storefront.core.application.skills.seller.contracts import (
    CreateProductInput,
    DeleteProductInput,
    SaveStoreSettingsInput,
    SellerDashboard,
    SellerDashboardInput,
    SellerOrderView,
    UpdateProductInput,
)
from storefront.core.application.skills.seller.create_product_skill import CreateProductSkill
from storefront.core.application.skills.seller.delete_product_skill import DeleteProductSkill
from storefront.core.application.skills.seller.list_seller_orders_skill import ListSellerOrdersSkill
from storefront.core.application.skills.seller.list_seller_products_skill import ListSellerProductsSkill
from storefront.core.application.skills.seller.save_store_settings_skill import SaveStoreSettingsSkill
from storefront.core.application.skills.seller.seller_dashboard_skill import SellerDashboardSkill
from storefront.core.application.skills.seller.seller_sales_reader import SellerSalesReader
from storefront.core.application.skills.seller.update_product_skill import UpdateProductSkill

__all__ = [
    "CreateProductInput",
    "CreateProductSkill",
    "DeleteProductInput",
    "DeleteProductSkill",
    "ListSellerOrdersSkill",
    "ListSellerProductsSkill",
    "SaveStoreSettingsInput",
    "SaveStoreSettingsSkill",
    "SellerDashboard",
    "SellerDashboardInput",
    "SellerDashboardSkill",
    "SellerOrderView",
    "SellerSalesReader",
    "UpdateProductInput",
    "UpdateProductSkill",
]
