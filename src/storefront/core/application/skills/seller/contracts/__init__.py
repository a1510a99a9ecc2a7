from storefront.core.application.skills.seller.contracts.seller_contracts import (
    CreateProductInput,
    DeleteProductInput,
    SaveStoreSettingsInput,
    SellerDashboard,
    SellerDashboardInput,
    SellerOrderView,
    UpdateProductInput,
)

__all__ = [
    "CreateProductInput",
    "DeleteProductInput",
    "SaveStoreSettingsInput",
    "SellerDashboard",
    "SellerDashboardInput",
    "SellerOrderView",
    "UpdateProductInput",
]
