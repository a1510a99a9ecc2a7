"""Composition root: builds drivers from settings and wires every skill and workflow."""

from storefront.core.application.policies import ReviewEligibilityPolicy
from storefront.core.application.ports import DataStorePort, IdentityPort
from storefront.core.application.skills.address import ListAddressesSkill, SaveAddressSkill, SetPrincipalAddressSkill
from storefront.core.application.skills.cart import (
    AddToCartSkill,
    CartLoader,
    RemoveFromCartSkill,
    SetCartQuantitySkill,
    ViewCartSkill,
)
from storefront.core.application.skills.catalog import (
    CatalogEnricher,
    CreateCategorySkill,
    GetProductDetailSkill,
    GetStorePageSkill,
    ListCategoriesSkill,
    SearchCatalogSkill,
)
from storefront.core.application.skills.order import GetOrderSkill, ListOrdersSkill, TransitionOrderStatusSkill
from storefront.core.application.skills.review import ProductRatingSkill
from storefront.core.application.skills.seller import (
    CreateProductSkill,
    DeleteProductSkill,
    ListSellerOrdersSkill,
    ListSellerProductsSkill,
    SaveStoreSettingsSkill,
    SellerDashboardSkill,
    SellerSalesReader,
    UpdateProductSkill,
)
from storefront.core.application.workflows.checkout import PlaceOrderWorkflow
from storefront.core.application.workflows.returns import RequestReturnWorkflow
from storefront.core.application.workflows.review import SubmitReviewWorkflow
from storefront.core.domain.cart import PricingRules
from storefront.core.domain.order import ReturnWindow
from storefront.infrastructure.common.retry import RetryPolicy
from storefront.infrastructure.configuration import DataBackend, Settings
from storefront.infrastructure.drivers.identity import GoTrueIdentity, StaticTokenIdentity
from storefront.infrastructure.drivers.memory import InMemoryDataStore
from storefront.infrastructure.drivers.postgrest import PostgrestDataStore
from storefront.infrastructure.observability.logger_factory_service import get_logger

logger = get_logger("container")


def build_data_store(settings: Settings) -> DataStorePort:
    match settings.app.data_backend:
        case DataBackend.MEMORY:
            return InMemoryDataStore()
        case DataBackend.POSTGREST:
            return PostgrestDataStore(settings.supabase)


def build_identity(settings: Settings, data_store: DataStorePort) -> IdentityPort:
    match settings.app.data_backend:
        case DataBackend.MEMORY:
            return StaticTokenIdentity(data_store)
        case DataBackend.POSTGREST:
            return GoTrueIdentity(settings.supabase, data_store)


class StorefrontContainer:
    """Holds one instance of every driver, skill and workflow for the process lifetime."""

    def __init__(
        self,
        settings: Settings,
        data_store: DataStorePort | None = None,
        identity: IdentityPort | None = None,
    ) -> None:
        settings.validate_backend()
        app = settings.app
        self.settings = settings
        self.data_store = data_store or build_data_store(settings)
        self.identity = identity or build_identity(settings, self.data_store)

        store = self.data_store
        retry = RetryPolicy(max_attempts=app.retry_max_attempts)
        window = ReturnWindow.of_days(app.return_window_days)
        enricher = CatalogEnricher(store)
        cart_loader = CartLoader(store, PricingRules(tax_rate=app.tax_rate, flat_shipping=app.flat_shipping))
        sales = SellerSalesReader(store)

        self.search_catalog = SearchCatalogSkill(store, enricher)
        self.product_detail = GetProductDetailSkill(store, enricher)
        self.list_categories = ListCategoriesSkill(store)
        self.create_category = CreateCategorySkill(store)
        self.store_page = GetStorePageSkill(store, enricher)

        self.add_to_cart = AddToCartSkill(store)
        self.set_cart_quantity = SetCartQuantitySkill(store)
        self.remove_from_cart = RemoveFromCartSkill(store)
        self.view_cart = ViewCartSkill(cart_loader)

        self.save_address = SaveAddressSkill(store)
        self.list_addresses = ListAddressesSkill(store)
        self.set_principal_address = SetPrincipalAddressSkill(store)

        self.list_orders = ListOrdersSkill(store)
        self.get_order = GetOrderSkill(store, window)
        self.transition_order_status = TransitionOrderStatusSkill(store)

        self.create_product = CreateProductSkill(store)
        self.update_product = UpdateProductSkill(store)
        self.delete_product = DeleteProductSkill(store)
        self.list_seller_products = ListSellerProductsSkill(store)
        self.seller_dashboard = SellerDashboardSkill(store, sales)
        self.list_seller_orders = ListSellerOrdersSkill(store, sales)
        self.save_store_settings = SaveStoreSettingsSkill(store)

        self.product_rating = ProductRatingSkill(store)
        self.place_order = PlaceOrderWorkflow(store, cart_loader, retry)
        self.request_return = RequestReturnWorkflow(store, window, retry)
        self.submit_review = SubmitReviewWorkflow(
            store,
            ReviewEligibilityPolicy(store, app.review_policy),
            retry,
            min_comment_length=app.review_min_comment_length,
        )
        logger.info(
            "Container ready",
            data_backend=app.data_backend.value,
            review_policy=app.review_policy.value,
            return_window_days=app.return_window_days,
        )

    async def aclose(self) -> None:
        for driver in (self.identity, self.data_store):
            close = getattr(driver, "aclose", None)
            if close is not None:
                await close()
