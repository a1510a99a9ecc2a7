from storefront.core.application.workflows.checkout.place_order_workflow import (
    PlacedOrder,
    PlaceOrderInput,
    PlaceOrderWorkflow,
)

__all__ = ["PlaceOrderInput", "PlaceOrderWorkflow", "PlacedOrder"]
