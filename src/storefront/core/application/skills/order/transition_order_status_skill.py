import structlog

from storefront.core.application.exceptions import ConflictError, NotFoundError, ValidationError
from storefront.core.application.policies import AccessPolicy, Capability
from storefront.core.application.ports import DataStorePort, Filter, Query, Table
from storefront.core.application.skills.order.contracts import TransitionOrderStatusInput
from storefront.core.application.skills.skill import BaseSkill
from storefront.core.domain.order import Order

logger = structlog.get_logger()


class TransitionOrderStatusSkill(BaseSkill[TransitionOrderStatusInput, Order]):
    """Admin-driven move along the order lifecycle.

    The update is conditioned on the status that was read, so two admins
    racing on the same order cannot both apply a transition.
    """

    def __init__(self, data_store: DataStorePort) -> None:
        self._store = data_store

    async def execute(self, input_data: TransitionOrderStatusInput) -> Order:
        AccessPolicy.require(input_data.principal, Capability.ADMINISTER)
        rows = await self._store.select(Table.ORDERS, Query.where(Filter.eq("id", input_data.order_id), limit=1))
        if not rows:
            raise NotFoundError("Order not found.", context={"order_id": input_data.order_id})
        order = Order.from_row(rows[0])

        target = input_data.new_status
        if not order.status.can_transition_to(target):
            raise ValidationError(
                f"Cannot move an order from '{order.status.value}' to '{target.value}'.",
                context={"order_id": order.id, "from": order.status.value, "to": target.value},
            )

        updated = await self._store.update(
            Table.ORDERS,
            (Filter.eq("id", order.id), Filter.eq("status", order.status.value)),
            {"status": target.value},
        )
        if not updated:
            raise ConflictError("Order status changed concurrently; reload and retry.", context={"order_id": order.id})
        logger.info("Order status changed", order_id=order.id, from_status=order.status.value, to_status=target.value)
        return Order.from_row(updated[0])
