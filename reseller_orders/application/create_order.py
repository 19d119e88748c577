import logging
from datetime import datetime, timezone
from uuid import UUID

from reseller_orders.domain.models import Order

logger = logging.getLogger(__name__)


class CreateOrderUseCase:
    """Persist a new order together with its items.

    The draft is trusted as given: status, product and service references
    and quantities are checked by request validation beforehand.
    """

    def __init__(self, unit_of_work):
        self._uow = unit_of_work

    async def __call__(self, draft: Order) -> UUID:
        order = draft.model_copy(update={"created_at": datetime.now(timezone.utc)}, deep=True)
        for item in order.items:
            item.order_id = order.id

        async with self._uow() as uow:
            await uow.orders.add(order)
            await uow.commit()

        logger.info(f"Order created: {order.id} with {len(order.items)} item(s)")
        return order.id
