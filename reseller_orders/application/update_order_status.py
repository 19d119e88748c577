import logging
from uuid import UUID

logger = logging.getLogger(__name__)


class UpdateOrderStatusUseCase:
    """Move an order to any existing status.

    There is no transition graph: any known status name may replace any other.
    Concurrent updates of the same order are last-writer-wins.
    """

    def __init__(self, unit_of_work):
        self._uow = unit_of_work

    async def __call__(self, order_id: UUID, new_status_name: str) -> bool:
        async with self._uow() as uow:
            order = await uow.orders.get_by_id(order_id)
            if not order:
                logger.warning(f"Status update skipped: order {order_id} not found")
                return False

            status = await uow.catalog.get_status_by_name(new_status_name)
            if not status:
                logger.warning(f"Status update skipped: status {new_status_name!r} not found")
                return False

            order.status_id = status.id
            await uow.orders.update(order)
            await uow.commit()

        logger.info(f"Order {order_id} moved to status {status.name!r}")
        return True
