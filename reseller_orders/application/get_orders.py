import logging
from typing import Optional, List
from uuid import UUID

from reseller_orders.domain.models import Order, OrderDetail, OrderSummary
from reseller_orders.domain.aggregation import build_detail, build_summary

logger = logging.getLogger(__name__)


class GetOrderSummariesUseCase:
    def __init__(self, unit_of_work):
        self._uow = unit_of_work

    async def __call__(self, status_name: Optional[str] = None) -> List[OrderSummary]:
        """All orders, newest first. With a status name, only orders in that status."""
        async with self._uow() as uow:
            records = await uow.orders.list_records(status_name)

        logger.debug(f"Loaded {len(records)} orders (status filter: {status_name!r})")
        return [build_summary(record) for record in records]


class GetOrderDetailUseCase:
    def __init__(self, unit_of_work):
        self._uow = unit_of_work

    async def __call__(self, order_id: UUID) -> Optional[OrderDetail]:
        async with self._uow() as uow:
            record = await uow.orders.get_record(order_id)

        if not record:
            logger.debug(f"Order {order_id} not found")
            return None
        return build_detail(record)


class GetOrderUseCase:
    def __init__(self, unit_of_work):
        self._uow = unit_of_work

    async def __call__(self, order_id: UUID) -> Optional[Order]:
        async with self._uow() as uow:
            return await uow.orders.get_by_id(order_id)
