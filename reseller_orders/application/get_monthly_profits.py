import logging
from typing import List

from reseller_orders.domain.models import COMPLETED_STATUS_NAME, MonthlyProfit
from reseller_orders.domain.aggregation import compute_monthly_profits

logger = logging.getLogger(__name__)


class GetMonthlyProfitsUseCase:
    def __init__(self, unit_of_work):
        self._uow = unit_of_work

    async def __call__(self) -> List[MonthlyProfit]:
        async with self._uow() as uow:
            rows = await uow.orders.list_profit_rows(COMPLETED_STATUS_NAME)

        profits = compute_monthly_profits(rows)
        logger.debug(f"Monthly profits: {len(profits)} month(s) from {len(rows)} completed item(s)")
        return profits
