"""Derived figures for orders: line totals, order totals and monthly profit.

Everything here works on rows already read from the store and never touches
the database, so the arithmetic can be checked in isolation. Money values stay
``Decimal`` end to end and are never rounded.
"""
from collections import defaultdict
from decimal import Decimal
from typing import Dict, Iterable, List, NamedTuple, Optional, Tuple

from reseller_orders.domain.models import (
    COMPLETED_STATUS_NAME,
    MonthlyProfit,
    OrderDetail,
    OrderItemDetail,
    OrderRecord,
    OrderSummary,
    PricedItem,
    ProfitRow,
)

ZERO = Decimal("0")


class LineTotal(NamedTuple):
    cost: Decimal
    price: Decimal


class OrderTotals(NamedTuple):
    total_cost: Decimal
    total_price: Decimal
    item_count: int


def compute_line_total(unit_cost: Decimal, unit_price: Decimal, quantity: Optional[int]) -> LineTotal:
    """Cost and price of one line. A missing quantity counts as zero."""
    qty = quantity or 0
    return LineTotal(cost=unit_cost * qty, price=unit_price * qty)


def compute_order_totals(items: Iterable[PricedItem]) -> OrderTotals:
    total_cost = ZERO
    total_price = ZERO
    count = 0
    for item in items:
        line = compute_line_total(item.unit_cost, item.unit_price, item.quantity)
        total_cost += line.cost
        total_price += line.price
        count += 1
    return OrderTotals(total_cost=total_cost, total_price=total_price, item_count=count)


def compute_monthly_profits(rows: Iterable[ProfitRow]) -> List[MonthlyProfit]:
    """Profit of completed orders grouped by the order's creation month.

    Rows of orders in any other status are ignored. Months without completed
    items do not appear in the result, which is sorted by (year, month).
    """
    profits: Dict[Tuple[int, int], Decimal] = defaultdict(lambda: ZERO)
    for row in rows:
        if row.status_name != COMPLETED_STATUS_NAME:
            continue
        key = (row.order_created_at.year, row.order_created_at.month)
        profits[key] += (row.quantity or 0) * (row.unit_price - row.unit_cost)

    return [
        MonthlyProfit(year=year, month=month, profit=profit)
        for (year, month), profit in sorted(profits.items())
    ]


def build_summary(record: OrderRecord) -> OrderSummary:
    totals = compute_order_totals(record.items)
    return OrderSummary(
        id=record.id,
        reseller_id=record.reseller_id,
        customer_id=record.customer_id,
        status_id=record.status_id,
        status_name=record.status_name,
        item_count=totals.item_count,
        total_cost=totals.total_cost,
        total_price=totals.total_price,
        created_at=record.created_at
    )


def build_item_detail(item: PricedItem) -> OrderItemDetail:
    line = compute_line_total(item.unit_cost, item.unit_price, item.quantity)
    return OrderItemDetail(
        id=item.id,
        order_id=item.order_id,
        service_id=item.service_id,
        service_name=item.service_name,
        product_id=item.product_id,
        product_name=item.product_name,
        quantity=item.quantity or 0,
        unit_cost=item.unit_cost,
        unit_price=item.unit_price,
        total_cost=line.cost,
        total_price=line.price
    )


def build_detail(record: OrderRecord) -> OrderDetail:
    summary = build_summary(record)
    return OrderDetail(
        **summary.model_dump(),
        items=[build_item_detail(item) for item in record.items]
    )
