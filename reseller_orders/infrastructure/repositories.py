from typing import Optional, List, Dict
from uuid import UUID
from datetime import datetime, timezone
from sqlalchemy import Select, select, insert, update
from sqlalchemy.ext.asyncio import AsyncSession

from reseller_orders.domain.models import Order, OrderItem, OrderRecord, OrderStatus, PricedItem, ProfitRow
from reseller_orders.infrastructure.db_schema import (
    orders_tbl, order_item_tbl, order_status_tbl, order_product_tbl, order_service_tbl
)
from reseller_orders.application.interfaces import OrderRepository, CatalogRepository


def _as_utc(value: datetime) -> datetime:
    # Some drivers hand back naive datetimes; everything is written in UTC.
    if value.tzinfo is None:
        return value.replace(tzinfo=timezone.utc)
    return value


class SQLAlchemyOrderRepository(OrderRepository):
    def __init__(self, session: AsyncSession):
        self._session = session

    async def get_by_id(self, order_id: UUID) -> Optional[Order]:
        result = await self._session.execute(
            select(orders_tbl).where(orders_tbl.c.id == order_id)
        )
        row = result.fetchone()
        if not row:
            return None

        items = await self._session.execute(
            select(order_item_tbl).where(order_item_tbl.c.order_id == order_id)
        )
        return self._to_domain(row, items.fetchall())

    async def get_record(self, order_id: UUID) -> Optional[OrderRecord]:
        records = await self._fetch_records(orders_tbl.c.id == order_id)
        return records[0] if records else None

    async def list_records(self, status_name: Optional[str] = None) -> List[OrderRecord]:
        if status_name is None:
            return await self._fetch_records()
        return await self._fetch_records(order_status_tbl.c.name == status_name)

    async def list_profit_rows(self, status_name: str) -> List[ProfitRow]:
        result = await self._session.execute(
            select(
                orders_tbl.c.created_at,
                order_status_tbl.c.name.label("status_name"),
                order_item_tbl.c.quantity,
                order_product_tbl.c.unit_cost,
                order_product_tbl.c.unit_price
            )
            .select_from(order_item_tbl)
            .join(orders_tbl, order_item_tbl.c.order_id == orders_tbl.c.id)
            .join(order_status_tbl, orders_tbl.c.status_id == order_status_tbl.c.id)
            .join(order_product_tbl, order_item_tbl.c.product_id == order_product_tbl.c.id)
            .where(order_status_tbl.c.name == status_name)
        )
        return [
            ProfitRow(
                order_created_at=_as_utc(row.created_at),
                status_name=row.status_name,
                quantity=row.quantity,
                unit_cost=row.unit_cost,
                unit_price=row.unit_price
            )
            for row in result.fetchall()
        ]

    async def exists(self, order_id: UUID) -> bool:
        result = await self._session.execute(
            select(orders_tbl.c.id).where(orders_tbl.c.id == order_id).limit(1)
        )
        return result.fetchone() is not None

    async def add(self, order: Order) -> None:
        await self._session.execute(
            insert(orders_tbl).values(
                id=order.id,
                reseller_id=order.reseller_id,
                customer_id=order.customer_id,
                status_id=order.status_id,
                created_at=order.created_at
            )
        )
        if order.items:
            await self._session.execute(
                insert(order_item_tbl),
                [
                    {
                        "id": item.id,
                        "order_id": order.id,
                        "product_id": item.product_id,
                        "service_id": item.service_id,
                        "quantity": item.quantity
                    }
                    for item in order.items
                ]
            )

    async def update(self, order: Order) -> None:
        stmt = (
            update(orders_tbl)
            .where(orders_tbl.c.id == order.id)
            .values(
                reseller_id=order.reseller_id,
                customer_id=order.customer_id,
                status_id=order.status_id,
                created_at=order.created_at
            )
        )
        await self._session.execute(stmt)

    async def _fetch_records(self, *criteria) -> List[OrderRecord]:
        matching_ids = (
            select(orders_tbl.c.id)
            .select_from(orders_tbl)
            .join(order_status_tbl, orders_tbl.c.status_id == order_status_tbl.c.id)
            .where(*criteria)
        )
        stmt = (
            select(orders_tbl, order_status_tbl.c.name.label("status_name"))
            .select_from(orders_tbl)
            .join(order_status_tbl, orders_tbl.c.status_id == order_status_tbl.c.id)
            .where(*criteria)
            .order_by(orders_tbl.c.created_at.desc())
        )
        result = await self._session.execute(stmt)
        rows = result.fetchall()
        if not rows:
            return []

        # Items are selected with the same criteria so the IN list never grows with the result.
        items = await self._fetch_priced_items(matching_ids)
        return [
            OrderRecord(
                id=row.id,
                reseller_id=row.reseller_id,
                customer_id=row.customer_id,
                status_id=row.status_id,
                status_name=row.status_name,
                created_at=_as_utc(row.created_at),
                items=items.get(row.id, [])
            )
            for row in rows
        ]

    async def _fetch_priced_items(self, order_ids_query: Select) -> Dict[UUID, List[PricedItem]]:
        result = await self._session.execute(
            select(
                order_item_tbl,
                order_product_tbl.c.name.label("product_name"),
                order_product_tbl.c.unit_cost,
                order_product_tbl.c.unit_price,
                order_service_tbl.c.name.label("service_name")
            )
            .select_from(order_item_tbl)
            .join(order_product_tbl, order_item_tbl.c.product_id == order_product_tbl.c.id)
            .join(order_service_tbl, order_item_tbl.c.service_id == order_service_tbl.c.id)
            .where(order_item_tbl.c.order_id.in_(order_ids_query))
        )
        by_order: Dict[UUID, List[PricedItem]] = {}
        for row in result.fetchall():
            by_order.setdefault(row.order_id, []).append(
                PricedItem(
                    id=row.id,
                    order_id=row.order_id,
                    product_id=row.product_id,
                    product_name=row.product_name,
                    service_id=row.service_id,
                    service_name=row.service_name,
                    unit_cost=row.unit_cost,
                    unit_price=row.unit_price,
                    quantity=row.quantity
                )
            )
        return by_order

    def _to_domain(self, row, item_rows) -> Order:
        """DB → Domain"""
        return Order(
            id=row.id,
            reseller_id=row.reseller_id,
            customer_id=row.customer_id,
            status_id=row.status_id,
            created_at=_as_utc(row.created_at),
            items=[
                OrderItem(
                    id=item.id,
                    order_id=item.order_id,
                    product_id=item.product_id,
                    service_id=item.service_id,
                    quantity=item.quantity
                )
                for item in item_rows
            ]
        )


class SQLAlchemyCatalogRepository(CatalogRepository):
    def __init__(self, session: AsyncSession):
        self._session = session

    async def get_status_by_name(self, name: str) -> Optional[OrderStatus]:
        result = await self._session.execute(
            select(order_status_tbl).where(order_status_tbl.c.name == name)
        )
        row = result.fetchone()
        return OrderStatus(id=row.id, name=row.name) if row else None

    async def status_exists(self, status_id: UUID) -> bool:
        return await self._any(order_status_tbl, order_status_tbl.c.id == status_id)

    async def status_name_exists(self, name: str) -> bool:
        return await self._any(order_status_tbl, order_status_tbl.c.name == name)

    async def product_exists(self, product_id: UUID) -> bool:
        return await self._any(order_product_tbl, order_product_tbl.c.id == product_id)

    async def service_exists(self, service_id: UUID) -> bool:
        return await self._any(order_service_tbl, order_service_tbl.c.id == service_id)

    async def _any(self, table, criterion) -> bool:
        result = await self._session.execute(
            select(table.c.id).where(criterion).limit(1)
        )
        return result.fetchone() is not None
