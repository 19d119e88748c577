"""
Shared fixtures: an in-memory SQLite database with the order schema and the
reference data every test relies on.
"""
import uuid
from datetime import datetime, timedelta, timezone
from decimal import Decimal
from typing import List, Optional

import httpx
import pytest
from sqlalchemy import insert
from sqlalchemy.ext.asyncio import async_sessionmaker, create_async_engine
from sqlalchemy.pool import StaticPool

from reseller_orders.infrastructure.db_schema import (
    metadata, order_status_tbl, order_service_tbl, order_product_tbl, orders_tbl, order_item_tbl
)
from reseller_orders.infrastructure.unit_of_work import UnitOfWork
from reseller_orders.main import app
from reseller_orders.presentation.api import get_unit_of_work


class Catalog:
    """Ids of the reference rows seeded into every test database"""
    STATUS_CREATED = uuid.UUID("5b1c9d8e-0a51-4f7e-9d0c-1f2a3b4c5d01")
    STATUS_IN_PROGRESS = uuid.UUID("5b1c9d8e-0a51-4f7e-9d0c-1f2a3b4c5d02")
    STATUS_COMPLETED = uuid.UUID("5b1c9d8e-0a51-4f7e-9d0c-1f2a3b4c5d03")
    STATUS_FAILED = uuid.UUID("5b1c9d8e-0a51-4f7e-9d0c-1f2a3b4c5d04")

    SERVICE_EMAIL = uuid.UUID("a0e7f3c2-6d14-4b8a-8e2f-3c4d5e6f7a01")
    PRODUCT_MAILBOX = uuid.UUID("c3d9b1a4-7e25-4c6b-9f30-4d5e6f7a8b01")

    STATUSES = {
        "Created": STATUS_CREATED,
        "In Progress": STATUS_IN_PROGRESS,
        "Completed": STATUS_COMPLETED,
        "Failed": STATUS_FAILED,
    }


BASE_TIME = datetime(2024, 1, 15, 12, 0, tzinfo=timezone.utc)


@pytest.fixture
async def engine():
    engine = create_async_engine(
        "sqlite+aiosqlite://",
        poolclass=StaticPool,
        connect_args={"check_same_thread": False},
    )
    async with engine.begin() as conn:
        await conn.run_sync(metadata.create_all)
        await conn.execute(
            insert(order_status_tbl),
            [{"id": status_id, "name": name} for name, status_id in Catalog.STATUSES.items()]
        )
        await conn.execute(insert(order_service_tbl).values(id=Catalog.SERVICE_EMAIL, name="Email"))
        await conn.execute(
            insert(order_product_tbl).values(
                id=Catalog.PRODUCT_MAILBOX,
                service_id=Catalog.SERVICE_EMAIL,
                name="100GB Mailbox",
                unit_cost=Decimal("0.8"),
                unit_price=Decimal("0.9"),
            )
        )
    yield engine
    await engine.dispose()


@pytest.fixture
def uow(engine):
    return UnitOfWork(async_sessionmaker(engine, expire_on_commit=False))


@pytest.fixture
def add_order(engine):
    """Insert an order with a single mailbox item straight into the tables."""
    counter = {"n": 0}

    async def _add(
        quantity: Optional[int] = 1,
        status_id: uuid.UUID = Catalog.STATUS_CREATED,
        created_at: Optional[datetime] = None,
        quantities: Optional[List[Optional[int]]] = None,
    ) -> uuid.UUID:
        counter["n"] += 1
        order_id = uuid.uuid4()
        if created_at is None:
            created_at = BASE_TIME + timedelta(minutes=counter["n"])
        async with engine.begin() as conn:
            await conn.execute(
                insert(orders_tbl).values(
                    id=order_id,
                    reseller_id=uuid.uuid4(),
                    customer_id=uuid.uuid4(),
                    status_id=status_id,
                    created_at=created_at,
                )
            )
            for qty in (quantities if quantities is not None else [quantity]):
                await conn.execute(
                    insert(order_item_tbl).values(
                        id=uuid.uuid4(),
                        order_id=order_id,
                        product_id=Catalog.PRODUCT_MAILBOX,
                        service_id=Catalog.SERVICE_EMAIL,
                        quantity=qty,
                    )
                )
        return order_id

    return _add


@pytest.fixture
async def client(uow):
    app.dependency_overrides[get_unit_of_work] = lambda: uow
    transport = httpx.ASGITransport(app=app)
    async with httpx.AsyncClient(transport=transport, base_url="http://test") as http_client:
        yield http_client
    app.dependency_overrides.clear()
