import uuid
from sqlalchemy import Table, Column, String, Integer, Numeric, DateTime, LargeBinary, ForeignKey, MetaData
from sqlalchemy.types import TypeDecorator

metadata = MetaData()


class BinaryUUID(TypeDecorator):
    """UUID stored as its 16 raw bytes"""
    impl = LargeBinary(16)
    cache_ok = True

    def process_bind_param(self, value, dialect):
        if value is None:
            return None
        if not isinstance(value, uuid.UUID):
            value = uuid.UUID(str(value))
        return value.bytes

    def process_result_value(self, value, dialect):
        if value is None:
            return None
        return uuid.UUID(bytes=bytes(value))


order_status_tbl = Table(
    "order_status",
    metadata,
    Column("id", BinaryUUID, primary_key=True),
    Column("name", String(50), nullable=False, unique=True)
)


order_service_tbl = Table(
    "order_service",
    metadata,
    Column("id", BinaryUUID, primary_key=True),
    Column("name", String(100), nullable=False)
)


order_product_tbl = Table(
    "order_product",
    metadata,
    Column("id", BinaryUUID, primary_key=True),
    Column("service_id", BinaryUUID, ForeignKey("order_service.id"), nullable=False),
    Column("name", String(100), nullable=False),
    Column("unit_cost", Numeric(10, 2, asdecimal=True), nullable=False),
    Column("unit_price", Numeric(10, 2, asdecimal=True), nullable=False)
)


orders_tbl = Table(
    "orders",
    metadata,
    Column("id", BinaryUUID, primary_key=True),
    Column("reseller_id", BinaryUUID, nullable=False),
    Column("customer_id", BinaryUUID, nullable=False),
    Column("status_id", BinaryUUID, ForeignKey("order_status.id"), nullable=False),
    Column("created_at", DateTime(timezone=True), nullable=False, index=True)
)


order_item_tbl = Table(
    "order_item",
    metadata,
    Column("id", BinaryUUID, primary_key=True),
    Column("order_id", BinaryUUID, ForeignKey("orders.id", ondelete="CASCADE"), nullable=False, index=True),
    Column("product_id", BinaryUUID, ForeignKey("order_product.id"), nullable=False),
    Column("service_id", BinaryUUID, ForeignKey("order_service.id"), nullable=False),
    Column("quantity", Integer, nullable=True)
)
