"""initial schema

Revision ID: 0001
Revises:
Create Date: 2026-10-19
"""
from alembic import op
import sqlalchemy as sa

revision = "0001"
down_revision = None
branch_labels = None
depends_on = None


def upgrade() -> None:
    op.create_table(
        "order_status",
        sa.Column("id", sa.LargeBinary(16), primary_key=True),
        sa.Column("name", sa.String(50), nullable=False, unique=True),
    )
    op.create_table(
        "order_service",
        sa.Column("id", sa.LargeBinary(16), primary_key=True),
        sa.Column("name", sa.String(100), nullable=False),
    )
    op.create_table(
        "order_product",
        sa.Column("id", sa.LargeBinary(16), primary_key=True),
        sa.Column("service_id", sa.LargeBinary(16), sa.ForeignKey("order_service.id"), nullable=False),
        sa.Column("name", sa.String(100), nullable=False),
        sa.Column("unit_cost", sa.Numeric(10, 2), nullable=False),
        sa.Column("unit_price", sa.Numeric(10, 2), nullable=False),
    )
    op.create_table(
        "orders",
        sa.Column("id", sa.LargeBinary(16), primary_key=True),
        sa.Column("reseller_id", sa.LargeBinary(16), nullable=False),
        sa.Column("customer_id", sa.LargeBinary(16), nullable=False),
        sa.Column("status_id", sa.LargeBinary(16), sa.ForeignKey("order_status.id"), nullable=False),
        sa.Column("created_at", sa.DateTime(timezone=True), nullable=False),
    )
    op.create_index("ix_orders_created_at", "orders", ["created_at"])
    op.create_table(
        "order_item",
        sa.Column("id", sa.LargeBinary(16), primary_key=True),
        sa.Column("order_id", sa.LargeBinary(16), sa.ForeignKey("orders.id", ondelete="CASCADE"), nullable=False),
        sa.Column("product_id", sa.LargeBinary(16), sa.ForeignKey("order_product.id"), nullable=False),
        sa.Column("service_id", sa.LargeBinary(16), sa.ForeignKey("order_service.id"), nullable=False),
        sa.Column("quantity", sa.Integer, nullable=True),
    )
    op.create_index("ix_order_item_order_id", "order_item", ["order_id"])


def downgrade() -> None:
    op.drop_index("ix_order_item_order_id", table_name="order_item")
    op.drop_table("order_item")
    op.drop_index("ix_orders_created_at", table_name="orders")
    op.drop_table("orders")
    op.drop_table("order_product")
    op.drop_table("order_service")
    op.drop_table("order_status")
