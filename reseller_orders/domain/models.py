from datetime import datetime
from decimal import Decimal
from typing import Optional, List
from uuid import UUID
from pydantic import BaseModel


COMPLETED_STATUS_NAME = "Completed"


class OrderStatus(BaseModel):
    """Reference data: a named order state"""
    id: UUID
    name: str


class OrderItem(BaseModel):
    id: UUID
    order_id: UUID
    product_id: UUID
    service_id: UUID
    quantity: Optional[int] = None


class Order(BaseModel):
    """Domain Entity: order with its line items"""
    id: UUID
    reseller_id: UUID
    customer_id: UUID
    status_id: UUID
    created_at: Optional[datetime] = None
    items: List[OrderItem] = []


class PricedItem(BaseModel):
    """Order item joined with its product and service rows"""
    id: UUID
    order_id: UUID
    product_id: UUID
    product_name: str
    service_id: UUID
    service_name: str
    unit_cost: Decimal
    unit_price: Decimal
    quantity: Optional[int] = None


class OrderRecord(BaseModel):
    """Order row joined with its status and priced items, as read from the store"""
    id: UUID
    reseller_id: UUID
    customer_id: UUID
    status_id: UUID
    status_name: str
    created_at: datetime
    items: List[PricedItem] = []


class ProfitRow(BaseModel):
    """One order item with the creation date and status of its order"""
    order_created_at: datetime
    status_name: str
    quantity: Optional[int] = None
    unit_cost: Decimal
    unit_price: Decimal


class OrderSummary(BaseModel):
    id: UUID
    reseller_id: UUID
    customer_id: UUID
    status_id: UUID
    status_name: str
    item_count: int
    total_cost: Decimal
    total_price: Decimal
    created_at: datetime


class OrderItemDetail(BaseModel):
    id: UUID
    order_id: UUID
    service_id: UUID
    service_name: str
    product_id: UUID
    product_name: str
    quantity: int
    unit_cost: Decimal
    unit_price: Decimal
    total_cost: Decimal
    total_price: Decimal


class OrderDetail(OrderSummary):
    items: List[OrderItemDetail] = []


class MonthlyProfit(BaseModel):
    year: int
    month: int
    profit: Decimal
