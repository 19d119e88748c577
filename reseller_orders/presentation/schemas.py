from pydantic import BaseModel
from datetime import datetime
from decimal import Decimal
from typing import Dict, List, Optional
from uuid import UUID


class CreateOrderItemRequest(BaseModel):
    product_id: UUID
    service_id: UUID
    quantity: int


class CreateOrderRequest(BaseModel):
    reseller_id: UUID
    customer_id: UUID
    status_id: UUID
    items: List[CreateOrderItemRequest] = []


class OrderSummaryResponse(BaseModel):
    id: UUID
    reseller_id: UUID
    customer_id: UUID
    status_id: UUID
    status_name: str
    item_count: int
    total_cost: Decimal
    total_price: Decimal
    created_at: datetime

    @classmethod
    def from_domain(cls, summary):
        return cls(
            id=summary.id,
            reseller_id=summary.reseller_id,
            customer_id=summary.customer_id,
            status_id=summary.status_id,
            status_name=summary.status_name,
            item_count=summary.item_count,
            total_cost=summary.total_cost,
            total_price=summary.total_price,
            created_at=summary.created_at
        )


class OrderItemResponse(BaseModel):
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


class OrderDetailResponse(OrderSummaryResponse):
    items: List[OrderItemResponse] = []

    @classmethod
    def from_domain(cls, detail):
        return cls(
            id=detail.id,
            reseller_id=detail.reseller_id,
            customer_id=detail.customer_id,
            status_id=detail.status_id,
            status_name=detail.status_name,
            item_count=detail.item_count,
            total_cost=detail.total_cost,
            total_price=detail.total_price,
            created_at=detail.created_at,
            items=[OrderItemResponse(**item.model_dump()) for item in detail.items]
        )


class MonthlyProfitResponse(BaseModel):
    year: int
    month: int
    profit: Decimal


class ProblemDetails(BaseModel):
    type: str = "https://tools.ietf.org/html/rfc7231#section-6.5.1"
    title: str = "One or more validation errors occurred."
    status: int = 400
    instance: Optional[str] = None
    errors: Dict[str, List[str]] = {}


class ErrorResponse(BaseModel):
    detail: str
