"""Inbound request validation.

Each request kind has one async validator registered in ``VALIDATORS``. A
validator returns ``{field: [messages]}``; an empty mapping means the request
is valid. Existence rules go through ``ExistenceChecks``.
"""
import enum
import logging
from typing import Awaitable, Callable, Dict, List
from uuid import UUID
from pydantic import BaseModel

from reseller_orders.domain.exceptions import RequestValidationFailed

logger = logging.getLogger(__name__)

MAX_STATUS_NAME_LENGTH = 50

Errors = Dict[str, List[str]]


class RequestKind(str, enum.Enum):
    CREATE_ORDER = "create_order"
    UPDATE_ORDER_STATUS = "update_order_status"
    ORDERS_BY_STATUS_NAME = "orders_by_status_name"


class CreateOrderItemDTO(BaseModel):
    product_id: UUID
    service_id: UUID
    quantity: int


class CreateOrderDTO(BaseModel):
    reseller_id: UUID
    customer_id: UUID
    status_id: UUID
    items: List[CreateOrderItemDTO] = []


class UpdateOrderStatusDTO(BaseModel):
    order_id: UUID
    new_status: str


class OrdersByStatusNameDTO(BaseModel):
    status_name: str


def _add(errors: Errors, field: str, message: str) -> None:
    errors.setdefault(field, []).append(message)


def _is_empty(value: UUID) -> bool:
    return value.int == 0


async def _check_status_name(errors: Errors, field: str, label: str, name: str, checks) -> None:
    if not name or not name.strip():
        _add(errors, field, f"{label} is required.")
        return
    if len(name) > MAX_STATUS_NAME_LENGTH:
        _add(errors, field, f"{label} cannot exceed {MAX_STATUS_NAME_LENGTH} characters.")
    if not await checks.status_name_exists(name):
        _add(errors, field, f"Order status '{name}' does not exist.")


async def _check_reference(errors: Errors, field: str, label: str, value: UUID, exists, missing_message: str) -> None:
    if _is_empty(value):
        _add(errors, field, f"'{label}' must not be empty.")
    elif not await exists(value):
        _add(errors, field, missing_message)


async def validate_create_order(request: CreateOrderDTO, checks) -> Errors:
    errors: Errors = {}

    await _check_reference(
        errors, "status_id", "Status Id", request.status_id, checks.status_exists,
        "Status with the given Id does not exist."
    )

    if not request.items:
        _add(errors, "items", "Order must contain at least one item.")

    for index, item in enumerate(request.items):
        prefix = f"items[{index}]"
        await _check_reference(
            errors, f"{prefix}.product_id", "Product Id", item.product_id, checks.product_exists,
            "Product with the given Id does not exist."
        )
        await _check_reference(
            errors, f"{prefix}.service_id", "Service Id", item.service_id, checks.service_exists,
            "Service with the given Id does not exist."
        )
        if item.quantity <= 0:
            _add(errors, f"{prefix}.quantity", "Quantity must be greater than zero.")

    return errors


async def validate_update_order_status(request: UpdateOrderStatusDTO, checks) -> Errors:
    errors: Errors = {}

    if _is_empty(request.order_id):
        _add(errors, "order_id", "OrderId is required.")
    elif not await checks.order_exists(request.order_id):
        _add(errors, "order_id", f"Order with ID '{request.order_id}' does not exist.")

    await _check_status_name(errors, "new_status", "NewStatus", request.new_status, checks)
    return errors


async def validate_orders_by_status_name(request: OrdersByStatusNameDTO, checks) -> Errors:
    errors: Errors = {}
    await _check_status_name(errors, "status_name", "StatusName", request.status_name, checks)
    return errors


VALIDATORS: Dict[RequestKind, Callable[..., Awaitable[Errors]]] = {
    RequestKind.CREATE_ORDER: validate_create_order,
    RequestKind.UPDATE_ORDER_STATUS: validate_update_order_status,
    RequestKind.ORDERS_BY_STATUS_NAME: validate_orders_by_status_name,
}


async def validate_request(kind: RequestKind, request: BaseModel, checks) -> None:
    errors = await VALIDATORS[kind](request, checks)
    if errors:
        logger.warning(f"Rejected {kind.value} request: {errors}")
        raise RequestValidationFailed(errors)
