import uuid
from typing import List
from fastapi import APIRouter, Depends, HTTPException, status

from reseller_orders.database import get_session_factory
from reseller_orders.presentation.schemas import (
    CreateOrderRequest, OrderSummaryResponse, OrderDetailResponse,
    MonthlyProfitResponse, ProblemDetails, ErrorResponse
)
from reseller_orders.application.create_order import CreateOrderUseCase
from reseller_orders.application.existence_checks import ExistenceChecks
from reseller_orders.application.get_monthly_profits import GetMonthlyProfitsUseCase
from reseller_orders.application.get_orders import (
    GetOrderSummariesUseCase, GetOrderDetailUseCase
)
from reseller_orders.application.update_order_status import UpdateOrderStatusUseCase
from reseller_orders.application.validation import (
    RequestKind, CreateOrderDTO, UpdateOrderStatusDTO, OrdersByStatusNameDTO, validate_request
)
from reseller_orders.domain.models import Order, OrderItem
from reseller_orders.infrastructure.unit_of_work import UnitOfWork

router = APIRouter()


def get_unit_of_work() -> UnitOfWork:
    return UnitOfWork(get_session_factory())


# Use case factories
def get_summaries_use_case(uow: UnitOfWork = Depends(get_unit_of_work)):
    return GetOrderSummariesUseCase(uow)


def get_detail_use_case(uow: UnitOfWork = Depends(get_unit_of_work)):
    return GetOrderDetailUseCase(uow)


def get_update_status_use_case(uow: UnitOfWork = Depends(get_unit_of_work)):
    return UpdateOrderStatusUseCase(uow)


def get_create_order_use_case(uow: UnitOfWork = Depends(get_unit_of_work)):
    return CreateOrderUseCase(uow)


def get_monthly_profits_use_case(uow: UnitOfWork = Depends(get_unit_of_work)):
    return GetMonthlyProfitsUseCase(uow)


def get_existence_checks(uow: UnitOfWork = Depends(get_unit_of_work)):
    return ExistenceChecks(uow)


@router.get("/orders", response_model=List[OrderSummaryResponse])
async def list_orders(
    use_case: GetOrderSummariesUseCase = Depends(get_summaries_use_case)
):
    """All orders, newest first"""
    summaries = await use_case()
    return [OrderSummaryResponse.from_domain(s) for s in summaries]


@router.get("/orders/monthly-profits", response_model=List[MonthlyProfitResponse])
async def monthly_profits(
    use_case: GetMonthlyProfitsUseCase = Depends(get_monthly_profits_use_case)
):
    """Profit per month for completed orders"""
    profits = await use_case()
    return [MonthlyProfitResponse(year=p.year, month=p.month, profit=p.profit) for p in profits]


@router.get(
    "/orders/status/{status_name}",
    response_model=List[OrderSummaryResponse],
    responses={400: {"model": ProblemDetails}, 404: {"model": ErrorResponse}}
)
async def list_orders_by_status(
    status_name: str,
    use_case: GetOrderSummariesUseCase = Depends(get_summaries_use_case),
    checks: ExistenceChecks = Depends(get_existence_checks)
):
    """Orders in the given status, e.g. 'Failed'"""
    await validate_request(
        RequestKind.ORDERS_BY_STATUS_NAME, OrdersByStatusNameDTO(status_name=status_name), checks
    )
    summaries = await use_case(status_name)
    if not summaries:
        raise HTTPException(status_code=404, detail=f"No orders found with status '{status_name}'.")
    return [OrderSummaryResponse.from_domain(s) for s in summaries]


@router.get(
    "/orders/{order_id}",
    response_model=OrderDetailResponse,
    responses={404: {"model": ErrorResponse}}
)
async def get_order(
    order_id: uuid.UUID,
    use_case: GetOrderDetailUseCase = Depends(get_detail_use_case)
):
    """Order with its priced line items"""
    detail = await use_case(order_id)
    if not detail:
        raise HTTPException(status_code=404, detail="Order not found")
    return OrderDetailResponse.from_domain(detail)


@router.patch(
    "/orders/{order_id}/status/{new_status}",
    response_model=OrderDetailResponse,
    responses={400: {"model": ProblemDetails}, 404: {"model": ErrorResponse}}
)
async def update_order_status(
    order_id: uuid.UUID,
    new_status: str,
    use_case: UpdateOrderStatusUseCase = Depends(get_update_status_use_case),
    get_detail: GetOrderDetailUseCase = Depends(get_detail_use_case),
    checks: ExistenceChecks = Depends(get_existence_checks)
):
    """Move an order to another status, e.g. 'In Progress'"""
    await validate_request(
        RequestKind.UPDATE_ORDER_STATUS,
        UpdateOrderStatusDTO(order_id=order_id, new_status=new_status),
        checks
    )
    if not await use_case(order_id, new_status):
        raise HTTPException(status_code=400, detail=f"Failed to update status to '{new_status}'.")

    detail = await get_detail(order_id)
    if not detail:
        raise HTTPException(status_code=404, detail="Order not found")
    return OrderDetailResponse.from_domain(detail)


@router.post(
    "/orders",
    response_model=OrderDetailResponse,
    responses={400: {"model": ProblemDetails}},
    status_code=status.HTTP_201_CREATED
)
async def create_order(
    request: CreateOrderRequest,
    use_case: CreateOrderUseCase = Depends(get_create_order_use_case),
    get_detail: GetOrderDetailUseCase = Depends(get_detail_use_case),
    checks: ExistenceChecks = Depends(get_existence_checks)
):
    """Create an order with its line items"""
    dto = CreateOrderDTO(**request.model_dump())
    await validate_request(RequestKind.CREATE_ORDER, dto, checks)

    order_id = uuid.uuid4()
    draft = Order(
        id=order_id,
        reseller_id=dto.reseller_id,
        customer_id=dto.customer_id,
        status_id=dto.status_id,
        items=[
            OrderItem(
                id=uuid.uuid4(),
                order_id=order_id,
                product_id=item.product_id,
                service_id=item.service_id,
                quantity=item.quantity
            )
            for item in dto.items
        ]
    )
    new_order_id = await use_case(draft)

    detail = await get_detail(new_order_id)
    return OrderDetailResponse.from_domain(detail)
