"""
Order API endpoints
"""
from fastapi import APIRouter, Depends, HTTPException, status, Query
from sqlalchemy.orm import Session
from typing import List, Optional

from order_board.database import get_db
from order_board.exceptions import (
    InvalidTransitionError,
    OrderNotFoundError,
    ProductNotFoundError,
    ProductServiceError,
    ProductServiceUnavailableError
)
from order_board.services.order_service import OrderService
from order_board.schemas.order import (
    OrderCreate,
    OrderFilter,
    OrderStatus,
    OrderStatusUpdate,
    OrderResponse,
    OrderListResponse
)

router = APIRouter(prefix="/orders", tags=["orders"])


def get_order_service(db: Session = Depends(get_db)) -> OrderService:
    """Dependency to get OrderService instance"""
    return OrderService(db)


@router.get("", response_model=OrderListResponse, summary="List orders")
def get_orders(
    statuses: List[OrderStatus] = Query([], alias="status", description="Statuses to include (repeatable)"),
    table: Optional[str] = Query(None, description="Table identifier"),
    service: OrderService = Depends(get_order_service)
):
    """
    Retrieve orders, newest first

    - **status**: Repeat to include several statuses; omit for all
    - **table**: Only orders of this table
    """
    return service.get_orders(OrderFilter(statuses=statuses, table_identifier=table))


@router.get("/{order_id}", response_model=OrderResponse, summary="Get order by ID")
def get_order(
    order_id: str,
    service: OrderService = Depends(get_order_service)
):
    """
    Retrieve a specific order by ID

    - **order_id**: Order ID
    """
    order = service.get_order_by_id(order_id)
    if not order:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail=f"Order with id={order_id} not found"
        )
    return order


@router.post("", response_model=OrderResponse, status_code=status.HTTP_201_CREATED, summary="Create order")
async def create_order(
    order_data: OrderCreate,
    service: OrderService = Depends(get_order_service)
):
    """
    Create a new order

    Process:
    1. Resolve every product and freeze its name and price
    2. Calculate total amount
    3. Save order with status pending

    - **table_identifier**: Table label (required)
    - **notes**: Notes for the kitchen (optional)
    - **items**: Products and quantities (at least one)
    """
    try:
        return await service.create_order(order_data)
    except ProductNotFoundError as e:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail=str(e)
        )
    except ProductServiceUnavailableError as e:
        raise HTTPException(
            status_code=status.HTTP_503_SERVICE_UNAVAILABLE,
            detail=str(e)
        )
    except ProductServiceError as e:
        raise HTTPException(
            status_code=status.HTTP_502_BAD_GATEWAY,
            detail=str(e)
        )


@router.patch("/{order_id}/status", response_model=OrderResponse, summary="Update order status")
def update_order_status(
    order_id: str,
    status_data: OrderStatusUpdate,
    service: OrderService = Depends(get_order_service)
):
    """
    Move an order along its lifecycle

    - **order_id**: Order ID
    - **status**: pending, preparing, ready, served, paid, cancelled
    - **role**: Acting role (optional); restricts the allowed transitions
    """
    try:
        return service.update_order_status(order_id, status_data.status, status_data.role)
    except OrderNotFoundError as e:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail=str(e)
        )
    except InvalidTransitionError as e:
        raise HTTPException(
            status_code=status.HTTP_409_CONFLICT,
            detail=str(e)
        )
