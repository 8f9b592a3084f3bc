"""
Schemas package
"""
from order_board.schemas.order import (
    OrderStatus,
    StaffRole,
    OrderLineCreate,
    OrderCreate,
    OrderStatusUpdate,
    OrderFilter,
    OrderLineResponse,
    OrderResponse,
    OrderListResponse,
    OrderEvent
)
from order_board.schemas.product import (
    ProductCreate,
    ProductUpdate,
    ProductResponse,
    ProductListResponse,
    ProductSnapshot
)

__all__ = [
    "OrderStatus",
    "StaffRole",
    "OrderLineCreate",
    "OrderCreate",
    "OrderStatusUpdate",
    "OrderFilter",
    "OrderLineResponse",
    "OrderResponse",
    "OrderListResponse",
    "OrderEvent",
    "ProductCreate",
    "ProductUpdate",
    "ProductResponse",
    "ProductListResponse",
    "ProductSnapshot"
]
