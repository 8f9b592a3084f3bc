"""
Pydantic schemas for request/response validation
"""
from decimal import Decimal
from enum import Enum
from pydantic import BaseModel, Field, ConfigDict
from typing import List, Optional


class OrderStatus(str, Enum):
    """Order lifecycle states"""
    PENDING = "pending"
    PREPARING = "preparing"
    READY = "ready"
    SERVED = "served"
    PAID = "paid"
    CANCELLED = "cancelled"


class StaffRole(str, Enum):
    """Staff roles that act on orders"""
    ADMIN = "admin"
    CASHIER = "cashier"
    KITCHEN = "kitchen"
    WAITER = "waiter"


class OrderLineCreate(BaseModel):
    """One requested product within an order draft"""
    product_id: str = Field(..., min_length=1, description="Product ID")
    quantity: int = Field(..., gt=0, description="Quantity to order")


class OrderCreate(BaseModel):
    """Schema for creating a new order (the draft)"""
    table_identifier: str = Field(..., min_length=1, max_length=50, description="Table label")
    notes: Optional[str] = Field(None, max_length=500, description="Free text for the kitchen")
    items: List[OrderLineCreate] = Field(..., min_length=1, description="Requested products")


class OrderStatusUpdate(BaseModel):
    """Schema for updating order status"""
    status: OrderStatus = Field(..., description="Requested status")
    role: Optional[StaffRole] = Field(None, description="Role issuing the change")


class OrderFilter(BaseModel):
    """Criteria for listing orders; empty statuses means any status"""
    statuses: List[OrderStatus] = Field(default_factory=list)
    table_identifier: Optional[str] = None


class OrderLineResponse(BaseModel):
    """Snapshotted order line"""
    product_id: str
    product_name: str
    price_at_order: Decimal
    quantity: int

    model_config = ConfigDict(from_attributes=True)


class OrderResponse(BaseModel):
    """Schema for order response"""
    id: str
    table_identifier: str
    items: List[OrderLineResponse]
    total_amount: Decimal
    status: OrderStatus
    notes: Optional[str] = None
    created_at: int
    updated_at: int

    model_config = ConfigDict(from_attributes=True)


class OrderListResponse(BaseModel):
    """Schema for list of orders response"""
    orders: List[OrderResponse]
    total: int


class OrderEvent(BaseModel):
    """Envelope of events published to RabbitMQ"""
    event_type: str
    event_id: str
    event_version: str = "1.0"
    timestamp: str
    source: str = "order-board"
    data: dict
