"""
Order store contract

Role boards and the assembly session only talk to this interface. Every call
is asynchronous and may fail; implementations propagate failures and never
retry on their own.
"""
from abc import ABC, abstractmethod
from typing import List, Optional

from order_board.schemas.order import OrderCreate, OrderFilter, OrderResponse, OrderStatus, StaffRole


class OrderStore(ABC):
    """Single source of truth for order records"""

    @abstractmethod
    async def create(self, draft: OrderCreate) -> OrderResponse:
        """
        Create an order from a draft with prices snapshotted from the catalog

        Raises:
            ProductNotFoundError: If any product cannot be resolved; no order
                is persisted
        """

    @abstractmethod
    async def list(self, order_filter: OrderFilter) -> List[OrderResponse]:
        """Orders matching the filter, newest first by created_at"""

    @abstractmethod
    async def get(self, order_id: str) -> OrderResponse:
        """
        Raises:
            OrderNotFoundError: If the id is unknown
        """

    @abstractmethod
    async def update_status(
        self,
        order_id: str,
        new_status: OrderStatus,
        role: Optional[StaffRole] = None
    ) -> OrderResponse:
        """
        Persist a status change

        Raises:
            OrderNotFoundError: If the id is unknown
            InvalidTransitionError: If the backing service rejects the change
        """

    async def aclose(self) -> None:
        """Release transport resources"""
