"""
Order Service - Business Logic Layer
"""
from typing import Optional
from sqlalchemy.orm import Session

from order_board.exceptions import OrderNotFoundError, InvalidTransitionError
from order_board.logging_config import get_logger
from order_board.publishers.event_publisher import EventPublisher
from order_board.repositories.order_repository import OrderRepository
from order_board.schemas.order import (
    OrderCreate,
    OrderFilter,
    OrderListResponse,
    OrderResponse,
    OrderStatus,
    StaffRole
)
from order_board.services import lifecycle
from order_board.services.price_snapshot import snapshot_order_lines
from order_board.services.product_client import ProductCatalog, build_catalog

logger = get_logger(__name__)


class OrderService:
    """Service layer for order business logic"""

    def __init__(
        self,
        db: Session,
        catalog: Optional[ProductCatalog] = None,
        event_publisher: Optional[EventPublisher] = None
    ):
        self.repository = OrderRepository(db)
        self.catalog = catalog or build_catalog(db)
        self.event_publisher = event_publisher or EventPublisher()

    def get_orders(self, order_filter: OrderFilter) -> OrderListResponse:
        """Get orders matching the filter, newest first"""
        orders = self.repository.list(
            statuses=order_filter.statuses,
            table_identifier=order_filter.table_identifier
        )
        return OrderListResponse(
            orders=[OrderResponse.model_validate(o) for o in orders],
            total=len(orders)
        )

    def get_order_by_id(self, order_id: str) -> Optional[OrderResponse]:
        """Get order by ID"""
        order = self.repository.get_by_id(order_id)
        if not order:
            return None
        return OrderResponse.model_validate(order)

    async def create_order(self, order_data: OrderCreate) -> OrderResponse:
        """
        Create new order

        Steps:
        1. Resolve every product and snapshot name and price
        2. Save order and lines in one commit with status PENDING
        3. Publish OrderCreated event

        Raises:
            ProductNotFoundError: If any product cannot be resolved
            ProductServiceUnavailableError: If the catalog is unavailable
        """
        snapshot = await snapshot_order_lines(order_data.items, self.catalog)

        order = self.repository.create(
            {
                'table_identifier': order_data.table_identifier,
                'notes': order_data.notes,
                'total_amount': snapshot.total_amount,
                'status': OrderStatus.PENDING
            },
            snapshot.lines
        )
        response = OrderResponse.model_validate(order)
        logger.info(
            "Order %s created for table %s (%d lines, total %s)",
            response.id, response.table_identifier, len(response.items), response.total_amount
        )

        self.event_publisher.publish_order_created(response.model_dump(mode="json"))
        return response

    def update_order_status(
        self,
        order_id: str,
        new_status: OrderStatus,
        role: Optional[StaffRole] = None
    ) -> OrderResponse:
        """
        Move an order to a new status

        Args:
            order_id: Order ID
            new_status: Requested status
            role: Acting role, checked against the transition table when given

        Returns:
            Updated order

        Raises:
            OrderNotFoundError: If the order does not exist
            InvalidTransitionError: If the transition is illegal, or another
                writer changed the status first
        """
        order = self.repository.get_by_id(order_id)
        if not order:
            raise OrderNotFoundError(order_id)

        old_status = OrderStatus(order.status)
        try:
            lifecycle.ensure_transition(old_status, new_status, role)
        except InvalidTransitionError:
            logger.info("Rejected transition of order %s: %s -> %s", order_id, old_status.value, new_status.value)
            raise

        updated = self.repository.update_status(order_id, new_status, expected_status=old_status)
        if updated is None:
            current = self.repository.get_by_id(order_id)
            if current is None:
                raise OrderNotFoundError(order_id)
            logger.info("Order %s changed concurrently to %s", order_id, current.status.value)
            raise InvalidTransitionError(current.status, new_status, role)

        logger.info("Order %s: %s -> %s", order_id, old_status.value, new_status.value)

        self.event_publisher.publish_order_status_changed({
            'order_id': updated.id,
            'old_status': old_status.value,
            'new_status': new_status.value,
            'role': role.value if role else None,
            'updated_at': updated.updated_at
        })

        return OrderResponse.model_validate(updated)

