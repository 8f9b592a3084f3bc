"""
Order store over the local database

Each call opens its own session and goes through OrderService, so the local
store enforces the lifecycle exactly like the HTTP service does. The session
work (and event publishing) runs in a worker thread so the caller's event loop
keeps polling and reading input meanwhile.
"""
import asyncio
from typing import Callable, List, Optional
from sqlalchemy.orm import Session

from order_board.database import SessionLocal
from order_board.exceptions import OrderNotFoundError
from order_board.publishers.event_publisher import EventPublisher
from order_board.schemas.order import OrderCreate, OrderFilter, OrderResponse, OrderStatus, StaffRole
from order_board.services.order_service import OrderService
from order_board.services.product_client import ProductCatalog, build_catalog
from order_board.store.base import OrderStore


class LocalOrderStore(OrderStore):
    """Durable local order map (SQLite by default)"""

    def __init__(
        self,
        session_factory: Callable[[], Session] = SessionLocal,
        catalog_factory: Callable[[Session], ProductCatalog] = build_catalog,
        event_publisher: Optional[EventPublisher] = None
    ):
        self.session_factory = session_factory
        self.catalog_factory = catalog_factory
        self.event_publisher = event_publisher or EventPublisher()

    def _service(self, db: Session) -> OrderService:
        return OrderService(db, catalog=self.catalog_factory(db), event_publisher=self.event_publisher)

    def _create(self, draft: OrderCreate) -> OrderResponse:
        with self.session_factory() as db:
            # Catalog lookups get their own loop in this thread, next to the session
            return asyncio.run(self._service(db).create_order(draft))

    def _list(self, order_filter: OrderFilter) -> List[OrderResponse]:
        with self.session_factory() as db:
            return self._service(db).get_orders(order_filter).orders

    def _get(self, order_id: str) -> Optional[OrderResponse]:
        with self.session_factory() as db:
            return self._service(db).get_order_by_id(order_id)

    def _update_status(
        self,
        order_id: str,
        new_status: OrderStatus,
        role: Optional[StaffRole]
    ) -> OrderResponse:
        with self.session_factory() as db:
            return self._service(db).update_order_status(order_id, new_status, role)

    async def create(self, draft: OrderCreate) -> OrderResponse:
        return await asyncio.to_thread(self._create, draft)

    async def list(self, order_filter: OrderFilter) -> List[OrderResponse]:
        return await asyncio.to_thread(self._list, order_filter)

    async def get(self, order_id: str) -> OrderResponse:
        order = await asyncio.to_thread(self._get, order_id)
        if order is None:
            raise OrderNotFoundError(order_id)
        return order

    async def update_status(
        self,
        order_id: str,
        new_status: OrderStatus,
        role: Optional[StaffRole] = None
    ) -> OrderResponse:
        return await asyncio.to_thread(self._update_status, order_id, new_status, role)
