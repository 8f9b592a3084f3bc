"""
Role-scoped order synchronizer

One instance backs one role screen. It polls the order store for the statuses
the role cares about, keeps a sorted local view, and applies status changes
optimistically before the store confirms them.

Reconciliation rules:
- a poll result replaces the whole view, unless a poll started later has
  already landed;
- a confirmed write replaces the order's entry with the store's record;
- a failed write puts back the order's last confirmed record, i.e. what the
  latest poll or confirmed write returned for it (absent if neither did).
"""
import asyncio
from dataclasses import dataclass
from typing import Callable, Dict, FrozenSet, List, Optional, Tuple

from order_board.exceptions import OrderNotFoundError
from order_board.logging_config import get_logger
from order_board.schemas.order import OrderFilter, OrderResponse, OrderStatus, StaffRole
from order_board.services import lifecycle
from order_board.store.base import OrderStore

logger = get_logger(__name__)


@dataclass(frozen=True)
class RoleProfile:
    """What a role screen shows and how often it refreshes"""
    role: StaffRole
    statuses: Tuple[OrderStatus, ...]
    sort_field: str = "created_at"
    newest_first: bool = False
    poll_interval: float = 15.0

    @property
    def status_set(self) -> FrozenSet[OrderStatus]:
        return frozenset(self.statuses)

    def sort_key(self, order: OrderResponse):
        return (getattr(order, self.sort_field), order.id)


class RoleSynchronizer:
    """Polling plus optimistic-update loop for one role screen"""

    def __init__(
        self,
        store: OrderStore,
        profile: RoleProfile,
        on_change: Optional[Callable[[List[OrderResponse]], None]] = None,
        on_write_error: Optional[Callable[[Exception], None]] = None
    ):
        self.store = store
        self.profile = profile
        self.on_change = on_change
        self.on_write_error = on_write_error

        self._orders: List[OrderResponse] = []
        self._confirmed: Dict[str, OrderResponse] = {}
        self._task: Optional[asyncio.Task] = None
        self._mounted: Optional[asyncio.Event] = None
        self._poll_started = 0
        self._poll_applied = 0
        self.last_poll_error: Optional[Exception] = None

    @property
    def orders(self) -> List[OrderResponse]:
        """Current view, sorted for the role"""
        return list(self._orders)

    @property
    def is_running(self) -> bool:
        return self._task is not None and not self._task.done()

    def find(self, order_id: str) -> Optional[OrderResponse]:
        for order in self._orders:
            if order.id == order_id:
                return order
        return None

    # -------------------- lifetime --------------------

    async def start(self) -> None:
        """
        Mount: poll once now, then keep polling on the profile interval

        Returns once the first poll has finished (or the synchronizer was
        stopped meanwhile). Calling it again while mounted only waits for
        that first poll.
        """
        if self._task is None:
            self._mounted = asyncio.Event()
            self._task = asyncio.create_task(
                self._run(self._mounted), name=f"{self.profile.role.value}-order-poll"
            )
        await self._mounted.wait()

    async def stop(self) -> None:
        """Unmount: cancel the polling task"""
        task, self._task = self._task, None
        if task is None:
            return
        self._mounted.set()
        task.cancel()
        try:
            await task
        except asyncio.CancelledError:
            pass

    async def __aenter__(self):
        await self.start()
        return self

    async def __aexit__(self, exc_type, exc, tb):
        await self.stop()

    async def _run(self, mounted: asyncio.Event) -> None:
        try:
            await self.poll()
        finally:
            mounted.set()
        while True:
            await asyncio.sleep(self.profile.poll_interval)
            await self.poll()

    # -------------------- reads --------------------

    async def refresh(self) -> List[OrderResponse]:
        """
        Fetch the role's orders and replace the view

        Raises:
            Whatever the store raises; the view is left untouched
        """
        self._poll_started += 1
        ticket = self._poll_started

        orders = await self.store.list(OrderFilter(statuses=list(self.profile.statuses)))

        if ticket < self._poll_applied:
            # A poll issued later already landed
            return self.orders
        self._poll_applied = ticket
        self.last_poll_error = None
        self._confirmed = {order.id: order for order in orders}
        self._set_view(orders)
        return self.orders

    async def poll(self) -> bool:
        """Refresh with read failures muted until the next tick"""
        try:
            await self.refresh()
        except Exception as e:
            self.last_poll_error = e
            logger.warning("%s board poll failed: %s", self.profile.role.value, e)
            return False
        return True

    # -------------------- writes --------------------

    async def transition(self, order_id: str, new_status: OrderStatus) -> OrderResponse:
        """
        Change an order's status, showing the change before the store confirms

        On failure the order goes back to its last confirmed record, so a
        rejected write never leaves another write's unconfirmed patch on screen.

        Raises:
            OrderNotFoundError: If the order is not on this board
            InvalidTransitionError: If the lifecycle rejects the change (the
                view is not touched) or the store does (the view is rolled back)
            Any store failure, after the view has been rolled back
        """
        previous = self.find(order_id)
        if previous is None:
            raise OrderNotFoundError(order_id, f"Order {order_id} is not on the {self.profile.role.value} board")

        new_status = OrderStatus(new_status)
        lifecycle.ensure_transition(previous.status, new_status, self.profile.role)

        self._upsert(previous.model_copy(update={"status": new_status}), order_id)

        try:
            confirmed = await self.store.update_status(order_id, new_status, role=self.profile.role)
        except Exception as e:
            self._upsert(self._confirmed.get(order_id), order_id)
            logger.warning(
                "Rolled back order %s (%s -> %s): %s",
                order_id, previous.status.value, new_status.value, e
            )
            if self.on_write_error is not None:
                try:
                    self.on_write_error(e)
                except Exception:
                    logger.exception("Write error callback failed for order %s", order_id)
            raise

        self._confirmed[order_id] = confirmed
        self._upsert(confirmed, order_id)
        return confirmed

    # -------------------- view --------------------

    def _set_view(self, orders: List[OrderResponse]) -> None:
        wanted = self.profile.status_set
        visible = [order for order in orders if order.status in wanted]
        visible.sort(key=self.profile.sort_key, reverse=self.profile.newest_first)
        self._orders = visible
        if self.on_change is not None:
            self.on_change(self.orders)

    def _upsert(self, order: Optional[OrderResponse], order_id: str) -> None:
        """Replace one order's entry (None removes it); orders outside the role's statuses drop out"""
        orders = [o for o in self._orders if o.id != order_id]
        if order is not None:
            orders.append(order)
        self._set_view(orders)
