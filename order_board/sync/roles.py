"""
Synchronizers for the kitchen, waiter and cashier screens
"""
from typing import Optional

from order_board.config import settings
from order_board.schemas.order import OrderResponse, OrderStatus, StaffRole
from order_board.store.base import OrderStore
from order_board.sync.synchronizer import RoleProfile, RoleSynchronizer


def kitchen_profile(poll_interval: Optional[float] = None) -> RoleProfile:
    """Pending and preparing orders, first come first served"""
    return RoleProfile(
        role=StaffRole.KITCHEN,
        statuses=(OrderStatus.PENDING, OrderStatus.PREPARING),
        sort_field="created_at",
        poll_interval=settings.KITCHEN_POLL_INTERVAL if poll_interval is None else poll_interval
    )


def waiter_profile(poll_interval: Optional[float] = None) -> RoleProfile:
    """Ready orders, longest waiting since marked ready first"""
    return RoleProfile(
        role=StaffRole.WAITER,
        statuses=(OrderStatus.READY,),
        sort_field="updated_at",
        poll_interval=settings.WAITER_POLL_INTERVAL if poll_interval is None else poll_interval
    )


def cashier_profile(poll_interval: Optional[float] = None) -> RoleProfile:
    """Every open order, newest first"""
    return RoleProfile(
        role=StaffRole.CASHIER,
        statuses=(OrderStatus.PENDING, OrderStatus.PREPARING, OrderStatus.READY, OrderStatus.SERVED),
        sort_field="created_at",
        newest_first=True,
        poll_interval=settings.CASHIER_POLL_INTERVAL if poll_interval is None else poll_interval
    )


class KitchenSynchronizer(RoleSynchronizer):

    def __init__(self, store: OrderStore, poll_interval: Optional[float] = None, **kwargs):
        super().__init__(store, kitchen_profile(poll_interval), **kwargs)

    async def start_preparing(self, order_id: str) -> OrderResponse:
        return await self.transition(order_id, OrderStatus.PREPARING)

    async def mark_ready(self, order_id: str) -> OrderResponse:
        return await self.transition(order_id, OrderStatus.READY)


class WaiterSynchronizer(RoleSynchronizer):

    def __init__(self, store: OrderStore, poll_interval: Optional[float] = None, **kwargs):
        super().__init__(store, waiter_profile(poll_interval), **kwargs)

    async def mark_served(self, order_id: str) -> OrderResponse:
        return await self.transition(order_id, OrderStatus.SERVED)


class CashierSynchronizer(RoleSynchronizer):

    def __init__(self, store: OrderStore, poll_interval: Optional[float] = None, **kwargs):
        super().__init__(store, cashier_profile(poll_interval), **kwargs)

    async def mark_paid(self, order_id: str) -> OrderResponse:
        return await self.transition(order_id, OrderStatus.PAID)

    async def cancel(self, order_id: str) -> OrderResponse:
        return await self.transition(order_id, OrderStatus.CANCELLED)


SYNCHRONIZERS = {
    StaffRole.KITCHEN: KitchenSynchronizer,
    StaffRole.WAITER: WaiterSynchronizer,
    StaffRole.CASHIER: CashierSynchronizer,
}
