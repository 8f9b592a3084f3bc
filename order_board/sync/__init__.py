"""
Role synchronizers package
"""
from order_board.sync.synchronizer import RoleProfile, RoleSynchronizer
from order_board.sync.roles import (
    KitchenSynchronizer,
    WaiterSynchronizer,
    CashierSynchronizer,
    SYNCHRONIZERS,
    kitchen_profile,
    waiter_profile,
    cashier_profile
)

__all__ = [
    "RoleProfile",
    "RoleSynchronizer",
    "KitchenSynchronizer",
    "WaiterSynchronizer",
    "CashierSynchronizer",
    "SYNCHRONIZERS",
    "kitchen_profile",
    "waiter_profile",
    "cashier_profile"
]
