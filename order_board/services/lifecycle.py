"""
Order lifecycle state machine

Pure lookup functions over the transition table. Consulted by role boards
before they write and by the order service before it persists a status.

    PENDING -> PREPARING -> READY -> SERVED -> PAID
    any non-terminal state -> CANCELLED
"""
from typing import Dict, FrozenSet, List, Optional, Tuple

from order_board.exceptions import InvalidTransitionError
from order_board.schemas.order import OrderStatus, StaffRole

TERMINAL_STATUSES: FrozenSet[OrderStatus] = frozenset({OrderStatus.PAID, OrderStatus.CANCELLED})

_FORWARD_FLOW: Dict[Tuple[OrderStatus, OrderStatus], FrozenSet[StaffRole]] = {
    (OrderStatus.PENDING, OrderStatus.PREPARING): frozenset({StaffRole.KITCHEN, StaffRole.ADMIN}),
    (OrderStatus.PREPARING, OrderStatus.READY): frozenset({StaffRole.KITCHEN, StaffRole.ADMIN}),
    (OrderStatus.READY, OrderStatus.SERVED): frozenset({StaffRole.WAITER, StaffRole.ADMIN}),
    (OrderStatus.SERVED, OrderStatus.PAID): frozenset({StaffRole.CASHIER, StaffRole.ADMIN}),
}

CANCEL_ROLES: FrozenSet[StaffRole] = frozenset({StaffRole.CASHIER, StaffRole.ADMIN})


def _build_table() -> Dict[Tuple[OrderStatus, OrderStatus], FrozenSet[StaffRole]]:
    table = dict(_FORWARD_FLOW)
    for status in OrderStatus:
        if status not in TERMINAL_STATUSES:
            table[(status, OrderStatus.CANCELLED)] = CANCEL_ROLES
    return table


TRANSITIONS: Dict[Tuple[OrderStatus, OrderStatus], FrozenSet[StaffRole]] = _build_table()


def is_terminal(status: OrderStatus) -> bool:
    return OrderStatus(status) in TERMINAL_STATUSES


def can_transition(current: OrderStatus, target: OrderStatus, role: Optional[StaffRole] = None) -> bool:
    """
    Answer whether ``current -> target`` is legal

    Args:
        current: Status the order holds now
        target: Requested status
        role: Acting role; None checks the table only

    Returns:
        True if the pair is in the table (and the role may trigger it)
    """
    roles = TRANSITIONS.get((OrderStatus(current), OrderStatus(target)))
    if roles is None:
        return False
    return role is None or StaffRole(role) in roles


def ensure_transition(current: OrderStatus, target: OrderStatus, role: Optional[StaffRole] = None) -> None:
    """Raise InvalidTransitionError unless the transition is legal"""
    if not can_transition(current, target, role):
        raise InvalidTransitionError(current, target, role)


def allowed_targets(current: OrderStatus, role: Optional[StaffRole] = None) -> List[OrderStatus]:
    """Statuses reachable from ``current``, forward flow first"""
    current = OrderStatus(current)
    return [
        target for (source, target), roles in TRANSITIONS.items()
        if source == current and (role is None or StaffRole(role) in roles)
    ]
