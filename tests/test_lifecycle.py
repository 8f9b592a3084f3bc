import pytest

from order_board.exceptions import InvalidTransitionError
from order_board.schemas.order import OrderStatus as S, StaffRole as R
from order_board.services import lifecycle


LEGAL = [
    (S.PENDING, S.PREPARING),
    (S.PREPARING, S.READY),
    (S.READY, S.SERVED),
    (S.SERVED, S.PAID),
    (S.PENDING, S.CANCELLED),
    (S.PREPARING, S.CANCELLED),
    (S.READY, S.CANCELLED),
    (S.SERVED, S.CANCELLED),
]


@pytest.mark.parametrize("current,target", LEGAL)
def test_legal_transitions(current, target):
    assert lifecycle.can_transition(current, target)


@pytest.mark.parametrize("current", list(S))
@pytest.mark.parametrize("target", list(S))
def test_everything_else_is_illegal(current, target):
    if (current, target) in LEGAL:
        return
    assert not lifecycle.can_transition(current, target)


@pytest.mark.parametrize("status", list(S))
def test_same_status_is_rejected(status):
    with pytest.raises(InvalidTransitionError):
        lifecycle.ensure_transition(status, status)


@pytest.mark.parametrize("terminal", [S.PAID, S.CANCELLED])
def test_terminal_states_have_no_exits(terminal):
    assert lifecycle.is_terminal(terminal)
    assert lifecycle.allowed_targets(terminal) == []


def test_non_terminal_states():
    assert not any(lifecycle.is_terminal(s) for s in (S.PENDING, S.PREPARING, S.READY, S.SERVED))


@pytest.mark.parametrize("role,current,target,allowed", [
    (R.KITCHEN, S.PENDING, S.PREPARING, True),
    (R.KITCHEN, S.PREPARING, S.READY, True),
    (R.KITCHEN, S.READY, S.SERVED, False),
    (R.KITCHEN, S.PENDING, S.CANCELLED, False),
    (R.WAITER, S.READY, S.SERVED, True),
    (R.WAITER, S.PENDING, S.PREPARING, False),
    (R.WAITER, S.SERVED, S.PAID, False),
    (R.CASHIER, S.SERVED, S.PAID, True),
    (R.CASHIER, S.PREPARING, S.CANCELLED, True),
    (R.CASHIER, S.PREPARING, S.READY, False),
    (R.ADMIN, S.READY, S.SERVED, True),
    (R.ADMIN, S.SERVED, S.CANCELLED, True),
])
def test_role_permissions(role, current, target, allowed):
    assert lifecycle.can_transition(current, target, role) is allowed


def test_allowed_targets_lists_forward_step_first():
    assert lifecycle.allowed_targets(S.PENDING) == [S.PREPARING, S.CANCELLED]
    assert lifecycle.allowed_targets(S.READY, R.WAITER) == [S.SERVED]
    assert lifecycle.allowed_targets(S.SERVED, R.CASHIER) == [S.PAID, S.CANCELLED]


def test_accepts_plain_status_strings():
    assert lifecycle.can_transition("pending", "preparing", "kitchen")


def test_error_carries_the_rejected_pair():
    with pytest.raises(InvalidTransitionError) as exc_info:
        lifecycle.ensure_transition(S.PAID, S.PENDING, R.CASHIER)

    err = exc_info.value
    assert err.current == S.PAID
    assert err.requested == S.PENDING
    assert err.role == R.CASHIER
    assert "paid" in str(err) and "pending" in str(err)
