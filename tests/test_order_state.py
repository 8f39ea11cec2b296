import pytest

from dispatch.state_machines.order_state import (
    FOUR_STEP,
    THREE_STEP,
    DeliveryCodeMismatch,
    InvalidTransition,
    Lifecycle,
    advance_order,
    can_cancel,
    cancel_order,
    codes_match,
    get_lifecycle,
    next_status,
)
from orders.models import Actor, OrderStatus


@pytest.fixture
def order(make_order):
    return make_order(code="8421")


@pytest.fixture
def actor():
    return Actor.vendor("1")


def test_advance_walks_the_chain_in_order(order, actor):
    visited = []
    advance_order(order, actor=actor)
    visited.append(order.status)
    advance_order(order, actor=actor)
    visited.append(order.status)
    advance_order(order, actor=actor, code="8421")
    visited.append(order.status)

    assert visited == [OrderStatus.PREPARING, OrderStatus.OUT_FOR_DELIVERY, OrderStatus.COMPLETED]
    assert [change.to_status for change in order.history] == visited
    assert order.completed_at is not None


def test_wrong_code_leaves_order_out_for_delivery(order, actor):
    advance_order(order, actor=actor)
    advance_order(order, actor=actor)

    with pytest.raises(DeliveryCodeMismatch, match="does not match"):
        advance_order(order, actor=Actor.rider("r1"), code="8412")

    assert order.status == OrderStatus.OUT_FOR_DELIVERY
    assert order.completed_at is None
    assert len(order.history) == 2


def test_missing_code_is_a_mismatch(order, actor):
    advance_order(order, actor=actor)
    advance_order(order, actor=actor)

    with pytest.raises(DeliveryCodeMismatch):
        advance_order(order, actor=actor)


def test_trimmed_code_completes_exactly_once(order, actor):
    advance_order(order, actor=actor)
    advance_order(order, actor=actor)

    advance_order(order, actor=actor, code="  8421 ")
    assert order.status == OrderStatus.COMPLETED

    with pytest.raises(InvalidTransition):
        advance_order(order, actor=actor, code="8421")
    assert order.status == OrderStatus.COMPLETED


def test_code_comparison_is_exact():
    assert codes_match("8421", "8421")
    assert codes_match("8421\n", "8421")
    assert not codes_match("08421", "8421")
    assert not codes_match(None, "8421")


@pytest.mark.parametrize("steps", [0, 1, 2])
def test_cancel_from_any_open_state(order, actor, steps):
    for _ in range(steps):
        advance_order(order, actor=actor)
    assert can_cancel(order.status)

    cancel_order(order, actor=actor)
    assert order.status == OrderStatus.CANCELLED


def test_terminal_states_reject_everything(order, actor):
    cancel_order(order, actor=actor)

    with pytest.raises(InvalidTransition):
        cancel_order(order, actor=actor)
    with pytest.raises(InvalidTransition):
        advance_order(order, actor=actor)
    assert order.status == OrderStatus.CANCELLED
    assert not can_cancel(OrderStatus.COMPLETED)


def test_next_status():
    assert next_status(OrderStatus.NEW) == OrderStatus.PREPARING
    assert next_status(OrderStatus.PREPARING, THREE_STEP) == OrderStatus.COMPLETED
    with pytest.raises(InvalidTransition):
        next_status(OrderStatus.OUT_FOR_DELIVERY, THREE_STEP)
    with pytest.raises(InvalidTransition):
        next_status(OrderStatus.COMPLETED)


def test_three_step_lifecycle_gates_preparing_to_completed(order, actor):
    advance_order(order, actor=actor, lifecycle=THREE_STEP)
    assert THREE_STEP.final_step_from == OrderStatus.PREPARING

    with pytest.raises(DeliveryCodeMismatch):
        advance_order(order, actor=actor, lifecycle=THREE_STEP)
    advance_order(order, actor=actor, code="8421", lifecycle=THREE_STEP)
    assert order.status == OrderStatus.COMPLETED


def test_lifecycle_validation():
    assert get_lifecycle("four_step") is FOUR_STEP
    with pytest.raises(ValueError):
        get_lifecycle("five_step")
    with pytest.raises(ValueError):
        Lifecycle("bad", (OrderStatus.PREPARING, OrderStatus.COMPLETED))
    with pytest.raises(ValueError):
        Lifecycle("bad", (OrderStatus.NEW, OrderStatus.CANCELLED, OrderStatus.COMPLETED))
