from dataclasses import replace

import pytest

from environments.orders import can_place_manual_order, place_order, receive_orders
from environments.simulation import start_scenario
from models.state import PendingOrder, SimState


@pytest.fixture
def running_state(flat_scenario, test_product) -> SimState:
    return start_scenario(flat_scenario, test_product)


def _with_time(state: SimState, time: float) -> SimState:
    return state.model_copy(update={"time": time})


def test_place_order_schedules_arrival(running_state, test_product):
    state = _with_time(running_state, 2.0)
    new_state = place_order(state, "sku-1", test_product)

    sku_state = new_state.sku_states[0]
    assert len(sku_state.pending_orders) == 1
    order = sku_state.pending_orders[0]
    assert order.order_id == 1
    assert order.quantity == 50
    assert order.arrival_time == pytest.approx(6.0)  # Base lead time 4
    assert order.placed_at == 2.0
    assert sku_state.order_count == 1
    assert sku_state.last_order_time == 2.0
    assert sku_state.total_ordering_cost == pytest.approx(25.0)
    # The input state is untouched
    assert running_state.sku_states[0].pending_orders == ()


def test_place_order_applies_lead_time_multiplier(flat_scenario, test_product):
    scenario = replace(flat_scenario, lead_time_multiplier=1.5)
    state = start_scenario(scenario, test_product)
    new_state = place_order(state, "sku-1", test_product)
    assert new_state.sku_states[0].pending_orders[0].arrival_time == pytest.approx(6.0)


def test_place_order_unknown_sku_is_noop(running_state, test_product):
    assert place_order(running_state, "nope", test_product) is running_state


def test_place_order_outside_running_scenario_is_noop(test_product):
    state = SimState()
    assert place_order(state, "sku-1", test_product) is state


def test_manual_cooldown_blocks_second_order(running_state, test_product):
    first = place_order(_with_time(running_state, 3.0), "sku-1", test_product)
    second = place_order(_with_time(first, 3.5), "sku-1", test_product)
    assert len(second.sku_states[0].pending_orders) == 1

    third = place_order(_with_time(first, 4.0), "sku-1", test_product)
    assert len(third.sku_states[0].pending_orders) == 2


def test_policy_orders_skip_manual_cooldown(running_state, test_product):
    first = place_order(_with_time(running_state, 3.0), "sku-1", test_product, manual=False)
    second = place_order(_with_time(first, 3.2), "sku-1", test_product, manual=False)
    assert len(second.sku_states[0].pending_orders) == 2
    assert [o.order_id for o in second.sku_states[0].pending_orders] == [1, 2]


def test_manual_backlog_limit(running_state, test_product):
    pending = tuple(PendingOrder(order_id=i, quantity=1, arrival_time=30.0, placed_at=0.0) for i in range(1, 6))
    sku_state = running_state.sku_states[0].model_copy(update={"pending_orders": pending, "order_id": 5})
    state = running_state.model_copy(update={"sku_states": (sku_state,), "time": 5.0})

    assert not can_place_manual_order(state, "sku-1")
    assert place_order(state, "sku-1", test_product) is state
    assert len(place_order(state, "sku-1", test_product, manual=False).sku_states[0].pending_orders) == 6


def test_soft_inventory_ceiling_rejects_runaway_orders(running_state, test_product):
    # Ceiling is 1.5 x 1000; 100 on hand + 1400 on order + 50 would exceed it
    pending = (PendingOrder(order_id=1, quantity=1400, arrival_time=30.0, placed_at=0.0),)
    sku_state = running_state.sku_states[0].model_copy(update={"pending_orders": pending, "order_id": 1})
    state = running_state.model_copy(update={"sku_states": (sku_state,)})
    assert place_order(state, "sku-1", test_product, manual=False) is state


def test_manual_orders_ignored_in_autoplay(flat_scenario, test_product):
    scenario = replace(flat_scenario, quiver_auto_play=True)
    state = start_scenario(scenario, test_product)
    assert place_order(state, "sku-1", test_product) is state
    assert len(place_order(state, "sku-1", test_product, manual=False).sku_states[0].pending_orders) == 1


def test_receive_orders_credits_and_caps(running_state):
    pending = (
        PendingOrder(order_id=1, quantity=600, arrival_time=5.0, placed_at=1.0),
        PendingOrder(order_id=2, quantity=600, arrival_time=4.0, placed_at=2.0),
        PendingOrder(order_id=3, quantity=10, arrival_time=9.0, placed_at=3.0),
    )
    sku_state = running_state.sku_states[0].model_copy(update={"pending_orders": pending})
    inventory, remaining, arrived = receive_orders(sku_state, now=5.0, max_inventory=1000)
    assert inventory == 1000  # 100 + 1200 capped
    assert [o.order_id for o in remaining] == [3]
    assert {o.order_id for o in arrived} == {1, 2}
