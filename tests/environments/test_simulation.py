from dataclasses import replace

import pytest

from environments.scenarios import create_baseline_scenario
from environments.session import run_scenario
from environments.simulation import (
    enable_autonomous_policy,
    go_to_summary,
    reset_game,
    return_to_menu,
    select_product,
    start_scenario,
    tick,
)
from models.enums import Grade, SimStatus
from models.products import get_product_by_id
from models.state import PendingOrder, SimState

# --- start_scenario --- #


def test_start_scenario_initializes_sku_states(flat_scenario, test_product):
    state = start_scenario(flat_scenario, test_product)
    assert state.status == SimStatus.PLAYING
    assert state.time == 0.0
    assert state.selected_product == test_product
    assert len(state.sku_states) == 1

    sku_state = state.sku_states[0]
    assert sku_state.inventory == 100
    assert sku_state.pending_orders == ()
    assert [(p.time, p.inventory) for p in sku_state.inventory_history] == [(0.0, 100)]
    assert sku_state.last_order_time == -10.0
    assert sku_state.order_id == 0


def test_start_scenario_keeps_scores_and_resets_progress(flat_scenario, test_product):
    finished = run_scenario(flat_scenario, test_product)
    restarted = start_scenario(flat_scenario, test_product, finished)
    assert restarted.level_scores == finished.level_scores
    assert restarted.time == 0.0
    assert restarted.sku_states[0].total_holding_cost == 0.0


def test_autoplay_scenario_runs_in_demo_with_policy(flat_scenario, test_product):
    state = start_scenario(replace(flat_scenario, quiver_auto_play=True, quiver_enabled=True), test_product)
    assert state.status == SimStatus.DEMO
    assert state.quiver_enabled is True


# --- tick --- #


def test_tick_consumes_demand_and_accrues_holding(flat_scenario, test_product):
    state = start_scenario(flat_scenario, test_product)
    new_state = tick(state, 0.5, flat_scenario, test_product)

    sku_state = new_state.sku_states[0]
    assert new_state.time == 0.5
    assert sku_state.inventory == pytest.approx(95.0)
    assert sku_state.total_holding_cost == pytest.approx(100 * 0.04 * 0.5)
    assert sku_state.total_stockout_cost == 0.0
    assert sku_state.is_stockout is False


@pytest.mark.parametrize("delta", [0.0, -1.0])
def test_tick_with_non_positive_delta_is_noop(flat_scenario, test_product, delta):
    state = start_scenario(flat_scenario, test_product)
    assert tick(state, delta, flat_scenario, test_product) is state


def test_tick_is_a_pure_function(flat_scenario, test_product):
    state = start_scenario(flat_scenario, test_product)
    assert tick(state, 0.1, flat_scenario, test_product) == tick(state, 0.1, flat_scenario, test_product)
    assert state.time == 0.0


def test_order_arriving_exactly_on_tick_is_applied_once(flat_scenario, test_product):
    state = start_scenario(flat_scenario, test_product)
    order = PendingOrder(order_id=1, quantity=50, arrival_time=10.0, placed_at=6.0)
    sku_state = state.sku_states[0].model_copy(update={"pending_orders": (order,), "inventory": 20.0})
    state = state.model_copy(update={"time": 9.5, "sku_states": (sku_state,)})

    after = tick(state, 0.5, flat_scenario, test_product)
    assert after.time == 10.0
    assert after.sku_states[0].pending_orders == ()
    # 20 + 50 arrived, then 5 units of demand
    assert after.sku_states[0].inventory == pytest.approx(65.0)

    later = tick(after, 0.5, flat_scenario, test_product)
    assert later.sku_states[0].inventory == pytest.approx(60.0)


def test_tick_flags_stockout(flat_scenario, test_product):
    state = start_scenario(flat_scenario, test_product)
    sku_state = state.sku_states[0].model_copy(update={"inventory": 2.0})
    state = state.model_copy(update={"sku_states": (sku_state,)})

    after = tick(state, 0.5, flat_scenario, test_product)
    assert after.sku_states[0].inventory == 0.0
    assert after.sku_states[0].is_stockout is True
    assert after.sku_states[0].total_stockout_cost == pytest.approx(3.0 * 1.5)


def test_tick_applies_marketing_multiplier(promo_scenario, test_product):
    state = start_scenario(promo_scenario, test_product).model_copy(update={"time": 10.0})
    after = tick(state, 0.5, promo_scenario, test_product)
    assert after.sku_states[0].marketing_event_active is True
    assert after.sku_states[0].inventory == pytest.approx(100 - 20 * 0.5)


def test_history_is_thinned_without_touching_costs(flat_scenario, test_product):
    state = start_scenario(flat_scenario, test_product)
    once = tick(state, 0.05, flat_scenario, test_product)
    assert len(once.sku_states[0].inventory_history) == 1
    assert once.sku_states[0].total_holding_cost > 0

    twice = tick(once, 0.05, flat_scenario, test_product)
    assert len(twice.sku_states[0].inventory_history) == 2
    assert twice.sku_states[0].inventory_history[-1].inventory == pytest.approx(99.0)


def test_tick_past_duration_ends_scenario_once(flat_scenario, test_product):
    state = start_scenario(flat_scenario, test_product).model_copy(update={"time": 35.95})
    ended = tick(state, 0.1, flat_scenario, test_product)

    assert ended.status == SimStatus.ENDED
    assert ended.time == 36.0
    assert len(ended.level_scores) == 1
    assert ended.level_scores[0].level_id == "level-1"
    # No SKU processing in the closing tick
    assert ended.sku_states == state.sku_states

    assert tick(ended, 0.1, flat_scenario, test_product) is ended


# --- session flow --- #


def test_enable_autonomous_policy(flat_scenario, test_product):
    state = start_scenario(flat_scenario, test_product)
    enabled = enable_autonomous_policy(state)
    assert enabled.quiver_enabled is True
    assert enable_autonomous_policy(enabled) is enabled


def test_select_reset_and_menu(test_product):
    state = select_product(SimState(), test_product)
    assert state.status == SimStatus.PRODUCT_SELECT
    assert reset_game(state).selected_product == test_product
    assert return_to_menu(state) == SimState()


def test_summary_keeps_scores(flat_scenario, test_product):
    finished = run_scenario(flat_scenario, test_product)
    summary = go_to_summary(finished)
    assert summary.status == SimStatus.SUMMARY
    assert summary.level_scores == finished.level_scores
    assert reset_game(summary).level_scores == ()


# --- end to end --- #


@pytest.mark.parametrize("product_id", ["protein-bar", "medicine", "sofa"])
def test_unmanaged_baseline_runs_out_and_misses_grade_a(product_id):
    product = get_product_by_id(product_id)
    scenario = create_baseline_scenario(product)
    final = run_scenario(scenario, product)

    score = final.last_score()
    assert final.status == SimStatus.ENDED
    assert score.total_stockout_cost > 0
    assert score.total_ordering_cost == 0
    assert score.grade != Grade.A
    assert final.sku_states[0].inventory == 0.0
