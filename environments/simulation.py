"""
Tick engine and state transitions for the quiver inventory simulation.

Every transition is a pure function from a ``SimState`` (plus read-only
scenario and product configuration) to a new ``SimState``.
"""

import logging

from config.config import DEFAULT_SIMULATION_CONFIG, SimulationConfig
from environments.costs import calculate_tick_costs, compute_level_score
from environments.demand import event_multiplier_at, rate_at
from environments.orders import receive_orders
from environments.scenarios import create_autoplay_scenario
from models.enums import SimStatus
from models.inventory import ProductProfile, ScenarioConfig, SKUConfig
from models.state import InventoryPoint, SimState, SKUState

logger = logging.getLogger(__name__)


def create_initial_sku_state(sku: SKUConfig, config: SimulationConfig = DEFAULT_SIMULATION_CONFIG) -> SKUState:
    return SKUState(
        sku_id=sku.sku_id,
        inventory=sku.initial_inventory,
        inventory_history=(InventoryPoint(time=0.0, inventory=sku.initial_inventory),),
        last_order_time=config.initial_last_order_time,
    )


def start_scenario(
    scenario: ScenarioConfig,
    product: ProductProfile,
    state: SimState | None = None,
    config: SimulationConfig = DEFAULT_SIMULATION_CONFIG,
) -> SimState:
    """
    Start (or restart) ``scenario`` from time zero with fresh SKU states.

    Completed scores and the policy flag of ``state`` carry over. Auto-play
    scenarios run in demo status with the policy forced on.
    """
    previous = state or SimState()
    status = SimStatus.DEMO if scenario.quiver_auto_play else SimStatus.PLAYING
    logger.info(f"Starting scenario {scenario.scenario_id} for {product.product_id} ({len(scenario.skus)} SKUs)")
    return previous.model_copy(
        update={
            "status": status,
            "time": 0.0,
            "scenario": scenario,
            "sku_states": tuple(create_initial_sku_state(sku, config) for sku in scenario.skus),
            "selected_product": product,
            "quiver_enabled": previous.quiver_enabled or scenario.quiver_auto_play,
        }
    )


def process_sku_tick(
    sku_state: SKUState,
    sku: SKUConfig,
    scenario: ScenarioConfig,
    product: ProductProfile,
    new_time: float,
    delta_time: float,
    config: SimulationConfig = DEFAULT_SIMULATION_CONFIG,
) -> SKUState:
    """Advance a single SKU to ``new_time``. Reads no other SKU."""
    inventory, remaining_orders, _ = receive_orders(sku_state, new_time, product.max_inventory)

    multiplier, event_active = event_multiplier_at(sku, scenario, new_time)
    demand_rate = rate_at(sku, new_time) * multiplier

    result = calculate_tick_costs(inventory, demand_rate, delta_time, product, config)

    history = sku_state.inventory_history
    if not history or new_time - history[-1].time >= config.history_sample_interval:
        history = history + (InventoryPoint(time=new_time, inventory=result.new_inventory),)

    return sku_state.model_copy(
        update={
            "inventory": result.new_inventory,
            "pending_orders": remaining_orders,
            "inventory_history": history,
            "total_holding_cost": sku_state.total_holding_cost + result.holding_cost,
            "total_stockout_cost": sku_state.total_stockout_cost + result.stockout_cost,
            "is_stockout": result.new_inventory == 0 and demand_rate > 0,
            "marketing_event_active": event_active,
        }
    )


def tick(
    state: SimState,
    delta_time: float,
    scenario: ScenarioConfig,
    product: ProductProfile,
    config: SimulationConfig = DEFAULT_SIMULATION_CONFIG,
) -> SimState:
    """
    Advance the running scenario by ``delta_time``.

    A tick reaching the scenario duration clamps time to the duration, appends
    the final score and ends the scenario without processing the SKUs.
    Non-positive steps and ticks outside a running scenario are no-ops.
    """
    if not state.is_playing or state.scenario is None or delta_time <= 0:
        return state

    new_time = state.time + delta_time
    if new_time >= scenario.duration:
        score = compute_level_score(scenario.scenario_id, state.sku_states, product.product_id, config)
        logger.info(
            f"Scenario {scenario.scenario_id} ended: total cost {score.total_cost:.2f}, grade {score.grade.value}"
        )
        return state.model_copy(
            update={
                "time": scenario.duration,
                "status": SimStatus.ENDED,
                "level_scores": state.level_scores + (score,),
            }
        )

    sku_states = tuple(
        process_sku_tick(sku_state, sku, scenario, product, new_time, delta_time, config)
        for sku_state, sku in zip(state.sku_states, scenario.skus)
    )
    return state.model_copy(update={"time": new_time, "sku_states": sku_states})


def start_autoplay_demo(
    product: ProductProfile,
    state: SimState | None = None,
    seed: int | None = None,
    config: SimulationConfig = DEFAULT_SIMULATION_CONFIG,
) -> SimState:
    """Start the multi-SKU auto-play scenario, driven entirely by the policy."""
    scenario = create_autoplay_scenario(product, seed, sim_config=config)
    return start_scenario(scenario, product, state, config)


def enable_autonomous_policy(state: SimState) -> SimState:
    if state.quiver_enabled:
        return state
    logger.info("Autonomous reorder policy enabled")
    return state.model_copy(update={"quiver_enabled": True})


def select_product(state: SimState, product: ProductProfile) -> SimState:
    return state.model_copy(update={"selected_product": product, "status": SimStatus.PRODUCT_SELECT})


def go_to_summary(state: SimState) -> SimState:
    return state.model_copy(update={"status": SimStatus.SUMMARY})


def return_to_menu(state: SimState) -> SimState:
    """Abandon everything, including completed scores."""
    return SimState()


def reset_game(state: SimState) -> SimState:
    """Discard progress but keep the selected product."""
    return SimState(status=SimStatus.PRODUCT_SELECT, selected_product=state.selected_product)
