"""
Order book: placement of replenishment orders and their arrival.

Placement rejections are silent no-ops that return the state unchanged; the
reason is only logged.
"""

import logging

from config.config import DEFAULT_SIMULATION_CONFIG, SimulationConfig
from models.inventory import ProductProfile
from models.state import PendingOrder, SimState, SKUState

logger = logging.getLogger(__name__)


def receive_orders(
    sku_state: SKUState, now: float, max_inventory: float
) -> tuple[float, tuple[PendingOrder, ...], tuple[PendingOrder, ...]]:
    """
    Split pending orders into arrived and remaining ones at time ``now``.

    Returns (new_inventory, remaining_orders, arrived_orders). Arrived
    quantities are credited to inventory capped at ``max_inventory``.
    """
    arrived = tuple(order for order in sku_state.pending_orders if order.arrival_time <= now)
    if not arrived:
        return sku_state.inventory, sku_state.pending_orders, ()
    remaining = tuple(order for order in sku_state.pending_orders if order.arrival_time > now)
    credited = sum(order.quantity for order in arrived)
    new_inventory = min(sku_state.inventory + credited, max_inventory)
    return new_inventory, remaining, arrived


def manual_order_blocker(
    state: SimState, sku_state: SKUState, config: SimulationConfig = DEFAULT_SIMULATION_CONFIG
) -> str | None:
    """Reason a human order would be throttled, or None if it is allowed."""
    if state.scenario is not None and state.scenario.quiver_auto_play:
        return "auto-play scenario ignores manual orders"
    if state.time - sku_state.last_order_time < config.manual_order_cooldown:
        return "cooldown"
    if len(sku_state.pending_orders) >= config.manual_max_pending_orders:
        return "too many pending orders"
    return None


def can_place_manual_order(
    state: SimState, sku_id: str, config: SimulationConfig = DEFAULT_SIMULATION_CONFIG
) -> bool:
    sku_state = state.sku_state(sku_id)
    if not state.is_playing or sku_state is None:
        return False
    return manual_order_blocker(state, sku_state, config) is None


def place_order(
    state: SimState,
    sku_id: str,
    product: ProductProfile,
    manual: bool = True,
    config: SimulationConfig = DEFAULT_SIMULATION_CONFIG,
) -> SimState:
    """
    Place one replenishment order for ``sku_id`` at the current time.

    Human orders (``manual=True``) are additionally throttled by a cooldown
    and a cap on simultaneous pending orders. Any rejection returns ``state``
    itself.
    """
    scenario = state.scenario
    if not state.is_playing or scenario is None:
        logger.debug(f"Order for {sku_id} ignored: no scenario running")
        return state

    index = scenario.sku_index(sku_id)
    if index is None or index >= len(state.sku_states):
        logger.debug(f"Order for unknown SKU {sku_id} ignored")
        return state

    sku_state = state.sku_states[index]
    sku_config = scenario.skus[index]

    if manual:
        blocker = manual_order_blocker(state, sku_state, config)
        if blocker is not None:
            logger.debug(f"Manual order for {sku_id} rejected at t={state.time:.2f}: {blocker}")
            return state

    projected_max = sku_state.inventory + sku_state.on_order() + sku_config.order_quantity
    if projected_max > product.max_inventory * config.order_ceiling_factor:
        logger.debug(
            f"Order for {sku_id} rejected: projected {projected_max:.1f} exceeds ceiling "
            f"{product.max_inventory * config.order_ceiling_factor:.1f}"
        )
        return state

    lead_time = scenario.effective_lead_time(sku_config, config.base_lead_time)
    order = PendingOrder(
        order_id=sku_state.order_id + 1,
        quantity=sku_config.order_quantity,
        arrival_time=state.time + lead_time,
        placed_at=state.time,
    )
    new_sku_state = sku_state.model_copy(
        update={
            "pending_orders": sku_state.pending_orders + (order,),
            "last_order_time": state.time,
            "order_id": order.order_id,
            "order_count": sku_state.order_count + 1,
            "total_ordering_cost": sku_state.total_ordering_cost + product.ordering_cost,
        }
    )
    sku_states = list(state.sku_states)
    sku_states[index] = new_sku_state
    logger.info(
        f"Order #{order.order_id} placed for {sku_id}: {order.quantity:g} units arriving at t={order.arrival_time:.2f}"
    )
    return state.model_copy(update={"sku_states": tuple(sku_states)})
