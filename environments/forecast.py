"""
Forward inventory projection shown as the forecast overlay.

The projection starts at the current on-hand inventory, consumes the
event-aware demand forecast and jumps up at each pending order arrival.
"""

import numpy as np

from environments.demand import forecast_demand_between
from models.inventory import ScenarioConfig, SKUConfig
from models.state import InventoryPoint, SKUState

DEFAULT_LOOKAHEAD = 10.0
STEPS_PER_TIME_UNIT = 2


def project_inventory(
    sku_state: SKUState,
    sku: SKUConfig,
    scenario: ScenarioConfig,
    now: float,
    max_inventory: float,
    lookahead: float = DEFAULT_LOOKAHEAD,
) -> list[InventoryPoint]:
    """
    Project inventory from ``now`` over min(lookahead, time remaining).

    Returns the polyline points; an arrival produces two points at the same
    time (before and after the jump). Empty when the scenario has no time left.
    """
    horizon = min(lookahead, scenario.duration - now)
    if horizon <= 0:
        return []
    end = now + horizon

    arrivals = sorted(
        (order for order in sku_state.pending_orders if now < order.arrival_time <= end),
        key=lambda order: order.arrival_time,
    )
    # Orders due at the same instant share one jump
    key_times = sorted({now, end} | {order.arrival_time for order in arrivals})

    inventory = sku_state.inventory
    points = [InventoryPoint(time=now, inventory=inventory)]
    for start, stop in zip(key_times[:-1], key_times[1:]):
        steps = max(1, int(np.ceil((stop - start) * STEPS_PER_TIME_UNIT)))
        grid = np.linspace(start, stop, steps + 1)
        for step_start, step_end in zip(grid[:-1], grid[1:]):
            demand = forecast_demand_between(sku, scenario, float(step_start), float(step_end))
            inventory = max(0.0, inventory - demand)
            points.append(InventoryPoint(time=float(step_end), inventory=inventory))

        arriving = sum(order.quantity for order in arrivals if order.arrival_time == stop)
        if arriving:
            inventory = min(inventory + arriving, max_inventory)
            points.append(InventoryPoint(time=stop, inventory=inventory))
    return points
