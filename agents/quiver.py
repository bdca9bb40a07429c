"""
Quiver agent module for the quiver inventory simulation.
Defines the forecast-aware reorder-point policy that places replenishment
orders on its own.

For every SKU the agent computes:
- average demand rate and its standard deviation over the scenario, with the
  linked marketing event window weighted at the multiplied rate
- safety stock = z x sigma x sqrt(lead time)
- reorder point = (lead time demand + safety stock) x 0.25
- predicted inventory at the moment an order placed now would arrive

It orders when the predicted inventory is at or below the reorder point and
the order can still arrive before the scenario ends.
"""

import logging
import math

import numpy as np

from config.config import DEFAULT_POLICY_CONFIG, DEFAULT_SIMULATION_CONFIG, QuiverPolicyConfig, SimulationConfig
from environments.demand import forecast_demand_between, scenario_rate_parts
from environments.orders import place_order
from models.inventory import ProductProfile, ScenarioConfig, SKUConfig
from models.state import QuiverMetrics, SimState, SKUState

# Set up logging
logger = logging.getLogger(__name__)


def average_demand_rate(sku: SKUConfig, scenario: ScenarioConfig) -> float:
    if scenario.duration <= 0:
        return 0.0
    total = sum(rate * duration for rate, duration in scenario_rate_parts(sku, scenario))
    return total / scenario.duration


def demand_std_dev(sku: SKUConfig, scenario: ScenarioConfig) -> float:
    """Duration-weighted standard deviation of the effective demand rate."""
    parts = scenario_rate_parts(sku, scenario)
    if not parts:
        return 0.0
    rates = np.array([rate for rate, _ in parts], dtype=float)
    weights = np.array([duration for _, duration in parts], dtype=float)
    total_weight = weights.sum()
    if total_weight <= 0:
        return 0.0
    avg_rate = average_demand_rate(sku, scenario)
    variance = float(np.sum(weights * (rates - avg_rate) ** 2) / total_weight)
    return math.sqrt(variance)


def safety_stock(std_dev: float, lead_time: float, z: float = DEFAULT_POLICY_CONFIG.service_level_z) -> float:
    return z * std_dev * math.sqrt(max(0.0, lead_time))


def predict_inventory(
    sku_state: SKUState, sku: SKUConfig, scenario: ScenarioConfig, now: float, target_time: float
) -> float:
    """On-hand minus forecast demand plus orders arriving by ``target_time``."""
    forecast = forecast_demand_between(sku, scenario, now, target_time)
    arriving = sum(order.quantity for order in sku_state.pending_orders if order.arrival_time <= target_time)
    return max(0.0, sku_state.inventory - forecast + arriving)


class QuiverAgent:
    """
    Autonomous replenishment agent using a forecast-aware reorder point.
    Metrics are recomputed on every query since time and pending orders change
    each tick.
    """

    def __init__(
        self,
        policy_config: QuiverPolicyConfig = DEFAULT_POLICY_CONFIG,
        sim_config: SimulationConfig = DEFAULT_SIMULATION_CONFIG,
    ):
        self.policy_config = policy_config
        self.sim_config = sim_config

    def reorder_point(self, sku: SKUConfig, scenario: ScenarioConfig) -> tuple[float, float, float]:
        """Return (safety_stock, lead_time_demand, reorder_point) for a SKU."""
        lead_time = scenario.effective_lead_time(sku, self.sim_config.base_lead_time)
        buffer = safety_stock(demand_std_dev(sku, scenario), lead_time, self.policy_config.service_level_z)
        lead_time_demand = average_demand_rate(sku, scenario) * lead_time
        return buffer, lead_time_demand, (lead_time_demand + buffer) * self.policy_config.reorder_point_scale

    def metrics(self, state: SimState, sku_id: str, scenario: ScenarioConfig) -> QuiverMetrics | None:
        index = scenario.sku_index(sku_id)
        if index is None or index >= len(state.sku_states):
            return None
        sku = scenario.skus[index]
        sku_state = state.sku_states[index]

        lead_time = scenario.effective_lead_time(sku, self.sim_config.base_lead_time)
        buffer, lead_time_demand, reorder_point = self.reorder_point(sku, scenario)
        predicted = predict_inventory(sku_state, sku, scenario, state.time, state.time + lead_time)
        should_order = (
            state.is_playing
            and state.time + lead_time <= scenario.duration
            and predicted <= reorder_point
        )
        return QuiverMetrics(
            safety_stock=buffer,
            lead_time_demand=lead_time_demand,
            reorder_point=reorder_point,
            inventory_position=sku_state.inventory_position(),
            predicted_inventory=predicted,
            should_order=should_order,
        )

    def decide(self, state: SimState, scenario: ScenarioConfig) -> list[str]:
        """SKU ids that need an order right now."""
        if not state.is_playing:
            return []
        orders = []
        for sku in scenario.skus:
            metrics = self.metrics(state, sku.sku_id, scenario)
            if metrics is not None and metrics.should_order:
                logger.debug(
                    f"t={state.time:.2f} {sku.sku_id}: predicted {metrics.predicted_inventory:.1f} "
                    f"<= reorder point {metrics.reorder_point:.1f}"
                )
                orders.append(sku.sku_id)
        return orders

    def act(self, state: SimState, scenario: ScenarioConfig, product: ProductProfile) -> SimState:
        """Place at most one order per SKU that needs one."""
        for sku_id in self.decide(state, scenario):
            state = place_order(state, sku_id, product, manual=False, config=self.sim_config)
        return state


def query_policy_metrics(
    state: SimState,
    sku_id: str,
    scenario: ScenarioConfig,
    policy_config: QuiverPolicyConfig = DEFAULT_POLICY_CONFIG,
    sim_config: SimulationConfig = DEFAULT_SIMULATION_CONFIG,
) -> QuiverMetrics | None:
    return QuiverAgent(policy_config, sim_config).metrics(state, sku_id, scenario)
