"""
Cooperative driver for a running scenario.

A driving shell feeds elapsed clock time into ``SimulationSession``; each step
applies one capped tick and then lets the policy react to the post-tick state,
so orders it places are seen by the very next arrival check. Changes are
published on an ``EventBus`` for shells that keep their own view state.
"""

import logging
from collections.abc import Iterable

import pandas as pd

from agents.quiver import QuiverAgent
from config.config import DEFAULT_SIMULATION_CONFIG, SimulationConfig
from environments.orders import place_order
from environments.simulation import enable_autonomous_policy, start_scenario, tick
from models.enums import SimStatus, SimulationEventType
from models.events import SimulationEvent
from models.inventory import ProductProfile, ScenarioConfig
from models.state import SimState
from utils.event_bus import EventBus

logger = logging.getLogger(__name__)


def diff_events(previous: SimState, current: SimState) -> list[SimulationEvent]:
    """Describe what changed between two states of the same scenario."""
    scenario = current.scenario
    if scenario is None:
        return []
    events = []
    for before, after in zip(previous.sku_states, current.sku_states):
        before_ids = {order.order_id for order in before.pending_orders}
        after_ids = {order.order_id for order in after.pending_orders}
        for order in before.pending_orders:
            if order.order_id not in after_ids:
                events.append(
                    SimulationEvent(
                        event_type=SimulationEventType.ORDER_ARRIVED,
                        scenario_id=scenario.scenario_id,
                        time=current.time,
                        sku_id=after.sku_id,
                        payload={"order_id": order.order_id, "quantity": order.quantity},
                    )
                )
        for order in after.pending_orders:
            if order.order_id not in before_ids:
                events.append(
                    SimulationEvent(
                        event_type=SimulationEventType.ORDER_PLACED,
                        scenario_id=scenario.scenario_id,
                        time=current.time,
                        sku_id=after.sku_id,
                        payload={"order_id": order.order_id, "arrival_time": order.arrival_time},
                    )
                )
        if after.is_stockout and not before.is_stockout:
            events.append(
                SimulationEvent(
                    event_type=SimulationEventType.STOCKOUT_STARTED,
                    scenario_id=scenario.scenario_id,
                    time=current.time,
                    sku_id=after.sku_id,
                )
            )
        if after.marketing_event_active and not before.marketing_event_active:
            events.append(
                SimulationEvent(
                    event_type=SimulationEventType.MARKETING_EVENT_STARTED,
                    scenario_id=scenario.scenario_id,
                    time=current.time,
                    sku_id=after.sku_id,
                )
            )
    if current.status == SimStatus.ENDED and previous.status != SimStatus.ENDED:
        score = current.last_score()
        events.append(
            SimulationEvent(
                event_type=SimulationEventType.SCENARIO_ENDED,
                scenario_id=scenario.scenario_id,
                time=current.time,
                payload=score.model_dump(mode="json") if score else {},
            )
        )
    return events


class SimulationSession:
    """Holds the current state of one product's playthrough."""

    def __init__(
        self,
        product: ProductProfile,
        event_bus: EventBus | None = None,
        agent: QuiverAgent | None = None,
        config: SimulationConfig = DEFAULT_SIMULATION_CONFIG,
    ):
        self.product = product
        self.event_bus = event_bus or EventBus()
        self.config = config
        self.agent = agent or QuiverAgent(sim_config=config)
        self.state = SimState(status=SimStatus.PRODUCT_SELECT, selected_product=product)

    def _require_scenario(self) -> ScenarioConfig:
        if self.state.scenario is None:
            raise ValueError("No scenario has been started")
        return self.state.scenario

    def start(self, scenario: ScenarioConfig) -> SimState:
        self.state = start_scenario(scenario, self.product, self.state, self.config)
        return self.state

    async def begin(self, scenario: ScenarioConfig) -> SimState:
        """Start ``scenario`` and announce it on the event bus."""
        state = self.start(scenario)
        await self.event_bus.publish(
            SimulationEvent(
                event_type=SimulationEventType.SCENARIO_STARTED,
                scenario_id=scenario.scenario_id,
                time=state.time,
                payload={"skus": [sku.sku_id for sku in scenario.skus], "auto_play": scenario.quiver_auto_play},
            )
        )
        return state

    def step(self, elapsed: float) -> tuple[SimState, list[SimulationEvent]]:
        """Apply one capped tick followed by the policy, if it is enabled."""
        scenario = self._require_scenario()
        previous = self.state
        delta = min(elapsed, self.config.max_tick)
        state = tick(previous, delta, scenario, self.product, self.config)
        if state.is_playing and state.quiver_enabled:
            state = self.agent.act(state, scenario, self.product)
        self.state = state
        return state, diff_events(previous, state)

    async def advance(self, elapsed: float) -> SimState:
        state, events = self.step(elapsed)
        for event in events:
            await self.event_bus.publish(event)
        return state

    def order(self, sku_id: str) -> SimState:
        """Human order; throttled and ignored during auto-play."""
        self._require_scenario()
        self.state = place_order(self.state, sku_id, self.product, manual=True, config=self.config)
        return self.state

    def enable_policy(self) -> SimState:
        self.state = enable_autonomous_policy(self.state)
        return self.state

    @property
    def finished(self) -> bool:
        return self.state.status == SimStatus.ENDED


def run_scenario(
    scenario: ScenarioConfig,
    product: ProductProfile,
    step: float = 0.1,
    use_policy: bool = False,
    order_schedule: Iterable[tuple[float, str]] = (),
    config: SimulationConfig = DEFAULT_SIMULATION_CONFIG,
) -> SimState:
    """
    Play a scenario headless at a fixed step until it ends.

    ``order_schedule`` holds (time, sku_id) pairs of human orders, placed at
    the first step whose time is at or past the requested time.
    """
    if step <= 0:
        raise ValueError(f"Step must be positive, got {step}")
    session = SimulationSession(product, config=config)
    session.start(scenario)
    if use_policy:
        session.enable_policy()

    pending = sorted(order_schedule)
    while not session.finished:
        while pending and pending[0][0] <= session.state.time:
            _, sku_id = pending.pop(0)
            session.order(sku_id)
        session.step(step)
    return session.state


def history_frame(state: SimState) -> pd.DataFrame:
    """Inventory history of every SKU as a long-format DataFrame."""
    rows = [
        {"sku_id": sku_state.sku_id, "time": point.time, "inventory": point.inventory}
        for sku_state in state.sku_states
        for point in sku_state.inventory_history
    ]
    return pd.DataFrame(rows, columns=["sku_id", "time", "inventory"])
