"""
Data models for representing simulation runtime state.

All models are frozen; transitions build new values with ``model_copy`` so a
previous state can be kept for replay or comparison.
"""

from pydantic import BaseModel, ConfigDict, Field

from .enums import Grade, SimStatus
from .inventory import ProductProfile, ScenarioConfig


class InventoryPoint(BaseModel):
    """A (time, inventory) sample of the history line"""

    model_config = ConfigDict(frozen=True)

    time: float
    inventory: float


class PendingOrder(BaseModel):
    """A replenishment order waiting to arrive"""

    model_config = ConfigDict(frozen=True)

    order_id: int
    quantity: float
    arrival_time: float
    placed_at: float


class SKUState(BaseModel):
    """Mutable-by-copy runtime state of one SKU"""

    model_config = ConfigDict(frozen=True)

    sku_id: str
    inventory: float = Field(ge=0)
    pending_orders: tuple[PendingOrder, ...] = ()
    inventory_history: tuple[InventoryPoint, ...] = ()
    total_holding_cost: float = 0.0
    total_stockout_cost: float = 0.0
    total_ordering_cost: float = 0.0
    order_count: int = 0
    last_order_time: float = -10.0
    order_id: int = 0  # Last issued order id
    is_stockout: bool = False
    marketing_event_active: bool = False

    def on_order(self) -> float:
        return sum(order.quantity for order in self.pending_orders)

    def inventory_position(self) -> float:
        """On-hand plus every outstanding order quantity."""
        return self.inventory + self.on_order()

    @property
    def total_cost(self) -> float:
        return self.total_holding_cost + self.total_stockout_cost + self.total_ordering_cost


class LevelScore(BaseModel):
    """Cost summary and grade of a finished scenario"""

    model_config = ConfigDict(frozen=True)

    level_id: str
    total_holding_cost: float
    total_stockout_cost: float
    total_ordering_cost: float
    total_cost: float
    score: float
    grade: Grade


class QuiverMetrics(BaseModel):
    """Intermediate quantities of one policy evaluation, for display"""

    model_config = ConfigDict(frozen=True)

    safety_stock: float
    lead_time_demand: float
    reorder_point: float
    inventory_position: float
    predicted_inventory: float
    should_order: bool


class SimState(BaseModel):
    """Overall simulation state"""

    model_config = ConfigDict(frozen=True)

    status: SimStatus = SimStatus.MENU
    time: float = 0.0
    scenario: ScenarioConfig | None = None
    sku_states: tuple[SKUState, ...] = ()
    quiver_enabled: bool = False
    selected_product: ProductProfile | None = None
    level_scores: tuple[LevelScore, ...] = ()

    @property
    def is_playing(self) -> bool:
        return self.status in (SimStatus.PLAYING, SimStatus.DEMO)

    def sku_state(self, sku_id: str) -> SKUState | None:
        for sku_state in self.sku_states:
            if sku_state.sku_id == sku_id:
                return sku_state
        return None

    def last_score(self) -> LevelScore | None:
        return self.level_scores[-1] if self.level_scores else None
