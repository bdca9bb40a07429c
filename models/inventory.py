"""
Inventory-related data models for the quiver simulation.
Includes the static product, demand curve, marketing event, SKU and scenario
definitions. All of them are immutable once a scenario is built.
"""

from dataclasses import dataclass, field


@dataclass(frozen=True)
class ProductProfile:
    """
    Economic parameters of a good, including cost, revenue, holding rate and
    default ordering quantities.
    """

    product_id: str
    name: str
    icon: str
    cogs_per_unit: float
    revenue_per_unit: float
    annual_holding_rate: float
    ordering_cost: float
    demand_scale: float
    base_order_quantity: int
    base_initial_inventory: int
    max_inventory: int
    sku_variants: tuple[str, ...] = ()

    def margin(self) -> float:
        """Lost margin per unit of unmet demand."""
        return self.revenue_per_unit - self.cogs_per_unit

    def holding_cost_per_time_unit(self, year_fraction: float = 0.25) -> float:
        return self.cogs_per_unit * self.annual_holding_rate * year_fraction


@dataclass(frozen=True)
class DemandSegment:
    """Constant demand rate over the half-open interval [start_time, end_time)."""

    start_time: float
    end_time: float
    base_rate: float

    @property
    def duration(self) -> float:
        return self.end_time - self.start_time

    def contains(self, time: float) -> bool:
        return self.start_time <= time < self.end_time


@dataclass(frozen=True)
class MarketingEvent:
    """
    Promotional window multiplying the demand of its linked SKU.
    The UI may reveal it from notify_time onwards, which defaults to trigger_time.
    """

    trigger_time: float
    duration: float
    demand_multiplier: float
    label: str = "Marketing Campaign"
    notify_time: float | None = None

    @property
    def end_time(self) -> float:
        return self.trigger_time + self.duration

    @property
    def visible_from(self) -> float:
        return self.trigger_time if self.notify_time is None else self.notify_time

    def is_active(self, time: float) -> bool:
        return self.trigger_time <= time < self.end_time


@dataclass(frozen=True)
class SKUConfig:
    """Static per-SKU definition."""

    sku_id: str
    name: str
    demand_segments: tuple[DemandSegment, ...]
    initial_inventory: float
    order_quantity: float
    variant: str | None = None
    lead_time: float | None = None  # Falls back to the scenario-wide base lead time
    marketing_event_index: int | None = None


@dataclass(frozen=True)
class ScenarioConfig:
    """A complete timed run ("level") with its SKUs, events and rules."""

    scenario_id: str
    name: str
    duration: float
    skus: tuple[SKUConfig, ...]
    show_forecast: bool = True
    lead_time_multiplier: float = 1.0
    marketing_events: tuple[MarketingEvent, ...] = field(default_factory=tuple)
    quiver_enabled: bool = False
    quiver_auto_play: bool = False
    description: str = ""

    def sku_index(self, sku_id: str) -> int | None:
        for index, sku in enumerate(self.skus):
            if sku.sku_id == sku_id:
                return index
        return None

    def linked_event(self, sku: SKUConfig) -> MarketingEvent | None:
        """Return the marketing event linked to a SKU, if the index is valid."""
        index = sku.marketing_event_index
        if index is None or not (0 <= index < len(self.marketing_events)):
            return None
        return self.marketing_events[index]

    def effective_lead_time(self, sku: SKUConfig, base_lead_time: float) -> float:
        lead_time = sku.lead_time if sku.lead_time is not None else base_lead_time
        return lead_time * self.lead_time_multiplier
