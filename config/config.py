"""
Configuration classes for the quiver inventory simulation.
Defines simulation constants, policy parameters and scenario generation knobs
in a type-safe, extensible way.
"""

from dataclasses import dataclass, field


@dataclass(frozen=True)
class SimulationConfig:
    base_lead_time: float = 4.0  # ~1.5 weeks of simulated time
    scenario_duration: float = 36.0  # 36 time units = 3 months
    time_units_per_month: float = 12.0
    max_tick: float = 0.1  # Largest step a driving clock may apply at once
    history_sample_interval: float = 0.1
    manual_order_cooldown: float = 1.0
    manual_max_pending_orders: int = 5
    order_ceiling_factor: float = 1.5  # Soft ceiling over product max inventory
    initial_last_order_time: float = -10.0
    base_score: float = 1000.0
    holding_year_fraction: float = 0.25  # One scenario covers a quarter of a year


@dataclass(frozen=True)
class QuiverPolicyConfig:
    service_level_z: float = 1.65  # ~95% one-sided service level
    reorder_point_scale: float = 0.25


@dataclass
class ScenarioGeneratorConfig:
    default_seed: int = 42
    seed_stride: int = 17
    multi_sku_count: int = 4
    spike_lead_time_multiplier: float = 1.5
    marketing_event_duration: float = 12.0
    marketing_event_multiplier: float = 2.2
    spike_event_time: float = 14.0
    spike_notify_lead: float = 6.0
    multi_sku_event_times: list[float] = field(default_factory=lambda: [7.0, 20.0])
    band_durations: list[int] = field(default_factory=lambda: [5, 5, 5, 5, 5, 5, 6])


DEFAULT_SIMULATION_CONFIG = SimulationConfig()
DEFAULT_POLICY_CONFIG = QuiverPolicyConfig()

# Total-cost ceilings for grades A, B, C and D, per product and scenario.
GRADE_THRESHOLDS: dict[str, dict[str, tuple[float, float, float, float]]] = {
    "protein-bar": {
        "level-1": (950, 1150, 1350, 1550),
        "level-2": (1100, 1300, 1500, 1700),
        "level-3": (8600, 9000, 10000, 11000),
        "level-3-quiver": (8600, 9000, 10000, 11000),
    },
    "medicine": {
        "level-1": (2100, 2300, 2500, 2700),
        "level-2": (2500, 2700, 2900, 3100),
        "level-3": (16000, 17200, 18400, 20600),
        "level-3-quiver": (16000, 17200, 18400, 20600),
    },
    "sofa": {
        "level-1": (1400, 1600, 1800, 2000),
        "level-2": (1500, 1700, 1900, 2100),
        "level-3": (11700, 12900, 13100, 13300),
        "level-3-quiver": (11700, 12900, 13100, 13300),
    },
}

DEFAULT_GRADE_PRODUCT = "protein-bar"
DEFAULT_GRADE_SCENARIO = "level-1"
