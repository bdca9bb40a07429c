"""
Cost model: per-tick holding and stockout costs, grades and level scores.
"""

from dataclasses import dataclass

from config.config import (
    DEFAULT_GRADE_PRODUCT,
    DEFAULT_GRADE_SCENARIO,
    DEFAULT_SIMULATION_CONFIG,
    GRADE_THRESHOLDS,
    SimulationConfig,
)
from models.enums import Grade
from models.inventory import ProductProfile
from models.state import LevelScore, SKUState


@dataclass(frozen=True)
class TickCostResult:
    holding_cost: float
    stockout_cost: float
    new_inventory: float
    unmet_demand: float


def calculate_tick_costs(
    inventory: float,
    demand_rate: float,
    delta_time: float,
    product: ProductProfile,
    config: SimulationConfig = DEFAULT_SIMULATION_CONFIG,
) -> TickCostResult:
    """
    Consume one tick of demand from ``inventory`` and price the outcome.

    When inventory covers the demand (including exactly), holding cost is
    charged on the full pre-tick inventory. Otherwise inventory depletes to
    zero, holding cost uses the average inventory during the linear depletion
    and every unmet unit costs the lost margin.
    """
    demand = max(0.0, demand_rate * delta_time)
    holding_rate = product.holding_cost_per_time_unit(config.holding_year_fraction)

    if inventory >= demand:
        return TickCostResult(
            holding_cost=inventory * holding_rate * delta_time,
            stockout_cost=0.0,
            new_inventory=max(0.0, inventory - demand),
            unmet_demand=0.0,
        )

    unmet_demand = demand - inventory
    return TickCostResult(
        holding_cost=(inventory / 2) * holding_rate * delta_time,
        stockout_cost=unmet_demand * product.margin(),
        new_inventory=0.0,
        unmet_demand=unmet_demand,
    )


def grade_thresholds(level_id: str, product_id: str | None = None) -> tuple[float, float, float, float]:
    product_thresholds = GRADE_THRESHOLDS.get(product_id or DEFAULT_GRADE_PRODUCT)
    if product_thresholds is None:
        product_thresholds = GRADE_THRESHOLDS[DEFAULT_GRADE_PRODUCT]
    return product_thresholds.get(level_id, product_thresholds[DEFAULT_GRADE_SCENARIO])


def calculate_grade(total_cost: float, level_id: str, product_id: str | None = None) -> Grade:
    """Grade a total cost; a cost equal to a ceiling earns that ceiling's grade."""
    for grade, ceiling in zip((Grade.A, Grade.B, Grade.C, Grade.D), grade_thresholds(level_id, product_id)):
        if total_cost <= ceiling:
            return grade
    return Grade.F


def calculate_score(total_cost: float, config: SimulationConfig = DEFAULT_SIMULATION_CONFIG) -> float:
    return max(0.0, config.base_score - total_cost)


def compute_level_score(
    level_id: str,
    sku_states: tuple[SKUState, ...] | list[SKUState],
    product_id: str | None = None,
    config: SimulationConfig = DEFAULT_SIMULATION_CONFIG,
) -> LevelScore:
    total_holding = sum(s.total_holding_cost for s in sku_states)
    total_stockout = sum(s.total_stockout_cost for s in sku_states)
    total_ordering = sum(s.total_ordering_cost for s in sku_states)
    total_cost = total_holding + total_stockout + total_ordering
    return LevelScore(
        level_id=level_id,
        total_holding_cost=total_holding,
        total_stockout_cost=total_stockout,
        total_ordering_cost=total_ordering,
        total_cost=total_cost,
        score=calculate_score(total_cost, config),
        grade=calculate_grade(total_cost, level_id, product_id),
    )
