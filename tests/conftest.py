import sys
from pathlib import Path

import pytest

# Ensure project root is on sys.path to allow `import agents`, `import environments`, etc.
PROJECT_ROOT = Path(__file__).resolve().parent.parent
if str(PROJECT_ROOT) not in sys.path:
    sys.path.insert(0, str(PROJECT_ROOT))

from models.inventory import DemandSegment, MarketingEvent, ProductProfile, ScenarioConfig, SKUConfig  # noqa: E402


@pytest.fixture
def test_product() -> ProductProfile:
    """Round-number product: margin 1.50, holding rate 0.04 per unit and time unit."""
    return ProductProfile(
        product_id="test-product",
        name="Widget",
        icon="W",
        cogs_per_unit=1.0,
        revenue_per_unit=2.5,
        annual_holding_rate=0.16,
        ordering_cost=25.0,
        demand_scale=10.0,
        base_order_quantity=50,
        base_initial_inventory=100,
        max_inventory=1000,
        sku_variants=("Red", "Blue"),
    )


@pytest.fixture
def flat_sku() -> SKUConfig:
    """Constant demand of 10 units per time unit over [0, 36)."""
    return SKUConfig(
        sku_id="sku-1",
        name="Widget",
        demand_segments=(DemandSegment(start_time=0.0, end_time=36.0, base_rate=10.0),),
        initial_inventory=100,
        order_quantity=50,
    )


@pytest.fixture
def flat_scenario(flat_sku: SKUConfig) -> ScenarioConfig:
    return ScenarioConfig(scenario_id="level-1", name="Flat", duration=36.0, skus=(flat_sku,))


@pytest.fixture
def promo_scenario(flat_sku: SKUConfig) -> ScenarioConfig:
    """Flat demand doubled by a campaign over [10, 22)."""
    sku = SKUConfig(
        sku_id=flat_sku.sku_id,
        name=flat_sku.name,
        demand_segments=flat_sku.demand_segments,
        initial_inventory=flat_sku.initial_inventory,
        order_quantity=flat_sku.order_quantity,
        marketing_event_index=0,
    )
    event = MarketingEvent(trigger_time=10.0, duration=12.0, demand_multiplier=2.0)
    return ScenarioConfig(
        scenario_id="level-2",
        name="Promo",
        duration=36.0,
        skus=(sku,),
        marketing_events=(event,),
    )
