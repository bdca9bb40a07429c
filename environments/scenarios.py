"""
Scenario ("level") generator.

Builds deterministic scenario definitions from a product profile and a seed.
Demand curves are one-unit segments grouped into bands tagged high, medium or
low; each band picks a centre multiplier and every segment swings randomly
around it. All randomness comes from a seeded ``Mulberry32`` so the same seed
always produces the same curve.
"""

import logging
from dataclasses import replace

from config.config import DEFAULT_SIMULATION_CONFIG, ScenarioGeneratorConfig, SimulationConfig
from models.enums import BandLevel, DemandPattern, ScenarioTemplate
from models.inventory import DemandSegment, MarketingEvent, ProductProfile, ScenarioConfig, SKUConfig
from utils.rng import Mulberry32

logger = logging.getLogger(__name__)

# (min centre, max centre, per-segment swing) of the demand multiplier
BAND_CONFIG: dict[BandLevel, tuple[float, float, float]] = {
    BandLevel.HIGH: (3.5, 5.5, 6.0),
    BandLevel.MEDIUM: (1.8, 3.0, 4.2),
    BandLevel.LOW: (0.4, 1.0, 2.4),
}

BAND_PATTERNS: dict[DemandPattern, list[BandLevel]] = {
    DemandPattern.STABLE: [
        BandLevel.MEDIUM, BandLevel.HIGH, BandLevel.LOW, BandLevel.MEDIUM,
        BandLevel.HIGH, BandLevel.LOW, BandLevel.MEDIUM,
    ],
    DemandPattern.VARIABLE: [
        BandLevel.LOW, BandLevel.HIGH, BandLevel.LOW, BandLevel.HIGH,
        BandLevel.LOW, BandLevel.HIGH, BandLevel.LOW,
    ],
    DemandPattern.INCREASING: [
        BandLevel.LOW, BandLevel.LOW, BandLevel.MEDIUM, BandLevel.MEDIUM,
        BandLevel.HIGH, BandLevel.HIGH, BandLevel.HIGH,
    ],
}

MIN_DEMAND_MULTIPLIER = 0.3
MULTI_SKU_PATTERNS = [DemandPattern.STABLE, DemandPattern.VARIABLE, DemandPattern.INCREASING, DemandPattern.STABLE]


def generate_demand_segments(
    base_rate: float,
    pattern: DemandPattern,
    seed: int = 42,
    band_durations: list[int] | None = None,
) -> tuple[DemandSegment, ...]:
    """
    Generate one-unit demand segments for a band pattern.

    Args:
        base_rate: Demand rate that band multipliers scale.
        pattern: Band sequence to follow.
        seed: Seed of the pseudo-random generator.
        band_durations: Number of one-unit segments per band.

    Returns:
        Contiguous segments starting at time zero.
    """
    rng = Mulberry32(seed)
    bands = BAND_PATTERNS[pattern]
    durations = band_durations or [5, 5, 5, 5, 5, 5, 6]
    if len(durations) != len(bands):
        raise ValueError(f"Expected {len(bands)} band durations, got {len(durations)}")

    # Centres are drawn first so the swing sequence does not shift them
    centres = [rng.uniform(BAND_CONFIG[band][0], BAND_CONFIG[band][1]) for band in bands]

    segments = []
    t = 0
    for band, centre, duration in zip(bands, centres, durations):
        swing = BAND_CONFIG[band][2]
        for _ in range(duration):
            offset = (rng.next_float() * 2 - 1) * swing
            multiplier = max(MIN_DEMAND_MULTIPLIER, centre + offset)
            segments.append(DemandSegment(start_time=float(t), end_time=float(t + 1), base_rate=base_rate * multiplier))
            t += 1
    return tuple(segments)


def create_baseline_scenario(
    product: ProductProfile,
    seed: int | None = None,
    gen_config: ScenarioGeneratorConfig | None = None,
    sim_config: SimulationConfig = DEFAULT_SIMULATION_CONFIG,
) -> ScenarioConfig:
    """Single SKU, visible forecast, no events, normal lead time."""
    gen_config = gen_config or ScenarioGeneratorConfig()
    seed = gen_config.default_seed if seed is None else seed
    sku = SKUConfig(
        sku_id="sku-1",
        name=product.name,
        demand_segments=generate_demand_segments(
            product.demand_scale, DemandPattern.STABLE, seed, gen_config.band_durations
        ),
        initial_inventory=product.base_initial_inventory,
        order_quantity=product.base_order_quantity,
    )
    return ScenarioConfig(
        scenario_id=ScenarioTemplate.BASELINE.value,
        name="Level 1",
        description="Learn the basics with predictable demand",
        duration=sim_config.scenario_duration,
        skus=(sku,),
        show_forecast=True,
        lead_time_multiplier=1.0,
    )


def create_spike_scenario(
    product: ProductProfile,
    seed: int | None = None,
    gen_config: ScenarioGeneratorConfig | None = None,
    sim_config: SimulationConfig = DEFAULT_SIMULATION_CONFIG,
) -> ScenarioConfig:
    """Single SKU with a hidden forecast, a marketing campaign and a longer lead time."""
    gen_config = gen_config or ScenarioGeneratorConfig()
    seed = gen_config.default_seed if seed is None else seed
    event = MarketingEvent(
        trigger_time=gen_config.spike_event_time,
        duration=gen_config.marketing_event_duration,
        demand_multiplier=gen_config.marketing_event_multiplier,
        label="Marketing Campaign",
        notify_time=max(0.0, gen_config.spike_event_time - gen_config.spike_notify_lead),
    )
    sku = SKUConfig(
        sku_id="sku-1",
        name=product.name,
        demand_segments=generate_demand_segments(
            product.demand_scale, DemandPattern.VARIABLE, seed, gen_config.band_durations
        ),
        initial_inventory=product.base_initial_inventory,
        order_quantity=product.base_order_quantity,
        marketing_event_index=0,
    )
    return ScenarioConfig(
        scenario_id=ScenarioTemplate.SPIKE.value,
        name="Level 2",
        description="Handle unexpected demand spikes",
        duration=sim_config.scenario_duration,
        skus=(sku,),
        show_forecast=False,
        lead_time_multiplier=gen_config.spike_lead_time_multiplier,
        marketing_events=(event,),
    )


def create_multi_sku_scenario(
    product: ProductProfile,
    seed: int | None = None,
    gen_config: ScenarioGeneratorConfig | None = None,
    sim_config: SimulationConfig = DEFAULT_SIMULATION_CONFIG,
) -> ScenarioConfig:
    """
    Several SKUs at once, each with its own demand curve.
    The first SKU is linked to the early campaign and the fourth to the late one.
    """
    gen_config = gen_config or ScenarioGeneratorConfig()
    seed = gen_config.default_seed if seed is None else seed
    variants = list(product.sku_variants[: gen_config.multi_sku_count]) or [product.name]
    event_links = {0: 0, 3: 1}

    skus = []
    for index, variant in enumerate(variants):
        sku_base_rate = product.demand_scale * (0.9 + index * 0.05)
        skus.append(
            SKUConfig(
                sku_id=f"sku-{index + 1}",
                name=product.name,
                variant=variant,
                demand_segments=generate_demand_segments(
                    sku_base_rate,
                    MULTI_SKU_PATTERNS[index % len(MULTI_SKU_PATTERNS)],
                    seed + index * gen_config.seed_stride,
                    gen_config.band_durations,
                ),
                initial_inventory=product.base_initial_inventory,
                order_quantity=product.base_order_quantity,
                marketing_event_index=event_links.get(index),
            )
        )

    events = tuple(
        MarketingEvent(
            trigger_time=trigger,
            duration=gen_config.marketing_event_duration,
            demand_multiplier=gen_config.marketing_event_multiplier,
            label="Marketing Campaign",
        )
        for trigger in gen_config.multi_sku_event_times[:2]
    )
    return ScenarioConfig(
        scenario_id=ScenarioTemplate.MULTI_SKU.value,
        name="Level 3",
        description=f"Manage {len(skus)} SKUs simultaneously",
        duration=sim_config.scenario_duration,
        skus=tuple(skus),
        show_forecast=True,
        lead_time_multiplier=1.0,
        marketing_events=events,
    )


def create_autoplay_scenario(
    product: ProductProfile,
    seed: int | None = None,
    gen_config: ScenarioGeneratorConfig | None = None,
    sim_config: SimulationConfig = DEFAULT_SIMULATION_CONFIG,
) -> ScenarioConfig:
    """The multi-SKU scenario with the policy forced on and human input ignored."""
    base = create_multi_sku_scenario(product, seed, gen_config, sim_config)
    return replace(
        base,
        scenario_id=ScenarioTemplate.AUTOPLAY.value,
        name="Level 3 - Quiver Demo",
        description=f"Watch Quiver Engine manage {len(base.skus)} SKUs",
        quiver_enabled=True,
        quiver_auto_play=True,
    )


_BUILDERS = {
    ScenarioTemplate.BASELINE: create_baseline_scenario,
    ScenarioTemplate.SPIKE: create_spike_scenario,
    ScenarioTemplate.MULTI_SKU: create_multi_sku_scenario,
    ScenarioTemplate.AUTOPLAY: create_autoplay_scenario,
}


def build_scenario(
    template: ScenarioTemplate | str,
    product: ProductProfile,
    seed: int | None = None,
    gen_config: ScenarioGeneratorConfig | None = None,
    sim_config: SimulationConfig = DEFAULT_SIMULATION_CONFIG,
) -> ScenarioConfig:
    try:
        template = ScenarioTemplate(template)
    except ValueError:
        logger.error(f"Unknown scenario template: {template}")
        raise ValueError(f"Unknown scenario template: {template}") from None
    scenario = _BUILDERS[template](product, seed, gen_config, sim_config)
    logger.debug(f"Built scenario {scenario.scenario_id} for {product.product_id} (seed={seed})")
    return scenario
