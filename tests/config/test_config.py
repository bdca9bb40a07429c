from dataclasses import FrozenInstanceError

import pytest

from config.config import (
    DEFAULT_SIMULATION_CONFIG,
    GRADE_THRESHOLDS,
    QuiverPolicyConfig,
    ScenarioGeneratorConfig,
    SimulationConfig,
)


def test_simulation_config_defaults():
    """Test SimulationConfig initializes with correct default values."""
    config = SimulationConfig()
    assert config.base_lead_time == 4.0
    assert config.scenario_duration == 36.0
    assert config.max_tick == 0.1
    assert config.history_sample_interval == 0.1
    assert config.manual_order_cooldown == 1.0
    assert config.manual_max_pending_orders == 5
    assert config.order_ceiling_factor == 1.5
    assert config.initial_last_order_time == -10.0
    assert config.base_score == 1000.0
    assert config.holding_year_fraction == 0.25


def test_simulation_config_is_frozen():
    with pytest.raises(FrozenInstanceError):
        DEFAULT_SIMULATION_CONFIG.base_lead_time = 2.0  # type: ignore [misc]


def test_simulation_config_custom():
    config = SimulationConfig(base_lead_time=2.0, max_tick=0.5)
    assert config.base_lead_time == 2.0
    assert config.max_tick == 0.5
    # Check a default value is still correct
    assert config.scenario_duration == 36.0


def test_policy_config_defaults():
    config = QuiverPolicyConfig()
    assert config.service_level_z == 1.65
    assert config.reorder_point_scale == 0.25


def test_generator_config_defaults():
    config = ScenarioGeneratorConfig()
    assert config.default_seed == 42
    assert config.seed_stride == 17
    assert config.multi_sku_count == 4
    assert config.spike_lead_time_multiplier == 1.5
    assert config.marketing_event_duration == 12.0
    assert config.marketing_event_multiplier == 2.2
    assert config.multi_sku_event_times == [7.0, 20.0]
    assert sum(config.band_durations) == 36


def test_generator_config_default_factory():
    """Test that the default_factory creates separate list instances."""
    config1 = ScenarioGeneratorConfig()
    config2 = ScenarioGeneratorConfig()
    assert config1.band_durations is not config2.band_durations
    config1.multi_sku_event_times.append(30.0)
    assert config2.multi_sku_event_times == [7.0, 20.0]


@pytest.mark.parametrize("product_id", ["protein-bar", "medicine", "sofa"])
def test_grade_thresholds_are_ascending(product_id):
    for level_id, ceilings in GRADE_THRESHOLDS[product_id].items():
        assert list(ceilings) == sorted(ceilings), level_id
    assert set(GRADE_THRESHOLDS[product_id]) == {"level-1", "level-2", "level-3", "level-3-quiver"}
