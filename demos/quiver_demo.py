"""
Demo script for the quiver inventory simulation.

Plays every scenario headless for one product, once without any orders and
once with the autonomous reorder policy, then prints a cost table. Finally the
auto-play scenario is driven through an async session whose events are
logged as they are published.

Settings come from the environment (or a project-level .env):
QUIVER_PRODUCT (default "protein-bar"), QUIVER_SEED (42), QUIVER_STEP (0.1).
"""

import asyncio
import os

import pandas as pd

from environments.scenarios import build_scenario
from environments.session import SimulationSession, run_scenario
from models.enums import ScenarioTemplate, SimulationEventType
from models.events import SimulationEvent
from models.products import PRODUCTS, get_product_by_id
from utils.env import get_env_float, get_env_int, load_project_dotenv
from utils.formatting import format_cost
from utils.logger import get_logger

logger = get_logger("quiver_demo")


def score_table(product_id: str, seed: int, step: float) -> pd.DataFrame:
    product = get_product_by_id(product_id)
    if product is None:
        raise ValueError(f"Unknown product '{product_id}'. Available: {[p.product_id for p in PRODUCTS]}")

    rows = []
    for template in ScenarioTemplate:
        scenario = build_scenario(template, product, seed=seed)
        for use_policy in (False, True):
            if scenario.quiver_auto_play and not use_policy:
                continue
            final = run_scenario(scenario, product, step=step, use_policy=use_policy)
            score = final.last_score()
            rows.append(
                {
                    "scenario": scenario.scenario_id,
                    "policy": use_policy,
                    "holding": format_cost(score.total_holding_cost),
                    "stockout": format_cost(score.total_stockout_cost),
                    "ordering": format_cost(score.total_ordering_cost),
                    "total": format_cost(score.total_cost),
                    "grade": score.grade.value,
                }
            )
    return pd.DataFrame(rows)


async def watch_autoplay(product_id: str, seed: int, step: float) -> None:
    product = get_product_by_id(product_id)
    session = SimulationSession(product)

    async def log_event(event: SimulationEvent) -> None:
        logger.info(f"[t={event.time:5.2f}] {event.event_type.value} {event.sku_id or ''} {event.payload}")

    for event_type in (
        SimulationEventType.SCENARIO_STARTED,
        SimulationEventType.ORDER_PLACED,
        SimulationEventType.STOCKOUT_STARTED,
        SimulationEventType.MARKETING_EVENT_STARTED,
        SimulationEventType.SCENARIO_ENDED,
    ):
        session.event_bus.subscribe(event_type, log_event)

    await session.begin(build_scenario(ScenarioTemplate.AUTOPLAY, product, seed=seed))
    while not session.finished:
        await session.advance(step)


def main() -> None:
    load_project_dotenv()
    product_id = os.getenv("QUIVER_PRODUCT", "protein-bar")
    seed = get_env_int("QUIVER_SEED", 42)
    step = get_env_float("QUIVER_STEP", 0.1)

    logger.info(f"Running scenarios for {product_id} (seed={seed}, step={step})")
    print(score_table(product_id, seed, step).to_string(index=False))
    asyncio.run(watch_autoplay(product_id, seed, step))


if __name__ == "__main__":
    main()
