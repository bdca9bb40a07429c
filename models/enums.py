"""
Centralized Enum definitions for the project.
"""

from enum import Enum


class SimStatus(str, Enum):
    """Screen-flow status of the simulation"""

    MENU = "menu"
    PRODUCT_SELECT = "product_select"
    PLAYING = "playing"  # A scenario is running under human control
    ENDED = "ended"  # Scenario finished, score available
    DEMO = "demo"  # Auto-play scenario driven by the policy
    SUMMARY = "summary"


class Grade(str, Enum):
    """Letter grade for a finished scenario"""

    A = "A"
    B = "B"
    C = "C"
    D = "D"
    F = "F"


class DemandPattern(str, Enum):
    """Band sequence used when generating a demand curve"""

    STABLE = "stable"
    VARIABLE = "variable"
    INCREASING = "increasing"


class BandLevel(str, Enum):
    """Demand level of a single band"""

    HIGH = "high"
    MEDIUM = "medium"
    LOW = "low"


class ScenarioTemplate(str, Enum):
    """Named scenarios the generator can build"""

    BASELINE = "level-1"
    SPIKE = "level-2"
    MULTI_SKU = "level-3"
    AUTOPLAY = "level-3-quiver"


class SimulationEventType(str, Enum):
    """Events published by the simulation session"""

    SCENARIO_STARTED = "SCENARIO_STARTED"
    ORDER_PLACED = "ORDER_PLACED"
    ORDER_ARRIVED = "ORDER_ARRIVED"
    STOCKOUT_STARTED = "STOCKOUT_STARTED"
    MARKETING_EVENT_STARTED = "MARKETING_EVENT_STARTED"
    SCENARIO_ENDED = "SCENARIO_ENDED"
