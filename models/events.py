"""
Data models for events published while a scenario runs.
"""

import uuid
from typing import Any

from pydantic import BaseModel, Field

from .enums import SimulationEventType


class SimulationEvent(BaseModel):
    """Notification for shells that keep their own view state."""

    event_id: str = Field(default_factory=lambda: str(uuid.uuid4()))
    event_type: SimulationEventType
    scenario_id: str
    time: float
    sku_id: str | None = None
    payload: dict[str, Any] = Field(default_factory=dict)
