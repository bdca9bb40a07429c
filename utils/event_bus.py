"""
Simple asynchronous event bus for simulation notifications.
"""

import asyncio
import logging
from collections.abc import Callable, Coroutine
from typing import Any

from models.enums import SimulationEventType
from models.events import SimulationEvent

logger_event_bus = logging.getLogger(__name__)  # Use a specific logger

Subscriber = Callable[[SimulationEvent], Coroutine[Any, Any, None]]


def _callback_name(callback: Subscriber) -> str:
    return getattr(callback, "__name__", type(callback).__name__)


class EventBus:
    """Fan-out of simulation events to async subscribers."""

    def __init__(self):
        self.subscribers: dict[SimulationEventType, list[Subscriber]] = {}

    def subscribe(self, event_type: SimulationEventType, callback: Subscriber) -> None:
        """Subscribe to an event type."""
        if not callable(callback):
            raise TypeError("Callback must be a callable async function.")
        if event_type not in self.subscribers:
            self.subscribers[event_type] = []
        if callback not in self.subscribers[event_type]:  # Avoid duplicate subscriptions
            self.subscribers[event_type].append(callback)
            logger_event_bus.debug(f"Callback {_callback_name(callback)} subscribed to {event_type.value}")
        else:
            logger_event_bus.warning(
                f"Callback {_callback_name(callback)} already subscribed to {event_type.value}"
            )

    def unsubscribe(self, event_type: SimulationEventType, callback: Subscriber) -> None:
        """Unsubscribe a specific callback from an event type."""
        if event_type in self.subscribers:
            try:
                self.subscribers[event_type].remove(callback)
                logger_event_bus.debug(
                    f"Callback {_callback_name(callback)} unsubscribed from {event_type.value}"
                )
                if not self.subscribers[event_type]:  # Clean up empty list
                    del self.subscribers[event_type]
            except ValueError:
                logger_event_bus.warning(
                    f"Callback {_callback_name(callback)} not found for event type {event_type.value}"
                )

    async def publish(self, event: SimulationEvent) -> None:
        """Publish an event to subscribers."""
        if not isinstance(event, SimulationEvent):
            logger_event_bus.error(f"Attempted to publish invalid event type: {type(event)}")
            return

        logger_event_bus.debug(f"Event published: {event.event_type.value} at t={event.time:.2f}")
        callbacks = list(self.subscribers.get(event.event_type, []))
        if not callbacks:
            return
        # Gather tasks to run handlers concurrently
        tasks = [asyncio.create_task(callback(event)) for callback in callbacks]
        results = await asyncio.gather(*tasks, return_exceptions=True)
        for callback, result in zip(callbacks, results):
            if isinstance(result, Exception):
                logger_event_bus.error(
                    f"Error in subscriber callback '{_callback_name(callback)}' "
                    f"for event {event.event_type.value}: {result}",
                    exc_info=False,
                )
