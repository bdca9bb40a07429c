"""
Demand model for the quiver simulation.

A SKU's demand curve is a time-sorted sequence of constant-rate segments.
Rates are queried pointwise (``rate_at``) or integrated over an interval
(``demand_between``). Marketing events overlay a multiplier on the part of an
interval that falls inside the event window.
"""

from models.inventory import DemandSegment, MarketingEvent, ScenarioConfig, SKUConfig


def rate_at(sku: SKUConfig, time: float) -> float:
    """
    Base demand rate at ``time``, ignoring marketing events.

    Past the last segment the last rate is extrapolated; before the first
    segment, inside a gap, or with no segments at all the rate is zero.
    """
    segments = sku.demand_segments
    if not segments:
        return 0.0
    for segment in segments:
        if segment.contains(time):
            return segment.base_rate
    last = segments[-1]
    if time >= last.end_time:
        return last.base_rate
    return 0.0


def demand_between(sku: SKUConfig, start: float, end: float) -> float:
    """Integral of the base rate over [start, end). Empty intervals yield zero."""
    if start >= end:
        return 0.0
    total = 0.0
    for segment in sku.demand_segments:
        overlap_start = max(start, segment.start_time)
        overlap_end = min(end, segment.end_time)
        if overlap_start < overlap_end:
            total += (overlap_end - overlap_start) * segment.base_rate
    return total


def total_demand(segments: tuple[DemandSegment, ...] | list[DemandSegment]) -> float:
    return sum(segment.duration * segment.base_rate for segment in segments)


def split_interval(
    start: float, end: float, event: MarketingEvent | None
) -> list[tuple[float, float, float]]:
    """
    Split [start, end) into (start, end, multiplier) pieces around an event.

    Produces up to three pieces (before, during, after the event window) that
    cover the interval exactly once. Without an overlapping event the whole
    interval is returned with a multiplier of 1.
    """
    if start >= end:
        return []
    if event is None:
        return [(start, end, 1.0)]
    overlap_start = max(start, event.trigger_time)
    overlap_end = min(end, event.end_time)
    if overlap_start >= overlap_end:
        return [(start, end, 1.0)]

    pieces = []
    if overlap_start > start:
        pieces.append((start, overlap_start, 1.0))
    pieces.append((overlap_start, overlap_end, event.demand_multiplier))
    if overlap_end < end:
        pieces.append((overlap_end, end, 1.0))
    return pieces


def effective_rate_parts(
    base_rate: float, seg_start: float, seg_end: float, event: MarketingEvent | None
) -> list[tuple[float, float]]:
    """(rate, duration) pairs of a constant-rate window with the event applied."""
    return [
        (base_rate * multiplier, piece_end - piece_start)
        for piece_start, piece_end, multiplier in split_interval(seg_start, seg_end, event)
    ]


def forecast_demand_between(
    sku: SKUConfig, scenario: ScenarioConfig, start: float, end: float
) -> float:
    """Demand over [start, end) including the SKU's linked marketing event."""
    event = scenario.linked_event(sku)
    return sum(
        demand_between(sku, piece_start, piece_end) * multiplier
        for piece_start, piece_end, multiplier in split_interval(start, end, event)
    )


def event_multiplier_at(sku: SKUConfig, scenario: ScenarioConfig, time: float) -> tuple[float, bool]:
    """Return (multiplier, active) of the SKU's linked event at ``time``."""
    event = scenario.linked_event(sku)
    if event is not None and event.is_active(time):
        return event.demand_multiplier, True
    return 1.0, False


def scenario_rate_parts(sku: SKUConfig, scenario: ScenarioConfig) -> list[tuple[float, float]]:
    """
    Effective (rate, duration) pairs across the scenario duration.

    Segments are clipped to the scenario end and split around the linked
    marketing event so event windows carry the multiplied rate.
    """
    event = scenario.linked_event(sku)
    parts: list[tuple[float, float]] = []
    for segment in sku.demand_segments:
        seg_end = min(segment.end_time, scenario.duration)
        if seg_end > segment.start_time:
            parts.extend(effective_rate_parts(segment.base_rate, segment.start_time, seg_end, event))
    return parts
