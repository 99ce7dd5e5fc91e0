"""
Summary Aggregator - on-demand spoken description of the scene.

Reads a snapshot of the tracks and reports how many objects are present,
how much they are moving, where they are concentrated and whether a
pedestrian light is visible. Requests arriving within ``interval_seconds``
of the previous summary are dropped without a reply.
"""

import logging
import math
from dataclasses import dataclass

from ..models import ObjectClass, TrackedObject, TrafficSummary
from ..utils.constants import (
    DEFAULT_CONGESTED_BELOW,
    DEFAULT_LEFT_EDGE,
    DEFAULT_MODERATE_BELOW,
    DEFAULT_RIGHT_EDGE,
    DEFAULT_SUMMARY_INTERVAL,
)
from .geometry import displacement, magnitude

logger = logging.getLogger(__name__)

NO_OBJECTS_MESSAGE = "No objects are currently detected on the road."

FLOW_CONGESTED = "heavy or congested"
FLOW_MODERATE = "moderate"
FLOW_SMOOTH = "smooth"

DENSITY_PHRASES = {
    "left": "Many objects are concentrated on the left side, indicating possible buildup in that area.",
    "center": "Most objects are in the centre, which might suggest high traffic density along the main path.",
    "right": "The right side shows a higher object concentration, suggesting increased activity in that area.",
    None: "The objects are fairly evenly distributed across the view.",
}

RED_SIGNAL_PHRASE = "Also, a red signal is detected so please wait."
GREEN_SIGNAL_PHRASE = "Also, a green signal is active so you may proceed."


@dataclass(frozen=True)
class SummarySettings:
    interval_seconds: float = DEFAULT_SUMMARY_INTERVAL
    congested_below: float = DEFAULT_CONGESTED_BELOW
    moderate_below: float = DEFAULT_MODERATE_BELOW
    left_edge: float = DEFAULT_LEFT_EDGE
    right_edge: float = DEFAULT_RIGHT_EDGE


def classify_flow(avg_movement: float, settings: SummarySettings) -> str:
    if avg_movement < settings.congested_below:
        return FLOW_CONGESTED
    if avg_movement < settings.moderate_below:
        return FLOW_MODERATE
    return FLOW_SMOOTH


def bucket_counts(
    tracks: tuple[TrackedObject, ...] | list[TrackedObject],
    viewport_width: float,
    settings: SummarySettings,
) -> dict[str, int]:
    """Count tracks in the left, center and right thirds of the view."""
    counts = {"left": 0, "center": 0, "right": 0}
    for track in tracks:
        relative_x = track.centroid[0] / viewport_width
        if relative_x < settings.left_edge:
            counts["left"] += 1
        elif relative_x < settings.right_edge:
            counts["center"] += 1
        else:
            counts["right"] += 1
    return counts


def dominant_bucket(counts: dict[str, int]) -> str | None:
    """Bucket holding strictly more tracks than each other bucket, if any."""
    for name, count in counts.items():
        if all(count > other for key, other in counts.items() if key != name):
            return name
    return None


def signal_phrase(tracks: tuple[TrackedObject, ...] | list[TrackedObject]) -> str:
    """A red light anywhere outranks any green light."""
    classes = {track.object_class for track in tracks}
    if ObjectClass.RED_LIGHT in classes:
        return RED_SIGNAL_PHRASE
    if ObjectClass.GREEN_LIGHT in classes:
        return GREEN_SIGNAL_PHRASE
    return ""


def compose_summary(
    tracks: tuple[TrackedObject, ...] | list[TrackedObject],
    viewport_width: float,
    settings: SummarySettings,
) -> tuple[str, dict]:
    """
    Build the summary text for a non-empty snapshot.

    Returns:
        (text, details) where details holds the computed facts
    """
    total = len(tracks)
    avg_movement = (
        sum(magnitude(displacement(t.previous_centroid, t.centroid)) for t in tracks)
        / total
    )
    flow = classify_flow(avg_movement, settings)
    counts = bucket_counts(tracks, viewport_width, settings)
    dominant = dominant_bucket(counts)
    signal = signal_phrase(tracks)

    text = (
        f"Traffic Summary: {total} objects detected. "
        f"The average movement is about {math.floor(avg_movement)} points per frame, "
        f"indicating {flow} traffic flow. {DENSITY_PHRASES[dominant]} {signal}"
    ).rstrip()

    details = {
        "average_movement": avg_movement,
        "flow": flow,
        "buckets": counts,
        "dominant": dominant,
        "signal": signal or None,
    }
    return text, details


class SummaryAggregator:
    """Rate-limited front end for compose_summary."""

    def __init__(self, viewport_width: float, settings: SummarySettings | None = None):
        self.viewport_width = viewport_width
        self.settings = settings or SummarySettings()
        self.last_summary_time = -math.inf

    def summarize(
        self, tracks: tuple[TrackedObject, ...] | list[TrackedObject], now: float
    ) -> TrafficSummary | None:
        """
        Summarize a track snapshot.

        Returns:
            TrafficSummary, or None if the request came too soon after the last one
        """
        if now - self.last_summary_time < self.settings.interval_seconds:
            logger.debug("Summary requested too soon - dropped")
            return None
        self.last_summary_time = now

        if not tracks:
            return TrafficSummary(text=NO_OBJECTS_MESSAGE, timestamp=now)

        text, details = compose_summary(tracks, self.viewport_width, self.settings)
        logger.info(f"Summary: {len(tracks)} objects, {details['flow']} flow")
        return TrafficSummary(
            text=text, timestamp=now, total_objects=len(tracks), details=details
        )
