"""
Output events produced by the tracker.

Events are plain immutable records. Sinks (speech, JSON log, webhook,
renderer) consume them off the update path via the EventDispatcher.
"""

from dataclasses import asdict, dataclass, field
from typing import Any, ClassVar

from .detection import Point

EVENT_TYPE_APPROACH = "APPROACH_ALERT"
EVENT_TYPE_SIGNAL = "SIGNAL_ALERT"
EVENT_TYPE_SUMMARY = "TRAFFIC_SUMMARY"
EVENT_TYPE_MOTION = "MOTION_VECTOR"


@dataclass(frozen=True)
class ApproachAlert:
    """An object has been moving toward the viewer for several frames."""

    event_type: ClassVar[str] = EVENT_TYPE_APPROACH

    track_id: int
    label: str
    timestamp: float

    def to_dict(self) -> dict[str, Any]:
        return {"event_type": self.event_type, **asdict(self)}


@dataclass(frozen=True)
class SignalAlert:
    """A pedestrian light was first seen, changed color, or is still showing."""

    event_type: ClassVar[str] = EVENT_TYPE_SIGNAL

    track_id: int
    color: str  # 'red' or 'green'
    timestamp: float

    def to_dict(self) -> dict[str, Any]:
        return {"event_type": self.event_type, **asdict(self)}


@dataclass(frozen=True)
class TrafficSummary:
    """Spoken summary of the current scene."""

    event_type: ClassVar[str] = EVENT_TYPE_SUMMARY

    text: str
    timestamp: float
    total_objects: int = 0
    details: dict[str, Any] = field(default_factory=dict)

    def to_dict(self) -> dict[str, Any]:
        return {"event_type": self.event_type, **asdict(self)}


@dataclass(frozen=True)
class MotionVector:
    """Displacement of a track over the last sampling window, for drawing."""

    event_type: ClassVar[str] = EVENT_TYPE_MOTION

    track_id: int
    start: Point
    end: Point
    timestamp: float

    def to_dict(self) -> dict[str, Any]:
        return {
            "event_type": self.event_type,
            "track_id": self.track_id,
            "start": list(self.start),
            "end": list(self.end),
            "timestamp": self.timestamp,
        }


TrackerEvent = ApproachAlert | SignalAlert | TrafficSummary | MotionVector
