"""
Data models for detections, tracks and output events.
"""

from .detection import Detection, LabelClassifier, ObjectClass, Point, Rect
from .events import (
    EVENT_TYPE_APPROACH,
    EVENT_TYPE_MOTION,
    EVENT_TYPE_SIGNAL,
    EVENT_TYPE_SUMMARY,
    ApproachAlert,
    MotionVector,
    SignalAlert,
    TrackerEvent,
    TrafficSummary,
)
from .tracking import MotionSegment, TrackedObject

__all__ = [
    # Input models
    "Detection",
    "LabelClassifier",
    "ObjectClass",
    "Point",
    "Rect",
    # Tracking models
    "MotionSegment",
    "TrackedObject",
    # Events
    "EVENT_TYPE_APPROACH",
    "EVENT_TYPE_MOTION",
    "EVENT_TYPE_SIGNAL",
    "EVENT_TYPE_SUMMARY",
    "ApproachAlert",
    "MotionVector",
    "SignalAlert",
    "TrackerEvent",
    "TrafficSummary",
]
