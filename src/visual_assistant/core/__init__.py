"""
Core tracking and alerting engine.

The Tracker is the public entry point; the other modules are its parts.
"""

from .alerts import AlertEngine, ApproachSettings, SignalSettings
from .associator import AssociationResult, Match, associate
from .lifecycle import LifecycleManager
from .motion import MotionSettings, MotionVectorBuilder
from .summary import NO_OBJECTS_MESSAGE, SummaryAggregator, SummarySettings
from .track_store import TrackStore
from .tracker import FrameStats, Tracker, TrackerSettings

__all__ = [
    "NO_OBJECTS_MESSAGE",
    "AlertEngine",
    "ApproachSettings",
    "AssociationResult",
    "FrameStats",
    "LifecycleManager",
    "Match",
    "MotionSettings",
    "MotionVectorBuilder",
    "SignalSettings",
    "SummaryAggregator",
    "SummarySettings",
    "TrackStore",
    "Tracker",
    "TrackerSettings",
    "associate",
]
