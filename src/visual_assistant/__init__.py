"""
Visual Assistant

Tracks objects reported by a vision pipeline across frames and turns their
motion into spoken guidance for pedestrians: "object approaching" warnings,
pedestrian light announcements and on-demand traffic summaries.

Package structure:
  core/       - Tracking and alerting engine (Tracker and its parts)
  models/     - Detections, tracked objects, events
  config/     - Configuration loading and validation
  processor/  - Event dispatch to speech, JSON log and webhook sinks
  sources/    - Replay recordings, voice trigger, live YOLO camera
  utils/      - Constants and error types
"""

__version__ = "1.0.0"

from .config import Config, ConfigValidationError, build_tracker_settings, load_config
from .core import Tracker, TrackerSettings
from .models import (
    ApproachAlert,
    Detection,
    MotionVector,
    ObjectClass,
    Rect,
    SignalAlert,
    TrackedObject,
    TrafficSummary,
)
from .runner import AssistantRunner

__all__ = [
    "ApproachAlert",
    "AssistantRunner",
    "Config",
    "ConfigValidationError",
    "Detection",
    "MotionVector",
    "ObjectClass",
    "Rect",
    "SignalAlert",
    "TrackedObject",
    "Tracker",
    "TrackerSettings",
    "TrafficSummary",
    "build_tracker_settings",
    "load_config",
]
