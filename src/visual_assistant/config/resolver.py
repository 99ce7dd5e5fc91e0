"""
Configuration Resolver - turns a validated Config into runtime settings.
"""

from ..core import (
    ApproachSettings,
    MotionSettings,
    SignalSettings,
    SummarySettings,
    TrackerSettings,
)
from ..models import LabelClassifier
from .schemas import Config


def build_tracker_settings(config: Config) -> TrackerSettings:
    """Map config sections onto the tracker's settings objects."""
    return TrackerSettings(
        viewport_width=config.viewport.width,
        viewport_height=config.viewport.height,
        iou_threshold=config.tracking.iou_threshold,
        expiry_seconds=config.tracking.expiry_seconds,
        min_confidence=config.tracking.min_confidence,
        approach=ApproachSettings(
            frames_required=config.approach.frames_required,
            cooldown_seconds=config.approach.cooldown_seconds,
            cosine_threshold=config.approach.cosine_threshold,
        ),
        signal=SignalSettings(repeat_frames=config.signal.repeat_frames),
        motion=MotionSettings(
            sample_frames=config.motion.sample_frames,
            min_displacement=config.motion.min_displacement,
        ),
        summary=SummarySettings(
            interval_seconds=config.summary.interval_seconds,
            congested_below=config.summary.congested_below,
            moderate_below=config.summary.moderate_below,
            left_edge=config.summary.left_edge,
            right_edge=config.summary.right_edge,
        ),
        classifier=LabelClassifier(
            red_labels=config.signal.red_labels,
            green_labels=config.signal.green_labels,
        ),
    )
