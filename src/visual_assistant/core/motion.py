"""
Motion Vector Builder - periodic displacement samples for drawing arrows.

Every ``sample_frames`` matches the track's displacement from its anchor is
measured. Movement beyond ``min_displacement`` pixels becomes a pending
vector for the renderer; shorter movement clears it. The anchor moves to the
current centroid after every sample either way.

Motion vectors are visual only and never affect association or alerts.
"""

from dataclasses import dataclass
from typing import Any

from ..models import MotionVector, Point, TrackedObject
from ..utils.constants import DEFAULT_ARROW_FRAMES, DEFAULT_ARROW_MIN_DISPLACEMENT
from .geometry import displacement, magnitude


@dataclass(frozen=True)
class MotionSettings:
    sample_frames: int = DEFAULT_ARROW_FRAMES
    min_displacement: float = DEFAULT_ARROW_MIN_DISPLACEMENT


class MotionVectorBuilder:
    def __init__(self, settings: MotionSettings | None = None):
        self.settings = settings or MotionSettings()

    def evaluate(
        self, track: TrackedObject, new_centroid: Point, now: float
    ) -> tuple[dict[str, Any], list[MotionVector]]:
        """Advance the sampling window for one matched track."""
        frame_count = track.arrow_frame_count + 1
        anchor = track.arrow_start_point
        if anchor is None:
            anchor = track.centroid

        if frame_count < self.settings.sample_frames:
            return {"arrow_frame_count": frame_count, "arrow_start_point": anchor}, []

        changes: dict[str, Any] = {
            "arrow_frame_count": 0,
            "arrow_start_point": new_centroid,
            "pending_motion_vector": None,
        }
        if magnitude(displacement(anchor, new_centroid)) <= self.settings.min_displacement:
            return changes, []

        changes["pending_motion_vector"] = (anchor, new_centroid)
        vector = MotionVector(
            track_id=track.track_id, start=anchor, end=new_centroid, timestamp=now
        )
        return changes, [vector]
