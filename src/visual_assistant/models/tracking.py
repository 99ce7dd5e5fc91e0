"""
Tracking data model - the per-track state owned by the TrackStore.
"""

from dataclasses import dataclass

from .detection import ObjectClass, Point, Rect

MotionSegment = tuple[Point, Point]


@dataclass(frozen=True)
class TrackedObject:
    """
    Represents a tracked object with its state across frames.

    Records are immutable; every update cycle builds a replacement and writes
    it back to the store in a single upsert.

    Attributes:
        track_id: Unique identifier, never reused
        box: Current bounding box
        centroid: Current box center
        previous_centroid: Center before the most recent match
        area: Current box area
        label: Most recently matched model label
        object_class: Classified form of label
        created_at: Time the track was created
        last_seen: Time of the last match or creation
        last_alert_time: Time of the last approach alert (creation time initially)
        consecutive_alert_count: Consecutive frames qualifying for an approach alert
        signal_frame_counter: Consecutive frames holding the same light color
        arrow_frame_count: Frames since the last displacement sample
        arrow_start_point: Anchor for displacement sampling
        pending_motion_vector: (start, end) waiting for the renderer
    """

    track_id: int
    box: Rect
    centroid: Point
    previous_centroid: Point
    area: float
    label: str
    object_class: ObjectClass
    created_at: float
    last_seen: float
    last_alert_time: float
    consecutive_alert_count: int = 0
    signal_frame_counter: int = 0
    arrow_frame_count: int = 0
    arrow_start_point: Point | None = None
    pending_motion_vector: MotionSegment | None = None
