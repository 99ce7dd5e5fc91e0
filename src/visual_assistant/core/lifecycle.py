"""
Lifecycle Manager - creates, updates and expires track records.

This is the only writer to the TrackStore. A matched track is updated as one
transaction: alert and motion changes are computed from the record as it was
before this frame, merged with the new position, and written back once.
"""

import logging
from dataclasses import replace

from ..models import Detection, TrackedObject, TrackerEvent
from ..utils.constants import DEFAULT_EXPIRY_SECONDS
from .alerts import AlertEngine
from .geometry import area, centroid
from .motion import MotionVectorBuilder
from .track_store import TrackStore

logger = logging.getLogger(__name__)


class LifecycleManager:
    def __init__(
        self,
        store: TrackStore,
        alerts: AlertEngine,
        motion: MotionVectorBuilder,
        expiry_seconds: float = DEFAULT_EXPIRY_SECONDS,
    ):
        self.store = store
        self.alerts = alerts
        self.motion = motion
        self.expiry_seconds = expiry_seconds

    def create(self, detection: Detection, now: float) -> list[TrackerEvent]:
        """Start a new track for an unmatched detection."""
        center = centroid(detection.box)
        track = TrackedObject(
            track_id=self.store.allocate_id(),
            box=detection.box,
            centroid=center,
            previous_centroid=center,
            area=area(detection.box),
            label=detection.label,
            object_class=detection.object_class,
            created_at=now,
            last_seen=now,
            last_alert_time=now,
            arrow_start_point=center,
        )
        self.store.upsert(track)
        logger.debug(f"Track {track.track_id} created ({track.label})")
        return list(self.alerts.on_created(track, now))

    def apply_match(
        self, track_id: int, detection: Detection, now: float
    ) -> list[TrackerEvent]:
        """Apply a matched detection to an existing track."""
        track = self.store.get(track_id)
        if track is None:
            raise KeyError(f"Track {track_id} is not in the store")

        new_centroid = centroid(detection.box)
        events: list[TrackerEvent] = []

        approach_changes, approach_events = self.alerts.evaluate_approach(
            track, detection, now
        )
        signal_changes, signal_events = self.alerts.evaluate_signal(
            track, detection, now
        )
        motion_changes, motion_events = self.motion.evaluate(track, new_centroid, now)
        events.extend(approach_events)
        events.extend(signal_events)
        events.extend(motion_events)

        updated = replace(
            track,
            **approach_changes,
            **signal_changes,
            **motion_changes,
            box=detection.box,
            previous_centroid=track.centroid,
            centroid=new_centroid,
            area=area(detection.box),
            label=detection.label,
            object_class=detection.object_class,
            last_seen=max(track.last_seen, now),
        )
        self.store.upsert(updated)
        return events

    def expire(self, now: float) -> list[int]:
        """Remove every track unseen for longer than the expiry window."""
        expired = [
            record.track_id
            for record in self.store.all_records()
            if now - record.last_seen > self.expiry_seconds
        ]
        for track_id in expired:
            self.store.remove(track_id)
            logger.debug(f"Track {track_id} expired")
        return expired
