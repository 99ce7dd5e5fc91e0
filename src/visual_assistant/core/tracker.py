"""
Tracker - the single entry point to the tracking and alerting engine.

Owns the TrackStore and serializes every access to it behind one lock: a
frame update runs to completion before another update or a summary query can
observe the store.

Per frame:
    detections -> validate/classify -> associate -> apply matches
    -> create tracks -> expire stale tracks -> events

Known limitation: the clock is not checked for monotonicity. A backward
jump in ``now`` can delay expiry or extend alert cooldowns.
"""

import logging
import threading
import time
from collections.abc import Iterable
from dataclasses import dataclass, field, replace
from typing import Any

from ..models import (
    Detection,
    LabelClassifier,
    MotionVector,
    TrackedObject,
    TrackerEvent,
    TrafficSummary,
)
from ..utils.constants import (
    DEFAULT_EXPIRY_SECONDS,
    DEFAULT_IOU_THRESHOLD,
    DEFAULT_VIEWPORT_HEIGHT,
    DEFAULT_VIEWPORT_WIDTH,
)
from ..utils.errors import InvalidDetectionError
from .alerts import AlertEngine, ApproachSettings, SignalSettings
from .associator import associate
from .geometry import approach_reference
from .lifecycle import LifecycleManager
from .motion import MotionSettings, MotionVectorBuilder
from .summary import SummaryAggregator, SummarySettings
from .track_store import TrackStore

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class TrackerSettings:
    """All tunables of the engine."""

    viewport_width: float = DEFAULT_VIEWPORT_WIDTH
    viewport_height: float = DEFAULT_VIEWPORT_HEIGHT
    iou_threshold: float = DEFAULT_IOU_THRESHOLD
    expiry_seconds: float = DEFAULT_EXPIRY_SECONDS
    min_confidence: float = 0.0
    approach: ApproachSettings = field(default_factory=ApproachSettings)
    signal: SignalSettings = field(default_factory=SignalSettings)
    motion: MotionSettings = field(default_factory=MotionSettings)
    summary: SummarySettings = field(default_factory=SummarySettings)
    classifier: LabelClassifier = field(default_factory=LabelClassifier)


@dataclass
class FrameStats:
    """Counters for the most recent update, for status logging."""

    received: int = 0
    skipped: int = 0
    matched: int = 0
    created: int = 0
    expired: int = 0


class Tracker:
    """
    Stateful tracker service.

    Example:
        tracker = Tracker()
        events = tracker.update([{"box": [10, 10, 50, 80], "label": "car"}], now=0.0)
        summary = tracker.query_summary(now=1.0)
    """

    def __init__(self, settings: TrackerSettings | None = None):
        self.settings = settings or TrackerSettings()
        self.store = TrackStore()
        self.last_frame = FrameStats()
        self._lock = threading.Lock()

        reference = approach_reference(
            self.settings.viewport_width, self.settings.viewport_height
        )
        self._lifecycle = LifecycleManager(
            self.store,
            AlertEngine(reference, self.settings.approach, self.settings.signal),
            MotionVectorBuilder(self.settings.motion),
            expiry_seconds=self.settings.expiry_seconds,
        )
        self._summary = SummaryAggregator(
            self.settings.viewport_width, self.settings.summary
        )

    def update(
        self,
        detections: Iterable[Detection | dict[str, Any]],
        now: float | None = None,
    ) -> list[TrackerEvent]:
        """
        Apply one frame of detections.

        Malformed detections are skipped individually. An empty frame only
        runs the expiry sweep.

        Args:
            detections: Detections in the order received
            now: Frame timestamp in seconds (defaults to the wall clock)

        Returns:
            Events raised by this frame, in the order they were produced
        """
        if now is None:
            now = time.time()

        with self._lock:
            stats = FrameStats()
            valid = self._prepare(detections, stats)

            result = associate(
                valid, self.store.all_records(), self.settings.iou_threshold
            )

            events: list[TrackerEvent] = []
            for match in result.matches:
                events.extend(
                    self._lifecycle.apply_match(
                        match.track_id, valid[match.detection_index], now
                    )
                )
            for det_index in result.unmatched:
                events.extend(self._lifecycle.create(valid[det_index], now))

            stats.matched = len(result.matches)
            stats.created = len(result.unmatched)
            stats.expired = len(self._lifecycle.expire(now))
            self.last_frame = stats

        return events

    def query_summary(self, now: float | None = None) -> TrafficSummary | None:
        """Summarize the current scene, or None if rate-limited."""
        if now is None:
            now = time.time()
        with self._lock:
            return self._summary.summarize(self.store.all_records(), now)

    def acknowledge_motion_vector(self, track_id: int) -> bool:
        """
        Clear a track's pending motion vector after it has been drawn.

        Returns:
            True if a pending vector was cleared
        """
        with self._lock:
            track = self.store.get(track_id)
            if track is None or track.pending_motion_vector is None:
                return False
            self.store.upsert(replace(track, pending_motion_vector=None))
            return True

    def pending_motion_vectors(self) -> list[MotionVector]:
        """Motion vectors that have not been acknowledged yet."""
        with self._lock:
            return [
                MotionVector(
                    track_id=track.track_id,
                    start=track.pending_motion_vector[0],
                    end=track.pending_motion_vector[1],
                    timestamp=track.last_seen,
                )
                for track in self.store.all_records()
                if track.pending_motion_vector is not None
            ]

    def snapshot(self) -> tuple[TrackedObject, ...]:
        """Consistent copy of all current tracks."""
        with self._lock:
            return self.store.all_records()

    def _prepare(
        self, detections: Iterable[Detection | dict[str, Any]], stats: FrameStats
    ) -> list[Detection]:
        """Validate, filter and classify raw detections."""
        valid: list[Detection] = []
        for raw in detections:
            stats.received += 1
            try:
                if isinstance(raw, Detection):
                    raw.validate()
                    detection = raw
                else:
                    detection = Detection.from_dict(raw)
            except InvalidDetectionError as e:
                stats.skipped += 1
                logger.debug(f"Skipping detection: {e}")
                continue

            if detection.confidence < self.settings.min_confidence:
                stats.skipped += 1
                continue

            valid.append(detection.classified(self.settings.classifier))
        return valid
