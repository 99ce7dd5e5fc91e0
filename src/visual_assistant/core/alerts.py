"""
Alert Engine - debounced approach and traffic-signal alerts.

Two independent state machines run for every matched track, approach first,
then signal. Both read the track's state from before the current frame and
return field changes; the lifecycle manager commits them together with the
new position in a single write.

Approach alert
    Fires after ``frames_required`` consecutive frames in which a non-light
    object grows in area while moving toward the viewer (movement within
    ``cosine_threshold`` of the center-to-bottom reference direction), and
    only if ``cooldown_seconds`` have passed since the track last alerted.

Signal alert
    Fires immediately when a light is first seen or changes color, then again
    every ``repeat_frames`` consecutive frames while the color holds.
"""

import logging
from dataclasses import dataclass
from typing import Any

from ..models import ApproachAlert, Detection, ObjectClass, SignalAlert, TrackedObject
from ..utils.constants import (
    DEFAULT_APPROACH_COOLDOWN,
    DEFAULT_APPROACH_FRAMES,
    DEFAULT_COSINE_THRESHOLD,
    DEFAULT_SIGNAL_REPEAT_FRAMES,
)
from .geometry import Vector, area, centroid, cosine_similarity, displacement

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class ApproachSettings:
    frames_required: int = DEFAULT_APPROACH_FRAMES
    cooldown_seconds: float = DEFAULT_APPROACH_COOLDOWN
    cosine_threshold: float = DEFAULT_COSINE_THRESHOLD


@dataclass(frozen=True)
class SignalSettings:
    repeat_frames: int = DEFAULT_SIGNAL_REPEAT_FRAMES


class AlertEngine:
    """Evaluates both alert state machines for a track."""

    def __init__(
        self,
        reference: Vector,
        approach: ApproachSettings | None = None,
        signal: SignalSettings | None = None,
    ):
        """
        Args:
            reference: Direction that counts as "toward the viewer"
            approach: Approach alert thresholds
            signal: Signal alert thresholds
        """
        self.reference = reference
        self.approach = approach or ApproachSettings()
        self.signal = signal or SignalSettings()

    def evaluate_approach(
        self, track: TrackedObject, detection: Detection, now: float
    ) -> tuple[dict[str, Any], list[ApproachAlert]]:
        """Advance the approach debounce for one matched detection."""
        movement = displacement(track.centroid, centroid(detection.box))
        similarity = cosine_similarity(movement, self.reference)

        qualifies = (
            not detection.object_class.is_light
            and area(detection.box) > track.area
            and similarity > self.approach.cosine_threshold
            and now - track.last_alert_time > self.approach.cooldown_seconds
        )

        if not qualifies:
            return {"consecutive_alert_count": 0}, []

        count = track.consecutive_alert_count + 1
        if count < self.approach.frames_required:
            return {"consecutive_alert_count": count}, []

        logger.info(f"Track {track.track_id} ({detection.label}) approaching")
        alert = ApproachAlert(
            track_id=track.track_id, label=detection.label, timestamp=now
        )
        return {"consecutive_alert_count": 0, "last_alert_time": now}, [alert]

    def evaluate_signal(
        self, track: TrackedObject, detection: Detection, now: float
    ) -> tuple[dict[str, Any], list[SignalAlert]]:
        """Advance the signal counter for one matched detection."""
        current = detection.object_class
        if not current.is_light:
            return {"signal_frame_counter": 0}, []

        previous = track.object_class
        if previous is current:
            counter = track.signal_frame_counter + 1
            if counter < self.signal.repeat_frames:
                return {"signal_frame_counter": counter}, []
            logger.info(
                f"Track {track.track_id} still {current.value} after {counter} frames"
            )
        elif previous.is_light:
            logger.info(
                f"Track {track.track_id} changed {previous.value} -> {current.value}"
            )
        else:
            logger.info(f"Track {track.track_id} became a {current.value} light")

        return {"signal_frame_counter": 0}, [self._signal_alert(track.track_id, current, now)]

    def on_created(self, track: TrackedObject, now: float) -> list[SignalAlert]:
        """Alerts for a track that appeared this frame."""
        if not track.object_class.is_light:
            return []
        logger.info(f"Track {track.track_id} new {track.object_class.value} light")
        return [self._signal_alert(track.track_id, track.object_class, now)]

    @staticmethod
    def _signal_alert(track_id: int, color: ObjectClass, now: float) -> SignalAlert:
        return SignalAlert(track_id=track_id, color=color.value, timestamp=now)
