"""
Assistant runner - drives the tracker from a detection source.

Each frame: update the tracker, hand events to the dispatcher, and mark
motion vectors as consumed once they are on their way to the renderer.
The dispatcher queue is the renderer hand-off: a queued MotionVector belongs
to the event stream and is acknowledged immediately, so the tracker does not
report it again from pending_motion_vectors().
Summary requests from the voice trigger go through the same tracker, whose
lock keeps them from observing a half-applied frame.
"""

import logging
import threading
import time
from collections.abc import Iterable
from dataclasses import dataclass, field
from typing import Any

from .core import Tracker
from .models import Detection, MotionVector, TrackerEvent, TrafficSummary
from .processor import EventDispatcher
from .sources import RecordedFrame, is_summary_request
from .utils.constants import DEFAULT_SUMMARY_KEYWORDS, STATUS_REPORT_INTERVAL

logger = logging.getLogger(__name__)


@dataclass
class RunStats:
    frames: int = 0
    detections: int = 0
    skipped: int = 0
    tracks_created: int = 0
    events: dict[str, int] = field(default_factory=dict)
    started_at: float = field(default_factory=time.time)

    def record(self, event: TrackerEvent) -> None:
        self.events[event.event_type] = self.events.get(event.event_type, 0) + 1


class AssistantRunner:
    def __init__(
        self,
        tracker: Tracker,
        dispatcher: EventDispatcher,
        keywords: Iterable[str] = DEFAULT_SUMMARY_KEYWORDS,
    ):
        self.tracker = tracker
        self.dispatcher = dispatcher
        self.keywords = tuple(keywords)
        self.stats = RunStats()
        # Frame loop and TranscriptListener thread both update stats
        self._stats_lock = threading.Lock()

    def process_frame(
        self,
        detections: Iterable[Detection | dict[str, Any]],
        now: float | None = None,
        transcript: str | None = None,
    ) -> list[TrackerEvent]:
        """
        Run one frame through the tracker and dispatch the results.

        Returns:
            Events raised by the frame, plus a summary if the transcript asked for one
        """
        events = self.tracker.update(detections, now)

        frame = self.tracker.last_frame
        with self._stats_lock:
            self.stats.frames += 1
            self.stats.detections += frame.received
            self.stats.skipped += frame.skipped
            self.stats.tracks_created += frame.created
            frame_number = self.stats.frames

        self._dispatch(events)

        if is_summary_request(transcript, self.keywords):
            summary = self.request_summary(now)
            if summary is not None:
                events.append(summary)

        if frame_number % STATUS_REPORT_INTERVAL == 0:
            self._log_status()

        return events

    def request_summary(self, now: float | None = None) -> TrafficSummary | None:
        """Handle a voice request for a traffic summary."""
        summary = self.tracker.query_summary(now)
        if summary is not None:
            self._dispatch([summary])
        return summary

    def run_replay(self, frames: Iterable[RecordedFrame]) -> RunStats:
        """Feed recorded frames through the tracker in order."""
        logger.info("Replay started")
        for frame in frames:
            self.process_frame(frame.detections, frame.timestamp, frame.transcript)
        self.log_final_stats()
        return self.stats

    def _dispatch(self, events: list[TrackerEvent]) -> None:
        for event in events:
            with self._stats_lock:
                self.stats.record(event)
            self.dispatcher.put(event)
            if isinstance(event, MotionVector):
                self.tracker.acknowledge_motion_vector(event.track_id)

    def _log_status(self) -> None:
        elapsed = time.time() - self.stats.started_at
        with self._stats_lock:
            frames = self.stats.frames
            total_events = sum(self.stats.events.values())
        logger.info(
            f"[{elapsed / 60:.1f}min] Frame {frames} | "
            f"Tracks: {len(self.tracker.snapshot())} | "
            f"Events: {total_events}"
        )

    def log_final_stats(self) -> None:
        elapsed = time.time() - self.stats.started_at
        logger.info("Run complete")
        logger.info(f"Runtime: {elapsed:.1f}s")
        logger.info(f"Frames: {self.stats.frames}")
        logger.info(
            f"Detections: {self.stats.detections} ({self.stats.skipped} skipped)"
        )
        logger.info(f"Tracks created: {self.stats.tracks_created}")
        for event_type, count in sorted(self.stats.events.items()):
            logger.info(f"  {event_type}: {count}")
