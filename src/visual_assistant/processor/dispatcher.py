"""
Event Dispatcher

Delivers tracker events to sinks (speech, JSON log, webhook) on a background
thread, so slow side effects never hold up the next frame. The tracker
thread only enqueues; a full queue drops the event with a warning instead of
blocking.
"""

import logging
import queue
import threading
from typing import Protocol, runtime_checkable

from ..config.schemas import OutputConfig
from ..models import TrackerEvent
from .json_writer import JsonWriterSink
from .speech import SpeechSink
from .webhook import WebhookSink

logger = logging.getLogger(__name__)

DEFAULT_DISPATCH_QUEUE_SIZE = 1000


@runtime_checkable
class EventSink(Protocol):
    """Protocol for event consumers."""

    name: str

    def handle(self, event: TrackerEvent) -> None:
        """Consume one event. May block; runs on the dispatcher thread."""
        ...

    def close(self) -> None:
        """Release resources at shutdown."""
        ...


class EventDispatcher:
    """
    Fire-and-forget fan-out of events to sinks.

    Example:
        with EventDispatcher([SpeechSink()]) as dispatcher:
            for event in tracker.update(detections):
                dispatcher.put(event)
    """

    def __init__(
        self,
        sinks: list[EventSink],
        max_queue_size: int = DEFAULT_DISPATCH_QUEUE_SIZE,
    ):
        self.sinks = sinks
        self._queue: queue.Queue[TrackerEvent | None] = queue.Queue(maxsize=max_queue_size)
        self._thread: threading.Thread | None = None
        self.dispatched = 0
        self.dropped = 0

    def start(self) -> None:
        if self._thread is not None:
            return
        self._thread = threading.Thread(
            target=self._run, name="EventDispatcher", daemon=True
        )
        self._thread.start()
        logger.info(f"Dispatcher started: {', '.join(s.name for s in self.sinks) or 'no sinks'}")

    def put(self, event: TrackerEvent) -> None:
        """Queue an event without blocking."""
        try:
            self._queue.put_nowait(event)
        except queue.Full:
            self.dropped += 1
            logger.warning(f"Dispatch queue full - dropped {event.event_type}")

    def stop(self, timeout: float | None = None) -> None:
        """Drain the queue, stop the worker and close sinks."""
        if self._thread is not None:
            self._queue.put(None)  # Shutdown signal
            self._thread.join(timeout=timeout)
            if self._thread.is_alive():
                logger.warning("Dispatcher did not finish draining in time")
            self._thread = None

        for sink in self.sinks:
            try:
                sink.close()
            except Exception as e:
                logger.error(f"Error closing sink {sink.name}: {e}", exc_info=True)

    def __enter__(self) -> "EventDispatcher":
        self.start()
        return self

    def __exit__(self, *_exc) -> None:
        self.stop()

    def _run(self) -> None:
        while True:
            event = self._queue.get()
            if event is None:
                break

            for sink in self.sinks:
                try:
                    sink.handle(event)
                except Exception as e:
                    logger.error(
                        f"Sink {sink.name} failed on {event.event_type}: {e}",
                        exc_info=True,
                    )
            self.dispatched += 1


def build_sinks(output: OutputConfig) -> list[EventSink]:
    """Create the sinks enabled by the output config."""
    sinks: list[EventSink] = [
        SpeechSink(output.speech_command, timeout=output.speech_timeout_seconds)
    ]
    if output.json_log:
        sinks.append(JsonWriterSink(output.json_dir))
    if output.webhook_url:
        sinks.append(WebhookSink(output.webhook_url))
    return sinks
