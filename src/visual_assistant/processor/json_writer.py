"""
JSON Writer Sink
Appends every event to a timestamped JSONL file.
"""

import json
import logging
import os
from collections import Counter
from datetime import datetime

from ..models import TrackerEvent
from ..utils.constants import DEFAULT_JSON_DIR

logger = logging.getLogger(__name__)


class JsonWriterSink:
    name = "json_log"

    def __init__(self, json_dir: str = DEFAULT_JSON_DIR):
        os.makedirs(json_dir, exist_ok=True)
        self.path = _generate_output_filename(json_dir)
        self._file = open(self.path, "w", encoding="utf-8")
        self.counts: Counter[str] = Counter()
        logger.info(f"JSON Writer started: {self.path}")

    def handle(self, event: TrackerEvent) -> None:
        self._file.write(json.dumps(event.to_dict()) + "\n")
        self._file.flush()
        self.counts[event.event_type] += 1

    def close(self) -> None:
        self._file.close()
        logger.info(f"JSON Writer complete: {sum(self.counts.values())} events")
        for event_type, count in sorted(self.counts.items()):
            logger.info(f"  {event_type}: {count}")
        logger.info(f"Output: {self.path}")


def _generate_output_filename(json_dir: str) -> str:
    """Generate timestamped output filename."""
    timestamp = datetime.now().strftime("%Y%m%d_%H%M%S")
    return f"{json_dir}/events_{timestamp}.jsonl"
