"""
Replay source - recorded detection streams in JSONL form.

One frame per line:

    {"timestamp": 12.5, "detections": [{"box": [x, y, w, h], "label": "car",
     "confidence": 0.8}], "transcript": "what's the traffic situation"}

``transcript`` is optional and stands in for the voice-recognition
collaborator. Detections are passed through raw; the tracker validates them.
"""

import json
import logging
from collections.abc import Iterator
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any

logger = logging.getLogger(__name__)


@dataclass
class RecordedFrame:
    timestamp: float
    detections: list[dict[str, Any]] = field(default_factory=list)
    transcript: str | None = None


def parse_frame(data: Any) -> RecordedFrame:
    """
    Parse one decoded JSON line.

    Raises:
        ValueError: If the line is not a frame object
    """
    if not isinstance(data, dict):
        raise ValueError("Frame must be a JSON object")
    if "timestamp" not in data:
        raise ValueError("Frame is missing 'timestamp'")

    detections = data.get("detections", [])
    if not isinstance(detections, list):
        raise ValueError("'detections' must be a list")

    transcript = data.get("transcript")
    return RecordedFrame(
        timestamp=float(data["timestamp"]),
        detections=detections,
        transcript=str(transcript) if transcript else None,
    )


def read_recording(path: str | Path) -> Iterator[RecordedFrame]:
    """
    Yield frames from a JSONL recording.

    Blank lines are ignored; malformed lines are logged and skipped.

    Raises:
        FileNotFoundError: If the recording does not exist
    """
    with open(path, encoding="utf-8") as f:
        for line_number, line in enumerate(f, 1):
            line = line.strip()
            if not line:
                continue
            try:
                yield parse_frame(json.loads(line))
            except (json.JSONDecodeError, ValueError, TypeError) as e:
                logger.warning(f"{path}:{line_number}: skipping frame ({e})")
