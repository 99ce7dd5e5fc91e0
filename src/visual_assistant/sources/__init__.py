"""
Detection and voice sources.

The live camera source lives in ``sources.yolo`` and needs the optional
``live`` dependencies, so it is not imported here.
"""

from .replay import RecordedFrame, parse_frame, read_recording
from .voice import TranscriptListener, is_summary_request

__all__ = [
    "RecordedFrame",
    "TranscriptListener",
    "is_summary_request",
    "parse_frame",
    "read_recording",
]
