"""
Event processing - dispatching tracker events to output sinks.
"""

from .dispatcher import EventDispatcher, EventSink, build_sinks
from .json_writer import JsonWriterSink
from .phrases import (
    APPROACH_PHRASE,
    GREEN_LIGHT_PHRASE,
    RED_LIGHT_PHRASE,
    phrase_for,
)
from .speech import SpeechSink
from .webhook import WebhookSink

__all__ = [
    "APPROACH_PHRASE",
    "GREEN_LIGHT_PHRASE",
    "RED_LIGHT_PHRASE",
    "EventDispatcher",
    "EventSink",
    "JsonWriterSink",
    "SpeechSink",
    "WebhookSink",
    "build_sinks",
    "phrase_for",
]
