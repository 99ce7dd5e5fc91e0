"""
Spoken phrases for tracker events.
"""

from ..models import ApproachAlert, SignalAlert, TrackerEvent, TrafficSummary

APPROACH_PHRASE = "Caution! Object approaching."
RED_LIGHT_PHRASE = "Warning! Please wait, red light."
GREEN_LIGHT_PHRASE = "You may cross the street. Green light."


def phrase_for(event: TrackerEvent) -> str | None:
    """Text to speak for an event, or None for events that are not spoken."""
    if isinstance(event, ApproachAlert):
        return APPROACH_PHRASE
    if isinstance(event, SignalAlert):
        return RED_LIGHT_PHRASE if event.color == "red" else GREEN_LIGHT_PHRASE
    if isinstance(event, TrafficSummary):
        return event.text
    return None
