"""
Webhook Sink - posts events as JSON to an HTTP endpoint.

Compatible with Home Assistant, IFTTT, Zapier, and custom endpoints, e.g. to
forward alerts to a companion device.
"""

import logging

import requests

from ..models import TrackerEvent
from ..utils.constants import DEFAULT_WEBHOOK_TIMEOUT
from .phrases import phrase_for

logger = logging.getLogger(__name__)


class WebhookSink:
    name = "webhook"

    def __init__(self, url: str, timeout: float = DEFAULT_WEBHOOK_TIMEOUT, session=None):
        self.url = url
        self.timeout = timeout
        self._session = session or requests.Session()
        logger.debug(f"WebhookSink initialized -> {self.url}")

    def handle(self, event: TrackerEvent) -> None:
        payload = {"event": event.to_dict(), "message": phrase_for(event)}

        try:
            response = self._session.post(
                self.url,
                json=payload,
                headers={"Content-Type": "application/json"},
                timeout=self.timeout,
            )
        except requests.RequestException as e:
            logger.error(f"Webhook error: {e}")
            return

        if not response.ok:
            logger.warning(f"Webhook failed: {response.status_code} {response.text[:100]}")
        else:
            logger.debug(f"Webhook sent {event.event_type} to {self.url}")

    def close(self) -> None:
        self._session.close()
