"""
Voice command trigger.

Speech recognition happens elsewhere; this module only decides whether a
transcript asks for a traffic summary and, for interactive use, reads
transcripts line by line from a text stream.
"""

import logging
import threading
from collections.abc import Callable, Iterable
from typing import TextIO

from ..utils.constants import DEFAULT_SUMMARY_KEYWORDS

logger = logging.getLogger(__name__)


def is_summary_request(
    transcript: str | None, keywords: Iterable[str] = DEFAULT_SUMMARY_KEYWORDS
) -> bool:
    """True when every keyword occurs in the transcript (case-insensitive)."""
    if not transcript:
        return False
    spoken = transcript.lower()
    return all(keyword.lower() in spoken for keyword in keywords)


class TranscriptListener:
    """
    Reads transcripts from a stream on a background thread and invokes
    ``on_request`` whenever one asks for a summary.
    """

    def __init__(
        self,
        stream: TextIO,
        on_request: Callable[[], None],
        keywords: Iterable[str] = DEFAULT_SUMMARY_KEYWORDS,
    ):
        self.stream = stream
        self.on_request = on_request
        self.keywords = tuple(keywords)
        self._thread: threading.Thread | None = None

    def start(self) -> None:
        self._thread = threading.Thread(
            target=self._run, name="TranscriptListener", daemon=True
        )
        self._thread.start()

    def _run(self) -> None:
        for line in self.stream:
            transcript = line.strip()
            if not transcript:
                continue
            logger.debug(f"Heard: {transcript}")
            if is_summary_request(transcript, self.keywords):
                self.on_request()
