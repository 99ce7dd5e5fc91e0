"""
Speech Sink - speaks alert and summary phrases.

Speech goes through an external text-to-speech command (``say``, ``espeak``,
``spd-say`` ...) configured as a shell template in which ``{text}`` is
replaced by the shell-quoted phrase. Without a command, phrases are logged.
"""

import logging
import os
import shlex
import subprocess

from ..models import TrackerEvent
from ..utils.constants import DEFAULT_SPEECH_TIMEOUT
from .phrases import phrase_for

logger = logging.getLogger(__name__)


class SpeechSink:
    """Turns events into speech."""

    name = "speech"

    def __init__(self, command: str | None = None, timeout: int = DEFAULT_SPEECH_TIMEOUT):
        """
        Args:
            command: Shell template containing '{text}', or None to log only
            timeout: Seconds before a speech command is abandoned
        """
        self.command = command
        self.timeout = timeout
        self.spoken = 0

    def handle(self, event: TrackerEvent) -> None:
        text = phrase_for(event)
        if text is None:
            return

        self.spoken += 1
        if not self.command:
            logger.info(f"Speak: {text}")
            return

        self._run(text, event)

    def close(self) -> None:
        logger.debug(f"Speech sink spoke {self.spoken} phrase(s)")

    def _run(self, text: str, event: TrackerEvent) -> None:
        command = self.command.replace("{text}", shlex.quote(text))
        env = os.environ.copy()
        env["EVENT_TYPE"] = event.event_type
        env["SPEECH_TEXT"] = text

        try:
            result = subprocess.run(
                command,
                shell=True,
                timeout=self.timeout,
                capture_output=True,
                text=True,
                env=env,
            )
        except subprocess.TimeoutExpired:
            logger.error(f"Speech command timed out after {self.timeout}s")
            return
        except OSError as e:
            logger.error(f"Speech command error: {e}")
            return

        if result.returncode != 0:
            error_msg = f"Speech command failed with code {result.returncode}"
            if result.stderr:
                error_msg += f": {result.stderr.strip()}"
            logger.error(error_msg)
