"""
Tests for the replay and voice trigger sources
"""

import io
import tempfile
import threading
import unittest
from pathlib import Path

from visual_assistant.sources import (
    TranscriptListener,
    is_summary_request,
    parse_frame,
    read_recording,
)

RECORDING = """\
{"timestamp": 0.0, "detections": [{"box": [0, 0, 10, 10], "label": "car"}]}

not json
{"detections": []}
[1, 2, 3]
{"timestamp": 0.5, "detections": [], "transcript": "How is the traffic situation?"}
"""


class TestReplay(unittest.TestCase):
    def test_read_recording_skips_bad_lines(self):
        with tempfile.TemporaryDirectory() as tmp:
            path = Path(tmp) / "run.jsonl"
            path.write_text(RECORDING, encoding="utf-8")

            with self.assertLogs("visual_assistant.sources.replay", level="WARNING") as logs:
                frames = list(read_recording(path))

        self.assertEqual(len(frames), 2)
        self.assertEqual(len(logs.output), 3)
        self.assertEqual(frames[0].timestamp, 0.0)
        self.assertEqual(frames[0].detections[0]["label"], "car")
        self.assertIsNone(frames[0].transcript)
        self.assertEqual(frames[1].transcript, "How is the traffic situation?")

    def test_missing_recording(self):
        with self.assertRaises(FileNotFoundError):
            list(read_recording("/nonexistent/recording.jsonl"))

    def test_parse_frame_rejects_bad_detections(self):
        with self.assertRaises(ValueError):
            parse_frame({"timestamp": 1, "detections": "car"})


class TestVoiceTrigger(unittest.TestCase):
    def test_requires_all_keywords(self):
        self.assertTrue(is_summary_request("What's the TRAFFIC situation like?"))
        self.assertFalse(is_summary_request("how is the traffic"))
        self.assertFalse(is_summary_request(""))
        self.assertFalse(is_summary_request(None))

    def test_custom_keywords(self):
        self.assertTrue(is_summary_request("describe the road", ["road"]))

    def test_listener_calls_back(self):
        stream = io.StringIO("hello\n\nwhat is the traffic situation\ntraffic\n")
        requests = []
        done = threading.Event()

        def on_request():
            requests.append(True)
            done.set()

        listener = TranscriptListener(stream, on_request)
        listener.start()
        self.assertTrue(done.wait(timeout=5))
        listener._thread.join(timeout=5)

        self.assertEqual(len(requests), 1)


if __name__ == "__main__":
    unittest.main()
