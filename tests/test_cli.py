"""
Tests for command line entry points
"""

import json
import tempfile
import unittest
from contextlib import redirect_stderr, redirect_stdout
from io import StringIO
from pathlib import Path

from visual_assistant.cli import parse_args, run_replay, run_validate
from visual_assistant.config import Config


class TestParseArgs(unittest.TestCase):
    def test_mode_required(self):
        with redirect_stderr(StringIO()), self.assertRaises(SystemExit):
            parse_args([])

    def test_replay_mode(self):
        args = parse_args(["--replay", "walk.jsonl", "-c", "alt.yaml", "-v"])
        self.assertEqual(args.replay, "walk.jsonl")
        self.assertEqual(args.config, "alt.yaml")
        self.assertTrue(args.verbose)
        self.assertFalse(args.live)


class TestRunModes(unittest.TestCase):
    def setUp(self):
        self._tmp = tempfile.TemporaryDirectory()
        self.tmp = Path(self._tmp.name)

    def tearDown(self):
        self._tmp.cleanup()

    def test_validate_good_and_bad(self):
        good = self.tmp / "good.yaml"
        good.write_text("tracking:\n  expiry_seconds: 4\n", encoding="utf-8")
        bad = self.tmp / "bad.yaml"
        bad.write_text("tracking:\n  expiry_seconds: -4\n", encoding="utf-8")

        with redirect_stdout(StringIO()):
            self.assertEqual(run_validate(str(good)), 0)
            self.assertEqual(run_validate(str(bad)), 1)
            self.assertEqual(run_validate(str(self.tmp / "missing.yaml")), 1)

    def test_replay_writes_event_log(self):
        recording = self.tmp / "walk.jsonl"
        frame = {"box": [10, 10, 30, 80], "label": "green pedestrian light"}
        recording.write_text(
            json.dumps({"timestamp": 0.0, "detections": [frame]}) + "\n",
            encoding="utf-8",
        )
        config = Config.model_validate(
            {"output": {"json_log": True, "json_dir": str(self.tmp / "events")}}
        )

        self.assertEqual(run_replay(config, str(recording)), 0)

        logs = list((self.tmp / "events").glob("events_*.jsonl"))
        self.assertEqual(len(logs), 1)
        record = json.loads(logs[0].read_text(encoding="utf-8").splitlines()[0])
        self.assertEqual(record["event_type"], "SIGNAL_ALERT")
        self.assertEqual(record["color"], "green")

    def test_replay_missing_recording(self):
        self.assertEqual(run_replay(Config(), str(self.tmp / "missing.jsonl")), 1)


if __name__ == "__main__":
    unittest.main()
