"""
Tests for the Tracker service (end-to-end frame updates)
"""

import threading
import unittest

from visual_assistant.core import NO_OBJECTS_MESSAGE, Tracker, TrackerSettings
from visual_assistant.models import (
    ApproachAlert,
    Detection,
    MotionVector,
    Rect,
    SignalAlert,
)

RED = "red pedestrian light"
GREEN = "green pedestrian light"


def box(x, y, w, h, label="car", confidence=0.9):
    return {"box": [x, y, w, h], "label": label, "confidence": confidence}


class TestTrackIdentity(unittest.TestCase):
    """Association and lifecycle scenarios."""

    def setUp(self):
        self.tracker = Tracker(TrackerSettings(viewport_width=400, viewport_height=800))
        self.tracker.update([box(0, 0, 100, 100)], now=0.0)

    def test_high_iou_keeps_identity(self):
        """IoU 0.6 updates the existing track in place."""
        self.tracker.update([box(0, 25, 100, 100)], now=0.1)

        tracks = self.tracker.snapshot()
        self.assertEqual(len(tracks), 1)
        track = tracks[0]
        self.assertEqual(track.track_id, 0)
        self.assertEqual(track.centroid, (50.0, 75.0))
        self.assertEqual(track.previous_centroid, (50.0, 50.0))
        self.assertEqual(track.area, 10000.0)
        self.assertEqual(track.last_seen, 0.1)

    def test_low_iou_creates_new_track(self):
        """IoU 0.4 creates a second track with a distinct id."""
        self.tracker.update([box(0, 0, 100, 40)], now=0.1)

        ids = sorted(t.track_id for t in self.tracker.snapshot())
        self.assertEqual(ids, [0, 1])

    def test_label_updates_on_match(self):
        self.tracker.update([box(0, 0, 100, 100, label="truck")], now=0.1)
        self.assertEqual(self.tracker.snapshot()[0].label, "truck")

    def test_unseen_track_expires(self):
        """A track with no detections for 4 seconds is removed; its id is not reused."""
        self.tracker.update([], now=4.0)
        self.assertEqual(self.tracker.snapshot(), ())

        self.tracker.update([box(0, 0, 100, 100)], now=4.1)
        tracks = self.tracker.snapshot()
        self.assertEqual(len(tracks), 1)
        self.assertEqual(tracks[0].track_id, 1)

    def test_expiry_is_strict(self):
        """Exactly 3 seconds unseen is still alive."""
        self.tracker.update([], now=3.0)
        self.assertEqual(len(self.tracker.snapshot()), 1)
        self.tracker.update([], now=3.01)
        self.assertEqual(len(self.tracker.snapshot()), 0)

    def test_matched_track_survives_sweep(self):
        self.tracker.update([box(0, 0, 100, 100)], now=2.5)
        self.tracker.update([], now=5.0)
        self.assertEqual(len(self.tracker.snapshot()), 1)

    def test_duplicate_detection_starts_second_track(self):
        """Only one detection per frame may continue a given track."""
        self.tracker.update([box(0, 5, 100, 100), box(0, 10, 100, 100)], now=0.1)

        tracks = {t.track_id: t for t in self.tracker.snapshot()}
        self.assertEqual(sorted(tracks), [0, 1])
        self.assertEqual(tracks[0].centroid, (50.0, 55.0))

    def test_new_tracks_not_matched_within_frame(self):
        tracker = Tracker()
        tracker.update([box(500, 500, 50, 50), box(502, 502, 50, 50)], now=0.0)
        self.assertEqual(len(tracker.snapshot()), 2)


class TestDetectionValidation(unittest.TestCase):
    def setUp(self):
        self.tracker = Tracker(TrackerSettings(min_confidence=0.3))

    def test_malformed_detections_skipped(self):
        events = self.tracker.update(
            [
                box(0, 0, 0, 10),  # zero width
                {"box": [0, 0, 10, 10]},  # no label
                {"label": "car"},  # no box
                box(0, 0, 10, 10, label=""),
                box(0, 0, 10, 10, confidence=1.5),
                "not a detection",
                box(200, 200, 40, 40),
            ],
            now=0.0,
        )

        self.assertEqual(events, [])
        self.assertEqual(len(self.tracker.snapshot()), 1)
        self.assertEqual(self.tracker.last_frame.received, 7)
        self.assertEqual(self.tracker.last_frame.skipped, 6)
        self.assertEqual(self.tracker.last_frame.created, 1)

    def test_low_confidence_ignored(self):
        self.tracker.update([box(0, 0, 10, 10, confidence=0.1)], now=0.0)
        self.assertEqual(self.tracker.snapshot(), ())

    def test_accepts_detection_objects(self):
        self.tracker.update([Detection(box=Rect(0, 0, 10, 10), label="dog")], now=0.0)
        self.assertEqual(self.tracker.snapshot()[0].label, "dog")

    def test_detection_object_without_rect_skipped(self):
        """A bad Detection object is skipped; the rest of the frame is tracked."""
        self.tracker.update([box(100, 100, 10, 10)], now=0.0)

        events = self.tracker.update(
            [
                Detection(box=(0, 0, 10, 10), label="car"),
                Detection(box=None, label="car"),
                box(0, 0, 10, 10),
            ],
            now=5.0,
        )

        self.assertEqual(events, [])
        tracks = self.tracker.snapshot()
        self.assertEqual(len(tracks), 1)
        self.assertEqual(tracks[0].box, Rect(0.0, 0.0, 10.0, 10.0))
        self.assertEqual(self.tracker.last_frame.skipped, 2)
        self.assertEqual(self.tracker.last_frame.expired, 1)

    def test_non_list_boxes_skipped(self):
        self.tracker.update(
            [
                {"box": "1234", "label": "car"},
                {"box": b"1234", "label": "car"},
                {"box": ["1", "2", "3", "4"], "label": "car"},
            ],
            now=0.0,
        )
        self.assertEqual(self.tracker.snapshot(), ())
        self.assertEqual(self.tracker.last_frame.skipped, 3)

    def test_boolean_values_skipped(self):
        self.tracker.update(
            [
                {"box": [True, True, True, True], "label": "car"},
                {"box": {"x": 0, "y": 0, "width": True, "height": 5}, "label": "car"},
                Detection(box=Rect(True, True, True, True), label="car"),
                Detection(box=Rect(0, 0, 5, 5), label="car", confidence=True),
            ],
            now=0.0,
        )
        self.assertEqual(self.tracker.snapshot(), ())
        self.assertEqual(self.tracker.last_frame.skipped, 4)

    def test_empty_frame(self):
        self.assertEqual(self.tracker.update([], now=0.0), [])


class TestApproachScenario(unittest.TestCase):
    """An object growing toward the viewer."""

    def setUp(self):
        self.tracker = Tracker(TrackerSettings(viewport_width=400, viewport_height=800))
        self.height = 100

    def _frame(self, now):
        """Bottom edge moves down 10 px per frame: centroid down 5 px, area grows."""
        events = self.tracker.update([box(150, 200, 100, self.height)], now=now)
        self.height += 10
        return [e for e in events if isinstance(e, ApproachAlert)]

    def test_three_frames_then_cooldown(self):
        self.assertEqual(self._frame(0.0), [])  # created, alert clock starts
        self.assertEqual(self._frame(1.0), [])  # inside initial cooldown
        self.assertEqual(self._frame(2.0), [])

        self.assertEqual(self._frame(3.5), [])
        self.assertEqual(self._frame(3.6), [])
        alerts = self._frame(3.7)
        self.assertEqual(len(alerts), 1)
        self.assertEqual(alerts[0].track_id, 0)

        track = self.tracker.snapshot()[0]
        self.assertEqual(track.consecutive_alert_count, 0)
        self.assertEqual(track.last_alert_time, 3.7)

        # Cooldown: still approaching, no new alert until 3 s have passed
        now = 3.8
        while now < 6.7:
            self.assertEqual(self._frame(now), [])
            now = round(now + 0.2, 1)

        self.assertEqual(self._frame(6.8), [])
        self.assertEqual(self._frame(6.9), [])
        self.assertEqual(len(self._frame(7.0)), 1)

    def test_interrupted_approach_resets(self):
        self._frame(0.0)
        self._frame(3.5)
        self._frame(3.6)
        # Object holds still for a frame
        self.height -= 10
        self.tracker.update([box(150, 200, 100, self.height)], now=3.7)
        self.height += 10
        self.assertEqual(self.tracker.snapshot()[0].consecutive_alert_count, 0)
        self.assertEqual(self._frame(3.8), [])


class TestSignalScenario(unittest.TestCase):
    """A pedestrian light held in view."""

    def setUp(self):
        self.tracker = Tracker()
        self.now = 0.0

    def _frame(self, label):
        events = self.tracker.update([box(20, 20, 30, 80, label=label)], now=self.now)
        self.now += 0.02
        return [e for e in events if isinstance(e, SignalAlert)]

    def test_first_sighting_then_every_100_frames(self):
        first = self._frame(RED)
        self.assertEqual([e.color for e in first], ["red"])

        for _ in range(99):
            self.assertEqual(self._frame(RED), [])
        self.assertEqual([e.color for e in self._frame(RED)], ["red"])

        for _ in range(99):
            self.assertEqual(self._frame(RED), [])
        self.assertEqual(len(self._frame(RED)), 1)

    def test_color_change_is_immediate(self):
        self._frame(RED)
        for _ in range(10):
            self._frame(RED)
        self.assertEqual([e.color for e in self._frame(GREEN)], ["green"])
        self.assertEqual(self._frame(GREEN), [])

    def test_labels_are_case_insensitive(self):
        self.assertEqual([e.color for e in self._frame("Green Pedestrian Light")], ["green"])

    def test_other_classes_silent(self):
        self.assertEqual(self._frame("car"), [])
        self.assertEqual([e.color for e in self._frame(RED)], ["red"])


class TestMotionScenario(unittest.TestCase):
    def setUp(self):
        self.tracker = Tracker()

    def _run(self, step):
        events = []
        for i in range(6):
            events += self.tracker.update([box(100 + i * step, 300, 100, 100)], now=i * 0.1)
        return [e for e in events if isinstance(e, MotionVector)]

    def test_fast_track_emits_vector(self):
        vectors = self._run(15)

        self.assertEqual(len(vectors), 1)
        self.assertEqual(vectors[0].start, (150.0, 350.0))
        self.assertEqual(vectors[0].end, (225.0, 350.0))
        self.assertEqual(len(self.tracker.pending_motion_vectors()), 1)

    def test_acknowledge_clears_pending(self):
        vectors = self._run(15)

        self.assertTrue(self.tracker.acknowledge_motion_vector(vectors[0].track_id))
        self.assertIsNone(self.tracker.snapshot()[0].pending_motion_vector)
        self.assertFalse(self.tracker.acknowledge_motion_vector(vectors[0].track_id))
        self.assertEqual(self.tracker.pending_motion_vectors(), [])

    def test_slow_track_no_vector(self):
        self.assertEqual(self._run(5), [])
        self.assertEqual(self.tracker.snapshot()[0].arrow_frame_count, 0)

    def test_acknowledge_unknown_track(self):
        self.assertFalse(self.tracker.acknowledge_motion_vector(42))


class TestSummaryQuery(unittest.TestCase):
    def test_empty_scene(self):
        tracker = Tracker()
        summary = tracker.query_summary(now=0.0)
        self.assertEqual(summary.text, NO_OBJECTS_MESSAGE)

    def test_second_request_suppressed(self):
        tracker = Tracker()
        tracker.update([box(10, 10, 20, 20)], now=0.0)

        self.assertIsNotNone(tracker.query_summary(now=1.0))
        self.assertIsNone(tracker.query_summary(now=3.0))
        self.assertIsNotNone(tracker.query_summary(now=6.5))

    def test_summary_reports_red_light(self):
        tracker = Tracker(TrackerSettings(viewport_width=300))
        tracker.update([box(10, 10, 20, 60, label=RED), box(200, 200, 50, 50)], now=0.0)

        summary = tracker.query_summary(now=0.5)
        self.assertTrue(summary.text.startswith("Traffic Summary: 2 objects detected."))
        self.assertTrue(summary.text.endswith("please wait."))


class TestConcurrency(unittest.TestCase):
    def test_updates_and_queries_from_threads(self):
        """Concurrent frames and summaries never corrupt ids."""
        tracker = Tracker()
        errors = []

        def feed(offset):
            try:
                for i in range(50):
                    tracker.update([box(offset, 0, 20, 20)], now=i * 0.01)
            except Exception as e:  # pragma: no cover - failure path
                errors.append(e)

        def ask():
            for i in range(50):
                tracker.query_summary(now=i * 10.0)

        threads = [threading.Thread(target=feed, args=(x,)) for x in (0, 300, 600)]
        threads.append(threading.Thread(target=ask))
        for thread in threads:
            thread.start()
        for thread in threads:
            thread.join()

        self.assertEqual(errors, [])
        ids = [t.track_id for t in tracker.snapshot()]
        self.assertEqual(len(ids), len(set(ids)))
        self.assertEqual(len(ids), 3)


if __name__ == "__main__":
    unittest.main()
