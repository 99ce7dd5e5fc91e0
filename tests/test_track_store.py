"""
Tests for the track store
"""

import unittest

from visual_assistant.core import TrackStore
from visual_assistant.models import ObjectClass, Rect, TrackedObject


def make_track(track_id: int, now: float = 0.0) -> TrackedObject:
    box = Rect(0, 0, 10, 10)
    return TrackedObject(
        track_id=track_id,
        box=box,
        centroid=(5.0, 5.0),
        previous_centroid=(5.0, 5.0),
        area=100.0,
        label="car",
        object_class=ObjectClass.OTHER,
        created_at=now,
        last_seen=now,
        last_alert_time=now,
    )


class TestTrackStore(unittest.TestCase):
    """Test TrackStore ownership and id allocation."""

    def setUp(self):
        self.store = TrackStore()

    def test_allocate_ids_monotonic(self):
        ids = [self.store.allocate_id() for _ in range(3)]
        self.assertEqual(ids, [0, 1, 2])

    def test_upsert_and_get(self):
        track_id = self.store.allocate_id()
        track = make_track(track_id)
        self.store.upsert(track)

        self.assertIs(self.store.get(track_id), track)
        self.assertIn(track_id, self.store)
        self.assertEqual(len(self.store), 1)

    def test_upsert_replaces(self):
        track_id = self.store.allocate_id()
        self.store.upsert(make_track(track_id, now=1.0))
        self.store.upsert(make_track(track_id, now=2.0))

        self.assertEqual(len(self.store), 1)
        self.assertEqual(self.store.get(track_id).last_seen, 2.0)

    def test_upsert_unallocated_id_rejected(self):
        with self.assertRaises(ValueError):
            self.store.upsert(make_track(7))

    def test_remove(self):
        track_id = self.store.allocate_id()
        self.store.upsert(make_track(track_id))

        removed = self.store.remove(track_id)

        self.assertEqual(removed.track_id, track_id)
        self.assertIsNone(self.store.get(track_id))
        self.assertIsNone(self.store.remove(track_id))

    def test_ids_not_reused_after_remove(self):
        first = self.store.allocate_id()
        self.store.upsert(make_track(first))
        self.store.remove(first)

        self.assertNotEqual(self.store.allocate_id(), first)

    def test_snapshot_unaffected_by_later_changes(self):
        for _ in range(3):
            self.store.upsert(make_track(self.store.allocate_id()))

        snapshot = self.store.all_records()
        for track_id in list(self.store):
            self.store.remove(track_id)

        self.assertEqual(len(snapshot), 3)
        self.assertEqual(len(self.store), 0)


if __name__ == "__main__":
    unittest.main()
