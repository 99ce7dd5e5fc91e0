"""
TrackStore - sole owner of tracked object records.

Only the lifecycle manager writes to the store. Everyone else reads through
``get`` or the ``all_records`` snapshot. Records are immutable, so a snapshot
stays consistent while the store is being updated.
"""

from ..models import TrackedObject


class TrackStore:
    """Mapping of track id to TrackedObject plus the id allocator."""

    def __init__(self):
        self._records: dict[int, TrackedObject] = {}
        self._next_id = 0

    def allocate_id(self) -> int:
        """Return a fresh id. Ids are never reused, even after removal."""
        track_id = self._next_id
        self._next_id += 1
        return track_id

    def get(self, track_id: int) -> TrackedObject | None:
        return self._records.get(track_id)

    def upsert(self, record: TrackedObject) -> None:
        """Insert or replace the record for record.track_id."""
        if record.track_id >= self._next_id:
            raise ValueError(
                f"Track id {record.track_id} was not allocated by this store"
            )
        self._records[record.track_id] = record

    def remove(self, track_id: int) -> TrackedObject | None:
        """Remove and return a record (None if absent)."""
        return self._records.pop(track_id, None)

    def all_records(self) -> tuple[TrackedObject, ...]:
        """Snapshot of all current records."""
        return tuple(self._records.values())

    def __len__(self) -> int:
        return len(self._records)

    def __contains__(self, track_id: object) -> bool:
        return track_id in self._records
