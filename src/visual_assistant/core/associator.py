"""
Associator - matches a frame's detections to existing tracks by IoU.

Matching is a greedy best-first assignment over all (detection, track) pairs
whose IoU exceeds the threshold. Pairs are taken in order of IoU (highest
first), ties broken by lower track id and then by detection order, and each
track and each detection is used at most once per frame. The result does not
depend on detection order or store iteration order except through those
explicit tie-breaks.

Known limitation: greedy assignment is not globally optimal. A detection can
lose its best track to a stronger pair and end up unmatched, spawning a new
track even though a weaker overlap with another track existed.
"""

import logging
from dataclasses import dataclass, field

from ..models import Detection, TrackedObject
from .geometry import iou

logger = logging.getLogger(__name__)


@dataclass
class Match:
    """A detection bound to an existing track."""

    detection_index: int
    track_id: int
    iou: float


@dataclass
class AssociationResult:
    """Outcome of associating one frame."""

    matches: list[Match] = field(default_factory=list)
    unmatched: list[int] = field(default_factory=list)  # detection indices


def associate(
    detections: list[Detection],
    tracks: tuple[TrackedObject, ...] | list[TrackedObject],
    iou_threshold: float,
) -> AssociationResult:
    """
    Associate detections with tracks.

    Args:
        detections: Validated detections, in the order received
        tracks: Snapshot of existing tracks
        iou_threshold: A pair is a candidate only if IoU is strictly greater

    Returns:
        AssociationResult with matches and unmatched detection indices
    """
    candidates: list[tuple[float, int, int]] = []
    for det_index, detection in enumerate(detections):
        for track in tracks:
            overlap = iou(track.box, detection.box)
            if overlap > iou_threshold:
                candidates.append((overlap, track.track_id, det_index))

    # Highest IoU first, then lowest track id, then earliest detection
    candidates.sort(key=lambda c: (-c[0], c[1], c[2]))

    result = AssociationResult()
    used_tracks: set[int] = set()
    used_detections: set[int] = set()

    for overlap, track_id, det_index in candidates:
        if track_id in used_tracks or det_index in used_detections:
            continue
        used_tracks.add(track_id)
        used_detections.add(det_index)
        result.matches.append(Match(det_index, track_id, overlap))

    result.unmatched = [
        i for i in range(len(detections)) if i not in used_detections
    ]

    if len(candidates) > len(result.matches):
        logger.debug(
            f"Association: {len(candidates)} candidate pair(s), "
            f"{len(result.matches)} accepted"
        )

    return result
