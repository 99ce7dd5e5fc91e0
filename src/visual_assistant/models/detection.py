"""
Detection models - the per-frame input from the vision pipeline.

Detections are ephemeral: they are validated and classified once at the
tracker boundary, consumed by one update cycle and then discarded.
"""

import math
from dataclasses import dataclass, replace
from enum import Enum
from typing import Any

from ..utils.constants import DEFAULT_GREEN_LABELS, DEFAULT_RED_LABELS
from ..utils.errors import InvalidDetectionError

Point = tuple[float, float]


@dataclass(frozen=True)
class Rect:
    """Axis-aligned box in viewport pixels, origin at the top-left corner."""

    x: float
    y: float
    width: float
    height: float

    @property
    def max_x(self) -> float:
        return self.x + self.width

    @property
    def max_y(self) -> float:
        return self.y + self.height

    @classmethod
    def from_xyxy(cls, x1: float, y1: float, x2: float, y2: float) -> "Rect":
        """Build from corner coordinates (as produced by YOLO)."""
        return cls(x=x1, y=y1, width=x2 - x1, height=y2 - y1)


class ObjectClass(Enum):
    """Closed set of classes the alert logic distinguishes."""

    RED_LIGHT = "red"
    GREEN_LIGHT = "green"
    OTHER = "other"

    @property
    def is_light(self) -> bool:
        return self is not ObjectClass.OTHER


class LabelClassifier:
    """
    Maps raw model labels to an ObjectClass.

    Matching is case-insensitive on the whole label, so a model label such as
    "Red Pedestrian Light" resolves to RED_LIGHT while "red car" does not.
    """

    def __init__(
        self,
        red_labels: tuple[str, ...] | list[str] = DEFAULT_RED_LABELS,
        green_labels: tuple[str, ...] | list[str] = DEFAULT_GREEN_LABELS,
    ):
        self.red_labels = {_normalize(label) for label in red_labels}
        self.green_labels = {_normalize(label) for label in green_labels}

    def classify(self, label: str) -> ObjectClass:
        key = _normalize(label)
        if key in self.red_labels:
            return ObjectClass.RED_LIGHT
        if key in self.green_labels:
            return ObjectClass.GREEN_LIGHT
        return ObjectClass.OTHER


def _normalize(label: str) -> str:
    return " ".join(label.lower().split())


def _is_number(value: Any) -> bool:
    return isinstance(value, (int, float)) and not isinstance(value, bool)


def _coordinate(value: Any) -> float:
    """Box values must be JSON numbers, not booleans or numeric strings."""
    if not _is_number(value):
        raise TypeError(f"not a number: {value!r}")
    return float(value)


@dataclass(frozen=True)
class Detection:
    """
    A single detection for one frame.

    Attributes:
        box: Bounding box in viewport coordinates
        label: Class label reported by the model
        confidence: Model confidence in [0, 1]
        object_class: Classified label; None until classified by the tracker
    """

    box: Rect
    label: str
    confidence: float = 1.0
    object_class: ObjectClass | None = None

    def validate(self) -> None:
        """Raise InvalidDetectionError if this detection cannot be tracked."""
        if not isinstance(self.label, str) or not self.label.strip():
            raise InvalidDetectionError("Detection has no label")

        if not isinstance(self.box, Rect):
            raise InvalidDetectionError(f"Detection box is not a Rect: {self.box!r}")

        values = (self.box.x, self.box.y, self.box.width, self.box.height)
        if not all(_is_number(v) and math.isfinite(v) for v in values):
            raise InvalidDetectionError(f"Detection box is not numeric: {values}")
        if self.box.width <= 0 or self.box.height <= 0:
            raise InvalidDetectionError(
                f"Degenerate box for '{self.label}': {self.box.width}x{self.box.height}"
            )

        if not _is_number(self.confidence) or not (
            0.0 <= self.confidence <= 1.0
        ):
            raise InvalidDetectionError(
                f"Confidence out of range for '{self.label}': {self.confidence}"
            )

    def classified(self, classifier: LabelClassifier) -> "Detection":
        """Return a copy with object_class filled in (no-op if already set)."""
        if self.object_class is not None:
            return self
        return replace(self, object_class=classifier.classify(self.label))

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "Detection":
        """
        Parse a raw detection dict.

        Accepts ``{"box": [x, y, w, h], "label": str, "confidence": float}``;
        ``box`` may also be a dict with x/y/width/height keys.

        Raises:
            InvalidDetectionError: If required fields are missing or malformed
        """
        if not isinstance(data, dict):
            raise InvalidDetectionError(f"Detection must be a dict, got {type(data).__name__}")

        raw_box = data.get("box")
        try:
            if isinstance(raw_box, dict):
                box = Rect(
                    x=_coordinate(raw_box["x"]),
                    y=_coordinate(raw_box["y"]),
                    width=_coordinate(raw_box["width"]),
                    height=_coordinate(raw_box["height"]),
                )
            elif isinstance(raw_box, (str, bytes)):
                raise TypeError("box must be a list of four numbers")
            else:
                x, y, w, h = (_coordinate(v) for v in raw_box)
                box = Rect(x=x, y=y, width=w, height=h)
        except (KeyError, TypeError, ValueError) as e:
            raise InvalidDetectionError(f"Invalid box {raw_box!r}: {e}") from e

        confidence = data.get("confidence", 1.0)
        if not _is_number(confidence):
            raise InvalidDetectionError(f"Invalid confidence: {confidence!r}")

        detection = cls(box=box, label=data.get("label"), confidence=confidence)
        detection.validate()
        return detection
