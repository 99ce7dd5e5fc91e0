"""
Geometry helpers for boxes and 2-D vectors.

All functions are pure. Coordinates are viewport pixels with y growing
downward.
"""

import math

from ..models import Point, Rect

Vector = tuple[float, float]


def area(rect: Rect) -> float:
    """Box area, never negative."""
    return max(rect.width, 0.0) * max(rect.height, 0.0)


def centroid(rect: Rect) -> Point:
    """Midpoint of the box."""
    return (rect.x + rect.width / 2, rect.y + rect.height / 2)


def iou(a: Rect, b: Rect) -> float:
    """
    Intersection over union of two boxes.

    Returns 0 when the boxes do not overlap or either has zero area.
    """
    area_a = area(a)
    area_b = area(b)
    if area_a <= 0 or area_b <= 0:
        return 0.0

    inter_w = min(a.max_x, b.max_x) - max(a.x, b.x)
    inter_h = min(a.max_y, b.max_y) - max(a.y, b.y)
    if inter_w <= 0 or inter_h <= 0:
        return 0.0

    intersection = inter_w * inter_h
    return intersection / (area_a + area_b - intersection)


def displacement(start: Point, end: Point) -> Vector:
    """Vector from start to end."""
    return (end[0] - start[0], end[1] - start[1])


def dot(v1: Vector, v2: Vector) -> float:
    return v1[0] * v2[0] + v1[1] * v2[1]


def magnitude(v: Vector) -> float:
    return math.hypot(v[0], v[1])


def cosine_similarity(v1: Vector, v2: Vector) -> float:
    """Cosine of the angle between two vectors; 0 if either is zero-length."""
    mag1 = magnitude(v1)
    mag2 = magnitude(v2)
    if mag1 == 0 or mag2 == 0:
        return 0.0
    return dot(v1, v2) / (mag1 * mag2)


def approach_reference(viewport_width: float, viewport_height: float) -> Vector:
    """Direction from the viewport center to its bottom center (toward the viewer)."""
    center = (viewport_width / 2, viewport_height / 2)
    bottom_center = (viewport_width / 2, viewport_height)
    return displacement(center, bottom_center)


__all__ = [
    "Vector",
    "approach_reference",
    "area",
    "centroid",
    "cosine_similarity",
    "displacement",
    "dot",
    "iou",
    "magnitude",
]
