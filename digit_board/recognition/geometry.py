from __future__ import annotations
import math
from dataclasses import dataclass
from typing import Sequence, Tuple

Point = Tuple[float, float]


@dataclass(frozen=True)
class BoundingBox:
    min_x: float
    min_y: float
    max_x: float
    max_y: float

    @property
    def width(self) -> float: return self.max_x - self.min_x
    @property
    def height(self) -> float: return self.max_y - self.min_y
    @property
    def max_side(self) -> float: return max(self.width, self.height)


def distance(p: Point, q: Point) -> float:
    return math.hypot(p[0] - q[0], p[1] - q[1])


def path_length(points: Sequence[Point]) -> float:
    """Tổng độ dài các đoạn liên tiếp; 0 nếu chỉ có 1 điểm."""
    total = 0.0
    for i in range(1, len(points)):
        total += distance(points[i - 1], points[i])
    return total


def centroid(points: Sequence[Point]) -> Point:
    if not points:
        raise ValueError("centroid() cần ít nhất 1 điểm")
    n = len(points)
    return (sum(p[0] for p in points) / n, sum(p[1] for p in points) / n)


def bounding_box(points: Sequence[Point]) -> BoundingBox:
    """Hộp bao min/max; width/height có thể = 0 (nét thẳng hoặc 1 điểm)."""
    if not points:
        raise ValueError("bounding_box() cần ít nhất 1 điểm")
    xs = [p[0] for p in points]
    ys = [p[1] for p in points]
    return BoundingBox(min(xs), min(ys), max(xs), max(ys))
