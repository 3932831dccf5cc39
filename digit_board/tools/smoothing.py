from __future__ import annotations
from typing import List, NamedTuple, Sequence, Tuple

from PySide6.QtCore import QPointF
from PySide6.QtGui import QPainterPath

from digit_board.recognition.geometry import Point


class Segment(NamedTuple):
    kind: str                       # "line" | "cubic"
    points: Tuple[Point, ...]       # line: (end,)  cubic: (c1, c2, end)


class SmoothedPath(NamedTuple):
    start: Point
    segments: List[Segment]


def _mid(a: Point, b: Point) -> Point:
    return ((a[0] + b[0]) / 2, (a[1] + b[1]) / 2)


def smooth_points(points: Sequence[Point]) -> List[Point]:
    """Chèn trung điểm giữa các điểm kề nhau (xấp xỉ Catmull-Rom giản lược)."""
    if len(points) < 3:
        return list(points)
    out = [points[0]]
    for i in range(len(points) - 2):
        p0, p1, p2 = points[i], points[i + 1], points[i + 2]
        out += [_mid(p0, p1), p1, _mid(p1, p2)]
    out.append(points[-1])
    return out


def build_segments(points: Sequence[Point]) -> SmoothedPath:
    """Chuỗi đoạn Bezier bậc 3 để vẽ nét; chỉ phục vụ hiển thị, không dùng cho nhận dạng."""
    if not points:
        raise ValueError("build_segments() cần ít nhất 1 điểm")
    if len(points) < 3:
        return SmoothedPath(points[0], [Segment("line", (p,)) for p in points[1:]])

    sm = smooth_points(points)
    segments = []
    i = 1
    # mỗi đoạn lấy 3 điểm liên tiếp: (control-1, control-2, end)
    while i + 2 < len(sm):
        segments.append(Segment("cubic", (sm[i], sm[i + 1], sm[i + 2])))
        i += 3
    return SmoothedPath(sm[0], segments)


def to_painter_path(points: Sequence[Point]) -> QPainterPath:
    smoothed = build_segments(points)
    path = QPainterPath(QPointF(*smoothed.start))
    for seg in smoothed.segments:
        if seg.kind == "line":
            path.lineTo(QPointF(*seg.points[0]))
        else:
            c1, c2, end = seg.points
            path.cubicTo(QPointF(*c1), QPointF(*c2), QPointF(*end))
    return path
