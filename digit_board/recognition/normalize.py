from __future__ import annotations
from typing import List, Sequence

from digit_board.constants import SQUARE_SIZE
from digit_board.recognition.geometry import Point, bounding_box, centroid


def scale_to_square(points: Sequence[Point], size: float = SQUARE_SIZE) -> List[Point]:
    """Co giãn đều (giữ tỉ lệ) để cạnh lớn của bbox = size, gốc tại góc min."""
    box = bounding_box(points)
    scale = box.max_side or 1.0
    return [((x - box.min_x) / scale * size, (y - box.min_y) / scale * size) for x, y in points]


def translate_to_origin(points: Sequence[Point]) -> List[Point]:
    cx, cy = centroid(points)
    return [(x - cx, y - cy) for x, y in points]


def normalize(points: Sequence[Point], size: float = SQUARE_SIZE) -> List[Point]:
    # scale trước rồi mới dời tâm: tâm của dãy đã scale khác tâm dãy gốc
    return translate_to_origin(scale_to_square(points, size))
