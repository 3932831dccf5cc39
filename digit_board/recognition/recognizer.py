from __future__ import annotations
import logging
import math
from dataclasses import dataclass
from typing import Optional, Sequence

from digit_board.constants import (ACCEPT_THRESHOLD, MIN_POINTS, MIN_SIZE,
                                   RESAMPLE_N, SQUARE_SIZE)
from digit_board.recognition.geometry import Point, bounding_box, distance
from digit_board.recognition.normalize import normalize
from digit_board.recognition.resample import resample
from digit_board.recognition.templates import templates

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class Recognition:
    """Kết quả nhận dạng. score là khoảng cách TB (càng nhỏ càng giống), không phải xác suất."""
    digit: Optional[int]
    score: float = math.inf
    candidate: Optional[int] = None      # chữ số gần nhất, kể cả khi bị loại vì ngưỡng

    @property
    def matched(self) -> bool: return self.digit is not None


NO_MATCH = Recognition(None)


def path_distance(a: Sequence[Point], b: Sequence[Point]) -> float:
    """Trung bình khoảng cách Euclid giữa các điểm cùng chỉ số (phụ thuộc thứ tự vẽ)."""
    return sum(distance(p, q) for p, q in zip(a, b)) / len(a)


class Recognizer:
    """Nhận dạng chữ số 0-9 từ một nét bằng so khớp mẫu gần nhất."""

    def __init__(self, resample_n: int = RESAMPLE_N, square_size: float = SQUARE_SIZE,
                 min_points: int = MIN_POINTS, min_size: float = MIN_SIZE,
                 accept_threshold: float = ACCEPT_THRESHOLD):
        self.resample_n = resample_n
        self.square_size = square_size
        self.min_points = min_points
        self.min_size = min_size
        self.accept_threshold = accept_threshold

    def recognize(self, points: Sequence[Point]) -> Recognition:
        # nét quá ngắn / quá nhỏ là nhiễu, không phải chữ số
        if len(points) < self.min_points:
            logger.debug(f"Bỏ qua nét: {len(points)} điểm < {self.min_points}")
            return NO_MATCH
        size = bounding_box(points).max_side
        if size < self.min_size:
            logger.debug(f"Bỏ qua nét: kích thước {size:.1f} < {self.min_size}")
            return NO_MATCH

        candidate = normalize(resample(points, self.resample_n), self.square_size)
        best_digit, best_score = None, math.inf
        for digit, tpl in templates(self.resample_n, self.square_size).items():
            d = path_distance(candidate, tpl)
            if d < best_score:
                best_digit, best_score = digit, d

        logger.debug(f"Gần nhất: {best_digit} (score={best_score:.2f})")
        if best_score > self.accept_threshold:
            return Recognition(None, best_score, best_digit)
        return Recognition(best_digit, best_score, best_digit)
