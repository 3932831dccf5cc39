from __future__ import annotations
import logging
import math
from functools import lru_cache
from types import MappingProxyType
from typing import Callable, Dict, Iterator, List, Mapping, Tuple

from digit_board.constants import RESAMPLE_N, SQUARE_SIZE
from digit_board.recognition.geometry import Point
from digit_board.recognition.normalize import normalize
from digit_board.recognition.resample import resample

logger = logging.getLogger(__name__)

# Mẫu chữ số dựng bằng hình học đơn giản trong vùng ~0..200 đơn vị.
# Chỉ cần "trông giống" chữ số, không lấy từ dữ liệu chữ viết tay thật.


def _frange(start: float, stop: float, step: float) -> Iterator[float]:
    """Như range() cho số thực, gồm cả stop; step âm thì đếm lùi."""
    v = start
    if step > 0:
        while v <= stop:
            yield v; v += step
    else:
        while v >= stop:
            yield v; v += step


def _circle(cx: float, cy: float, r: float, start: float, stop: float, step: float,
            inclusive: bool = True) -> List[Point]:
    pts = []
    a = start
    while a < stop or (inclusive and a == stop):
        pts.append((math.cos(a) * r + cx, math.sin(a) * r + cy))
        a += step
    return pts


def _zero() -> List[Point]:
    return _circle(100, 100, 50, 0, math.pi * 2, 0.3, inclusive=False)


def _one() -> List[Point]:
    return [(100.0, y) for y in _frange(30, 170, 3)]


def _two() -> List[Point]:
    pts = [(x, 40.0) for x in _frange(40, 160, 3)]
    pts += [(160 - t * 120, 40 + t * 80) for t in _frange(0, 1, 0.03)]
    pts += [(x, 120 + (x - 40) * 0.4) for x in _frange(40, 160, 3)]
    return pts


def _three() -> List[Point]:
    pts = [(40 + t * 120, 50 + math.sin(t * math.pi) * 20) for t in _frange(0, 1, 0.03)]
    pts += [(40 + t * 120, 120 + math.sin(t * math.pi) * 20) for t in _frange(0, 1, 0.03)]
    return pts


def _four() -> List[Point]:
    pts = [(140 - (y - 40) * 0.5, y) for y in _frange(40, 120, 3)]
    pts += [(x, 120.0) for x in _frange(40, 140, 3)]
    pts += [(90.0, y) for y in _frange(40, 160, 3)]
    return pts


def _five() -> List[Point]:
    pts = [(x, 40.0) for x in _frange(160, 40, -3)]
    pts += [(40 + t * 120, 40 + t * 80) for t in _frange(0, 1, 0.03)]
    pts += [(x, 120 + (x - 40) * 0.4) for x in _frange(40, 160, 3)]
    return pts


def _six() -> List[Point]:
    return _circle(120, 100, 40, math.pi, math.pi * 3, 0.3)


def _seven() -> List[Point]:
    pts = [(x, 40.0) for x in _frange(40, 160, 3)]
    pts += [(160 - t * 120, 40 + t * 120) for t in _frange(0, 1, 0.03)]
    return pts


def _eight() -> List[Point]:
    return (_circle(120, 80, 30, 0, math.pi * 2, 0.25)
            + _circle(120, 140, 30, 0, math.pi * 2, 0.25))


def _nine() -> List[Point]:
    pts = _circle(120, 80, 30, -math.pi, math.pi, 0.25)
    pts += [(120.0, y) for y in _frange(80, 160, 3)]
    return pts


_BUILDERS: Dict[int, Callable[[], List[Point]]] = {
    0: _zero, 1: _one, 2: _two, 3: _three, 4: _four,
    5: _five, 6: _six, 7: _seven, 8: _eight, 9: _nine,
}


def raw_template(digit: int) -> List[Point]:
    """Đường vẽ gốc (chưa lấy mẫu/chuẩn hoá) của mẫu chữ số."""
    if digit not in _BUILDERS:
        raise KeyError(f"Không có mẫu cho chữ số {digit!r}")
    return _BUILDERS[digit]()


def templates(n: int = RESAMPLE_N, size: float = SQUARE_SIZE) -> Mapping[int, Tuple[Point, ...]]:
    """Thư viện mẫu đã chuẩn hoá, dựng một lần rồi dùng chung (chỉ đọc).

    Mẫu đi qua đúng pipeline resample → normalize như nét cần nhận dạng,
    nếu không khoảng cách giữa hai bên sẽ vô nghĩa.
    """
    return _build_templates(int(n), float(size))


@lru_cache(maxsize=None)
def _build_templates(n: int, size: float) -> Mapping[int, Tuple[Point, ...]]:
    lib = {d: tuple(normalize(resample(raw_template(d), n), size)) for d in _BUILDERS}
    logger.debug(f"Đã dựng thư viện mẫu: {len(lib)} chữ số, n={n}, size={size}")
    return MappingProxyType(lib)
