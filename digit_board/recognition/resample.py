from __future__ import annotations
from typing import List, Sequence

from digit_board.constants import RESAMPLE_N
from digit_board.recognition.geometry import Point, distance, path_length


def resample(points: Sequence[Point], n: int = RESAMPLE_N) -> List[Point]:
    """Lấy mẫu lại đường vẽ thành đúng n điểm cách đều theo độ dài cung.

    Mỗi điểm nội suy được chèn vào dãy làm việc như một mốc mới, khoảng kế tiếp
    được đo từ mốc đó. Dãy gốc của caller không bị sửa.
    """
    if n < 2:
        raise ValueError(f"resample() cần n >= 2, nhận {n}")
    if not points:
        raise ValueError("resample() cần ít nhất 1 điểm")

    pts: List[Point] = [(float(x), float(y)) for x, y in points]
    total = path_length(pts)
    if total == 0:
        return [pts[0]] * n

    interval = total / (n - 1)
    out: List[Point] = [pts[0]]
    acc = 0.0
    i = 1
    while i < len(pts):
        prev, cur = pts[i - 1], pts[i]
        d = distance(prev, cur)
        if acc + d >= interval:
            t = (interval - acc) / d
            q = (prev[0] + t * (cur[0] - prev[0]), prev[1] + t * (cur[1] - prev[1]))
            out.append(q)
            pts.insert(i, q)
            acc = 0.0
        else:
            acc += d
        i += 1

    # sai số dấu phẩy động có thể làm thiếu điểm cuối
    while len(out) < n:
        out.append(pts[-1])
    return out[:n]
