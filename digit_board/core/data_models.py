from __future__ import annotations
from dataclasses import dataclass, field
from typing import List, Tuple, Union

from digit_board.constants import DEFAULT_PEN_RGBA, DEFAULT_PEN_WIDTH

# Thực thể trên bảng: nét tự do (Stroke) hoặc chữ số đã nhận dạng (Glyph).
# Stroke so sánh theo identity (eq=False) để thay thế đúng nét đã commit.
@dataclass(eq=False)
class Stroke:
    points: List[Tuple[float, float]] = field(default_factory=list)
    rgba: Tuple[int, int, int, int] = DEFAULT_PEN_RGBA
    width: int = DEFAULT_PEN_WIDTH
    mode: str = "pen"                        # "pen" | "eraser"

    @property
    def erase(self) -> bool: return self.mode == "eraser"

@dataclass(frozen=True, eq=False)
class Glyph:
    digit: int
    x: float
    y: float
    w: float
    h: float

Entity = Union[Stroke, Glyph]
