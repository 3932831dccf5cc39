from __future__ import annotations
import logging
from typing import Callable, Optional

from PySide6 import QtCore

from digit_board.constants import RECOGNITION_DELAY_MS
from digit_board.core.data_models import Glyph, Stroke
from digit_board.recognition.geometry import bounding_box
from digit_board.recognition.recognizer import Recognizer
from digit_board.state.board_state import BoardState

logger = logging.getLogger(__name__)

Scheduler = Callable[[int, Callable[[], None]], None]


def qt_scheduler(delay_ms: int, callback: Callable[[], None]) -> None:
    """Hoãn callback trên event loop Qt (cùng thread, không chạy song song)."""
    QtCore.QTimer.singleShot(delay_ms, callback)


def status_text(digit: int, score: float) -> str:
    return f"Recognized as: {digit} (confidence ≈ {score:.1f})"


class GlyphReplacementController:
    """Commit nét vào bảng, sau đó nhận dạng (hoãn) và thay nét bằng chữ số nếu đủ giống.

    Vòng đời một nét: Capturing → Committed → {giữ nguyên | thay bằng Glyph}.
    Việc thay thế nhắm vào đúng đối tượng Stroke đã commit chứ không phải
    "phần tử cuối", nên undo/clear xen giữa không làm thay nhầm.
    """

    def __init__(self, state: BoardState, recognizer: Optional[Recognizer] = None,
                 scheduler: Optional[Scheduler] = None,
                 on_status: Optional[Callable[[str], None]] = None,
                 on_changed: Optional[Callable[[], None]] = None,
                 delay_ms: int = RECOGNITION_DELAY_MS):
        self.state = state
        self.recognizer = recognizer or Recognizer()
        self._schedule = scheduler or qt_scheduler
        self._on_status = on_status
        self._on_changed = on_changed
        self.delay_ms = delay_ms

    def commit(self, stroke: Stroke):
        """Thêm nét vào bảng ngay (để hiện lên liền), rồi hẹn nhận dạng."""
        self.state.save_state_for_undo()
        self.state.append(stroke)
        self._changed()
        if stroke.erase or not stroke.points:
            return
        self._schedule(self.delay_ms, lambda: self.classify_and_replace(stroke))

    def classify_and_replace(self, stroke: Stroke) -> Optional[Glyph]:
        res = self.recognizer.recognize(stroke.points)
        if not res.matched:
            self._status("")
            return None

        box = bounding_box(stroke.points)
        glyph = Glyph(digit=res.digit, x=box.min_x, y=box.min_y, w=box.width, h=box.height)
        if not self.state.replace(stroke, glyph):
            # nét đã bị undo/clear trước khi nhận dạng chạy (lịch sử vẫn được thay)
            logger.debug(f"Nét đã bị xoá, bỏ qua thay thế bằng {res.digit}")
            self._status("")
            return None

        logger.info(f"Thay nét bằng chữ số {res.digit} (score={res.score:.2f})")
        self._changed()
        self._status(status_text(res.digit, res.score))
        return glyph

    def _status(self, text: str):
        if self._on_status:
            self._on_status(text)

    def _changed(self):
        if self._on_changed:
            self._on_changed()
