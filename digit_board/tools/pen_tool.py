from __future__ import annotations
from typing import List, Tuple
from PySide6 import QtGui
from PySide6.QtCore import QPointF, Qt
from PySide6.QtGui import QPainter, QPen, QColor

from digit_board.constants import MIN_POINT_DISTANCE
from digit_board.core.data_models import Stroke
from digit_board.recognition.geometry import distance
from digit_board.tools.smoothing import to_painter_path


class PenTool:
    """Bút vẽ tự do: gom điểm, xem trước nét làm mượt, commit khi nhả chuột"""

    def __init__(self, win: 'DigitBoardWindow', min_distance: float = MIN_POINT_DISTANCE):
        self.win = win
        self._pts: List[Tuple[float, float]] = []
        self._min_distance = min_distance  # Khoảng cách tối thiểu giữa các điểm

    def on_activate(self):
        self._pts.clear()

    def on_deactivate(self):
        self._pts.clear()

    def _should_add_point(self, pt: Tuple[float, float]) -> bool:
        """Chỉ giữ điểm cách điểm trước lớn hơn ngưỡng (tránh đoạn dài 0)"""
        return not self._pts or distance(self._pts[-1], pt) > self._min_distance

    def mousePressEvent(self, e: QtGui.QMouseEvent):
        if e.button() != Qt.LeftButton:
            return
        pos = e.position()
        self._pts = [(pos.x(), pos.y())]
        self.win.show_status("")

    def mouseMoveEvent(self, e: QtGui.QMouseEvent):
        if not self._pts or not (e.buttons() & Qt.LeftButton):
            return
        pos = e.position()
        pt = (pos.x(), pos.y())
        if not self._should_add_point(pt):
            return
        self._pts.append(pt)
        self.win.canvas.optimized_update()

    def mouseReleaseEvent(self, e: QtGui.QMouseEvent):
        if e.button() != Qt.LeftButton or not self._pts:
            return
        stroke = Stroke(
            points=list(self._pts),
            rgba=self.win.pen_rgba,
            width=self.win.pen_width,
            mode="eraser" if self.win.mode == "erase" else "pen",
        )
        self._pts.clear()
        self.win.recognition.commit(stroke)

    def paint_overlay(self, p: QPainter):
        """Vẽ nét đang kéo (chưa commit) lên canvas"""
        if not self._pts:
            return
        if self.win.mode == "erase":
            color = QColor(160, 160, 160, 160)
        else:
            color = QColor(*self.win.pen_rgba)
        p.setPen(QPen(color, self.win.pen_width, Qt.SolidLine, Qt.RoundCap, Qt.RoundJoin))
        if len(self._pts) == 1:
            p.drawPoint(QPointF(*self._pts[0]))
        else:
            p.drawPath(to_painter_path(self._pts))

    def keyPressEvent(self, e: QtGui.QKeyEvent):
        key, mods = e.key(), e.modifiers()
        # Phím điều chỉnh độ dày bút
        if key in (Qt.Key_BracketLeft, Qt.Key_BracketRight):
            step = 5 if (mods & Qt.ShiftModifier) else 1
            self.win.adjust_pen_width(step if key == Qt.Key_BracketRight else -step)
