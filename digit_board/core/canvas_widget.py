from __future__ import annotations
from PySide6 import QtCore, QtGui, QtWidgets
from PySide6.QtCore import Qt, QSize
from PySide6.QtGui import QImage, QPainter
import logging

from digit_board.constants import CANVAS_W, CANVAS_H

logger = logging.getLogger(__name__)


class CanvasWidget(QtWidgets.QWidget):
    """Canvas: vẽ nền + lớp mực, chuyển sự kiện cho tool hiện tại, gọi paint_overlay nếu có."""
    def __init__(self, win: 'DigitBoardWindow', width: int = CANVAS_W, height: int = CANVAS_H):
        super().__init__(win)
        self.win = win
        self.setAttribute(Qt.WA_OpaquePaintEvent, False)
        self.setMouseTracking(True)
        self.setFocusPolicy(Qt.StrongFocus)

        self.virtual_w = width
        self.virtual_h = height
        self._ink = QImage(self.virtual_w, self.virtual_h, QImage.Format_ARGB32_Premultiplied)
        self._ink.fill(Qt.transparent)
        self.setMinimumSize(self.virtual_w, self.virtual_h)

        self._paint_throttle_ms = 16  # ~60 FPS
        self._paint_timer = QtCore.QTimer(self)
        self._paint_timer.setSingleShot(True)
        self._paint_timer.timeout.connect(self.update)

    def sizeHint(self) -> QtCore.QSize: return QSize(self.virtual_w, self.virtual_h)

    # ---- ink ----
    def refresh_ink(self):
        """Vẽ lại lớp mực từ BoardState rồi update"""
        self.win.state.rebuild_into(self._ink)
        self.update()

    def render_image(self) -> QImage:
        """Ảnh nền trắng + lớp mực (dùng khi xuất PNG)"""
        img = QImage(self.virtual_w, self.virtual_h, QImage.Format_ARGB32)
        img.fill(Qt.white)
        p = QPainter(img)
        p.drawImage(0, 0, self._ink)
        p.end()
        return img

    # ---- paint ----
    def paintEvent(self, e: QtGui.QPaintEvent):
        p = QPainter(self)
        p.setRenderHint(QPainter.Antialiasing, True)
        p.fillRect(self.rect(), Qt.white)
        p.drawImage(0, 0, self._ink)

        # Overlay của tool (preview)
        try:
            preview = getattr(self.win.current_tool_obj, "paint_overlay", None)
            if callable(preview):
                preview(p)
        except Exception as ex:
            logger.warning(f"Lỗi paint_overlay: {ex}")
        p.end()

    # ---- events → forward cho tool hiện tại ----
    def mousePressEvent(self, e: QtGui.QMouseEvent):
        if self.win.current_tool_obj: self.win.current_tool_obj.mousePressEvent(e)
    def mouseMoveEvent(self, e: QtGui.QMouseEvent):
        if self.win.current_tool_obj: self.win.current_tool_obj.mouseMoveEvent(e)
    def mouseReleaseEvent(self, e: QtGui.QMouseEvent):
        if self.win.current_tool_obj: self.win.current_tool_obj.mouseReleaseEvent(e)
    def keyPressEvent(self, e: QtGui.QKeyEvent):
        if self.win.current_tool_obj: self.win.current_tool_obj.keyPressEvent(e)
        else: super().keyPressEvent(e)

    def optimized_update(self):
        """Gom nhiều update liên tiếp thành một lần vẽ (throttle)"""
        if not self._paint_timer.isActive():
            self._paint_timer.start(self._paint_throttle_ms)
