from __future__ import annotations
from collections import deque
from typing import List, Optional

from PySide6 import QtCore, QtGui
from PySide6.QtCore import Qt
from PySide6.QtGui import QImage, QPainter, QPen

from digit_board.constants import GLYPH_RGBA
from digit_board.core.data_models import Entity, Glyph, Stroke
from digit_board.tools.smoothing import to_painter_path


class BoardState:
    """Mô hình bảng vẽ: danh sách thực thể có thứ tự (vẽ sau đè lên trước), undo/redo, rebuild lớp mực."""
    def __init__(self, max_history: int = 50):
        self._entities: List[Entity] = []
        self._undo_manager = UndoRedoManager(max_history)

    def entities(self) -> List[Entity]: return self._entities

    # --------- thao tác ----------
    def append(self, entity: Entity):
        self._entities.append(entity)

    def index_of(self, entity: Entity) -> Optional[int]:
        """Vị trí của đúng thực thể này (so theo identity), None nếu đã bị xoá."""
        for i, e in enumerate(self._entities):
            if e is entity:
                return i
        return None

    def replace(self, old: Entity, new: Entity) -> bool:
        """Thay đúng thực thể old bằng new, cả trong lịch sử undo/redo.

        Trả về True nếu old còn trên bảng hiện tại.
        """
        self._undo_manager.swap(old, new)
        idx = self.index_of(old)
        if idx is None:
            return False
        self._entities[idx] = new
        return True

    def clear(self):
        self.save_state_for_undo()
        self._entities = []

    # --------- undo / redo ----------
    def save_state_for_undo(self):
        """Lưu snapshot (bản sao nông, giữ nguyên identity thực thể) trước khi thay đổi"""
        self._undo_manager.save_state(self._entities)

    def undo(self) -> bool:
        if not self._undo_manager.can_undo():
            return False
        self._entities = self._undo_manager.undo(self._entities)
        return True

    def redo(self) -> bool:
        if not self._undo_manager.can_redo():
            return False
        self._entities = self._undo_manager.redo(self._entities)
        return True

    def can_undo(self) -> bool: return self._undo_manager.can_undo()
    def can_redo(self) -> bool: return self._undo_manager.can_redo()

    # --------- rebuild ink ----------
    def rebuild_into(self, target_img: QImage):
        """Vẽ lại toàn bộ thực thể vào QImage trong suốt (ink layer)."""
        target_img.fill(Qt.transparent)
        p = QPainter(target_img)
        p.setRenderHint(QPainter.Antialiasing, True)
        p.setRenderHint(QPainter.TextAntialiasing, True)
        for e in self._entities:
            if isinstance(e, Glyph):
                draw_glyph(p, e)
            else:
                draw_stroke(p, e)
        p.end()


def draw_stroke(p: QPainter, s: Stroke):
    if not s.points:
        return
    if s.erase:
        p.setCompositionMode(QPainter.CompositionMode_Clear)
        p.setPen(QPen(Qt.black, s.width or 1, Qt.SolidLine, Qt.RoundCap, Qt.RoundJoin))
    else:
        p.setCompositionMode(QPainter.CompositionMode_SourceOver)
        p.setPen(QPen(QtGui.QColor(*s.rgba), s.width, Qt.SolidLine, Qt.RoundCap, Qt.RoundJoin))
    if len(s.points) == 1:
        p.drawPoint(QtCore.QPointF(*s.points[0]))
    else:
        p.drawPath(to_painter_path(s.points))


def draw_glyph(p: QPainter, g: Glyph):
    """Chữ số "sạch" (font serif) căn giữa trong bbox của nét gốc."""
    p.setCompositionMode(QPainter.CompositionMode_SourceOver)
    p.setPen(QtGui.QColor(*GLYPH_RGBA))
    font = QtGui.QFont("serif")
    font.setStyleHint(QtGui.QFont.Serif)
    # bbox của số 1 gần như rộng 0 → lấy theo cạnh lớn
    px = max(8, int(max(g.w, g.h) * 0.9))
    font.setPixelSize(px)
    p.setFont(font)
    side = px * 1.2
    cell = QtCore.QRectF(g.x + g.w / 2 - side / 2, g.y + g.h / 2 - side / 2, side, side)
    p.drawText(cell, Qt.AlignCenter, str(g.digit))


class UndoRedoManager:
    """Quản lý lịch sử thay đổi cho Undo/Redo"""

    def __init__(self, max_history: int = 50):
        self.max_history = max_history
        self.undo_stack = deque(maxlen=max_history)
        self.redo_stack = deque(maxlen=max_history)

    def save_state(self, entities: List[Entity]):
        self.undo_stack.append(list(entities))
        self.redo_stack.clear()  # Xóa redo stack khi có thay đổi mới

    def swap(self, old: Entity, new: Entity):
        """Thay old bằng new (theo identity) trong mọi snapshot đã lưu"""
        for snapshot in (*self.undo_stack, *self.redo_stack):
            for i, e in enumerate(snapshot):
                if e is old:
                    snapshot[i] = new

    def can_undo(self) -> bool: return len(self.undo_stack) > 0
    def can_redo(self) -> bool: return len(self.redo_stack) > 0

    def undo(self, current: List[Entity]) -> List[Entity]:
        """Thực hiện undo, trả về state trước đó"""
        if not self.can_undo():
            return current
        self.redo_stack.append(list(current))
        return self.undo_stack.pop()

    def redo(self, current: List[Entity]) -> List[Entity]:
        """Thực hiện redo, trả về state sau đó"""
        if not self.can_redo():
            return current
        self.undo_stack.append(list(current))
        return self.redo_stack.pop()
