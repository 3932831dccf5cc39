from __future__ import annotations
from typing import Callable, Tuple
from PySide6 import QtWidgets
from PySide6.QtCore import Qt, Signal
from PySide6.QtGui import QAction, QActionGroup, QKeySequence

MAX_PEN_WIDTH = 30


def create_width_menu(parent, init_value: int, callback: Callable[[int], None]) -> Tuple[
    QtWidgets.QMenu, QtWidgets.QSlider, QtWidgets.QLabel]:
    """Menu popup chọn độ dày bút (slider + vài giá trị hay dùng)"""
    menu = QtWidgets.QMenu(parent)
    widget = QtWidgets.QWidget()
    layout = QtWidgets.QVBoxLayout(widget)
    layout.setContentsMargins(10, 10, 10, 10)
    layout.setSpacing(8)

    label = QtWidgets.QLabel(f"Độ dày: {init_value}px")
    label.setAlignment(Qt.AlignCenter)
    layout.addWidget(label)

    slider = QtWidgets.QSlider(Qt.Horizontal)
    slider.setRange(1, MAX_PEN_WIDTH)
    slider.setValue(init_value)
    slider.setFixedWidth(200)
    layout.addWidget(slider)

    buttons_layout = QtWidgets.QHBoxLayout()
    for value in (2, 4, 6, 8, 12, 20):
        btn = QtWidgets.QPushButton(str(value))
        btn.setFixedSize(30, 25)
        btn.clicked.connect(lambda checked=False, v=value: slider.setValue(v))
        buttons_layout.addWidget(btn)
    layout.addLayout(buttons_layout)

    slider.valueChanged.connect(callback)

    action = QtWidgets.QWidgetAction(parent)
    action.setDefaultWidget(widget)
    menu.addAction(action)
    return menu, slider, label


class BoardToolbar(QtWidgets.QToolBar):
    # ==== Signals (Window sẽ connect) ====
    modeChanged = Signal(str)               # "draw"|"erase"
    colorPicked = Signal(tuple)             # (r,g,b,a)
    penWidthChanged = Signal(int)

    requestUndo = Signal()
    requestRedo = Signal()
    requestClear = Signal()
    requestSavePng = Signal()

    def __init__(self, parent=None, init_pen_width=6, init_mode="draw"):
        super().__init__("Tools", parent)
        self.setMovable(False)

        # Draw / Erase
        group = QActionGroup(self); group.setExclusive(True)
        self.act_draw = QAction("✏️ Vẽ", self, checkable=True)
        self.act_erase = QAction("🧽 Tẩy", self, checkable=True)
        for act, name in [(self.act_draw, "draw"), (self.act_erase, "erase")]:
            group.addAction(act)
            act.triggered.connect(lambda _=False, n=name: self.modeChanged.emit(n))
            self.addAction(act)
        self.reflect_mode(init_mode)

        self.addSeparator()

        # Color + width
        self.btn_color = QtWidgets.QToolButton(self); self.btn_color.setText("🎨 Màu")
        self.btn_color.clicked.connect(self._pick_color); self.addWidget(self.btn_color)

        self.btn_pen_w = QtWidgets.QToolButton(self); self.btn_pen_w.setPopupMode(QtWidgets.QToolButton.InstantPopup)
        self.menu_pen, self._pen_slider, self._pen_label = create_width_menu(self, init_pen_width, self._on_pen_width)
        self.btn_pen_w.setMenu(self.menu_pen); self.addWidget(self.btn_pen_w)
        self._sync_width_button(init_pen_width)

        self.addSeparator()

        # Undo / clear / export
        a_undo = self._act("↶ Hoàn tác", self.requestUndo.emit); a_undo.setShortcut(QKeySequence.Undo); self.addAction(a_undo)
        a_redo = self._act("↷ Làm lại", self.requestRedo.emit); a_redo.setShortcut(QKeySequence.Redo); self.addAction(a_redo)
        self.addAction(self._act("🗑 Xóa hết", self.requestClear.emit))
        a_png = self._act("💾 Lưu PNG…", self.requestSavePng.emit); a_png.setShortcut(QKeySequence.Save); self.addAction(a_png)

    # ---- helpers ----
    def _act(self, text, slot):
        a = QAction(text, self); a.triggered.connect(slot); return a

    def _pick_color(self):
        c = QtWidgets.QColorDialog.getColor(parent=self)
        if c.isValid(): self.colorPicked.emit((c.red(), c.green(), c.blue(), 255))

    def _sync_width_button(self, pen_w: int):
        self.btn_pen_w.setText(f"✏️ {pen_w}px")
        self._pen_label.setText(f"Độ dày: {pen_w}px")

    def _on_pen_width(self, v: int):
        v = max(1, min(MAX_PEN_WIDTH, int(v)))
        self._sync_width_button(v)
        self.penWidthChanged.emit(v)

    def set_pen_width(self, v: int):
        """Đồng bộ slider khi Window đổi độ dày từ ngoài (phím tắt)"""
        self._pen_slider.blockSignals(True); self._pen_slider.setValue(v); self._pen_slider.blockSignals(False)
        self._sync_width_button(v)

    def reflect_mode(self, mode: str):
        self.act_draw.setChecked(mode == "draw")
        self.act_erase.setChecked(mode == "erase")
