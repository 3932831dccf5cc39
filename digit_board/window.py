from __future__ import annotations
import logging
import sys
from typing import Optional

from PySide6 import QtCore, QtGui, QtWidgets

from digit_board.constants import DEFAULT_PEN_RGBA, DEFAULT_PEN_WIDTH
from digit_board.core.canvas_widget import CanvasWidget
from digit_board.state.board_state import BoardState
from digit_board.state.recognition_controller import GlyphReplacementController
from digit_board.tools.pen_tool import PenTool
from digit_board.ui.toolbar import MAX_PEN_WIDTH, BoardToolbar


class DigitBoardWindow(QtWidgets.QMainWindow):
    """Cửa sổ bảng vẽ – điều phối canvas/state/toolbar, nhận dạng chữ số sau mỗi nét."""
    def __init__(self, parent=None):
        super().__init__(parent)
        self.setWindowTitle("✨ Bảng vẽ Toán – nhận dạng chữ số")
        self.resize(1200, 800)

        # ---- settings ----
        self._settings = QtCore.QSettings()
        self.pen_width = int(self._settings.value("pen_width", DEFAULT_PEN_WIDTH))
        color = QtGui.QColor(str(self._settings.value("pen_color", QtGui.QColor(*DEFAULT_PEN_RGBA).name())))
        self.pen_rgba = (color.red(), color.green(), color.blue(), 255) if color.isValid() else DEFAULT_PEN_RGBA
        self.mode = str(self._settings.value("mode", "draw"))    # "draw"|"erase"

        # ---- state ----
        self.state = BoardState()

        # ---- UI ----
        self._build_ui()

        # ---- nhận dạng ----
        self.recognition = GlyphReplacementController(
            self.state, on_status=self.show_status, on_changed=self.canvas.refresh_ink)

        # ---- tool ----
        self.current_tool_obj: Optional[PenTool] = PenTool(self)
        self.current_tool_obj.on_activate()

    # ========== UI ==========
    def _build_ui(self):
        self.toolbar = BoardToolbar(self, init_pen_width=self.pen_width, init_mode=self.mode)
        self.addToolBar(self.toolbar)
        self.toolbar.modeChanged.connect(self._on_mode_changed)
        self.toolbar.colorPicked.connect(self._on_color_picked)
        self.toolbar.penWidthChanged.connect(self._set_pen_width)
        self.toolbar.requestUndo.connect(self.undo)
        self.toolbar.requestRedo.connect(self.redo)
        self.toolbar.requestClear.connect(self.clear_all)
        self.toolbar.requestSavePng.connect(self.save_png_dialog)

        self.scroll = QtWidgets.QScrollArea(self)
        self.scroll.setWidgetResizable(True)
        self.canvas = CanvasWidget(self)
        self.scroll.setWidget(self.canvas)
        self.setCentralWidget(self.scroll)

        self.statusBar().showMessage("Viết số rõ ràng trong một nét, bảng sẽ tự làm sạch chữ số.")

    def show_status(self, text: str):
        self.statusBar().showMessage(text)

    # ========== mode / pen ==========
    def _on_mode_changed(self, mode: str):
        self.mode = mode; self._settings.setValue("mode", mode)
        self.toolbar.reflect_mode(mode)

    def _on_color_picked(self, rgba: tuple):
        self.pen_rgba = rgba
        self._settings.setValue("pen_color", QtGui.QColor(*rgba).name())

    def _set_pen_width(self, value: int):
        v = max(1, min(MAX_PEN_WIDTH, int(value)))
        self.pen_width = v; self._settings.setValue("pen_width", v)
        self.toolbar.set_pen_width(v)
        self.canvas.update()

    def adjust_pen_width(self, delta: int): self._set_pen_width(self.pen_width + int(delta))

    # ========== undo / clear ==========
    def undo(self):
        if self.state.undo(): self.canvas.refresh_ink()

    def redo(self):
        if self.state.redo(): self.canvas.refresh_ink()

    def clear_all(self):
        self.state.clear()
        self.show_status("")
        self.canvas.refresh_ink()

    # ========== export ==========
    def save_png_dialog(self):
        path, _ = QtWidgets.QFileDialog.getSaveFileName(self, "Lưu ảnh", "bang_ve.png", "PNG (*.png)")
        if not path: return
        if not path.lower().endswith(".png"): path += ".png"
        if not self.canvas.render_image().save(path, "PNG"):
            QtWidgets.QMessageBox.critical(self, "Lưu ảnh", "Không lưu được ảnh.")
            return
        self.show_status(f"Đã lưu: {path}")


# ======= Entrypoint =======
def main():
    logging.basicConfig(level=logging.INFO, format="%(asctime)s %(levelname)s %(name)s: %(message)s")
    app = QtWidgets.QApplication(sys.argv)
    QtCore.QCoreApplication.setOrganizationName("DigitBoard")
    QtCore.QCoreApplication.setApplicationName("DigitBoard")
    win = DigitBoardWindow()
    win.show()
    sys.exit(app.exec())

if __name__ == "__main__":
    main()
