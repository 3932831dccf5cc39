"""Tests for commit + deferred glyph replacement on the drawing model."""

import math

import pytest

from digit_board.core.data_models import Glyph, Stroke
from digit_board.recognition.templates import raw_template
from digit_board.state.board_state import BoardState
from digit_board.state.recognition_controller import GlyphReplacementController, status_text


class FakeScheduler:
    """Giữ callback lại, chạy khi test gọi run_pending() (giống QTimer.singleShot)."""

    def __init__(self):
        self.pending = []

    def __call__(self, delay_ms, callback):
        self.pending.append((delay_ms, callback))

    def run_pending(self):
        pending, self.pending = self.pending, []
        for _, callback in pending:
            callback()


@pytest.fixture
def scheduler():
    return FakeScheduler()


@pytest.fixture
def statuses():
    return []


@pytest.fixture
def controller(scheduler, statuses):
    return GlyphReplacementController(BoardState(), scheduler=scheduler, on_status=statuses.append)


def vertical_line(length=140.0, step=2.0):
    return [(300.0, 100.0 + i * step) for i in range(int(length / step) + 1)]


def tiny_circle():
    return [(math.cos(a / 5) * 5 + 50, math.sin(a / 5) * 5 + 50) for a in range(40)]


class TestCommit:

    def test_stroke_is_visible_before_recognition(self, controller, scheduler):
        s = Stroke(points=raw_template(0))
        controller.commit(s)
        assert controller.state.entities() == [s]
        assert len(scheduler.pending) == 1
        assert scheduler.pending[0][0] == controller.delay_ms

    def test_eraser_strokes_are_not_recognized(self, controller, scheduler):
        controller.commit(Stroke(points=raw_template(0), mode="eraser"))
        assert scheduler.pending == []
        assert len(controller.state.entities()) == 1

    def test_on_changed_called_on_commit(self, scheduler):
        calls = []
        ctl = GlyphReplacementController(BoardState(), scheduler=scheduler, on_changed=lambda: calls.append(1))
        ctl.commit(Stroke(points=vertical_line()))
        assert calls == [1]
        scheduler.run_pending()
        assert calls == [1, 1]


class TestReplacement:

    def test_circle_becomes_zero_glyph(self, controller, scheduler, statuses):
        s = Stroke(points=raw_template(0))
        controller.commit(s)
        scheduler.run_pending()
        (g,) = controller.state.entities()
        assert isinstance(g, Glyph)
        assert g.digit == 0
        assert statuses == [status_text(0, 0.0)]

    def test_circle_score_below_threshold(self, controller):
        res = controller.recognizer.recognize(raw_template(0))
        assert res.digit == 0
        assert res.score < 15

    def test_vertical_line_becomes_one(self, controller, scheduler):
        controller.commit(Stroke(points=vertical_line()))
        scheduler.run_pending()
        (g,) = controller.state.entities()
        assert isinstance(g, Glyph)
        assert g.digit == 1
        assert (g.x, g.y, g.w, g.h) == (300.0, 100.0, 0.0, 140.0)

    def test_glyph_carries_stroke_bounding_box(self, controller):
        pts = [(x + 50, y + 20) for x, y in raw_template(0)]
        s = Stroke(points=pts)
        controller.state.append(s)
        g = controller.classify_and_replace(s)
        xs, ys = [p[0] for p in pts], [p[1] for p in pts]
        assert (g.x, g.y) == (min(xs), min(ys))
        assert g.w == pytest.approx(max(xs) - min(xs))
        assert g.h == pytest.approx(max(ys) - min(ys))

    def test_status_text_format(self):
        assert status_text(7, 3.456) == "Recognized as: 7 (confidence ≈ 3.5)"

    def test_replaces_committed_instance_not_last_entity(self, controller, scheduler):
        digit_stroke = Stroke(points=raw_template(0))
        later = Stroke(points=tiny_circle())
        controller.commit(digit_stroke)
        controller.commit(later)
        scheduler.run_pending()
        first, second = controller.state.entities()
        assert isinstance(first, Glyph) and first.digit == 0
        assert second is later


class TestNoReplacement:

    def test_few_points_never_replaced(self, controller, scheduler, statuses):
        pts = [(300.0, 100.0 + i * 15) for i in range(9)]
        s = Stroke(points=pts)
        controller.commit(s)
        scheduler.run_pending()
        assert controller.state.entities() == [s]
        assert statuses == [""]

    def test_small_stroke_never_replaced(self, controller, scheduler):
        s = Stroke(points=tiny_circle())
        controller.commit(s)
        scheduler.run_pending()
        assert controller.state.entities() == [s]

    def test_rejected_stroke_leaves_model_untouched(self, scheduler):
        from digit_board.recognition.recognizer import Recognizer
        ctl = GlyphReplacementController(BoardState(), recognizer=Recognizer(accept_threshold=-1.0),
                                         scheduler=scheduler)
        s = Stroke(points=raw_template(4))
        ctl.commit(s)
        before = list(ctl.state.entities())
        scheduler.run_pending()
        assert ctl.state.entities() == before
        assert ctl.state.entities()[0] is s


class TestUndoInterleaving:

    def test_undo_before_recognition_is_noop(self, controller, scheduler, statuses):
        controller.commit(Stroke(points=raw_template(0)))
        assert controller.state.undo()
        scheduler.run_pending()
        assert controller.state.entities() == []
        assert statuses == [""]

    def test_clear_before_recognition_is_noop(self, controller, scheduler):
        controller.commit(Stroke(points=vertical_line()))
        controller.state.clear()
        scheduler.run_pending()
        assert controller.state.entities() == []

    def test_undo_after_replacement_removes_glyph(self, controller, scheduler):
        keep = Stroke(points=tiny_circle())
        controller.commit(keep)
        controller.commit(Stroke(points=raw_template(8)))
        scheduler.run_pending()
        assert isinstance(controller.state.entities()[-1], Glyph)
        controller.state.undo()
        assert controller.state.entities() == [keep]

    def test_undo_of_later_stroke_keeps_glyph(self, controller, scheduler):
        controller.commit(Stroke(points=raw_template(0)))
        later = Stroke(points=tiny_circle())
        controller.commit(later)
        scheduler.run_pending()
        assert controller.state.undo()
        (g,) = controller.state.entities()
        assert isinstance(g, Glyph) and g.digit == 0

    def test_redo_after_early_undo_restores_glyph(self, controller, scheduler):
        controller.commit(Stroke(points=raw_template(0)))
        controller.state.undo()
        scheduler.run_pending()
        assert controller.state.entities() == []
        assert controller.state.redo()
        (g,) = controller.state.entities()
        assert isinstance(g, Glyph) and g.digit == 0
