"""Tests for the template library and the nearest-template recognizer."""

import math

import pytest

from digit_board.recognition.geometry import bounding_box
from digit_board.recognition.recognizer import NO_MATCH, Recognizer, path_distance
from digit_board.recognition.templates import raw_template, templates


def vertical_line(x=300.0, top=100.0, length=140.0, step=2.0):
    n = int(length / step) + 1
    return [(x, top + i * step) for i in range(n)]


@pytest.fixture
def recognizer():
    return Recognizer()


class TestTemplateLibrary:

    def test_has_ten_digits_of_64_points(self):
        lib = templates()
        assert sorted(lib) == list(range(10))
        assert all(len(tpl) == 64 for tpl in lib.values())

    def test_is_built_once_and_shared(self):
        assert templates() is templates()

    def test_is_read_only(self):
        with pytest.raises(TypeError):
            templates()[0] = ()

    def test_templates_are_normalized(self):
        for tpl in templates().values():
            assert bounding_box(tpl).max_side == pytest.approx(200.0)

    @pytest.mark.parametrize("digit", range(10))
    def test_raw_templates_span_drawing_region(self, digit):
        box = bounding_box(raw_template(digit))
        assert 0 <= box.min_x and box.max_x <= 200
        assert 0 <= box.min_y and box.max_y <= 200
        assert len(raw_template(digit)) >= 10

    def test_unknown_digit_raises(self):
        with pytest.raises(KeyError):
            raw_template(10)


class TestPathDistance:

    def test_identical_paths_are_zero(self):
        pts = [(1, 2), (3, 4)]
        assert path_distance(pts, pts) == 0

    def test_mean_of_pointwise_distances(self):
        a = [(0, 0), (0, 0)]
        b = [(3, 4), (0, 2)]
        assert path_distance(a, b) == pytest.approx(3.5)


class TestRecognizer:

    @pytest.mark.parametrize("digit", range(10))
    def test_raw_template_matches_itself_exactly(self, recognizer, digit):
        res = recognizer.recognize(raw_template(digit))
        assert res.digit == digit
        assert res.score == pytest.approx(0.0, abs=1e-9)
        assert res.matched

    def test_match_is_independent_of_position_and_scale(self, recognizer):
        pts = [(x * 0.5 + 700, y * 0.5 + 40) for x, y in raw_template(7)]
        res = recognizer.recognize(pts)
        assert res.digit == 7
        assert res.score < 1e-3

    def test_vertical_line_is_a_one(self, recognizer):
        res = recognizer.recognize(vertical_line())
        assert res.digit == 1
        assert res.score < 15

    def test_too_few_points_is_no_match(self, recognizer):
        pts = vertical_line()[:9]
        pts = [(x, y * 10) for x, y in pts]   # to, nhưng chỉ 9 điểm
        assert recognizer.recognize(pts) is NO_MATCH

    def test_too_small_is_no_match(self, recognizer):
        tiny = [(math.cos(a / 5) * 5 + 50, math.sin(a / 5) * 5 + 50) for a in range(40)]
        assert recognizer.recognize(tiny) is NO_MATCH

    def test_no_match_has_infinite_score(self):
        assert not NO_MATCH.matched
        assert NO_MATCH.score == math.inf

    def test_above_threshold_keeps_candidate(self):
        strict = Recognizer(accept_threshold=-1.0)
        res = strict.recognize(raw_template(3))
        assert res.digit is None
        assert not res.matched
        assert res.candidate == 3
        assert res.score == pytest.approx(0.0, abs=1e-9)

    def test_reversed_stroke_order_changes_score(self, recognizer):
        # so khớp theo chỉ số: vẽ ngược chiều không còn là 0
        res = recognizer.recognize(list(reversed(raw_template(7))))
        assert res.digit != 7 or res.score > 0
