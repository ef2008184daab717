import pytest

from lumen.diff.scrolling import PendingKey, adjust_scroll_for_hunk, adjust_scroll_to_line

BIG = 10_000


def test_pending_key_parses_g():
    assert PendingKey("g") is PendingKey.G


def test_line_at_top_stays_at_zero():
    assert adjust_scroll_to_line(0, 0, 50, BIG) == 0


def test_line_inside_viewport_keeps_scroll():
    assert adjust_scroll_to_line(130, 100, 50, BIG) == 100


@pytest.mark.parametrize("line", [50, 99, 120, 160, 500])
def test_line_becomes_visible(line):
    visible_height = 50
    result = adjust_scroll_to_line(line, 100, visible_height, BIG)
    assert result <= line < result + visible_height - 2


@pytest.mark.parametrize("line", [15, 60, 99, 160, 500])
def test_line_adjustment_is_idempotent(line):
    first = adjust_scroll_to_line(line, 100, 50, BIG)
    assert adjust_scroll_to_line(line, first, 50, BIG) == first


@pytest.mark.parametrize("line", [0, 40, 300, 900])
def test_line_result_clamped_to_max(line):
    assert adjust_scroll_to_line(line, 100, 50, 20) <= 20


def test_line_with_no_height_scrolls_to_line():
    assert adjust_scroll_to_line(42, 0, 0, BIG) == 42


def test_hunk_inside_viewport_keeps_scroll():
    assert adjust_scroll_for_hunk(110, 100, 60, BIG) == 100


def test_hunk_inside_viewport_not_clamped():
    # An in-view hunk returns the scroll unchanged, even above max_scroll.
    assert adjust_scroll_for_hunk(110, 100, 60, 3) == 100


def test_hunk_at_top_stays_at_zero():
    assert adjust_scroll_for_hunk(0, 0, 60, BIG) == 0


@pytest.mark.parametrize("hunk_line", [10, 90, 104, 140, 700])
def test_hunk_becomes_visible(hunk_line):
    visible_height = 60
    result = adjust_scroll_for_hunk(hunk_line, 100, visible_height, BIG)
    assert result <= hunk_line < result + visible_height - 2


@pytest.mark.parametrize("hunk_line", [10, 90, 104, 140, 700])
def test_hunk_adjustment_is_idempotent(hunk_line):
    first = adjust_scroll_for_hunk(hunk_line, 100, 60, BIG)
    assert adjust_scroll_for_hunk(hunk_line, first, 60, BIG) == first


@pytest.mark.parametrize("hunk_line", [0, 50, 700])
def test_hunk_result_clamped_to_max(hunk_line):
    assert adjust_scroll_for_hunk(hunk_line, 100, 60, 20) <= 20