"""Scroll arithmetic of the diff view and pending multi-key commands."""

from __future__ import annotations

from enum import Enum

__all__ = ["PendingKey", "adjust_scroll_for_hunk", "adjust_scroll_to_line"]

_LINE_MARGIN = 10
_HUNK_TOP_MARGIN = 5
_HUNK_BOTTOM_MARGIN = 25
_BORDER_ROWS = 2


class PendingKey(Enum):
    """A key awaiting its second keystroke (``g`` of ``gg``)."""

    NONE = "none"
    G = "g"


def _sub(a: int, b: int) -> int:
    """Subtraction that stops at zero."""
    return max(a - b, 0)


def adjust_scroll_to_line(line: int, scroll: int, visible_height: int, max_scroll: int) -> int:
    """Scroll so that the line stays at least a margin away from the viewport edges."""
    content_height = _sub(visible_height, _BORDER_ROWS)
    bottom_limit = _sub(content_height, _LINE_MARGIN)

    if line < scroll + _LINE_MARGIN:
        new_scroll = _sub(line, _LINE_MARGIN)
    elif line >= scroll + bottom_limit:
        new_scroll = _sub(line, _sub(bottom_limit, 1))
    else:
        new_scroll = scroll
    return min(new_scroll, max_scroll)


def adjust_scroll_for_hunk(hunk_line: int, scroll: int, visible_height: int, max_scroll: int) -> int:
    """Scroll only if the hunk start lies outside the viewport, keeping context below it."""
    content_height = _sub(visible_height, _BORDER_ROWS)
    bottom_limit = _sub(content_height, _HUNK_BOTTOM_MARGIN)

    if hunk_line < scroll + _HUNK_TOP_MARGIN:
        return min(_sub(hunk_line, _HUNK_TOP_MARGIN), max_scroll)
    if hunk_line >= scroll + bottom_limit:
        return min(_sub(hunk_line, _sub(bottom_limit, 1)), max_scroll)
    return scroll