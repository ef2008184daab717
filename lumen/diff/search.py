"""Incremental, case-insensitive search across the panels of the diff view."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Iterator, Optional, Sequence

from lumen.diff.types import DiffFullscreen, DiffLine

__all__ = ["MatchPanel", "SearchMatch", "SearchMode", "SearchState"]


class SearchMode(Enum):
    """Whether the user is typing a search query."""

    INACTIVE = "inactive"
    INPUT_FORWARD = "input_forward"


class MatchPanel(Enum):
    """The side of the diff a match lies in."""

    OLD = "old"
    NEW = "new"


@dataclass(frozen=True)
class SearchMatch:
    """One occurrence of the query: row index and column span in a panel."""

    line_index: int
    start_col: int
    end_col: int
    panel: MatchPanel


def _occurrences(text: str, needle: str) -> Iterator[int]:
    """Start positions of all, possibly overlapping, occurrences of needle."""
    start = 0
    while True:
        pos = text.find(needle, start)
        if pos < 0:
            return
        yield pos
        start = pos + 1


@dataclass
class SearchState:
    """The query, its matches and which match is current."""

    mode: SearchMode = SearchMode.INACTIVE
    query: str = ""
    matches: list[SearchMatch] = field(default_factory=list)
    current_match: Optional[int] = None

    def start_forward(self) -> None:
        """Begin typing a new forward search."""
        self.mode = SearchMode.INPUT_FORWARD
        self.clear()

    def cancel(self) -> None:
        """Abandon the search entirely."""
        self.mode = SearchMode.INACTIVE
        self.clear()

    def clear(self) -> None:
        """Forget the query and its matches."""
        self.query = ""
        self.matches.clear()
        self.current_match = None

    def confirm(self) -> None:
        """Stop typing but keep the query and matches."""
        self.mode = SearchMode.INACTIVE

    def push_char(self, c: str) -> None:
        self.query += c

    def pop_char(self) -> None:
        self.query = self.query[:-1]

    def is_active(self) -> bool:
        return self.mode is not SearchMode.INACTIVE

    def has_query(self) -> bool:
        return bool(self.query)

    def update_matches(self, lines: Sequence[DiffLine], fullscreen: DiffFullscreen) -> None:
        """Recompute matches, keeping the current match where it still exists."""
        if not self.query:
            self.matches.clear()
            self.current_match = None
            return

        previous: Optional[SearchMatch] = None
        if self.current_match is not None and self.current_match < len(self.matches):
            previous = self.matches[self.current_match]

        query_lower = self.query.lower()
        query_len = len(self.query)
        panels = []
        if fullscreen is not DiffFullscreen.NEW_ONLY:
            panels.append((MatchPanel.OLD, lambda line: line.old_line))
        if fullscreen is not DiffFullscreen.OLD_ONLY:
            panels.append((MatchPanel.NEW, lambda line: line.new_line))

        self.matches = [
            SearchMatch(index, pos, pos + query_len, panel)
            for index, line in enumerate(lines)
            for panel, side in panels
            if side(line) is not None
            for pos in _occurrences(side(line)[1].lower(), query_lower)
        ]

        if previous is None:
            return
        try:
            self.current_match = self.matches.index(previous)
        except ValueError:
            if not self.matches:
                self.current_match = None
            else:
                self.current_match = next(
                    (i for i, m in enumerate(self.matches) if m.line_index >= previous.line_index),
                    0,
                )

    def find_next(self) -> Optional[int]:
        """Move to the next match, wrapping around; return its row index."""
        if not self.matches:
            return None
        current = 0 if self.current_match is None else self.current_match
        nxt = 0 if current + 1 >= len(self.matches) else current + 1
        self.current_match = nxt
        return self.matches[nxt].line_index

    def find_prev(self) -> Optional[int]:
        """Move to the previous match, wrapping around; return its row index."""
        if not self.matches:
            return None
        current = 0 if self.current_match is None else self.current_match
        prev = len(self.matches) - 1 if current == 0 else current - 1
        self.current_match = prev
        return self.matches[prev].line_index

    def jump_to_first_match(self, current_scroll: int) -> Optional[int]:
        """Select the first match at or below the scroll position, else the first one."""
        if not self.matches:
            return None
        idx = next(
            (i for i, m in enumerate(self.matches) if m.line_index >= current_scroll), 0
        )
        self.current_match = idx
        return self.matches[idx].line_index

    def match_count(self) -> int:
        return len(self.matches)

    def matches_for_line(
        self, line_index: int, panel: MatchPanel
    ) -> list[tuple[int, int, bool]]:
        """Column spans of matches on a row of one panel, flagging the current match."""
        return [
            (m.start_col, m.end_col, self.current_match == idx)
            for idx, m in enumerate(self.matches)
            if m.line_index == line_index and m.panel is panel
        ]