"""Layout of the file sidebar of the diff viewer."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import AbstractSet, Optional, Sequence

from lumen.diff.types import DirectoryItem, FileItem, FileStatus, SidebarItem

__all__ = ["SidebarLine", "SidebarStyle", "render_sidebar"]

TITLE = " [1] Files "
_VIEWED_MARKER = "✓ "
_BLANK_MARKER = "  "
_DIRECTORY_SYMBOL = "▼"


class SidebarStyle(Enum):
    """The visual role of a sidebar row."""

    SELECTED = "selected"
    SELECTED_UNFOCUSED = "selected_unfocused"
    CURRENT = "current"
    VIEWED = "viewed"
    NORMAL = "normal"


@dataclass(frozen=True)
class SidebarLine:
    """One visible sidebar row: indentation and marker, status symbol and name."""

    prefix: str
    symbol: str
    name: str
    style: SidebarStyle
    status: Optional[FileStatus] = None

    @property
    def text(self) -> str:
        return f"{self.prefix}{self.symbol}{self.name}"

    @property
    def status_colored(self) -> bool:
        """Whether the status symbol is drawn in its own status colour."""
        selected = self.style in (SidebarStyle.SELECTED, SidebarStyle.SELECTED_UNFOCUSED)
        return self.status is not None and not selected


def _files_under(items: Sequence[SidebarItem], path: str) -> list[FileItem]:
    prefix = f"{path}/"
    return [i for i in items if isinstance(i, FileItem) and i.path.startswith(prefix)]


def render_sidebar(
    sidebar_items: Sequence[SidebarItem],
    current_file: int,
    sidebar_selected: int,
    sidebar_scroll: int,
    viewed_files: AbstractSet[int],
    is_focused: bool,
    height: int,
) -> list[SidebarLine]:
    """Lines of the sidebar visible in a bordered box of the given height."""
    lines: list[SidebarLine] = []
    for index, item in enumerate(sidebar_items):
        indent = "  " * item.depth
        status: Optional[FileStatus] = None
        if isinstance(item, DirectoryItem):
            children = _files_under(sidebar_items, item.path)
            viewed = bool(children) and all(c.file_index in viewed_files for c in children)
            symbol = _DIRECTORY_SYMBOL
            is_current = False
        else:
            viewed = item.file_index in viewed_files
            symbol = item.status.symbol()
            status = item.status
            is_current = item.file_index == current_file

        if index == sidebar_selected:
            style = SidebarStyle.SELECTED if is_focused else SidebarStyle.SELECTED_UNFOCUSED
        elif is_current:
            style = SidebarStyle.CURRENT
        elif viewed:
            style = SidebarStyle.VIEWED
        else:
            style = SidebarStyle.NORMAL

        marker = _VIEWED_MARKER if viewed else _BLANK_MARKER
        lines.append(
            SidebarLine(
                prefix=f"{indent}{marker}",
                symbol=symbol,
                name=f" {item.name}",
                style=style,
                status=status,
            )
        )

    visible_height = max(height - 2, 0)
    return lines[sidebar_scroll : sidebar_scroll + visible_height]