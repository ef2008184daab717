"""Core data types of the diff viewer and the sidebar file tree."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Optional, Sequence, Tuple, Union

__all__ = [
    "ChangeType",
    "DiffFullscreen",
    "DiffLine",
    "DirectoryItem",
    "FileDiff",
    "FileItem",
    "FileStatus",
    "FocusedPanel",
    "SidebarItem",
    "build_file_tree",
    "expand_tabs",
]


def expand_tabs(s: str, tab_width: int) -> str:
    """Replace tabs with spaces up to the next tab stop; a width of 0 drops tabs."""
    if tab_width == 0:
        return s.replace("\t", "")
    pieces: list[str] = []
    col = 0
    for ch in s:
        if ch == "\t":
            spaces = tab_width - (col % tab_width)
            pieces.append(" " * spaces)
            col += spaces
        else:
            pieces.append(ch)
            col += 1
    return "".join(pieces)


class FileStatus(Enum):
    """How a file changed."""

    ADDED = "A"
    MODIFIED = "M"
    DELETED = "D"

    def symbol(self) -> str:
        """The one-letter marker shown next to the file."""
        return self.value


@dataclass
class FileDiff:
    """Old and new contents of one changed file."""

    filename: str
    old_content: str
    new_content: str
    status: FileStatus


class ChangeType(Enum):
    """Kind of a row in the side-by-side view."""

    EQUAL = "equal"
    DELETE = "delete"
    INSERT = "insert"
    MODIFIED = "modified"  # a paired delete and insert shown on the same row


@dataclass
class DiffLine:
    """One row of the side-by-side view: optional (line number, text) on each side."""

    old_line: Optional[Tuple[int, str]]
    new_line: Optional[Tuple[int, str]]
    change_type: ChangeType


class FocusedPanel(Enum):
    """Which panel receives keyboard input; the diff view by default."""

    SIDEBAR = "sidebar"
    DIFF_VIEW = "diff_view"


class DiffFullscreen(Enum):
    """Whether one side of the diff fills the whole view."""

    NONE = "none"
    OLD_ONLY = "old_only"
    NEW_ONLY = "new_only"


@dataclass(frozen=True)
class DirectoryItem:
    """A (possibly collapsed) directory row of the sidebar."""

    name: str
    path: str
    depth: int


@dataclass(frozen=True)
class FileItem:
    """A file row of the sidebar."""

    name: str
    path: str
    file_index: int
    depth: int
    status: FileStatus


SidebarItem = Union[DirectoryItem, FileItem]


def build_file_tree(file_diffs: Sequence[FileDiff]) -> list[SidebarItem]:
    """Build sidebar rows for the files, collapsing chains of single-child directories."""
    if not file_diffs:
        return []

    entries = sorted(
        ((diff.filename, idx, diff.status) for idx, diff in enumerate(file_diffs)),
        key=lambda entry: entry[0],
    )

    dir_children: dict[str, set[str]] = {"": set()}
    for path, _, _ in entries:
        parts = path.split("/")
        dir_children.setdefault("/".join(parts[:-1]), set()).add(path)
        for i in range(len(parts) - 1):
            dir_path = "/".join(parts[: i + 1])
            parent_path = "/".join(parts[:i])
            dir_children.setdefault(dir_path, set())
            dir_children.setdefault(parent_path, set()).add(dir_path)

    file_paths = {path for path, _, _ in entries}

    def collapse(dir_path: str) -> str:
        current = dir_path
        while True:
            children = dir_children.get(current)
            if children is not None and len(children) == 1:
                (child,) = children
                if child not in file_paths:
                    current = child
                    continue
            return current

    items: list[SidebarItem] = []
    added_dirs: set[str] = set()
    path_to_collapsed: dict[str, str] = {}
    collapsed_depth: dict[str, int] = {}

    def depth_below(parent_dir: str) -> int:
        parent_collapsed = path_to_collapsed.get(parent_dir)
        if parent_collapsed is None:
            return 0
        depth = collapsed_depth.get(parent_collapsed)
        return 0 if depth is None else depth + 1

    for path, file_index, status in entries:
        parts = path.split("/")

        i = 0
        while i < len(parts) - 1:
            collapsed = collapse("/".join(parts[: i + 1]))
            collapsed_parts = collapsed.split("/")

            if collapsed not in added_dirs:
                added_dirs.add(collapsed)
                for j in range(1, len(collapsed_parts) + 1):
                    path_to_collapsed.setdefault("/".join(collapsed_parts[:j]), collapsed)

                if i == 0:
                    depth = 0
                    display_name = collapsed
                else:
                    parent_dir = "/".join(parts[:i])
                    depth = depth_below(parent_dir)
                    parent_collapsed = path_to_collapsed.get(parent_dir)
                    display_name = collapsed
                    if parent_collapsed is not None:
                        prefix = f"{parent_collapsed}/"
                        if collapsed.startswith(prefix):
                            display_name = collapsed[len(prefix):]

                collapsed_depth[collapsed] = depth
                items.append(DirectoryItem(name=display_name, path=collapsed, depth=depth))

            i = len(collapsed_parts)

        file_depth = depth_below("/".join(parts[:-1])) if len(parts) > 1 else 0
        items.append(
            FileItem(
                name=parts[-1],
                path=path,
                file_index=file_index,
                depth=file_depth,
                status=status,
            )
        )

    return items