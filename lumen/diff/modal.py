"""Modal dialogs of the diff viewer: info, selection, key bindings and file picker."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import ClassVar, Optional, Sequence, Union

from lumen.diff.types import FileStatus

__all__ = [
    "Dismissed",
    "FilePickerItem",
    "FileSelected",
    "Key",
    "KeyBind",
    "KeyBindSection",
    "Modal",
    "ModalResult",
    "Selected",
    "fuzzy_match",
]

_MAX_PICKER_ROWS = 15


@dataclass(frozen=True)
class Key:
    """A key press: a single character or a named key, with the Ctrl flag."""

    code: str
    ctrl: bool = False

    ESC: ClassVar[str] = "Esc"
    ENTER: ClassVar[str] = "Enter"
    UP: ClassVar[str] = "Up"
    DOWN: ClassVar[str] = "Down"
    BACKSPACE: ClassVar[str] = "Backspace"

    @property
    def char(self) -> Optional[str]:
        """The typed character, or None for a named key."""
        return self.code if len(self.code) == 1 else None


@dataclass(frozen=True)
class KeyBind:
    key: str
    description: str


@dataclass(frozen=True)
class KeyBindSection:
    title: str
    bindings: Sequence[KeyBind]


@dataclass(frozen=True)
class FilePickerItem:
    name: str
    file_index: int
    status: FileStatus
    viewed: bool


@dataclass(frozen=True)
class Dismissed:
    """The modal was closed without a choice."""


@dataclass(frozen=True)
class Selected:
    """An entry of a selection modal was chosen."""

    index: int
    value: str


@dataclass(frozen=True)
class FileSelected:
    """A file was chosen in the file picker."""

    file_index: int


ModalResult = Union[Dismissed, Selected, FileSelected]


@dataclass
class _Info:
    title: str
    message: str


@dataclass
class _Select:
    title: str
    items: list[str]
    selected: int = 0


@dataclass
class _KeyBindings:
    title: str
    sections: list[KeyBindSection]


@dataclass
class _FilePicker:
    title: str
    items: list[FilePickerItem]
    filtered_indices: list[int] = field(default_factory=list)
    query: str = ""
    selected: int = 0


def _sub(a: int, b: int) -> int:
    return max(a - b, 0)


def fuzzy_match(text: str, pattern: str) -> bool:
    """Whether the characters of pattern appear in text in order."""
    remaining = iter(text)
    return all(ch in remaining for ch in pattern)


class Modal:
    """A dialog drawn over the diff view, together with its input state."""

    def __init__(self, content: Union[_Info, _Select, _KeyBindings, _FilePicker]) -> None:
        self.content = content

    @classmethod
    def info(cls, title: str, message: str) -> "Modal":
        return cls(_Info(title, message))

    @classmethod
    def select(cls, title: str, items: Sequence[str]) -> "Modal":
        return cls(_Select(title, list(items)))

    @classmethod
    def keybindings(cls, title: str, sections: Sequence[KeyBindSection]) -> "Modal":
        return cls(_KeyBindings(title, list(sections)))

    @classmethod
    def file_picker(cls, title: str, items: Sequence[FilePickerItem]) -> "Modal":
        items = list(items)
        return cls(_FilePicker(title, items, list(range(len(items)))))

    @property
    def title(self) -> str:
        return self.content.title

    def size(self, width: int, height: int) -> tuple[int, int]:
        """Width and height of the modal box on a screen of the given size."""
        cap = height * 80 // 100
        content = self.content
        if isinstance(content, _Info):
            rows = len(content.message.splitlines())
            return min(80, _sub(width, 4)), max(min(rows + 4, cap), 5)
        if isinstance(content, _Select):
            return min(80, _sub(width, 4)), max(min(len(content.items) + 4, cap), 5)
        if isinstance(content, _KeyBindings):
            rows = sum(len(s.bindings) + 2 for s in content.sections)
            return min(60, _sub(width, 4)), max(min(rows + 4, cap), 5)
        rows = min(len(content.filtered_indices), _MAX_PICKER_ROWS)
        return min(80, _sub(width, 4)), max(min(rows + 5, cap), 8)

    def render_lines(self, width: int, height: int) -> list[str]:
        """Text rows inside the modal's border on a screen of the given size."""
        modal_width, modal_height = self.size(width, height)
        inner_width = _sub(modal_width, 2)
        inner_height = _sub(modal_height, 2)
        lines = self._content_lines(inner_height)
        return [line[:inner_width] for line in lines[:inner_height]]

    def _content_lines(self, inner_height: int) -> list[str]:
        content = self.content
        if isinstance(content, _Info):
            return content.message.splitlines()
        if isinstance(content, _Select):
            return [f"  {item} " for item in content.items]
        if isinstance(content, _KeyBindings):
            key_width = max(
                (len(b.key) for s in content.sections for b in s.bindings), default=0
            )
            lines: list[str] = []
            for i, section in enumerate(content.sections):
                if i > 0:
                    lines.append("")
                lines.append(f"[{section.title}]".rjust(key_width))
                lines.extend(
                    f"{b.key.rjust(key_width)}   {b.description}" for b in section.bindings
                )
            return lines

        visible = _sub(inner_height, 2)
        offset = content.selected - visible + 1 if content.selected >= visible else 0
        rows = [f"> {content.query}_", ""]
        for idx in content.filtered_indices[offset : offset + visible]:
            item = content.items[idx]
            viewed = "✓" if item.viewed else " "
            rows.append(f" {viewed} {item.status.symbol()} {item.name}")
        return rows

    def handle_input(self, key: Key) -> Optional[ModalResult]:
        """Apply a key press; return a result when the modal should close."""
        content = self.content
        if not isinstance(content, _FilePicker):
            if key.code in (Key.ESC, "q") or (key.code == "c" and key.ctrl):
                return Dismissed()

        if isinstance(content, (_Info, _KeyBindings)):
            return Dismissed() if key.code == Key.ENTER else None

        if isinstance(content, _Select):
            if key.code in (Key.DOWN, "j"):
                if content.selected < _sub(len(content.items), 1):
                    content.selected += 1
            elif key.code in (Key.UP, "k"):
                content.selected = _sub(content.selected, 1)
            elif key.code == Key.ENTER:
                idx = content.selected
                value = content.items[idx] if idx < len(content.items) else ""
                return Selected(idx, value)
            return None

        return self._handle_picker(content, key)

    def _handle_picker(self, picker: _FilePicker, key: Key) -> Optional[ModalResult]:
        code = key.code
        if code == Key.ESC or (code == "c" and key.ctrl):
            return Dismissed()
        if code == Key.DOWN or (key.ctrl and code in ("j", "n")):
            if picker.selected < _sub(len(picker.filtered_indices), 1):
                picker.selected += 1
            return None
        if code == Key.UP or (key.ctrl and code in ("k", "p")):
            picker.selected = _sub(picker.selected, 1)
            return None
        if code == Key.ENTER:
            if picker.selected < len(picker.filtered_indices):
                item = picker.items[picker.filtered_indices[picker.selected]]
                return FileSelected(item.file_index)
            return Dismissed()
        if code == Key.BACKSPACE:
            picker.query = picker.query[:-1]
            self._refilter(picker)
            return None
        if key.char is not None:
            picker.query += key.char
            self._refilter(picker)
        return None

    @staticmethod
    def _refilter(picker: _FilePicker) -> None:
        query = picker.query.lower()
        picker.filtered_indices = [
            i for i, item in enumerate(picker.items) if fuzzy_match(item.name.lower(), query)
        ]
        if picker.selected >= len(picker.filtered_indices):
            picker.selected = _sub(len(picker.filtered_indices), 1)