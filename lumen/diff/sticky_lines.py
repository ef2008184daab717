"""Sticky scope headers: the enclosing block openers of the first visible line."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Optional, Sequence, Tuple

__all__ = ["StickyLine", "StickyLinesConfig", "compute_sticky_lines"]

_FUNCTION_MARKERS = ("fn ", "func ", "function ", "def ")
_FUNCTION_PREFIXES = ("pub fn ", "async fn ", "pub async fn ")
_TYPE_MARKERS = ("impl ", "struct ", "enum ", "trait ", "class ", "interface ")
_TYPE_PREFIXES = ("pub struct ", "pub enum ", "pub trait ")
_CONTROL_PREFIXES = (
    "if ",
    "} else if ",
    "else if ",
    "for ",
    "while ",
    "loop ",
    "match ",
    "switch ",
    "try ",
    "catch ",
    "finally ",
)
_MODULE_PREFIXES = ("mod ", "pub mod ", "namespace ", "module ")
_METHOD_MODIFIERS = ("private ", "public ", "protected ", "static ", "async ")


@dataclass(frozen=True)
class StickyLinesConfig:
    """Whether sticky lines are shown and how many at most."""

    enabled: bool = True
    max_lines: int = 5


@dataclass(frozen=True)
class StickyLine:
    """A block opener kept visible, with its line number and indentation."""

    line_number: int
    content: str
    indentation: int


def _indentation(line: str) -> int:
    """Leading whitespace width: a space counts 1, a tab counts 4."""
    indent = 0
    for ch in line:
        if ch == " ":
            indent += 1
        elif ch == "\t":
            indent += 4
        else:
            break
    return indent


def _contains_any(text: str, needles: Sequence[str]) -> bool:
    return any(needle in text for needle in needles)


def _is_block_opener(line: str) -> bool:
    """Whether the line opens a function, type, control-flow or module block."""
    trimmed = line.strip()
    if not trimmed:
        return False
    if trimmed.startswith(("//", "#", "/*")):
        return False
    if not trimmed.endswith(("{", ":")):
        return False
    if trimmed in ("{", ":{"):
        return False

    lower = trimmed.lower()
    if _contains_any(lower, _FUNCTION_MARKERS) or lower.startswith(_FUNCTION_PREFIXES):
        return True
    if _contains_any(lower, _TYPE_MARKERS) or lower.startswith(_TYPE_PREFIXES):
        return True
    if lower.startswith(_CONTROL_PREFIXES) or lower == "else {":
        return True
    if lower.startswith(_MODULE_PREFIXES):
        return True
    return ("|" in lower and lower.endswith("{")) or "=> {" in lower or "-> {" in lower


def _is_multiline_fn_start(line: str) -> bool:
    """Whether the line begins a function signature whose parameters continue below."""
    trimmed = line.strip()
    if not trimmed or not trimmed.endswith("("):
        return False

    lower = trimmed.lower()
    if "fn " in lower or lower.startswith(_FUNCTION_PREFIXES):
        return True
    if "function " in lower or "function(" in lower:
        return True
    if _contains_any(lower, _METHOD_MODIFIERS):
        return True
    return lower.startswith("def ") or " def " in lower


def _is_multiline_fn_end(line: str) -> bool:
    """Whether the line closes a multi-line signature and opens its body."""
    trimmed = line.strip()
    if not trimmed.endswith("{"):
        return False
    return (
        trimmed.startswith(")")
        or ") {" in trimmed
        or "): " in trimmed
        or ") =>" in trimmed
    )


def compute_sticky_lines(
    lines: Sequence[Tuple[int, str]],
    scroll_position: int,
    config: StickyLinesConfig,
) -> list[StickyLine]:
    """Block openers still open at the scroll position, outermost first."""
    if not config.enabled or not lines or scroll_position == 0:
        return []

    open_blocks: list[StickyLine] = []
    pending_fn: Optional[StickyLine] = None

    for line_number, content in lines[:scroll_position]:
        indent = _indentation(content)
        close_braces = content.count("}")
        opener = StickyLine(line_number, content, indent)
        fn_end = _is_multiline_fn_end(content)

        if _is_multiline_fn_start(content):
            pending_fn = opener
        elif fn_end:
            open_blocks.append(pending_fn if pending_fn is not None else opener)
            pending_fn = None
        elif _is_block_opener(content):
            pending_fn = None
            open_blocks.append(opener)

        if close_braces > 0 and not fn_end:
            while (
                open_blocks
                and indent <= open_blocks[-1].indentation
                and not _is_block_opener(content)
            ):
                open_blocks.pop()

    current_indent = (
        _indentation(lines[scroll_position][1]) if scroll_position < len(lines) else 0
    )
    sticky = [
        block
        for block in open_blocks
        if block.indentation < current_indent or current_indent == 0
    ]
    return sticky[: config.max_lines]