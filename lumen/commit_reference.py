"""Parsing of commit references such as ``HEAD``, ``main..feature`` or ``a...b``."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Union

__all__ = [
    "CommitReference",
    "Range",
    "ReferenceParseError",
    "Single",
    "TripleDots",
    "parse_reference",
]

_DEFAULT_SIDE = "HEAD"


class ReferenceParseError(ValueError):
    """Raised when a commit reference string cannot be parsed."""

    def __init__(self, message: str = "empty reference string") -> None:
        super().__init__(message)


@dataclass(frozen=True)
class Single:
    """A single commit, e.g. a SHA or ``HEAD``."""

    ref: str


@dataclass(frozen=True)
class Range:
    """A two-dot range ``from..to``."""

    from_: str
    to: str


@dataclass(frozen=True)
class TripleDots:
    """A three-dot (symmetric difference) range ``from...to``."""

    from_: str
    to: str


CommitReference = Union[Single, Range, TripleDots]


def parse_reference(s: str) -> CommitReference:
    """Parse a commit reference; an empty side of a range defaults to HEAD."""
    if not s:
        raise ReferenceParseError()

    if "..." in s:
        start, _, end = s.partition("...")
        return TripleDots(start or _DEFAULT_SIDE, end or _DEFAULT_SIDE)
    if ".." in s:
        start, _, end = s.partition("..")
        return Range(start or _DEFAULT_SIDE, end or _DEFAULT_SIDE)
    return Single(s)