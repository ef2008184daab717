"""Pieces of a side-by-side diff viewer: file tree, search, sticky lines, scrolling, modals, watcher."""

__all__ = [
    "types",
    "search",
    "sidebar",
    "sticky_lines",
    "scrolling",
    "modal",
    "watcher",
]