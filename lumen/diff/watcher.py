"""Watching the working tree for changes, with debouncing."""

from __future__ import annotations

import os
import queue
import threading
import time
from dataclasses import dataclass, field
from pathlib import Path, PurePath
from typing import Callable, Optional, Union

from watchdog.events import FileSystemEvent, FileSystemEventHandler
from watchdog.observers import Observer

__all__ = ["WatchEvent", "normalize_path", "setup_watcher"]

_DEBOUNCE_SECONDS = 0.5
_IGNORED_EVENT_TYPES = frozenset({"opened", "closed_no_write"})


@dataclass(frozen=True)
class WatchEvent:
    """Paths, relative to the working directory, that changed."""

    changed_files: frozenset[str] = field(default_factory=frozenset)


def normalize_path(
    path: Union[str, os.PathLike], cwd: Optional[Union[str, os.PathLike]]
) -> str:
    """Make a path relative to cwd when it lies inside it, and drop a leading './'."""
    text = os.fspath(path)
    if cwd is not None:
        try:
            relative = PurePath(text).relative_to(cwd)
        except ValueError:
            pass
        else:
            text = "" if relative == PurePath(".") else str(relative)
    return text[2:] if text.startswith("./") else text


class _Debouncer:
    """Collects changed paths and emits those that have been quiet for the timeout."""

    def __init__(
        self,
        timeout: float,
        emit: Callable[[WatchEvent], None],
        clock: Callable[[], float] = time.monotonic,
    ) -> None:
        self._timeout = timeout
        self._emit = emit
        self._clock = clock
        self._pending: dict[str, float] = {}
        self._lock = threading.Lock()

    def record(self, path: str) -> None:
        with self._lock:
            self._pending[path] = self._clock()

    def flush(self) -> None:
        now = self._clock()
        with self._lock:
            ready = frozenset(
                p for p, t in self._pending.items() if now - t >= self._timeout
            )
            for p in ready:
                del self._pending[p]
        if ready:
            self._emit(WatchEvent(ready))

    def run(self, stop: threading.Event) -> None:
        while not stop.wait(self._timeout / 4):
            self.flush()


class _Handler(FileSystemEventHandler):
    def __init__(self, debouncer: _Debouncer, cwd: Optional[Path]) -> None:
        super().__init__()
        self._debouncer = debouncer
        self._cwd = cwd

    def on_any_event(self, event: FileSystemEvent) -> None:
        if event.event_type in _IGNORED_EVENT_TYPES:
            return
        for raw in (event.src_path, getattr(event, "dest_path", "")):
            if raw:
                self._debouncer.record(normalize_path(os.fsdecode(raw), self._cwd))


def setup_watcher() -> Optional["queue.Queue[WatchEvent]"]:
    """Watch the current directory recursively; return a queue of change events.

    Returns None if the watcher cannot be started.
    """
    events: "queue.Queue[WatchEvent]" = queue.Queue()
    try:
        cwd: Optional[Path] = Path.cwd()
    except OSError:
        cwd = None

    debouncer = _Debouncer(_DEBOUNCE_SECONDS, events.put)
    observer = Observer()
    observer.daemon = True
    try:
        observer.schedule(_Handler(debouncer, cwd), ".", recursive=True)
        observer.start()
    except OSError:
        return None

    stop = threading.Event()
    threading.Thread(target=debouncer.run, args=(stop,), daemon=True).start()
    return events