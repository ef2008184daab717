# lumen

A library of git helpers for the terminal:

- `lumen.commit_reference` parses commit references (`HEAD`, a SHA,
  `main..feature`, `main...feature`) into typed values.
- `lumen.operate` reads a shell command proposed in an AI reply and runs it
  after the user confirms.
- `lumen.diff` holds the pieces of a side-by-side diff viewer: the sidebar file
  tree, search across the old and new panels, sticky scope lines, scroll
  arithmetic, modal dialogs with a fuzzy file picker, and a file-system watcher.

## Requirements

Python 3.10 or later. `watchdog` is used by `lumen.diff.watcher`.

## Commit references

`parse_reference` returns a `Single`, a `Range` or a `TripleDots`. An empty
side of a range means `HEAD`; an empty string raises `ReferenceParseError`
(a `ValueError`).

```python
from lumen.commit_reference import Range, Single, TripleDots, parse_reference

assert parse_reference("HEAD") == Single("HEAD")
assert parse_reference("develop..") == Range("develop", "HEAD")
assert parse_reference("main...feature") == TripleDots("main", "feature")
```

## Operate replies

`extract_operate_response` parses an XML reply and returns an `OperateResult`
with `command`, `explanation` and an optional `warning` (an empty warning is
treated as absent). A missing `<command>` or `<explanation>`, or malformed XML,
raises `ExtractError`, whose `field` names what failed.

```python
from lumen.operate import extract_operate_response

result = extract_operate_response(
    "<response><command>git status</command>"
    "<explanation>Shows the working tree status</explanation></response>"
)
assert result.command == "git status"
assert result.warning is None
```

`process_operation(result)` prints the explanation and any warning, asks
`[y/N]` on standard input, and on `y` runs the command with `sh -c` (`cmd /C`
on Windows), passing its output through and reporting a non-zero exit code.

## Diff viewer pieces

### Files and the sidebar tree

`lumen.diff.types` defines `FileDiff`, `FileStatus` (`ADDED`, `MODIFIED`,
`DELETED`, each with a one-letter `symbol()`), `DiffLine`, `ChangeType`,
`FocusedPanel`, `DiffFullscreen` and `expand_tabs`. `build_file_tree` sorts
the files by path and yields `DirectoryItem` and `FileItem` rows, collapsing
chains of directories that hold a single sub-directory:

```python
from lumen.diff.types import FileDiff, FileStatus, build_file_tree

diffs = [
    FileDiff("src/command/diff/types.rs", "", "x", FileStatus.ADDED),
    FileDiff("src/command/diff/search.rs", "a", "b", FileStatus.MODIFIED),
]
names = [item.name for item in build_file_tree(diffs)]
assert names == ["src/command/diff", "search.rs", "types.rs"]
```

`lumen.diff.sidebar.render_sidebar` turns those rows into the `SidebarLine`
values visible in a bordered box of a given height, each with its
indentation, a `✓` marker for viewed files (and for directories whose files
are all viewed), the status symbol and a `SidebarStyle`.

### Search

`SearchState` keeps a query and finds every case-insensitive, possibly
overlapping, occurrence in the old and new panels of a list of `DiffLine`s,
honouring `DiffFullscreen`. `find_next` and `find_prev` wrap around;
`update_matches` keeps the current match when it still exists.

```python
from lumen.diff.search import SearchState
from lumen.diff.types import ChangeType, DiffFullscreen, DiffLine

lines = [DiffLine((1, "Hello hello"), (1, "hello world"), ChangeType.MODIFIED)]
state = SearchState()
state.start_forward()
for ch in "hello":
    state.push_char(ch)
state.update_matches(lines, DiffFullscreen.NONE)
assert state.match_count() == 3
```

### Sticky lines and scrolling

`compute_sticky_lines` returns the block openers (functions, types, control
flow, modules, multi-line signatures) still open above a scroll position,
outermost first, limited by `StickyLinesConfig.max_lines`.

```python
from lumen.diff.sticky_lines import StickyLinesConfig, compute_sticky_lines

lines = [(1, "fn main() {"), (2, "    let x = 1;"), (3, "    let y = 2;"), (4, "}")]
sticky = compute_sticky_lines(lines, 2, StickyLinesConfig())
assert [s.content for s in sticky] == ["fn main() {"]
```

`lumen.diff.scrolling` provides `adjust_scroll_to_line` and
`adjust_scroll_for_hunk`, which keep a line or hunk start inside the viewport
with margins, and `PendingKey` for two-key commands such as `gg`.

### Modals

`Modal.info`, `Modal.select`, `Modal.keybindings` and `Modal.file_picker`
build dialogs. `size` gives the box size on a screen, `render_lines` the text
rows inside it, and `handle_input` applies a `Key` and returns `Dismissed`,
`Selected` or `FileSelected` when the dialog closes. The file picker filters
its items with `fuzzy_match` as the user types.

```python
from lumen.diff.modal import FilePickerItem, FileSelected, Key, Modal, fuzzy_match
from lumen.diff.types import FileStatus

assert fuzzy_match("src/command/diff/types.rs", "cdt")

picker = Modal.file_picker("Files", [
    FilePickerItem("README.md", 0, FileStatus.MODIFIED, False),
    FilePickerItem("src/types.rs", 1, FileStatus.ADDED, True),
])
picker.handle_input(Key("t"))
picker.handle_input(Key("y"))
assert picker.handle_input(Key(Key.ENTER)) == FileSelected(1)
```

### Watching the working tree

`setup_watcher()` watches the current directory recursively and returns a
`queue.Queue` of `WatchEvent`s, each holding the changed paths relative to the
working directory once they have been quiet for half a second; it returns
`None` if the watcher cannot start. `normalize_path` does the path
relativisation.

## What it does not do

There is no command-line program: no sub-commands, no argument parsing and no
entry point. It does not read configuration files, choose or call an AI
provider, or pick commits with a fuzzy finder. The diff pieces do not compute
diffs from file contents (the `DiffLine` rows must be supplied), do not draw
to the terminal and carry no colour themes: the sidebar and modals produce
plain text rows and style roles only.

## Running the tests

Install the `test` extra and run `pytest` from the project directory.