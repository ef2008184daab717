from lumen.diff.sidebar import SidebarStyle, render_sidebar
from lumen.diff.types import FileDiff, FileItem, FileStatus, build_file_tree

DIFFS = [
    FileDiff("src/a.rs", "x", "y", FileStatus.MODIFIED),
    FileDiff("src/b.rs", "", "y", FileStatus.ADDED),
    FileDiff("README.md", "x", "", FileStatus.DELETED),
]
ITEMS = build_file_tree(DIFFS)


def _index_of(path):
    return next(i for i, item in enumerate(ITEMS) if item.path == path)


def _render(**overrides):
    args = dict(
        sidebar_items=ITEMS,
        current_file=-1,
        sidebar_selected=-1,
        sidebar_scroll=0,
        viewed_files=set(),
        is_focused=True,
        height=len(ITEMS) + 2,
    )
    args.update(overrides)
    return render_sidebar(**args)


def test_every_item_is_rendered_with_its_name():
    lines = _render()
    assert len(lines) == len(ITEMS)
    for line, item in zip(lines, ITEMS):
        assert line.name == f" {item.name}"
        assert line.text.endswith(item.name)


def test_file_rows_show_status_symbol_and_directory_arrow():
    lines = _render()
    for line, item in zip(lines, ITEMS):
        if isinstance(item, FileItem):
            assert line.symbol == item.status.symbol()
            assert line.status is item.status
            assert line.status_colored
        else:
            assert line.symbol == "▼"
            assert not line.status_colored


def test_viewed_file_gets_marker():
    a = DIFFS.index(DIFFS[0])
    lines = _render(viewed_files={a})
    row = lines[_index_of("src/a.rs")]
    assert "✓ " in row.prefix
    assert row.style is SidebarStyle.VIEWED
    assert "✓ " not in lines[_index_of("src")].prefix


def test_directory_marked_when_all_children_viewed():
    lines = _render(viewed_files={0, 1})
    row = lines[_index_of("src")]
    assert row.prefix.endswith("✓ ")
    assert row.style is SidebarStyle.VIEWED


def test_indentation_follows_depth():
    lines = _render()
    for line, item in zip(lines, ITEMS):
        assert line.prefix == "  " * item.depth + "  "


def test_selection_and_focus():
    sel = _index_of("src/b.rs")
    focused = _render(sidebar_selected=sel)[sel]
    unfocused = _render(sidebar_selected=sel, is_focused=False)[sel]
    assert focused.style is SidebarStyle.SELECTED
    assert unfocused.style is SidebarStyle.SELECTED_UNFOCUSED
    assert not focused.status_colored


def test_current_file_highlight_beats_viewed():
    row_index = _index_of("README.md")
    file_index = ITEMS[row_index].file_index
    lines = _render(current_file=file_index, viewed_files={file_index})
    assert lines[row_index].style is SidebarStyle.CURRENT


def test_scroll_and_height_limit_visible_rows():
    lines = _render(sidebar_scroll=1, height=4)
    assert len(lines) == 2
    assert [line.name for line in lines] == [f" {item.name}" for item in ITEMS[1:3]]


def test_tiny_height_shows_nothing():
    assert _render(height=1) == []