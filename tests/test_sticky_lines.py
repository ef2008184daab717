from lumen.diff.sticky_lines import StickyLine, StickyLinesConfig, compute_sticky_lines


def numbered(*contents):
    return [(i + 1, text) for i, text in enumerate(contents)]


def test_empty_lines():
    assert compute_sticky_lines([], 0, StickyLinesConfig()) == []


def test_basic_function_scope():
    lines = numbered(
        "fn main() {",
        "    let x = 1;",
        "    let y = 2;",
        '    println!("hello");',
        "}",
    )
    sticky = compute_sticky_lines(lines, 3, StickyLinesConfig())
    assert len(sticky) == 1
    assert sticky[0].content == "fn main() {"
    assert sticky[0] == StickyLine(line_number=1, content="fn main() {", indentation=0)


def test_nested_scopes():
    lines = numbered(
        "impl Foo {",
        "    fn bar() {",
        "        if true {",
        "            let x = 1;",
        "        }",
        "    }",
        "}",
    )
    sticky = compute_sticky_lines(lines, 3, StickyLinesConfig())
    assert [s.content for s in sticky] == [
        "impl Foo {",
        "    fn bar() {",
        "        if true {",
    ]


def test_closed_block_not_shown():
    lines = numbered(
        "fn main() {",
        "    if true {",
        "        let x = 1;",
        "    }",
        "    let y = 2;",
        "}",
    )
    sticky = compute_sticky_lines(lines, 4, StickyLinesConfig())
    assert len(sticky) == 1
    assert sticky[0].content == "fn main() {"


def test_multiline_function_definition():
    lines = numbered(
        "class MyClass {",
        "    private async syncFilesFromGitPayload(",
        "        payload: VMPayloadWithGit,",
        "        env: string | undefined,",
        "        options?: { skipSyncAndRuntime?: boolean },",
        "    ): Promise<Map<string, Buffer>> {",
        "        const { git } = payload;",
        "        return new Map();",
        "    }",
        "}",
    )
    sticky = compute_sticky_lines(lines, 6, StickyLinesConfig())
    assert len(sticky) == 2
    assert sticky[0].content == "class MyClass {"
    assert sticky[1].content == "    private async syncFilesFromGitPayload("
    assert sticky[1].line_number == 2


def test_disabled_config_returns_nothing():
    lines = numbered("fn main() {", "    let x = 1;", "    let y = 2;")
    config = StickyLinesConfig(enabled=False)
    assert compute_sticky_lines(lines, 2, config) == []


def test_scroll_at_top_returns_nothing():
    lines = numbered("fn main() {", "    let x = 1;")
    assert compute_sticky_lines(lines, 0, StickyLinesConfig()) == []


def test_max_lines_keeps_outermost():
    lines = numbered(
        "impl Foo {",
        "    fn bar() {",
        "        if true {",
        "            let x = 1;",
    )
    sticky = compute_sticky_lines(lines, 3, StickyLinesConfig(max_lines=2))
    assert [s.content for s in sticky] == ["impl Foo {", "    fn bar() {"]


def test_python_def_is_opener():
    lines = numbered("def run(self):", "    value = 1", "    return value")
    sticky = compute_sticky_lines(lines, 2, StickyLinesConfig())
    assert [s.content for s in sticky] == ["def run(self):"]


def test_comment_is_not_opener():
    lines = numbered("// fn fake() {", "    let x = 1;", "    let y = 2;")
    assert compute_sticky_lines(lines, 2, StickyLinesConfig()) == []


def test_tab_indentation_is_measured():
    lines = numbered("fn main() {", "\tif ready {", "\t\tgo();")
    sticky = compute_sticky_lines(lines, 2, StickyLinesConfig())
    assert [s.indentation for s in sticky] == [0, 4]