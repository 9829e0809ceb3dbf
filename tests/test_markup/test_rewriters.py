"""Unit tests for the line/block rewriters (boilerstrip.markup.rewriters).

Tests cover:
- remove_current_line as a stable filter
- remove_next_line, including consecutive markers and first-line markers
- remove_block with several blocks, unmatched and out-of-order markers
- patch_observer_block for exported, typed and plain components
- remove() composition and sanitize() idempotence
"""

from __future__ import annotations

import pytest

from boilerstrip.markup.directives import DEMO_VOCABULARY
from boilerstrip.markup.rewriters import (
    patch_observer_block,
    remove,
    remove_block,
    remove_current_line,
    remove_next_line,
    sanitize,
)

pytestmark = pytest.mark.unit

CURRENT = "// @mst remove-current-line"
NEXT = "// @mst remove-next-line"
START = "// @mst remove-block-start"
END = "// @mst remove-block-end"


def _join(*lines: str) -> str:
    return "\n".join(lines)


# ---------------------------------------------------------------------------
# remove_current_line
# ---------------------------------------------------------------------------


class TestRemoveCurrentLine:
    def test_drops_marked_lines_only(self):
        content = _join("a", f"b {CURRENT}", "", "c", f"  d {CURRENT}", "e")
        assert remove_current_line(content) == _join("a", "", "c", "e")

    def test_is_a_stable_filter(self):
        lines = [f"line-{i}" + (f" {CURRENT}" if i % 3 == 0 else "") for i in range(30)]
        result = remove_current_line(_join(*lines)).split("\n")
        assert "@mst" not in "\n".join(result)
        assert result == [line for line in lines if CURRENT not in line]

    def test_no_markers_is_identity(self):
        content = "x\n\n  y\n"
        assert remove_current_line(content) == content

    def test_preserves_crlf(self):
        content = f"a\r\nb {CURRENT}\r\nc\r\n"
        assert remove_current_line(content) == "a\r\nc\r\n"

    def test_custom_marker(self):
        assert remove_current_line("a\nb @x\n", marker="@x") == "a\n"


# ---------------------------------------------------------------------------
# remove_next_line
# ---------------------------------------------------------------------------


class TestRemoveNextLine:
    def test_drops_marker_and_follower(self):
        content = _join(f"a {NEXT}", "b", "c")
        assert remove_next_line(content).split("\n") == ["c"]

    def test_marker_in_middle(self):
        content = _join("a", NEXT, "b", "c")
        assert remove_next_line(content) == _join("a", "c")

    def test_consecutive_markers_are_cumulative(self):
        content = _join(NEXT, NEXT, "a", "b")
        assert remove_next_line(content) == "b"

    def test_marker_on_last_line(self):
        assert remove_next_line(_join("a", NEXT)) == "a"

    def test_no_markers_is_identity(self):
        content = "a\nb\n"
        assert remove_next_line(content) == content


# ---------------------------------------------------------------------------
# remove_block
# ---------------------------------------------------------------------------


class TestRemoveBlock:
    def test_single_block(self):
        content = _join("x", START, "y", END, "z")
        assert remove_block(content).split("\n") == ["x", "z"]

    def test_two_disjoint_blocks(self):
        content = _join("a", START, "b", END, "c", START, "d", "e", END, "f")
        assert remove_block(content) == _join("a", "c", "f")

    def test_many_blocks(self):
        lines: list[str] = []
        for i in range(50):
            lines += [f"keep-{i}", START, f"drop-{i}", END]
        result = remove_block(_join(*lines)).split("\n")
        assert result == [f"keep-{i}" for i in range(50)]

    def test_unmatched_start_is_inert(self):
        content = _join("a", START, "b")
        assert remove_block(content) == content

    def test_unmatched_end_is_inert(self):
        content = _join("a", END, "b")
        assert remove_block(content) == content

    def test_end_before_start_is_inert(self):
        content = _join("a", END, "b", START, "c")
        assert remove_block(content) == content

    def test_stray_end_disables_later_blocks(self):
        content = _join(END, "b", START, "c", END)
        assert remove_block(content) == content

    def test_both_markers_on_one_line(self):
        content = _join("a", f"x {START} {END}", "b")
        assert remove_block(content) == _join("a", "b")

    def test_indented_markers(self):
        content = _join("fn() {", f"  {START}", "  call()", f"  {END}", "}")
        assert remove_block(content) == _join("fn() {", "}")

    def test_pass_cap(self):
        content = _join(START, "a", END, START, "b", END, "c")
        assert remove_block(content, max_passes=1) == _join(START, "b", END, "c")


# ---------------------------------------------------------------------------
# patch_observer_block
# ---------------------------------------------------------------------------


class TestPatchObserverBlock:
    def test_exported_typed_component(self):
        content = _join(
            "// @mst observer-block-start",
            "export const Foo: React.FC<Props> = observer(function Foo(props) {",
            "  return null",
            "}) // @mst observer-block-end",
        )
        assert patch_observer_block(content) == _join(
            "export const Foo: React.FC<Props> = (props) => {",
            "  return null",
            "}",
        )

    def test_plain_component_with_destructured_props(self):
        content = _join(
            "// @mst observer-block-start",
            "const EpisodeCard = observer(function EpisodeCard({ episode }: Props) {",
            "  return <Card />",
            "}) // @mst observer-block-end",
        )
        assert patch_observer_block(content) == _join(
            "const EpisodeCard = ({ episode }: Props) => {",
            "  return <Card />",
            "}",
        )

    def test_multiple_components(self):
        block = [
            "// @mst observer-block-start",
            "export const A = observer(function A() {",
            "  return 1",
            "}) // @mst observer-block-end",
        ]
        content = _join(*block, "", *[line.replace("A", "B") for line in block])
        result = patch_observer_block(content)
        assert "observer" not in result
        assert "export const A = () => {" in result
        assert "export const B = () => {" in result
        assert result.count("\n}") == 2

    def test_requires_both_signatures(self):
        content = _join(
            "// @mst observer-block-start",
            "export const Foo = observer(function Foo() {",
            "})",
        )
        assert patch_observer_block(content) == content

    def test_untagged_observer_is_left_alone(self):
        content = _join(
            "export const Foo = observer(function Foo() {",
            "}) // @mst observer-block-end",
        )
        assert patch_observer_block(content) == content


# ---------------------------------------------------------------------------
# remove / sanitize
# ---------------------------------------------------------------------------


class TestRemove:
    def test_full_screen(self, welcome_screen: str, welcome_screen_removed: str):
        assert remove(welcome_screen) == welcome_screen_removed

    def test_no_markup_left(self, welcome_screen: str):
        assert "@mst" not in remove(welcome_screen)

    def test_demo_vocabulary(self):
        content = _join(
            "<View>",
            "  {/* @demo remove-current-line */}",
            "  // @demo remove-next-line",
            "  <DemoBanner />",
            "  <Text />",
            "</View>",
        )
        assert remove(content, DEMO_VOCABULARY) == _join("<View>", "  <Text />", "</View>")

    def test_demo_vocabulary_ignores_mst(self):
        content = f"a {CURRENT}\n"
        assert remove(content, DEMO_VOCABULARY) == content


class TestSanitize:
    def test_strips_markers_keeps_code(self, welcome_screen: str):
        result = sanitize(welcome_screen)
        assert "@mst" not in result
        assert 'import { observer } from "mobx-react-lite"' in result
        assert "const { authenticationStore } = useStores()" in result
        assert "observer(function WelcomeScreen(props) {" in result
        assert len(result.split("\n")) == len(welcome_screen.split("\n"))

    def test_strips_jsx_and_hash_comments(self):
        content = _join("# @mst remove-file", "<A />", "  {/* @mst remove-current-line */}")
        assert sanitize(content) == _join("", "<A />", "  ")

    @pytest.mark.parametrize(
        "content",
        [
            "",
            "plain\ntext\n",
            f"a {CURRENT}\n{NEXT}\nb\n{START}\nc\n{END}\n",
            "# @mst remove-file\nkey: value\n",
            "<X />\n{/* @mst remove-current-line */}\n",
            "#/ @mst x/ @mst remove-current-line",
            "a //{/* @mst x */} @mst remove-next-line\nb\n",
        ],
    )
    def test_idempotent(self, content: str):
        once = sanitize(content)
        assert sanitize(once) == once

    def test_rejoined_marker_is_stripped(self):
        assert sanitize("#/ @mst x/ @mst remove-current-line") == ""

    def test_pass_cap(self):
        content = "#/ @mst x/ @mst remove-current-line"
        assert sanitize(content, max_passes=1) == "# @mst remove-current-line"

    def test_other_vocabulary_untouched(self):
        content = "a // @demo remove-current-line\n"
        assert sanitize(content) == content
        assert sanitize(content, DEMO_VOCABULARY) == "a \n"
