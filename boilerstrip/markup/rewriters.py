"""Line and block rewriters.

Every function here is a pure ``str -> str`` transform that splits on
``"\\n"`` and rejoins with ``"\\n"``, so a file's own line endings survive
(``\\r\\n`` files keep their ``\\r``).  Nothing is parsed; the passes rely on
marker substrings and regular expressions only.

The passes are composable and are applied by :func:`remove` in a fixed
order: current line, next line, blocks, then the observer rewrite.
"""

from __future__ import annotations

import re
from functools import lru_cache

from .directives import DirectiveKind, MST_VOCABULARY, MarkupVocabulary

# Hard cap on fixed-point iterations for the block and observer passes.
MAX_PASSES = 1000


# ---------------------------------------------------------------------------
# Single-line passes
# ---------------------------------------------------------------------------


def remove_current_line(
    content: str,
    marker: str = MST_VOCABULARY.marker(DirectiveKind.REMOVE_CURRENT_LINE),
) -> str:
    """Drop every line that contains *marker*."""
    lines = content.split("\n")
    return "\n".join(line for line in lines if marker not in line)


def remove_next_line(
    content: str,
    marker: str = MST_VOCABULARY.marker(DirectiveKind.REMOVE_NEXT_LINE),
) -> str:
    """Drop every line containing *marker* together with the line after it.

    Two consecutive marker lines each take out their follower, so
    ``[m, m, a, b]`` becomes ``[b]``.
    """
    lines = content.split("\n")
    kept: list[str] = []
    for index, line in enumerate(lines):
        if marker in line:
            continue
        if index > 0 and marker in lines[index - 1]:
            continue
        kept.append(line)
    return "\n".join(kept)


# ---------------------------------------------------------------------------
# Block pass
# ---------------------------------------------------------------------------


def _first_index(lines: list[str], marker: str) -> int:
    for index, line in enumerate(lines):
        if marker in line:
            return index
    return -1


def remove_block(
    content: str,
    start: str = MST_VOCABULARY.marker(DirectiveKind.REMOVE_BLOCK_START),
    end: str = MST_VOCABULARY.marker(DirectiveKind.REMOVE_BLOCK_END),
    *,
    max_passes: int = MAX_PASSES,
) -> str:
    """Delete every ``start`` .. ``end`` range, markers included.

    Each pass pairs the first start line with the first end line, both
    searched from the top, and splices out the inclusive range.  Passes
    repeat until no complete pair is left.  Blocks must not nest.  An end
    that precedes its start leaves the content untouched, as does an
    unmatched start or end.  A stray end marker above the first start
    therefore also disables every later, well-formed block in the file.
    """
    lines = content.split("\n")
    for _ in range(max_passes):
        first = _first_index(lines, start)
        last = _first_index(lines, end)
        if first == -1 or last == -1 or last < first:
            break
        del lines[first:last + 1]
    return "\n".join(lines)


# ---------------------------------------------------------------------------
# Observer rewrite
# ---------------------------------------------------------------------------


@lru_cache(maxsize=None)
def _observer_patterns(prefix: str) -> tuple[re.Pattern[str], re.Pattern[str]]:
    start_marker = re.escape(f"{prefix} {DirectiveKind.OBSERVER_BLOCK_START.value}")
    end_marker = re.escape(f"{prefix} {DirectiveKind.OBSERVER_BLOCK_END.value}")
    start = re.compile(
        rf"//\s*{start_marker}\r?\n"
        r"(export\s+)?const\s+(\w+)(:\s*[\w<>,.\[\]|\s]*?)?\s*=\s*"
        r"observer\(function\s+(\w+)(\([^)]*\))"
    )
    end = re.compile(rf"\}}\)\s*//\s*{end_marker}")
    return start, end


def patch_observer_block(
    content: str,
    prefix: str = MST_VOCABULARY.prefix,
    *,
    max_passes: int = MAX_PASSES,
) -> str:
    """Unwrap ``observer(function Name(...) { ... })`` components.

    Rewrites::

        // @mst observer-block-start
        export const Foo: FC<Props> = observer(function Foo(props) {
          ...
        }) // @mst observer-block-end

    into::

        export const Foo: FC<Props> = (props) => {
          ...
        }

    The export keyword, binding name and type annotation are kept; the
    inner function name is dropped.  Nothing happens unless both a start
    and an end signature are present.  The body must not itself contain a
    line matching the end signature.
    """
    start, end = _observer_patterns(prefix)

    def _has_block(value: str) -> bool:
        return bool(start.search(value) and end.search(value))

    for _ in range(max_passes):
        if not _has_block(content):
            break
        content = start.sub(r"\1const \2\3 = \5 =>", content)
        content = end.sub("}", content)
    return content


# ---------------------------------------------------------------------------
# Composite passes
# ---------------------------------------------------------------------------


def remove(
    content: str,
    vocabulary: MarkupVocabulary = MST_VOCABULARY,
    *,
    max_passes: int = MAX_PASSES,
) -> str:
    """Apply every remove operation of *vocabulary* to *content*."""
    result = remove_current_line(content, vocabulary.marker(DirectiveKind.REMOVE_CURRENT_LINE))
    result = remove_next_line(result, vocabulary.marker(DirectiveKind.REMOVE_NEXT_LINE))
    result = remove_block(
        result,
        vocabulary.marker(DirectiveKind.REMOVE_BLOCK_START),
        vocabulary.marker(DirectiveKind.REMOVE_BLOCK_END),
        max_passes=max_passes,
    )
    if vocabulary.supports_observer:
        result = patch_observer_block(result, vocabulary.prefix, max_passes=max_passes)
    return result


def sanitize(
    content: str,
    vocabulary: MarkupVocabulary = MST_VOCABULARY,
    *,
    max_passes: int = MAX_PASSES,
) -> str:
    """Strip every marker comment of *vocabulary*, keeping the code it annotates.

    Removing an inline ``{/* ... */}`` comment can join its neighbours into
    a new ``//`` or ``#`` marker, so passes repeat until nothing matches.
    """
    for _ in range(max_passes):
        content, count = vocabulary.pattern.subn("", content)
        if not count:
            break
    return content
