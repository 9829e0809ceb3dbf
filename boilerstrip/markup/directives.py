"""Directive vocabulary and textual detection.

A directive is a single-line comment carrying a fixed marker token, e.g.::

    import { observer } from "mobx-react-lite" // @mst remove-current-line
    # @mst remove-file
    {/* @demo remove-current-line */}

Only the marker substring matters.  ``//``, ``#`` and the JSX-style
``{/* ... */}`` wrapper are all recognised but never distinguished.
"""

from __future__ import annotations

import re
from dataclasses import dataclass
from enum import Enum
from functools import lru_cache
from pathlib import Path

from pydantic import BaseModel, ConfigDict, Field


# ---------------------------------------------------------------------------
# Directive kinds
# ---------------------------------------------------------------------------


class DirectiveKind(str, Enum):
    """Closed set of directive actions.

    The value is the action suffix that follows the vocabulary prefix in a
    marker (``@mst remove-file``).
    """

    REMOVE_FILE = "remove-file"
    REMOVE_CURRENT_LINE = "remove-current-line"
    REMOVE_NEXT_LINE = "remove-next-line"
    REMOVE_BLOCK_START = "remove-block-start"
    REMOVE_BLOCK_END = "remove-block-end"
    OBSERVER_BLOCK_START = "observer-block-start"
    OBSERVER_BLOCK_END = "observer-block-end"


# Order in which line/block operations are reported for a file.
OPERATION_ORDER: tuple[DirectiveKind, ...] = (
    DirectiveKind.REMOVE_CURRENT_LINE,
    DirectiveKind.REMOVE_NEXT_LINE,
    DirectiveKind.REMOVE_BLOCK_START,
    DirectiveKind.REMOVE_BLOCK_END,
    DirectiveKind.OBSERVER_BLOCK_START,
    DirectiveKind.OBSERVER_BLOCK_END,
)

OBSERVER_KINDS = frozenset(
    {DirectiveKind.OBSERVER_BLOCK_START, DirectiveKind.OBSERVER_BLOCK_END}
)


# ---------------------------------------------------------------------------
# Vocabulary
# ---------------------------------------------------------------------------


class MarkupVocabulary(BaseModel):
    """Binds a marker prefix to the directive actions it understands."""

    model_config = ConfigDict(frozen=True)

    name: str = Field(..., description="Short name used on the command line")
    prefix: str = Field(..., pattern=r"^@\w[\w-]*$", description="Marker prefix, e.g. '@mst'")
    supports_observer: bool = Field(
        default=False,
        description="Whether observer-block rewrites belong to this vocabulary",
    )

    def marker(self, kind: DirectiveKind) -> str:
        """Return the full marker token for *kind* (``"@mst remove-file"``)."""
        return f"{self.prefix} {kind.value}"

    @property
    def kinds(self) -> tuple[DirectiveKind, ...]:
        """Directive kinds this vocabulary recognises."""
        if self.supports_observer:
            return tuple(DirectiveKind)
        return tuple(k for k in DirectiveKind if k not in OBSERVER_KINDS)

    @property
    def operations(self) -> tuple[DirectiveKind, ...]:
        """Line/block operations, in reporting order."""
        return tuple(k for k in OPERATION_ORDER if k in self.kinds)

    @property
    def pattern(self) -> re.Pattern[str]:
        """Combined pattern matching any marker comment of this vocabulary."""
        return markup_pattern(self.prefix)


MST_VOCABULARY = MarkupVocabulary(name="mst", prefix="@mst", supports_observer=True)
DEMO_VOCABULARY = MarkupVocabulary(name="demo", prefix="@demo")

VOCABULARIES: dict[str, MarkupVocabulary] = {
    MST_VOCABULARY.name: MST_VOCABULARY,
    DEMO_VOCABULARY.name: DEMO_VOCABULARY,
}


@lru_cache(maxsize=None)
def markup_pattern(prefix: str) -> re.Pattern[str]:
    """Compile the combined directive pattern for *prefix*.

    Matches ``//`` or ``#`` followed by the prefix through end of line, or a
    brace-wrapped inline comment (``{/* @mst ... */}``).  Multi-line block
    comments are not matched.
    """
    p = re.escape(prefix)
    return re.compile(rf"(//|#)\s*{p}.*|\{{?/.*{p}.*/\}}?")


# ---------------------------------------------------------------------------
# Detection
# ---------------------------------------------------------------------------


def has_markup(content: str, vocabulary: MarkupVocabulary = MST_VOCABULARY) -> bool:
    """Return True if *content* carries any marker comment of *vocabulary*."""
    return vocabulary.pattern.search(content) is not None


def has_directive(
    content: str,
    kind: DirectiveKind,
    vocabulary: MarkupVocabulary = MST_VOCABULARY,
) -> bool:
    """Return True if the marker for *kind* appears anywhere in *content*."""
    return vocabulary.marker(kind) in content


def detect(content: str, vocabulary: MarkupVocabulary = MST_VOCABULARY) -> list[DirectiveKind]:
    """Return the line/block operation kinds present in *content*.

    ``REMOVE_FILE`` is deliberately excluded; it is checked separately
    because it pre-empts every other operation.
    """
    return [k for k in vocabulary.operations if has_directive(content, k, vocabulary)]


@dataclass(frozen=True)
class DirectiveOccurrence:
    """A single directive found at a given line of a file."""

    path: Path
    line: int
    kind: DirectiveKind


def scan(
    path: Path,
    content: str,
    vocabulary: MarkupVocabulary = MST_VOCABULARY,
) -> list[DirectiveOccurrence]:
    """List every directive occurrence in *content*, top to bottom.

    Line indices are zero-based.  A line carrying two markers yields two
    occurrences.
    """
    occurrences: list[DirectiveOccurrence] = []
    for index, line in enumerate(content.split("\n")):
        if vocabulary.prefix not in line:
            continue
        for kind in vocabulary.kinds:
            if vocabulary.marker(kind) in line:
                occurrences.append(DirectiveOccurrence(path, index, kind))
    return occurrences
