"""Pydantic models and exceptions shared by the markup engine.

Every run produces one :class:`UpdateReport` holding a :class:`FileResult`
per discovered file.  Results are plain data: the engine keeps no state
between runs, so callers are free to serialise, print or discard them.
"""

from __future__ import annotations

from enum import Enum
from pathlib import Path
from typing import Optional

from pydantic import BaseModel, Field, computed_field

from .directives import DirectiveKind


# ---------------------------------------------------------------------------
# Exceptions
# ---------------------------------------------------------------------------


class MarkupError(Exception):
    """Raised for invalid caller-supplied configuration.

    Per-file problems (unreadable, unwritable or vanished files) are never
    raised; they are recorded as ``Outcome.FAILED`` results instead.
    """


# ---------------------------------------------------------------------------
# Enums
# ---------------------------------------------------------------------------


class Mode(str, Enum):
    """What a run does with the directives it finds."""

    REMOVE = "remove"
    SANITIZE = "sanitize"


class Outcome(str, Enum):
    """Per-file result of a run (or of a dry run, had it been applied)."""

    UNCHANGED = "unchanged"
    MODIFIED = "modified"
    DELETED = "deleted"
    FAILED = "failed"


# ---------------------------------------------------------------------------
# Results
# ---------------------------------------------------------------------------


class FileResult(BaseModel):
    """Outcome of processing a single file."""

    path: Path = Field(..., description="Path of the processed file")
    comments: list[DirectiveKind] = Field(
        default_factory=list,
        description="Directive kinds found in the file, in processing order",
    )
    outcome: Outcome = Field(default=Outcome.UNCHANGED)
    error: Optional[str] = Field(default=None, description="Error text for failed files")


class UpdateReport(BaseModel):
    """Aggregate result of a batch run."""

    mode: Mode = Field(default=Mode.REMOVE)
    dry_run: bool = Field(default=True)
    vocabulary: str = Field(default="@mst", description="Marker prefix used for the run")
    results: list[FileResult] = Field(default_factory=list)

    @computed_field  # type: ignore[misc]
    @property
    def changed(self) -> list[FileResult]:
        """Files that were (or would be) modified or deleted."""
        return [
            r for r in self.results
            if r.outcome in (Outcome.MODIFIED, Outcome.DELETED)
        ]

    @computed_field  # type: ignore[misc]
    @property
    def deleted(self) -> list[FileResult]:
        """Files that were (or would be) deleted."""
        return [r for r in self.results if r.outcome == Outcome.DELETED]

    @computed_field  # type: ignore[misc]
    @property
    def failed(self) -> list[FileResult]:
        """Files whose processing raised."""
        return [r for r in self.results if r.outcome == Outcome.FAILED]

    @property
    def success(self) -> bool:
        """True when no file failed."""
        return not self.failed

    def as_mapping(self) -> dict[Path, list[DirectiveKind]]:
        """Return ``{path: [kinds]}`` for every settled file that carried directives."""
        return {
            r.path: list(r.comments)
            for r in self.results
            if r.outcome != Outcome.FAILED and r.comments
        }

    def get(self, path: str | Path) -> Optional[FileResult]:
        """Look up the result for *path*, or ``None`` if it was not processed."""
        target = Path(path)
        for result in self.results:
            if result.path == target:
                return result
        return None
