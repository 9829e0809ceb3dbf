"""Markup-driven conditional source transformation.

Template files carry single-line directive comments (``// @mst
remove-current-line`` and friends).  This package finds those files,
detects the directives and rewrites or deletes the files so that a
generated project keeps or drops an optional subsystem.

Quick usage::

    from boilerstrip.markup import MarkupProcessor, Mode, find_files

    paths = find_files("/tmp/MyApp")
    report = await MarkupProcessor().update(paths, mode=Mode.REMOVE, dry_run=False)
"""

from .dependencies import MST_DEPENDENCIES, prune_dependencies
from .directives import (
    DEMO_VOCABULARY,
    MST_VOCABULARY,
    VOCABULARIES,
    DirectiveKind,
    DirectiveOccurrence,
    MarkupVocabulary,
    detect,
    has_markup,
    scan,
)
from .discovery import DEFAULT_MATCHING_GLOBS, find_files
from .models import FileResult, MarkupError, Mode, Outcome, UpdateReport
from .processor import MarkupProcessor
from .rewriters import (
    patch_observer_block,
    remove,
    remove_block,
    remove_current_line,
    remove_next_line,
    sanitize,
)

__all__ = [
    "DEFAULT_MATCHING_GLOBS",
    "DEMO_VOCABULARY",
    "DirectiveKind",
    "DirectiveOccurrence",
    "FileResult",
    "MST_DEPENDENCIES",
    "MST_VOCABULARY",
    "MarkupError",
    "MarkupProcessor",
    "MarkupVocabulary",
    "Mode",
    "Outcome",
    "UpdateReport",
    "VOCABULARIES",
    "detect",
    "find_files",
    "has_markup",
    "patch_observer_block",
    "prune_dependencies",
    "remove",
    "remove_block",
    "remove_current_line",
    "remove_next_line",
    "sanitize",
    "scan",
]
