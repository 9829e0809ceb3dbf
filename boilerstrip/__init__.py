"""boilerstrip -- markup-driven conditional source transformation.

Walks a generated project tree, finds files annotated with single-line
directive comments (``// @mst remove-current-line``, ``# @mst remove-file``,
...) and removes lines, blocks or whole files, or unwraps ``observer()``
components, depending on whether the project keeps an optional subsystem.

Quick usage::

    from boilerstrip import MarkupProcessor, Mode, RunConfig

    config = RunConfig(target_dir="/tmp/MyApp", mode=Mode.REMOVE, dry_run=False)
    report = await MarkupProcessor().run(config)
"""

from boilerstrip.config import EngineConfig, RunConfig
from boilerstrip.markup import (
    DirectiveKind,
    FileResult,
    MarkupError,
    MarkupProcessor,
    Mode,
    Outcome,
    UpdateReport,
)

__all__ = [
    "DirectiveKind",
    "EngineConfig",
    "FileResult",
    "MarkupError",
    "MarkupProcessor",
    "Mode",
    "Outcome",
    "RunConfig",
    "UpdateReport",
]
