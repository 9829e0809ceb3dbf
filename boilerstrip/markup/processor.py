"""Batch orchestrator.

Applies one run mode across a set of files.  Each file is an independent
unit of work executed in a worker thread; all units run concurrently under
a semaphore and the run waits for every one of them to settle.  A unit that
raises becomes a ``FAILED`` result rather than aborting its siblings.

Quick usage::

    from boilerstrip.markup import MarkupProcessor, Mode

    processor = MarkupProcessor()
    report = await processor.update(paths, mode=Mode.REMOVE, dry_run=True)
    for path, kinds in report.as_mapping().items():
        print(path, [k.value for k in kinds])
"""

from __future__ import annotations

import asyncio
from pathlib import Path
from typing import TYPE_CHECKING, Sequence

from ..utils import print_warning
from .directives import (
    DirectiveKind,
    MST_VOCABULARY,
    MarkupVocabulary,
    detect,
    has_directive,
    has_markup,
)
from .discovery import find_files
from .models import FileResult, MarkupError, Mode, Outcome, UpdateReport
from .rewriters import MAX_PASSES, remove, sanitize

if TYPE_CHECKING:
    from ..config import RunConfig


class MarkupProcessor:
    """Runs directive rewrites over a batch of files.

    Attributes:
        vocabulary: Marker vocabulary the run acts on.
        max_workers: Maximum number of files processed at the same time.
        max_passes: Iteration cap for the fixed-point rewriters.
        verbose: Print a warning for every failed file as it settles.
    """

    def __init__(
        self,
        vocabulary: MarkupVocabulary = MST_VOCABULARY,
        max_workers: int = 8,
        max_passes: int = MAX_PASSES,
        verbose: bool = False,
    ) -> None:
        if max_workers < 1:
            raise MarkupError(f"max_workers must be >= 1, got {max_workers}")
        self.vocabulary = vocabulary
        self.max_workers = max_workers
        self.max_passes = max_passes
        self.verbose = verbose

    # -- Public API --------------------------------------------------------

    async def run(self, config: RunConfig) -> UpdateReport:
        """Discover files under ``config.target_dir`` and update them.

        Raises:
            MarkupError: If the target directory does not exist.
        """
        target = Path(config.target_dir)
        if not target.is_dir():
            raise MarkupError(f"Target directory not found: {target}")

        file_paths = await asyncio.to_thread(find_files, target, config.matching_globs)
        return await self.update(file_paths, mode=config.mode, dry_run=config.dry_run)

    async def update(
        self,
        file_paths: Sequence[str | Path],
        mode: Mode = Mode.REMOVE,
        dry_run: bool = True,
    ) -> UpdateReport:
        """Process every file and return once all of them have settled.

        Args:
            file_paths: Files to process.
            mode: ``REMOVE`` executes the directives, ``SANITIZE`` strips
                the markers and keeps all code.
            dry_run: Report what would happen without touching the disk.

        Returns:
            An ``UpdateReport`` with one result per path, in input order.
        """
        paths = [Path(p) for p in file_paths]
        semaphore = asyncio.Semaphore(self.max_workers)

        async def _process_with_semaphore(path: Path) -> FileResult:
            async with semaphore:
                return await asyncio.to_thread(self.process_file, path, mode, dry_run)

        tasks = [_process_with_semaphore(p) for p in paths]
        settled = await asyncio.gather(*tasks, return_exceptions=True)

        # Convert exceptions to failed FileResults
        results: list[FileResult] = []
        for path, res in zip(paths, settled):
            if isinstance(res, BaseException):
                if not isinstance(res, Exception):
                    raise res
                error = f"{type(res).__name__}: {res}"
                if self.verbose:
                    print_warning(f"  ! {path}: {error}")
                results.append(FileResult(path=path, outcome=Outcome.FAILED, error=error))
            else:
                results.append(res)

        return UpdateReport(
            mode=mode,
            dry_run=dry_run,
            vocabulary=self.vocabulary.prefix,
            results=results,
        )

    # -- Single file -------------------------------------------------------

    def process_file(self, path: Path, mode: Mode, dry_run: bool) -> FileResult:
        """Process one file synchronously.

        A file carrying the remove-file marker is deleted (remove mode) or
        sanitized (sanitize mode) and no other rewrite runs on it.  Any
        other file with markup is rewritten in place.  Nothing is written
        when *dry_run* is set.
        """
        try:
            before = _read_text(path)
        except UnicodeDecodeError:
            # Binary assets cannot carry directives.
            return FileResult(path=path)

        if has_directive(before, DirectiveKind.REMOVE_FILE, self.vocabulary):
            return self._process_remove_file(path, before, mode, dry_run)

        comments = detect(before, self.vocabulary)
        if mode == Mode.SANITIZE:
            if not has_markup(before, self.vocabulary):
                return FileResult(path=path, comments=comments)
            after = sanitize(before, self.vocabulary, max_passes=self.max_passes)
        else:
            if not comments:
                return FileResult(path=path)
            after = remove(before, self.vocabulary, max_passes=self.max_passes)

        if after == before:
            return FileResult(path=path, comments=comments)

        if not dry_run:
            _write_text(path, after)
        return FileResult(path=path, comments=comments, outcome=Outcome.MODIFIED)

    def _process_remove_file(
        self, path: Path, content: str, mode: Mode, dry_run: bool
    ) -> FileResult:
        comments = [DirectiveKind.REMOVE_FILE]
        if mode == Mode.SANITIZE:
            if not dry_run:
                _write_text(path, sanitize(content, self.vocabulary, max_passes=self.max_passes))
            return FileResult(path=path, comments=comments, outcome=Outcome.MODIFIED)

        if not dry_run:
            path.unlink()
        return FileResult(path=path, comments=comments, outcome=Outcome.DELETED)


# ---------------------------------------------------------------------------
# Internal helpers
# ---------------------------------------------------------------------------

def _read_text(path: Path) -> str:
    """Read *path* as UTF-8 without translating line endings."""
    with open(path, encoding="utf-8", newline="") as fh:
        return fh.read()


def _write_text(path: Path, content: str) -> None:
    """Write *content* to *path* as UTF-8 without translating line endings."""
    with open(path, "w", encoding="utf-8", newline="") as fh:
        fh.write(content)
