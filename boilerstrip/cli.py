"""Command line entry point.

Usage::

    python -m boilerstrip ./MyApp                       # dry run, remove mode
    python -m boilerstrip ./MyApp --apply               # rewrite files in place
    python -m boilerstrip ./MyApp --mode sanitize --apply
    python -m boilerstrip ./MyApp --vocabulary demo --apply
"""

from __future__ import annotations

import argparse
import asyncio
import sys
import time
from typing import Optional, Sequence

from pydantic import ValidationError
from rich.table import Table

from boilerstrip.config import EngineConfig, RunConfig
from boilerstrip.markup import (
    MST_DEPENDENCIES,
    MarkupError,
    MarkupProcessor,
    Mode,
    Outcome,
    UpdateReport,
    VOCABULARIES,
    prune_dependencies,
)
from boilerstrip.utils import (
    console,
    create_progress,
    format_duration,
    pluralize,
    print_error,
    print_success,
    print_summary_table,
    print_warning,
)

_OUTCOME_STYLES: dict[Outcome, str] = {
    Outcome.UNCHANGED: "dim",
    Outcome.MODIFIED: "yellow",
    Outcome.DELETED: "red",
    Outcome.FAILED: "bold red",
}


# ---------------------------------------------------------------------------
# Report rendering
# ---------------------------------------------------------------------------


def build_report_table(report: UpdateReport, show_all: bool = False) -> Table:
    """Render *report* as a Rich table.

    Files without directives are omitted unless *show_all* is set.
    """
    verb = "Would update" if report.dry_run else "Updated"
    table = Table(
        title=f"{verb} ({report.mode.value}, {report.vocabulary})",
        show_header=True,
        header_style="bold cyan",
    )
    table.add_column("File", no_wrap=True)
    table.add_column("Directives")
    table.add_column("Outcome")

    for result in report.results:
        if not show_all and not result.comments and result.outcome != Outcome.FAILED:
            continue
        kinds = ", ".join(k.value for k in result.comments)
        outcome = result.outcome.value
        if result.error:
            outcome = f"{outcome}: {result.error}"
        style = _OUTCOME_STYLES[result.outcome]
        table.add_row(str(result.path), kinds, f"[{style}]{outcome}[/{style}]")

    return table


# ---------------------------------------------------------------------------
# Entry point
# ---------------------------------------------------------------------------


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="boilerstrip",
        description="Apply @mst / @demo markup directives to a generated project",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog=(
            "Examples:\n"
            "  python -m boilerstrip ./MyApp\n"
            "  python -m boilerstrip ./MyApp --apply --prune-deps\n"
            "  python -m boilerstrip ./MyApp --mode sanitize --apply\n"
        ),
    )
    parser.add_argument("target", help="Root directory of the generated project")
    parser.add_argument(
        "--mode",
        choices=[m.value for m in Mode],
        default=Mode.REMOVE.value,
        help="remove: execute directives; sanitize: strip markers only (default: remove)",
    )
    parser.add_argument(
        "--apply",
        action="store_true",
        help="Write changes to disk (default is a dry run)",
    )
    parser.add_argument(
        "--vocabulary",
        choices=sorted(VOCABULARIES),
        default="mst",
        help="Marker vocabulary to act on (default: mst)",
    )
    parser.add_argument(
        "--match",
        action="append",
        default=None,
        metavar="GLOB",
        help="Glob to include, or exclude with a leading '!'. Replaces the defaults.",
    )
    parser.add_argument(
        "--workers",
        type=int,
        default=None,
        help="Maximum files processed concurrently",
    )
    parser.add_argument(
        "--prune-deps",
        action="store_true",
        help="Also drop MobX-State-Tree packages from package.json (remove mode only)",
    )
    parser.add_argument(
        "--verbose", "-v",
        action="store_true",
        help="List files without directives and warn on failures as they happen",
    )
    return parser


def main(argv: Optional[Sequence[str]] = None) -> int:
    """CLI entry point for ``python -m boilerstrip``.

    Returns:
        Process exit code: 0 on success, 1 when the configuration is invalid
        or any file failed.
    """
    args = _build_parser().parse_args(argv)

    try:
        config = RunConfig(
            target_dir=args.target,
            matching=args.match,
            mode=Mode(args.mode),
            dry_run=not args.apply,
            vocabulary=args.vocabulary,
        )
        engine = EngineConfig.from_env()
        if args.workers is not None:
            engine = EngineConfig(max_workers=args.workers, max_passes=engine.max_passes)
    except (ValidationError, ValueError) as exc:
        print_error(f"Invalid configuration: {exc}")
        return 1

    processor = MarkupProcessor(
        vocabulary=config.markup_vocabulary,
        max_workers=engine.max_workers,
        max_passes=engine.max_passes,
        verbose=args.verbose,
    )

    started = time.monotonic()
    try:
        with create_progress() as progress:
            progress.add_task(f"Scanning {config.target_dir}...", total=None)
            report = asyncio.run(processor.run(config))
    except MarkupError as exc:
        print_error(f"Error: {exc}")
        return 1
    elapsed = time.monotonic() - started

    console.print(build_report_table(report, show_all=args.verbose))

    pruned: list[str] = []
    if args.prune_deps and config.mode == Mode.REMOVE and config.vocabulary == "mst":
        try:
            pruned = prune_dependencies(
                config.package_json_path, MST_DEPENDENCIES, dry_run=config.dry_run
            )
        except MarkupError as exc:
            print_warning(f"Skipping dependency pruning: {exc}")

    summary = {
        "Files scanned": str(len(report.results)),
        "Files changed": str(len(report.changed)),
        "Files deleted": str(len(report.deleted)),
        "Files failed": str(len(report.failed)),
        "Duration": format_duration(elapsed),
    }
    if args.prune_deps:
        summary["Dependencies pruned"] = ", ".join(pruned) or "-"
    print_summary_table(summary, title="Dry run" if config.dry_run else "Run")

    if not report.success:
        print_error(f"{pluralize(len(report.failed), 'file')} failed.")
        return 1
    if config.dry_run:
        console.print("[dim]Dry run: no files were changed. Re-run with --apply.[/dim]")
    else:
        print_success(f"Done: {pluralize(len(report.changed), 'file')} changed.")
    return 0


if __name__ == "__main__":
    sys.exit(main())
