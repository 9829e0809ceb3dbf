"""Candidate file discovery.

Globs follow minimatch conventions: a leading ``!`` negates, ``{a,b}``
expands to alternatives, ``**`` spans directories, ``*`` and ``?`` stay
inside one path segment, and dotfiles are matched like any other name.
"""

from __future__ import annotations

import os
import re
from functools import lru_cache
from pathlib import Path
from typing import Iterable, Sequence

# Version control, editor config, dependency and native build output.
DEFAULT_MATCHING_GLOBS: tuple[str, ...] = (
    "!**/.DS_Store",
    "!**/.expo{,/**}",
    "!**/.git{,/**}",
    "!**/.vscode{,/**}",
    "!**/node_modules{,/**}",
    "!**/ios/build{,/**}",
    "!**/ios/Pods{,/**}",
    "!**/ios/*.xcworkspace{,/**}",
    "!**/android/build{,/**}",
    "!**/android/app/build{,/**}",
)

_BRACE_RE = re.compile(r"\{([^{}]*)\}")


# ---------------------------------------------------------------------------
# Glob translation
# ---------------------------------------------------------------------------


def expand_braces(pattern: str) -> list[str]:
    """Expand ``{a,b}`` alternatives, innermost first.

    ``"x{,/**}"`` -> ``["x", "x/**"]``.  A brace group without a comma is
    kept literally.
    """
    match = _BRACE_RE.search(pattern)
    if match is None or "," not in match.group(1):
        return [pattern]
    head, tail = pattern[: match.start()], pattern[match.end():]
    expanded: list[str] = []
    for option in match.group(1).split(","):
        expanded.extend(expand_braces(f"{head}{option}{tail}"))
    return expanded


def _translate(pattern: str) -> str:
    """Translate one brace-free glob into a regex body."""
    out: list[str] = []
    i, n = 0, len(pattern)
    while i < n:
        if pattern.startswith("**/", i):
            out.append(r"(?:.*/)?")
            i += 3
        elif pattern.startswith("/**", i) and i + 3 == n:
            out.append(r"(?:/.*)?")
            i += 3
        elif pattern.startswith("**", i):
            out.append(r".*")
            i += 2
        elif pattern[i] == "*":
            out.append(r"[^/]*")
            i += 1
        elif pattern[i] == "?":
            out.append(r"[^/]")
            i += 1
        else:
            out.append(re.escape(pattern[i]))
            i += 1
    return "".join(out)


@lru_cache(maxsize=256)
def compile_glob(pattern: str) -> re.Pattern[str]:
    """Compile a (non-negated) glob into a regex matching POSIX relative paths."""
    alternatives = [_translate(p) for p in expand_braces(pattern.lstrip("/"))]
    return re.compile("^(?:" + "|".join(alternatives) + ")$")


class GlobSet:
    """Include/exclude glob matcher.

    A path is selected when it matches at least one include pattern (or
    there are none) and matches no exclude pattern.
    """

    def __init__(self, patterns: Iterable[str]) -> None:
        self.includes: list[re.Pattern[str]] = []
        self.excludes: list[re.Pattern[str]] = []
        for pattern in patterns:
            if pattern.startswith("!"):
                self.excludes.append(compile_glob(pattern[1:]))
            else:
                self.includes.append(compile_glob(pattern))

    def excluded(self, rel_path: str) -> bool:
        return any(p.match(rel_path) for p in self.excludes)

    def matches(self, rel_path: str) -> bool:
        if self.excluded(rel_path):
            return False
        if not self.includes:
            return True
        return any(p.match(rel_path) for p in self.includes)


# ---------------------------------------------------------------------------
# Discovery
# ---------------------------------------------------------------------------


def find_files(
    target_dir: str | Path,
    matching: Sequence[str] | None = None,
) -> list[Path]:
    """Return the regular files under *target_dir* selected by *matching*.

    Args:
        target_dir: Root of the tree to scan.
        matching: Glob list.  ``None`` means :data:`DEFAULT_MATCHING_GLOBS`;
            any other list replaces the defaults entirely.

    Returns:
        Sorted absolute ``target_dir / relative`` paths.  Excluded directories are
        not descended into.
    """
    root = Path(target_dir).absolute()
    globs = GlobSet(DEFAULT_MATCHING_GLOBS if matching is None else matching)
    found: list[Path] = []

    for dirpath, dirnames, filenames in os.walk(root):
        rel_dir = Path(dirpath).relative_to(root).as_posix()
        prefix = "" if rel_dir == "." else f"{rel_dir}/"

        dirnames[:] = sorted(d for d in dirnames if not globs.excluded(prefix + d))

        for name in filenames:
            full = Path(dirpath) / name
            if not full.is_file():
                continue
            if globs.matches(prefix + name):
                found.append(root / (prefix + name))

    return sorted(found)
