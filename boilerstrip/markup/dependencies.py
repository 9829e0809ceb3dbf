"""``package.json`` dependency pruning.

A project generated without an optional subsystem should not keep that
subsystem's packages either.  The pruning here edits the manifest only; it
never invokes a package manager.
"""

from __future__ import annotations

import json
from pathlib import Path
from typing import Iterable

from .models import MarkupError

# Packages that only exist to support MobX-State-Tree in the template.
MST_DEPENDENCIES: tuple[str, ...] = (
    "mobx",
    "mobx-react-lite",
    "mobx-state-tree",
    "reactotron-mst",
)

DEPENDENCY_SECTIONS: tuple[str, ...] = (
    "dependencies",
    "devDependencies",
    "peerDependencies",
)


def prune_dependencies(
    package_json: str | Path,
    names: Iterable[str] = MST_DEPENDENCIES,
    dry_run: bool = True,
) -> list[str]:
    """Remove *names* from every dependency section of *package_json*.

    Key order is preserved and the file is rewritten with two-space
    indentation and a trailing newline.

    Args:
        package_json: Path to the manifest.
        names: Package names to drop.
        dry_run: Only report what would be removed.

    Returns:
        Sorted names that were (or would be) removed.  A missing manifest
        yields an empty list.

    Raises:
        MarkupError: If the manifest is not a JSON object.
    """
    path = Path(package_json)
    if not path.exists():
        return []

    try:
        data = json.loads(path.read_text(encoding="utf-8"))
    except json.JSONDecodeError as exc:
        raise MarkupError(f"Invalid JSON in {path}: {exc}") from exc
    if not isinstance(data, dict):
        raise MarkupError(f"Expected a JSON object in {path}")

    wanted = set(names)
    removed: set[str] = set()
    for section in DEPENDENCY_SECTIONS:
        deps = data.get(section)
        if not isinstance(deps, dict):
            continue
        hits = wanted.intersection(deps)
        for name in hits:
            del deps[name]
        removed |= hits

    if removed and not dry_run:
        path.write_text(json.dumps(data, indent=2, ensure_ascii=False) + "\n", encoding="utf-8")

    return sorted(removed)
