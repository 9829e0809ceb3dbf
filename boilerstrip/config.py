"""boilerstrip configuration.

Typed configuration for a markup run.  All settings use Pydantic v2 models
so they are validated at construction time and can be built from
environment variables without boiler-plate.
"""

from __future__ import annotations

import os
from pathlib import Path
from typing import Any, Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator

from boilerstrip.markup.directives import VOCABULARIES, MarkupVocabulary
from boilerstrip.markup.discovery import DEFAULT_MATCHING_GLOBS
from boilerstrip.markup.models import Mode

_TRUTHY = {"1", "true", "yes", "on"}


class EngineConfig(BaseModel):
    """Tuning knobs for the batch orchestrator."""

    max_workers: int = Field(default=8, ge=1, description="Maximum files processed concurrently")
    max_passes: int = Field(
        default=1000, ge=1, description="Iteration cap for the block and observer rewrites"
    )

    @classmethod
    def from_env(cls) -> "EngineConfig":
        """Build an ``EngineConfig`` from environment variables.

        Recognised variables (all optional):
            BOILERSTRIP_MAX_WORKERS, BOILERSTRIP_MAX_PASSES.
        """
        kwargs: dict[str, Any] = {}
        if os.environ.get("BOILERSTRIP_MAX_WORKERS"):
            kwargs["max_workers"] = int(os.environ["BOILERSTRIP_MAX_WORKERS"])
        if os.environ.get("BOILERSTRIP_MAX_PASSES"):
            kwargs["max_passes"] = int(os.environ["BOILERSTRIP_MAX_PASSES"])
        return cls(**kwargs)


class RunConfig(BaseModel):
    """Immutable description of one run.

    Instances are created by the caller (usually the scaffolding CLI) and
    handed to ``MarkupProcessor.run``.
    """

    model_config = ConfigDict(frozen=True)

    target_dir: Path = Field(..., description="Root of the generated project")
    matching: Optional[list[str]] = Field(
        default=None,
        description="Glob list replacing the default exclusions wholesale",
    )
    mode: Mode = Field(default=Mode.REMOVE)
    dry_run: bool = Field(default=True)
    vocabulary: str = Field(default="mst", description="Vocabulary name: 'mst' or 'demo'")

    @field_validator("vocabulary")
    @classmethod
    def _known_vocabulary(cls, value: str) -> str:
        if value not in VOCABULARIES:
            known = ", ".join(sorted(VOCABULARIES))
            raise ValueError(f"unknown vocabulary {value!r} (expected one of: {known})")
        return value

    # ------------------------------------------------------------------
    # Derived values (read-only properties)
    # ------------------------------------------------------------------

    @property
    def matching_globs(self) -> tuple[str, ...]:
        """Effective glob list for discovery."""
        if self.matching is None:
            return DEFAULT_MATCHING_GLOBS
        return tuple(self.matching)

    @property
    def markup_vocabulary(self) -> MarkupVocabulary:
        """The ``MarkupVocabulary`` named by :attr:`vocabulary`."""
        return VOCABULARIES[self.vocabulary]

    @property
    def package_json_path(self) -> Path:
        """Path to the target project's ``package.json``."""
        return self.target_dir / "package.json"

    # ------------------------------------------------------------------
    # Construction helpers
    # ------------------------------------------------------------------

    @classmethod
    def from_env(cls, target_dir: str | Path) -> "RunConfig":
        """Build a ``RunConfig`` for *target_dir* from environment variables.

        Recognised variables (all optional):
            BOILERSTRIP_MODE, BOILERSTRIP_DRY_RUN, BOILERSTRIP_VOCABULARY,
            BOILERSTRIP_MATCHING (comma-separated globs).
        """
        kwargs: dict[str, Any] = {"target_dir": Path(target_dir)}
        if os.environ.get("BOILERSTRIP_MODE"):
            kwargs["mode"] = Mode(os.environ["BOILERSTRIP_MODE"].strip().lower())
        if os.environ.get("BOILERSTRIP_DRY_RUN"):
            kwargs["dry_run"] = os.environ["BOILERSTRIP_DRY_RUN"].strip().lower() in _TRUTHY
        if os.environ.get("BOILERSTRIP_VOCABULARY"):
            kwargs["vocabulary"] = os.environ["BOILERSTRIP_VOCABULARY"].strip()
        if os.environ.get("BOILERSTRIP_MATCHING"):
            kwargs["matching"] = [
                g.strip() for g in os.environ["BOILERSTRIP_MATCHING"].split(",") if g.strip()
            ]
        return cls(**kwargs)
