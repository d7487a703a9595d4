"""Artifact model and the writer that persists artifacts under a project root.

An ``Artifact`` is a rendered file that has not been written yet: a relative
POSIX path, its content, the schematic or feature that produced it, and the
dialect it was rendered in.  ``ArtifactWriter`` writes artifacts one at a time
(never concurrently), creates parent directories, and applies an explicit
``WritePolicy`` when a file already exists with different content.  Writing
identical content again is always a no-op, so re-running a generator with the
same inputs leaves the tree byte-identical.
"""

from __future__ import annotations

import asyncio
from enum import Enum
from pathlib import Path, PurePosixPath

from pydantic import BaseModel, ConfigDict, Field, field_validator

from .errors import ArtifactExistsError, ArtifactWriteError, UnsafeArtifactPathError
from .options import Dialect
from .utils import write_text


class Artifact(BaseModel):
    """A single generated file."""

    model_config = ConfigDict(frozen=True)

    path: str = Field(..., description="POSIX path relative to the project root")
    content: str
    kind: str = Field(..., description="Schematic or feature that produced the file")
    dialect: Dialect | None = Field(
        default=None, description="Dialect the file was rendered in; None for dialect-neutral files"
    )

    @field_validator("path")
    @classmethod
    def _check_relative(cls, value: str) -> str:
        pure = PurePosixPath(value.replace("\\", "/"))
        if not value or pure.is_absolute() or ".." in pure.parts or value.startswith("~"):
            raise UnsafeArtifactPathError(value)
        return pure.as_posix()

    def target(self, root: Path) -> Path:
        """Absolute destination under *root*."""
        return Path(root) / PurePosixPath(self.path)


class WritePolicy(str, Enum):
    """What to do when a destination already holds different content."""

    OVERWRITE = "overwrite"
    SKIP = "skip"
    FAIL = "fail"


class WriteOutcome(str, Enum):
    WRITTEN = "written"
    UNCHANGED = "unchanged"
    SKIPPED = "skipped"


class ArtifactWriter:
    """Persists artifacts under a single root directory.

    The writer records every outcome so callers can report exactly which
    paths were touched.
    """

    def __init__(self, root: str | Path, policy: WritePolicy = WritePolicy.OVERWRITE) -> None:
        self.root = Path(root)
        self.policy = policy
        self.outcomes: dict[str, WriteOutcome] = {}

    async def write(self, artifact: Artifact) -> Path:
        """Write one artifact and return its absolute path."""
        destination = artifact.target(self.root)
        resolved_root = self.root.resolve()
        if not destination.resolve().is_relative_to(resolved_root):
            raise UnsafeArtifactPathError(artifact.path)

        outcome = await asyncio.to_thread(self._write_sync, destination, artifact.content)
        self.outcomes[artifact.path] = outcome
        return destination

    async def write_all(self, artifacts: list[Artifact]) -> list[Path]:
        """Write *artifacts* sequentially, in order."""
        written: list[Path] = []
        for artifact in artifacts:
            written.append(await self.write(artifact))
        return written

    @property
    def skipped_paths(self) -> list[str]:
        return [p for p, o in self.outcomes.items() if o is WriteOutcome.SKIPPED]

    # -- Internal ----------------------------------------------------------

    def _write_sync(self, destination: Path, content: str) -> WriteOutcome:
        if destination.is_file():
            try:
                existing = destination.read_text(encoding="utf-8")
            except (OSError, UnicodeDecodeError):
                existing = None
            if existing == content:
                return WriteOutcome.UNCHANGED
            if self.policy is WritePolicy.FAIL:
                raise ArtifactExistsError(destination)
            if self.policy is WritePolicy.SKIP:
                return WriteOutcome.SKIPPED

        try:
            write_text(destination, content)
        except OSError as exc:
            raise ArtifactWriteError(destination, exc.strerror or str(exc)) from exc
        return WriteOutcome.WRITTEN
