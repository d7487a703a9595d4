"""Exception hierarchy for expressgen.

Every error raised by the generation engine derives from ``ExpressgenError``
so the CLI can convert any of them into a short message and a non-zero exit
status.  The three branches mirror how a failure should be read by the user:

* ``PreconditionError`` -- the request itself is wrong (existing target,
  unknown schematic, not a project root).  Never retried.
* ``ArtifactIOError`` -- the filesystem refused a write.  Fatal for the pass.
* ``ExternalCollaboratorError`` -- the base template could not be acquired.
"""

from __future__ import annotations

from pathlib import Path


class ExpressgenError(Exception):
    """Base class for all expressgen failures."""


# ---------------------------------------------------------------------------
# Precondition errors
# ---------------------------------------------------------------------------


class PreconditionError(ExpressgenError):
    """Raised when a request cannot be honoured as stated."""


class TargetExistsError(PreconditionError):
    def __init__(self, path: Path) -> None:
        self.path = Path(path)
        super().__init__(f"Directory {self.path} already exists")


class InvalidSchematicError(PreconditionError):
    def __init__(self, kind: str, available: list[str] | None = None) -> None:
        self.kind = kind
        self.available = available or []
        message = f"Unknown schematic: {kind}"
        if self.available:
            message += f" (available: {', '.join(self.available)})"
        super().__init__(message)


class NotAProjectRootError(PreconditionError):
    def __init__(self, path: Path) -> None:
        self.path = Path(path)
        super().__init__(
            f"No package.json found in {self.path}. "
            "Run this command from your project root."
        )


class MissingNameError(PreconditionError):
    def __init__(self, what: str = "name") -> None:
        self.what = what
        super().__init__(f"A non-empty {what} is required")


class DialectMismatchError(PreconditionError):
    def __init__(self, kind: str, dialect: str) -> None:
        self.kind = kind
        self.dialect = dialect
        super().__init__(
            f"The {kind} schematic is only available for TypeScript projects "
            f"(this project is {dialect})"
        )


class ArtifactExistsError(PreconditionError):
    def __init__(self, path: Path) -> None:
        self.path = Path(path)
        super().__init__(
            f"{self.path} already exists with different content (use --force to overwrite)"
        )


class UnsafeArtifactPathError(PreconditionError):
    def __init__(self, path: str) -> None:
        self.path = path
        super().__init__(f"Artifact path escapes the target directory: {path}")


class UnknownFeatureError(PreconditionError):
    def __init__(self, name: str, available: list[str] | None = None) -> None:
        self.name = name
        self.available = available or []
        message = f"Unknown feature: {name}"
        if self.available:
            message += f" (available: {', '.join(self.available)})"
        super().__init__(message)


# ---------------------------------------------------------------------------
# I/O errors
# ---------------------------------------------------------------------------


class ArtifactIOError(ExpressgenError):
    """Raised when generated output cannot be persisted."""

    def __init__(self, path: Path, reason: str) -> None:
        self.path = Path(path)
        self.reason = reason
        super().__init__(f"Failed to write {self.path}: {reason}")


class ArtifactWriteError(ArtifactIOError):
    pass


class ManifestWriteError(ArtifactIOError):
    pass


# ---------------------------------------------------------------------------
# External collaborator errors
# ---------------------------------------------------------------------------


class ExternalCollaboratorError(ExpressgenError):
    """Raised when a collaborator outside the engine fails."""


class TemplateFetchError(ExternalCollaboratorError):
    def __init__(self, source: str, reason: str) -> None:
        self.source = source
        self.reason = reason
        super().__init__(f"Failed to acquire base template from {source}: {reason}")
