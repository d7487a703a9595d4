"""Dialect detection for an existing project.

A project is TypeScript (``Dialect.TYPED``) when a ``tsconfig.json`` sits at
its root, JavaScript otherwise.  The result is computed once per pass and
handed to every generator explicitly.
"""

from __future__ import annotations

from pathlib import Path

from .options import Dialect

DIALECT_MARKER = "tsconfig.json"


def resolve_dialect(target_root: str | Path) -> Dialect:
    """Return the dialect of the project rooted at *target_root*."""
    marker = Path(target_root) / DIALECT_MARKER
    return Dialect.TYPED if marker.is_file() else Dialect.UNTYPED
