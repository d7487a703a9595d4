"""Dependency manifest (``package.json``) patching.

Feature modules never touch the manifest directly; they return a
``ManifestPatch`` and the caller folds every patch into the manifest in one
read-modify-write.

Precedence rule
---------------
Within ``dependencies``, ``devDependencies`` and ``scripts`` the patch value
wins for every key it names; keys the patch does not name are left exactly as
they were.  ``fields`` sets top-level keys the same way.  When several patches
are combined the later one wins per key.  Existing key order is preserved and
new keys are appended, so a merge never reorders or deletes unrelated content.
"""

from __future__ import annotations

import copy
import json
from pathlib import Path
from typing import Any

from pydantic import BaseModel, Field

from .errors import ManifestWriteError
from .utils import load_json, print_warning, save_json

MANIFEST_NAME = "package.json"

# ManifestPatch attribute -> package.json key
_SECTIONS: dict[str, str] = {
    "dependencies": "dependencies",
    "dev_dependencies": "devDependencies",
    "scripts": "scripts",
}

# Top-level keys that only make sense for the generator's own package.
GENERATOR_ONLY_FIELDS: tuple[str, ...] = (
    "bin",
    "publishConfig",
    "files",
    "repository",
    "homepage",
    "bugs",
)


class ManifestPatch(BaseModel):
    """Partial manifest contributed by one generator."""

    dependencies: dict[str, str] = Field(default_factory=dict)
    dev_dependencies: dict[str, str] = Field(default_factory=dict)
    scripts: dict[str, str] = Field(default_factory=dict)
    fields: dict[str, Any] = Field(default_factory=dict, description="Top-level scalar keys such as 'main'")

    @classmethod
    def combine(cls, *patches: "ManifestPatch") -> "ManifestPatch":
        """Fold *patches* left to right; later patches win per key."""
        merged = cls()
        for patch in patches:
            merged.dependencies.update(patch.dependencies)
            merged.dev_dependencies.update(patch.dev_dependencies)
            merged.scripts.update(patch.scripts)
            merged.fields.update(patch.fields)
        return merged


# ---------------------------------------------------------------------------
# Read / apply / write
# ---------------------------------------------------------------------------


def default_manifest(root: str | Path) -> dict[str, Any]:
    """Minimal manifest used when none can be read."""
    return {"name": Path(root).resolve().name, "version": "1.0.0"}


def load_manifest(root: str | Path) -> dict[str, Any]:
    """Read the manifest at *root*, substituting a default when unusable.

    A missing file, invalid JSON, or a JSON value that is not an object all
    yield :func:`default_manifest`.  This is the one failure the engine
    recovers from locally.
    """
    path = Path(root) / MANIFEST_NAME
    if not path.is_file():
        return default_manifest(root)
    try:
        data = load_json(path)
    except (OSError, UnicodeDecodeError, json.JSONDecodeError) as exc:
        print_warning(f"  Could not parse {path} ({exc}); starting from a minimal manifest.")
        return default_manifest(root)
    if "_root" in data and len(data) == 1:
        print_warning(f"  {path} is not a JSON object; starting from a minimal manifest.")
        return default_manifest(root)
    return data


def apply_patch(manifest: dict[str, Any], patch: ManifestPatch) -> dict[str, Any]:
    """Return a new manifest with *patch* folded in (see module precedence rule)."""
    result = copy.deepcopy(manifest)
    for key, value in patch.fields.items():
        result[key] = value
    for attr, key in _SECTIONS.items():
        entries: dict[str, str] = getattr(patch, attr)
        if not entries:
            continue
        section = result.get(key)
        if not isinstance(section, dict):
            section = {}
        section.update(entries)
        result[key] = section
    return result


async def write_manifest(root: str | Path, manifest: dict[str, Any]) -> Path:
    """Write *manifest* to ``<root>/package.json``; failures are fatal."""
    path = Path(root) / MANIFEST_NAME
    try:
        await save_json(manifest, path)
    except OSError as exc:
        raise ManifestWriteError(path, exc.strerror or str(exc)) from exc
    return path


async def merge_manifest(root: str | Path, patch: ManifestPatch) -> dict[str, Any]:
    """Read the manifest at *root*, apply *patch* and write it back."""
    manifest = apply_patch(load_manifest(root), patch)
    await write_manifest(root, manifest)
    return manifest


# ---------------------------------------------------------------------------
# Sanitisation
# ---------------------------------------------------------------------------


def sanitize_manifest(
    manifest: dict[str, Any],
    root: str | Path,
    generator_packages: list[str] | tuple[str, ...] = (),
) -> dict[str, Any]:
    """Strip generator-only content so the manifest describes the generated app.

    Removes packaging metadata (``bin``, ``publishConfig``, ``files``,
    ``repository``, ``homepage``, ``bugs``), generator self-references from
    the dependency maps, and husky lifecycle hooks.  An empty name is
    replaced by the basename of *root*.
    """
    result = copy.deepcopy(manifest)

    if not result.get("name"):
        result["name"] = Path(root).resolve().name

    for key in GENERATOR_ONLY_FIELDS:
        result.pop(key, None)

    for key in ("dependencies", "devDependencies"):
        section = result.get(key)
        if isinstance(section, dict):
            for package in generator_packages:
                section.pop(package, None)

    scripts = result.get("scripts")
    if isinstance(scripts, dict) and "husky" in str(scripts.get("prepare", "")):
        del scripts["prepare"]

    dev = result.get("devDependencies")
    if isinstance(dev, dict):
        dev.pop("husky", None)

    return result
