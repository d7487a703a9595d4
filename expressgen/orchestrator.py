"""Scaffold orchestration for ``new`` and ``add``.

A ``new`` pass runs five stages in order:

PREFLIGHT             -- name present, target directory absent, options resolved.
BASE_TEMPLATE         -- the template source populates the target root.
FEATURE_EXPANSION     -- every enabled feature is applied in declared order and
                         the combined manifest patch is merged once.
MANIFEST_SANITIZATION -- generator-only manifest content is removed.
COMPLETION            -- the report is finalised and a summary printed.

A failure in any stage marks the report ``FAILED`` (recording the stage it
happened in) and re-raises.  Files written before the failure are left in
place.
"""

from __future__ import annotations

import time
from enum import Enum
from pathlib import Path
from typing import Any

from pydantic import BaseModel, Field

from .config import GeneratorConfig
from .dialect import resolve_dialect
from .errors import MissingNameError, NotAProjectRootError, TargetExistsError
from .features import FeatureModule, apply_feature, build_features, select_features
from .manifest import (
    MANIFEST_NAME,
    ManifestPatch,
    load_manifest,
    merge_manifest,
    sanitize_manifest,
    write_manifest,
)
from .options import OptionRecord
from .template_source import TemplateSource, template_source_for
from .templates import TemplateRenderer
from .utils import (
    console,
    format_duration,
    print_banner,
    print_error,
    print_file_table,
    print_success,
    print_summary_table,
    print_warning,
)
from .writer import ArtifactWriter, WritePolicy


class ScaffoldStage(str, Enum):
    PREFLIGHT = "preflight"
    BASE_TEMPLATE = "base_template"
    FEATURE_EXPANSION = "feature_expansion"
    MANIFEST_SANITIZATION = "manifest_sanitization"
    COMPLETION = "completion"
    FAILED = "failed"


class ScaffoldReport(BaseModel):
    """Outcome of one ``new`` or ``add`` pass."""

    project_name: str
    target_root: Path
    options: OptionRecord
    stage: ScaffoldStage = ScaffoldStage.PREFLIGHT
    failed_stage: ScaffoldStage | None = None
    error: str | None = None
    features: list[str] = Field(default_factory=list, description="Features applied, in order")
    files: list[tuple[str, str]] = Field(default_factory=list, description="(kind, path) of every artifact")
    skipped: list[str] = Field(default_factory=list)
    manifest: dict[str, Any] = Field(default_factory=dict)
    duration: float = 0.0

    @property
    def success(self) -> bool:
        return self.stage is ScaffoldStage.COMPLETION


# Feature name -> boolean OptionRecord field that enables it
FEATURE_TOGGLES: dict[str, str] = {
    "env-file": "env_file",
    "auth-token": "auth_token",
    "authorization": "authorization",
    "roles": "roles",
    "example-resource": "example_resource",
    "testing": "test_framework",
    "docker": "docker",
    "health": "health",
    "api-docs": "api_docs",
    "rate-limit": "rate_limit",
    "realtime": "realtime",
}


def enable_features(options: OptionRecord, names: list[str]) -> OptionRecord:
    """Return *options* with the toggle of every named feature switched on.

    Features driven by a list (messaging, monitoring, microservices) or by
    the database choice are left as they are.
    """
    update = {FEATURE_TOGGLES[name]: True for name in names if name in FEATURE_TOGGLES}
    return options.model_copy(update=update) if update else options


class ScaffoldOrchestrator:
    """Drives a ``new`` pass from option record to finished project."""

    def __init__(
        self,
        config: GeneratorConfig,
        options: OptionRecord,
        renderer: TemplateRenderer | None = None,
        source: TemplateSource | None = None,
    ) -> None:
        self.config = config
        self.options = options
        self.renderer = renderer or TemplateRenderer()
        self.source = source or template_source_for(config.template, config.http_timeout)
        self.features: list[FeatureModule] = build_features(self.renderer)
        self.report: ScaffoldReport | None = None

    async def run(self, name: str, parent_dir: str | Path | None = None) -> ScaffoldReport:
        """Scaffold project *name* under *parent_dir* (default ``config.output_dir``)."""
        start = time.monotonic()
        name = (name or "").strip()
        parent = Path(parent_dir) if parent_dir is not None else self.config.output_dir
        target = parent / name
        report = ScaffoldReport(project_name=Path(name).name, target_root=target, options=self.options)
        self.report = report

        print_banner(
            "expressgen new",
            [
                f"Project : {name or '(missing)'}",
                f"Output  : {target.resolve()}",
                f"Dialect : {'TypeScript' if self.options.typed else 'JavaScript'}",
                f"Template: {getattr(self.source, 'description', 'custom')}",
            ],
        )

        try:
            report.stage = ScaffoldStage.PREFLIGHT
            options = self._preflight(name, target)
            report.options = options

            report.stage = ScaffoldStage.BASE_TEMPLATE
            await self.source.fetch(target)
            console.print(f"  [green]+[/green] Base template ready ({getattr(self.source, 'description', 'custom')})")

            report.stage = ScaffoldStage.FEATURE_EXPANSION
            writer = ArtifactWriter(target, WritePolicy.OVERWRITE)
            patch = await self._expand(self.features, target, options, report, writer)
            await merge_manifest(target, patch)

            report.stage = ScaffoldStage.MANIFEST_SANITIZATION
            manifest = sanitize_manifest(load_manifest(target), target, self.config.generator_packages)
            await write_manifest(target, manifest)
            report.manifest = manifest
            report.skipped = writer.skipped_paths

            report.stage = ScaffoldStage.COMPLETION
        except Exception as exc:
            report.failed_stage = report.stage
            report.stage = ScaffoldStage.FAILED
            report.error = str(exc)
            report.duration = time.monotonic() - start
            print_error(f"Scaffold failed during {report.failed_stage.value}: {exc}")
            raise

        report.duration = time.monotonic() - start
        print_new_summary(report)
        return report

    def _preflight(self, name: str, target: Path) -> OptionRecord:
        if not name:
            raise MissingNameError("project name")
        if target.exists():
            raise TargetExistsError(target)
        options = self.options.resolved()
        console.print(f"  [green]+[/green] Target {target} is free")
        if options.has_persistence:
            console.print(f"  [green]+[/green] Data access: {options.resolved_orm.value} on {options.database.value}")
        return options

    @staticmethod
    async def _expand(
        features: list[FeatureModule],
        target: Path,
        options: OptionRecord,
        report: ScaffoldReport,
        writer: ArtifactWriter,
    ) -> ManifestPatch:
        patches: list[ManifestPatch] = []
        for feature in features:
            if not feature.enabled(options):
                continue
            output = await apply_feature(feature, target, options, writer, report.project_name)
            patches.append(output.patch)
            report.features.append(feature.name)
            report.files.extend((a.kind, a.path) for a in output.artifacts)
            console.print(f"  [green]+[/green] {feature.name} ({len(output.artifacts)} file(s))")
        return ManifestPatch.combine(*patches)


async def add_features(
    target_root: str | Path,
    options: OptionRecord,
    feature_names: list[str],
    config: GeneratorConfig | None = None,
    renderer: TemplateRenderer | None = None,
) -> ScaffoldReport:
    """Apply *feature_names* to the existing project at *target_root*.

    The dialect is read from disk and overrides ``options.dialect``.  The
    toggles of the named features are switched on; a named feature that is
    still disabled (for example ``messaging`` without any queue) is skipped
    with a warning.

    Raises:
        NotAProjectRootError: No ``package.json`` at *target_root*.
        UnknownFeatureError: A name is not in the catalog.
    """
    start = time.monotonic()
    root = Path(target_root)
    config = config or GeneratorConfig()
    if not (root / MANIFEST_NAME).is_file():
        raise NotAProjectRootError(root)

    features = select_features(feature_names, renderer)
    dialect = resolve_dialect(root)
    resolved = enable_features(options.with_dialect(dialect), [f.name for f in features]).resolved()

    report = ScaffoldReport(
        project_name=root.resolve().name,
        target_root=root,
        options=resolved,
        stage=ScaffoldStage.FEATURE_EXPANSION,
    )
    print_banner(
        "expressgen add",
        [
            f"Project : {root.resolve()}",
            f"Dialect : {'TypeScript' if dialect.is_typed else 'JavaScript'} (from disk)",
            f"Features: {', '.join(f.name for f in features) or '(none)'}",
        ],
    )

    enabled = []
    for feature in features:
        if feature.enabled(resolved):
            enabled.append(feature)
        else:
            print_warning(f"  {feature.name} is not enabled by the given options; skipping.")

    try:
        writer = ArtifactWriter(root, WritePolicy.OVERWRITE)
        patch = await ScaffoldOrchestrator._expand(enabled, root, resolved, report, writer)
        report.manifest = await merge_manifest(root, patch)
        report.skipped = writer.skipped_paths
        report.stage = ScaffoldStage.COMPLETION
    except Exception as exc:
        report.failed_stage = report.stage
        report.stage = ScaffoldStage.FAILED
        report.error = str(exc)
        print_error(f"Adding features failed: {exc}")
        raise
    finally:
        report.duration = time.monotonic() - start

    print_file_table(report.files, title="Files written")
    print_success(f"Added {len(report.features)} feature(s) in {format_duration(report.duration)}")
    return report


# ---------------------------------------------------------------------------
# Summary output
# ---------------------------------------------------------------------------


def print_new_summary(report: ScaffoldReport) -> None:
    """Rich summary and next steps after a successful ``new`` pass."""
    options = report.options
    print_file_table(report.files, title="Files written")
    print_summary_table(
        {
            "Project": report.project_name,
            "Location": str(report.target_root.resolve()),
            "Dialect": "TypeScript" if options.typed else "JavaScript",
            "Database": options.database.value,
            "ORM": options.resolved_orm.value,
            "Features": ", ".join(report.features),
            "Dependencies": str(len(report.manifest.get("dependencies", {}))),
            "Dev dependencies": str(len(report.manifest.get("devDependencies", {}))),
            "Duration": format_duration(report.duration),
        },
        title="Scaffold Summary",
    )
    print_success(f"Project {report.project_name} created.")
    console.print("Next steps:")
    console.print(f"  cd {report.target_root}")
    console.print("  npm install")
    console.print("  npm run dev")
