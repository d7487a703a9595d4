"""Feature module framework.

A feature module is an optional, independently composable generator.  It
reads only the resolved ``OptionRecord`` and returns a ``FeatureOutput``: the
artifacts to write plus a ``ManifestPatch``.  Modules never read another
module's output and never edit ``package.json`` themselves; where generated
code has to be connected by hand the template carries an ``expressgen:``
marker comment instead.
"""

from __future__ import annotations

from pathlib import Path
from typing import Any, NamedTuple

from ..manifest import ManifestPatch
from ..options import OptionRecord
from ..templates import TemplateRenderer, dialect_context
from ..writer import Artifact, ArtifactWriter


class FeatureOutput(NamedTuple):
    artifacts: list[Artifact]
    patch: ManifestPatch


class FeatureModule:
    """Base class for every feature module.

    Subclasses set ``name`` (the CLI name used by ``add``) and implement
    :meth:`render`.  :meth:`enabled` defaults to always-on.
    """

    name: str = ""
    description: str = ""

    def __init__(self, renderer: TemplateRenderer) -> None:
        self.renderer = renderer

    def enabled(self, options: OptionRecord) -> bool:
        return True

    def render(self, options: OptionRecord, project_name: str) -> FeatureOutput:
        raise NotImplementedError

    # -- Helpers for subclasses ---------------------------------------------

    def context(self, options: OptionRecord, project_name: str, **extra: Any) -> dict[str, Any]:
        """Template context shared by every artifact of this feature."""
        return {
            "project_name": project_name,
            "options": options,
            "database": options.database.value,
            "orm": options.resolved_orm.value,
            **dialect_context(options.dialect),
            **extra,
        }

    def artifact(
        self,
        template: str,
        path: str,
        options: OptionRecord,
        context: dict[str, Any],
        *,
        neutral: bool = False,
    ) -> Artifact:
        """Render ``features/<name>/<template>.j2`` into an artifact at *path*.

        ``{ext}`` in *path* is replaced by the dialect's extension.  Set
        *neutral* for files whose content never depends on the dialect.
        """
        content = self.renderer.render(f"features/{self.name}/{template}.j2", context)
        return Artifact(
            path=path.format(ext=options.ext),
            content=content,
            kind=self.name,
            dialect=None if neutral else options.dialect,
        )

    def __repr__(self) -> str:
        return f"<{type(self).__name__} {self.name!r}>"


def run_command(options: OptionRecord, script: str) -> str:
    """Shell command that runs *script* (a path without extension) in the dialect's runtime."""
    if options.typed:
        return f"ts-node {script}.ts"
    return f"node {script}.js"


async def apply_feature(
    feature: FeatureModule,
    target_root: str | Path,
    options: OptionRecord,
    writer: ArtifactWriter | None = None,
    project_name: str | None = None,
) -> FeatureOutput:
    """Render *feature* and write its artifacts under *target_root*.

    The returned patch is not merged here; callers fold every patch into the
    manifest once per pass.
    """
    root = Path(target_root)
    writer = writer or ArtifactWriter(root)
    output = feature.render(options, project_name or root.resolve().name)
    await writer.write_all(output.artifacts)
    return output
