"""Single-artifact and resource schematics.

A schematic turns a name into one source file under the project's role
directories (``src/controllers``, ``src/services``...).  The composite
``resource`` schematic fans out to every role in a fixed order so the same
request always yields the same list of files.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from pathlib import Path
from typing import Any

from .dialect import resolve_dialect
from .errors import (
    DialectMismatchError,
    InvalidSchematicError,
    MissingNameError,
    NotAProjectRootError,
)
from .manifest import MANIFEST_NAME
from .naming import DerivedName, camel_case, derive_base_name, with_role_suffix
from .options import Dialect
from .templates import TemplateRenderer
from .writer import Artifact, ArtifactWriter, WritePolicy


class SchematicKind(str, Enum):
    CONTROLLER = "controller"
    SERVICE = "service"
    MIDDLEWARE = "middleware"
    ROUTE = "route"
    MODEL = "model"
    INTERFACE = "interface"
    TEST = "test"
    RESOURCE = "resource"

    @classmethod
    def parse(cls, value: "str | SchematicKind") -> "SchematicKind":
        """Return the kind named *value* or raise ``InvalidSchematicError``."""
        if isinstance(value, cls):
            return value
        try:
            return cls(str(value).strip().lower())
        except ValueError:
            raise InvalidSchematicError(str(value), [k.value for k in cls]) from None


@dataclass(frozen=True)
class _Layout:
    directory: str
    filename: str  # formatted with stem and ext
    role: str
    typed_only: bool = False


_LAYOUTS: dict[SchematicKind, _Layout] = {
    SchematicKind.CONTROLLER: _Layout("src/controllers", "{stem}-controller.{ext}", "controller"),
    SchematicKind.SERVICE: _Layout("src/services", "{stem}-service.{ext}", "service"),
    SchematicKind.MIDDLEWARE: _Layout("src/middleware", "{stem}-middleware.{ext}", "middleware"),
    SchematicKind.ROUTE: _Layout("src/routes", "{stem}.{ext}", "route"),
    SchematicKind.MODEL: _Layout("src/models", "{stem}.{ext}", "model"),
    SchematicKind.INTERFACE: _Layout("src/interfaces", "{stem}-interface.ts", "interface", typed_only=True),
    SchematicKind.TEST: _Layout("tests", "{stem}.test.{ext}", "test"),
}

# Fan-out order of the resource schematic.
RESOURCE_ORDER: tuple[SchematicKind, ...] = (
    SchematicKind.CONTROLLER,
    SchematicKind.SERVICE,
    SchematicKind.ROUTE,
    SchematicKind.MODEL,
    SchematicKind.INTERFACE,
    SchematicKind.TEST,
)


class SchematicGenerator:
    """Renders schematics into artifacts and writes them into a project."""

    def __init__(self, renderer: TemplateRenderer | None = None) -> None:
        self.renderer = renderer or TemplateRenderer()

    # -- Planning ----------------------------------------------------------

    def plan(self, kind: str | SchematicKind, name: str, dialect: Dialect) -> list[Artifact]:
        """Render the artifacts for *kind* without touching the filesystem.

        Raises:
            InvalidSchematicError: *kind* is not a known schematic.
            MissingNameError: *name* has no usable characters.
            DialectMismatchError: ``interface`` requested for an untyped project.
        """
        kind = SchematicKind.parse(kind)
        derived = derive_base_name(name)
        if not derived.file_stem:
            raise MissingNameError(f"{kind.value} name")

        if kind is SchematicKind.RESOURCE:
            return [
                self._render(member, derived, dialect)
                for member in RESOURCE_ORDER
                if dialect.is_typed or not _LAYOUTS[member].typed_only
            ]

        if _LAYOUTS[kind].typed_only and not dialect.is_typed:
            raise DialectMismatchError(kind.value, dialect.value)
        return [self._render(kind, derived, dialect)]

    def _render(self, kind: SchematicKind, derived: DerivedName, dialect: Dialect) -> Artifact:
        layout = _LAYOUTS[kind]
        stem, type_name = derived.file_stem, derived.type_name
        context: dict[str, Any] = {
            "stem": stem,
            "type_name": type_name,
            "label": derived.base_name.lower(),
            "class_name": type_name if kind is SchematicKind.INTERFACE else with_role_suffix(type_name, layout.role),
            "controller_class": with_role_suffix(type_name, "controller"),
            "service_class": with_role_suffix(type_name, "service"),
            "function_name": camel_case(with_role_suffix(type_name, "middleware")),
            "local_key": camel_case(type_name),
        }
        path = f"{layout.directory}/{layout.filename.format(stem=stem, ext=dialect.extension)}"
        content = self.renderer.render_dialect(f"schematics/{kind.value}.j2", dialect, context)
        return Artifact(path=path, content=content, kind=kind.value, dialect=dialect)

    # -- Generation --------------------------------------------------------

    async def generate(
        self,
        kind: str | SchematicKind,
        name: str,
        target_root: str | Path,
        *,
        policy: WritePolicy = WritePolicy.FAIL,
    ) -> list[Artifact]:
        """Generate *kind* named *name* inside the project at *target_root*.

        The dialect is resolved once from disk and used for every artifact.
        Files are written one at a time in plan order.

        Raises:
            NotAProjectRootError: No ``package.json`` at *target_root*.
            ArtifactExistsError: A file exists with other content and
                *policy* is ``FAIL``.
        """
        root = Path(target_root)
        if not (root / MANIFEST_NAME).is_file():
            raise NotAProjectRootError(root)

        dialect = resolve_dialect(root)
        artifacts = self.plan(kind, name, dialect)

        writer = ArtifactWriter(root, policy)
        await writer.write_all(artifacts)
        return artifacts
