"""Jinja2 template rendering for generated artifacts.

Provides the TemplateRenderer class which loads Jinja2 templates from the
``expressgen/templates/`` directory.  Every artifact kind has exactly one
template; the TypeScript/JavaScript difference is expressed inside the
template through the ``typed`` and ``ext`` context variables rather than by
keeping two copies of near-identical text.
"""

from __future__ import annotations

from pathlib import Path
from typing import Any

from jinja2 import Environment, FileSystemLoader, select_autoescape

from .naming import camel_case, kebab_case, pascal_case, snake_case
from .options import Dialect


# ---------------------------------------------------------------------------
# Template directory discovery
# ---------------------------------------------------------------------------

_DEFAULT_TEMPLATE_DIR = Path(__file__).parent / "templates"


# ---------------------------------------------------------------------------
# TemplateRenderer
# ---------------------------------------------------------------------------


class TemplateRenderer:
    """Renders Jinja2 templates for schematics and feature modules.

    The renderer discovers ``.j2`` template files under a configurable
    template directory.  Rendering is pure: the same template and context
    always produce the same string, and nothing is written to disk here.
    """

    def __init__(self, template_dir: str | Path | None = None) -> None:
        if template_dir is None:
            template_dir = _DEFAULT_TEMPLATE_DIR
        self.template_dir = Path(template_dir)
        self.env = Environment(
            loader=FileSystemLoader(str(self.template_dir)),
            autoescape=select_autoescape([]),
            keep_trailing_newline=True,
            trim_blocks=True,
            lstrip_blocks=True,
        )
        # Register custom filters
        self.env.filters["kebab_case"] = kebab_case
        self.env.filters["pascal_case"] = pascal_case
        self.env.filters["snake_case"] = snake_case
        self.env.filters["camel_case"] = camel_case

    # -- Rendering ---------------------------------------------------------

    def render(self, template_path: str, context: dict[str, Any]) -> str:
        """Render a single template with the provided context.

        Args:
            template_path: Path relative to the template directory (e.g.
                ``"schematics/controller.j2"``).
            context: Dictionary of variables available inside the template.

        Returns:
            The rendered template content as a string.
        """
        template = self.env.get_template(template_path)
        return template.render(**context)

    def render_dialect(
        self, template_path: str, dialect: Dialect, context: dict[str, Any]
    ) -> str:
        """Render *template_path* for *dialect*.

        ``typed`` and ``ext`` are injected so templates never need to be told
        twice which flavour they are producing.
        """
        return self.render(template_path, {**context, **dialect_context(dialect)})


def dialect_context(dialect: Dialect) -> dict[str, Any]:
    """Context variables shared by every dialect-aware template."""
    return {"typed": dialect.is_typed, "ext": dialect.extension, "dialect": dialect.value}
