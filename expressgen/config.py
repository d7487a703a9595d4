"""expressgen configuration.

Settings that belong to the tool rather than to the generated project: where
the base template comes from, how long an HTTP fetch may take, and which
packages are considered generator-only when the emitted manifest is
sanitised.  ``GeneratorConfig.from_env`` is the only place environment
variables are read; the resulting object is passed explicitly from the CLI
down through the orchestrator.
"""

from __future__ import annotations

import os
from pathlib import Path
from typing import Any

from pydantic import BaseModel, Field

DEFAULT_GENERATOR_PACKAGES: tuple[str, ...] = ("degit", "expressgen")


class GeneratorConfig(BaseModel):
    """Global expressgen configuration."""

    output_dir: Path = Field(default=Path("."), description="Parent directory for new projects")
    template: str = Field(
        default="",
        description="Base template: empty for the built-in skeleton, a local path, or an http(s) .tar.gz URL",
    )
    http_timeout: int = Field(default=60, ge=1, description="Template download timeout in seconds")
    generator_packages: list[str] = Field(
        default_factory=lambda: list(DEFAULT_GENERATOR_PACKAGES),
        description="Packages stripped from the emitted manifest",
    )

    # ------------------------------------------------------------------
    # Serialisation helpers
    # ------------------------------------------------------------------

    def save(self, path: Path) -> Path:
        """Persist the configuration to a JSON file and return its path."""
        target = Path(path)
        target.parent.mkdir(parents=True, exist_ok=True)
        target.write_text(self.model_dump_json(indent=2), encoding="utf-8")
        return target

    @classmethod
    def load(cls, path: Path) -> "GeneratorConfig":
        """Load a previously-saved configuration from JSON."""
        raw = Path(path).read_text(encoding="utf-8")
        return cls.model_validate_json(raw)

    @classmethod
    def from_env(cls) -> "GeneratorConfig":
        """Build a ``GeneratorConfig`` from environment variables.

        Recognised variables (all optional):
            EXPRESSGEN_OUTPUT_DIR, EXPRESSGEN_TEMPLATE, EXPRESSGEN_HTTP_TIMEOUT,
            EXPRESSGEN_GENERATOR_PACKAGES (comma-separated).

        Raises:
            pydantic.ValidationError: A value does not fit its field, for
                example a non-numeric or zero ``EXPRESSGEN_HTTP_TIMEOUT``.
        """
        kwargs: dict[str, Any] = {}
        if os.environ.get("EXPRESSGEN_OUTPUT_DIR"):
            kwargs["output_dir"] = Path(os.environ["EXPRESSGEN_OUTPUT_DIR"])
        if os.environ.get("EXPRESSGEN_TEMPLATE"):
            kwargs["template"] = os.environ["EXPRESSGEN_TEMPLATE"]
        if os.environ.get("EXPRESSGEN_HTTP_TIMEOUT"):
            kwargs["http_timeout"] = os.environ["EXPRESSGEN_HTTP_TIMEOUT"]
        if os.environ.get("EXPRESSGEN_GENERATOR_PACKAGES"):
            kwargs["generator_packages"] = [
                p.strip()
                for p in os.environ["EXPRESSGEN_GENERATOR_PACKAGES"].split(",")
                if p.strip()
            ]
        return cls(**kwargs)
