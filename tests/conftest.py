"""Shared pytest fixtures for the expressgen test suite.

Provides reusable fixtures for:
- Temporary project roots (JavaScript and TypeScript)
- A real TemplateRenderer over the packaged templates
- Option records for common scenarios
- A silenced Rich console
"""

from __future__ import annotations

import json
from io import StringIO
from pathlib import Path

import pytest
from rich.console import Console

from expressgen import cli, orchestrator, utils
from expressgen.options import Dialect, OptionRecord
from expressgen.templates import TemplateRenderer


# ---------------------------------------------------------------------------
# Console
# ---------------------------------------------------------------------------


@pytest.fixture(autouse=True)
def quiet_console(monkeypatch):
    """Route Rich output to a throwaway buffer so test output stays readable."""
    quiet = Console(file=StringIO(), width=200)
    for module in (utils, orchestrator, cli):
        monkeypatch.setattr(module, "console", quiet)
    yield quiet


# ---------------------------------------------------------------------------
# Paths & Directories
# ---------------------------------------------------------------------------


@pytest.fixture
def js_project(tmp_path: Path) -> Path:
    """An existing JavaScript project root (package.json, no tsconfig.json)."""
    root = tmp_path / "js-app"
    root.mkdir()
    (root / "package.json").write_text(
        json.dumps({"name": "js-app", "version": "1.0.0", "dependencies": {}}, indent=2) + "\n",
        encoding="utf-8",
    )
    yield root


@pytest.fixture
def ts_project(tmp_path: Path) -> Path:
    """An existing TypeScript project root (package.json and tsconfig.json)."""
    root = tmp_path / "ts-app"
    root.mkdir()
    (root / "package.json").write_text(
        json.dumps({"name": "ts-app", "version": "1.0.0"}, indent=2) + "\n",
        encoding="utf-8",
    )
    (root / "tsconfig.json").write_text("{}\n", encoding="utf-8")
    yield root


# ---------------------------------------------------------------------------
# Rendering
# ---------------------------------------------------------------------------


@pytest.fixture(scope="session")
def renderer() -> TemplateRenderer:
    """A renderer over the packaged templates."""
    return TemplateRenderer()


# ---------------------------------------------------------------------------
# Option records
# ---------------------------------------------------------------------------


@pytest.fixture
def js_options() -> OptionRecord:
    """Defaults: untyped, postgres, auto ORM, .env.example only."""
    return OptionRecord().resolved()


@pytest.fixture
def ts_jwt_options() -> OptionRecord:
    """typed + postgres + auto ORM + JWT."""
    return OptionRecord(dialect=Dialect.TYPED, database="postgres", orm="auto", auth_token=True).resolved()


@pytest.fixture
def everything_options() -> OptionRecord:
    """Every toggle on, typed, with both queues and both monitoring tools."""
    return OptionRecord(
        dialect=Dialect.TYPED,
        database="postgres",
        auth_token=True,
        authorization=True,
        roles=True,
        example_resource=True,
        test_framework=True,
        demo="weather",
        docker=True,
        health=True,
        api_docs=True,
        rate_limit=True,
        rate_limit_store=True,
        message_queues=("rabbitmq", "kafka"),
        monitoring=("prometheus", "grafana"),
        realtime=True,
        microservices=("user", "order"),
    ).resolved()
