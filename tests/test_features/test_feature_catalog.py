"""Tests for the feature catalog and framework (expressgen.features).

Covers:
- Declared order and unique names
- select_features ordering and unknown names
- Every feature renders for both dialects without touching the filesystem
- Artifact dialects match the pass dialect
- Determinism across renderer instances
- apply_feature writes artifacts and returns the patch unmerged
"""

from __future__ import annotations

import json

import pytest

from expressgen.errors import UnknownFeatureError
from expressgen.features import (
    FEATURE_SEQUENCE,
    apply_feature,
    build_features,
    feature_names,
    run_command,
    select_features,
)
from expressgen.options import Dialect, OptionRecord
from expressgen.templates import TemplateRenderer

pytestmark = pytest.mark.unit


class TestCatalog:
    def test_declared_order(self):
        assert feature_names() == [
            "core",
            "env-file",
            "persistence",
            "auth-token",
            "authorization",
            "roles",
            "example-resource",
            "typescript",
            "testing",
            "lint",
            "gitignore",
            "demo",
            "docker",
            "health",
            "api-docs",
            "rate-limit",
            "messaging",
            "monitoring",
            "realtime",
            "microservices",
        ]

    def test_names_unique(self):
        names = feature_names()
        assert len(names) == len(set(names)) == len(FEATURE_SEQUENCE)

    def test_build_shares_renderer(self, renderer):
        features = build_features(renderer)
        assert all(f.renderer is renderer for f in features)

    def test_select_keeps_declared_order(self, renderer):
        selected = select_features(["health", "docker", " core "], renderer)
        assert [f.name for f in selected] == ["core", "docker", "health"]

    def test_select_unknown(self, renderer):
        with pytest.raises(UnknownFeatureError) as exc_info:
            select_features(["docker", "kubernetes"], renderer)
        assert exc_info.value.name == "kubernetes"

    def test_run_command(self):
        assert run_command(OptionRecord(), "src/x") == "node src/x.js"
        assert run_command(OptionRecord(dialect="typed"), "src/x") == "ts-node src/x.ts"


class TestRenderAll:
    @pytest.mark.parametrize("dialect", list(Dialect))
    def test_every_enabled_feature_renders(self, renderer, everything_options, dialect):
        options = everything_options.with_dialect(dialect)
        for feature in build_features(renderer):
            if not feature.enabled(options):
                continue
            output = feature.render(options, "shop-api")
            assert output.artifacts, feature.name
            for artifact in output.artifacts:
                assert artifact.kind == feature.name
                assert artifact.content.strip(), artifact.path
                assert artifact.dialect in (None, dialect), artifact.path
                if artifact.path.startswith(("src/", "tests/")):
                    assert artifact.path.endswith(f".{dialect.extension}"), artifact.path

    def test_no_duplicate_paths(self, renderer, everything_options):
        paths = [
            a.path
            for f in build_features(renderer)
            if f.enabled(everything_options)
            for a in f.render(everything_options, "shop-api").artifacts
        ]
        assert len(paths) == len(set(paths))

    def test_deterministic(self, everything_options):
        def render_all(renderer):
            return [
                (a.path, a.content)
                for f in build_features(renderer)
                if f.enabled(everything_options)
                for a in f.render(everything_options, "shop-api").artifacts
            ]

        assert render_all(TemplateRenderer()) == render_all(TemplateRenderer())


class TestApplyFeature:
    async def test_writes_and_returns_patch(self, renderer, js_project, js_options):
        [core] = select_features(["core"], renderer)
        output = await apply_feature(core, js_project, js_options)
        assert (js_project / "src/index.js").is_file()
        assert output.patch.dependencies["express"] == "^4.18.2"
        manifest = json.loads((js_project / "package.json").read_text(encoding="utf-8"))
        assert "express" not in manifest.get("dependencies", {})

    async def test_project_name_defaults_to_root(self, renderer, js_project, js_options):
        [core] = select_features(["core"], renderer)
        await apply_feature(core, js_project, js_options)
        assert 'const APP_NAME = "js-app";' in (js_project / "src/index.js").read_text(encoding="utf-8")
