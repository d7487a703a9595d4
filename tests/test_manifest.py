"""Tests for package.json patching (expressgen.manifest).

Covers:
- Tolerant manifest loading (missing, invalid, non-object)
- Additive, last-write-wins patch application
- Patch combination
- Manifest writing format and write failures
- Sanitisation of generator-only content
"""

from __future__ import annotations

import json
from pathlib import Path
from unittest.mock import AsyncMock, patch

import pytest

from expressgen.errors import ManifestWriteError
from expressgen.manifest import (
    ManifestPatch,
    apply_patch,
    default_manifest,
    load_manifest,
    merge_manifest,
    sanitize_manifest,
    write_manifest,
)

pytestmark = pytest.mark.unit


class TestLoadManifest:
    def test_reads_existing(self, js_project):
        assert load_manifest(js_project)["name"] == "js-app"

    def test_missing_file_gives_default(self, tmp_path):
        root = tmp_path / "fresh"
        root.mkdir()
        assert load_manifest(root) == {"name": "fresh", "version": "1.0.0"}

    def test_invalid_json_gives_default(self, tmp_path):
        (tmp_path / "package.json").write_text("{not json", encoding="utf-8")
        assert load_manifest(tmp_path) == default_manifest(tmp_path)

    def test_non_object_gives_default(self, tmp_path):
        (tmp_path / "package.json").write_text("[1, 2]", encoding="utf-8")
        assert load_manifest(tmp_path) == default_manifest(tmp_path)


class TestApplyPatch:
    def test_additive(self):
        manifest = {"name": "a", "dependencies": {"left-pad": "^1.0.0"}, "custom": True}
        result = apply_patch(manifest, ManifestPatch(dependencies={"express": "^4.18.2"}))
        assert result["dependencies"] == {"left-pad": "^1.0.0", "express": "^4.18.2"}
        assert result["custom"] is True

    def test_patch_wins_per_key(self):
        manifest = {"scripts": {"start": "node old.js", "lint": "eslint ."}}
        result = apply_patch(manifest, ManifestPatch(scripts={"start": "node src/index.js"}))
        assert result["scripts"] == {"start": "node src/index.js", "lint": "eslint ."}

    def test_existing_order_preserved(self):
        manifest = {"dependencies": {"b": "1", "a": "1"}}
        result = apply_patch(manifest, ManifestPatch(dependencies={"c": "1", "a": "2"}))
        assert list(result["dependencies"]) == ["b", "a", "c"]

    def test_input_not_mutated(self):
        manifest = {"dependencies": {"a": "1"}}
        apply_patch(manifest, ManifestPatch(dependencies={"b": "1"}))
        assert manifest == {"dependencies": {"a": "1"}}

    def test_dev_dependencies_key(self):
        result = apply_patch({}, ManifestPatch(dev_dependencies={"jest": "^29.7.0"}))
        assert result == {"devDependencies": {"jest": "^29.7.0"}}

    def test_fields(self):
        result = apply_patch({"main": "index.js"}, ManifestPatch(fields={"main": "src/index.js"}))
        assert result["main"] == "src/index.js"

    def test_empty_patch_is_identity(self):
        manifest = {"name": "a", "scripts": {"x": "y"}}
        assert apply_patch(manifest, ManifestPatch()) == manifest

    def test_non_dict_section_replaced(self):
        result = apply_patch({"scripts": "broken"}, ManifestPatch(scripts={"start": "node ."}))
        assert result["scripts"] == {"start": "node ."}


class TestManifestPatch:
    def test_combine_last_wins(self):
        combined = ManifestPatch.combine(
            ManifestPatch(dependencies={"a": "1"}, scripts={"s": "one"}),
            ManifestPatch(dependencies={"a": "2", "b": "1"}),
        )
        assert combined.dependencies == {"a": "2", "b": "1"}
        assert combined.scripts == {"s": "one"}

    def test_combine_does_not_mutate(self):
        first = ManifestPatch(dependencies={"a": "1"})
        ManifestPatch.combine(first, ManifestPatch(dependencies={"b": "1"}))
        assert first.dependencies == {"a": "1"}


class TestWriteManifest:
    async def test_format(self, tmp_path):
        path = await write_manifest(tmp_path, {"name": "x"})
        text = path.read_text(encoding="utf-8")
        assert text == '{\n  "name": "x"\n}\n'

    async def test_merge_round_trip(self, js_project):
        merged = await merge_manifest(js_project, ManifestPatch(dependencies={"express": "^4.18.2"}))
        on_disk = json.loads((js_project / "package.json").read_text(encoding="utf-8"))
        assert on_disk == merged
        assert on_disk["dependencies"]["express"] == "^4.18.2"

    async def test_write_failure_raises(self, tmp_path):
        with patch("expressgen.manifest.save_json", AsyncMock(side_effect=PermissionError(13, "denied"))):
            with pytest.raises(ManifestWriteError, match="denied"):
                await write_manifest(tmp_path, {"name": "x"})


class TestSanitize:
    def test_removes_generator_content(self, tmp_path):
        manifest = {
            "name": "",
            "version": "1.0.0",
            "bin": {"expressgen": "cli.js"},
            "files": ["dist"],
            "repository": "github:someone/template",
            "homepage": "https://example.com",
            "bugs": {"url": "https://example.com/issues"},
            "publishConfig": {"access": "public"},
            "dependencies": {"express": "^4.18.2", "degit": "^2.8.4"},
            "devDependencies": {"husky": "^8.0.0", "expressgen": "^0.1.0", "jest": "^29.7.0"},
            "scripts": {"prepare": "husky install", "start": "node src/index.js"},
        }
        result = sanitize_manifest(manifest, tmp_path / "my-api", ["degit", "expressgen"])
        assert result["name"] == "my-api"
        for key in ("bin", "files", "repository", "homepage", "bugs", "publishConfig"):
            assert key not in result
        assert result["dependencies"] == {"express": "^4.18.2"}
        assert result["devDependencies"] == {"jest": "^29.7.0"}
        assert result["scripts"] == {"start": "node src/index.js"}

    def test_keeps_unrelated_prepare(self, tmp_path):
        manifest = {"name": "a", "scripts": {"prepare": "npm run build"}}
        assert sanitize_manifest(manifest, tmp_path)["scripts"]["prepare"] == "npm run build"

    def test_existing_name_kept(self, tmp_path):
        assert sanitize_manifest({"name": "keep-me"}, tmp_path)["name"] == "keep-me"
