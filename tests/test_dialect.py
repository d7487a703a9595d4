"""Tests for dialect detection (expressgen.dialect)."""

from __future__ import annotations

import pytest

from expressgen.dialect import DIALECT_MARKER, resolve_dialect
from expressgen.options import Dialect

pytestmark = pytest.mark.unit


def test_typed_when_marker_present(ts_project):
    assert resolve_dialect(ts_project) is Dialect.TYPED


def test_untyped_without_marker(js_project):
    assert resolve_dialect(js_project) is Dialect.UNTYPED


def test_marker_must_be_a_file(js_project):
    (js_project / DIALECT_MARKER).mkdir()
    assert resolve_dialect(js_project) is Dialect.UNTYPED


def test_read_only(ts_project):
    before = sorted(p.name for p in ts_project.iterdir())
    resolve_dialect(ts_project)
    assert sorted(p.name for p in ts_project.iterdir()) == before
