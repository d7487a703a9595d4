"""Jest + supertest test harness."""

from __future__ import annotations

from ..manifest import ManifestPatch
from ..options import OptionRecord
from .base import FeatureModule, FeatureOutput


class TestingFeature(FeatureModule):
    __test__ = False  # keep pytest from collecting this class
    name = "testing"
    description = "Jest configuration and a smoke test for the entry point"

    def enabled(self, options: OptionRecord) -> bool:
        return options.test_framework

    def render(self, options: OptionRecord, project_name: str) -> FeatureOutput:
        ctx = self.context(options, project_name)
        artifacts = [
            self.artifact("jest.config", "jest.config.js", options, ctx),
            self.artifact("setup", "tests/setup.{ext}", options, ctx),
            self.artifact("app.test", "tests/app.test.{ext}", options, ctx),
        ]
        dev = {"jest": "^29.7.0", "supertest": "^6.3.3"}
        if options.typed:
            dev.update(
                {
                    "ts-jest": "^29.1.1",
                    "@types/jest": "^29.5.8",
                    "@types/supertest": "^2.0.16",
                }
            )
        patch = ManifestPatch(
            dev_dependencies=dev,
            scripts={
                "test": "jest",
                "test:watch": "jest --watch",
                "test:coverage": "jest --coverage",
            },
        )
        return FeatureOutput(artifacts, patch)
