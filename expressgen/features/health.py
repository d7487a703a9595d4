"""Health-check route."""

from __future__ import annotations

from ..manifest import ManifestPatch
from ..options import OptionRecord
from .base import FeatureModule, FeatureOutput


class HealthFeature(FeatureModule):
    name = "health"
    description = "GET /health liveness route"

    def enabled(self, options: OptionRecord) -> bool:
        return options.health

    def render(self, options: OptionRecord, project_name: str) -> FeatureOutput:
        ctx = self.context(options, project_name)
        return FeatureOutput(
            [self.artifact("health.route", "src/routes/health.{ext}", options, ctx)],
            ManifestPatch(),
        )
