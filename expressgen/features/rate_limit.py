"""Request rate limiting and slow-down middleware, optionally backed by Redis."""

from __future__ import annotations

from ..manifest import ManifestPatch
from ..options import OptionRecord
from .base import FeatureModule, FeatureOutput


class RateLimitFeature(FeatureModule):
    name = "rate-limit"
    description = "express-rate-limit and express-slow-down"

    def enabled(self, options: OptionRecord) -> bool:
        return options.rate_limit

    def render(self, options: OptionRecord, project_name: str) -> FeatureOutput:
        store = options.rate_limit_store
        ctx = self.context(options, project_name, store=store)
        artifacts = [
            self.artifact("rate-limit.config", "src/config/rate-limit.config.{ext}", options, ctx),
            self.artifact("rate-limit.middleware", "src/middleware/rate-limit.middleware.{ext}", options, ctx),
        ]
        dependencies = {"express-rate-limit": "^7.1.0", "express-slow-down": "^2.0.1"}
        if store:
            dependencies.update({"redis": "^4.6.0", "rate-limit-redis": "^4.2.0"})
        return FeatureOutput(artifacts, ManifestPatch(dependencies=dependencies))
