"""Swagger/OpenAPI documentation."""

from __future__ import annotations

from ..manifest import ManifestPatch
from ..options import OptionRecord
from .base import FeatureModule, FeatureOutput


class ApiDocsFeature(FeatureModule):
    name = "api-docs"
    description = "swagger-jsdoc spec served by swagger-ui-express"

    def enabled(self, options: OptionRecord) -> bool:
        return options.api_docs

    def render(self, options: OptionRecord, project_name: str) -> FeatureOutput:
        ctx = self.context(options, project_name)
        artifacts = [
            self.artifact("swagger.config", "src/config/swagger.config.{ext}", options, ctx),
            self.artifact("swagger.yaml", "swagger.yaml", options, ctx, neutral=True),
        ]
        dev: dict[str, str] = {}
        if options.typed:
            dev = {"@types/swagger-jsdoc": "^6.0.1", "@types/swagger-ui-express": "^4.1.6"}
        patch = ManifestPatch(
            dependencies={"swagger-jsdoc": "^6.2.8", "swagger-ui-express": "^5.0.0"},
            dev_dependencies=dev,
        )
        return FeatureOutput(artifacts, patch)
