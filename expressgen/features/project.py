"""Project-level features: entry point, environment file, toolchain configs."""

from __future__ import annotations

from ..manifest import ManifestPatch
from ..options import OptionRecord
from .base import FeatureModule, FeatureOutput
from .persistence import default_database_url


class CoreFeature(FeatureModule):
    """Application entry point and the runtime dependencies every project needs."""

    name = "core"
    description = "Express entry point with cors, helmet and dotenv"

    def render(self, options: OptionRecord, project_name: str) -> FeatureOutput:
        ctx = self.context(options, project_name)
        artifacts = [self.artifact("index", "src/index.{ext}", options, ctx)]

        if options.typed:
            scripts = {"start": "node dist/index.js", "dev": "nodemon --exec ts-node src/index.ts"}
            main = "dist/index.js"
        else:
            scripts = {"start": "node src/index.js", "dev": "nodemon src/index.js"}
            main = "src/index.js"

        patch = ManifestPatch(
            dependencies={
                "express": "^4.18.2",
                "cors": "^2.8.5",
                "helmet": "^7.1.0",
                "dotenv": "^16.3.1",
            },
            dev_dependencies={"nodemon": "^3.0.2"},
            scripts=scripts,
            fields={"main": main, "description": f"{project_name} Express API"},
        )
        return FeatureOutput(artifacts, patch)


class EnvFileFeature(FeatureModule):
    name = "env-file"
    description = ".env.example listing the variables other features read"

    def enabled(self, options: OptionRecord) -> bool:
        return options.env_file

    def render(self, options: OptionRecord, project_name: str) -> FeatureOutput:
        ctx = self.context(
            options,
            project_name,
            has_persistence=options.has_persistence,
            db_url=default_database_url(options.database, project_name),
            queues=[q.value for q in options.message_queues],
        )
        return FeatureOutput([self.artifact("env", ".env.example", options, ctx, neutral=True)], ManifestPatch())


class TypeScriptFeature(FeatureModule):
    name = "typescript"
    description = "TypeScript compiler configuration"

    def enabled(self, options: OptionRecord) -> bool:
        return options.typed

    def render(self, options: OptionRecord, project_name: str) -> FeatureOutput:
        ctx = self.context(options, project_name)
        patch = ManifestPatch(
            dev_dependencies={
                "typescript": "^5.2.2",
                "ts-node": "^10.9.1",
                "@types/node": "^20.5.1",
                "@types/express": "^4.17.21",
                "@types/cors": "^2.8.12",
            },
            scripts={"build": "tsc", "type-check": "tsc --noEmit"},
        )
        return FeatureOutput([self.artifact("tsconfig", "tsconfig.json", options, ctx, neutral=True)], patch)


class LintFeature(FeatureModule):
    name = "lint"
    description = "ESLint and Prettier configuration"

    def render(self, options: OptionRecord, project_name: str) -> FeatureOutput:
        ctx = self.context(options, project_name)
        artifacts = [
            self.artifact("eslintrc", ".eslintrc.js", options, ctx),
            self.artifact("prettierrc", ".prettierrc", options, ctx, neutral=True),
        ]
        dev = {"eslint": "^8.50.0", "prettier": "^3.0.3"}
        if options.typed:
            dev["@typescript-eslint/parser"] = "^6.7.0"
            dev["@typescript-eslint/eslint-plugin"] = "^6.7.0"
        patch = ManifestPatch(
            dev_dependencies=dev,
            scripts={
                "lint": f"eslint src --ext .{options.ext}",
                "format": f"prettier --write \"src/**/*.{options.ext}\"",
            },
        )
        return FeatureOutput(artifacts, patch)


class GitignoreFeature(FeatureModule):
    name = "gitignore"

    def render(self, options: OptionRecord, project_name: str) -> FeatureOutput:
        ctx = self.context(options, project_name)
        return FeatureOutput([self.artifact("gitignore", ".gitignore", options, ctx, neutral=True)], ManifestPatch())
