"""Multi-service layout: an API gateway plus one cote responder per service."""

from __future__ import annotations

from ..manifest import ManifestPatch
from ..naming import kebab_case
from ..options import OptionRecord
from .base import FeatureModule, FeatureOutput, run_command


def service_names(options: OptionRecord) -> list[str]:
    """Kebab-case service names, duplicates and empty names dropped."""
    names = (kebab_case(name) for name in options.microservices)
    return list(dict.fromkeys(name for name in names if name))


class MicroservicesFeature(FeatureModule):
    name = "microservices"
    description = "cote-based API gateway and services"

    def enabled(self, options: OptionRecord) -> bool:
        return bool(service_names(options))

    def render(self, options: OptionRecord, project_name: str) -> FeatureOutput:
        services = service_names(options)
        ctx = self.context(options, project_name, services=services)

        artifacts = [
            self.artifact("cote.config", "src/config/cote.config.{ext}", options, ctx),
            self.artifact("api.gateway", "src/microservices/api.gateway.{ext}", options, ctx),
        ]
        scripts = {"start:gateway": run_command(options, "src/microservices/api.gateway")}
        for service in services:
            artifacts.append(
                self.artifact(
                    "service",
                    f"src/microservices/services/{service}.service.{{ext}}",
                    options,
                    {**ctx, "service": service},
                )
            )
            scripts[f"start:{service}-service"] = run_command(
                options, f"src/microservices/services/{service}.service"
            )

        run_all = " ".join(f'"npm:start:{name}"' for name in ["gateway", *(f"{s}-service" for s in services)])
        scripts["start:all"] = f"concurrently {run_all}"

        patch = ManifestPatch(
            dependencies={"cote": "^1.0.0"},
            dev_dependencies={"concurrently": "^8.2.0"},
            scripts=scripts,
        )
        return FeatureOutput(artifacts, patch)
