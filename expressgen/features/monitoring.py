"""Metrics collection with Prometheus scraping and a Grafana dashboard."""

from __future__ import annotations

from typing import Any

from ..manifest import ManifestPatch
from ..naming import kebab_case
from ..options import MonitoringTool, OptionRecord
from ..utils import dump_json
from ..writer import Artifact
from .base import FeatureModule, FeatureOutput


def grafana_dashboard(project_name: str) -> dict[str, Any]:
    """Dashboard model with request-rate and latency panels."""
    job = kebab_case(project_name) or "app"
    return {
        "title": f"{project_name} overview",
        "uid": f"{job}-overview",
        "schemaVersion": 38,
        "time": {"from": "now-1h", "to": "now"},
        "panels": [
            {
                "id": 1,
                "type": "timeseries",
                "title": "Requests per second",
                "gridPos": {"x": 0, "y": 0, "w": 12, "h": 8},
                "targets": [
                    {"expr": f'sum(rate(http_request_duration_seconds_count{{job="{job}"}}[5m]))'}
                ],
            },
            {
                "id": 2,
                "type": "timeseries",
                "title": "p95 latency",
                "gridPos": {"x": 12, "y": 0, "w": 12, "h": 8},
                "targets": [
                    {
                        "expr": (
                            "histogram_quantile(0.95, sum(rate("
                            f'http_request_duration_seconds_bucket{{job="{job}"}}[5m])) by (le))'
                        )
                    }
                ],
            },
        ],
    }


class MonitoringFeature(FeatureModule):
    name = "monitoring"
    description = "Request metrics with Prometheus and Grafana"

    def enabled(self, options: OptionRecord) -> bool:
        return bool(options.monitoring)

    def render(self, options: OptionRecord, project_name: str) -> FeatureOutput:
        prometheus = MonitoringTool.PROMETHEUS in options.monitoring
        grafana = MonitoringTool.GRAFANA in options.monitoring
        ctx = self.context(options, project_name, prometheus=prometheus)

        artifacts = [
            self.artifact("monitoring.config", "src/config/monitoring.config.{ext}", options, ctx),
            self.artifact("metrics.collector", "src/monitoring/metrics.collector.{ext}", options, ctx),
        ]
        if grafana:
            artifacts.append(
                Artifact(
                    path="monitoring/grafana/dashboard.json",
                    content=dump_json(grafana_dashboard(project_name)),
                    kind=self.name,
                )
            )
        if prometheus:
            artifacts.append(self.artifact("prometheus.yml", "monitoring/prometheus.yml", options, ctx, neutral=True))

        dependencies = {"prom-client": "^15.0.0"} if prometheus else {}
        patch = ManifestPatch(
            dependencies=dependencies,
            scripts={"metrics": "curl -s http://localhost:3000/metrics"},
        )
        return FeatureOutput(artifacts, patch)
