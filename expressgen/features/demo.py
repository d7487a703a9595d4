"""Demo application wiring (weather, todo or blog)."""

from __future__ import annotations

import json

from ..manifest import ManifestPatch
from ..naming import derive_name
from ..options import Demo, OptionRecord
from .base import FeatureModule, FeatureOutput

# Seed records rendered into the demo service, one JSON object per line.
DEMO_SEED: dict[Demo, list[dict[str, object]]] = {
    Demo.WEATHER: [
        {"id": "london", "city": "London", "temperature": 14, "conditions": "cloudy"},
        {"id": "lisbon", "city": "Lisbon", "temperature": 22, "conditions": "sunny"},
        {"id": "oslo", "city": "Oslo", "temperature": 6, "conditions": "rain"},
    ],
    Demo.TODO: [
        {"id": "1", "title": "Read the generated code", "done": False},
        {"id": "2", "title": "Run the test suite", "done": False},
    ],
    Demo.BLOG: [
        {"id": "1", "title": "Hello world", "body": "First post.", "author": "admin"},
        {"id": "2", "title": "Second post", "body": "More to come.", "author": "admin"},
    ],
}


class DemoFeature(FeatureModule):
    name = "demo"
    description = "Small runnable demo resource"

    def enabled(self, options: OptionRecord) -> bool:
        return options.demo is not Demo.NONE

    def render(self, options: OptionRecord, project_name: str) -> FeatureOutput:
        derived = derive_name(options.demo.value)
        ctx = self.context(
            options,
            project_name,
            stem=derived.file_stem,
            type_name=derived.type_name,
            seed=[json.dumps(item) for item in DEMO_SEED[options.demo]],
        )
        stem = derived.file_stem
        artifacts = [
            self.artifact("service", f"src/services/{stem}-service.{{ext}}", options, ctx),
            self.artifact("controller", f"src/controllers/{stem}-controller.{{ext}}", options, ctx),
            self.artifact("route", f"src/routes/{stem}.{{ext}}", options, ctx),
        ]
        return FeatureOutput(artifacts, ManifestPatch())
