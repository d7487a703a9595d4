"""socket.io realtime channels."""

from __future__ import annotations

from ..manifest import ManifestPatch
from ..options import OptionRecord
from .base import FeatureModule, FeatureOutput


class RealtimeFeature(FeatureModule):
    name = "realtime"
    description = "socket.io server handler and a sample client"

    def enabled(self, options: OptionRecord) -> bool:
        return options.realtime

    def render(self, options: OptionRecord, project_name: str) -> FeatureOutput:
        ctx = self.context(options, project_name)
        artifacts = [
            self.artifact("websocket.config", "src/config/websocket.config.{ext}", options, ctx),
            self.artifact("socket.handler", "src/websocket/socket.handler.{ext}", options, ctx),
            # The sample client is plain JS regardless of dialect.
            self.artifact("websocket.client", "client/websocket.client.js", options, ctx, neutral=True),
        ]
        patch = ManifestPatch(dependencies={"socket.io": "^4.7.0", "socket.io-client": "^4.7.0"})
        return FeatureOutput(artifacts, patch)
