"""Message-queue producers and consumers (RabbitMQ, Kafka)."""

from __future__ import annotations

from ..manifest import ManifestPatch
from ..options import MessageQueue, OptionRecord
from .base import FeatureModule, FeatureOutput, run_command

_QUEUE_DEPENDENCIES: dict[MessageQueue, dict[str, str]] = {
    MessageQueue.RABBITMQ: {"amqplib": "^0.10.3"},
    MessageQueue.KAFKA: {"kafkajs": "^2.2.4"},
}


class MessagingFeature(FeatureModule):
    name = "messaging"
    description = "Queue connection manager with producer and consumer entry points"

    def enabled(self, options: OptionRecord) -> bool:
        return bool(options.message_queues)

    def render(self, options: OptionRecord, project_name: str) -> FeatureOutput:
        queues = [q.value for q in options.message_queues]
        ctx = self.context(options, project_name, queues=queues)

        artifacts = [
            self.artifact("queue.config", "src/config/queue.config.{ext}", options, ctx),
            self.artifact("connection.manager", "src/queues/connection.manager.{ext}", options, ctx),
        ]
        for queue in queues:
            artifacts.append(self.artifact(f"{queue}.queue", f"src/queues/{queue}.queue.{{ext}}", options, ctx))
        artifacts.append(self.artifact("producer", "src/queues/producer.{ext}", options, ctx))
        artifacts.append(self.artifact("consumer", "src/queues/consumer.{ext}", options, ctx))

        dependencies: dict[str, str] = {}
        dev_dependencies: dict[str, str] = {}
        for queue in options.message_queues:
            dependencies.update(_QUEUE_DEPENDENCIES[queue])
        if options.typed and MessageQueue.RABBITMQ in options.message_queues:
            dev_dependencies["@types/amqplib"] = "^0.10.4"

        patch = ManifestPatch(
            dependencies=dependencies,
            dev_dependencies=dev_dependencies,
            scripts={
                "start:producer": run_command(options, "src/queues/producer"),
                "start:consumer": run_command(options, "src/queues/consumer"),
            },
        )
        return FeatureOutput(artifacts, patch)
