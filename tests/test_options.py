"""Tests for the option record (expressgen.options).

Covers:
- Defaults and immutability
- Automatic ORM resolution per database (and idempotence)
- Rejection of incompatible ORM/database pairs
- Deduplication of list-valued options
- Dialect helpers
"""

from __future__ import annotations

import pytest
from pydantic import ValidationError

from expressgen.options import (
    AUTO_ORM,
    Database,
    Dialect,
    MessageQueue,
    MonitoringTool,
    OptionRecord,
    Orm,
    resolve_orm,
)

pytestmark = pytest.mark.unit


class TestDialect:
    def test_extensions(self):
        assert Dialect.TYPED.extension == "ts"
        assert Dialect.UNTYPED.extension == "js"

    def test_is_typed(self):
        assert Dialect.TYPED.is_typed
        assert not Dialect.UNTYPED.is_typed


class TestDefaults:
    def test_default_record(self):
        options = OptionRecord()
        assert options.dialect is Dialect.UNTYPED
        assert options.database is Database.POSTGRES
        assert options.orm is Orm.AUTO
        assert options.env_file is True
        assert options.auth_token is False
        assert options.message_queues == ()

    def test_frozen(self):
        options = OptionRecord()
        with pytest.raises(ValidationError):
            options.auth_token = True


class TestOrmResolution:
    @pytest.mark.parametrize(
        "database, expected",
        [
            (Database.POSTGRES, Orm.SEQUELIZE),
            (Database.MYSQL, Orm.SEQUELIZE),
            (Database.MONGO, Orm.MONGOOSE),
            (Database.NONE, Orm.NONE),
        ],
    )
    def test_auto(self, database, expected):
        assert resolve_orm(database, Orm.AUTO) is expected
        assert OptionRecord(database=database).resolved().orm is expected

    def test_every_database_has_an_auto_choice(self):
        assert set(AUTO_ORM) == set(Database)

    def test_explicit_orm_kept(self):
        options = OptionRecord(database="postgres", orm="prisma")
        assert options.resolved_orm is Orm.PRISMA
        assert options.resolved() is options

    def test_resolving_twice_is_stable(self):
        once = OptionRecord(database="mongo").resolved()
        assert once.resolved() == once

    def test_has_persistence(self):
        assert OptionRecord(database="postgres").has_persistence
        assert not OptionRecord(database="none").has_persistence
        assert not OptionRecord(database="postgres", orm="none").has_persistence


class TestCompatibility:
    @pytest.mark.parametrize(
        "database, orm",
        [("postgres", "mongoose"), ("mysql", "mongoose"), ("mongo", "sequelize"), ("mongo", "drizzle"), ("none", "prisma")],
    )
    def test_incompatible_pairs_rejected(self, database, orm):
        with pytest.raises(ValidationError, match="cannot be used"):
            OptionRecord(database=database, orm=orm)

    @pytest.mark.parametrize(
        "database, orm",
        [("postgres", "prisma"), ("mongo", "prisma"), ("mysql", "drizzle"), ("mongo", "mongoose")],
    )
    def test_compatible_pairs_accepted(self, database, orm):
        assert OptionRecord(database=database, orm=orm).orm.value == orm

    def test_unknown_database_rejected(self):
        with pytest.raises(ValidationError):
            OptionRecord(database="oracle")


class TestListOptions:
    def test_queues_deduplicated_in_order(self):
        options = OptionRecord(message_queues=("kafka", "rabbitmq", "kafka"))
        assert options.message_queues == (MessageQueue.KAFKA, MessageQueue.RABBITMQ)

    def test_monitoring_deduplicated(self):
        options = OptionRecord(monitoring=["grafana", "grafana"])
        assert options.monitoring == (MonitoringTool.GRAFANA,)

    def test_unknown_queue_rejected(self):
        with pytest.raises(ValidationError):
            OptionRecord(message_queues=("sqs",))

    def test_service_names_cleaned(self):
        options = OptionRecord(microservices=(" User ", "order", "user", ""))
        assert options.microservices == ("user", "order")


class TestDialectHelpers:
    def test_with_dialect(self):
        options = OptionRecord(auth_token=True)
        typed = options.with_dialect(Dialect.TYPED)
        assert typed.typed and typed.ext == "ts"
        assert typed.auth_token is True
        assert options.with_dialect(Dialect.UNTYPED) is options
