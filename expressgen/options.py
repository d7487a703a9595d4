"""Typed option record for a generation pass.

``OptionRecord`` is built once per invocation (by the CLI or by a caller of
the library) and is read-only afterwards.  Every toggle is independent of the
others; the only derived value is the data-access technology, which starts as
``Orm.AUTO`` and is resolved to a concrete choice by :meth:`OptionRecord.resolved`
before any generator runs.
"""

from __future__ import annotations

from enum import Enum

from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator


# ---------------------------------------------------------------------------
# Enumerations
# ---------------------------------------------------------------------------


class Dialect(str, Enum):
    """Output flavour: TypeScript (typed) or plain JavaScript (untyped)."""

    TYPED = "typed"
    UNTYPED = "untyped"

    @property
    def extension(self) -> str:
        return "ts" if self is Dialect.TYPED else "js"

    @property
    def is_typed(self) -> bool:
        return self is Dialect.TYPED


class Database(str, Enum):
    POSTGRES = "postgres"
    MYSQL = "mysql"
    MONGO = "mongo"
    NONE = "none"


class Orm(str, Enum):
    AUTO = "auto"
    PRISMA = "prisma"
    SEQUELIZE = "sequelize"
    DRIZZLE = "drizzle"
    MONGOOSE = "mongoose"
    NONE = "none"


class Demo(str, Enum):
    WEATHER = "weather"
    TODO = "todo"
    BLOG = "blog"
    NONE = "none"


class MessageQueue(str, Enum):
    RABBITMQ = "rabbitmq"
    KAFKA = "kafka"


class MonitoringTool(str, Enum):
    PROMETHEUS = "prometheus"
    GRAFANA = "grafana"


# Databases each concrete ORM can talk to.
ORM_COMPATIBILITY: dict[Orm, frozenset[Database]] = {
    Orm.PRISMA: frozenset({Database.POSTGRES, Database.MYSQL, Database.MONGO}),
    Orm.SEQUELIZE: frozenset({Database.POSTGRES, Database.MYSQL}),
    Orm.DRIZZLE: frozenset({Database.POSTGRES, Database.MYSQL}),
    Orm.MONGOOSE: frozenset({Database.MONGO}),
}

# What ``Orm.AUTO`` becomes for each database.
AUTO_ORM: dict[Database, Orm] = {
    Database.POSTGRES: Orm.SEQUELIZE,
    Database.MYSQL: Orm.SEQUELIZE,
    Database.MONGO: Orm.MONGOOSE,
    Database.NONE: Orm.NONE,
}


def resolve_orm(database: Database, orm: Orm) -> Orm:
    """Return the concrete ORM for *database* when *orm* is ``auto``."""
    if orm is Orm.AUTO:
        return AUTO_ORM[database]
    return orm


# ---------------------------------------------------------------------------
# Option record
# ---------------------------------------------------------------------------


class OptionRecord(BaseModel):
    """Immutable set of choices driving one generation pass."""

    model_config = ConfigDict(frozen=True)

    dialect: Dialect = Field(default=Dialect.UNTYPED)
    database: Database = Field(default=Database.POSTGRES)
    orm: Orm = Field(default=Orm.AUTO, description="Data-access technology; 'auto' follows the database")
    auth_token: bool = Field(default=False, description="JWT sign/verify helpers")
    authorization: bool = Field(default=False, description="CASL capability-based authorization")
    roles: bool = Field(default=False, description="Role-checking middleware")
    example_resource: bool = Field(default=False, description="Example user routes")
    test_framework: bool = Field(default=False, description="Jest + supertest")
    demo: Demo = Field(default=Demo.NONE)
    env_file: bool = Field(default=True, description="Emit .env.example")
    docker: bool = Field(default=False)
    health: bool = Field(default=False, description="Health-check route")
    message_queues: tuple[MessageQueue, ...] = Field(default=())
    monitoring: tuple[MonitoringTool, ...] = Field(default=())
    rate_limit: bool = Field(default=False)
    rate_limit_store: bool = Field(default=False, description="Back rate limiting with Redis")
    api_docs: bool = Field(default=False, description="Swagger/OpenAPI documentation")
    realtime: bool = Field(default=False, description="socket.io realtime channels")
    microservices: tuple[str, ...] = Field(default=(), description="Service names for the multi-service layout")

    @field_validator("message_queues", "monitoring", mode="after")
    @classmethod
    def _dedupe(cls, value: tuple) -> tuple:
        return tuple(dict.fromkeys(value))

    @field_validator("microservices", mode="after")
    @classmethod
    def _clean_service_names(cls, value: tuple[str, ...]) -> tuple[str, ...]:
        cleaned = tuple(name.strip().lower() for name in value if name.strip())
        return tuple(dict.fromkeys(cleaned))

    @model_validator(mode="after")
    def _check_orm_compatibility(self) -> "OptionRecord":
        if self.orm in (Orm.AUTO, Orm.NONE):
            return self
        supported = ORM_COMPATIBILITY[self.orm]
        if self.database not in supported:
            raise ValueError(
                f"ORM '{self.orm.value}' cannot be used with database '{self.database.value}'"
            )
        return self

    # -- Derived values ----------------------------------------------------

    @property
    def resolved_orm(self) -> Orm:
        return resolve_orm(self.database, self.orm)

    @property
    def typed(self) -> bool:
        return self.dialect.is_typed

    @property
    def ext(self) -> str:
        return self.dialect.extension

    @property
    def has_persistence(self) -> bool:
        return self.resolved_orm is not Orm.NONE

    def resolved(self) -> "OptionRecord":
        """Return a copy with ``orm`` resolved to a concrete technology.

        Resolving an already-resolved record returns an equal record.
        """
        if self.orm is not Orm.AUTO:
            return self
        return self.model_copy(update={"orm": self.resolved_orm})

    def with_dialect(self, dialect: Dialect) -> "OptionRecord":
        """Return a copy rendered in *dialect* (used when the dialect comes from disk)."""
        if dialect is self.dialect:
            return self
        return self.model_copy(update={"dialect": dialect})
