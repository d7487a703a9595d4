"""Command-line interface for expressgen.

Usage::

    expressgen new my-api --ts --db postgres --jwt --jest
    expressgen generate resource product
    expressgen add docker,health --root ./my-api
"""

from __future__ import annotations

import argparse
import asyncio
import sys
from pathlib import Path
from typing import Any

from pydantic import ValidationError

from . import __version__
from .config import GeneratorConfig
from .errors import ExpressgenError
from .features import feature_names
from .options import Database, Demo, Dialect, MessageQueue, MonitoringTool, OptionRecord, Orm
from .orchestrator import ScaffoldOrchestrator, add_features
from .schematics import SchematicGenerator, SchematicKind
from .utils import console, print_file_table, print_success
from .writer import WritePolicy


def _csv(value: str) -> list[str]:
    return [part.strip() for part in value.split(",") if part.strip()]


def _add_feature_flags(parser: argparse.ArgumentParser) -> None:
    """Flags shared by ``new`` and ``add``."""
    parser.add_argument("--ts", action="store_true", help="Generate TypeScript instead of JavaScript")
    parser.add_argument(
        "--db", choices=[d.value for d in Database], default=Database.POSTGRES.value,
        help="Database (default: postgres)",
    )
    parser.add_argument(
        "--orm", choices=[o.value for o in Orm], default=Orm.AUTO.value,
        help="Data-access technology (default: auto, follows --db)",
    )
    parser.add_argument("--jwt", action="store_true", help="JWT authentication helpers")
    parser.add_argument("--casl", action="store_true", help="CASL authorization")
    parser.add_argument("--roles", action="store_true", help="Role-checking middleware")
    parser.add_argument("--user", action="store_true", help="Example user routes")
    parser.add_argument("--jest", action="store_true", help="Jest + supertest")
    parser.add_argument(
        "--demo", choices=[d.value for d in Demo], default=Demo.NONE.value,
        help="Demo application (default: none)",
    )
    parser.add_argument("--no-dotenv", action="store_true", help="Skip .env.example")
    parser.add_argument("--docker", action="store_true", help="Dockerfile and docker-compose.yml")
    parser.add_argument("--health", action="store_true", help="Health-check route")
    parser.add_argument("--swagger", action="store_true", help="Swagger/OpenAPI documentation")
    parser.add_argument("--rate-limit", action="store_true", help="Rate limiting middleware")
    parser.add_argument("--redis-store", action="store_true", help="Back rate limiting with Redis")
    parser.add_argument("--queues", default="", help="Comma-separated: rabbitmq,kafka")
    parser.add_argument("--monitoring", default="", help="Comma-separated: prometheus,grafana")
    parser.add_argument("--websocket", action="store_true", help="socket.io realtime channels")
    parser.add_argument("--microservices", default="", help="Comma-separated service names")


def options_from_args(args: argparse.Namespace) -> OptionRecord:
    """Build the option record from parsed arguments.

    Raises:
        pydantic.ValidationError: Unknown queue/monitoring value or an ORM
            that cannot serve the chosen database.
    """
    values: dict[str, Any] = {
        "dialect": Dialect.TYPED if args.ts else Dialect.UNTYPED,
        "database": args.db,
        "orm": args.orm,
        "auth_token": args.jwt,
        "authorization": args.casl,
        "roles": args.roles,
        "example_resource": args.user,
        "test_framework": args.jest,
        "demo": args.demo,
        "env_file": not args.no_dotenv,
        "docker": args.docker,
        "health": args.health,
        "api_docs": args.swagger,
        "rate_limit": args.rate_limit,
        "rate_limit_store": args.redis_store,
        "message_queues": tuple(_csv(args.queues)),
        "monitoring": tuple(_csv(args.monitoring)),
        "realtime": args.websocket,
        "microservices": tuple(_csv(args.microservices)),
    }
    return OptionRecord(**values)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="expressgen",
        description="expressgen -- Express.js project generator",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog=(
            "Examples:\n"
            "  expressgen new my-api --ts --db postgres --jwt --jest\n"
            "  expressgen new shop --db mongo --docker --queues rabbitmq,kafka\n"
            "  expressgen generate resource product\n"
            "  expressgen generate controller UserController --force\n"
            "  expressgen add docker,health --root ./my-api\n"
        ),
    )
    parser.add_argument("--version", action="version", version=f"expressgen {__version__}")
    sub = parser.add_subparsers(dest="command", required=True)

    new = sub.add_parser("new", help="Create a new project", formatter_class=argparse.RawDescriptionHelpFormatter)
    new.add_argument("name", help="Project directory name")
    _add_feature_flags(new)
    new.add_argument("--output", "-o", default=None, help="Parent directory (default: current directory)")
    new.add_argument("--template", default=None, help="Base template: local directory or .tar.gz URL")

    generate = sub.add_parser("generate", aliases=["g"], help="Generate a schematic in an existing project")
    generate.add_argument("schematic", help=f"One of: {', '.join(k.value for k in SchematicKind)}")
    generate.add_argument("name", help="Name of the generated artifact")
    generate.add_argument("--root", default=".", help="Project root (default: current directory)")
    generate.add_argument("--force", action="store_true", help="Overwrite files that differ")

    add = sub.add_parser("add", help="Add feature modules to an existing project")
    add.add_argument("features", help=f"Comma-separated: {', '.join(feature_names())}")
    _add_feature_flags(add)
    add.add_argument("--root", default=".", help="Project root (default: current directory)")

    return parser


async def _run(args: argparse.Namespace, config: GeneratorConfig) -> None:
    if args.command == "new":
        if args.output is not None:
            config.output_dir = Path(args.output)
        if args.template is not None:
            config.template = args.template
        orchestrator = ScaffoldOrchestrator(config, options_from_args(args))
        await orchestrator.run(args.name)

    elif args.command in ("generate", "g"):
        policy = WritePolicy.OVERWRITE if args.force else WritePolicy.FAIL
        artifacts = await SchematicGenerator().generate(args.schematic, args.name, Path(args.root), policy=policy)
        print_file_table([(a.kind, a.path) for a in artifacts], title="Files generated")
        print_success(f"Generated {len(artifacts)} file(s).")

    elif args.command == "add":
        await add_features(Path(args.root), options_from_args(args), _csv(args.features), config)


def main(argv: list[str] | None = None) -> None:
    """CLI entry point for ``expressgen`` and ``python -m expressgen``."""
    parser = build_parser()
    args = parser.parse_args(argv)

    try:
        config = GeneratorConfig.from_env()
    except ValidationError as exc:
        console.print(f"[bold red]Error:[/bold red] Invalid configuration: {_describe(exc)}")
        sys.exit(1)

    try:
        asyncio.run(_run(args, config))
    except ExpressgenError as exc:
        console.print(f"[bold red]Error:[/bold red] {exc}")
        sys.exit(1)
    except ValidationError as exc:
        console.print(f"[bold red]Error:[/bold red] Invalid options: {_describe(exc)}")
        sys.exit(1)


def _describe(exc: ValidationError) -> str:
    parts = []
    for err in exc.errors():
        field = ".".join(str(part) for part in err["loc"])
        parts.append(f"{field}: {err['msg']}" if field else err["msg"])
    return "; ".join(parts)


if __name__ == "__main__":
    main()
