"""Command-line front-end for FoldIt.

Parses ``argv`` with argparse, turns the result into a validated
``ScaffoldRequest`` and runs it through the ``ScaffoldOrchestrator``.
``main`` is the only place in the package that terminates the process.
"""

from __future__ import annotations

import argparse
import asyncio
import sys
from typing import Any, NoReturn, Optional

from pydantic import ValidationError

from foldit import __version__
from foldit.config import ExecutionContext
from foldit.errors import UsageError
from foldit.scaffolder.generator import ScaffoldOrchestrator
from foldit.scaffolder.models import (
    AUTH_PROVIDERS,
    DB_PROVIDERS,
    HTTP_METHODS,
    SERVICE_TYPES,
    ApiOptions,
    BetterAuthOptions,
    DockerOptions,
    EslintPrettierOptions,
    KubeOptions,
    NextAuthOptions,
    PageOptions,
    PrismaOptions,
    ScaffoldRequest,
    ServiceOptions,
    ShadcnOptions,
    StructureOptions,
)
from foldit.utils import console, err_console, print_error, print_plain

PROG = "foldit"
COMMANDS: tuple[str, ...] = (
    "generate-page",
    "generate-api",
    "generate-service",
    "generate-structure",
    "integrate",
    "dockerize",
    "add-kube",
)
VERSION_TEXT = f"FoldIt CLI v{__version__}"


class CliParser(argparse.ArgumentParser):
    """ArgumentParser that raises ``UsageError`` instead of exiting with status 2."""

    def error(self, message: str) -> NoReturn:
        raise UsageError(message, usage=self.format_usage())


def _csv(value: str) -> list[str]:
    return [item.strip() for item in value.split(",") if item.strip()]


# ---------------------------------------------------------------------------
# Parser construction
# ---------------------------------------------------------------------------


def build_parser() -> tuple[CliParser, dict[str, CliParser]]:
    """Build the top-level parser.

    Returns:
        The root parser and a mapping of command name (``"integrate-prisma"``
        style for integrations) to its sub-parser, used for usage text.
    """
    parser = CliParser(
        prog=PROG,
        description="FoldIt CLI -- scaffold Next.js pages, API routes, services and tooling",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog=(
            "Examples:\n"
            "  foldit generate-page blog --dynamic slug --with-test\n"
            "  foldit generate-api posts --methods GET,POST,PUT,DELETE --auth\n"
            "  foldit dockerize --with-compose --production\n"
            "  foldit integrate prisma --db postgresql --with-seed\n"
        ),
    )
    parser.add_argument("-v", "--version", action="version", version=VERSION_TEXT)

    common = CliParser(add_help=False)
    common.add_argument(
        "--skip-install",
        action="store_true",
        default=None,
        help="Print install and tool commands instead of running them",
    )
    common.add_argument(
        "--verbose", action="store_true", default=None, help="Show tracebacks for errors"
    )

    commands = parser.add_subparsers(dest="command", metavar="<command>")
    by_command: dict[str, CliParser] = {}

    # -- generate-page ------------------------------------------------------
    page = commands.add_parser(
        "generate-page", parents=[common], help="Generate a Next.js page"
    )
    page.add_argument("name", nargs="?", default="", help="Page name or route path")
    page.add_argument("--with-component", action="store_true", help="Create a components folder")
    page.add_argument("--with-test", action="store_true", help="Create a test file")
    page.add_argument("--dynamic", metavar="PARAM", help="Add a dynamic [PARAM] segment")
    page.add_argument(
        "--catch-all", action="store_true", help="Make the dynamic segment catch-all [...PARAM]"
    )
    page.set_defaults(options_cls=PageOptions)
    by_command["generate-page"] = page

    # -- generate-api -------------------------------------------------------
    api = commands.add_parser(
        "generate-api", parents=[common], help="Generate a Next.js API route"
    )
    api.add_argument("name", nargs="?", default="", help="API route name or path")
    api.add_argument(
        "--methods",
        type=_csv,
        help=f"Comma-separated HTTP methods ({', '.join(HTTP_METHODS)}; default GET,POST)",
    )
    api.add_argument("--auth", action="store_true", help="Add an authentication check")
    api.add_argument("--prisma", action="store_true", help="Add a Prisma placeholder query")
    api.add_argument("--dynamic", metavar="PARAM", help="Add a dynamic [PARAM] segment")
    api.add_argument(
        "--catch-all", action="store_true", help="Make the dynamic segment catch-all [...PARAM]"
    )
    api.set_defaults(options_cls=ApiOptions)
    by_command["generate-api"] = api

    # -- generate-service ---------------------------------------------------
    service = commands.add_parser(
        "generate-service", parents=[common], help="Generate an axios service"
    )
    service.add_argument("name", nargs="?", default="", help="Service name")
    service.add_argument("--base-url", help="Base URL for the service")
    service.add_argument("--with-types", action="store_true", help="Generate a types file")
    service.add_argument("--with-interceptors", action="store_true", help="Add axios interceptors")
    service.add_argument(
        "--with-error-handling", action="store_true", help="Handle 401/403/5xx in interceptors"
    )
    service.add_argument("--with-auth", action="store_true", help="Attach the auth token")
    service.add_argument("--with-retry", action="store_true", help="Add retry with backoff")
    service.add_argument("--with-cache", action="store_true", help="Add sessionStorage caching")
    service.add_argument("--max-retries", type=int, help="Retry attempts (default 3)")
    service.add_argument("--retry-delay", type=int, help="Base retry delay in ms (default 1000)")
    service.set_defaults(options_cls=ServiceOptions)
    by_command["generate-service"] = service

    # -- generate-structure -------------------------------------------------
    structure = commands.add_parser(
        "generate-structure", parents=[common], help="Generate the src/ folder structure"
    )
    structure.add_argument(
        "structure_type", nargs="?", choices=("basic", "medium"), help="Structure type"
    )
    structure.add_argument("--type", choices=("basic", "medium"), help="Structure type")
    structure.set_defaults(options_cls=StructureOptions)
    by_command["generate-structure"] = structure

    # -- dockerize ----------------------------------------------------------
    docker = commands.add_parser(
        "dockerize", parents=[common], help="Add Docker configuration"
    )
    docker.add_argument("--node-version", help="Node.js image tag (default 18-alpine)")
    docker.add_argument("--port", type=int, help="Application port (default 3000)")
    docker.add_argument("--with-compose", action="store_true", help="Create docker-compose.yml")
    docker.add_argument(
        "--no-ignore", dest="with_ignore", action="store_false", help="Skip .dockerignore"
    )
    docker.add_argument("--production", action="store_true", help="Production build")
    docker.set_defaults(options_cls=DockerOptions)
    by_command["dockerize"] = docker

    # -- add-kube -----------------------------------------------------------
    kube = commands.add_parser(
        "add-kube", parents=[common], help="Add Kubernetes manifests"
    )
    kube.add_argument("--namespace", help="Namespace (default 'default')")
    kube.add_argument("--replicas", type=int, help="Replica count (default 2)")
    kube.add_argument("--port", type=int, help="Container port (default 3000)")
    kube.add_argument("--with-ingress", action="store_true", help="Create ingress.yaml")
    kube.add_argument("--with-configmap", action="store_true", help="Create configmap.yaml")
    kube.add_argument("--image-name", help="Image name (default nextjs-app)")
    kube.add_argument("--image-tag", help="Image tag (default latest)")
    kube.add_argument("--service-type", choices=SERVICE_TYPES, help="Service type")
    kube.set_defaults(options_cls=KubeOptions)
    by_command["add-kube"] = kube

    # -- integrate <type> ---------------------------------------------------
    integrate = commands.add_parser("integrate", help="Integrate a library or tool")
    integrations = integrate.add_subparsers(dest="integration", metavar="<type>")
    integrations.required = True
    by_command["integrate"] = integrate

    prisma = integrations.add_parser("prisma", parents=[common], help="Prisma ORM")
    prisma.add_argument("--db", choices=DB_PROVIDERS, help="Database provider (default sqlite)")
    prisma.add_argument("--push", action="store_true", help="Run prisma db push")
    prisma.add_argument("--generate", action="store_true", help="Run prisma generate")
    prisma.add_argument("--with-seed", action="store_true", help="Create a seed script")
    prisma.add_argument("--schema", dest="schema_path", help="Schema path")
    prisma.set_defaults(options_cls=PrismaOptions)
    by_command["integrate-prisma"] = prisma

    for name, options_cls, title in (
        ("nextauth", NextAuthOptions, "NextAuth.js"),
        ("better-auth", BetterAuthOptions, "Better Auth"),
    ):
        auth = integrations.add_parser(name, parents=[common], help=title)
        auth.add_argument("--provider", type=str.lower, choices=AUTH_PROVIDERS, help="Auth provider")
        auth.add_argument("--prisma", action="store_true", help="Use the Prisma adapter")
        auth.add_argument("--session", choices=("jwt", "database"), help="Session strategy")
        auth.add_argument("--env", action="store_true", help="Add variables to .env.local")
        auth.add_argument("--route", action="store_true", help="Create the API route")
        auth.set_defaults(options_cls=options_cls)
        by_command[f"integrate-{name}"] = auth

    lint = integrations.add_parser("eslint-prettier", parents=[common], help="ESLint and Prettier")
    lint.add_argument("--strict", action="store_true", help="Strict rules")
    lint.add_argument("--airbnb", action="store_true", help="Airbnb style guide")
    lint.add_argument("--typescript", action="store_true", help="TypeScript support")
    lint.add_argument("--with-scripts", action="store_true", help="Add lint/format scripts")
    lint.add_argument("--ignore", help="Extra comma-separated ignore patterns")
    lint.set_defaults(options_cls=EslintPrettierOptions)
    by_command["integrate-eslint-prettier"] = lint

    shadcn = integrations.add_parser("shadcn", parents=[common], help="shadcn/ui")
    shadcn.add_argument("--components", type=_csv, help="Comma-separated components to create")
    shadcn.add_argument("--theme", help="Base color (default zinc)")
    shadcn.add_argument("--dir", help="Components directory (default src/components/ui)")
    shadcn.add_argument("--tailwind", action="store_true", help="Install and initialise Tailwind")
    shadcn.set_defaults(options_cls=ShadcnOptions)
    by_command["integrate-shadcn"] = shadcn

    return parser, by_command


# ---------------------------------------------------------------------------
# argv -> ScaffoldRequest
# ---------------------------------------------------------------------------


def build_request(args: argparse.Namespace) -> ScaffoldRequest:
    """Convert parsed arguments into a validated request.

    Raises:
        UsageError: The arguments do not form a valid request.
    """
    options_cls = args.options_cls
    values: dict[str, Any] = {
        key: value
        for key, value in vars(args).items()
        if key in options_cls.model_fields and key != "command" and value is not None
    }
    if options_cls is StructureOptions and args.type is None and args.structure_type:
        values["type"] = args.structure_type

    try:
        return ScaffoldRequest(
            name=getattr(args, "name", ""),
            options=options_cls(**values),
        )
    except ValidationError as exc:
        raise UsageError(_validation_message(exc)) from exc


def _validation_message(exc: ValidationError) -> str:
    error = exc.errors()[0]
    message = str(error["msg"]).removeprefix("Value error, ")
    field = next((str(loc) for loc in reversed(error["loc"]) if isinstance(loc, str)), None)
    if field and field not in {"options", "name"}:
        return f"--{field.replace('_', '-')}: {message}"
    return message


# ---------------------------------------------------------------------------
# Entry points
# ---------------------------------------------------------------------------


def run(argv: Optional[list[str]] = None) -> int:
    """Run the CLI and return the process exit code."""
    argv = list(sys.argv[1:] if argv is None else argv)
    parser, by_command = build_parser()

    if not argv or argv[0] in ("-h", "--help"):
        print_plain(parser.format_help())
        return 0
    if argv[0] in ("-v", "--version"):
        console.print(VERSION_TEXT, highlight=False)
        return 0
    if argv[0] not in COMMANDS:
        print_error(f"Unknown command: {argv[0]}")
        print_plain(parser.format_help())
        return 1

    try:
        args = parser.parse_args(argv)
        request = build_request(args)
    except UsageError as exc:
        print_error(f"Error: {exc}")
        usage = exc.usage
        command_parser = by_command.get(command_key_from_argv(argv))
        if not usage and command_parser is not None:
            usage = command_parser.format_usage()
        if usage:
            err_console.print(usage.rstrip(), markup=False, highlight=False)
        return exc.exit_code
    except SystemExit as exc:
        # --help on a sub-command.
        return exc.code if isinstance(exc.code, int) else 0

    ctx = ExecutionContext.from_env()
    overrides = {
        key: getattr(args, key)
        for key in ("skip_install", "verbose")
        if getattr(args, key, None) is not None
    }
    if overrides:
        ctx = ctx.model_copy(update=overrides)

    result = asyncio.run(ScaffoldOrchestrator(ctx).run(request))
    return result.exit_code


def command_key_from_argv(argv: list[str]) -> str:
    if argv[0] == "integrate" and len(argv) > 1 and not argv[1].startswith("-"):
        return f"integrate-{argv[1]}"
    return argv[0]


def main() -> None:
    """Console-script entry point."""
    sys.exit(run())


if __name__ == "__main__":
    main()
