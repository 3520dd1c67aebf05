"""Command orchestrator.

``ScaffoldOrchestrator.run`` takes a validated ``ScaffoldRequest``, picks the
generator for its options variant and runs it.  Fatal errors never escape:
they are printed as ``Error <action>: <message>`` on stderr and recorded in
the returned ``CommandResult``, whose ``exit_code`` the CLI passes to
``sys.exit``.
"""

from __future__ import annotations

from typing import Any, get_args

from jinja2 import TemplateError

from foldit.config import ExecutionContext
from foldit.errors import ScaffoldError
from foldit.utils import err_console, print_error, print_info

from .api_gen import ApiRouteGenerator
from .auth_gen import AuthGenerator
from .base import BaseGenerator
from .docker_gen import DockerGenerator
from .kube_gen import KubeGenerator
from .lint_gen import EslintPrettierGenerator
from .materializer import Materializer
from .models import (
    ApiOptions,
    BetterAuthOptions,
    CommandResult,
    DockerOptions,
    EslintPrettierOptions,
    KubeOptions,
    NextAuthOptions,
    PageOptions,
    PrismaOptions,
    ScaffoldOptions,
    ScaffoldRequest,
    ServiceOptions,
    ShadcnOptions,
    StructureOptions,
)
from .page_gen import PageGenerator
from .prisma_gen import PrismaGenerator
from .service_gen import ServiceGenerator
from .shadcn_gen import ShadcnGenerator
from .structure_gen import StructureGenerator
from .templates import TemplateRenderer


# ---------------------------------------------------------------------------
# Dispatch table
# ---------------------------------------------------------------------------

GENERATORS: dict[type, type[BaseGenerator]] = {
    PageOptions: PageGenerator,
    ApiOptions: ApiRouteGenerator,
    ServiceOptions: ServiceGenerator,
    StructureOptions: StructureGenerator,
    DockerOptions: DockerGenerator,
    KubeOptions: KubeGenerator,
    PrismaOptions: PrismaGenerator,
    NextAuthOptions: AuthGenerator,
    BetterAuthOptions: AuthGenerator,
    EslintPrettierOptions: EslintPrettierGenerator,
    ShadcnOptions: ShadcnGenerator,
}

# Every variant of the options union must have a generator.
_missing = set(get_args(get_args(ScaffoldOptions)[0])) - set(GENERATORS)
if _missing:
    raise RuntimeError(f"No generator registered for {sorted(t.__name__ for t in _missing)}")


def describe_options(request: ScaffoldRequest) -> str:
    """Render the options that differ from their defaults as CLI-style flags."""
    values: dict[str, Any] = request.options.model_dump(
        exclude_defaults=True, exclude={"command"}
    )
    parts: list[str] = []
    for key, value in values.items():
        flag = key.replace("_", "-")
        if value is True:
            parts.append(flag)
        elif value is False:
            parts.append(f"no-{flag.removeprefix('with-')}")
        elif isinstance(value, list):
            parts.append(f"{flag}={','.join(str(v) for v in value)}")
        else:
            parts.append(f"{flag}={value}")
    return ", ".join(parts)


# ---------------------------------------------------------------------------
# Orchestrator
# ---------------------------------------------------------------------------


class ScaffoldOrchestrator:
    """Runs one scaffolding command against an ``ExecutionContext``."""

    def __init__(
        self,
        ctx: ExecutionContext,
        renderer: TemplateRenderer | None = None,
    ) -> None:
        self.ctx = ctx
        self.renderer = renderer or TemplateRenderer()

    def generator_for(self, request: ScaffoldRequest) -> BaseGenerator:
        generator_cls = GENERATORS[type(request.options)]
        return generator_cls(self.ctx, self.renderer, Materializer(self.ctx.cwd))

    async def run(self, request: ScaffoldRequest) -> CommandResult:
        """Execute *request* and report the outcome.

        Returns:
            A ``CommandResult``; ``exit_code`` is 1 if the command failed.
        """
        generator = self.generator_for(request)
        try:
            await generator.generate(request)
        except (ScaffoldError, OSError, TemplateError) as exc:
            message = str(exc)
            if isinstance(exc, OSError) and exc.strerror:
                message = exc.strerror
            print_error(f"Error {generator.action}: {message}")
            if self.ctx.verbose:
                err_console.print_exception()
            return CommandResult(
                command=request.command, results=generator.results, error=message
            )

        result = CommandResult(command=request.command, results=generator.results)
        summary = f"{request.command} {request.name}".rstrip()
        enabled = describe_options(request)
        if enabled:
            summary += f" ({enabled})"
        print_info(f"Done: {summary}, {len(result.created)} file(s) created")
        return result
