"""FoldIt scaffolder -- renders templates and writes them into a project.

Quick usage::

    from foldit.config import ExecutionContext
    from foldit.scaffolder import PageOptions, ScaffoldOrchestrator, ScaffoldRequest

    ctx = ExecutionContext.detect("/path/to/next-app")
    request = ScaffoldRequest(name="blog", options=PageOptions(dynamic="slug"))
    result = await ScaffoldOrchestrator(ctx).run(request)
    # result.exit_code == 0, src/app/blog/[slug]/page.tsx written
"""

from foldit.scaffolder.generator import ScaffoldOrchestrator
from foldit.scaffolder.materializer import Materializer
from foldit.scaffolder.models import (
    ApiOptions,
    BetterAuthOptions,
    CommandResult,
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
from foldit.scaffolder.templates import TemplateRenderer

__all__ = [
    "ApiOptions",
    "BetterAuthOptions",
    "CommandResult",
    "DockerOptions",
    "EslintPrettierOptions",
    "KubeOptions",
    "Materializer",
    "NextAuthOptions",
    "PageOptions",
    "PrismaOptions",
    "ScaffoldOrchestrator",
    "ScaffoldRequest",
    "ServiceOptions",
    "ShadcnOptions",
    "StructureOptions",
    "TemplateRenderer",
]
