"""Next.js route handler generation (``src/app/api/<name>/route.ts``)."""

from __future__ import annotations

from rich.markup import escape

from foldit.utils import console, print_success

from .base import BaseGenerator
from .models import ApiOptions, ScaffoldKind, ScaffoldRequest
from .paths import ResolvedTarget, resolve


class ApiRouteGenerator(BaseGenerator):
    """Generates one route file with a handler per HTTP method."""

    action = "generating API route"

    async def generate(self, request: ScaffoldRequest) -> ResolvedTarget:
        options: ApiOptions = request.options  # type: ignore[assignment]
        target = resolve(
            self.ctx.cwd,
            ScaffoldKind.API_ROUTE,
            request.name,
            options.dynamic,
            options.catch_all,
        )
        self.guard(
            target.directory,
            f"API route '{request.name}' already exists at {target.directory}",
        )

        console.print(f"Generating API route for: {escape(request.name)}")
        segment = target.dynamic_segment
        context = {
            "entity_name": target.entity_name,
            "methods": options.methods,
            "auth": options.auth,
            "prisma": options.prisma,
            "param": segment.name if segment else "",
            "catch_all": bool(segment and options.catch_all),
        }

        route_dir = self.relative(target.directory)
        route = self.artifact(
            "api/route.ts.j2",
            f"{route_dir}/route.ts",
            context,
            label="route",
            primary=True,
        )
        await self.ensure_directory(route_dir)
        await self.write(route)

        console.print(f"Supported methods: {', '.join(options.methods)}")
        if options.auth:
            console.print("Authentication: enabled (expects authMiddleware in @/lib/auth)")
        if options.prisma:
            console.print("Prisma: enabled (expects a client in @/lib/prisma)")
        print_success(f"API route '{request.name}' scaffold created!")
        return target
