"""Next.js App Router page generation.

Creates ``src/app/<name>/page.tsx`` plus, on request, a
``src/components/<entity>/index.ts`` barrel and a ``__tests__/page.test.tsx``
next to the page.
"""

from __future__ import annotations

from typing import Any

from rich.markup import escape

from foldit.utils import console, print_success

from .base import BaseGenerator
from .models import PageOptions, ScaffoldKind, ScaffoldRequest, WriteMode
from .paths import ResolvedTarget, resolve

COMPONENTS_ROOT = "src/components"


class PageGenerator(BaseGenerator):
    """Generates a page component and its optional companions."""

    action = "generating page scaffold"

    async def generate(self, request: ScaffoldRequest) -> ResolvedTarget:
        options: PageOptions = request.options  # type: ignore[assignment]
        target = resolve(
            self.ctx.cwd,
            ScaffoldKind.PAGE,
            request.name,
            options.dynamic,
            options.catch_all,
        )
        self.guard(
            target.directory,
            f"Page '{request.name}' already exists at {target.directory}",
        )

        console.print(f"Generating page scaffold for: {escape(request.name)}")
        context = self.build_context(target, options)
        page_dir = self.relative(target.directory)
        prefix = "dynamic_" if target.dynamic_segment else ""

        page = self.artifact(
            f"page/{prefix}page.tsx.j2",
            f"{page_dir}/page.tsx",
            context,
            label="page",
            primary=True,
        )
        await self.ensure_directory(page_dir)
        await self.write(page)

        if options.with_component:
            await self.write(
                self.artifact(
                    "page/components_index.ts.j2",
                    f"{COMPONENTS_ROOT}/{target.entity_name}/index.ts",
                    context,
                    label="components folder",
                    write_mode=WriteMode.EXCLUSIVE_CREATE,
                )
            )

        if options.with_test:
            await self.write(
                self.artifact(
                    f"page/{prefix}page.test.tsx.j2",
                    f"{page_dir}/__tests__/page.test.tsx",
                    context,
                    label="test file",
                )
            )

        print_success(f"Page '{request.name}' scaffold created!")
        return target

    @staticmethod
    def build_context(target: ResolvedTarget, options: PageOptions) -> dict[str, Any]:
        segment = target.dynamic_segment
        return {
            "entity_name": target.entity_name,
            "param": segment.name if segment else "",
            "catch_all": bool(segment and options.catch_all),
        }
