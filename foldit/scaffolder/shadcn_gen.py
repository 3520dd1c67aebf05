"""shadcn/ui integration (``integrate shadcn``)."""

from __future__ import annotations

from pathlib import Path, PurePosixPath

from foldit.utils import console, print_next_steps, print_success

from .base import BaseGenerator
from .models import ScaffoldRequest, ShadcnOptions, WriteMode

DEPENDENCIES: dict[str, str] = {
    "class-variance-authority": "^0.7.0",
    "clsx": "^2.0.0",
    "tailwind-merge": "^2.0.0",
    "lucide-react": "^0.294.0",
}
TAILWIND_DEV_DEPENDENCIES: dict[str, str] = {
    "tailwindcss": "^3.3.0",
    "postcss": "^8.4.0",
    "autoprefixer": "^10.4.0",
}
ANIMATE_DEV_DEPENDENCY: dict[str, str] = {"tailwindcss-animate": "^1.0.7"}


class ShadcnGenerator(BaseGenerator):
    """Writes the shadcn/ui config, Tailwind setup and requested components."""

    action = "setting up shadcn/ui"

    async def generate(self, request: ScaffoldRequest) -> list[Path]:
        options: ShadcnOptions = request.options  # type: ignore[assignment]
        components_dir = PurePosixPath(options.dir)
        context = {"theme": options.theme, "components_dir": str(components_dir)}

        console.print("Setting up shadcn/ui...")
        await self.ensure_directory(str(components_dir))

        written: list[Path] = []
        for template, output_name, write_mode, primary in (
            ("shadcn/components.json.j2", "components.json", WriteMode.EXCLUSIVE_CREATE, True),
            ("shadcn/globals.css.j2", "src/app/globals.css", WriteMode.PREPEND, False),
            ("shadcn/tailwind.config.js.j2", "tailwind.config.js", WriteMode.OVERWRITE_IF_ABSENT, False),
            ("shadcn/postcss.config.js.j2", "postcss.config.js", WriteMode.OVERWRITE_IF_ABSENT, False),
            ("shadcn/utils.ts.j2", "src/lib/utils.ts", WriteMode.OVERWRITE_IF_ABSENT, False),
        ):
            result = await self.write(
                self.artifact(
                    template,
                    output_name,
                    context,
                    label=output_name,
                    write_mode=write_mode,
                    marker="@tailwind base" if write_mode is WriteMode.PREPEND else None,
                    primary=primary,
                )
            )
            written.append(result.path)

        for component in options.components:
            result = await self.write(
                self.artifact(
                    "shadcn/component.tsx.j2",
                    components_dir / f"{component}.tsx",
                    {"component": component},
                    label=f"{component} component",
                )
            )
            written.append(result.path)

        dev_dependencies = dict(ANIMATE_DEV_DEPENDENCY)
        if options.tailwind:
            dev_dependencies.update(TAILWIND_DEV_DEPENDENCIES)
        await self.patch_package_json(
            dependencies=DEPENDENCIES,
            dev_dependencies=dev_dependencies,
            description="shadcn/ui dependencies",
        )

        await self.install((list(DEPENDENCIES), False), (list(dev_dependencies), True))

        if options.tailwind:
            await self.run_tool(
                ["npx", "tailwindcss", "init", "-p"], "Tailwind CSS initialized successfully"
            )

        print_success("shadcn/ui integration complete!")
        print_next_steps(
            [
                "Add components with: npx shadcn@latest add <component-name>",
                "Customize your theme in globals.css",
                "Import components from your ui directory",
            ]
        )
        return written
