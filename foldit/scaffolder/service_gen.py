"""axios service generation under ``src/services``."""

from __future__ import annotations

from pathlib import Path
from typing import Any

from rich.markup import escape

from foldit.utils import console, print_next_steps, print_success

from .base import BaseGenerator
from .models import ScaffoldKind, ScaffoldRequest, ServiceOptions, WriteMode
from .paths import kind_root, resolve

DEFAULT_BASE_URL = "process.env.NEXT_PUBLIC_API_URL || 'http://localhost:3000/api'"


class ServiceGenerator(BaseGenerator):
    """Generates ``<name>Service.ts`` with CRUD methods and optional extras.

    The shared ``axiosConfig.ts`` is only written when the services
    directory does not have one yet.
    """

    action = "generating service"

    async def generate(self, request: ScaffoldRequest) -> Path:
        options: ServiceOptions = request.options  # type: ignore[assignment]
        target = resolve(self.ctx.cwd, ScaffoldKind.SERVICE, request.name)
        name = target.entity_name
        # Nested names keep their leading segments as sub-directories.
        services_dir = kind_root(self.ctx.cwd, ScaffoldKind.SERVICE).joinpath(
            *(segment.render() for segment in target.segments[:-1])
        )
        service_path = services_dir / f"{name}Service.ts"
        self.guard(
            service_path,
            f"Service '{request.name}' already exists at {service_path}",
        )

        console.print(f"Generating service: {escape(request.name)}")
        rel_dir = self.relative(services_dir)
        context = self.build_context(name, options)
        service = self.artifact(
            "service/service.ts.j2",
            f"{rel_dir}/{name}Service.ts",
            context,
            label="service",
            primary=True,
        )
        await self.ensure_directory(rel_dir)
        await self.write(service)

        if options.with_types:
            await self.write(
                self.artifact(
                    "service/types.ts.j2",
                    f"{rel_dir}/{name}Types.ts",
                    context,
                    label="types",
                )
            )

        await self.write(
            self.artifact(
                "service/axiosConfig.ts.j2",
                f"{rel_dir}/axiosConfig.ts",
                context,
                label="axios config",
                write_mode=WriteMode.OVERWRITE_IF_ABSENT,
            )
        )

        groups: list[tuple[list[str], bool]] = [(["axios"], False)]
        if options.with_types:
            groups.append((["@types/axios"], True))
        await self.install(*groups)

        print_success(f"Service '{request.name}' generated successfully!")
        print_next_steps(
            [
                f"import {{ {name}Service }} from '@/services/{name}Service';",
                f"const data = await {name}Service.getAll();",
            ],
            title="Usage example",
        )
        return service_path

    @staticmethod
    def build_context(name: str, options: ServiceOptions) -> dict[str, Any]:
        base_url = f"'{options.base_url}'" if options.base_url else DEFAULT_BASE_URL
        return {
            "entity_name": name,
            "base_url": base_url,
            "with_types": options.with_types,
            "with_interceptors": options.with_interceptors,
            "with_error_handling": options.with_error_handling,
            "with_auth": options.with_auth,
            "with_retry": options.with_retry,
            "with_cache": options.with_cache,
            "max_retries": options.max_retries,
            "retry_delay": options.retry_delay,
        }
