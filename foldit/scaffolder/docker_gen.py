"""Docker configuration for an existing Next.js project.

Renders ``Dockerfile``, ``.dockerignore`` and (optionally)
``docker-compose.yml`` into the project root.  Every file is written with
exclusive create, so an existing Docker setup is never overwritten.
"""

from __future__ import annotations

from pathlib import Path
from typing import Any

from foldit.utils import console, print_next_steps, print_success

from .base import BaseGenerator
from .models import DockerOptions, ScaffoldRequest


class DockerGenerator(BaseGenerator):
    """Generates Docker files for the project in ``ctx.cwd``."""

    action = "creating Docker files"

    # Template name -> output file name
    _DOCKER_FILES: dict[str, str] = {
        "docker/Dockerfile.j2": "Dockerfile",
        "docker/dockerignore.j2": ".dockerignore",
        "docker/docker-compose.yml.j2": "docker-compose.yml",
    }

    async def generate(self, request: ScaffoldRequest) -> list[Path]:
        """Write the Docker files selected by the request's options.

        Returns:
            List of written file paths.
        """
        options: DockerOptions = request.options  # type: ignore[assignment]
        console.print("Dockerizing Next.js project...")
        self.require_package_json()

        context = self.build_context(options)
        written: list[Path] = []
        for template_name, output_name in self._DOCKER_FILES.items():
            if output_name == ".dockerignore" and not options.with_ignore:
                continue
            if output_name == "docker-compose.yml" and not options.with_compose:
                continue
            result = await self.write(
                self.artifact(
                    template_name,
                    output_name,
                    context,
                    label=output_name,
                    primary=output_name == "Dockerfile",
                )
            )
            written.append(result.path)

        print_success("Docker configuration complete!")
        steps = [
            "Build image: docker build -t your-app .",
            f"Run container: docker run -p {options.port}:{options.port} your-app",
        ]
        if options.with_compose:
            steps.append("Or use Docker Compose: docker-compose up")
        print_next_steps(steps)
        return written

    @staticmethod
    def build_context(options: DockerOptions) -> dict[str, Any]:
        return {
            "node_version": options.node_version,
            "port": options.port,
            "production": options.production,
        }
