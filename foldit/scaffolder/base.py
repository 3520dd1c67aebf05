"""Shared plumbing for the per-command generators.

Each generator renders artifacts with a ``TemplateRenderer`` and writes them
through a ``Materializer``.  ``BaseGenerator.write`` turns a failed write into
the matching fatal error so that a command stops at the first failure.
"""

from __future__ import annotations

import json
from pathlib import Path
from typing import Any

from foldit.config import ExecutionContext
from foldit.errors import ConflictError, UsageError, WriteError
from foldit.package_manager import install_or_warn, run_tool
from foldit.utils import load_json, print_info, print_success, save_json

from .materializer import Materializer
from .models import (
    MaterializationResult,
    Outcome,
    RenderedArtifact,
    ScaffoldRequest,
    WriteMode,
)
from .paths import check_conflict
from .templates import TemplateRenderer


class BaseGenerator:
    """Common state and helpers for generators.

    Attributes:
        ctx: Execution context (project root, package manager).
        renderer: Jinja2 renderer for file contents.
        materializer: Writes artifacts below ``ctx.cwd``.
        results: Every materialization performed so far, in order.
    """

    #: Used in the ``Error <action>: <message>`` report line.
    action: str = "generating files"

    def __init__(
        self,
        ctx: ExecutionContext,
        renderer: TemplateRenderer,
        materializer: Materializer,
    ) -> None:
        self.ctx = ctx
        self.renderer = renderer
        self.materializer = materializer
        self.results: list[MaterializationResult] = []

    async def generate(self, request: ScaffoldRequest) -> Any:
        raise NotImplementedError

    # -- Rendering ----------------------------------------------------------

    def artifact(
        self,
        template: str,
        relative_path: str | Path,
        context: dict[str, Any] | None = None,
        *,
        label: str = "",
        write_mode: WriteMode = WriteMode.EXCLUSIVE_CREATE,
        marker: str | None = None,
        primary: bool = False,
    ) -> RenderedArtifact:
        """Render *template* into an artifact destined for *relative_path*."""
        return RenderedArtifact(
            relative_path=Path(relative_path).as_posix(),
            content=self.renderer.render(template, context or {}),
            write_mode=write_mode,
            label=label,
            marker=marker,
            primary=primary,
        )

    def relative(self, path: Path) -> str:
        """Express an absolute path below the project root as a relative one."""
        return path.relative_to(self.ctx.cwd).as_posix()

    # -- Writing ------------------------------------------------------------

    async def write(self, artifact: RenderedArtifact) -> MaterializationResult:
        """Materialize *artifact*, raising on failure.

        Raises:
            ConflictError: The file already exists (exclusive create).
            WriteError: Any other filesystem error.
        """
        result = await self.materializer.materialize(artifact)
        self.results.append(result)
        if result.outcome is Outcome.FAILED:
            if result.already_exists:
                raise ConflictError(result.path)
            raise WriteError(result.path, result.reason)
        return result

    async def ensure_directory(self, relative_path: str | Path) -> Path:
        return await self.materializer.ensure_directory(relative_path)

    def guard(self, path: Path, message: str | None = None) -> None:
        """Abort with ``ConflictError`` if a primary target already exists."""
        if check_conflict(path):
            raise ConflictError(path, message)

    def require_package_json(self) -> None:
        if not self.ctx.has_package_json:
            raise UsageError(
                "package.json not found. Please run this command in a Node.js project directory."
            )

    # -- package.json -------------------------------------------------------

    async def patch_package_json(
        self,
        *,
        scripts: dict[str, str] | None = None,
        dependencies: dict[str, str] | None = None,
        dev_dependencies: dict[str, str] | None = None,
        description: str = "entries",
    ) -> bool:
        """Merge scripts/dependencies into ``package.json`` if it exists.

        A missing or unreadable ``package.json`` is reported and skipped;
        it never aborts the command.
        """
        path = self.ctx.package_json_path
        if not path.exists():
            print_info(f"package.json not found, skipping {description}")
            return False

        try:
            package = load_json(path)
        except (json.JSONDecodeError, ValueError) as exc:
            print_info(f"Could not update package.json ({exc})")
            return False

        for key, values in (
            ("scripts", scripts),
            ("dependencies", dependencies),
            ("devDependencies", dev_dependencies),
        ):
            if values:
                package.setdefault(key, {}).update(values)

        try:
            await save_json(package, path)
        except OSError as exc:
            raise WriteError(path, exc.strerror or str(exc)) from exc
        print_success(f"Updated package.json with {description}")
        return True

    # -- External tools -----------------------------------------------------

    async def install(self, *groups: tuple[list[str], bool]) -> bool:
        """Install dependency groups, falling back to printed instructions."""
        return await install_or_warn(self.ctx, list(groups))

    async def run_tool(self, cmd: list[str], success_message: str) -> bool:
        return await run_tool(self.ctx, cmd, success_message)
