"""Shared pytest fixtures for the FoldIt test suite.

Provides reusable fixtures for:
- Temporary Next.js project directories (with and without package.json)
- Execution contexts that never shell out to a package manager
- A real TemplateRenderer and a ScaffoldOrchestrator bound to the project
- A helper that runs a request and returns its CommandResult
"""

from __future__ import annotations

import json
from pathlib import Path
from typing import Any, Awaitable, Callable

import pytest

from foldit.config import ExecutionContext, PackageManagerKind
from foldit.scaffolder.generator import ScaffoldOrchestrator
from foldit.scaffolder.materializer import Materializer
from foldit.scaffolder.models import CommandResult, ScaffoldRequest
from foldit.scaffolder.templates import TemplateRenderer


# ---------------------------------------------------------------------------
# Project directories
# ---------------------------------------------------------------------------

SAMPLE_PACKAGE_JSON: dict[str, Any] = {
    "name": "test-app",
    "version": "0.1.0",
    "private": True,
    "scripts": {
        "dev": "next dev",
        "build": "next build",
        "start": "next start",
    },
    "dependencies": {
        "next": "14.0.0",
        "react": "18.2.0",
        "react-dom": "18.2.0",
    },
}


@pytest.fixture
def empty_project(tmp_path: Path) -> Path:
    """A project directory with nothing in it."""
    project_dir = tmp_path / "empty-app"
    project_dir.mkdir()
    return project_dir


@pytest.fixture
def project_dir(tmp_path: Path) -> Path:
    """A minimal Next.js project directory containing a package.json."""
    project = tmp_path / "test-app"
    project.mkdir()
    (project / "package.json").write_text(
        json.dumps(SAMPLE_PACKAGE_JSON, indent=2) + "\n", encoding="utf-8"
    )
    return project


@pytest.fixture
def read_package_json(project_dir: Path) -> Callable[[], dict[str, Any]]:
    """Return a callable that re-reads the project's package.json."""

    def _read() -> dict[str, Any]:
        return json.loads((project_dir / "package.json").read_text(encoding="utf-8"))

    return _read


# ---------------------------------------------------------------------------
# Context & pipeline objects
# ---------------------------------------------------------------------------


@pytest.fixture
def ctx(project_dir: Path) -> ExecutionContext:
    """Execution context for ``project_dir`` that skips installs and tools."""
    return ExecutionContext(
        cwd=project_dir,
        package_manager=PackageManagerKind.NPM,
        skip_install=True,
    )


@pytest.fixture
def empty_ctx(empty_project: Path) -> ExecutionContext:
    return ExecutionContext(cwd=empty_project, skip_install=True)


@pytest.fixture
def renderer() -> TemplateRenderer:
    """The renderer over the templates shipped in the package."""
    return TemplateRenderer()


@pytest.fixture
def materializer(project_dir: Path) -> Materializer:
    return Materializer(project_dir)


@pytest.fixture
def orchestrator(ctx: ExecutionContext, renderer: TemplateRenderer) -> ScaffoldOrchestrator:
    return ScaffoldOrchestrator(ctx, renderer)


@pytest.fixture
def run_request(
    orchestrator: ScaffoldOrchestrator,
) -> Callable[..., Awaitable[CommandResult]]:
    """Build a ``ScaffoldRequest`` from (name, options) and run it."""

    async def _run(options: Any, name: str = "") -> CommandResult:
        request = ScaffoldRequest(name=name, options=options)
        return await orchestrator.run(request)

    return _run
