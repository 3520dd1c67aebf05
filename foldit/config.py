"""FoldIt execution configuration.

Everything a command needs to know about its environment lives in a single
``ExecutionContext``: the project directory (captured once per command) and
the package manager detected from its lockfile.  The context is built by the
CLI and passed explicitly to every generator instead of being read ad hoc
from ``os.getcwd()``.
"""

from __future__ import annotations

import os
from enum import Enum
from pathlib import Path
from typing import Any

from pydantic import BaseModel, Field


class PackageManagerKind(str, Enum):
    """JavaScript package managers FoldIt knows how to drive."""
    NPM = "npm"
    YARN = "yarn"
    PNPM = "pnpm"


# Lockfile -> package manager, checked in order.
LOCKFILES: dict[str, PackageManagerKind] = {
    "pnpm-lock.yaml": PackageManagerKind.PNPM,
    "yarn.lock": PackageManagerKind.YARN,
}


# Declared defaults for every command option that has one.
DEFAULTS: dict[str, Any] = {
    "api_methods": ["GET", "POST"],
    "docker_node_version": "18-alpine",
    "docker_port": 3000,
    "kube_namespace": "default",
    "kube_replicas": 2,
    "kube_port": 3000,
    "kube_image_name": "nextjs-app",
    "kube_image_tag": "latest",
    "kube_service_type": "ClusterIP",
    "prisma_provider": "sqlite",
    "prisma_schema": "prisma/schema.prisma",
    "auth_session": "jwt",
    "shadcn_theme": "zinc",
    "shadcn_dir": "src/components/ui",
    "service_max_retries": 3,
    "service_retry_delay": 1000,
    "structure_type": "basic",
}


def detect_package_manager(cwd: Path) -> PackageManagerKind:
    """Pick the package manager whose lockfile is present in *cwd* (npm otherwise)."""
    for lockfile, kind in LOCKFILES.items():
        if (cwd / lockfile).exists():
            return kind
    return PackageManagerKind.NPM


class ExecutionContext(BaseModel):
    """Per-invocation environment shared by every scaffolding component.

    Instances are created once by the CLI entry point (or by tests) and then
    passed through the rest of the system.  The working directory is treated
    as immutable for the lifetime of a command.
    """

    cwd: Path = Field(default_factory=Path.cwd)
    package_manager: PackageManagerKind = Field(default=PackageManagerKind.NPM)
    skip_install: bool = Field(
        default=False, description="Print install and tool commands instead of running them"
    )
    verbose: bool = Field(default=False, description="Show tracebacks for fatal errors")

    # ------------------------------------------------------------------
    # Derived paths
    # ------------------------------------------------------------------

    @property
    def package_json_path(self) -> Path:
        """Path to the project's ``package.json``."""
        return self.cwd / "package.json"

    @property
    def has_package_json(self) -> bool:
        return self.package_json_path.exists()

    # ------------------------------------------------------------------
    # Constructors
    # ------------------------------------------------------------------

    @classmethod
    def detect(cls, cwd: str | Path | None = None, **overrides: Any) -> "ExecutionContext":
        """Build a context for *cwd*, detecting the package manager from lockfiles."""
        root = Path(cwd) if cwd is not None else Path.cwd()
        root = root.resolve()
        kwargs: dict[str, Any] = {
            "cwd": root,
            "package_manager": detect_package_manager(root),
        }
        kwargs.update({k: v for k, v in overrides.items() if v is not None})
        return cls(**kwargs)

    @classmethod
    def from_env(cls) -> "ExecutionContext":
        """Build a context from environment variables.

        Recognised variables (all optional):
            FOLDIT_CWD, FOLDIT_PACKAGE_MANAGER, FOLDIT_SKIP_INSTALL,
            FOLDIT_VERBOSE.
        """
        overrides: dict[str, Any] = {}
        if os.environ.get("FOLDIT_PACKAGE_MANAGER"):
            overrides["package_manager"] = PackageManagerKind(
                os.environ["FOLDIT_PACKAGE_MANAGER"].strip().lower()
            )
        if os.environ.get("FOLDIT_SKIP_INSTALL"):
            overrides["skip_install"] = _env_flag(os.environ["FOLDIT_SKIP_INSTALL"])
        if os.environ.get("FOLDIT_VERBOSE"):
            overrides["verbose"] = _env_flag(os.environ["FOLDIT_VERBOSE"])

        return cls.detect(os.environ.get("FOLDIT_CWD") or None, **overrides)


def _env_flag(value: str) -> bool:
    return value.strip().lower() in {"1", "true", "yes", "on"}
