"""Unit tests for the execution context (foldit.config).

Tests cover:
- Package manager detection from lockfiles
- ExecutionContext.detect (cwd resolution, overrides)
- ExecutionContext.from_env (FOLDIT_* variables)
- Declared command defaults
"""

from __future__ import annotations

from pathlib import Path

import pytest

from foldit.config import (
    DEFAULTS,
    ExecutionContext,
    PackageManagerKind,
    detect_package_manager,
)


pytestmark = pytest.mark.unit


# ---------------------------------------------------------------------------
# detect_package_manager
# ---------------------------------------------------------------------------


class TestDetectPackageManager:
    def test_npm_when_no_lockfile(self, tmp_path: Path):
        assert detect_package_manager(tmp_path) is PackageManagerKind.NPM

    def test_npm_with_package_lock(self, tmp_path: Path):
        (tmp_path / "package-lock.json").write_text("{}")
        assert detect_package_manager(tmp_path) is PackageManagerKind.NPM

    def test_yarn_lock(self, tmp_path: Path):
        (tmp_path / "yarn.lock").write_text("")
        assert detect_package_manager(tmp_path) is PackageManagerKind.YARN

    def test_pnpm_lock(self, tmp_path: Path):
        (tmp_path / "pnpm-lock.yaml").write_text("")
        assert detect_package_manager(tmp_path) is PackageManagerKind.PNPM

    def test_pnpm_wins_over_yarn(self, tmp_path: Path):
        (tmp_path / "yarn.lock").write_text("")
        (tmp_path / "pnpm-lock.yaml").write_text("")
        assert detect_package_manager(tmp_path) is PackageManagerKind.PNPM


# ---------------------------------------------------------------------------
# ExecutionContext
# ---------------------------------------------------------------------------


class TestExecutionContext:
    def test_defaults(self):
        ctx = ExecutionContext()
        assert ctx.cwd == Path.cwd()
        assert ctx.package_manager is PackageManagerKind.NPM
        assert ctx.skip_install is False
        assert ctx.verbose is False

    def test_package_json_path(self, project_dir: Path):
        ctx = ExecutionContext(cwd=project_dir)
        assert ctx.package_json_path == project_dir / "package.json"
        assert ctx.has_package_json is True

    def test_has_package_json_false(self, empty_project: Path):
        assert ExecutionContext(cwd=empty_project).has_package_json is False

    def test_detect_resolves_cwd_and_lockfile(self, tmp_path: Path):
        (tmp_path / "yarn.lock").write_text("")
        ctx = ExecutionContext.detect(str(tmp_path))
        assert ctx.cwd == tmp_path.resolve()
        assert ctx.package_manager is PackageManagerKind.YARN

    def test_detect_overrides(self, tmp_path: Path):
        ctx = ExecutionContext.detect(
            tmp_path, package_manager=PackageManagerKind.PNPM, skip_install=True
        )
        assert ctx.package_manager is PackageManagerKind.PNPM
        assert ctx.skip_install is True

    def test_detect_ignores_none_overrides(self, tmp_path: Path):
        ctx = ExecutionContext.detect(tmp_path, verbose=None)
        assert ctx.verbose is False


class TestFromEnv:
    def test_reads_variables(self, tmp_path: Path, monkeypatch: pytest.MonkeyPatch):
        monkeypatch.setenv("FOLDIT_CWD", str(tmp_path))
        monkeypatch.setenv("FOLDIT_PACKAGE_MANAGER", " Yarn ")
        monkeypatch.setenv("FOLDIT_SKIP_INSTALL", "1")
        monkeypatch.setenv("FOLDIT_VERBOSE", "true")

        ctx = ExecutionContext.from_env()

        assert ctx.cwd == tmp_path.resolve()
        assert ctx.package_manager is PackageManagerKind.YARN
        assert ctx.skip_install is True
        assert ctx.verbose is True

    def test_falsey_flag(self, tmp_path: Path, monkeypatch: pytest.MonkeyPatch):
        monkeypatch.setenv("FOLDIT_CWD", str(tmp_path))
        monkeypatch.setenv("FOLDIT_SKIP_INSTALL", "no")
        assert ExecutionContext.from_env().skip_install is False

    def test_without_variables_uses_process_cwd(
        self, tmp_path: Path, monkeypatch: pytest.MonkeyPatch
    ):
        for name in ("FOLDIT_CWD", "FOLDIT_PACKAGE_MANAGER", "FOLDIT_SKIP_INSTALL", "FOLDIT_VERBOSE"):
            monkeypatch.delenv(name, raising=False)
        monkeypatch.chdir(tmp_path)
        ctx = ExecutionContext.from_env()
        assert ctx.cwd == tmp_path.resolve()
        assert ctx.skip_install is False

    def test_invalid_package_manager(self, monkeypatch: pytest.MonkeyPatch):
        monkeypatch.setenv("FOLDIT_PACKAGE_MANAGER", "bun")
        with pytest.raises(ValueError):
            ExecutionContext.from_env()


# ---------------------------------------------------------------------------
# DEFAULTS
# ---------------------------------------------------------------------------


class TestDefaults:
    @pytest.mark.parametrize(
        "key,expected",
        [
            ("kube_namespace", "default"),
            ("kube_replicas", 2),
            ("docker_node_version", "18-alpine"),
            ("prisma_provider", "sqlite"),
            ("api_methods", ["GET", "POST"]),
        ],
    )
    def test_declared_defaults(self, key: str, expected):
        assert DEFAULTS[key] == expected
