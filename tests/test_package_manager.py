"""Unit tests for the package manager shim (foldit.package_manager).

The package manager itself is never executed: ``run_command`` is patched
with an AsyncMock so the tests only check argv construction and the
degrade-to-instructions behaviour.
"""

from __future__ import annotations

from pathlib import Path
from unittest.mock import AsyncMock, patch

import pytest

from foldit.config import ExecutionContext, PackageManagerKind
from foldit.errors import DependencyInstallError
from foldit.package_manager import (
    install_command,
    install_or_warn,
    install_packages,
    run_tool,
)


pytestmark = pytest.mark.unit


@pytest.fixture
def live_ctx(tmp_path: Path) -> ExecutionContext:
    """A context that would really run installs (run_command is patched)."""
    return ExecutionContext(cwd=tmp_path, package_manager=PackageManagerKind.NPM)


# ---------------------------------------------------------------------------
# install_command
# ---------------------------------------------------------------------------


class TestInstallCommand:
    @pytest.mark.parametrize(
        "kind,dev,expected",
        [
            (PackageManagerKind.NPM, False, ["npm", "install", "--save", "axios"]),
            (PackageManagerKind.NPM, True, ["npm", "install", "--save-dev", "axios"]),
            (PackageManagerKind.YARN, False, ["yarn", "add", "axios"]),
            (PackageManagerKind.YARN, True, ["yarn", "add", "--dev", "axios"]),
            (PackageManagerKind.PNPM, False, ["pnpm", "add", "--save", "axios"]),
            (PackageManagerKind.PNPM, True, ["pnpm", "add", "--save-dev", "axios"]),
        ],
    )
    def test_argv(self, kind, dev, expected):
        assert install_command(kind, ["axios"], dev) == expected

    def test_multiple_packages_keep_order(self):
        cmd = install_command(PackageManagerKind.NPM, ["prisma", "@prisma/client"])
        assert cmd[-2:] == ["prisma", "@prisma/client"]


# ---------------------------------------------------------------------------
# install_packages
# ---------------------------------------------------------------------------


class TestInstallPackages:
    async def test_runs_in_project_dir(self, live_ctx: ExecutionContext):
        mock_run = AsyncMock(return_value=(0, "", ""))
        with patch("foldit.package_manager.run_command", mock_run):
            await install_packages(live_ctx, ["axios"])
        mock_run.assert_awaited_once_with(
            ["npm", "install", "--save", "axios"], cwd=live_ctx.cwd
        )

    async def test_empty_list_is_noop(self, live_ctx: ExecutionContext):
        mock_run = AsyncMock()
        with patch("foldit.package_manager.run_command", mock_run):
            await install_packages(live_ctx, [])
        mock_run.assert_not_awaited()

    async def test_non_zero_exit_raises(self, live_ctx: ExecutionContext):
        mock_run = AsyncMock(return_value=(1, "", "ERR!"))
        with patch("foldit.package_manager.run_command", mock_run):
            with pytest.raises(DependencyInstallError) as exc_info:
                await install_packages(live_ctx, ["axios"], dev=True)
        assert exc_info.value.returncode == 1
        assert exc_info.value.command == ["npm", "install", "--save-dev", "axios"]

    async def test_missing_executable_raises(self, live_ctx: ExecutionContext):
        mock_run = AsyncMock(side_effect=FileNotFoundError("npm"))
        with patch("foldit.package_manager.run_command", mock_run):
            with pytest.raises(DependencyInstallError):
                await install_packages(live_ctx, ["axios"])


# ---------------------------------------------------------------------------
# install_or_warn
# ---------------------------------------------------------------------------


class TestInstallOrWarn:
    async def test_success(self, live_ctx: ExecutionContext, capsys):
        mock_run = AsyncMock(return_value=(0, "", ""))
        with patch("foldit.package_manager.run_command", mock_run):
            ok = await install_or_warn(live_ctx, [(["axios"], False), (["@types/axios"], True)])
        assert ok is True
        assert mock_run.await_count == 2
        assert "Installing dependencies..." in capsys.readouterr().out

    async def test_failure_degrades_to_instructions(self, live_ctx: ExecutionContext, capsys):
        mock_run = AsyncMock(return_value=(1, "", ""))
        with patch("foldit.package_manager.run_command", mock_run):
            ok = await install_or_warn(live_ctx, [(["axios"], False)])
        assert ok is False
        out = capsys.readouterr().out
        assert "Failed to install dependencies automatically" in out
        assert "npm install --save axios" in out

    async def test_skip_install_prints_commands(self, ctx: ExecutionContext, capsys):
        mock_run = AsyncMock()
        with patch("foldit.package_manager.run_command", mock_run):
            ok = await install_or_warn(ctx, [(["eslint", "prettier"], True)])
        assert ok is False
        mock_run.assert_not_awaited()
        assert "npm install --save-dev eslint prettier" in capsys.readouterr().out

    async def test_empty_groups(self, live_ctx: ExecutionContext, capsys):
        assert await install_or_warn(live_ctx, [([], False)]) is True
        assert capsys.readouterr().out == ""


# ---------------------------------------------------------------------------
# run_tool
# ---------------------------------------------------------------------------


class TestRunTool:
    async def test_success(self, live_ctx: ExecutionContext, capsys):
        mock_run = AsyncMock(return_value=(0, "", ""))
        with patch("foldit.package_manager.run_command", mock_run):
            ok = await run_tool(live_ctx, ["npx", "prisma", "generate"], "Generated")
        assert ok is True
        assert "Generated" in capsys.readouterr().out

    async def test_failure_is_a_warning(self, live_ctx: ExecutionContext, capsys):
        mock_run = AsyncMock(return_value=(1, "", "boom"))
        with patch("foldit.package_manager.run_command", mock_run):
            ok = await run_tool(live_ctx, ["npx", "prisma", "db", "push"], "Pushed")
        assert ok is False
        out = capsys.readouterr().out
        assert "Please run manually: npx prisma db push" in out
        assert "Pushed" not in out

    async def test_missing_executable_is_a_warning(self, live_ctx: ExecutionContext, capsys):
        mock_run = AsyncMock(side_effect=FileNotFoundError("npx"))
        with patch("foldit.package_manager.run_command", mock_run):
            ok = await run_tool(live_ctx, ["npx", "tailwindcss", "init", "-p"], "Initialised")
        assert ok is False
        assert "npx tailwindcss init -p" in capsys.readouterr().out

    async def test_skip_install_does_not_run(self, ctx: ExecutionContext, capsys):
        mock_run = AsyncMock()
        with patch("foldit.package_manager.run_command", mock_run):
            ok = await run_tool(ctx, ["npx", "prisma", "generate"], "Generated")
        assert ok is False
        mock_run.assert_not_awaited()
        assert "Skipped. Please run manually: npx prisma generate" in capsys.readouterr().out
