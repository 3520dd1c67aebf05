"""Drive the project's JavaScript package manager.

The package manager is detected once (see ``ExecutionContext.detect``) from
the lockfile in the project root.  Installs run as child processes that
inherit the terminal so the user sees the installer's own output.
"""

from __future__ import annotations

from rich.markup import escape

from foldit.config import ExecutionContext, PackageManagerKind
from foldit.errors import DependencyInstallError, SubprocessError
from foldit.utils import console, print_success, print_warning, run_command


def install_command(
    kind: PackageManagerKind, packages: list[str], dev: bool = False
) -> list[str]:
    """Build the argv that installs *packages* with *kind*."""
    if kind is PackageManagerKind.YARN:
        cmd = ["yarn", "add"]
        if dev:
            cmd.append("--dev")
    elif kind is PackageManagerKind.PNPM:
        cmd = ["pnpm", "add", "--save-dev" if dev else "--save"]
    else:
        cmd = ["npm", "install", "--save-dev" if dev else "--save"]
    return cmd + list(packages)


async def install_packages(
    ctx: ExecutionContext, packages: list[str], dev: bool = False
) -> None:
    """Install *packages* into the project.

    Raises:
        DependencyInstallError: If the package manager cannot be started or
            exits with a non-zero status.
    """
    if not packages:
        return

    cmd = install_command(ctx.package_manager, packages, dev)
    console.print(f"[dim]Running: {escape(' '.join(cmd))}[/dim]")
    try:
        returncode, _, stderr = await run_command(cmd, cwd=ctx.cwd)
    except OSError as exc:
        raise DependencyInstallError(cmd, -1, str(exc)) from exc
    if returncode != 0:
        raise DependencyInstallError(cmd, returncode, stderr)
    print_success("Dependencies installed successfully")


async def install_or_warn(ctx: ExecutionContext, groups: list[tuple[list[str], bool]]) -> bool:
    """Install each ``(packages, dev)`` group, degrading to manual instructions.

    Returns ``True`` when every group was installed.  With ``skip_install``
    set, nothing is executed and the manual commands are printed instead.
    """
    groups = [(packages, dev) for packages, dev in groups if packages]
    if not groups:
        return True

    console.print()
    console.print("[bold]Installing dependencies...[/bold]")
    if not ctx.skip_install:
        try:
            for packages, dev in groups:
                await install_packages(ctx, packages, dev)
            return True
        except DependencyInstallError as exc:
            print_warning(f"Failed to install dependencies automatically ({exc}).")

    print_warning("Please run manually:")
    for packages, dev in groups:
        console.print(f"   {escape(' '.join(install_command(ctx.package_manager, packages, dev)))}")
    return False


async def run_tool(ctx: ExecutionContext, cmd: list[str], success_message: str) -> bool:
    """Run an optional project tool such as ``npx prisma generate``.

    Failures are reported as a warning naming the manual command; they never
    abort the calling command.
    """
    if ctx.skip_install:
        print_warning(f"Skipped. Please run manually: {' '.join(cmd)}")
        return False

    console.print()
    console.print(f"[bold]Running: {escape(' '.join(cmd))}[/bold]")
    try:
        try:
            returncode, _, stderr = await run_command(cmd, cwd=ctx.cwd)
        except OSError as exc:
            raise SubprocessError(cmd, -1, str(exc)) from exc
        if returncode != 0:
            raise SubprocessError(cmd, returncode, stderr)
    except SubprocessError as exc:
        print_warning(f"{exc}. Please run manually: {' '.join(cmd)}")
        return False
    print_success(success_message)
    return True
