"""Error taxonomy for scaffolding commands.

Fatal errors (``UsageError``, ``ConflictError``, ``WriteError``) abort the
running command and turn into exit status 1 at the CLI boundary.
``DependencyInstallError`` and ``SubprocessError`` are recovered by the
generator that triggered them and only produce a warning.
"""

from __future__ import annotations

from pathlib import Path


class ScaffoldError(Exception):
    """Base class for errors that terminate a scaffolding command."""

    exit_code: int = 1


class UsageError(ScaffoldError):
    """Raised when a command is invoked with missing or invalid arguments."""

    def __init__(self, message: str, usage: str = "") -> None:
        self.usage = usage
        super().__init__(message)


class ConflictError(ScaffoldError):
    """Raised when a target file or directory already exists."""

    def __init__(self, path: str | Path, message: str | None = None) -> None:
        self.path = Path(path)
        super().__init__(message or f"{self.path} already exists")


class WriteError(ScaffoldError):
    """Raised for any other filesystem failure while materializing a file."""

    def __init__(self, path: str | Path, reason: str) -> None:
        self.path = Path(path)
        self.reason = reason
        super().__init__(reason)


class DependencyInstallError(Exception):
    """Raised when the package manager exits with a non-zero status."""

    def __init__(self, command: list[str], returncode: int, stderr: str = "") -> None:
        self.command = command
        self.returncode = returncode
        self.stderr = stderr
        super().__init__(
            f"'{' '.join(command)}' exited with status {returncode}"
        )


class SubprocessError(Exception):
    """Raised when an optional project tool (``npx ...``) fails."""

    def __init__(self, command: list[str], returncode: int, stderr: str = "") -> None:
        self.command = command
        self.returncode = returncode
        self.stderr = stderr
        super().__init__(
            f"'{' '.join(command)}' exited with status {returncode}"
        )
