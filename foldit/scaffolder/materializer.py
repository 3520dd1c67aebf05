"""Write rendered artifacts to disk.

Every write goes through ``asyncio.to_thread`` and is awaited before the next
one starts, so a command never has two writes in flight.  Exclusive-create
(``open(path, "x")``) is the authoritative conflict check: an earlier
``exists()`` guard can race with other processes, the ``x`` mode cannot.
"""

from __future__ import annotations

import asyncio
from pathlib import Path

from foldit.utils import print_created, print_info, print_updated

from .models import MaterializationResult, Outcome, RenderedArtifact, WriteMode


class Materializer:
    """Writes ``RenderedArtifact`` values below a project root."""

    def __init__(self, root: str | Path) -> None:
        self.root = Path(root)

    def target_path(self, artifact: RenderedArtifact) -> Path:
        return self.root / artifact.relative_path

    async def ensure_directory(self, relative_path: str | Path) -> Path:
        """Create a directory (and parents); succeeds if it already exists."""
        directory = self.root / relative_path
        await asyncio.to_thread(directory.mkdir, parents=True, exist_ok=True)
        return directory

    async def materialize(self, artifact: RenderedArtifact) -> MaterializationResult:
        """Write *artifact* according to its write mode.

        Filesystem errors are captured in the returned result rather than
        raised; callers decide whether a failure is fatal.
        """
        path = self.target_path(artifact)
        try:
            outcome = await asyncio.to_thread(_write_artifact, path, artifact)
        except FileExistsError:
            return MaterializationResult(
                path=path,
                outcome=Outcome.FAILED,
                reason=f"{path} already exists",
                already_exists=True,
                primary=artifact.primary,
            )
        except OSError as exc:
            return MaterializationResult(
                path=path,
                outcome=Outcome.FAILED,
                reason=exc.strerror or str(exc),
                primary=artifact.primary,
            )

        if outcome is Outcome.CREATED:
            print_created(artifact.display_label, path)
        elif outcome is Outcome.UPDATED:
            print_updated(artifact.display_label, path)
        else:
            print_info(f"  {artifact.display_label} already present in {path}, skipped")

        return MaterializationResult(path=path, outcome=outcome, primary=artifact.primary)


# ---------------------------------------------------------------------------
# Internal helpers
# ---------------------------------------------------------------------------

def _write_artifact(path: Path, artifact: RenderedArtifact) -> Outcome:
    """Synchronous helper: create parent dirs and apply the write mode."""
    path.parent.mkdir(parents=True, exist_ok=True)
    mode = artifact.write_mode

    if mode is WriteMode.EXCLUSIVE_CREATE:
        with open(path, "x", encoding="utf-8") as fh:
            fh.write(artifact.content)
        return Outcome.CREATED

    if mode is WriteMode.OVERWRITE_IF_ABSENT:
        try:
            with open(path, "x", encoding="utf-8") as fh:
                fh.write(artifact.content)
        except FileExistsError:
            return Outcome.SKIPPED_EXISTS
        return Outcome.CREATED

    # APPEND / PREPEND: create the file when absent, otherwise merge once.
    if not path.exists():
        with open(path, "x", encoding="utf-8") as fh:
            fh.write(artifact.content)
        return Outcome.CREATED

    existing = path.read_text(encoding="utf-8")
    if artifact.marker and artifact.marker in existing:
        return Outcome.SKIPPED_EXISTS

    if mode is WriteMode.APPEND:
        with open(path, "a", encoding="utf-8") as fh:
            fh.write("\n" + artifact.content)
    else:
        path.write_text(artifact.content + "\n" + existing, encoding="utf-8")
    return Outcome.UPDATED
