"""Route-aware path resolution and the existence guard.

Maps a logical target (page name, API route name, service name) to the
directory it lives in, following Next.js App Router conventions::

    resolve(root, ScaffoldKind.PAGE, "admin/users", dynamic="id")
    # -> <root>/src/app/admin/users/[id], entity name "users"
"""

from __future__ import annotations

from pathlib import Path
from typing import Optional

from pydantic import BaseModel, ConfigDict

from .models import RouteSegment, ScaffoldKind, SegmentKind


# Root directory (relative to the project) for each kind of artifact.
KIND_ROOT_DIRS: dict[ScaffoldKind, str] = {
    ScaffoldKind.PAGE: "src/app",
    ScaffoldKind.API_ROUTE: "src/app/api",
    ScaffoldKind.SERVICE: "src/services",
    ScaffoldKind.KUBE_CONFIG: "k8s",
    ScaffoldKind.DOCKER_CONFIG: "",
    ScaffoldKind.STRUCTURE: "",
    ScaffoldKind.INTEGRATION: "",
}


class ResolvedTarget(BaseModel):
    """Where a request's primary artifact goes and what it is called."""
    model_config = ConfigDict(frozen=True)

    directory: Path
    segments: tuple[RouteSegment, ...]
    entity_name: str

    @property
    def dynamic_segment(self) -> Optional[RouteSegment]:
        for segment in self.segments:
            if segment.is_dynamic:
                return segment
        return None


def parse_segments(
    name: str,
    dynamic: Optional[str] = None,
    catch_all: bool = False,
) -> list[RouteSegment]:
    """Split *name* on ``/`` into static segments and append the dynamic one.

    Empty pieces (leading, trailing or doubled slashes) are dropped.
    """
    segments = [RouteSegment(name=piece) for piece in name.split("/") if piece]
    if dynamic:
        kind = SegmentKind.CATCH_ALL if catch_all else SegmentKind.DYNAMIC
        segments.append(RouteSegment(kind=kind, name=dynamic))
    return segments


def entity_name(segments: list[RouteSegment] | tuple[RouteSegment, ...]) -> str:
    """Return the last static segment name, or ``""`` if there is none."""
    for segment in reversed(segments):
        if not segment.is_dynamic:
            return segment.name
    return ""


def kind_root(base_dir: str | Path, kind: ScaffoldKind) -> Path:
    """Absolute root directory for artifacts of *kind*."""
    root = Path(base_dir)
    relative = KIND_ROOT_DIRS[kind]
    return root / relative if relative else root


def resolve(
    base_dir: str | Path,
    kind: ScaffoldKind,
    name: str,
    dynamic: Optional[str] = None,
    catch_all: bool = False,
) -> ResolvedTarget:
    """Compute the target directory and entity name for a request."""
    segments = parse_segments(name, dynamic, catch_all)
    directory = kind_root(base_dir, kind).joinpath(*(s.render() for s in segments))
    return ResolvedTarget(
        directory=directory,
        segments=tuple(segments),
        entity_name=entity_name(segments),
    )


def check_conflict(path: str | Path) -> bool:
    """Return ``True`` if *path* already exists (file or directory)."""
    return Path(path).exists()
