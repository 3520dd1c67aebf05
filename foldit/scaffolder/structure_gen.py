"""Project folder structure generation (``generate-structure``)."""

from __future__ import annotations

from pathlib import Path

from pydantic import BaseModel, ConfigDict

from foldit.utils import console, print_plain, print_success, print_warning

from .base import BaseGenerator
from .models import RenderedArtifact, ScaffoldRequest, StructureOptions, WriteMode


class StructureConfig(BaseModel):
    """Directories to create for one structure type and the tree shown afterwards."""
    model_config = ConfigDict(frozen=True)

    directories: tuple[str, ...]
    description: str


BASIC_STRUCTURE = StructureConfig(
    directories=(
        "src/app",
        "src/app/api",
        "src/components",
        "src/lib",
        "src/types",
        "src/styles",
    ),
    description="""Basic structure includes:
   ├── app/                    # Entry point for routing
   │   ├── api/                # Serverless API routes
   ├── components/             # Reusable UI components
   ├── lib/                    # Utility functions and DB clients
   ├── types/                  # Global TS types/interfaces
   └── styles/                 # Global and modular CSS""",
)

MEDIUM_STRUCTURE = StructureConfig(
    directories=(
        "src/app",
        "src/app/api",
        "src/components",
        "src/hooks",
        "src/lib",
        "src/services",
        "src/types",
        "src/styles",
    ),
    description="""Medium structure includes:
   ├── app/                    # Entry point for routing
   │   ├── api/                # Serverless API routes
   ├── components/             # Reusable UI components
   ├── hooks/                  # Custom React hooks
   ├── lib/                    # Utility functions and DB clients
   ├── services/               # Service layer (API abstractions)
   ├── types/                  # Global TS types/interfaces
   └── styles/                 # Global and modular CSS""",
)

STRUCTURES: dict[str, StructureConfig] = {
    "basic": BASIC_STRUCTURE,
    "medium": MEDIUM_STRUCTURE,
}


class StructureGenerator(BaseGenerator):
    """Creates every directory of a structure type, each with a ``.gitkeep``."""

    action = "generating folder structure"

    async def generate(self, request: ScaffoldRequest) -> list[Path]:
        options: StructureOptions = request.options  # type: ignore[assignment]
        config = STRUCTURES[options.type]

        if (self.ctx.cwd / "src").exists():
            print_warning(
                "Warning: 'src' directory already exists. Some folders may already be present."
            )

        console.print(f"Generating {options.type} project structure...")
        created: list[Path] = []
        for directory in config.directories:
            created.append(await self.ensure_directory(directory))
            await self.write(
                RenderedArtifact(
                    relative_path=f"{directory}/.gitkeep",
                    content="",
                    write_mode=WriteMode.OVERWRITE_IF_ABSENT,
                    label=f"directory {directory}",
                )
            )

        print_success(f"{options.type.capitalize()} folder structure created successfully!")
        console.print()
        print_plain(config.description)
        return created
