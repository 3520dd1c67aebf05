"""Tests for the Prisma integration (foldit.scaffolder.prisma_gen).

Covers:
- Schema, client and .env generation per database provider
- Optional seed script and custom schema locations
- package.json script patching
- Idempotent DATABASE_URL append
- Skipped installs and tool runs
"""

from __future__ import annotations

from pathlib import Path

import pytest

from foldit.scaffolder.generator import ScaffoldOrchestrator
from foldit.scaffolder.models import PrismaOptions, ScaffoldRequest
from foldit.scaffolder.prisma_gen import DATABASE_URLS


pytestmark = pytest.mark.unit


class TestPrismaGenerator:
    async def test_defaults(self, run_request, project_dir: Path, read_package_json, capsys):
        result = await run_request(PrismaOptions())

        assert result.exit_code == 0
        schema = (project_dir / "prisma" / "schema.prisma").read_text(encoding="utf-8")
        assert 'provider = "sqlite"' in schema
        assert 'url      = env("DATABASE_URL")' in schema
        assert "relationMode" not in schema
        assert (project_dir / ".env").read_text(encoding="utf-8") == 'DATABASE_URL="file:./dev.db"\n'
        client = (project_dir / "src" / "lib" / "prisma.ts").read_text(encoding="utf-8")
        assert "new PrismaClient(" in client
        assert not (project_dir / "prisma" / "seed.ts").exists()

        scripts = read_package_json()["scripts"]
        assert scripts["db:generate"] == "prisma generate"
        assert scripts["db:push"] == "prisma db push"
        assert scripts["db:seed"] == "tsx prisma/seed.ts"
        assert scripts["dev"] == "next dev"

        out = capsys.readouterr().out
        assert "npm install --save prisma @prisma/client" in out
        assert "Prisma integration complete!" in out

    @pytest.mark.parametrize("db", ["postgresql", "mysql", "sqlserver"])
    def test_connection_strings(self, db):
        assert DATABASE_URLS[db].startswith(db)

    async def test_mongodb(self, run_request, project_dir: Path):
        await run_request(PrismaOptions(db="mongodb"))
        schema = (project_dir / "prisma" / "schema.prisma").read_text(encoding="utf-8")
        assert 'provider = "mongodb"' in schema
        assert 'relationMode = "prisma"' in schema
        assert "mongodb://localhost:27017/mydb" in (project_dir / ".env").read_text(encoding="utf-8")

    async def test_seed_and_custom_schema(
        self, run_request, project_dir: Path, read_package_json, capsys
    ):
        result = await run_request(PrismaOptions(with_seed=True, schema_path="db/schema.prisma"))

        assert result.exit_code == 0
        assert (project_dir / "db" / "schema.prisma").is_file()
        seed = (project_dir / "db" / "seed.ts").read_text(encoding="utf-8")
        assert "prisma.user.upsert" in seed
        assert read_package_json()["scripts"]["db:seed"] == "tsx db/seed.ts"
        assert "npm install --save-dev tsx" in capsys.readouterr().out

    async def test_env_appended_once(self, run_request, project_dir: Path):
        (project_dir / ".env").write_text("NEXT_PUBLIC_API_URL=http://localhost\n", encoding="utf-8")

        await run_request(PrismaOptions(db="postgresql"))

        env = (project_dir / ".env").read_text(encoding="utf-8")
        assert env.startswith("NEXT_PUBLIC_API_URL=http://localhost\n")
        assert env.count("DATABASE_URL=") == 1

    async def test_existing_database_url_is_kept(self, run_request, project_dir: Path, capsys):
        (project_dir / ".env").write_text('DATABASE_URL="postgres://prod"\n', encoding="utf-8")

        result = await run_request(PrismaOptions())

        assert result.exit_code == 0
        assert (project_dir / ".env").read_text(encoding="utf-8") == 'DATABASE_URL="postgres://prod"\n'
        assert "DATABASE_URL already present" in capsys.readouterr().out

    async def test_tools_skipped(self, run_request, capsys):
        await run_request(PrismaOptions(push=True, generate=True))
        out = capsys.readouterr().out
        assert "Skipped. Please run manually: npx prisma db push" in out
        assert "Skipped. Please run manually: npx prisma generate" in out

    async def test_existing_schema_is_a_conflict(self, run_request, project_dir: Path, capsys):
        (project_dir / "prisma").mkdir()
        (project_dir / "prisma" / "schema.prisma").write_text("// mine\n", encoding="utf-8")

        result = await run_request(PrismaOptions())

        assert result.exit_code == 1
        assert not (project_dir / ".env").exists()
        assert "Error setting up Prisma" in capsys.readouterr().err

    async def test_without_package_json(self, empty_ctx, renderer, capsys):
        orchestrator = ScaffoldOrchestrator(empty_ctx, renderer)
        result = await orchestrator.run(ScaffoldRequest(options=PrismaOptions()))

        assert result.exit_code == 0
        assert (empty_ctx.cwd / "prisma" / "schema.prisma").is_file()
        assert "package.json not found, skipping Prisma scripts" in capsys.readouterr().out
