"""ESLint and Prettier integration (``integrate eslint-prettier``)."""

from __future__ import annotations

from pathlib import Path

from foldit.utils import console, print_success

from .base import BaseGenerator
from .models import EslintPrettierOptions, ScaffoldRequest

LINT_SCRIPTS: dict[str, str] = {
    "lint": "eslint . --ext .js,.jsx,.ts,.tsx",
    "lint:fix": "eslint . --ext .js,.jsx,.ts,.tsx --fix",
    "format": "prettier --write .",
    "format:check": "prettier --check .",
}

TYPESCRIPT_PACKAGES = ["@typescript-eslint/parser", "@typescript-eslint/eslint-plugin"]
AIRBNB_PACKAGES = [
    "eslint-config-airbnb",
    "eslint-config-airbnb-typescript",
    "eslint-plugin-import",
    "eslint-plugin-jsx-a11y",
    "eslint-plugin-react",
    "eslint-plugin-react-hooks",
]


def split_patterns(ignore: str | None) -> list[str]:
    """Turn ``"a,b , c"`` into ``["a", "b", "c"]``."""
    if not ignore:
        return []
    return [pattern.strip() for pattern in ignore.split(",") if pattern.strip()]


class EslintPrettierGenerator(BaseGenerator):
    """Writes ESLint/Prettier configs and ignore files, then installs the tooling."""

    action = "setting up ESLint and Prettier"

    async def generate(self, request: ScaffoldRequest) -> list[Path]:
        options: EslintPrettierOptions = request.options  # type: ignore[assignment]
        patterns = split_patterns(options.ignore)
        base_context = {
            "strict": options.strict,
            "airbnb": options.airbnb,
            "typescript": options.typescript,
            "extra_patterns": patterns,
        }

        console.print("Setting up ESLint and Prettier...")
        files = [
            ("lint/eslintrc.js.j2", ".eslintrc.js", False),
            ("lint/prettierrc.j2", ".prettierrc", False),
            ("lint/ignore.j2", ".eslintignore", False),
            ("lint/ignore.j2", ".prettierignore", True),
        ]
        written: list[Path] = []
        for template, output_name, include_lockfiles in files:
            result = await self.write(
                self.artifact(
                    template,
                    output_name,
                    {**base_context, "include_lockfiles": include_lockfiles},
                    label=output_name,
                    primary=output_name == ".eslintrc.js",
                )
            )
            written.append(result.path)

        if options.with_scripts:
            await self.patch_package_json(
                scripts=LINT_SCRIPTS, description="lint and format scripts"
            )

        packages = ["eslint", "prettier"]
        if options.typescript:
            packages.extend(TYPESCRIPT_PACKAGES)
        if options.airbnb:
            packages.extend(AIRBNB_PACKAGES)
        await self.install((packages, True))

        print_success("ESLint and Prettier integration complete!")
        return written
