"""NextAuth.js and Better Auth integration.

Both integrations write the same set of files (auth config, optional route
handler, optional Prisma adapter and models, optional ``.env.local`` block);
they differ in templates, environment variable names and npm packages, which
are captured per flavour in ``AuthFlavour``.
"""

from __future__ import annotations

from pathlib import Path
from typing import Any, Optional

from pydantic import BaseModel, ConfigDict

from foldit.utils import console, print_info, print_plain, print_success

from .base import BaseGenerator
from .models import AuthOptions, ScaffoldRequest, WriteMode


class AuthFlavour(BaseModel):
    """Everything that differs between NextAuth.js and Better Auth."""
    model_config = ConfigDict(frozen=True)

    title: str
    config_template: str
    route_template: str
    route_path: str
    secret_var: str
    url_var: str
    #: provider -> (client id variable, client secret variable)
    provider_env: dict[str, tuple[str, str]]
    #: Class-name suffix for imported providers ("GitHubProvider" vs "GitHub").
    provider_suffix: str
    dependencies: dict[str, str]
    packages: list[str]


NEXTAUTH = AuthFlavour(
    title="NextAuth.js",
    config_template="auth/nextauth_config.ts.j2",
    route_template="auth/nextauth_route.ts.j2",
    route_path="src/app/api/auth/[...nextauth]/route.ts",
    secret_var="NEXTAUTH_SECRET",
    url_var="NEXTAUTH_URL",
    provider_env={
        "github": ("GITHUB_ID", "GITHUB_SECRET"),
        "google": ("GOOGLE_CLIENT_ID", "GOOGLE_CLIENT_SECRET"),
        "discord": ("DISCORD_CLIENT_ID", "DISCORD_CLIENT_SECRET"),
    },
    provider_suffix="Provider",
    dependencies={"next-auth": "^4.24.5"},
    packages=["next-auth"],
)

BETTER_AUTH = AuthFlavour(
    title="Better Auth",
    config_template="auth/better_auth_config.ts.j2",
    route_template="auth/better_auth_route.ts.j2",
    route_path="src/app/api/auth/route.ts",
    secret_var="AUTH_SECRET",
    url_var="AUTH_URL",
    provider_env={
        "github": ("GITHUB_CLIENT_ID", "GITHUB_CLIENT_SECRET"),
        "google": ("GOOGLE_CLIENT_ID", "GOOGLE_CLIENT_SECRET"),
        "discord": ("DISCORD_CLIENT_ID", "DISCORD_CLIENT_SECRET"),
    },
    provider_suffix="",
    dependencies={"@auth/core": "^0.18.0", "@auth/prisma-adapter": "^1.0.0"},
    packages=["@auth/core"],
)

FLAVOURS: dict[str, AuthFlavour] = {
    "integrate-nextauth": NEXTAUTH,
    "integrate-better-auth": BETTER_AUTH,
}

PROVIDER_LABELS: dict[str, str] = {
    "github": "GitHub",
    "google": "Google",
    "discord": "Discord",
    "credentials": "Credentials",
}

AUTH_CONFIG_PATH = "src/lib/auth.ts"
ADAPTER_PATH = "src/lib/prisma-adapter.ts"
SCHEMA_PATH = "prisma/schema.prisma"
ENV_FILE = ".env.local"


class AuthGenerator(BaseGenerator):
    """Writes the auth configuration for one ``AuthFlavour``."""

    action = "setting up authentication"

    async def generate(self, request: ScaffoldRequest) -> list[Path]:
        options: AuthOptions = request.options  # type: ignore[assignment]
        flavour = FLAVOURS[options.command]
        context = self.build_context(flavour, options)

        console.print(f"Setting up {flavour.title}...")
        written: list[Path] = []

        result = await self.write(
            self.artifact(
                flavour.config_template,
                AUTH_CONFIG_PATH,
                context,
                label="auth config",
                primary=True,
            )
        )
        written.append(result.path)

        if options.route:
            result = await self.write(
                self.artifact(
                    flavour.route_template,
                    flavour.route_path,
                    context,
                    label="auth route",
                )
            )
            written.append(result.path)

        if options.prisma:
            written.extend(await self._add_prisma_adapter(context))

        if options.env:
            result = await self.write(
                self.artifact(
                    "auth/env.j2",
                    ENV_FILE,
                    context,
                    label=f"{flavour.title} variables",
                    write_mode=WriteMode.APPEND,
                    marker=flavour.secret_var,
                )
            )
            written.append(result.path)

        await self.patch_package_json(
            dependencies=flavour.dependencies,
            description=f"{flavour.title} dependencies",
        )

        packages = list(flavour.packages)
        if options.prisma:
            packages.append("@auth/prisma-adapter")
        await self.install((packages, False))

        print_success(f"{flavour.title} integration complete!")
        return written

    async def _add_prisma_adapter(self, context: dict[str, Any]) -> list[Path]:
        result = await self.write(
            self.artifact(
                "auth/prisma_adapter.ts.j2",
                ADAPTER_PATH,
                context,
                label="Prisma adapter",
            )
        )
        written = [result.path]

        models = self.artifact(
            "auth/models.prisma.j2",
            SCHEMA_PATH,
            context,
            label=f"{context['title']} models",
            write_mode=WriteMode.APPEND,
            marker="model Account",
        )
        if (self.ctx.cwd / SCHEMA_PATH).exists():
            result = await self.write(models)
            written.append(result.path)
        else:
            print_info(f"{SCHEMA_PATH} not found. Add the following models manually:")
            print_plain(models.content)
        return written

    @staticmethod
    def build_context(flavour: AuthFlavour, options: AuthOptions) -> dict[str, Any]:
        provider: Optional[str] = options.provider
        client_id_var, client_secret_var = flavour.provider_env.get(provider or "", ("", ""))
        provider_label = PROVIDER_LABELS.get(provider or "", "")
        return {
            "title": flavour.title,
            "provider": provider or "",
            "provider_label": provider_label,
            "provider_class": f"{provider_label}{flavour.provider_suffix}" if provider else "",
            "client_id_var": client_id_var,
            "client_secret_var": client_secret_var,
            "prisma": options.prisma,
            "session": options.session,
            "secret_var": flavour.secret_var,
            "url_var": flavour.url_var,
        }
