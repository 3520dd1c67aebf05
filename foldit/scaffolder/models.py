"""Pydantic v2 models for scaffolding requests, artifacts and results.

A ``ScaffoldRequest`` is built once from parsed CLI arguments and never
mutated.  Generators turn it into ``RenderedArtifact`` values which the
``Materializer`` writes, producing one ``MaterializationResult`` each.  The
results are aggregated into a ``CommandResult`` whose exit code is the only
thing the CLI needs to terminate the process.
"""

from __future__ import annotations

from enum import Enum
from pathlib import Path
from typing import Annotated, Literal, Optional, Union

from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator

from foldit.config import DEFAULTS


# ---------------------------------------------------------------------------
# Enumerations
# ---------------------------------------------------------------------------

class ScaffoldKind(str, Enum):
    """What a request scaffolds; decides the root directory and the renderers."""
    PAGE = "page"
    API_ROUTE = "api_route"
    SERVICE = "service"
    STRUCTURE = "structure"
    DOCKER_CONFIG = "docker_config"
    KUBE_CONFIG = "kube_config"
    INTEGRATION = "integration"


class SegmentKind(str, Enum):
    STATIC = "static"
    DYNAMIC = "dynamic"
    CATCH_ALL = "catch_all"


class WriteMode(str, Enum):
    """How the materializer treats an artifact whose path may already exist."""
    EXCLUSIVE_CREATE = "exclusive_create"
    APPEND = "append"
    PREPEND = "prepend"
    OVERWRITE_IF_ABSENT = "overwrite_if_absent"


class Outcome(str, Enum):
    CREATED = "created"
    UPDATED = "updated"
    SKIPPED_EXISTS = "skipped_exists"
    FAILED = "failed"


HTTP_METHODS: tuple[str, ...] = ("GET", "POST", "PUT", "PATCH", "DELETE", "HEAD", "OPTIONS")
AUTH_PROVIDERS: tuple[str, ...] = ("github", "google", "discord", "credentials")
DB_PROVIDERS: tuple[str, ...] = ("sqlite", "postgresql", "mysql", "sqlserver", "mongodb")
SERVICE_TYPES: tuple[str, ...] = ("ClusterIP", "NodePort", "LoadBalancer")


# ---------------------------------------------------------------------------
# Routing
# ---------------------------------------------------------------------------

class RouteSegment(BaseModel):
    """One path component of a Next.js route."""
    model_config = ConfigDict(frozen=True)

    kind: SegmentKind = Field(default=SegmentKind.STATIC)
    name: str = Field(..., description="Directory name or dynamic parameter name")

    @model_validator(mode="after")
    def _param_required(self) -> "RouteSegment":
        if self.kind is not SegmentKind.STATIC and not self.name:
            raise ValueError(f"{self.kind.value} segment requires a parameter name")
        return self

    @property
    def is_dynamic(self) -> bool:
        return self.kind is not SegmentKind.STATIC

    def render(self) -> str:
        """Directory name for this segment (``name``, ``[name]`` or ``[...name]``)."""
        if self.kind is SegmentKind.CATCH_ALL:
            return f"[...{self.name}]"
        if self.kind is SegmentKind.DYNAMIC:
            return f"[{self.name}]"
        return self.name


# ---------------------------------------------------------------------------
# Artifacts & results
# ---------------------------------------------------------------------------

class RenderedArtifact(BaseModel):
    """A rendered file waiting to be written, relative to the project root."""
    model_config = ConfigDict(frozen=True)

    relative_path: str
    content: str
    write_mode: WriteMode = Field(default=WriteMode.EXCLUSIVE_CREATE)
    label: str = Field(default="", description="Human-readable name used in reports")
    marker: Optional[str] = Field(
        default=None,
        description="Substring whose presence means append/prepend was already applied",
    )
    primary: bool = Field(default=False)

    @property
    def display_label(self) -> str:
        return self.label or self.relative_path


class MaterializationResult(BaseModel):
    """What happened to one artifact."""
    model_config = ConfigDict(frozen=True)

    path: Path
    outcome: Outcome
    reason: str = ""
    already_exists: bool = False
    primary: bool = False

    @property
    def ok(self) -> bool:
        return self.outcome in (Outcome.CREATED, Outcome.UPDATED)


class CommandResult(BaseModel):
    """Aggregate of one command invocation, converted to an exit code by the CLI."""
    command: str
    results: list[MaterializationResult] = Field(default_factory=list)
    error: Optional[str] = None

    @property
    def created(self) -> list[Path]:
        return [r.path for r in self.results if r.outcome is Outcome.CREATED]

    @property
    def success(self) -> bool:
        return self.exit_code == 0

    @property
    def exit_code(self) -> int:
        if self.error is not None:
            return 1
        for result in self.results:
            if result.primary and result.outcome in (Outcome.FAILED, Outcome.SKIPPED_EXISTS):
                return 1
        return 0


# ---------------------------------------------------------------------------
# Per-command options (tagged union)
# ---------------------------------------------------------------------------

class _Options(BaseModel):
    model_config = ConfigDict(frozen=True, extra="forbid")


class PageOptions(_Options):
    command: Literal["generate-page"] = "generate-page"
    with_component: bool = False
    with_test: bool = False
    dynamic: Optional[str] = None
    catch_all: bool = False


class ApiOptions(_Options):
    command: Literal["generate-api"] = "generate-api"
    methods: list[str] = Field(default_factory=lambda: list(DEFAULTS["api_methods"]))
    auth: bool = False
    prisma: bool = False
    dynamic: Optional[str] = None
    catch_all: bool = False

    @field_validator("methods")
    @classmethod
    def _normalise_methods(cls, value: list[str]) -> list[str]:
        methods: list[str] = []
        for raw in value:
            method = raw.strip().upper()
            if not method:
                continue
            if method not in HTTP_METHODS:
                raise ValueError(
                    f"Unsupported HTTP method '{raw}' (expected one of {', '.join(HTTP_METHODS)})"
                )
            if method not in methods:
                methods.append(method)
        return methods or list(DEFAULTS["api_methods"])


class ServiceOptions(_Options):
    command: Literal["generate-service"] = "generate-service"
    base_url: Optional[str] = None
    with_types: bool = False
    with_interceptors: bool = False
    with_error_handling: bool = False
    with_auth: bool = False
    with_retry: bool = False
    with_cache: bool = False
    max_retries: int = Field(default=DEFAULTS["service_max_retries"], ge=1)
    retry_delay: int = Field(default=DEFAULTS["service_retry_delay"], ge=0)


class StructureOptions(_Options):
    command: Literal["generate-structure"] = "generate-structure"
    type: Literal["basic", "medium"] = DEFAULTS["structure_type"]


class DockerOptions(_Options):
    command: Literal["dockerize"] = "dockerize"
    node_version: str = DEFAULTS["docker_node_version"]
    port: int = Field(default=DEFAULTS["docker_port"], ge=1, le=65535)
    with_compose: bool = False
    with_ignore: bool = True
    production: bool = False


class KubeOptions(_Options):
    command: Literal["add-kube"] = "add-kube"
    namespace: str = DEFAULTS["kube_namespace"]
    replicas: int = Field(default=DEFAULTS["kube_replicas"], ge=1)
    port: int = Field(default=DEFAULTS["kube_port"], ge=1, le=65535)
    with_ingress: bool = False
    with_configmap: bool = False
    image_name: str = DEFAULTS["kube_image_name"]
    image_tag: str = DEFAULTS["kube_image_tag"]
    service_type: Literal["ClusterIP", "NodePort", "LoadBalancer"] = DEFAULTS["kube_service_type"]


class PrismaOptions(_Options):
    command: Literal["integrate-prisma"] = "integrate-prisma"
    db: Literal["sqlite", "postgresql", "mysql", "sqlserver", "mongodb"] = DEFAULTS["prisma_provider"]
    push: bool = False
    generate: bool = False
    with_seed: bool = False
    schema_path: str = DEFAULTS["prisma_schema"]


class AuthOptions(_Options):
    provider: Optional[Literal["github", "google", "discord", "credentials"]] = None
    prisma: bool = False
    session: Literal["jwt", "database"] = DEFAULTS["auth_session"]
    env: bool = False
    route: bool = False

    @field_validator("provider", mode="before")
    @classmethod
    def _lower_provider(cls, value: Optional[str]) -> Optional[str]:
        return value.lower() if isinstance(value, str) else value


class NextAuthOptions(AuthOptions):
    command: Literal["integrate-nextauth"] = "integrate-nextauth"


class BetterAuthOptions(AuthOptions):
    command: Literal["integrate-better-auth"] = "integrate-better-auth"


class EslintPrettierOptions(_Options):
    command: Literal["integrate-eslint-prettier"] = "integrate-eslint-prettier"
    strict: bool = False
    airbnb: bool = False
    typescript: bool = False
    with_scripts: bool = False
    ignore: Optional[str] = None


class ShadcnOptions(_Options):
    command: Literal["integrate-shadcn"] = "integrate-shadcn"
    components: list[str] = Field(default_factory=list)
    theme: str = DEFAULTS["shadcn_theme"]
    dir: str = DEFAULTS["shadcn_dir"]
    tailwind: bool = False

    @field_validator("components")
    @classmethod
    def _strip_components(cls, value: list[str]) -> list[str]:
        return [c.strip() for c in value if c.strip()]


ScaffoldOptions = Annotated[
    Union[
        PageOptions,
        ApiOptions,
        ServiceOptions,
        StructureOptions,
        DockerOptions,
        KubeOptions,
        PrismaOptions,
        NextAuthOptions,
        BetterAuthOptions,
        EslintPrettierOptions,
        ShadcnOptions,
    ],
    Field(discriminator="command"),
]


COMMAND_KINDS: dict[str, ScaffoldKind] = {
    "generate-page": ScaffoldKind.PAGE,
    "generate-api": ScaffoldKind.API_ROUTE,
    "generate-service": ScaffoldKind.SERVICE,
    "generate-structure": ScaffoldKind.STRUCTURE,
    "dockerize": ScaffoldKind.DOCKER_CONFIG,
    "add-kube": ScaffoldKind.KUBE_CONFIG,
    "integrate-prisma": ScaffoldKind.INTEGRATION,
    "integrate-nextauth": ScaffoldKind.INTEGRATION,
    "integrate-better-auth": ScaffoldKind.INTEGRATION,
    "integrate-eslint-prettier": ScaffoldKind.INTEGRATION,
    "integrate-shadcn": ScaffoldKind.INTEGRATION,
}

NAMED_KINDS: frozenset[ScaffoldKind] = frozenset(
    {ScaffoldKind.PAGE, ScaffoldKind.API_ROUTE, ScaffoldKind.SERVICE}
)


class ScaffoldRequest(BaseModel):
    """A single parsed CLI invocation."""
    model_config = ConfigDict(frozen=True)

    name: str = Field(default="", description="Entity name or route path")
    options: ScaffoldOptions

    @property
    def kind(self) -> ScaffoldKind:
        return COMMAND_KINDS[self.options.command]

    @property
    def command(self) -> str:
        return self.options.command

    @model_validator(mode="after")
    def _name_required(self) -> "ScaffoldRequest":
        if self.kind in NAMED_KINDS and not self.name:
            raise ValueError(f"{self.options.command} requires a name")
        return self
