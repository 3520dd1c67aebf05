"""Kubernetes manifests under ``k8s/``."""

from __future__ import annotations

from pathlib import Path

from foldit.utils import console, print_next_steps, print_success

from .base import BaseGenerator
from .models import KubeOptions, ScaffoldKind, ScaffoldRequest
from .paths import KIND_ROOT_DIRS


class KubeGenerator(BaseGenerator):
    """Generates deployment and service manifests, plus ingress/configmap on request."""

    action = "creating Kubernetes files"

    async def generate(self, request: ScaffoldRequest) -> list[Path]:
        options: KubeOptions = request.options  # type: ignore[assignment]
        console.print("Adding Kubernetes configuration...")
        self.require_package_json()

        k8s_dir = KIND_ROOT_DIRS[ScaffoldKind.KUBE_CONFIG]
        await self.ensure_directory(k8s_dir)

        manifests = ["deployment", "service"]
        if options.with_ingress:
            manifests.append("ingress")
        if options.with_configmap:
            manifests.append("configmap")

        context = options.model_dump(exclude={"command"})
        written: list[Path] = []
        for manifest in manifests:
            result = await self.write(
                self.artifact(
                    f"k8s/{manifest}.yaml.j2",
                    f"{k8s_dir}/{manifest}.yaml",
                    context,
                    label=f"{k8s_dir}/{manifest}.yaml",
                    primary=manifest == "deployment",
                )
            )
            written.append(result.path)

        print_success("Kubernetes configuration complete!")
        steps = [
            f"Apply {manifest}: kubectl apply -f {k8s_dir}/{manifest}.yaml"
            for manifest in manifests
        ]
        steps.append(f"Check status: kubectl get pods -n {options.namespace}")
        print_next_steps(steps)
        return written
