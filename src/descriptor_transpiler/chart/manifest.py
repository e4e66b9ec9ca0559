"""
Kubernetes object model for the generated chart.

Only the parts of the apps/v1 Deployment schema the chart emits are
modelled. Field names are snake_case in Python and camelCase in the
rendered manifest.
"""

from __future__ import annotations

from typing import Any

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel

from .config import ChartConfiguration


class K8sModel(BaseModel):
    """Base for manifest objects."""

    model_config = ConfigDict(frozen=True, alias_generator=to_camel, populate_by_name=True)


class ObjectMeta(K8sModel):
    name: str | None = None
    labels: dict[str, str] | None = None


class LabelSelector(K8sModel):
    match_labels: dict[str, str]


class ContainerPort(K8sModel):
    container_port: int


class EnvVar(K8sModel):
    name: str
    value: str


class ResourceRequirements(K8sModel):
    limits: dict[str, str]


class Container(K8sModel):
    name: str
    image: str
    resources: ResourceRequirements
    ports: list[ContainerPort]
    env: list[EnvVar] | None = None


class PodSpec(K8sModel):
    containers: list[Container]


class PodTemplateSpec(K8sModel):
    metadata: ObjectMeta
    spec: PodSpec


class DeploymentSpec(K8sModel):
    replicas: int
    selector: LabelSelector
    template: PodTemplateSpec


class Deployment(K8sModel):
    """An apps/v1 Deployment."""

    api_version: str = "apps/v1"
    kind: str = "Deployment"
    metadata: ObjectMeta
    spec: DeploymentSpec

    def to_manifest(self) -> dict[str, Any]:
        """Get the manifest as a plain dict with Kubernetes field names."""
        return self.model_dump(by_alias=True, exclude_none=True)


def build_deployment(config: ChartConfiguration) -> Deployment:
    """
    Compile a ChartConfiguration into a Deployment.

    The selector and the pod template are labelled from the same mapping;
    a Deployment whose selector does not match its own pod labels never
    owns any pods.
    """
    labels = dict(config.labels)

    return Deployment(
        metadata=ObjectMeta(name=config.name),
        spec=DeploymentSpec(
            replicas=config.replicas,
            selector=LabelSelector(match_labels=labels),
            template=PodTemplateSpec(
                metadata=ObjectMeta(labels=labels),
                spec=PodSpec(containers=[build_container(config)]),
            ),
        ),
    )


def build_container(config: ChartConfiguration) -> Container:
    """Build the single application container."""
    return Container(
        name=config.name,
        image=config.image,
        resources=ResourceRequirements(limits={"cpu": config.cpu, "memory": config.memory}),
        ports=[ContainerPort(container_port=config.port)],
        env=build_env_vars(config.env_vars) or None,
    )


def build_env_vars(env_vars: dict[str, str]) -> list[EnvVar]:
    """Convert environment variables to a list sorted by name."""
    return [EnvVar(name=key, value=env_vars[key]) for key in sorted(env_vars)]


__all__ = [
    "Container",
    "ContainerPort",
    "Deployment",
    "DeploymentSpec",
    "EnvVar",
    "LabelSelector",
    "ObjectMeta",
    "PodSpec",
    "PodTemplateSpec",
    "ResourceRequirements",
    "build_container",
    "build_deployment",
    "build_env_vars",
]
