"""
Chart configuration builder.

A ChartConfiguration starts from defaults and is adjusted by options
applied in the order given. Options touching the same field overwrite
each other, so ``with_size("large")`` followed by
``with_custom_resources("2", "4Gi")`` ends with the custom values, and
the reverse order ends with the large tier.
"""

from __future__ import annotations

import logging
from collections.abc import Callable, Mapping
from dataclasses import dataclass, field

from ..core.errors import ValidationError
from ..core.sizes import SizeTier, resolve_resources

logger = logging.getLogger(__name__)

REGISTRY_PREFIX = "europe-docker.pkg.dev/my-gcr-project-1234/apps"

DEFAULT_PORT = 8080
DEFAULT_REPLICAS = 1


@dataclass
class ChartConfiguration:
    """Settings for a single-container Kubernetes Deployment."""

    name: str
    image: str
    port: int = DEFAULT_PORT
    replicas: int = DEFAULT_REPLICAS
    cpu: str = field(default_factory=lambda: resolve_resources(SizeTier.TINY).cpu)
    memory: str = field(default_factory=lambda: resolve_resources(SizeTier.TINY).memory)
    labels: dict[str, str] = field(default_factory=dict)
    env_vars: dict[str, str] = field(default_factory=dict)


ChartOption = Callable[[ChartConfiguration], None]


def with_port(port: int) -> ChartOption:
    """Set the container port."""

    def apply(config: ChartConfiguration) -> None:
        config.port = port

    return apply


def with_replicas(replicas: int) -> ChartOption:
    """Set the number of pod replicas."""

    def apply(config: ChartConfiguration) -> None:
        config.replicas = replicas

    return apply


def with_size(size: SizeTier | str) -> ChartOption:
    """Set CPU and memory from a size tier. Unknown tiers get tiny resources."""

    def apply(config: ChartConfiguration) -> None:
        spec = resolve_resources(size)
        config.cpu = spec.cpu
        config.memory = spec.memory

    return apply


def with_custom_resources(cpu: str, memory: str) -> ChartOption:
    """Set CPU and memory limits directly."""

    def apply(config: ChartConfiguration) -> None:
        config.cpu = cpu
        config.memory = memory

    return apply


def with_labels(labels: Mapping[str, str]) -> ChartOption:
    """Replace the pod labels."""

    def apply(config: ChartConfiguration) -> None:
        config.labels = dict(labels)

    return apply


def with_env_vars(env_vars: Mapping[str, str]) -> ChartOption:
    """Replace the container environment variables."""

    def apply(config: ChartConfiguration) -> None:
        config.env_vars = dict(env_vars)

    return apply


def build_image(name: str, tag: str, registry: str = REGISTRY_PREFIX) -> str:
    """Build the image reference ``<registry>/<name>:<tag>``."""
    return f"{registry}/{name}:{tag}"


def new_chart_configuration(
    name: str,
    tag: str,
    *options: ChartOption,
    registry: str = REGISTRY_PREFIX,
) -> ChartConfiguration:
    """
    Create a ChartConfiguration from defaults and options.

    Defaults:
        port 8080, 1 replica, tiny resources (100m / 128Mi),
        no labels, no environment variables.

    Args:
        name: Application name, also used as the container name
        tag: Image tag
        *options: Options applied left to right
        registry: Image registry prefix

    Returns:
        The built ChartConfiguration

    Raises:
        ValidationError: If name or tag is empty, or an option left an
            invalid port, replica count, or resource value
    """
    if not name.strip():
        raise ValidationError("name cannot be empty")
    if not tag.strip():
        raise ValidationError("tag cannot be empty")

    config = ChartConfiguration(name=name, image=build_image(name, tag, registry))

    for option in options:
        option(config)

    _validate(config)
    logger.debug(
        "Chart configuration for '%s': port=%d replicas=%d cpu=%s memory=%s",
        config.name,
        config.port,
        config.replicas,
        config.cpu,
        config.memory,
    )
    return config


def _validate(config: ChartConfiguration) -> None:
    if not 1 <= config.port <= 65535:
        raise ValidationError(f"invalid port {config.port}: must be between 1 and 65535")
    if config.replicas < 1:
        raise ValidationError(f"invalid replica count {config.replicas}: must be at least 1")
    if not config.cpu or not config.memory:
        raise ValidationError("cpu and memory limits cannot be empty")
