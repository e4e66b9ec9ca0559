"""
Size tiers and their resource and database machine-class tables.

Both tables are read-only and built at import time.
"""

from __future__ import annotations

import logging
from collections.abc import Mapping
from dataclasses import dataclass
from enum import StrEnum
from types import MappingProxyType

from .errors import ValidationError

logger = logging.getLogger(__name__)


class SizeTier(StrEnum):
    """Predefined resource scale levels."""

    TINY = "tiny"
    SMALL = "small"
    MEDIUM = "medium"
    LARGE = "large"


VALID_SIZES: tuple[str, ...] = tuple(tier.value for tier in SizeTier)


@dataclass(frozen=True)
class ResourceSpec:
    """CPU and memory limits as Kubernetes quantity strings."""

    cpu: str
    memory: str


SIZE_RESOURCES: Mapping[SizeTier, ResourceSpec] = MappingProxyType(
    {
        SizeTier.TINY: ResourceSpec(cpu="100m", memory="128Mi"),
        SizeTier.SMALL: ResourceSpec(cpu="200m", memory="256Mi"),
        SizeTier.MEDIUM: ResourceSpec(cpu="500m", memory="512Mi"),
        SizeTier.LARGE: ResourceSpec(cpu="1", memory="1Gi"),
    }
)

# tiny has no managed database class
DATABASE_MACHINE_CLASSES: Mapping[SizeTier, str] = MappingProxyType(
    {
        SizeTier.SMALL: "db-g1-small",
        SizeTier.MEDIUM: "db-perf-optimized-N-2",
        SizeTier.LARGE: "db-perf-optimized-N-16",
    }
)


def resolve_resources(tier: SizeTier | str) -> ResourceSpec:
    """Get the resource limits for a tier, falling back to tiny for unknown tiers."""
    spec = SIZE_RESOURCES.get(tier)
    if spec is None:
        logger.debug("Unknown size tier %r, using tiny resources", tier)
        return SIZE_RESOURCES[SizeTier.TINY]
    return spec


def resolve_database_class(tier: SizeTier | str) -> str:
    """
    Get the database machine class for a tier.

    Raises:
        ValidationError: If the tier has no database machine class
    """
    machine_class = DATABASE_MACHINE_CLASSES.get(tier)
    if machine_class is None:
        choices = ", ".join(t.value for t in DATABASE_MACHINE_CLASSES)
        raise ValidationError(f"invalid database size: {tier} (must be one of: {choices})")
    return machine_class
