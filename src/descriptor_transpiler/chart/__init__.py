"""
Kubernetes chart generation: configuration, compilation, and rendering.
"""

from .config import (
    REGISTRY_PREFIX,
    ChartConfiguration,
    ChartOption,
    new_chart_configuration,
    with_custom_resources,
    with_env_vars,
    with_labels,
    with_port,
    with_replicas,
    with_size,
)
from .manifest import Deployment, build_deployment
from .renderer import render_chart

__all__ = [
    "REGISTRY_PREFIX",
    "ChartConfiguration",
    "ChartOption",
    "new_chart_configuration",
    "with_port",
    "with_replicas",
    "with_size",
    "with_custom_resources",
    "with_labels",
    "with_env_vars",
    "Deployment",
    "build_deployment",
    "render_chart",
]
