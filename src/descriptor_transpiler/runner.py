"""
Transpile runner.

Loads the descriptor and runs the chart and terraform pipelines. Both
artifacts are built and validated before either file is written, so a
failure in one pipeline leaves no partial output.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any

from .chart.config import (
    ChartConfiguration,
    new_chart_configuration,
    with_labels,
    with_size,
)
from .chart.manifest import Deployment, build_deployment
from .chart.renderer import manifest_path, render_chart
from .core.descriptor import AppDescriptor
from .core.loader import load_descriptor
from .settings import TranspilerSettings
from .terraform.config import (
    TerraformConfiguration,
    TerraformOption,
    new_terraform_configuration,
    with_database,
    write_terraform,
)

logger = logging.getLogger(__name__)


# =============================================================================
# Transpile Result
# =============================================================================


@dataclass
class TranspilePlan:
    """Everything needed to write both artifacts."""

    descriptor: AppDescriptor
    chart: ChartConfiguration
    deployment: Deployment
    terraform: TerraformConfiguration

    def summary(self) -> dict[str, Any]:
        """Get a summary of the planned artifacts."""
        database = self.terraform.database
        return {
            "name": self.descriptor.name,
            "size": self.descriptor.size,
            "image": self.chart.image,
            "cpu": self.chart.cpu,
            "memory": self.chart.memory,
            "replicas": self.chart.replicas,
            "port": self.chart.port,
            "database": None
            if database is None
            else {"name": database.name, "size": database.size, "version": database.version},
        }


@dataclass
class TranspileResult:
    """Result of a transpile run."""

    plan: TranspilePlan
    files_created: list[Path] = field(default_factory=list)

    def add_file(self, path: Path) -> None:
        """Record a written file."""
        self.files_created.append(path)


# =============================================================================
# Transpile Runner
# =============================================================================


class TranspileRunner:
    """
    Turns an app descriptor into a chart manifest and a terraform file.

    Usage:
        runner = TranspileRunner(settings)
        result = runner.run()
    """

    def __init__(self, settings: TranspilerSettings | None = None):
        self.settings = settings or TranspilerSettings()

    def plan(self) -> TranspilePlan:
        """Load the descriptor and build both configurations without writing."""
        descriptor = load_descriptor(self.settings.descriptor)

        chart = build_chart_configuration(descriptor, self.settings.image_tag, self.settings.registry)
        deployment = build_deployment(chart)
        terraform = build_terraform_configuration(descriptor, self.settings.region)

        return TranspilePlan(
            descriptor=descriptor,
            chart=chart,
            deployment=deployment,
            terraform=terraform,
        )

    def run(self) -> TranspileResult:
        """Build and write both artifacts."""
        plan = self.plan()
        result = TranspileResult(plan=plan)

        result.add_file(render_chart(plan.deployment, self.settings.output_dir, plan.chart.name))
        result.add_file(write_terraform(plan.terraform, self.settings.terraform_file))

        logger.info("Generated %d files for '%s'", len(result.files_created), plan.descriptor.name)
        return result

    def planned_files(self, plan: TranspilePlan) -> list[Path]:
        """Files a run would write."""
        return [
            manifest_path(self.settings.output_dir, plan.chart.name),
            self.settings.terraform_file,
        ]


def build_chart_configuration(
    descriptor: AppDescriptor, tag: str, registry: str
) -> ChartConfiguration:
    """Build the chart configuration for a descriptor."""
    return new_chart_configuration(
        descriptor.name,
        tag,
        with_labels(descriptor.build_labels()),
        with_size(descriptor.to_size_tier()),
        registry=registry,
    )


def build_terraform_configuration(descriptor: AppDescriptor, region: str) -> TerraformConfiguration:
    """Build the terraform configuration, attaching a database when one is declared."""
    options: list[TerraformOption] = []

    if descriptor.has_database():
        request = descriptor.get_database_config()
        options.append(with_database(descriptor.name, request.size_tier, request.version))
    else:
        logger.debug("No postgres database dependency for '%s'", descriptor.name)

    return new_terraform_configuration(region, *options)
