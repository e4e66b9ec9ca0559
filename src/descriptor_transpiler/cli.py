"""
Command line interface for the descriptor transpiler.

Commands:
    generate  Write the chart manifest and terraform file
    validate  Check a descriptor and show what it resolves to
"""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Annotated

import typer
from rich.console import Console
from rich.markup import escape
from rich.panel import Panel
from rich.table import Table

from ._version import get_version
from .core.errors import TranspilerError
from .settings import SETTINGS_FILE, TranspilerSettings, load_settings

logger = logging.getLogger(__name__)

app = typer.Typer(
    help="Generate Kubernetes and Terraform artifacts from an app descriptor",
    no_args_is_help=True,
)

console = Console()

LOG_FORMAT = "%(asctime)s %(levelname)s %(name)s: %(message)s"

ConfigOption = Annotated[
    Path,
    typer.Option("--config", "-c", help="Settings file", dir_okay=False),
]
DescriptorOption = Annotated[
    Path | None,
    typer.Option("--descriptor", "-d", help="Descriptor file (app.yaml)", dir_okay=False),
]


def version_callback(value: bool) -> None:
    if value:
        typer.echo(f"descriptor-transpiler {get_version()}")
        raise typer.Exit()


@app.callback()
def main_callback(
    verbose: Annotated[
        bool,
        typer.Option("--verbose", "-v", help="Enable debug logging"),
    ] = False,
    version: Annotated[
        bool,
        typer.Option(
            "--version",
            callback=version_callback,
            is_eager=True,
            help="Show version and exit",
        ),
    ] = False,
) -> None:
    """Descriptor transpiler."""
    logging.basicConfig(level=logging.DEBUG if verbose else logging.WARNING, format=LOG_FORMAT)


def _settings(config: Path, **overrides: object) -> TranspilerSettings:
    """Load settings from file and apply command line overrides."""
    settings = load_settings(config)
    updates = {key: value for key, value in overrides.items() if value is not None}
    return settings.model_copy(update=updates)


def _fail(error: TranspilerError) -> typer.Exit:
    logger.debug("command failed: %s", error)
    console.print(f"[red]Error:[/red] {escape(str(error))}")
    return typer.Exit(1)


@app.command(name="generate")
def generate(
    config: ConfigOption = Path(SETTINGS_FILE),
    descriptor: DescriptorOption = None,
    output: Annotated[
        Path | None,
        typer.Option("--output", "-o", help="Output directory for the chart manifest"),
    ] = None,
    terraform_file: Annotated[
        Path | None,
        typer.Option("--terraform-file", help="Terraform output file"),
    ] = None,
    tag: Annotated[
        str | None,
        typer.Option("--tag", "-t", help="Container image tag"),
    ] = None,
    region: Annotated[
        str | None,
        typer.Option("--region", "-r", help="Cloud region for the database"),
    ] = None,
    dry_run: Annotated[
        bool,
        typer.Option("--dry-run", "-n", help="Show what would be generated without writing files"),
    ] = False,
) -> None:
    """
    Generate the chart manifest and terraform file for a descriptor.

    Example:
        descriptor-transpiler generate -d examples/app.yaml -o dist
    """
    from .runner import TranspileRunner

    try:
        settings = _settings(
            config,
            descriptor=descriptor,
            output_dir=output,
            terraform_file=terraform_file,
            image_tag=tag,
            region=region,
        )
        runner = TranspileRunner(settings)

        if dry_run:
            plan = runner.plan()
            _print_plan(plan.summary())
            console.print("[yellow]DRY RUN - No files will be written[/yellow]")
            for path in runner.planned_files(plan):
                console.print(f"  - {escape(str(path))}")
            return

        result = runner.run()
    except TranspilerError as e:
        raise _fail(e) from e

    _print_plan(result.plan.summary())
    console.print(
        Panel(
            "\n".join(f"[cyan]{escape(str(path))}[/cyan]" for path in result.files_created),
            title=f"[green]Generated {len(result.files_created)} files[/green]",
        )
    )


@app.command(name="validate")
def validate(
    config: ConfigOption = Path(SETTINGS_FILE),
    descriptor: DescriptorOption = None,
) -> None:
    """Validate a descriptor and show its resolved settings."""
    from .core.loader import load_descriptor
    from .runner import build_terraform_configuration

    try:
        settings = _settings(config, descriptor=descriptor)
        app_descriptor = load_descriptor(settings.descriptor)
        database = app_descriptor.get_database_config() if app_descriptor.has_database() else None
        # rejects database tiers and versions the module cannot provision
        build_terraform_configuration(app_descriptor, settings.region)
    except TranspilerError as e:
        raise _fail(e) from e

    table = Table(title=f"Descriptor: {app_descriptor.name}")
    table.add_column("Field", style="cyan")
    table.add_column("Value", style="green")
    table.add_row("size", app_descriptor.size)
    for key, value in app_descriptor.build_labels().items():
        table.add_row(key, value)
    if database is None:
        table.add_row("database", "none")
    else:
        table.add_row("database", f"postgres {database.version} ({database.size_tier})")

    console.print(table)
    console.print("[green]Descriptor is valid[/green]")


def _print_plan(summary: dict[str, object]) -> None:
    table = Table(title="Generation Plan")
    table.add_column("Setting", style="cyan")
    table.add_column("Value", style="green")

    for key in ("name", "size", "image", "cpu", "memory", "replicas", "port"):
        table.add_row(key, str(summary[key]))

    database = summary["database"]
    if isinstance(database, dict):
        table.add_row("database", f"{database['name']} {database['size']} {database['version']}")
    else:
        table.add_row("database", "none")

    console.print(table)


def main() -> None:
    """Console script entry point."""
    app()


if __name__ == "__main__":
    main()
