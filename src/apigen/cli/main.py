"""CLI entry point for graphql-apigen.

Invoked as::

    apigen [OPTIONS] COMMAND [ARGS]...

or, during development::

    python -m apigen.cli.main

Commands
--------
generate    Generate Python modules from schema files
inspect     Dump the type registry built from schema files
version     Show version information
"""
from __future__ import annotations

import json
import logging
import sys
from pathlib import Path
from typing import TYPE_CHECKING

import click
import yaml
from rich.console import Console
from rich.logging import RichHandler
from rich.syntax import Syntax
from rich.table import Table

from apigen.core.diagnostics import Diagnostic

if TYPE_CHECKING:
    from apigen.config import ApigenConfig

console = Console()
err_console = Console(stderr=True)


def _configure_logging(verbose: bool) -> None:
    """Route ``apigen.*`` log records through a single Rich handler."""
    package_logger = logging.getLogger("apigen")
    for handler in list(package_logger.handlers):
        if isinstance(handler, RichHandler):
            package_logger.removeHandler(handler)
    package_logger.addHandler(RichHandler(console=err_console, show_path=False))
    package_logger.setLevel(logging.DEBUG if verbose else logging.WARNING)


def _severity_color(severity_name: str) -> str:
    """Map a DiagnosticSeverity name to a Rich color string."""
    colors = {
        "ERROR": "red",
        "WARNING": "yellow",
        "INFORMATION": "blue",
        "HINT": "dim",
    }
    return colors.get(severity_name, "white")


def _print_diagnostics(diagnostics: list[Diagnostic], title: str) -> None:
    table = Table(title=title, show_lines=True)
    table.add_column("Severity", style="bold", min_width=10)
    table.add_column("Code", min_width=8)
    table.add_column("Location", min_width=10)
    table.add_column("Message")

    for d in diagnostics:
        color = _severity_color(d.severity.name)
        table.add_row(
            f"[{color}]{d.severity.name}[/{color}]",
            d.code,
            d.location,
            d.message + (f"\n[dim]hint: {d.suggestion}[/dim]" if d.suggestion else ""),
        )
    err_console.print(table)


def _load_config_or_exit(config_file: str | None) -> "ApigenConfig":
    from apigen.config import ApigenConfig, load_config
    from apigen.core.errors import ConfigError

    if config_file is None:
        return ApigenConfig()
    try:
        return load_config(config_file)
    except ConfigError as exc:
        err_console.print(f"[red]Configuration error:[/red] {exc}")
        sys.exit(1)


# ---------------------------------------------------------------------------
# CLI group
# ---------------------------------------------------------------------------


@click.group()
@click.version_option(package_name="graphql-apigen")
@click.option("--verbose", "-v", is_flag=True, default=False, help="Log every processed resource")
def cli(verbose: bool) -> None:
    """Generate Python types and resolver contracts from GraphQL schemas."""
    _configure_logging(verbose)


# ---------------------------------------------------------------------------
# version command
# ---------------------------------------------------------------------------


@cli.command(name="version")
def version_command() -> None:
    """Show detailed version information."""
    from apigen import __version__

    table = Table(show_header=False, box=None)
    table.add_row("[bold]graphql-apigen[/bold]", f"v{__version__}")
    table.add_row("Python", f"{sys.version_info.major}.{sys.version_info.minor}.{sys.version_info.micro}")
    table.add_row("Platform", sys.platform)
    console.print(table)


# ---------------------------------------------------------------------------
# generate command
# ---------------------------------------------------------------------------


@cli.command(name="generate")
@click.option("--config", "-c", "config_file", default=None, help="YAML configuration file")
@click.option("--source", "-s", default=None, help="Directory searched for *.graphql(s) files")
@click.option("--output", "-o", default=None, help="Root directory for generated modules")
@click.option("--namespace", "-n", default=None, help="Default namespace for generated modules")
@click.option("--injection-module", default=None, help="Dotted name of the bindings module")
@click.option(
    "--reference",
    "-r",
    "references",
    multiple=True,
    help="Root of an already-built dependency (repeatable)",
)
@click.option("--publish", default=None, help="Copy source schemas here for downstream builds")
def generate_command(
    config_file: str | None,
    source: str | None,
    output: str | None,
    namespace: str | None,
    injection_module: str | None,
    references: tuple[str, ...],
    publish: str | None,
) -> None:
    """Generate Python modules from schema files.

    Examples:

    \b
        apigen generate --source schema --output generated
        apigen generate -c apigen.yaml -r ../shared/build
    """
    from apigen.compiler import FileSink
    from apigen.pipeline import run

    config = _load_config_or_exit(config_file).with_overrides(
        source_directory=Path(source) if source else None,
        output_directory=Path(output) if output else None,
        default_namespace=namespace,
        injection_module=injection_module,
        reference_paths=tuple(Path(r) for r in references) or None,
        publish_directory=Path(publish) if publish else None,
    )

    sink = FileSink(config.output_directory)
    result = run(config, sink)

    for path in sink.written:
        console.print(f"[green]Written:[/green] {path}")
    if result.diagnostics:
        _print_diagnostics(result.diagnostics, "Diagnostics")

    console.print(f"\n[bold]{result.summary()}[/bold]")
    if not result.success:
        sys.exit(1)


# ---------------------------------------------------------------------------
# inspect command
# ---------------------------------------------------------------------------


@cli.command(name="inspect")
@click.option("--config", "-c", "config_file", default=None, help="YAML configuration file")
@click.option("--source", "-s", default=None, help="Directory searched for *.graphql(s) files")
@click.option("--namespace", "-n", default=None, help="Default namespace for generated modules")
@click.option(
    "--reference",
    "-r",
    "references",
    multiple=True,
    help="Root of an already-built dependency (repeatable)",
)
@click.option(
    "--format",
    "output_format",
    type=click.Choice(["json", "yaml"], case_sensitive=False),
    default="json",
    help="Output format",
)
@click.option("--output", "-o", default=None, help="Output file path (defaults to stdout)")
def inspect_command(
    config_file: str | None,
    source: str | None,
    namespace: str | None,
    references: tuple[str, ...],
    output_format: str,
    output: str | None,
) -> None:
    """Dump the type registry built from schema files.

    Nothing is generated; load problems are reported and exit with 1.
    """
    from apigen.pipeline import ApiGen

    config = _load_config_or_exit(config_file).with_overrides(
        source_directory=Path(source) if source else None,
        default_namespace=namespace,
        reference_paths=tuple(Path(r) for r in references) or None,
    )

    gen = ApiGen(config.default_namespace)
    gen.load(config)
    gen.registry.freeze()

    entries = gen.registry.describe()
    if output_format.lower() == "json":
        text = json.dumps(entries, indent=2)
        lang = "json"
    else:
        text = yaml.dump(entries, default_flow_style=False, allow_unicode=True, sort_keys=False)
        lang = "yaml"

    if output:
        Path(output).write_text(text, encoding="utf-8")
        console.print(f"[green]Registry written to[/green] {output}")
    else:
        console.print(Syntax(text, lang))

    problems = [*gen.diagnostics, *(err.to_diagnostic() for err in gen.registry.errors)]
    if problems:
        _print_diagnostics(problems, "Load problems")
        if any(d.is_error for d in problems):
            sys.exit(1)


if __name__ == "__main__":
    cli()
