"""
Command-line interface for Runtime Fingerprint.

Provides commands for detecting the host runtime and parsing runtime descriptors.
"""

from __future__ import annotations

import logging
import sys
from pathlib import Path

import click
from rich.console import Console
from rich.logging import RichHandler
from rich.panel import Panel
from rich.table import Table

from runtime_fingerprint import __version__
from runtime_fingerprint.config import Config
from runtime_fingerprint.core import RuntimeDetector
from runtime_fingerprint.fingerprint import collect_fingerprint
from runtime_fingerprint.parser import parse
from runtime_fingerprint.runtime import Runtime

console = Console()


def setup_logging(level: str, log_file: str | None = None) -> None:
    """Configure logging with rich handler."""
    handlers: list[logging.Handler] = [RichHandler(console=console, rich_tracebacks=True)]
    if log_file:
        file_handler = logging.FileHandler(log_file)
        file_handler.setFormatter(
            logging.Formatter("%(asctime)s %(levelname)s %(name)s: %(message)s")
        )
        handlers.append(file_handler)

    logging.basicConfig(
        level=level.upper(),
        format="%(message)s",
        datefmt="[%X]",
        handlers=handlers,
    )


@click.group()
@click.version_option(version=__version__, prog_name="runtime-fingerprint")
@click.option(
    "-c",
    "--config",
    type=click.Path(exists=True, path_type=Path),
    help="Path to configuration file",
)
@click.option(
    "-V",
    "--verbose",
    is_flag=True,
    help="Enable verbose output",
)
@click.pass_context
def main(ctx: click.Context, config: Path | None, verbose: bool) -> None:
    """
    Runtime Fingerprint - Runtime identification for diagnostics.

    Detect the runtime of this host or parse runtime descriptors.
    """
    ctx.ensure_object(dict)

    # Load configuration
    try:
        ctx.obj["config"] = Config.load(config)
    except (OSError, ValueError, TypeError) as e:
        raise click.ClickException(f"Invalid configuration: {e}") from e

    # Set log level
    log_level = "DEBUG" if verbose else ctx.obj["config"].log_level
    setup_logging(log_level, ctx.obj["config"].log_file)
    ctx.obj["verbose"] = verbose


@main.command()
@click.option(
    "--output",
    "-o",
    type=click.Path(path_type=Path),
    help="Write output to file instead of stdout",
)
@click.option(
    "--format",
    "-f",
    type=click.Choice(["json", "pretty"]),
    default="pretty",
    help="Output format",
)
@click.pass_context
def detect(ctx: click.Context, output: Path | None, format: str) -> None:
    """
    Detect the runtime of this host.

    Uses the running Python interpreter unless the configuration
    describes another host.
    """
    config: Config = ctx.obj["config"]

    try:
        detector = RuntimeDetector.from_config(config)
    except ValueError as e:
        raise click.ClickException(str(e)) from e

    fingerprint = collect_fingerprint(detector)

    if output:
        output.parent.mkdir(parents=True, exist_ok=True)
        output.write_text(fingerprint.to_json())
        console.print(f"[dim]Fingerprint saved to: {output}[/]")
    elif format == "json":
        click.echo(fingerprint.to_json())
    else:
        console.print()
        console.print(
            Panel.fit(
                f"[bold blue]Runtime Fingerprint v{__version__}[/]",
                border_style="blue",
            )
        )
        _display_runtime(fingerprint.runtime)

        table = Table(title="Operating System", show_header=False)
        table.add_column("Field", style="dim")
        table.add_column("Value", style="cyan")
        for key, value in fingerprint.os.items():
            table.add_row(key, str(value) if value else "[dim]-[/]")
        console.print(table)


@main.command("parse")
@click.argument("descriptor")
@click.option(
    "--name",
    "-n",
    default=None,
    help="Force the runtime name instead of taking it from the descriptor",
)
@click.option(
    "--format",
    "-f",
    type=click.Choice(["json", "pretty"]),
    default="pretty",
    help="Output format",
)
def parse_descriptor(descriptor: str, name: str | None, format: str) -> None:
    """
    Parse a runtime DESCRIPTOR such as ".NET Framework 4.7.2633.0".
    """
    import json

    runtime = parse(descriptor, name)

    if runtime is None:
        console.print("[yellow]No runtime identity could be derived.[/]")
        sys.exit(1)

    if format == "json":
        click.echo(json.dumps(runtime.to_dict(), indent=2))
    else:
        _display_runtime(runtime)


def _display_runtime(runtime: Runtime | None) -> None:
    """Display a runtime identity as a table."""
    if runtime is None:
        console.print("[yellow]No runtime identity available.[/]")
        return

    table = Table(title="Runtime", show_header=False)
    table.add_column("Field", style="dim")
    table.add_column("Value", style="cyan")

    table.add_row("Name", runtime.name or "[dim]-[/]")
    table.add_row("Version", runtime.version or "[dim]-[/]")
    table.add_row("Family", runtime.family.value)
    table.add_row("Raw", runtime.raw or "[dim]-[/]")

    installation = runtime.framework_installation
    if installation is not None:
        table.add_row("Installed", installation.version_string or "[dim]-[/]")
        if installation.release is not None:
            table.add_row("Release", str(installation.release))

    console.print(table)


@main.command("version", short_help="Display version information")
def version() -> None:
    """Display version information for Runtime Fingerprint."""
    console.print()
    console.print(
        Panel.fit(
            f"[bold blue]Runtime Fingerprint[/]\nVersion: [cyan]{__version__}[/]",
            border_style="blue",
            title="Version Information",
        )
    )
    console.print()

    table = Table(show_header=False, box=None)
    table.add_column("Component", style="dim", width=20)
    table.add_column("Version", style="cyan")

    table.add_row("Runtime Fingerprint", __version__)
    table.add_row("Python", f"{sys.version.split()[0]}")

    console.print(table)
    console.print()


@main.command()
@click.pass_context
def status(ctx: click.Context) -> None:
    """Show the effective configuration."""
    config: Config = ctx.obj["config"]

    console.print()
    console.print(
        Panel.fit(
            "[bold]Runtime Fingerprint Status[/]",
            border_style="blue",
        )
    )

    table = Table(show_header=False, box=None)
    table.add_column("Setting", style="dim")
    table.add_column("Value")

    table.add_row("Host Description", config.host_description or "[dim]Current interpreter[/]")
    table.add_row("Host Target", config.host_target or "[dim]Auto[/]")
    table.add_row(
        "Host Major Version",
        str(config.host_version_major) if config.host_version_major is not None else "[dim]Auto[/]",
    )
    table.add_row("Core Marker", config.netcore_marker)
    table.add_row("Core Component", config.netcore_component)
    table.add_row("Installed Releases", str(len(config.installed_releases)))
    table.add_row("Log Level", config.log_level)

    console.print(table)


@main.command()
@click.argument("output_path", type=click.Path(path_type=Path))
def init_config(output_path: Path) -> None:
    """
    Generate a sample configuration file.

    Creates a YAML configuration file with all available options
    and helpful comments.
    """
    sample_config = """# Runtime Fingerprint Configuration

# Host description. Leave unset to fingerprint the running Python interpreter.
host:
  # Raw runtime descriptor, e.g. ".NET Framework 4.7.2633.0"
  description: null

  # Build target family: netfx, netcore, netnative, mono, cpython, pypy
  # (null = classify from the description)
  target: null

  # Major version of the host runtime (used for framework release lookup)
  version_major: null

# Version override sources
overrides:
  # Directory name preceding the version in the core library path
  netcore_marker: Microsoft.NETCore.App

  # Component whose install location is inspected
  netcore_component: System.Runtime

  # Known component locations
  component_origins: {}
  #   System.Runtime: /usr/share/dotnet/shared/Microsoft.NETCore.App/2.1.4/System.Runtime.dll

  # Installed framework releases
  installed_releases: []
  #   - version: "4.8.4084"
  #     release: 528372
  #   - version: "3.5"
  #     service_pack: 1

# Logging
logging:
  # Log level: DEBUG, INFO, WARNING, ERROR
  level: INFO

  # Log file path (null = console only)
  file: null
"""

    output_path.parent.mkdir(parents=True, exist_ok=True)
    output_path.write_text(sample_config)
    console.print(f"[green]✓ Configuration file created: {output_path}[/]")
    console.print()
    console.print("Next steps:")
    console.print("  1. Describe the host and its installed releases")
    console.print("  2. Run detection: [cyan]runtime-fingerprint -c <file> detect[/]")


if __name__ == "__main__":
    main()
