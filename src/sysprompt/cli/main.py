"""sysprompt CLI - Main entry point."""

import json
import logging
from pathlib import Path

import click
from rich.console import Console
from rich.markup import escape
from rich.table import Table
from rich.text import Text

from sysprompt import __version__

console = Console()

_LOG_FORMAT = "%(asctime)s [%(name)s] %(levelname)s: %(message)s"


def _setup_logging(verbose: bool) -> None:
    """Configure the package logger with a console handler."""
    package_logger = logging.getLogger("sysprompt")
    package_logger.setLevel(logging.DEBUG if verbose else logging.WARNING)
    package_logger.handlers.clear()

    handler = logging.StreamHandler()
    handler.setFormatter(logging.Formatter(_LOG_FORMAT))
    package_logger.addHandler(handler)


@click.group()
@click.version_option(version=__version__, prog_name="sysprompt")
@click.option("--verbose", "-v", is_flag=True, help="Enable debug logging")
@click.option(
    "--config",
    "config_path",
    type=click.Path(dir_okay=False, path_type=Path),
    help="YAML configuration file",
)
@click.pass_context
def cli(ctx, verbose, config_path):
    """sysprompt - system-aware LLM prompt generator

    Detects your OS, CPU, RAM, GPU and installed runtimes and builds a
    ready-to-paste prompt for ChatGPT, Claude or any other LLM.
    """
    from sysprompt.config import ConfigError, load_config

    _setup_logging(verbose)
    try:
        ctx.obj = load_config(config_path)
    except ConfigError as e:
        console.print(f"[red]{escape(str(e))}[/red]", highlight=False)
        raise SystemExit(1)


from .prompt_commands import optimize, review  # noqa: E402

cli.add_command(optimize)
cli.add_command(review)


@cli.command()
@click.option("--json", "as_json", is_flag=True, help="Print the profile as JSON")
@click.pass_obj
def profile(config, as_json):
    """Display the detected system profile."""
    from sysprompt.hardware.profile import collect
    from sysprompt.hardware.runtimes import RUNTIME_CANDIDATES
    from sysprompt.prompts.renderer import render_runtimes, render_specs

    info = collect(
        timeout=config.probe_timeout,
        runtime_candidates=config.runtime_candidates(RUNTIME_CANDIDATES),
    )

    if as_json:
        click.echo(json.dumps(info.to_dict(), indent=2))
        return

    table = Table(title="System Profile", show_header=False)
    table.add_column("Field", style="bold")
    table.add_column("Value")
    for line in render_specs(info).splitlines():
        name, value = line.split(": ", 1)
        table.add_row(name, Text(value))
    console.print(table)

    console.print("\n[cyan]--- Installed Runtimes ---[/cyan]")
    console.print(render_runtimes(info), markup=False, highlight=False)


if __name__ == "__main__":
    cli()
