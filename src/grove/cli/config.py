"""Configuration management commands."""

import logging
import tomllib
from pathlib import Path
from typing import Annotated

import typer
from pydantic import ValidationError
from rich.console import Console
from rich.panel import Panel
from rich.table import Table

from grove.config.settings import (
    CONFIG_DIR_NAME,
    CONFIG_FILE_NAME,
    GroveConfig,
    create_default_config,
    find_grove_config,
    load_grove_config,
)

console = Console()
logger = logging.getLogger(__name__)

config_app = typer.Typer(
    name="config",
    help="Configuration management and validation",
)


def _build_config_summary(config: GroveConfig) -> str:
    priority = ", ".join(source.value for source in config.dates.priority)
    return (
        f"[cyan]Dates:[/cyan]\n"
        f"  Enabled: {config.dates.enabled}\n"
        f"  Priority: {priority}\n"
        f"  Max title length: {config.dates.max_title_length or 'unlimited'}\n\n"
        f"[cyan]Listing:[/cyan]\n"
        f"  Show folder count: {config.listing.show_folder_count}\n"
        f"  Sort by: {config.listing.sort_by.value}\n\n"
        f"[cyan]Paths:[/cyan]\n"
        f"  Content: {config.paths.content_dir}\n"
        f"  Output: {config.paths.output_dir}"
    )


@config_app.command()
def show(
    site_root: Annotated[Path, typer.Argument(help="Site root directory")] = Path(),
) -> None:
    """Show the effective configuration (file, environment and defaults merged)."""
    config = load_grove_config(site_root.expanduser().resolve())
    table = Table(title="grove configuration")
    table.add_column("Setting", style="cyan")
    table.add_column("Value")
    for section, values in config.model_dump(mode="json").items():
        for key, value in values.items():
            table.add_row(f"{section}.{key}", str(value))
    console.print(table)


@config_app.command()
def init(
    site_root: Annotated[Path, typer.Argument(help="Site root directory")] = Path(),
    *,
    force: Annotated[bool, typer.Option("--force", "-f", help="Overwrite an existing file")] = False,
) -> None:
    """Write a default .grove/grove.toml."""
    site_root = site_root.expanduser().resolve()
    config_path = site_root / CONFIG_DIR_NAME / CONFIG_FILE_NAME
    if config_path.exists() and not force:
        console.print(f"[yellow]{config_path} already exists (use --force to overwrite)[/yellow]")
        raise typer.Exit(1)
    create_default_config(site_root)
    console.print(f"[green]Wrote {config_path}[/green]")


@config_app.command()
def validate(
    site_root: Annotated[Path, typer.Argument(help="Site root directory")] = Path(),
) -> None:
    """Validate the configuration file and show friendly errors."""
    site_root = site_root.expanduser().resolve()
    config_path = find_grove_config(site_root)
    if config_path is None:
        console.print("[yellow]No .grove/grove.toml found; defaults apply.[/yellow]")
        return

    console.print(f"[cyan]Validating configuration at {config_path}[/cyan]\n")
    try:
        data = tomllib.loads(config_path.read_text(encoding="utf-8"))
        config = GroveConfig.model_validate({**GroveConfig().model_dump(mode="json"), **data})
    except tomllib.TOMLDecodeError as e:
        console.print(Panel(str(e), title="Invalid TOML", border_style="red"))
        raise typer.Exit(1) from e
    except ValidationError as e:
        lines = [
            f"{' -> '.join(str(part) for part in error['loc'])}: {error['msg']}"
            for error in e.errors()
        ]
        console.print(Panel("\n".join(lines), title="Configuration Invalid", border_style="red"))
        raise typer.Exit(1) from e

    console.print(Panel(_build_config_summary(config), title="Configuration Valid", border_style="green"))
