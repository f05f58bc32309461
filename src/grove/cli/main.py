"""Main Typer application for grove."""

import asyncio
import logging
from pathlib import Path
from typing import Annotated

import typer
from rich.console import Console
from rich.panel import Panel
from rich.table import Table
from rich.text import Text

from grove.cli.config import config_app
from grove.config.settings import GroveConfig, load_grove_config
from grove.content.loader import load_document, load_documents
from grove.dates.context import BuildContext
from grove.dates.resolver import DateResolver
from grove.exceptions import GroveError
from grove.listing.aggregator import build_folder_listing
from grove.logging_setup import configure_logging
from grove.orchestration.build import resolve_collection, run_build

console = Console()
logger = logging.getLogger(__name__)

app = typer.Typer(
    name="grove",
    help="Build a static site from a tree of Markdown notes",
    add_completion=False,
)
app.add_typer(config_app)


@app.callback()
def main(
    log_level: Annotated[
        str | None, typer.Option("--log-level", help="Override GROVE_LOG_LEVEL")
    ] = None,
) -> None:
    configure_logging(log_level)


def _load_config(site_root: Path, **overrides: object) -> GroveConfig:
    config = load_grove_config(site_root)
    return GroveConfig.from_cli_overrides(config, **overrides)


@app.command()
def build(
    site_root: Annotated[Path, typer.Argument(help="Site root directory")] = Path(),
    *,
    content_dir: Annotated[
        Path | None, typer.Option("--content", "-c", help="Content directory (relative to site root)")
    ] = None,
    output_dir: Annotated[
        Path | None, typer.Option("--output", "-o", help="Output directory (relative to site root)")
    ] = None,
    enable_dates: Annotated[
        bool | None,
        typer.Option("--dates/--no-dates", help="Resolve created/modified dates"),
    ] = None,
) -> None:
    """Build the site."""
    site_root = site_root.expanduser().resolve()
    config = _load_config(
        site_root, content_dir=content_dir, output_dir=output_dir, enable_dates=enable_dates
    )

    try:
        result = run_build(config, site_root)
    except GroveError as e:
        console.print(Panel(Text(str(e)), title="Build failed", border_style="red"))
        raise typer.Exit(1) from e

    summary = (
        f"Documents: {len(result.documents)}\n"
        f"Pages: {result.pages_written}\n"
        f"Folder listings: {result.folders_written}\n"
        f"Skipped: {len(result.skipped)}\n"
        f"Time: {result.elapsed_seconds:.2f}s"
    )
    console.print(Panel(summary, title="Build complete", border_style="green"))


@app.command()
def dates(
    file: Annotated[Path, typer.Argument(help="Markdown source file")],
    *,
    site_root: Annotated[Path, typer.Option("--site-root", help="Site root directory")] = Path(),
) -> None:
    """Resolve and show one document's dates."""
    site_root = site_root.expanduser().resolve()
    config = _load_config(site_root)
    file = file.expanduser().resolve()
    content_dir = (site_root / config.paths.content_dir).resolve()
    if not file.is_relative_to(content_dir):
        content_dir = file.parent

    try:
        document = load_document(file, content_dir, cwd=site_root)
        context = BuildContext(cwd=site_root, git_timeout=config.dates.git_timeout)
        resolution = DateResolver(config.dates, context).resolve(document)
    except GroveError as e:
        console.print(str(e), style="red", markup=False)
        raise typer.Exit(1) from e

    table = Table(title=f"{document.slug}")
    table.add_column("Field", style="cyan")
    table.add_column("Value")
    table.add_row("created", resolution.dates.created.isoformat())
    table.add_row("modified", resolution.dates.modified.isoformat())
    table.add_row("published", resolution.dates.published.isoformat())
    console.print(table)
    for warning in resolution.warnings:
        console.print(f"Warning: {warning.message}", style="yellow", markup=False)


@app.command()
def children(
    slug: Annotated[str, typer.Argument(help="Folder slug ('' for the root)")] = "",
    *,
    site_root: Annotated[Path, typer.Option("--site-root", help="Site root directory")] = Path(),
) -> None:
    """List the direct children of a folder."""
    site_root = site_root.expanduser().resolve()
    config = _load_config(site_root)
    context = BuildContext(cwd=site_root, git_timeout=config.dates.git_timeout)
    try:
        documents = load_documents(
            site_root / config.paths.content_dir,
            cwd=site_root,
            ignore_patterns=config.build.ignore_patterns,
            on_error=config.build.on_inaccessible,
        )
        documents, _ = asyncio.run(resolve_collection(documents, config, context))
    except GroveError as e:
        console.print(str(e), style="red", markup=False)
        raise typer.Exit(1) from e

    listing = build_folder_listing(
        slug,
        documents,
        locale=config.site.locale,
        show_folder_count=config.listing.show_folder_count,
        sort_by=config.listing.sort_by,
    )

    table = Table(title=listing.container_slug or "/")
    table.add_column("Slug", style="cyan")
    table.add_column("Title")
    table.add_column(config.listing.sort_by.value)
    for entry in listing.children:
        when = entry.dates.get(config.listing.sort_by).strftime("%Y-%m-%d") if entry.dates else "-"
        table.add_row(entry.slug, entry.title, when)
    console.print(table)
    console.print(listing.item_count_label or f"{listing.item_count}")
