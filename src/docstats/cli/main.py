"""Main CLI interface for DocStats using Click."""

import json
import sys
from pathlib import Path
from typing import Optional

import click
from rich.console import Console
from rich.markup import escape
from rich.table import Table

from ..analyzer import (
    AnalysisResult,
    DocumentAnalyzer,
    FileTooLargeError,
    UnsupportedFormatError,
)
from ..config import ConfigManager, DocStatsConfig, get_config_manager
from ..session import AnalysisSession
from ..utils.formatting import format_count, format_file_size
from ..utils.logging import get_logger, setup_logging

console = Console()
logger = get_logger(__name__)

STATISTIC_LABELS = [
    ("char_count", "Characters"),
    ("char_count_no_space", "Characters (no spaces)"),
    ("word_count", "Words"),
    ("space_count", "Spaces"),
    ("image_count", "Images"),
]


def _load_config(ctx) -> DocStatsConfig:
    """Load configuration and apply its logging settings."""
    config_manager = get_config_manager(ctx.obj.get("config_path"))
    config = config_manager.load()

    level = "DEBUG" if ctx.obj.get("verbose") else config.logging.level
    setup_logging(
        level=level,
        log_dir=config.logging.log_dir,
        max_bytes=config.logging.max_bytes,
        backup_count=config.logging.backup_count,
        console_enabled=config.logging.console_enabled,
        file_enabled=config.logging.file_enabled,
    )
    return config


def render_result(result: AnalysisResult, config: DocStatsConfig) -> Table:
    """Build a Rich table for an analysis result."""
    display = config.display
    table = Table(title=result.file_name, show_header=True, header_style="bold cyan")
    table.add_column("Metric", style="cyan")
    table.add_column("Value", style="green", justify="right")

    table.add_row("File Size", format_file_size(result.file_size_bytes, display.size_decimals))
    stats = result.statistics.to_dict()
    for key, label in STATISTIC_LABELS:
        table.add_row(label, format_count(stats[key], display.group_digits))
    return table


@click.group()
@click.version_option(version="0.1.0", prog_name="DocStats")
@click.option(
    "--config",
    type=click.Path(exists=True, dir_okay=False, path_type=Path),
    help="Path to configuration file",
)
@click.option("--verbose", "-v", is_flag=True, help="Enable debug logging")
@click.pass_context
def cli(ctx, config: Optional[Path], verbose: bool):
    """
    DocStats - character, word and image statistics for PDF and DOCX files.
    """
    ctx.ensure_object(dict)
    ctx.obj["config_path"] = config
    ctx.obj["verbose"] = verbose


@cli.command()
@click.argument("file", type=click.Path(exists=True, dir_okay=False, path_type=Path))
@click.option("--json", "as_json", is_flag=True, help="Print statistics as JSON")
@click.pass_context
def analyze(ctx, file: Path, as_json: bool):
    """
    Analyze a PDF or DOCX file.

    Prints character counts (with and without whitespace), word count,
    whitespace count and the number of embedded images.
    """
    try:
        config = _load_config(ctx)
    except ValueError as e:
        console.print(f"[bold red]✗ Configuration error:[/bold red] {escape(str(e))}")
        sys.exit(1)

    analyzer = DocumentAnalyzer.from_config(config)
    session = AnalysisSession(analyzer)

    try:
        file_bytes = analyzer.read_document(file)
    except (UnsupportedFormatError, FileTooLargeError) as e:
        console.print(f"[bold red]✗ {escape(str(e))}[/bold red]")
        sys.exit(1)
    except OSError as e:
        console.print(f"[bold red]✗ Could not read file:[/bold red] {escape(str(e))}")
        sys.exit(1)

    with console.status(f"[cyan]Analyzing {file.name}...[/cyan]"):
        result = session.start(file_bytes, file.name)

    if result is None:
        error = session.last_error
        console.print("[bold red]✗ An error occurred while analyzing the file.[/bold red]")
        if error is not None:
            console.print(f"  [dim]{escape(str(error))}[/dim]")
        sys.exit(1)

    if as_json:
        payload = {
            "file_name": result.file_name,
            "file_size_bytes": result.file_size_bytes,
            **result.statistics.to_dict(),
        }
        click.echo(json.dumps(payload, indent=2))
    else:
        console.print(render_result(result, config))


@cli.group(name="config")
def config_group():
    """Manage DocStats configuration."""
    pass


@config_group.command(name="show")
@click.pass_context
def config_show(ctx):
    """Display current configuration."""
    console.print("\n[bold cyan]DocStats Configuration[/bold cyan]\n")

    try:
        config_manager = get_config_manager(ctx.obj.get("config_path"))
        config = config_manager.load()

        console.print("[bold]Analysis:[/bold]")
        console.print(f"  Media Folder: {config.analysis.media_dir}")
        console.print(f"  Max File Size: {config.analysis.max_file_size_mb}MB")

        console.print("\n[bold]Display:[/bold]")
        console.print(f"  Group Digits: {config.display.group_digits}")
        console.print(f"  Size Decimals: {config.display.size_decimals}")

        console.print("\n[bold]Logging:[/bold]")
        console.print(f"  Level: {config.logging.level}")
        console.print(f"  Console: {config.logging.console_enabled}")
        console.print(f"  File: {config.logging.file_enabled} ({config.logging.log_dir})")

        source = config_manager.config_path or "defaults"
        console.print(f"\n[dim]Config file: {source}[/dim]")

    except ValueError as e:
        console.print(f"[bold red]✗ Error:[/bold red] {escape(str(e))}")
        sys.exit(1)


@config_group.command(name="init")
@click.option(
    "--path",
    "target",
    type=click.Path(dir_okay=False, path_type=Path),
    default=Path("config/docstats.yaml"),
    show_default=True,
    help="Where to write the configuration file",
)
@click.option("--force", is_flag=True, help="Overwrite an existing file")
def config_init(target: Path, force: bool):
    """Write a configuration file with default settings."""
    if target.exists() and not force:
        console.print(
            f"[yellow]⚠ {target} already exists. Use --force to overwrite.[/yellow]"
        )
        sys.exit(1)

    try:
        saved = ConfigManager(target).save(DocStatsConfig(), target)
        console.print(f"✓ Created default configuration: [green]{saved}[/green]")
    except OSError as e:
        console.print(f"[bold red]✗ Error:[/bold red] {escape(str(e))}")
        logger.exception("Config init error")
        sys.exit(1)


if __name__ == "__main__":
    cli()
