"""
CLI entry point for CT Intelligence.

Usage:
    ct-intel serve              Run the API and dashboard
    ct-intel brief              Print the brief for a window
    ct-intel bundle             Bundle live scans into the archive file
"""

import sys
from pathlib import Path
from typing import Optional

import click
import uvicorn
from rich.console import Console
from rich.markup import escape
from rich.table import Table

from .api import create_app
from .brief import generate_brief
from .config import CTIntelConfig, load_config
from .loader import ScanArchive, ScanLoader, bundle_scans
from .logging import setup_logging
from .models import Brief

console = Console()


def get_config(config_path: Optional[str] = None) -> CTIntelConfig:
    """Load configuration from a file, or defaults."""
    if config_path:
        return load_config(Path(config_path))
    return CTIntelConfig.default()


@click.group()
@click.option("--config", "-c", help="Path to YAML config file")
@click.pass_context
def main(ctx, config):
    """CT Intelligence - sentiment and ticker briefs from Crypto Twitter scans."""
    ctx.ensure_object(dict)
    try:
        ctx.obj["config"] = get_config(config)
    except (FileNotFoundError, ValueError) as e:
        console.print(f"[red]Config error: {escape(str(e))}[/red]")
        sys.exit(1)
    setup_logging(ctx.obj["config"].logging)


@main.command()
@click.option("--host", help="Bind address (default from config)")
@click.option("--port", "-p", type=int, help="Port (default from config)")
@click.pass_context
def serve(ctx, host, port):
    """Run the API and dashboard with uvicorn."""
    config = ctx.obj["config"]
    host = host or config.server.host
    port = port or config.server.port

    console.print(f"[bold blue]CT Intelligence on http://{host}:{port}[/bold blue]")
    console.print(f"  Data: {config.data.data_dir}")
    console.print(f"  API:  http://{host}:{port}/api/brief")

    uvicorn.run(create_app(config), host=host, port=port)


def _print_brief(brief: Brief) -> None:
    regime = brief.regime
    sentiment = regime.sentiment

    console.print(f"[bold]CT Intelligence Brief[/bold] - {brief.generated_human}")
    console.print(f"  Window: {brief.window} | Scans: {brief.scan_count}")
    console.print(
        f"  Regime: [bold]{regime.label.value}[/bold] | "
        f"Sentiment: {sentiment.bull}% up / {sentiment.bear}% down | "
        f"Ratio: {sentiment.ratio_label}:1 | Trend: {sentiment.trend.value} | "
        f"Fear: {regime.fear.value}"
    )

    table = Table(title="Top Tickers")
    table.add_column("Ticker", style="cyan")
    table.add_column("Mentions", justify="right")
    table.add_column("Momentum", justify="right")
    changes = {m.name: m.change for m in brief.momentum}
    for ticker in brief.tickers:
        change = changes.get(ticker.name, "")
        if isinstance(change, int):
            change = f"{change:+d}%"
        table.add_row(escape(f"${ticker.name}"), str(ticker.mentions), change)
    console.print(table)

    if brief.commodities:
        table = Table(title="Commodity & Macro")
        table.add_column("Keyword")
        table.add_column("Mentions", justify="right")
        for commodity in brief.commodities:
            table.add_row(escape(commodity.name), str(commodity.mentions))
        console.print(table)

    for narrative in brief.narratives:
        console.print(escape(f"  {narrative.type} {narrative.label} ({narrative.strength} signals)"))

    if brief.top_posts:
        table = Table(title="Top Engagement")
        table.add_column("Author")
        table.add_column("Likes", justify="right")
        table.add_column("Text")
        for post in brief.top_posts:
            table.add_row(escape(f"@{post.author or 'unknown'}"), f"{post.likes:,}", escape(post.text or ""))
        console.print(table)


@main.command()
@click.option("--hours", type=click.IntRange(min=0), help="Window in hours, 0 for all scans")
@click.option("--json", "as_json", is_flag=True, help="Print JSON instead of tables")
@click.pass_context
def brief(ctx, hours, as_json):
    """Print the intelligence brief."""
    config = ctx.obj["config"]
    if hours is None:
        hours = config.brief.default_window_hours

    archive = ScanArchive.load(config.data.bundle_path)
    loader = ScanLoader(config.data.data_dir, archive=archive)
    result = generate_brief(loader, hours, config=config.brief)

    if as_json:
        click.echo(result.model_dump_json(by_alias=True, indent=2))
    else:
        _print_brief(result)


@main.command()
@click.option("--data-dir", "-d", type=click.Path(), help="Scan directory (default from config)")
@click.option("--output", "-o", type=click.Path(), help="Bundle path (default from config)")
@click.pass_context
def bundle(ctx, data_dir, output):
    """Bundle every scan file into one JSON archive."""
    config = ctx.obj["config"]
    data_dir = Path(data_dir) if data_dir else config.data.data_dir
    output = Path(output) if output else config.data.bundle_path

    try:
        result = bundle_scans(data_dir, output)
    except FileNotFoundError as e:
        console.print(f"[red]{e}[/red]")
        sys.exit(1)

    console.print(f"[bold green]Bundled {result.count} scans ({result.errors} errors)[/bold green]")
    console.print(f"  Output: {result.path} ({result.size_mb:.1f} MB)")


if __name__ == "__main__":
    main()
