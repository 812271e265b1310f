"""Command-line interface for GB generation mix analysis."""

import json
import logging
import sys
from pathlib import Path

import click
from rich.console import Console
from rich.table import Table

from .collectors.carbon_intensity import CarbonIntensityClient
from .config import load_settings
from .exceptions import ConfigError, ExternalDataFetchError, InvalidDurationError, NoFeasibleWindowError
from .service import EnergyMixService

console = Console()
logger = logging.getLogger(__name__)

EXIT_UPSTREAM_ERROR = 3
EXIT_NO_WINDOW = 4


def build_service(config_path: Path | None = None) -> EnergyMixService:
    """Create a service backed by the Carbon Intensity API."""
    settings = load_settings(config_path)
    client = CarbonIntensityClient.from_settings(settings)
    return EnergyMixService(client.fetch_intervals, settings)


@click.group()
@click.option("--config", "config_path", type=click.Path(exists=True), help="Path to gridmix.yaml")
@click.option("--verbose", "-v", is_flag=True, help="Enable debug logging")
@click.pass_context
def cli(ctx, config_path, verbose):
    """GB electricity generation mix - daily averages and clean charging windows."""
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )
    ctx.ensure_object(dict)
    ctx.obj["config_path"] = Path(config_path) if config_path else None


def get_service(ctx) -> EnergyMixService:
    if "service" not in ctx.obj:
        try:
            ctx.obj["service"] = build_service(ctx.obj.get("config_path"))
        except ConfigError as e:
            raise click.UsageError(f"Invalid configuration: {e}")
    return ctx.obj["service"]


@cli.command()
@click.option("--json", "as_json", is_flag=True, help="Output as JSON")
@click.pass_context
def mix(ctx, as_json):
    """Show the average generation mix for today and the coming days."""
    service = get_service(ctx)
    try:
        days = service.get_three_days_energy_mix()
    except ExternalDataFetchError as e:
        console.print(f"[red]External data error: {e}[/red]")
        sys.exit(EXIT_UPSTREAM_ERROR)

    if as_json:
        click.echo(json.dumps([day.to_dict() for day in days], indent=2))
        return

    if not days:
        console.print("[yellow]No generation data available[/yellow]")
        return

    table = Table(title="Generation Mix (daily average)")
    table.add_column("Date", style="cyan")
    table.add_column("Clean", justify="right", style="green")
    table.add_column("Top sources")

    for day in days:
        top = sorted(day.average_percentages.items(), key=lambda item: item[1], reverse=True)[:4]
        table.add_row(
            day.date.isoformat(),
            f"{day.clean_energy_percentage:.1f}%",
            ", ".join(f"{fuel} {pct:.1f}%" for fuel, pct in top),
        )

    console.print(table)


@cli.command()
@click.option("--hours", required=True, type=int, help="Charging duration in whole hours")
@click.option("--json", "as_json", is_flag=True, help="Output as JSON")
@click.pass_context
def charge(ctx, hours, as_json):
    """Find the cleanest time to charge within the forecast horizon."""
    service = get_service(ctx)
    try:
        window = service.get_optimal_charging_window(hours)
    except InvalidDurationError as e:
        raise click.BadParameter(str(e), param_hint="--hours")
    except ExternalDataFetchError as e:
        console.print(f"[red]External data error: {e}[/red]")
        sys.exit(EXIT_UPSTREAM_ERROR)
    except NoFeasibleWindowError as e:
        console.print(f"[yellow]No charging window found: {e}[/yellow]")
        sys.exit(EXIT_NO_WINDOW)

    if as_json:
        click.echo(json.dumps(window.to_dict(), indent=2))
        return

    console.print(f"[green]Best {hours}h charging window[/green]")
    console.print(f"  Start: {window.start.strftime('%Y-%m-%d %H:%M')} UTC")
    console.print(f"  End:   {window.end.strftime('%Y-%m-%d %H:%M')} UTC")
    console.print(f"  Duration: {window.duration_minutes} min")
    console.print(f"  Clean energy: {window.average_clean_percentage:.1f}%")


if __name__ == "__main__":
    cli()
