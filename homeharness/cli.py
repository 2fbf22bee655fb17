import sys
import time
from typing import Optional, Tuple

import click
from rich.console import Console
from rich.table import Table

from . import __version__
from .config import HarnessConfig
from .errors import HarnessError
from .logging_config import setup_logging

console = Console()

OUTCOME_STYLES = {
    "passed": "[green]✓ Passed[/green]",
    "failed": "[red]✗ Failed[/red]",
    "skipped": "[dim]Skipped[/dim]",
}


@click.group()
@click.version_option(version=__version__, prog_name="homeharness")
@click.option("--log-level", default=None, help="Log level (also: HOMEHARNESS_LOG_LEVEL)")
@click.option("--log-json", is_flag=True, help="Log as JSON lines (also: HOMEHARNESS_LOG_JSON=1)")
def main(log_level: Optional[str], log_json: bool):
    """homeharness - home screen UI scenarios against a local fixture origin."""
    setup_logging(level=log_level, json_format=log_json or None)


@main.command()
@click.option("--scenario", "-s", "names", multiple=True, help="Scenario to run (repeatable; default: all)")
@click.option("--attempts", "-a", type=int, default=None, help="Attempts per scenario (also: HOMEHARNESS_ATTEMPTS)")
@click.option("--include-skipped", is_flag=True, help="Also run scenarios registered as deferred")
def run(names: Tuple[str, ...], attempts: Optional[int], include_skipped: bool):
    """Run registered scenarios and report one outcome each."""
    from dataclasses import replace

    from .runner import ScenarioOutcome, run_scenario
    from .scenarios import load_scenarios

    registry = load_scenarios()
    try:
        config = HarnessConfig.from_env(attempts=attempts)
        selected = [registry.get(n) for n in names] if names else registry.all()
    except (HarnessError, KeyError) as e:
        console.print(f"[red]Error:[/red] {e}")
        sys.exit(2)

    if include_skipped:
        selected = [replace(s, skip_reason=None) for s in selected]

    table = Table(title="Home screen scenarios")
    table.add_column("Scenario", style="cyan")
    table.add_column("Outcome", justify="center")
    table.add_column("Attempts", justify="right")
    table.add_column("Time", justify="right", style="dim")
    table.add_column("Detail", style="dim")

    failed = 0
    for item in selected:
        console.print(f"[bold]Running[/bold] {item.name}...")
        result = run_scenario(item, config)
        if result.outcome is ScenarioOutcome.FAILED:
            failed += 1
        detail = result.skip_reason or result.error or ""
        table.add_row(
            result.name,
            OUTCOME_STYLES[result.outcome.value],
            str(result.attempts) if result.attempts else "-",
            f"{result.duration_ms}ms",
            detail[:80] + "..." if len(detail) > 80 else detail,
        )

    console.print(table)
    if failed:
        console.print(f"[red]{failed} scenario(s) failed[/red]")
        sys.exit(1)
    console.print("[green]All scenarios passed[/green]")


@main.command()
def scenarios():
    """List registered scenarios."""
    from .scenarios import load_scenarios

    table = Table(title="Registered scenarios")
    table.add_column("Name", style="cyan")
    table.add_column("Description")
    table.add_column("Settings", style="dim")
    table.add_column("Status", justify="center")

    for item in load_scenarios().all():
        overrides = ", ".join(f"{k}={v}" for k, v in item.settings.items())
        status = "[yellow]Deferred[/yellow]" if item.skipped else "[green]Active[/green]"
        table.add_row(item.name, item.description, overrides, status)

    console.print(table)


@main.command()
def graph():
    """Print every navigation edge between screens."""
    from .robots import screen_graph

    table = Table(title="Screen graph")
    table.add_column("From", style="cyan")
    table.add_column("Action")
    table.add_column("To", style="green")

    for source, name, destination in screen_graph():
        table.add_row(source.value, name, destination.value)

    console.print(table)


@main.command()
@click.option("--host", default="127.0.0.1", help="Host to bind to")
@click.option("--port", default=8000, help="Port to bind to (0 = any free port)")
def serve(host: str, port: int):
    """Serve the generic test pages standalone."""
    from .assets import AssetOrigin

    origin = AssetOrigin(host, port)
    try:
        origin.start()
    except HarnessError as e:
        console.print(f"[red]Error:[/red] {e}")
        sys.exit(1)

    console.print(f"[bold green]Asset origin ready:[/bold green] {origin.base_url}/pages/generic1.html")
    console.print("[dim]Press Ctrl+C to stop[/dim]")
    try:
        while origin.is_running:
            time.sleep(0.5)
    except KeyboardInterrupt:
        console.print("\n[dim]Stopping...[/dim]")
    finally:
        origin.stop()


if __name__ == "__main__":
    main()
