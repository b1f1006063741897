"""Inspection CLI using Typer."""

from datetime import datetime
from pathlib import Path
from typing import List, Optional

import typer
import yaml
from rich.console import Console
from rich.table import Table

from ..core import ResolutionEngine, ResolutionView
from ..model.classification import ClassifiedVersion, Severity
from ..model.config import load_config
from ..model.snapshot import CapabilitySnapshot
from ..utils.logger import get_logger

# Create CLI app
app = typer.Typer(
    name="capability-resolver",
    help="Inspect derived cloud profile data: regions, images, versions and worker defaults",
    add_completion=False,
)

console = Console()
logger = get_logger(__name__)

SEVERITY_STYLES = {
    Severity.INFO: "cyan",
    Severity.WARNING: "yellow",
    Severity.ERROR: "red",
}

SNAPSHOT_OPTION = typer.Option(..., "--snapshot", "-s", help="YAML/JSON file with cloudProfiles and seeds")
CONFIG_OPTION = typer.Option(None, "--config", "-c", help="Dashboard configuration file (YAML/JSON)")
NOW_OPTION = typer.Option(
    None,
    "--now",
    formats=["%Y-%m-%d", "%Y-%m-%dT%H:%M:%S"],
    help="Point in time to classify versions against, read as UTC (default: current time)",
)


def _load_view(snapshot_path: Path, config_path: Optional[Path]) -> ResolutionView:
    """Build a resolution view or exit with an error message."""
    try:
        snapshot = CapabilitySnapshot.from_file(snapshot_path)
    except (OSError, yaml.YAMLError, ValueError) as e:
        console.print(f"[red]Error:[/red] could not load snapshot {snapshot_path}: {e}")
        raise typer.Exit(1)

    engine = ResolutionEngine(snapshot=snapshot, config=load_config(config_path))
    return engine.view()


def _flags(version: ClassifiedVersion) -> str:
    flags = []
    if version.is_preview:
        flags.append("[blue]preview[/blue]")
    if version.is_supported:
        flags.append("[green]supported[/green]")
    if version.is_deprecated:
        flags.append("[yellow]deprecated[/yellow]")
    if version.is_expired:
        flags.append("[red]expired[/red]")
    return ", ".join(flags)


def _print_versions_table(title: str, versions: List[ClassifiedVersion], with_name: bool = False) -> None:
    table = Table(title=title, show_header=True, header_style="bold magenta")
    if with_name:
        table.add_column("Image", style="cyan")
    table.add_column("Version", style="green")
    table.add_column("Classification", style="white")
    table.add_column("Expires", style="white")

    for version in versions:
        row = [version.version, _flags(version), version.expiration_date_string or "-"]
        if with_name:
            row.insert(0, getattr(version, "name", ""))
        table.add_row(*row)

    console.print(table)


@app.command()
def regions(
    cloud_profile: str = typer.Argument(..., help="Cloud profile name"),
    snapshot: Path = SNAPSHOT_OPTION,
    config: Optional[Path] = CONFIG_OPTION,
):
    """List regions with and without seeds."""
    view = _load_view(snapshot, config)
    if view.graph.cloud_profile_by_name(cloud_profile) is None:
        console.print(f"[yellow]Cloud profile {cloud_profile} not found[/yellow]")
        raise typer.Exit(1)

    table = Table(show_header=True, header_style="bold magenta")
    table.add_column("Region", style="cyan")
    table.add_column("Seed", style="white")
    table.add_column("Zones", style="green")

    for region in view.graph.regions_with_seed(cloud_profile):
        table.add_row(region, "yes", ", ".join(view.graph.zones(cloud_profile, region)))
    for region in view.graph.regions_without_seed(cloud_profile):
        table.add_row(region, "no", ", ".join(view.graph.zones(cloud_profile, region)))

    console.print(table)


@app.command("machine-images")
def machine_images(
    cloud_profile: str = typer.Argument(..., help="Cloud profile name"),
    snapshot: Path = SNAPSHOT_OPTION,
    config: Optional[Path] = CONFIG_OPTION,
    now: Optional[datetime] = NOW_OPTION,
):
    """List machine image versions, newest first."""
    view = _load_view(snapshot, config)
    images = view.graph.machine_images(cloud_profile, now)
    _print_versions_table(f"Machine images of {cloud_profile}", images, with_name=True)

    default = view.graph.default_machine_image(cloud_profile, now)
    if default:
        console.print(f"Default image: [green]{default.name} {default.version}[/green]")


@app.command("kubernetes-versions")
def kubernetes_versions(
    cloud_profile: str = typer.Argument(..., help="Cloud profile name"),
    snapshot: Path = SNAPSHOT_OPTION,
    config: Optional[Path] = CONFIG_OPTION,
    now: Optional[datetime] = NOW_OPTION,
):
    """List Kubernetes versions, newest first."""
    view = _load_view(snapshot, config)
    versions = view.lifecycle.sorted_kubernetes_versions(cloud_profile, now)
    _print_versions_table(f"Kubernetes versions of {cloud_profile}", versions)

    default = view.lifecycle.default_kubernetes_version(cloud_profile, now)
    if default:
        console.print(f"Default version: [green]{default.version}[/green]")


@app.command()
def updates(
    cloud_profile: str = typer.Argument(..., help="Cloud profile name"),
    kubernetes_version: str = typer.Argument(..., help="Current Kubernetes version of the shoot"),
    snapshot: Path = SNAPSHOT_OPTION,
    config: Optional[Path] = CONFIG_OPTION,
    now: Optional[datetime] = NOW_OPTION,
):
    """Show available Kubernetes updates grouped by update kind."""
    view = _load_view(snapshot, config)
    groups = view.lifecycle.available_kubernetes_updates(kubernetes_version, cloud_profile, now)
    if not groups:
        console.print(f"[green]No updates available for {kubernetes_version}[/green]")
        return

    for kind, versions in groups.items():
        console.print(f"[bold]{kind.value}[/bold]: {', '.join(v.version for v in versions)}")


@app.command()
def expiration(
    cloud_profile: str = typer.Argument(..., help="Cloud profile name"),
    kubernetes_version: str = typer.Argument(..., help="Current Kubernetes version of the shoot"),
    auto_patch: bool = typer.Option(
        False, "--auto-patch/--no-auto-patch", help="Whether automatic patch updates are enabled"
    ),
    snapshot: Path = SNAPSHOT_OPTION,
    config: Optional[Path] = CONFIG_OPTION,
    now: Optional[datetime] = NOW_OPTION,
):
    """Check whether a Kubernetes version expires."""
    view = _load_view(snapshot, config)
    status = view.lifecycle.kubernetes_version_expiration(kubernetes_version, cloud_profile, auto_patch, now)
    if status is None:
        console.print(f"[green]✓[/green] Kubernetes version {kubernetes_version} does not expire")
        return

    style = SEVERITY_STYLES[status.severity]
    console.print(
        f"[{style}]{status.severity.value.upper()}[/{style}] Kubernetes version {kubernetes_version} "
        f"expires on {status.expiration_date.date().isoformat()}"
    )
    if not status.is_valid_termination_date:
        console.print("[red]The version is unknown or already expired[/red]")


@app.command("new-worker")
def new_worker(
    cloud_profile: str = typer.Argument(..., help="Cloud profile name"),
    region: str = typer.Argument(..., help="Region of the shoot"),
    kubernetes_version: Optional[str] = typer.Option(
        None, "--kubernetes-version", "-k", help="Kubernetes version (default: profile default)"
    ),
    snapshot: Path = SNAPSHOT_OPTION,
    config: Optional[Path] = CONFIG_OPTION,
    now: Optional[datetime] = NOW_OPTION,
):
    """Print a generated default worker pool as YAML."""
    view = _load_view(snapshot, config)
    if kubernetes_version is None:
        default = view.lifecycle.default_kubernetes_version(cloud_profile, now)
        kubernetes_version = default.version if default else None

    zones = view.graph.zones(cloud_profile, region)
    worker = view.workers.generate(zones, cloud_profile, region, kubernetes_version, now)
    spec = yaml.dump(worker.to_spec(), default_flow_style=False, sort_keys=False)
    console.print(spec, markup=False, highlight=False, emoji=False)


if __name__ == "__main__":
    app()
