"""
Command-line interface for supportmesh.

Provides commands for generating support solids from model files and
listing the available support profiles.
"""

from pathlib import Path
from typing import Optional

import click
from rich.console import Console
from rich.table import Table

from supportmesh import __version__
from supportmesh.core.config import ConfigManager, SupportConfig
from supportmesh.core.exceptions import SupportMeshError
from supportmesh.core.geometry import GeometryLoader, TriangleMesh
from supportmesh.core.logging import configure_logging, log_context
from supportmesh.support.generator import generate_support

console = Console()


@click.group()
@click.version_option(version=__version__)
@click.option(
    "--config-dir",
    type=click.Path(path_type=Path),
    default="config",
    help="Configuration directory",
)
@click.option("--verbose", "-v", is_flag=True, help="Enable debug logging")
@click.pass_context
def main(ctx: click.Context, config_dir: Path, verbose: bool) -> None:
    """supportmesh - Overhang support solids for 3D printing."""
    configure_logging(level="DEBUG" if verbose else "WARNING")
    ctx.ensure_object(dict)
    ctx.obj["config_dir"] = config_dir


def _resolve_config(
    config_dir: Path, profile: Optional[str], angle: Optional[float]
) -> SupportConfig:
    config = (
        ConfigManager(config_dir).get_profile(profile) if profile else SupportConfig()
    )
    if angle is not None:
        config = SupportConfig(**{**config.model_dump(), "support_angle": angle})
    return config


@main.command("generate")
@click.argument("model", type=click.Path(exists=True, path_type=Path))
@click.option(
    "--output", "-o", type=click.Path(path_type=Path), help="Write the support mesh here"
)
@click.option("--profile", "-p", help="Support profile name")
@click.option("--angle", type=float, help="Override the support angle (degrees)")
@click.option("--precision", type=float, help="Override the tolerance")
@click.pass_context
def generate(
    ctx: click.Context,
    model: Path,
    output: Optional[Path],
    profile: Optional[str],
    angle: Optional[float],
    precision: Optional[float],
) -> None:
    """Generate the support solid for MODEL."""
    try:
        config = _resolve_config(ctx.obj["config_dir"], profile, angle)
        mesh = TriangleMesh.from_trimesh(GeometryLoader.load(model))

        with log_context(model=str(model)):
            result = generate_support(mesh, precision=precision, config=config)

        table = Table(title=f"Support: {model.name}")
        table.add_column("Property", style="cyan")
        table.add_column("Value")
        table.add_row("Profile", config.name)
        table.add_row("Support angle", f"{config.support_angle:g}°")
        table.add_row("Precision", f"{result.precision:g}")
        table.add_row("Input faces", str(len(mesh)))
        table.add_row("Overhang faces", str(result.face_count))
        table.add_row("Boundary edges", str(result.boundary_edge_count))
        table.add_row("Support triangles", str(result.triangle_count))
        table.add_row("Support volume", f"{result.volume:.6g}")
        console.print(table)

        if output is not None:
            if result.is_empty:
                console.print("[yellow]No support needed; nothing written.[/yellow]")
            else:
                GeometryLoader.save(result.to_trimesh(), output)
                console.print(f"[green]✓[/green] Wrote support mesh to {output}")

    except (SupportMeshError, ValueError) as e:
        console.print(f"[red]✗[/red] Failed to generate support: {e}")
        raise SystemExit(1)


@main.command("profiles")
@click.pass_context
def profiles(ctx: click.Context) -> None:
    """List available support profiles."""
    try:
        config_mgr = ConfigManager(ctx.obj["config_dir"])
        names = config_mgr.list_profiles()

        if not names:
            console.print("[yellow]No support profiles found.[/yellow]")
            return

        table = Table(title="Available Profiles")
        table.add_column("Name", style="cyan")
        table.add_column("Support angle")
        table.add_column("Precision")
        table.add_column("Buffer type")

        for name in names:
            profile = config_mgr.get_profile(name)
            precision = (
                f"{profile.precision:g}"
                if profile.precision is not None
                else f"x{profile.precision_factor:g}"
            )
            table.add_row(name, f"{profile.support_angle:g}°", precision, profile.dtype)

        console.print(table)

    except SupportMeshError as e:
        console.print(f"[red]✗[/red] Failed to list profiles: {e}")
        raise SystemExit(1)


if __name__ == "__main__":
    main()
