"""
Command line interface for particleswarm.
"""

import sys
import json
import math
import logging
from dataclasses import replace
from pathlib import Path
from typing import Optional, Dict, Any, List

import click
import yaml
from rich.console import Console
from rich.table import Table
from rich.panel import Panel
from rich.progress import Progress, SpinnerColumn, TextColumn, BarColumn

from . import __version__, configure_logging
from .config import SwarmConfig, load_config, create_world
from .objectives import OBJECTIVES, get_objective
from .world import ParticleWorld


console = Console()

SETTINGS_OPTIONS = ("inertia_factor", "my_position_factor", "swarm_position_factor")


def setup_logging(verbose: bool = False, debug: bool = False):
    """Setup logging configuration."""
    if debug:
        level = logging.DEBUG
    elif verbose:
        level = logging.INFO
    else:
        level = logging.WARNING

    logging.basicConfig(
        level=level,
        format='%(asctime)s - %(name)s - %(levelname)s - %(message)s',
        datefmt='%Y-%m-%d %H:%M:%S'
    )


def swarm_options(func):
    """Options shared by commands that build a swarm."""
    options = [
        click.option("--config", "-c", type=click.Path(), help="Configuration file path"),
        click.option("--steps", "-n", type=int, help="Number of steps to run"),
        click.option("--particles", "-p", "particle_count", type=int, help="Number of particles"),
        click.option("--distribution", "-r", type=float, help="Initial spawn distribution"),
        click.option("--dimension", "-d", type=int, help="Search space dimension"),
        click.option("--objective", "-f", type=str, help="Objective function name"),
        click.option("--inertia", "inertia_factor", type=float, help="Inertia factor"),
        click.option("--my-factor", "my_position_factor", type=float, help="Own best position factor"),
        click.option("--swarm-factor", "swarm_position_factor", type=float, help="Swarm best position factor"),
        click.option("--seed", type=int, help="Seed overriding the fixed swarm seed"),
    ]
    for option in reversed(options):
        func = option(func)
    return func


def build_config(config_path: Optional[str], **overrides: Any) -> SwarmConfig:
    """Load configuration and apply command line overrides on top."""
    swarm_config = load_config(config_path)

    settings_overrides = {}
    for name in SETTINGS_OPTIONS:
        value = overrides.pop(name, None)
        if value is not None:
            settings_overrides[name] = value

    values = {key: value for key, value in overrides.items() if value is not None}
    if settings_overrides:
        values["step_settings"] = replace(swarm_config.step_settings, **settings_overrides)

    return replace(swarm_config, **values)


def prepare_run(config_path: Optional[str], overrides: Dict[str, Any]):
    """Build configuration, objective and world, exiting on invalid input."""
    try:
        swarm_config = build_config(config_path, **overrides)
        objective = get_objective(swarm_config.objective)
        world = create_world(swarm_config)
    except (ValueError, KeyError, TypeError, yaml.YAMLError) as e:
        message = e.args[0] if isinstance(e, KeyError) and e.args else e
        console.print(f"[red]Error: {message}")
        sys.exit(1)

    # --verbose/--debug win over the configured level
    ctx = click.get_current_context(silent=True)
    if ctx is None or not (ctx.find_root().obj or {}).get("log_flags"):
        configure_logging(swarm_config.log_level)

    return swarm_config, objective, world


def json_number(value: float) -> Optional[float]:
    """Non-finite floats become null so the output stays valid JSON."""
    return value if math.isfinite(value) else None


def json_vector(values) -> List[Optional[float]]:
    return [json_number(v) for v in values]


def format_vector(values) -> str:
    return "(" + ", ".join(f"{v:.6g}" for v in values) + ")"


def run_steps(world: ParticleWorld, objective, swarm_config: SwarmConfig,
              show_progress: bool = False) -> List[Dict[str, Any]]:
    """Step the world and collect the best solution at every report interval."""
    history = []
    total = swarm_config.steps

    with Progress(
        SpinnerColumn(),
        TextColumn("[progress.description]{task.description}"),
        BarColumn(),
        console=console,
        transient=True,
        disable=not show_progress,
    ) as progress:
        task = progress.add_task("Stepping swarm...", total=total)
        for step in range(1, total + 1):
            world.step(objective, swarm_config.step_settings)
            progress.advance(task)
            if step % swarm_config.report_every == 0 or step == total:
                score, position = world.best_solution()
                history.append({
                    "step": step,
                    "best_score": score,
                    "best_position": list(position),
                })

    return history


@click.group()
@click.version_option(version=__version__)
@click.option("--verbose", "-v", is_flag=True, help="Enable info logging")
@click.option("--debug", is_flag=True, help="Enable debug logging")
@click.pass_context
def cli(ctx: click.Context, verbose: bool, debug: bool):
    """Particle swarm optimization from the command line."""
    ctx.ensure_object(dict)
    ctx.obj["log_flags"] = verbose or debug
    setup_logging(verbose=verbose, debug=debug)


@cli.command()
@swarm_options
@click.option("--json", "as_json", is_flag=True, help="Print results as JSON")
def run(config: Optional[str], as_json: bool, **overrides):
    """Run the swarm for a number of steps and report the best solution."""
    swarm_config, objective, world = prepare_run(config, overrides)
    history = run_steps(world, objective, swarm_config, show_progress=not as_json)
    score, position = world.best_solution()

    if as_json:
        click.echo(json.dumps({
            "objective": objective.name,
            "dimension": swarm_config.dimension,
            "particle_count": len(world),
            "steps": world.steps_taken,
            "best_score": json_number(score),
            "best_position": json_vector(position),
            "history": [
                dict(entry, best_score=json_number(entry["best_score"]),
                     best_position=json_vector(entry["best_position"]))
                for entry in history
            ],
        }, indent=2, allow_nan=False))
        return

    table = Table(title=f"{objective.name}: {len(world)} particles")
    table.add_column("Step", justify="right", style="cyan")
    table.add_column("Best score", style="green")
    table.add_column("Best position", style="white")
    for entry in history:
        table.add_row(str(entry["step"]), f"{entry['best_score']:.6g}",
                      format_vector(entry["best_position"]))
    console.print(table)

    console.print(Panel.fit(
        f"Score {score:.6g} at {format_vector(position)}",
        title="[bold blue]Best solution[/bold blue]",
    ))


@cli.command()
@swarm_options
@click.option("--json", "as_json", is_flag=True, help="Print positions as JSON")
def particles(config: Optional[str], as_json: bool, **overrides):
    """Show every particle after a number of steps (default 0)."""
    if overrides.get("steps") is None:
        overrides["steps"] = 0
    swarm_config, objective, world = prepare_run(config, overrides)
    run_steps(world, objective, swarm_config)
    centroid = world.centroid()

    if as_json:
        click.echo(json.dumps({
            "steps": world.steps_taken,
            "centroid": json_vector(centroid),
            "particles": [
                {
                    "position": json_vector(p.position),
                    "speed": json_vector(p.speed),
                    "best_score": json_number(p.best_score),
                    "best_position": json_vector(p.best_position),
                }
                for p in world.particles
            ],
        }, indent=2, allow_nan=False))
        return

    table = Table(title=f"Particles after {world.steps_taken} steps")
    table.add_column("#", justify="right", style="cyan")
    table.add_column("Position", style="white")
    table.add_column("Best score", style="green")
    for index, particle in enumerate(world.particles):
        table.add_row(str(index), format_vector(particle.position), f"{particle.best_score:.6g}")
    console.print(table)
    console.print(f"Centroid: {format_vector(centroid)}")


@cli.command()
def objectives():
    """List the available objective functions."""
    table = Table(title="Objectives")
    table.add_column("Name", style="cyan")
    table.add_column("Dimension", style="white")
    table.add_column("Description", style="white")

    for name in sorted(OBJECTIVES):
        objective = OBJECTIVES[name]
        dimension = "any" if objective.dimension is None else str(objective.dimension)
        table.add_row(name, dimension, objective.description)

    console.print(table)


@cli.command()
@click.option("--config", "-c", type=click.Path(), help="Configuration file path")
def config_show(config: Optional[str]):
    """Show current configuration."""
    try:
        swarm_config = load_config(config)
    except (ValueError, KeyError, TypeError, yaml.YAMLError) as e:
        console.print(f"[red]Error loading configuration: {e}")
        sys.exit(1)

    console.print(Panel(
        yaml.safe_dump(swarm_config.to_dict(), default_flow_style=False, sort_keys=False),
        title="[bold blue]Swarm Configuration[/bold blue]",
        expand=False
    ))


@cli.command()
@click.argument("path", type=click.Path())
@click.option("--force", is_flag=True, help="Overwrite an existing file")
def config_init(path: str, force: bool):
    """Write the default configuration to PATH."""
    output_path = Path(path)
    if output_path.exists() and not force:
        console.print(f"[red]Error: {output_path} already exists, use --force to overwrite")
        sys.exit(1)

    SwarmConfig().to_file(output_path)
    console.print(f"[green]Configuration written to: {output_path}")


if __name__ == "__main__":
    cli()
