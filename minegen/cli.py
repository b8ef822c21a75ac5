"""Command line entrypoint for minegen."""

import json
import logging
from pathlib import Path
from typing import Optional

import typer
from rich import print
from rich.markup import escape

from minegen.level.area_template import load_template
from minegen.level.config_loader import load_world_config
from minegen.level.world_config import ConfigurationError, WorldConfig
from minegen.level.world_generator import WorldGenerator
from minegen.utils.tile_utils import grid_to_rows, result_to_dict

app = typer.Typer(help="Procedural cave world generator")

EXIT_CONFIG_ERROR = 2


def _report_config_error(exc: ConfigurationError) -> None:
    print("[bold red]Invalid configuration:[/bold red]")
    for problem in exc.errors:
        print(f"  - {escape(problem)}")


@app.command()
def generate(
    config_path: Optional[Path] = typer.Option(None, "--config", exists=True, dir_okay=False, help="JSON world configuration file."),
    width: Optional[int] = typer.Option(None, "--width", help="Override world width."),
    height: Optional[int] = typer.Option(None, "--height", help="Override world height."),
    seed: Optional[int] = typer.Option(None, "--seed", help="World seed (0 picks one at random)."),
    outposts: Optional[int] = typer.Option(None, "--outposts", help="Override outpost count."),
    spawn_template: Optional[Path] = typer.Option(None, "--spawn-template", exists=True, dir_okay=False, help="Spawn area template JSON."),
    outpost_template: Optional[Path] = typer.Option(None, "--outpost-template", exists=True, dir_okay=False, help="Outpost template JSON."),
    json_out: Optional[Path] = typer.Option(None, "--json", help="Write the generated world as JSON."),
    show: bool = typer.Option(True, "--show/--no-show", help="Print the world as a text map."),
    log_level: str = typer.Option("WARNING", "--log-level", help="Python logging level."),
) -> None:
    """Generate one world and print its seed, placements and map."""
    logging.basicConfig(level=log_level.upper(), format="%(levelname)s %(name)s: %(message)s")

    try:
        config = load_world_config(str(config_path)) if config_path else WorldConfig()
        if width is not None:
            config.world_width = width
        if height is not None:
            config.world_height = height
        if seed is not None:
            config.seed = seed
        if outposts is not None:
            config.outpost_count = outposts

        generator = WorldGenerator(
            config,
            spawn_template=load_template(str(spawn_template)) if spawn_template else None,
            outpost_template=load_template(str(outpost_template)) if outpost_template else None,
        )
        result = generator.generate()
    except ConfigurationError as exc:
        _report_config_error(exc)
        raise typer.Exit(code=EXIT_CONFIG_ERROR)

    print(f"[bold]Seed:[/bold] {result.seed}")
    for event in result.events:
        print(f"  {event.kind.value:<8} at {event.position}")
    print(f"[bold]Veins:[/bold] {len(result.veins)}")

    if show:
        for row in grid_to_rows(result.grid, result):
            typer.echo(row)

    if json_out is not None:
        json_out.parent.mkdir(parents=True, exist_ok=True)
        json_out.write_text(json.dumps(result_to_dict(result)))
        print(f"Wrote {json_out}")


@app.command("check-config")
def check_config(config_path: Path = typer.Argument(..., exists=True, dir_okay=False, help="JSON world configuration file.")) -> None:
    """Validate a configuration file without generating a world."""
    try:
        config = load_world_config(str(config_path))
        WorldGenerator(config).validate()
    except ConfigurationError as exc:
        _report_config_error(exc)
        raise typer.Exit(code=EXIT_CONFIG_ERROR)
    print("[green]Configuration OK[/green]")


def main() -> None:
    app()
