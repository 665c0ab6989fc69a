"""
CLI interface for GPX Monster.

Usage:
    gpx-monster merge Day_1.gpx Day_2.gpx -o ./out
    gpx-monster merge ./tour -O tour.gpx
    gpx-monster normalize tracks/ --only Day_3

Directories are searched recursively for *.gpx files. Both commands exit
with status 1 when any input file failed.
"""

import asyncio
from pathlib import Path
from typing import List, Optional

import click

from gpx_monster.config import settings
from gpx_monster.features.gpx import (
    BatchResult,
    GPXBatchProcessor,
    NoPointsError,
    PathSource,
    ProcessingMode,
    group_outputs_by_day,
)
from gpx_monster.shared.formatters import (
    format_distance_km,
    format_elevation,
    format_elevation_range,
)
from gpx_monster.shared.log import setup_logging


@click.group()
@click.option("--log-level", default=None, help="Override GPX_MONSTER_LOG_LEVEL")
def cli(log_level):
    """Merge or normalize GPX track files."""
    setup_logging(log_level or settings.log_level)


def _common_options(func):
    func = click.option(
        "--only",
        "specific_files",
        multiple=True,
        help="Only process files whose name contains this text (repeatable)"
    )(func)
    func = click.option(
        "--output-dir", "-o",
        default=".",
        type=click.Path(file_okay=False),
        help="Directory for generated GPX files"
    )(func)
    func = click.argument(
        "files",
        nargs=-1,
        required=True,
        type=click.Path(),
    )(func)
    return func


@cli.command()
@_common_options
@click.option(
    "--output", "-O",
    "output_file",
    default=None,
    type=click.Path(dir_okay=False),
    help="Path of the merged GPX file (overrides --output-dir)"
)
def merge(files, output_dir, specific_files, output_file):
    """Merge all FILES (or *.gpx under directories) into one route."""
    result = _run(files, ProcessingMode.MERGE, specific_files)
    _write_outputs(result, output_dir, output_file)
    _print_results(result)

    stats = result.stats
    click.echo()
    click.echo("Route statistics:")
    click.echo(f"  Distance:  {format_distance_km(stats.total_distance_km)}")
    click.echo(f"  Gain:      {format_elevation(stats.elevation_gain_m)}")
    click.echo(f"  Loss:      {format_elevation(-stats.elevation_loss_m)}")
    click.echo(f"  Elevation: {format_elevation_range(stats.min_elevation_m, stats.max_elevation_m)}")
    click.echo(f"  Points:    {stats.total_points}")

    info = result.ordering_info
    if info["chronological"]:
        click.echo("Ordering: chronological")
        click.echo(f"  File order: {', '.join(result.file_order)}")
    elif info["mixed_timestamps"]:
        click.echo("Ordering: file order (warning: only some files have timestamps)")
    else:
        click.echo("Ordering: file order (no timestamps)")

    _exit_on_failures(result)


@cli.command()
@_common_options
def normalize(files, output_dir, specific_files):
    """Normalize each of FILES (or *.gpx under directories) separately."""
    result = _run(files, ProcessingMode.NORMALIZE, specific_files)
    _write_outputs(result, output_dir)
    _print_results(result)

    click.echo()
    for day, outputs in group_outputs_by_day(result.outputs).items():
        label = f"Day {day}" if day is not None else "Other"
        click.echo(f"{label}: {', '.join(o.name for o in outputs)}")

    _exit_on_failures(result)


def collect_gpx_files(paths) -> List[Path]:
    """
    Expand directories into their *.gpx files (recursive, sorted).

    Plain file arguments are kept as given, in order.
    """
    collected: List[Path] = []
    for raw in paths:
        path = Path(raw)
        if path.is_dir():
            collected.extend(sorted(p for p in path.rglob("*.gpx") if p.is_file()))
        else:
            collected.append(path)
    return collected


def _run(files, mode: ProcessingMode, specific_files) -> BatchResult:
    paths = collect_gpx_files(files)
    if not paths:
        raise click.ClickException("No GPX files found")

    sources = [PathSource(p) for p in paths]
    processor = GPXBatchProcessor()
    try:
        return asyncio.run(processor.process_files(
            sources, mode, specific_files=list(specific_files)
        ))
    except NoPointsError as e:
        raise click.ClickException(str(e))


def _write_outputs(
    result: BatchResult,
    output_dir: str,
    output_file: Optional[str] = None
) -> None:
    target = Path(output_dir)
    for output in result.outputs:
        path = Path(output_file) if output_file else target / output.name
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text(output.content, encoding="utf-8")
        click.echo(f"Wrote {path}")


def _print_results(result: BatchResult) -> None:
    click.echo()
    for r in result.results:
        if r.success:
            click.echo(f"  OK    {r.file_name}: {r.point_count} points")
        else:
            click.echo(f"  FAIL  {r.file_name}: {r.error}")


def _exit_on_failures(result: BatchResult) -> None:
    if result.failed:
        click.echo(f"{len(result.failed)} of {len(result.results)} files failed", err=True)
        raise SystemExit(1)


if __name__ == "__main__":
    cli()
