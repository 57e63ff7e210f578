"""Rich command-line interface powered by Typer."""

from __future__ import annotations

import logging
import time
from pathlib import Path

import numpy as np
import typer
from rich.console import Console
from rich.logging import RichHandler
from rich.markup import escape
from rich.panel import Panel

from bead_mosaic.color_utils import mean_weighted_error
from bead_mosaic.config import MosaicConfig
from bead_mosaic.errors import ImageError, MosaicError
from bead_mosaic.image_io import (
    grid_from_image,
    load_and_resize,
    make_comparison_grid,
    save_upscaled,
)
from bead_mosaic.layout import cell_at, describe_cell
from bead_mosaic.palette import load_palette
from bead_mosaic.pipeline import MosaicResult, generate_mosaic
from bead_mosaic.report import format_report

app = typer.Typer(
    name="bead-mosaic",
    help="Turn a picture into a bead / tile mosaic using only the pieces you own.",
    add_completion=False,
    rich_markup_mode="rich",
)
console = Console()


def _setup_logging(verbose: bool) -> None:
    level = logging.DEBUG if verbose else logging.INFO
    logging.basicConfig(
        level=level,
        format="%(message)s",
        datefmt="[%X]",
        handlers=[RichHandler(console=console, show_path=False, markup=True)],
    )


# Defaults come from MosaicConfig - single source of truth
_DEFAULTS = MosaicConfig()


def _run(cfg: MosaicConfig, image: Path, palette_path: Path) -> tuple[np.ndarray, MosaicResult]:
    """Load inputs and build the mosaic; every failure is a MosaicError."""
    if image.suffix.lower() not in cfg.SUPPORTED_EXTENSIONS:
        msg = f"Unsupported image type '{image.suffix}': {image}"
        raise ImageError(msg)

    palette = load_palette(palette_path)
    target = load_and_resize(image, cfg.grid_width, cfg.grid_height)
    result = generate_mosaic(
        grid_from_image(target),
        cfg.grid_width,
        cfg.grid_height,
        palette,
        rng=cfg.seed,
    )
    return target, result


def _fail(exc: MosaicError) -> typer.Exit:
    console.print(f"[bold red]{type(exc).__name__}:[/bold red] {escape(str(exc))}")
    return typer.Exit(1)


# -- build command -----------------------------------------------------

@app.command()
def build(
    image: Path = typer.Argument(..., help="Source picture"),
    palette: Path = typer.Argument(..., help="Palette JSON with colour stock"),
    output: Path = typer.Option(
        _DEFAULTS.output_dir / f"mosaic.{_DEFAULTS.output_format}", "--output", "-o",
        help="Where to save the rendered mosaic",
    ),
    width: int = typer.Option(
        _DEFAULTS.grid_width, "--width", "-W", min=1, help="Cells per row",
    ),
    height: int = typer.Option(
        _DEFAULTS.grid_height, "--height", "-H", min=1, help="Number of rows",
    ),
    seed: int | None = typer.Option(
        _DEFAULTS.seed, "--seed", "-s", min=0,
        help="Seed for the cell order (None = random)",
    ),
    upscale: int = typer.Option(
        _DEFAULTS.pixel_upscale, "--upscale", "-u", min=1, help="Pixels per cell",
    ),
    gap: int = typer.Option(_DEFAULTS.grid_gap, "--gap", min=0, help="Pixels between cells"),
    report: Path | None = typer.Option(
        None, "--report", "-r", help="Also write the usage report to this file",
    ),
    comparison: bool = typer.Option(
        _DEFAULTS.save_comparison, "--comparison/--no-comparison",
        help="Save Original | Target | Mosaic side by side",
    ),
    save_target: bool = typer.Option(
        _DEFAULTS.save_target, "--target/--no-target", help="Save the sampled target",
    ),
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Debug logging"),
) -> None:
    """Build a mosaic of IMAGE from the stock listed in PALETTE."""
    _setup_logging(verbose)

    cfg = MosaicConfig(
        grid_width=width,
        grid_height=height,
        seed=seed,
        pixel_upscale=upscale,
        grid_gap=gap,
        save_target=save_target,
        save_comparison=comparison,
        output_dir=output.parent,
    )

    console.print(Panel.fit(
        f"[bold]BEAD MOSAIC[/bold]\n"
        f"Grid: {cfg.grid_width}x{cfg.grid_height} = {cfg.num_cells} cells\n"
        f"Image: {image.name}  |  Palette: {palette.name}  |  Seed: {cfg.seed}",
        border_style="cyan",
    ))

    t_total = time.perf_counter()
    try:
        target, result = _run(cfg, image, palette)
    except MosaicError as exc:
        raise _fail(exc) from exc

    cfg.output_dir.mkdir(parents=True, exist_ok=True)
    mosaic = result.to_array()
    save_upscaled(mosaic, output, cfg.pixel_upscale, cfg.grid_gap)

    stem = output.stem
    if cfg.save_target:
        save_upscaled(
            target, cfg.output_dir / f"{stem}_target.{cfg.output_format}",
            cfg.pixel_upscale,
        )
    if cfg.save_comparison:
        make_comparison_grid(
            image, target, mosaic,
            cfg.output_dir / f"{stem}_comparison.{cfg.output_format}",
            cfg.pixel_upscale, cfg.grid_gap,
        )

    text = format_report(result.summary)
    if report is not None:
        report.parent.mkdir(parents=True, exist_ok=True)
        report.write_text(text + "\n", encoding="utf-8")

    err = mean_weighted_error(target, mosaic)
    elapsed = time.perf_counter() - t_total
    console.print(Panel(text, title="Pieces", border_style="green", expand=False))
    console.print(
        f"[green]✓[/green] Saved to {output}  "
        f"[dim]substitutions={result.substitutions}  error={err:.1f}"
        f"  left={result.inventory.total_remaining}  time={elapsed:.1f}s[/dim]"
    )


# -- inspect command ---------------------------------------------------

@app.command()
def inspect(
    image: Path = typer.Argument(..., help="Source picture"),
    palette: Path = typer.Argument(..., help="Palette JSON with colour stock"),
    x: int = typer.Argument(..., help="Column, 0 = left"),
    y: int = typer.Argument(..., help="Row, 0 = bottom"),
    width: int = typer.Option(_DEFAULTS.grid_width, "--width", "-W", min=1),
    height: int = typer.Option(_DEFAULTS.grid_height, "--height", "-H", min=1),
    seed: int | None = typer.Option(_DEFAULTS.seed, "--seed", "-s", min=0),
    verbose: bool = typer.Option(False, "--verbose", "-v"),
) -> None:
    """Show the colour assigned to cell (X, Y)."""
    _setup_logging(verbose)
    cfg = MosaicConfig(grid_width=width, grid_height=height, seed=seed)

    try:
        _, result = _run(cfg, image, palette)
    except MosaicError as exc:
        raise _fail(exc) from exc

    try:
        cell = cell_at(result.layout, cfg.grid_width, x, y)
    except IndexError as exc:
        console.print(f"[bold red]{escape(str(exc))}[/bold red]")
        raise typer.Exit(1) from exc

    label = f"  [dim]({cell.name})[/dim]" if cell.name else ""
    console.print(describe_cell(cell) + label)


if __name__ == "__main__":
    app()
