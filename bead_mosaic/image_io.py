"""Image loading, grid sampling, and mosaic rendering."""

from __future__ import annotations

from pathlib import Path
from typing import IO

import numpy as np
from PIL import Image, ImageDraw, ImageFont, UnidentifiedImageError

from bead_mosaic.errors import ConfigError, ImageError
from bead_mosaic.grid import GridCell, cells_from_array


def _open_rgb(path: str | Path | IO[bytes]) -> Image.Image:
    try:
        with Image.open(path) as img:
            return img.convert("RGB")
    except FileNotFoundError as exc:
        msg = f"Image not found: {path}"
        raise ImageError(msg) from exc
    except (UnidentifiedImageError, OSError) as exc:
        msg = f"Could not decode image {path}: {exc}"
        raise ImageError(msg) from exc


def load_and_resize(path: str | Path | IO[bytes], width: int = 48, height: int = 48) -> np.ndarray:
    """Load an image and resample it to exactly *width* x *height*.

    Nearest-neighbour resampling: every cell holds one source pixel, never
    an average. The aspect ratio is not preserved.

    Returns:
        (H, W, 3) uint8 array, top row first.
    """
    if width < 1 or height < 1:
        msg = f"Grid size must be positive, got {width}x{height}"
        raise ConfigError(msg)
    img = _open_rgb(path)
    img = img.resize((width, height), Image.NEAREST)
    return np.array(img, dtype=np.uint8)


def grid_from_image(target: np.ndarray) -> list[GridCell]:
    """Turn an upright (H, W, 3) image into grid cells.

    Grid row ``y = 0`` is the *bottom* row of the image (origin at the
    bottom-left, as the renderer expects).
    """
    return cells_from_array(np.flipud(target))


def sample_grid(path: str | Path, width: int = 48, height: int = 48) -> list[GridCell]:
    """Load *path* and sample it onto a *width* x *height* grid."""
    return grid_from_image(load_and_resize(path, width, height))


def render_cells(
    array: np.ndarray,
    cell_size: int = 12,
    gap: int = 0,
    background: tuple[int, int, int] = (0, 0, 0),
) -> Image.Image:
    """Draw each pixel of *array* as a *cell_size* square.

    With ``gap > 0`` every square is shrunk by *gap* pixels on its right and
    bottom edge, leaving a grid of *background* between cells.
    """
    if cell_size < 1:
        msg = f"Cell size must be positive, got {cell_size}"
        raise ConfigError(msg)
    h, w = array.shape[:2]
    if gap <= 0:
        img = Image.fromarray(array.astype(np.uint8))
        return img.resize((w * cell_size, h * cell_size), Image.NEAREST)

    canvas = Image.new("RGB", (w * cell_size, h * cell_size), background)
    draw = ImageDraw.Draw(canvas)
    inner = max(1, cell_size - gap)
    for y in range(h):
        for x in range(w):
            x0, y0 = x * cell_size, y * cell_size
            r, g, b = (int(c) for c in array[y, x])
            draw.rectangle((x0, y0, x0 + inner - 1, y0 + inner - 1), fill=(r, g, b))
    return canvas


def save_upscaled(
    array: np.ndarray,
    path: str | Path,
    pixel_upscale: int = 12,
    gap: int = 0,
) -> None:
    """Save a small array as an upscaled image, optionally with grid gaps."""
    render_cells(array, pixel_upscale, gap).save(path)


def make_comparison_grid(
    original_path: str | Path,
    target: np.ndarray,
    mosaic: np.ndarray,
    output_path: str | Path,
    pixel_upscale: int = 12,
    gap: int = 0,
) -> None:
    """Create a 3-panel comparison: Original | Target | Mosaic.

    All panels are upscaled to the same pixel dimensions based on the
    target shape and *pixel_upscale*.
    """
    th, tw = target.shape[:2]
    panel_w = tw * pixel_upscale
    panel_h = th * pixel_upscale
    label_height = 36

    original = _open_rgb(original_path).resize((panel_w, panel_h), Image.LANCZOS)
    target_img = render_cells(target, pixel_upscale)
    mosaic_img = render_cells(mosaic, pixel_upscale, gap)

    panels = [original, target_img, mosaic_img]
    labels = ["Original", f"Target {tw}x{th}", "Mosaic"]

    spacing = 8
    total_w = len(panels) * panel_w + (len(panels) - 1) * spacing
    total_h = panel_h + label_height

    canvas = Image.new("RGB", (total_w, total_h), (30, 30, 30))
    draw = ImageDraw.Draw(canvas)

    try:
        font = ImageFont.truetype(
            "/usr/share/fonts/truetype/dejavu/DejaVuSans-Bold.ttf", 18,
        )
    except OSError:
        font = ImageFont.load_default()

    for i, (panel, label) in enumerate(zip(panels, labels, strict=False)):
        x = i * (panel_w + spacing)
        canvas.paste(panel, (x, label_height))

        bbox = draw.textbbox((0, 0), label, font=font)
        text_w = bbox[2] - bbox[0]
        tx = x + (panel_w - text_w) // 2
        draw.text((tx, 6), label, fill=(220, 220, 220), font=font)

    canvas.save(output_path)
