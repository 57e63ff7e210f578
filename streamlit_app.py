"""
Bead Mosaic — Workbench

Run with:
    streamlit run streamlit_app.py
"""

from __future__ import annotations

import io
import json
import time
from pathlib import Path

import streamlit as st
from PIL import Image

from bead_mosaic.config import MosaicConfig
from bead_mosaic.errors import ConfigError, MosaicError
from bead_mosaic.image_io import grid_from_image, load_and_resize, render_cells
from bead_mosaic.layout import cell_at, describe_cell
from bead_mosaic.palette import PaletteColor, load_palette, parse_palette
from bead_mosaic.pipeline import generate_mosaic
from bead_mosaic.report import format_report

# -- Page config -------------------------------------------------------
st.set_page_config(
    page_title="Bead Mosaic",
    page_icon=None,
    layout="wide",
    initial_sidebar_state="collapsed",
)

_DEFAULTS = MosaicConfig()
_SAMPLE_PALETTE = Path(__file__).parent / "palettes" / "basic_beads.json"

# -- CSS ---------------------------------------------------------------
st.markdown("""
<style>
    .stApp { background-color: #faf9f6; color: #2a2a2a; }
    .block-container { max-width: 1000px; padding-top: 3rem; }
    .gallery-title {
        font-family: 'Georgia', serif;
        font-size: 2.4rem;
        font-weight: 300;
        text-align: center;
    }
    .gallery-subtitle {
        font-size: 0.85rem;
        color: #777;
        text-align: center;
        max-width: 640px;
        margin: 0.5rem auto 2rem;
    }
    #MainMenu {visibility: hidden;}
    footer {visibility: hidden;}
</style>
""", unsafe_allow_html=True)


# -- Title -------------------------------------------------------------
st.markdown('<div class="gallery-title">Bead Mosaic</div>', unsafe_allow_html=True)
st.markdown(
    '<div class="gallery-subtitle">'
    "Upload a picture and a palette listing how many pieces of each colour "
    "you own. Every cell gets the closest colour still in stock; cells are "
    "visited in random order so shortages are spread over the whole picture."
    "</div>",
    unsafe_allow_html=True,
)

# -- Controls ----------------------------------------------------------
ctrl1, ctrl2, ctrl3 = st.columns(3)
with ctrl1:
    grid_width = st.slider("Width (cells)", 4, 128, _DEFAULTS.grid_width)
with ctrl2:
    grid_height = st.slider("Height (cells)", 4, 128, _DEFAULTS.grid_height)
with ctrl3:
    upscale = st.slider("Upscale", 4, 20, _DEFAULTS.pixel_upscale)

seed_text = st.text_input("Seed (blank = random order, digits only)", "")

st.markdown("---")

# -- Uploads -----------------------------------------------------------
up1, up2 = st.columns(2)
with up1:
    uploaded = st.file_uploader(
        "Select artwork", type=["jpg", "jpeg", "png", "webp", "bmp", "jfif"],
    )
with up2:
    uploaded_palette = st.file_uploader("Palette JSON (optional)", type=["json"])

if uploaded is not None:
    st.session_state.uploaded_data = uploaded.getvalue()
elif "uploaded_data" not in st.session_state:
    st.session_state.uploaded_data = None


def _palette() -> list[PaletteColor]:
    if uploaded_palette is None:
        return load_palette(_SAMPLE_PALETTE)
    try:
        data = json.loads(uploaded_palette.getvalue().decode("utf-8"))
    except (UnicodeDecodeError, json.JSONDecodeError) as exc:
        msg = f"Palette upload is not valid JSON: {exc}"
        raise ConfigError(msg) from exc
    return parse_palette(data)


if st.session_state.uploaded_data is not None:
    if st.button("COMPOSE", type="primary", use_container_width=True):
        seed_text = seed_text.strip()
        t0 = time.perf_counter()
        try:
            if seed_text and not seed_text.isdigit():
                msg = f"Seed must be a non-negative integer, got {seed_text!r}"
                raise ConfigError(msg)
            seed = int(seed_text) if seed_text else None
            palette = _palette()
            target = load_and_resize(
                io.BytesIO(st.session_state.uploaded_data), grid_width, grid_height,
            )
            result = generate_mosaic(
                grid_from_image(target), grid_width, grid_height, palette, rng=seed,
            )
        except MosaicError as exc:
            st.session_state.result = None
            st.error(f"{type(exc).__name__}: {exc}")
        else:
            st.session_state.result = result
            st.session_state.elapsed = time.perf_counter() - t0

result = st.session_state.get("result")
if result is not None:
    mosaic_img = render_cells(result.to_array(), upscale, _DEFAULTS.grid_gap)
    st.image(mosaic_img, use_container_width=True)

    m1, m2, m3, m4 = st.columns(4)
    m1.metric("Pieces used", result.summary.total)
    m2.metric("Pieces left", result.inventory.total_remaining)
    m3.metric("Substitutions", result.substitutions)
    m4.metric("Time", f"{st.session_state.elapsed:.1f} s")

    st.code(format_report(result.summary), language=None)

    # -- Cell inspector ------------------------------------------------
    i1, i2 = st.columns(2)
    with i1:
        ix = st.number_input("x (0 = left)", 0, result.width - 1, 0)
    with i2:
        iy = st.number_input("y (0 = bottom)", 0, result.height - 1, 0)
    cell = cell_at(result.layout, result.width, int(ix), int(iy))
    swatch = Image.new("RGB", (48, 48), cell.color)
    s1, s2 = st.columns([1, 8])
    s1.image(swatch)
    s2.markdown(f"{describe_cell(cell)}  **{cell.name}**")

    buf = io.BytesIO()
    mosaic_img.save(buf, format="PNG")
    st.download_button(
        "DOWNLOAD PNG", buf.getvalue(), file_name="mosaic.png", mime="image/png",
    )
