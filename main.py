#!/usr/bin/env python3
"""
main.py — Quick-start entry point.

    python main.py build my_photo.jpg palettes/basic_beads.json
    python main.py inspect my_photo.jpg palettes/basic_beads.json 10 20

Equivalent to ``python -m bead_mosaic.cli ...``.
"""

from bead_mosaic.cli import app

if __name__ == "__main__":
    app()
