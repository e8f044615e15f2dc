"""
Plain-text PPM emission of foreground masks.

Rows are written top row first, which is y = size_y - 1 since y points up;
foreground pixels are black and background pixels white.
"""

import os

import numpy as np

from rastervec.io.save_artifacts import ensure_dir
from rastervec.tracer import get_tracer, trace


FOREGROUND_RGB = (0, 0, 0)
BACKGROUND_RGB = (255, 255, 255)


def format_ppm(mask):
    """Render a [x, y] mask as P3 text."""
    mask = np.asarray(mask, dtype=bool)
    size_x, size_y = mask.shape

    lines = ["P3", f"{size_x} {size_y}", "255"]
    foreground = " ".join(str(v) for v in FOREGROUND_RGB)
    background = " ".join(str(v) for v in BACKGROUND_RGB)
    for y in range(size_y - 1, -1, -1):
        for x in range(size_x):
            lines.append(foreground if mask[x, y] else background)

    return "\n".join(lines) + "\n"


@trace(label="write_ppm")
def write_ppm(mask, path):
    """
    Write a mask as a P3 image.

    Raises OSError if the file cannot be opened.
    """
    tracer = get_tracer()

    ensure_dir(os.path.dirname(path))

    with open(path, "w", encoding="ascii") as f:
        f.write(format_ppm(mask))

    tracer.event(f"Saved PPM: {path}")


def mask_to_rgb(mask):
    """
    Convert a [x, y] mask to an RGB image array (H, W, 3).

    Image row 0 is the top of the drawing, y = size_y - 1.
    """
    mask = np.asarray(mask, dtype=bool)
    rows = np.flipud(mask.T)
    rgb = np.empty(rows.shape + (3,), dtype=np.uint8)
    rgb[...] = BACKGROUND_RGB
    rgb[rows] = FOREGROUND_RGB
    return rgb
