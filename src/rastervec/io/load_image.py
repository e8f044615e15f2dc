"""
Bitmap loading utilities for rastervec.

Reads image files with OpenCV and converts them to [x, y] foreground masks
with y pointing up, the same convention write_ppm uses.
"""

import os

import cv2
import numpy as np

from rastervec.tracer import get_tracer, trace


SUPPORTED_EXTENSIONS = [".png", ".bmp", ".ppm", ".pgm", ".pbm", ".tif", ".tiff"]


def image_to_mask(gray, threshold=128, invert=False):
    """
    Convert a grayscale image (H, W) to a [x, y] mask.

    Dark pixels (below threshold) are foreground unless invert is set.
    """
    foreground = gray < threshold
    if invert:
        foreground = ~foreground
    return np.ascontiguousarray(np.flipud(foreground).T)


@trace(label="load_mask")
def load_mask(path, threshold=128, invert=False):
    """
    Load an image from disk as a foreground mask.

    Raises FileNotFoundError if path does not exist.
    Raises ValueError if the image cannot be decoded.
    """
    tracer = get_tracer()

    if not os.path.exists(path):
        raise FileNotFoundError(f"Image not found: {path}")

    gray = cv2.imread(path, cv2.IMREAD_GRAYSCALE)
    if gray is None:
        raise ValueError(f"Failed to load image: {path}")

    mask = image_to_mask(gray, threshold, invert)

    tracer.event(f"Loaded mask: {mask.shape[0]}x{mask.shape[1]}, foreground={int(mask.sum())}")

    return mask


def validate_image_inputs(paths):
    """
    Validate that all input paths exist and are readable images.

    Returns a list of error messages (empty if all valid).
    """
    errors = []

    for path in paths:
        if not os.path.exists(path):
            errors.append(f"File not found: {path}")
            continue

        ext = os.path.splitext(path)[1].lower()
        if ext not in SUPPORTED_EXTENSIONS:
            errors.append(f"Unsupported image format: {path}")
            continue

        if cv2.imread(path, cv2.IMREAD_GRAYSCALE) is None:
            errors.append(f"Cannot read image: {path}")

    return errors
