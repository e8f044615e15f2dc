"""
Artifact saving utilities for rastervec.

Handles writing debug images, JSON files and SVG documents.
"""

import json
import os

import cv2
import numpy as np

from rastervec.tracer import get_tracer


def ensure_dir(path):
    """Create directory if it does not exist."""
    if path:
        os.makedirs(path, exist_ok=True)


def get_debug_dir(out_dir, stage_name):
    """
    Get the debug directory path for a stage.

    Creates the directory if it does not exist.
    """
    debug_dir = os.path.join(out_dir, "debug", stage_name)
    ensure_dir(debug_dir)
    return debug_dir


def save_image(img, path, max_edge=None):
    """
    Save an RGB image to disk.

    Optionally downscales to max_edge while preserving aspect ratio.
    """
    tracer = get_tracer()

    if max_edge and max(img.shape[:2]) > max_edge:
        scale = max_edge / max(img.shape[:2])
        new_size = (max(1, int(img.shape[1] * scale)), max(1, int(img.shape[0] * scale)))
        img = cv2.resize(img, new_size, interpolation=cv2.INTER_NEAREST)

    if len(img.shape) == 3 and img.shape[2] == 3:
        img_bgr = cv2.cvtColor(img, cv2.COLOR_RGB2BGR)
    else:
        img_bgr = img

    ensure_dir(os.path.dirname(path))
    cv2.imwrite(path, img_bgr)
    tracer.event(f"Saved image: {path}")


def save_json(data, path, indent=2):
    """
    Save a dictionary or Pydantic model to JSON.
    """
    tracer = get_tracer()

    ensure_dir(os.path.dirname(path))

    if hasattr(data, "model_dump"):
        data = data.model_dump(mode="json")

    with open(path, "w", encoding="utf-8") as f:
        json.dump(data, f, indent=indent, default=str)

    tracer.event(f"Saved JSON: {path}")


def save_svg(svg_content, path):
    """
    Save SVG content to file.
    """
    tracer = get_tracer()

    ensure_dir(os.path.dirname(path))

    if hasattr(svg_content, "tostring"):
        content = svg_content.tostring()
    else:
        content = str(svg_content)

    with open(path, "w", encoding="utf-8") as f:
        f.write(content)

    tracer.event(f"Saved SVG: {path}")


def upscale(img, factor):
    """Enlarge an image by an integer factor, keeping pixels square."""
    if factor <= 1:
        return img
    return np.repeat(np.repeat(img, factor, axis=0), factor, axis=1)


def draw_overlay(base_img, segments, size_y, factor=1, colors=None):
    """
    Draw segments over an RGB rendering of a mask.

    Segment coordinates are [x, y] with y up; they are mapped to image rows
    and to the centers of the upscaled pixels. Colors cycle per segment.
    """
    overlay = cv2.cvtColor(upscale(base_img, factor), cv2.COLOR_RGB2BGR)

    if colors is None:
        colors = generate_colors(len(segments))

    half = factor // 2
    for segment, color in zip(segments, colors):
        start = (segment.a.x * factor + half, (size_y - 1 - segment.a.y) * factor + half)
        end = (segment.b.x * factor + half, (size_y - 1 - segment.b.y) * factor + half)
        cv2.line(overlay, start, end, color, 1)
        cv2.circle(overlay, start, max(1, factor // 4), color, -1)
        cv2.circle(overlay, end, max(1, factor // 4), color, -1)

    return cv2.cvtColor(overlay, cv2.COLOR_BGR2RGB)


def generate_colors(n):
    """Generate n distinct colors for visualization."""
    import colorsys
    colors = []
    for i in range(n):
        hue = i / max(n, 1)
        r, g, b = colorsys.hsv_to_rgb(hue, 0.9, 0.85)
        colors.append((int(b * 255), int(g * 255), int(r * 255)))
    return colors


class DebugArtifactWriter:
    """
    Helper class to manage debug artifact writing for one extraction run.

    Handles creation of debug directories and provides convenience methods
    for saving various artifact types.
    """

    def __init__(self, out_dir, enabled=True, factor=8, max_edge=1600):
        self.out_dir = out_dir
        self.enabled = enabled
        self.factor = factor
        self.max_edge = max_edge

    def get_stage_dir(self, stage_name):
        """Get the debug directory for a stage."""
        return get_debug_dir(self.out_dir, stage_name)

    def save_image(self, img, stage_name, filename):
        """Save an image artifact."""
        if not self.enabled:
            return
        path = os.path.join(self.get_stage_dir(stage_name), filename)
        save_image(img, path, max_edge=self.max_edge)

    def save_json(self, data, stage_name, filename):
        """Save a JSON artifact."""
        if not self.enabled:
            return
        path = os.path.join(self.get_stage_dir(stage_name), filename)
        save_json(data, path)

    def save_overlay(self, base_img, segments, size_y, stage_name, filename):
        """Draw and save a segment overlay."""
        if not self.enabled:
            return
        overlay = draw_overlay(base_img, segments, size_y, factor=self.factor)
        self.save_image(overlay, stage_name, filename)
