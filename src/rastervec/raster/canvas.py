"""
Drawing surface for rastervec primitives.

Shapes may extend past the canvas; pixels outside it are dropped silently.
"""

import numpy as np

from rastervec.extract.grid import Grid
from rastervec.models import footprint
from rastervec.tracer import get_tracer, trace


class Canvas:
    """A size_x by size_y foreground mask addressed [x, y] with y pointing up."""

    def __init__(self, size_x, size_y):
        if size_x < 0 or size_y < 0:
            raise ValueError(f"Canvas size must be non-negative, got {size_x}x{size_y}")
        self.size_x = size_x
        self.size_y = size_y
        self.mask = np.zeros((size_x, size_y), dtype=bool)

    def in_bounds(self, pixel):
        return 0 <= pixel[0] < self.size_x and 0 <= pixel[1] < self.size_y

    def set_pixels(self, pixels):
        """Set pixels to foreground and return how many landed on the canvas."""
        drawn = 0
        for pixel in pixels:
            if self.in_bounds(pixel):
                self.mask[pixel[0], pixel[1]] = True
                drawn += 1
        return drawn

    def draw(self, shape, filled=None):
        """Draw a Segment, Circle or Triangle; returns the pixels kept."""
        return self.set_pixels(footprint(shape, filled))

    @trace(label="draw_scene")
    def draw_scene(self, scene):
        tracer = get_tracer()

        total = 0
        for shape in scene.shapes:
            total += self.draw(shape)

        tracer.event(f"Drew {len(scene.shapes)} shapes, {total} pixels")
        return total

    @classmethod
    def from_scene(cls, scene):
        canvas = cls(scene.size_x, scene.size_y)
        canvas.draw_scene(scene)
        return canvas

    def to_grid(self):
        return Grid(self.mask)
