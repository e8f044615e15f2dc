"""
Grid model for segment extraction.

The grid holds the foreground mask addressed as mask[x, y] and a claimed-by
layer with one integer per cell. During scanning the layer stores the index
of the chain that visited the cell; during resolution it stores the index of
the output segment that claimed the cell.
"""

import numpy as np

from rastervec.geometry import Coord


UNCLAIMED = -1


class Grid:
    """
    Foreground mask plus per-cell claim tags.

    The mask is copied on construction, so extraction never mutates the
    caller's array. Reads outside the grid are background.
    """

    def __init__(self, mask):
        mask = np.asarray(mask, dtype=bool)
        if mask.size == 0:
            mask = mask.reshape(mask.shape if mask.ndim == 2 else (0, 0))
        if mask.ndim != 2:
            raise ValueError(f"Grid mask must be 2-dimensional, got shape {mask.shape}")

        self.mask = mask.copy()
        self.size_x, self.size_y = self.mask.shape
        self.owner = np.full(self.mask.shape, UNCLAIMED, dtype=np.int32)

    @property
    def is_empty(self):
        return self.size_x == 0 or self.size_y == 0

    def in_bounds(self, pixel):
        return 0 <= pixel[0] < self.size_x and 0 <= pixel[1] < self.size_y

    def is_foreground(self, pixel):
        if not self.in_bounds(pixel):
            return False
        return bool(self.mask[pixel[0], pixel[1]])

    def owner_of(self, pixel):
        """Claim tag of a cell, UNCLAIMED for untagged or out-of-bounds cells."""
        if not self.in_bounds(pixel):
            return UNCLAIMED
        return int(self.owner[pixel[0], pixel[1]])

    def tag(self, pixel, index):
        self.owner[pixel[0], pixel[1]] = index

    def claim(self, pixel, index):
        """Assign a pixel to an output segment and mark it background."""
        self.mask[pixel[0], pixel[1]] = False
        self.owner[pixel[0], pixel[1]] = index

    def reset_owner(self):
        self.owner.fill(UNCLAIMED)

    def foreground_count(self):
        return int(np.count_nonzero(self.mask))

    def foreground_coords(self):
        """Foreground pixels in raster order: x outer, y inner."""
        return [Coord(int(x), int(y)) for x, y in np.argwhere(self.mask)]
