"""
Directional chain scanning.

For each of four fixed orientations every foreground pixel is assigned to
exactly one maximal run along that orientation. These runs ("base chains")
are the building blocks of the merger and the initial candidate pool.
"""

from dataclasses import dataclass
from enum import Enum

import numpy as np

from rastervec.extract.grid import UNCLAIMED
from rastervec.geometry import Coord
from rastervec.tracer import get_tracer, trace


class Orientation(Enum):
    """Scan orientations and their unit steps."""
    HORIZONTAL = (1, 0)
    VERTICAL = (0, 1)
    DIAG_UP = (1, 1)
    DIAG_DOWN = (1, -1)

    @property
    def step(self):
        return Coord(*self.value)

    @property
    def label(self):
        return self.name.lower()

    @classmethod
    def from_name(cls, name):
        try:
            return cls[name.upper()]
        except KeyError:
            valid = ", ".join(o.label for o in cls)
            raise ValueError(f"Unknown orientation '{name}', expected one of: {valid}") from None


ALL_ORIENTATIONS = tuple(Orientation)


@dataclass
class ScanResult:
    """Chains found by one orientation pass plus the pixel -> chain lookup."""
    orientation: Orientation
    chains: list
    owner: np.ndarray

    def chain_at(self, pixel):
        """Index of the chain covering a pixel, or None."""
        x, y = pixel
        if not (0 <= x < self.owner.shape[0] and 0 <= y < self.owner.shape[1]):
            return None
        index = int(self.owner[x, y])
        if index == UNCLAIMED:
            return None
        return index

    def lengths(self):
        return [len(chain) for chain in self.chains]


def scan(grid, orientation):
    """
    Partition all foreground pixels into maximal runs along one orientation.

    Cells are visited in raster order, so the first cell met of any run is
    always its front and each run is walked exactly once. Visited cells are
    tagged with their chain index; the tags are copied into the result and
    cleared from the grid before returning.
    """
    grid.reset_owner()
    step = orientation.step
    chains = []

    for start in grid.foreground_coords():
        if grid.owner_of(start) != UNCLAIMED:
            continue

        index = len(chains)
        chain = []
        pixel = start
        while grid.is_foreground(pixel):
            grid.tag(pixel, index)
            chain.append(pixel)
            pixel = pixel + step
        chains.append(chain)

    owner = grid.owner.copy()
    grid.reset_owner()
    return ScanResult(orientation=orientation, chains=chains, owner=owner)


@trace(label="scan_all")
def scan_all(grid, orientations=ALL_ORIENTATIONS):
    """Run one scan pass per orientation, in sequence."""
    tracer = get_tracer()

    results = {}
    for orientation in orientations:
        with tracer.span(f"scan_{orientation.label}", module="scanner"):
            result = scan(grid, orientation)
            lengths = result.lengths()
            longest = max(lengths) if lengths else 0
            tracer.event(f"Chains: count={len(lengths)}, longest={longest}")
        results[orientation] = result

    return results
