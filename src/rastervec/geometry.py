"""
Integer pixel coordinates for rastervec.

Coordinates are plain value tuples: they hash, compare and sort by x first
and y second, which is the canonical order used by the rasterizer.
"""

import math
from typing import NamedTuple


class Coord(NamedTuple):
    """Integer pixel position."""
    x: int
    y: int

    def __add__(self, other):
        return Coord(self.x + other[0], self.y + other[1])

    def __sub__(self, other):
        return Coord(self.x - other[0], self.y - other[1])


def as_coord(value):
    """Convert a pair-like value to a Coord."""
    if isinstance(value, Coord):
        return value
    x, y = value
    return Coord(int(x), int(y))


def distance(first, second):
    """Euclidean distance between two coordinates."""
    return math.hypot(second[0] - first[0], second[1] - first[1])


def are_adjacent(first, second):
    """True when two distinct pixels touch under 8-connectivity."""
    dx = abs(first[0] - second[0])
    dy = abs(first[1] - second[1])
    return max(dx, dy) == 1


def chain_length(chain):
    """Endpoint distance of a pixel chain, the key used to rank candidates."""
    if not chain:
        return -1.0
    return distance(chain[0], chain[-1])
