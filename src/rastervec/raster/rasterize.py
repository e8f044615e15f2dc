"""
Integer rasterization of segments and circle outlines.

These functions define the pixel footprint of every primitive. The extractor
uses draw_segment as its correctness oracle, so a chain of pixels is only
accepted as a segment when re-drawing its two endpoints gives back exactly
the same pixels.
"""

import math

from rastervec.geometry import Coord, as_coord


def _round_div(numerator, denominator):
    """Round numerator / denominator to the nearest integer, halves up."""
    if denominator < 0:
        numerator, denominator = -numerator, -denominator
    return (2 * numerator + denominator) // (2 * denominator)


def _round_sqrt(value):
    """Round sqrt(value) to the nearest integer without floating point."""
    root = math.isqrt(value)
    # (root + 0.5)^2 = root^2 + root + 0.25
    if value - root * root > root:
        return root + 1
    return root


def slope(a, b):
    """
    Slope of the line through a and b.

    Vertical lines return math.inf as the sentinel value.
    """
    if b[0] == a[0]:
        return math.inf
    return (b[1] - a[1]) / (b[0] - a[0])


def draw_segment(a, b):
    """
    Rasterize the segment between a and b.

    The endpoints are put in canonical order first, so draw_segment(a, b) and
    draw_segment(b, a) return the same list. Shallow lines (|k| <= 1) step
    along x and steep or vertical lines step along y, which yields exactly
    one pixel per step with no gaps and no duplicates.

    The off-axis coordinate is the exact line equation evaluated with
    integer arithmetic and rounded to the nearest pixel.
    """
    a = as_coord(a)
    b = as_coord(b)
    if a > b:
        a, b = b, a

    dx = b.x - a.x
    dy = b.y - a.y

    if dx == 0:
        return [Coord(a.x, y) for y in range(a.y, b.y + 1)]

    if abs(dy) <= dx:
        return [
            Coord(x, a.y + _round_div(dy * (x - a.x), dx))
            for x in range(a.x, b.x + 1)
        ]

    step = 1 if dy > 0 else -1
    return [
        Coord(a.x + _round_div(dx * (y - a.y), dy), y)
        for y in range(a.y, b.y + step, step)
    ]


def draw_circle_outline(center, radius):
    """
    Rasterize a circle outline.

    One quadrant is computed column by column for x in [-radius, 0]; where
    the outline climbs more than one pixel between two columns the missing
    rows are filled so the boundary stays 8-connected. The quadrant is
    mirrored into the other three and translated to the center.

    The result is a closed walk around the circle: every item touches the
    next one, and the last touches the first.
    """
    center = as_coord(center)
    if radius < 0:
        raise ValueError(f"Circle radius must be non-negative, got {radius}")
    if radius == 0:
        return [center]

    r_squared = radius * radius
    quadrant = []
    prev_y = None

    for x in range(-radius, 1):
        y = _round_sqrt(r_squared - x * x)
        if prev_y is not None:
            for gap_y in range(prev_y + 1, y):
                gap_x = -_round_sqrt(r_squared - gap_y * gap_y)
                quadrant.append(Coord(min(max(gap_x, x - 1), x), gap_y))
        quadrant.append(Coord(x, y))
        prev_y = y

    upper_left = quadrant
    upper_right = [Coord(-x, y) for x, y in reversed(quadrant)]
    lower_right = [Coord(-x, -y) for x, y in quadrant]
    lower_left = [Coord(x, -y) for x, y in reversed(quadrant)]

    # quadrants share their axis pixels; keep the first occurrence
    outline = dict.fromkeys(upper_left + upper_right + lower_right + lower_left)
    return [center + offset for offset in outline]


def draw_polyline(points, closed=False):
    """Rasterize consecutive segments through points, without duplicates."""
    points = [as_coord(p) for p in points]
    if len(points) == 1:
        return list(points)

    pairs = list(zip(points, points[1:]))
    if closed and len(points) > 2:
        pairs.append((points[-1], points[0]))

    footprint = {}
    for start, end in pairs:
        for pixel in draw_segment(start, end):
            footprint.setdefault(pixel, None)
    return list(footprint)


def fill_area(border):
    """
    Fill the interior of a closed pixel boundary.

    Boundary pixels are sorted by row and then by column; between two
    consecutive pixels of the same row every missing column is inserted.
    This is a plain scanline fill meant for convex outlines produced by
    draw_polyline or draw_circle_outline.
    """
    ordered = sorted({as_coord(p) for p in border}, key=lambda c: (c.y, c.x))

    filled = []
    for pixel in ordered:
        if filled and filled[-1].y == pixel.y:
            for x in range(filled[-1].x + 1, pixel.x):
                filled.append(Coord(x, pixel.y))
        filled.append(pixel)
    return filled


def is_round_trip(pixels):
    """
    True when drawing the chain's endpoints reproduces the chain exactly.

    The comparison is on pixel sets; a chain shorter than two pixels never
    round-trips since it cannot define a segment.
    """
    if len(pixels) < 2:
        return False
    redrawn = draw_segment(pixels[0], pixels[-1])
    if len(redrawn) != len(pixels):
        return False
    return set(redrawn) == set(pixels)
