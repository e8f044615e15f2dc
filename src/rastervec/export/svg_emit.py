"""
SVG emission for extracted segments.

Each segment becomes one <line> between pixel centers. SVG's y axis points
down, so rows are flipped against the grid's y-up convention.
"""

import svgwrite

from rastervec.io.save_artifacts import save_svg
from rastervec.tracer import get_tracer, trace


def _to_svg_point(coord, size_y, scale):
    return ((coord.x + 0.5) * scale, (size_y - 1 - coord.y + 0.5) * scale)


@trace(label="emit_segments_svg")
def emit_segments_svg(segments, size_x, size_y, stroke_width=1.0, stroke_color="black", scale=1.0):
    """
    Create an SVG document containing all segments.

    Returns:
        svgwrite.Drawing object
    """
    tracer = get_tracer()

    width = size_x * scale
    height = size_y * scale
    dwg = svgwrite.Drawing(size=(f"{width}px", f"{height}px"))
    dwg.viewbox(0, 0, width, height)

    group = dwg.g(id="segments", fill="none", stroke=stroke_color,
                  stroke_width=stroke_width, stroke_linecap="round")

    for index, segment in enumerate(segments):
        group.add(dwg.line(
            start=_to_svg_point(segment.a, size_y, scale),
            end=_to_svg_point(segment.b, size_y, scale),
            id=f"seg_{index}",
        ))

    dwg.add(group)

    tracer.event(f"SVG emitted with {len(segments)} segments")

    return dwg


def save_segments_svg(segments, size_x, size_y, path, config):
    """Emit and save the segment SVG using the svg section of the config."""
    dwg = emit_segments_svg(
        segments, size_x, size_y,
        stroke_width=config.svg.stroke_width,
        stroke_color=config.svg.stroke_color,
        scale=config.svg.scale,
    )
    save_svg(dwg, path)
    return dwg
