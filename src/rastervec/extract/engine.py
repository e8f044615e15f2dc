"""
Segment extraction entry points.

Runs scan -> merge -> resolve over a fresh grid and returns the committed
segments. The caller's bitmap is never modified.
"""

import numpy as np

from rastervec.config import ExtractionConfig
from rastervec.extract.grid import Grid
from rastervec.extract.merger import merge_chains
from rastervec.extract.resolver import resolve
from rastervec.extract.scanner import Orientation, scan_all
from rastervec.models import ExtractionReport
from rastervec.tracer import get_tracer, trace


def _as_grid(bitmap):
    if isinstance(bitmap, Grid):
        return Grid(bitmap.mask)
    return Grid(bitmap)


@trace(label="run_extraction")
def run_extraction(bitmap, config=None):
    """
    Extract segments from a bitmap and report per-stage counts.

    bitmap is a Grid or any 2D array-like addressed [x, y]. Pixels that no
    committed segment could take are listed as orphans.
    """
    tracer = get_tracer()

    if config is None:
        config = ExtractionConfig()

    grid = _as_grid(bitmap)
    report = ExtractionReport(
        size_x=grid.size_x,
        size_y=grid.size_y,
        foreground_pixels=grid.foreground_count(),
    )

    if grid.is_empty or report.foreground_pixels == 0:
        tracer.event("Empty grid, nothing to extract")
        return report

    orientations = [Orientation.from_name(name) for name in config.orientations]

    with tracer.span("scan", module="engine"):
        scans = scan_all(grid, orientations)

    candidates = []
    for orientation, result in scans.items():
        report.base_chain_counts[orientation.label] = len(result.chains)
        candidates.extend(result.chains)

    if config.merge_chains:
        with tracer.span("merge", module="engine"):
            merged = merge_chains(scans)
        report.merged_chain_count = len(merged)
        candidates.extend(merged)

    report.pool_size = sum(1 for chain in candidates if len(chain) >= config.min_chain_pixels)

    with tracer.span("resolve", module="engine"):
        report.segments = resolve(grid, candidates, config.min_chain_pixels)

    report.orphan_pixels = grid.foreground_coords()

    tracer.event(
        f"Extraction complete: segments={len(report.segments)}, orphans={len(report.orphan_pixels)}"
    )

    return report


def extract_segments(bitmap, config=None):
    """Extract the list of segments whose rasterization reproduces the bitmap."""
    return run_extraction(bitmap, config).segments


def extract_primitives(container, size_x, size_y, translator=bool, config=None):
    """
    Extract segments from any container indexable as container[x][y].

    translator converts a stored cell value to foreground (truthy) or
    background (falsy), so callers can pass their own pixel storage.
    """
    mask = np.zeros((max(size_x, 0), max(size_y, 0)), dtype=bool)
    for x in range(size_x):
        column = container[x]
        for y in range(size_y):
            mask[x, y] = bool(translator(column[y]))

    return extract_segments(mask, config)
