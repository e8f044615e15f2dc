"""Pytest fixtures for rastervec tests."""

import os
import tempfile

import numpy as np
import pytest


@pytest.fixture
def temp_dir():
    """Create a temporary directory for test outputs."""
    with tempfile.TemporaryDirectory() as tmpdir:
        yield tmpdir


def _mask_from(size_x, size_y, pixels):
    mask = np.zeros((size_x, size_y), dtype=bool)
    for x, y in pixels:
        mask[x, y] = True
    return mask


@pytest.fixture
def make_mask():
    """Factory building a [x, y] mask from pixel coordinates."""
    return _mask_from


@pytest.fixture
def shallow_line_mask():
    """The segment (0,0)-(10,4): horizontal runs of lengths 2,2,3,2,2."""
    from rastervec.raster.rasterize import draw_segment
    return _mask_from(11, 5, draw_segment((0, 0), (10, 4)))


@pytest.fixture
def cross_mask():
    """A plus sign: one row and one column crossing at (3, 3)."""
    from rastervec.raster.rasterize import draw_segment
    pixels = draw_segment((0, 3), (6, 3)) + draw_segment((3, 0), (3, 6))
    return _mask_from(7, 7, pixels)


@pytest.fixture
def circle_mask():
    """A radius 6 circle outline centered on a 15x15 canvas."""
    from rastervec.raster.rasterize import draw_circle_outline
    return _mask_from(15, 15, draw_circle_outline((7, 7), 6))


@pytest.fixture
def triangle_mask():
    """Triangle outline with one shallow, one steep and one diagonal edge."""
    from rastervec.models import Triangle
    triangle = Triangle(p1=(1, 1), p2=(17, 5), p3=(6, 14))
    return _mask_from(20, 16, triangle.rasterize())


@pytest.fixture
def default_config():
    """Create default pipeline configuration."""
    from rastervec.config import PipelineConfig
    return PipelineConfig()


@pytest.fixture
def synthetic_input_file(temp_dir, triangle_mask):
    """Write the triangle mask as a PNG for pipeline tests."""
    from rastervec.io.ppm import mask_to_rgb
    from rastervec.io.save_artifacts import save_image

    path = os.path.join(temp_dir, "test_input.png")
    save_image(mask_to_rgb(triangle_mask), path)
    return path
