"""Tests for coordinates, shape models and the drawing canvas."""

import pytest
from pydantic import ValidationError


class TestGeometry:
    """Tests for Coord helpers."""

    def test_coord_arithmetic(self):
        from rastervec.geometry import Coord

        assert Coord(2, 3) + (1, -1) == Coord(3, 2)
        assert Coord(2, 3) - (1, 1) == Coord(1, 2)

    def test_coord_order_is_x_then_y(self):
        from rastervec.geometry import Coord

        assert sorted([Coord(1, 0), Coord(0, 5), Coord(0, 2)]) == [(0, 2), (0, 5), (1, 0)]

    def test_adjacency(self):
        from rastervec.geometry import are_adjacent

        assert are_adjacent((0, 0), (1, 1))
        assert are_adjacent((0, 0), (0, -1))
        assert not are_adjacent((0, 0), (0, 0))
        assert not are_adjacent((0, 0), (2, 1))

    def test_chain_length(self):
        from rastervec.geometry import chain_length

        assert chain_length([(0, 0), (1, 0), (3, 4)]) == 5.0
        assert chain_length([(2, 2)]) == 0.0
        assert chain_length([]) == -1.0


class TestShapes:
    """Tests for Segment, Circle, Triangle and Scene."""

    def test_segment_positional(self):
        from rastervec.models import Segment

        segment = Segment((0, 0), (3, 4))

        assert segment.a == (0, 0)
        assert segment.length == 5.0
        assert not segment.is_degenerate
        assert segment.reversed().a == (3, 4)

    def test_segment_is_hashable(self):
        from rastervec.models import Segment

        assert len({Segment((0, 0), (1, 1)), Segment((0, 0), (1, 1))}) == 1

    def test_circle_rejects_negative_radius(self):
        from rastervec.models import Circle

        with pytest.raises(ValidationError):
            Circle(center=(0, 0), radius=-2)

    def test_triangle_footprint_covers_edges(self):
        from rastervec.models import Triangle
        from rastervec.raster.rasterize import draw_segment

        triangle = Triangle(p1=(0, 0), p2=(8, 0), p3=(4, 6))
        pixels = set(triangle.rasterize())

        for edge in triangle.edges:
            assert set(draw_segment(edge.a, edge.b)) <= pixels

    def test_scene_from_dict(self):
        from rastervec.models import Circle, Scene, Segment, Triangle

        scene = Scene.model_validate({
            "size_x": 20,
            "size_y": 10,
            "shapes": [
                {"kind": "segment", "a": [0, 0], "b": [5, 2]},
                {"kind": "circle", "center": [10, 5], "radius": 3},
                {"kind": "triangle", "p1": [0, 0], "p2": [4, 0], "p3": [2, 3], "filled": True},
            ],
        })

        assert [type(s) for s in scene.shapes] == [Segment, Circle, Triangle]
        assert scene.shapes[2].filled

    def test_scene_rejects_unknown_kind(self):
        from rastervec.models import Scene

        with pytest.raises(ValidationError):
            Scene.model_validate({"size_x": 5, "size_y": 5, "shapes": [{"kind": "ellipse"}]})

    def test_filled_footprint(self):
        from rastervec.models import Circle, footprint

        outline = set(footprint(Circle(center=(5, 5), radius=3)))
        filled = set(footprint(Circle(center=(5, 5), radius=3), filled=True))

        assert outline < filled
        assert (5, 5) in filled


class TestCanvas:
    """Tests for drawing onto a Canvas."""

    def test_out_of_bounds_pixels_dropped(self):
        from rastervec.models import Segment
        from rastervec.raster.canvas import Canvas

        canvas = Canvas(5, 5)
        drawn = canvas.draw(Segment((-3, 2), (7, 2)))

        assert drawn == 5
        assert canvas.mask[:, 2].all()
        assert int(canvas.mask.sum()) == 5

    def test_negative_size_raises(self):
        from rastervec.raster.canvas import Canvas

        with pytest.raises(ValueError):
            Canvas(-1, 4)

    def test_from_scene(self):
        from rastervec.models import Scene
        from rastervec.raster.canvas import Canvas

        scene = Scene.model_validate({
            "size_x": 10,
            "size_y": 10,
            "shapes": [{"kind": "segment", "a": [1, 1], "b": [8, 1]}],
        })
        canvas = Canvas.from_scene(scene)

        assert int(canvas.mask.sum()) == 8
        assert canvas.to_grid().foreground_count() == 8
