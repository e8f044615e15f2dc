"""Tests for bitmap I/O, SVG export and debug artifacts."""

import os

import cv2
import numpy as np
import pytest


class TestPpm:
    """Tests for plain-text PPM emission."""

    def test_format(self, make_mask):
        from rastervec.io.ppm import format_ppm

        text = format_ppm(make_mask(2, 2, [(0, 0)]))

        assert text.split("\n") == [
            "P3", "2 2", "255",
            "255 255 255", "255 255 255",
            "0 0 0", "255 255 255",
            "",
        ]

    def test_write_creates_directories(self, temp_dir, make_mask):
        from rastervec.io.ppm import write_ppm

        path = os.path.join(temp_dir, "nested", "out.ppm")
        write_ppm(make_mask(3, 1, [(1, 0)]), path)

        with open(path, encoding="ascii") as f:
            assert f.readline() == "P3\n"

    def test_write_to_directory_fails(self, temp_dir, make_mask):
        from rastervec.io.ppm import write_ppm

        with pytest.raises(OSError):
            write_ppm(make_mask(1, 1, []), temp_dir)

    def test_mask_to_rgb_top_row_first(self, make_mask):
        from rastervec.io.ppm import mask_to_rgb

        rgb = mask_to_rgb(make_mask(3, 2, [(2, 1)]))

        assert rgb.shape == (2, 3, 3)
        assert rgb[0, 2].tolist() == [0, 0, 0]
        assert rgb[1, 2].tolist() == [255, 255, 255]


class TestLoadMask:
    """Tests for reading image files into masks."""

    def test_png_round_trip(self, temp_dir, triangle_mask):
        from rastervec.io.load_image import load_mask
        from rastervec.io.ppm import mask_to_rgb
        from rastervec.io.save_artifacts import save_image

        path = os.path.join(temp_dir, "mask.png")
        save_image(mask_to_rgb(triangle_mask), path)

        assert np.array_equal(load_mask(path), triangle_mask)

    def test_invert(self, temp_dir):
        from rastervec.io.load_image import load_mask

        path = os.path.join(temp_dir, "white_on_black.png")
        gray = np.zeros((4, 6), dtype=np.uint8)
        gray[0, 5] = 255
        cv2.imwrite(path, gray)

        mask = load_mask(path, invert=True)

        assert mask.shape == (6, 4)
        assert mask[5, 3]
        assert int(mask.sum()) == 1

    def test_missing_file(self, temp_dir):
        from rastervec.io.load_image import load_mask

        with pytest.raises(FileNotFoundError):
            load_mask(os.path.join(temp_dir, "missing.png"))

    def test_undecodable_file(self, temp_dir):
        from rastervec.io.load_image import load_mask

        path = os.path.join(temp_dir, "broken.png")
        with open(path, "wb") as f:
            f.write(b"not an image")

        with pytest.raises(ValueError):
            load_mask(path)

    def test_validate_inputs(self, temp_dir, synthetic_input_file):
        from rastervec.io.load_image import validate_image_inputs

        notes = os.path.join(temp_dir, "notes.txt")
        with open(notes, "w", encoding="utf-8") as f:
            f.write("x")

        errors = validate_image_inputs([synthetic_input_file, notes, os.path.join(temp_dir, "nope.png")])

        assert len(errors) == 2
        assert "Unsupported" in errors[0]
        assert "not found" in errors[1]


class TestSvgEmit:
    """Tests for SVG export."""

    def test_lines_flipped_to_svg_rows(self):
        from rastervec.export.svg_emit import emit_segments_svg
        from rastervec.models import Segment

        dwg = emit_segments_svg([Segment((0, 0), (3, 0))], size_x=4, size_y=2)
        svg = dwg.tostring()

        assert svg.count("<line") == 1
        assert 'y1="1.5"' in svg
        assert 'x2="3.5"' in svg

    def test_save(self, temp_dir, default_config):
        from rastervec.export.svg_emit import save_segments_svg
        from rastervec.models import Segment

        path = os.path.join(temp_dir, "segments.svg")
        save_segments_svg([Segment((0, 0), (1, 1)), Segment((2, 0), (2, 3))], 4, 4, path, default_config)

        with open(path, encoding="utf-8") as f:
            assert f.read().count("<line") == 2


class TestDebugArtifacts:
    """Tests for DebugArtifactWriter."""

    def test_disabled_writes_nothing(self, temp_dir):
        from rastervec.io.save_artifacts import DebugArtifactWriter

        writer = DebugArtifactWriter(temp_dir, enabled=False)
        writer.save_json({"a": 1}, "extract", "metrics.json")

        assert not os.path.exists(os.path.join(temp_dir, "debug"))

    def test_overlay_is_upscaled(self, temp_dir, shallow_line_mask):
        from rastervec.io.ppm import mask_to_rgb
        from rastervec.io.save_artifacts import DebugArtifactWriter
        from rastervec.models import Segment

        writer = DebugArtifactWriter(temp_dir, factor=4)
        writer.save_overlay(
            mask_to_rgb(shallow_line_mask), [Segment((0, 0), (10, 4))], 5, "extract", "overlay.png"
        )

        img = cv2.imread(os.path.join(temp_dir, "debug", "extract", "overlay.png"))
        assert img.shape == (20, 44, 3)
