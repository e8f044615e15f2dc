"""
Pipeline orchestration for rastervec.

run_draw renders a scene file to a bitmap; run_extract turns a bitmap back
into segments and writes the outputs plus the validation report.
"""

import json
import os

import yaml

from rastervec.config import load_config
from rastervec.export.svg_emit import save_segments_svg
from rastervec.extract.engine import run_extraction
from rastervec.io.load_image import load_mask, validate_image_inputs
from rastervec.io.ppm import mask_to_rgb, write_ppm
from rastervec.io.save_artifacts import (
    DebugArtifactWriter, ensure_dir, save_image, save_json, upscale,
)
from rastervec.models import Scene
from rastervec.raster.canvas import Canvas
from rastervec.tracer import configure_tracer, get_tracer, trace
from rastervec.validate.report import generate_report
from rastervec.validate.rules import run_validation


def load_scene(scene_path):
    """
    Load a Scene from a JSON or YAML file.

    Raises FileNotFoundError if the file is missing and pydantic's
    ValidationError if the content does not describe a scene.
    """
    if not os.path.exists(scene_path):
        raise FileNotFoundError(f"Scene not found: {scene_path}")

    with open(scene_path, "r", encoding="utf-8") as f:
        if scene_path.lower().endswith((".yaml", ".yml")):
            data = yaml.safe_load(f) or {}
        else:
            data = json.load(f)

    return Scene.model_validate(data)


@trace(label="run_draw")
def run_draw(scene_path, out_path):
    """
    Draw a scene file onto a canvas and write it out.

    .ppm paths get the plain-text P3 format; anything else is written
    through OpenCV. Returns the Canvas.
    """
    tracer = get_tracer()

    scene = load_scene(scene_path)
    canvas = Canvas.from_scene(scene)

    if out_path.lower().endswith(".ppm"):
        write_ppm(canvas.mask, out_path)
    else:
        save_image(mask_to_rgb(canvas.mask), out_path)

    tracer.event(f"Scene drawn: {len(scene.shapes)} shapes, {int(canvas.mask.sum())} pixels")

    return canvas


@trace(label="run_extract")
def run_extract(input_path, out_dir, config=None, config_path=None, debug=False):
    """
    Extract segments from one bitmap file.

    Args:
        input_path: image file to read
        out_dir: output directory
        config: PipelineConfig object (optional)
        config_path: path to YAML config file (optional)
        debug: enable debug artifact generation

    Returns:
        (ExtractionReport, ValidationReport)
    """
    tracer = get_tracer()

    if config is None:
        config = load_config(config_path)

    if config.tracing.enabled and not tracer.config.enabled:
        configure_tracer(
            enabled=True,
            level=config.tracing.level,
            file_path=config.tracing.file_path,
            json_output=config.tracing.json_output,
        )

    config.debug.enabled = config.debug.enabled or debug

    errors = validate_image_inputs([input_path])
    if errors:
        for error in errors:
            tracer.event(error, level="ERROR")
        raise ValueError(f"Input validation failed: {errors}")

    ensure_dir(out_dir)

    debug_writer = DebugArtifactWriter(
        out_dir,
        enabled=config.debug.enabled,
        factor=config.debug.upscale,
        max_edge=config.debug.max_edge_scale,
    ) if config.debug.enabled else None

    with tracer.span("load", module="pipeline"):
        mask = load_mask(input_path, config.input.threshold, config.input.invert)

    if debug_writer:
        preview = mask_to_rgb(mask)
        debug_writer.save_image(
            upscale(preview, debug_writer.factor), "load", "01_input_mask.png"
        )

    with tracer.span("extract", module="pipeline"):
        report = run_extraction(mask, config.extraction)

    save_json(report, os.path.join(out_dir, "extraction_report.json"))
    save_json(
        [[list(s.a), list(s.b)] for s in report.segments],
        os.path.join(out_dir, "segments.json"),
    )
    save_segments_svg(
        report.segments, report.size_x, report.size_y,
        os.path.join(out_dir, "segments.svg"), config,
    )

    if debug_writer:
        debug_writer.save_overlay(
            mask_to_rgb(mask), report.segments, report.size_y, "extract", "02_segments_overlay.png"
        )
        debug_writer.save_json({
            "foreground_pixels": report.foreground_pixels,
            "base_chain_counts": report.base_chain_counts,
            "merged_chain_count": report.merged_chain_count,
            "pool_size": report.pool_size,
            "segments": report.segment_count,
            "orphan_pixels": len(report.orphan_pixels),
        }, "extract", "extract_metrics.json")

    with tracer.span("validate", module="pipeline"):
        validation = run_validation(mask, report)
        generate_report(validation, out_dir, debug_writer)

    tracer.event(
        f"Extraction written to {out_dir}: {report.segment_count} segments, "
        f"{validation.error_count} errors, {validation.warning_count} warnings"
    )

    return report, validation
