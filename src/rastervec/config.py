"""
Configuration management for rastervec.

Loads YAML configuration with sensible defaults for extraction, input
loading, export, tracing and debug artifacts.
"""

import os
from dataclasses import asdict, dataclass, field

import yaml


@dataclass
class ExtractionConfig:
    """Configuration for segment extraction."""
    merge_chains: bool = True
    min_chain_pixels: int = 2
    orientations: list = field(
        default_factory=lambda: ["horizontal", "vertical", "diag_up", "diag_down"]
    )


@dataclass
class InputConfig:
    """Configuration for reading bitmaps from image files."""
    threshold: int = 128  # gray values below are foreground
    invert: bool = False


@dataclass
class SvgConfig:
    """Configuration for SVG export of extracted segments."""
    stroke_width: float = 1.0
    stroke_color: str = "black"
    scale: float = 1.0


@dataclass
class TracingConfig:
    """Configuration for runtime tracing."""
    enabled: bool = False
    level: str = "INFO"
    file_path: str = None
    json_output: bool = False


@dataclass
class DebugConfig:
    """Configuration for debug artifact generation."""
    enabled: bool = False
    upscale: int = 8
    max_edge_scale: int = 1600


@dataclass
class PipelineConfig:
    """Complete pipeline configuration."""
    extraction: ExtractionConfig = field(default_factory=ExtractionConfig)
    input: InputConfig = field(default_factory=InputConfig)
    svg: SvgConfig = field(default_factory=SvgConfig)
    tracing: TracingConfig = field(default_factory=TracingConfig)
    debug: DebugConfig = field(default_factory=DebugConfig)


SECTIONS = ("extraction", "input", "svg", "tracing", "debug")


def load_config(config_path=None):
    """
    Load configuration from YAML file.

    Falls back to defaults for any missing values.
    """
    config = PipelineConfig()

    if config_path and os.path.exists(config_path):
        with open(config_path, "r", encoding="utf-8") as f:
            yaml_data = yaml.safe_load(f) or {}

        config = _merge_config(config, yaml_data)

    validate_config(config)
    return config


def _merge_config(config, yaml_data):
    """Merge YAML data into config dataclass; unknown keys are ignored."""
    for section_name in SECTIONS:
        section_data = yaml_data.get(section_name)
        if not section_data:
            continue
        section = getattr(config, section_name)
        for key, value in section_data.items():
            if hasattr(section, key):
                setattr(section, key, value)

    return config


def validate_config(config):
    """Raise ValueError for values the extractor cannot work with."""
    from rastervec.extract.scanner import Orientation

    if config.extraction.min_chain_pixels < 2:
        raise ValueError(
            f"extraction.min_chain_pixels must be at least 2, got {config.extraction.min_chain_pixels}"
        )
    for name in config.extraction.orientations:
        Orientation.from_name(name)
    if not 0 <= config.input.threshold <= 256:
        raise ValueError(f"input.threshold must be within 0..256, got {config.input.threshold}")
    if config.debug.upscale < 1:
        raise ValueError(f"debug.upscale must be positive, got {config.debug.upscale}")


def save_default_config(path):
    """Save default configuration to YAML file for reference."""
    config = PipelineConfig()

    yaml_data = {name: asdict(getattr(config, name)) for name in SECTIONS}
    yaml_data["tracing"].pop("file_path")

    with open(path, "w", encoding="utf-8") as f:
        yaml.dump(yaml_data, f, default_flow_style=False, sort_keys=False)
