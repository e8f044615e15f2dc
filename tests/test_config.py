"""Tests for configuration loading."""

import os

import pytest
import yaml


class TestLoadConfig:
    """Tests for load_config and save_default_config."""

    def test_defaults(self):
        from rastervec.config import load_config

        config = load_config(None)

        assert config.extraction.merge_chains
        assert config.extraction.min_chain_pixels == 2
        assert config.extraction.orientations == ["horizontal", "vertical", "diag_up", "diag_down"]
        assert config.input.threshold == 128
        assert not config.debug.enabled

    def test_missing_file_falls_back_to_defaults(self, temp_dir):
        from rastervec.config import load_config

        config = load_config(os.path.join(temp_dir, "absent.yaml"))

        assert config.svg.stroke_color == "black"

    def test_yaml_overrides(self, temp_dir):
        from rastervec.config import load_config

        path = os.path.join(temp_dir, "config.yaml")
        with open(path, "w", encoding="utf-8") as f:
            yaml.safe_dump({
                "extraction": {"merge_chains": False, "orientations": ["horizontal", "vertical"]},
                "svg": {"scale": 4.0, "unknown_key": 1},
            }, f)

        config = load_config(path)

        assert not config.extraction.merge_chains
        assert config.extraction.orientations == ["horizontal", "vertical"]
        assert config.svg.scale == 4.0
        assert not hasattr(config.svg, "unknown_key")
        assert config.input.threshold == 128

    @pytest.mark.parametrize("section, values", [
        ("extraction", {"min_chain_pixels": 1}),
        ("extraction", {"orientations": ["horizontal", "sideways"]}),
        ("input", {"threshold": 300}),
        ("debug", {"upscale": 0}),
    ])
    def test_invalid_values_raise(self, temp_dir, section, values):
        from rastervec.config import load_config

        path = os.path.join(temp_dir, "config.yaml")
        with open(path, "w", encoding="utf-8") as f:
            yaml.safe_dump({section: values}, f)

        with pytest.raises(ValueError):
            load_config(path)

    def test_saved_default_loads_back(self, temp_dir):
        from rastervec.config import PipelineConfig, load_config, save_default_config

        path = os.path.join(temp_dir, "default.yaml")
        save_default_config(path)

        with open(path, encoding="utf-8") as f:
            data = yaml.safe_load(f)

        assert set(data) == {"extraction", "input", "svg", "tracing", "debug"}
        assert load_config(path) == PipelineConfig()
