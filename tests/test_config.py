"""Tests for config loading and validation."""

from pathlib import Path

import pytest

from applypilot.config import (
    CONFIG_ENV_VAR,
    AppConfig,
    LayoutConfig,
    OutputConfig,
    PageConfig,
    load_config,
)


class TestConfig:
    def test_defaults(self):
        config = AppConfig()
        assert config.layout.font_size == 11
        assert config.layout.spacing == "half"
        assert config.page.margin == 72
        assert config.page.format == "letter"
        assert config.flow.font_name == "Calibri"
        assert config.output.fallback_stem == "cover-letter"

    def test_load_config_defaults(self, tmp_path):
        """Loading from non-existent path returns defaults."""
        config = load_config(tmp_path / "nonexistent.yaml")
        assert config == AppConfig()

    def test_load_config_from_yaml(self, tmp_path):
        yaml_path = tmp_path / "config.yaml"
        yaml_path.write_text("layout:\n  spacing: full\npage:\n  format: a4\n  margin: 54\n")
        config = load_config(yaml_path)
        assert config.layout.spacing == "full"
        assert config.page.format == "a4"
        assert config.page.margin == 54
        # Defaults for unspecified
        assert config.layout.font_size == 11
        assert config.output.max_field_length == 60

    def test_empty_yaml(self, tmp_path):
        yaml_path = tmp_path / "config.yaml"
        yaml_path.write_text("")
        assert load_config(yaml_path) == AppConfig()

    def test_env_var(self, tmp_path, monkeypatch):
        yaml_path = tmp_path / "custom.yaml"
        yaml_path.write_text("flow:\n  font_name: Arial\n")
        monkeypatch.setenv(CONFIG_ENV_VAR, str(yaml_path))
        assert load_config().flow.font_name == "Arial"

    def test_cwd_config(self, tmp_path, monkeypatch):
        (tmp_path / "config.yaml").write_text("output:\n  fallback_stem: letter\n")
        monkeypatch.delenv(CONFIG_ENV_VAR, raising=False)
        monkeypatch.chdir(tmp_path)
        assert load_config().output.fallback_stem == "letter"

    def test_example_config_matches_defaults(self):
        example = Path(__file__).resolve().parent.parent / "config.example.yaml"
        assert load_config(example) == AppConfig()

    def test_closing_phrases_normalized(self, tmp_path):
        yaml_path = tmp_path / "config.yaml"
        yaml_path.write_text("layout:\n  closing_phrases:\n    - '  Cheers '\n    - ''\n    - Thanks\n")
        config = load_config(yaml_path)
        assert config.layout.closing_phrases == ("cheers", "thanks")

    def test_font_paths_become_tuple(self):
        assert PageConfig(unicode_font_paths=["/a.ttf"]).unicode_font_paths == ("/a.ttf",)

    def test_unknown_key_rejected(self, tmp_path):
        yaml_path = tmp_path / "config.yaml"
        yaml_path.write_text("layout:\n  colour: red\n")
        with pytest.raises(TypeError):
            load_config(yaml_path)

    def test_frozen_config(self):
        config = LayoutConfig()
        with pytest.raises(AttributeError):
            config.font_size = 12


class TestConfigValidation:
    @pytest.mark.parametrize(
        "section, body, field",
        [
            ("layout", "font_size: 2", "font_size"),
            ("layout", "line_height_factor: 0.5", "line_height_factor"),
            ("layout", "spacing: double", "spacing"),
            ("layout", "bullet_indent: -1", "bullet_indent"),
            ("layout", "bullet_text_indent: 10", "bullet_text_indent"),
            ("page", "format: legal", "format"),
            ("page", "margin: 500", "margin"),
            ("output", "max_field_length: 0", "max_field_length"),
            ("output", "fallback_stem: '  '", "fallback_stem"),
        ],
    )
    def test_invalid_value(self, tmp_path, section, body, field):
        yaml_path = tmp_path / "bad.yaml"
        yaml_path.write_text(f"{section}:\n  {body}\n")
        with pytest.raises(ValueError, match=field):
            load_config(yaml_path)

    def test_direct_construction_validates(self):
        with pytest.raises(ValueError, match="max_field_length"):
            OutputConfig(max_field_length=500)
