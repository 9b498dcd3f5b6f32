"""Tests for configuration loading."""

import json
import tempfile
from pathlib import Path

import pytest
import yaml
from pydantic import ValidationError

from thermalprint.config import Settings, load_options, load_tree
from thermalprint.models.node import ElementType
from thermalprint.models.options import CutMode


class TestSettings:
    """Tests for environment settings."""

    def test_defaults(self):
        settings = Settings(_env_file=None)
        assert settings.paper_width == 48
        assert settings.encoding == "cp860"
        assert settings.command_adapter == "escpos"
        assert settings.cut == "full"
        assert settings.feed_before_cut == 3
        assert settings.debug is False

    def test_environment(self, monkeypatch):
        monkeypatch.setenv("THERMALPRINT_PAPER_WIDTH", "32")
        monkeypatch.setenv("THERMALPRINT_COMMAND_ADAPTER", "escbematech")
        monkeypatch.setenv("THERMALPRINT_CUT", "none")
        settings = Settings(_env_file=None)
        options = settings.to_options()
        assert options.paper_width == 32
        assert options.command_adapter == "escbematech"
        assert options.cut is None

    def test_to_options_overrides(self):
        options = Settings(_env_file=None).to_options(cut="partial", feedBeforeCut=0)
        assert options.cut == CutMode.PARTIAL
        assert options.feed_before_cut == 0

    def test_invalid_encoding(self):
        with pytest.raises(ValidationError):
            Settings(_env_file=None, encoding="klingon").to_options()


class TestLoadOptions:
    """Tests for load_options function."""

    def test_load_yaml(self):
        """Load options from YAML with camelCase keys."""
        with tempfile.TemporaryDirectory() as tmpdir:
            path = Path(tmpdir) / "options.yaml"
            with open(path, "w") as f:
                yaml.dump({"paperWidth": 42, "cut": "partial", "commandAdapter": "escbematech"}, f)

            options = load_options(path, Settings(_env_file=None))

            assert options.paper_width == 42
            assert options.cut == CutMode.PARTIAL
            assert options.command_adapter == "escbematech"
            assert options.encoding == "cp860"

    def test_load_json(self):
        with tempfile.TemporaryDirectory() as tmpdir:
            path = Path(tmpdir) / "options.json"
            path.write_text(json.dumps({"feed_before_cut": 6}))

            options = load_options(path, Settings(_env_file=None))

            assert options.feed_before_cut == 6

    def test_missing_file_uses_defaults(self):
        with tempfile.TemporaryDirectory() as tmpdir:
            options = load_options(Path(tmpdir) / "missing.yaml", Settings(_env_file=None))
            assert options.paper_width == 48
            assert options.cut == CutMode.FULL

    def test_empty_file_uses_defaults(self):
        with tempfile.TemporaryDirectory() as tmpdir:
            path = Path(tmpdir) / "options.yaml"
            path.write_text("")
            assert load_options(path, Settings(_env_file=None)).feed_before_cut == 3

    def test_cut_false_in_yaml(self):
        with tempfile.TemporaryDirectory() as tmpdir:
            path = Path(tmpdir) / "options.yaml"
            path.write_text("cut: false\n")
            assert load_options(path, Settings(_env_file=None)).cut is None

    def test_overrides_win(self):
        with tempfile.TemporaryDirectory() as tmpdir:
            path = Path(tmpdir) / "options.yaml"
            path.write_text("paper_width: 42\n")
            options = load_options(path, Settings(_env_file=None), paper_width=32)
            assert options.paper_width == 32

    def test_settings_fill_missing_keys(self, monkeypatch):
        monkeypatch.setenv("THERMALPRINT_FEED_BEFORE_CUT", "5")
        with tempfile.TemporaryDirectory() as tmpdir:
            path = Path(tmpdir) / "options.yaml"
            path.write_text("paper_width: 42\n")
            options = load_options(path, Settings(_env_file=None))
            assert options.paper_width == 42
            assert options.feed_before_cut == 5

    def test_not_a_mapping(self):
        with tempfile.TemporaryDirectory() as tmpdir:
            path = Path(tmpdir) / "options.yaml"
            path.write_text("- 1\n- 2\n")
            with pytest.raises(ValueError):
                load_options(path, Settings(_env_file=None))


class TestLoadTree:
    """Tests for load_tree function."""

    def test_load_yaml_tree(self):
        tree_yaml = {
            "type": "Document",
            "children": [{"type": "Text", "style": {"textAlign": "center"}, "props": {"children": "Hi"}}],
        }
        with tempfile.TemporaryDirectory() as tmpdir:
            path = Path(tmpdir) / "receipt.yaml"
            with open(path, "w") as f:
                yaml.dump(tree_yaml, f)

            tree = load_tree(path)

            assert tree.element_type == ElementType.DOCUMENT
            assert tree.children[0].type == "text"
            assert tree.children[0].props["children"] == "Hi"

    def test_load_json_tree(self):
        with tempfile.TemporaryDirectory() as tmpdir:
            path = Path(tmpdir) / "receipt.json"
            path.write_text(json.dumps({"type": "text", "props": {"children": "Hi"}}))
            assert load_tree(path).element_type == ElementType.TEXT

    def test_invalid_tree(self):
        with tempfile.TemporaryDirectory() as tmpdir:
            path = Path(tmpdir) / "receipt.yaml"
            path.write_text("just a string\n")
            with pytest.raises(ValueError):
                load_tree(path)
