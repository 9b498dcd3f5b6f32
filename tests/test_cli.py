"""Tests for the thermalprint-render CLI."""

import json
import tempfile
from pathlib import Path

import pytest

from thermalprint.cli.render import build_parser, main

TREE = {
    "type": "text",
    "style": {"textAlign": "center", "fontSize": 20},
    "props": {"children": "Hello"},
}


@pytest.fixture(autouse=True)
def clean_environment(monkeypatch):
    """Keep THERMALPRINT_* variables from the host out of the tests."""
    for name in ("PAPER_WIDTH", "ENCODING", "COMMAND_ADAPTER", "CUT", "FEED_BEFORE_CUT", "DEBUG"):
        monkeypatch.delenv(f"THERMALPRINT_{name}", raising=False)


class TestRenderCli:
    """Tests for the render command."""

    def test_parser_defaults(self):
        args = build_parser().parse_args(["tree.json"])
        assert args.tree == Path("tree.json")
        assert args.output == Path("output.bin")
        assert args.hex is False

    def test_render_binary(self):
        with tempfile.TemporaryDirectory() as tmpdir:
            tree_path = Path(tmpdir) / "tree.json"
            tree_path.write_text(json.dumps(TREE))
            output_path = Path(tmpdir) / "out.bin"

            assert main([str(tree_path), "-o", str(output_path)]) == 0
            assert output_path.read_bytes() == b"\x1b@\x1ba\x01\x1d!\x10Hello\x1bd\x03\x1dV\x00"

    def test_render_hex_without_cut(self):
        with tempfile.TemporaryDirectory() as tmpdir:
            tree_path = Path(tmpdir) / "tree.json"
            tree_path.write_text(json.dumps(TREE))
            output_path = Path(tmpdir) / "out.txt"

            assert main([str(tree_path), "-o", str(output_path), "--hex", "--cut", "none"]) == 0
            assert output_path.read_text() == "1b 40 1b 61 01 1d 21 10 48 65 6c 6c 6f\n"

    def test_options_file_and_flags(self):
        with tempfile.TemporaryDirectory() as tmpdir:
            tree_path = Path(tmpdir) / "tree.json"
            tree_path.write_text(json.dumps(TREE))
            options_path = Path(tmpdir) / "options.yaml"
            options_path.write_text("commandAdapter: escbematech\nfeedBeforeCut: 1\n")
            output_path = Path(tmpdir) / "out.bin"

            code = main([str(tree_path), "-o", str(output_path), "--options", str(options_path), "--cut", "partial"])

            assert code == 0
            assert output_path.read_bytes().endswith(b"Hello\n\x1bm")

    def test_missing_tree(self, capsys):
        assert main(["/nonexistent/tree.json"]) == 1
        assert "Tree file not found" in capsys.readouterr().err

    def test_invalid_tree(self, capsys):
        with tempfile.TemporaryDirectory() as tmpdir:
            tree_path = Path(tmpdir) / "tree.yaml"
            tree_path.write_text("- not\n- a tree\n")
            assert main([str(tree_path), "-o", str(Path(tmpdir) / "out.bin")]) == 1
            assert "Error loading tree" in capsys.readouterr().err

    def test_image_error(self, capsys):
        with tempfile.TemporaryDirectory() as tmpdir:
            tree_path = Path(tmpdir) / "tree.json"
            tree_path.write_text(json.dumps({"type": "image", "props": {"source": "data:image/png;base64,AAAA"}}))
            assert main([str(tree_path), "-o", str(Path(tmpdir) / "out.bin")]) == 1
            assert "Error converting tree" in capsys.readouterr().err

    def test_invalid_encoding(self, capsys):
        with tempfile.TemporaryDirectory() as tmpdir:
            tree_path = Path(tmpdir) / "tree.json"
            tree_path.write_text(json.dumps(TREE))
            assert main([str(tree_path), "--encoding", "klingon"]) == 1
            assert "Error loading options" in capsys.readouterr().err
