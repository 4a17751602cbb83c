"""Tests for JSON export, the CLI and PNG rendering."""

import json
import random

import pytest

from polycut.cli import main
from polycut.cutting import CuttingEngine
from polycut.io import load_json, puzzle_to_dict, save_json
from polycut.models import LOGICAL_CANVAS, CanvasSize
from polycut.shapes import generate_shape


@pytest.fixture
def puzzle():
    shape = generate_shape("polygon", rng=random.Random(2))
    pieces = CuttingEngine(rng=random.Random(2)).cut(shape, "diagonal", 3)
    return shape, pieces


class TestSerialization:
    def test_round_trip_json(self, puzzle, tmp_path):
        shape, pieces = puzzle
        path = tmp_path / "puzzle.json"
        save_json(shape, pieces, LOGICAL_CANVAS, path)
        doc = load_json(path)
        assert doc.canvas == LOGICAL_CANVAS
        assert doc.shape == shape
        assert doc.pieces == pieces

    def test_wire_names(self, puzzle):
        shape, pieces = puzzle
        data = puzzle_to_dict(shape, pieces, CanvasSize(800, 600))
        assert data["canvas"] == {"width": 800, "height": 600}
        assert set(data["pieces"][0]) == {
            "points", "x", "y", "rotation", "originalRotation", "isCompleted",
        }
        assert data["shape"][0]["isOriginal"] is True
        json.dumps(data)


class TestCli:
    def test_generate_then_check(self, tmp_path, capsys):
        out = tmp_path / "p.json"
        main(["generate", "--shape", "cloud", "--cuts", "4", "--seed", "3", "--out", str(out)])
        assert out.exists()
        main(["check", "--in", str(out)])
        assert capsys.readouterr().out.strip().endswith("OK")

    def test_check_fails_for_scattered(self, tmp_path):
        out = tmp_path / "s.json"
        main(["generate", "--cuts", "3", "--seed", "1", "--scatter", "--out", str(out)])
        with pytest.raises(SystemExit):
            main(["check", "--in", str(out)])

    def test_generate_rejects_bad_canvas(self, tmp_path):
        with pytest.raises(SystemExit):
            main(["generate", "--width", "0", "--out", str(tmp_path / "x.json")])

    def test_generate_rejects_negative_cuts(self, tmp_path):
        with pytest.raises(SystemExit):
            main(["generate", "--cuts", "-2", "--out", str(tmp_path / "x.json")])


class TestRender:
    def test_render_png(self, puzzle, tmp_path):
        pytest.importorskip("matplotlib")
        from polycut.render import render_png

        shape, pieces = puzzle
        out = tmp_path / "puzzle.png"
        render_png(shape, pieces, LOGICAL_CANVAS, out)
        assert out.exists()
        assert out.stat().st_size > 0

    def test_render_command(self, tmp_path):
        pytest.importorskip("matplotlib")
        data = tmp_path / "p.json"
        png = tmp_path / "p.png"
        main(["generate", "--seed", "4", "--scatter", "--out", str(data)])
        main(["render", "--in", str(data), "--out", str(png)])
        assert png.exists()
