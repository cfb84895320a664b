"""Tests for the ``python -m gridcombat`` command line."""

import sys
import os

sys.path.insert(0, os.path.join(os.path.dirname(__file__), ".."))

import pytest

from tests.helpers.scenarios import CROSS_ROOM
from gridcombat.__main__ import _build_parser, main


@pytest.fixture
def map_file(tmp_path):
    path = tmp_path / "map.txt"
    path.write_text(CROSS_ROOM, encoding="utf-8")
    return path


def _run(monkeypatch, capsys, *argv) -> list[str]:
    monkeypatch.setattr(sys, "argv", ["gridcombat", *argv])
    main()
    return capsys.readouterr().out.splitlines()


class TestCommands:
    def test_simulate_prints_outcome(self, monkeypatch, capsys, map_file):
        out = _run(monkeypatch, capsys, "simulate", str(map_file))
        assert out[-1] == "27730"

    def test_simulate_show_board(self, monkeypatch, capsys, map_file):
        out = _run(monkeypatch, capsys, "simulate", str(map_file), "--show-board")
        assert out[1] == "#G....#   G(200)"
        assert out[-1] == "27730"

    def test_simulate_writes_replay(self, monkeypatch, capsys, map_file, tmp_path):
        replay = tmp_path / "replay.json"
        _run(monkeypatch, capsys, "simulate", str(map_file), "--replay", str(replay))
        assert replay.exists()

    def test_boost_prints_outcome(self, monkeypatch, capsys, map_file):
        out = _run(monkeypatch, capsys, "boost", str(map_file), "--strategy", "binary")
        assert out[-1] == "4988"


class TestParser:
    def test_serve_defaults(self):
        args = _build_parser().parse_args(["serve"])
        assert args.host == "127.0.0.1"
        assert args.port == 8000

    def test_boost_options(self):
        args = _build_parser().parse_args(["boost", "map.txt", "--workers", "4"])
        assert args.workers == 4
        assert args.strategy == "linear"

    def test_error_log_level_accepted(self):
        args = _build_parser().parse_args(["simulate", "map.txt", "--log-level", "ERROR"])
        assert args.log_level == "ERROR"
