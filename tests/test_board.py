"""Tests for scenario parsing and board rendering."""

import sys
import os

sys.path.insert(0, os.path.join(os.path.dirname(__file__), ".."))

import pytest

from gridcombat.core.board import format_board, load_scenario, parse_scenario
from gridcombat.core.enums import Faction, Tile
from gridcombat.core.errors import InvalidTileError, MapParseError
from gridcombat.core.models import Position
from tests.helpers.scenarios import CROSS_ROOM


class TestParse:
    def test_units_and_tiles(self):
        s = parse_scenario(CROSS_ROOM)
        assert s.grid.width == 7
        assert s.grid.height == 7
        goblins = [u for u in s.units if u.faction == Faction.GOBLIN]
        elves = [u for u in s.units if u.faction == Faction.ELF]
        assert len(goblins) == 4
        assert len(elves) == 2
        assert s.units[0].pos == Position(1, 2)
        assert s.grid.tile_at(Position(1, 2)) == Tile.OPEN
        assert s.grid.tile_at(Position(0, 0)) == Tile.WALL

    def test_unit_stats_from_arguments(self):
        s = parse_scenario("#GE#", hit_points=10, attack_power=4)
        assert [(u.hp, u.attack) for u in s.units] == [(10, 4), (10, 4)]

    def test_trailing_whitespace_and_blank_lines_trimmed(self):
        s = parse_scenario("\n#.G#   \n#E.#\t\n\n")
        assert s.grid.height == 2
        assert s.grid.width == 4

    def test_invalid_tile(self):
        with pytest.raises(InvalidTileError) as exc_info:
            parse_scenario("####\n#.x#\n####")
        err = exc_info.value
        assert err.char == "x"
        assert (err.row, err.col) == (1, 2)

    def test_invalid_tile_is_a_parse_error(self):
        with pytest.raises(MapParseError):
            parse_scenario("#?#")

    def test_interior_space_is_invalid(self):
        with pytest.raises(InvalidTileError):
            parse_scenario("# .#")

    def test_empty_text_rejected(self):
        with pytest.raises(MapParseError):
            parse_scenario("  \n\n")

    def test_ragged_rows_rejected(self):
        with pytest.raises(MapParseError):
            parse_scenario("####\n##\n####")

    def test_load_from_file(self, tmp_path):
        path = tmp_path / "map.txt"
        path.write_text(CROSS_ROOM, encoding="utf-8")
        s = load_scenario(path)
        assert len(s.units) == 6

    def test_fresh_units_is_a_copy(self):
        s = parse_scenario(CROSS_ROOM)
        fresh = s.fresh_units()
        fresh.apply_damage(0, 50)
        assert s.units[0].hp == 200


class TestFormat:
    def test_initial_board_with_hit_points(self):
        s = parse_scenario(CROSS_ROOM)
        lines = format_board(s.grid, s.units).splitlines()
        assert lines[1] == "#.G...#   G(200)"
        assert lines[2] == "#...EG#   E(200), G(200)"
        assert lines[5] == "#.....#"

    def test_board_without_hit_points(self):
        s = parse_scenario(CROSS_ROOM)
        assert format_board(s.grid, s.units, show_hp=False) == CROSS_ROOM.rstrip("\n")

    def test_dead_units_not_drawn(self):
        s = parse_scenario("#GE#")
        s.units.apply_damage(0, 500)
        assert format_board(s.grid, s.units) == "#.E#   E(200)"
