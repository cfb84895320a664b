"""Tests for the unit arena and its occupancy index."""

import sys
import os

sys.path.insert(0, os.path.join(os.path.dirname(__file__), ".."))

import pytest

from gridcombat.core.enums import Faction
from gridcombat.core.errors import InternalConsistencyError
from gridcombat.core.grid import GridMap
from gridcombat.core.models import Position
from gridcombat.core.registry import UnitRegistry


def _registry() -> UnitRegistry:
    reg = UnitRegistry()
    reg.add(Faction.GOBLIN, Position(2, 2))
    reg.add(Faction.ELF, Position(0, 3))
    reg.add(Faction.ELF, Position(0, 1))
    return reg


class TestLookup:
    def test_stable_indices(self):
        reg = _registry()
        assert [u.id for u in reg] == [0, 1, 2]
        assert reg[1].pos == Position(0, 3)

    def test_at_returns_living_unit(self):
        reg = _registry()
        assert reg.at(Position(2, 2)) == 0
        assert reg.at(Position(1, 1)) is None

    def test_living_in_reading_order(self):
        reg = _registry()
        assert reg.living_in_reading_order() == [2, 1, 0]

    def test_count_alive(self):
        reg = _registry()
        assert reg.count_alive(Faction.ELF) == 2
        assert reg.count_alive(Faction.GOBLIN) == 1

    def test_defaults(self):
        reg = _registry()
        assert reg[0].hp == 200
        assert reg[0].attack == 3
        assert reg[0].alive

    def test_duplicate_square_rejected(self):
        reg = _registry()
        with pytest.raises(InternalConsistencyError):
            reg.add(Faction.GOBLIN, Position(2, 2))


class TestDamage:
    def test_damage_without_death(self):
        reg = _registry()
        assert reg.apply_damage(0, 50) is False
        assert reg[0].hp == 150
        assert reg.at(Position(2, 2)) == 0

    def test_death_frees_square(self):
        reg = _registry()
        reg[0].hp = 3
        assert reg.apply_damage(0, 3) is True
        assert reg[0].hp == 0
        assert not reg[0].alive
        assert reg.at(Position(2, 2)) is None
        assert reg.count_alive(Faction.GOBLIN) == 0
        assert reg.count_dead(Faction.GOBLIN) == 1

    def test_overkill_goes_negative(self):
        reg = _registry()
        reg[0].hp = 2
        reg.apply_damage(0, 10)
        assert reg[0].hp == -8
        assert not reg[0].alive

    def test_dead_units_stay_in_storage(self):
        reg = _registry()
        reg[0].hp = 1
        reg.apply_damage(0, 3)
        assert len(reg) == 3
        assert reg.living_in_reading_order() == [2, 1]

    def test_dead_units_excluded_from_hit_points(self):
        reg = _registry()
        reg[0].hp = 1
        reg.apply_damage(0, 3)
        assert reg.total_hit_points() == 400

    def test_attacking_dead_unit_is_a_fault(self):
        reg = _registry()
        reg[0].hp = 1
        reg.apply_damage(0, 3)
        with pytest.raises(InternalConsistencyError):
            reg.apply_damage(0, 3)


class TestMove:
    def test_move_updates_index(self):
        reg = _registry()
        reg.move(0, Position(2, 3))
        assert reg[0].pos == Position(2, 3)
        assert reg.at(Position(2, 3)) == 0
        assert reg.at(Position(2, 2)) is None

    def test_move_onto_occupied_square_is_a_fault(self):
        reg = _registry()
        with pytest.raises(InternalConsistencyError):
            reg.move(2, Position(0, 3))

    def test_moving_dead_unit_is_a_fault(self):
        reg = _registry()
        reg[0].hp = 1
        reg.apply_damage(0, 3)
        with pytest.raises(InternalConsistencyError):
            reg.move(0, Position(2, 3))

    def test_occupied_view_is_live(self):
        reg = _registry()
        occ = reg.occupied()
        assert Position(2, 2) in occ
        reg.move(0, Position(3, 2))
        assert Position(2, 2) not in occ
        assert Position(3, 2) in occ


class TestCopy:
    def test_copy_is_independent(self):
        reg = _registry()
        clone = reg.copy()
        clone.apply_damage(0, 100)
        clone.move(1, Position(1, 3))
        assert reg[0].hp == 200
        assert reg[1].pos == Position(0, 3)
        assert reg.at(Position(0, 3)) == 1

    def test_copy_preserves_dead_units(self):
        reg = _registry()
        reg[0].hp = 1
        reg.apply_damage(0, 3)
        clone = reg.copy()
        assert not clone[0].alive
        assert clone.at(Position(2, 2)) is None

    def test_attack_boost_only_touches_faction(self):
        reg = _registry()
        boosted = reg.with_attack_boost(Faction.ELF, 7)
        assert [u.attack for u in boosted] == [3, 10, 10]
        assert [u.attack for u in reg] == [3, 3, 3]


class TestVerify:
    def test_consistent_registry_passes(self):
        reg = _registry()
        reg.verify(GridMap.open_area(4, 4))

    def test_unit_on_wall_is_a_fault(self):
        reg = _registry()
        grid = GridMap.open_area(4, 4, walls=[Position(2, 2)])
        with pytest.raises(InternalConsistencyError):
            reg.verify(grid)

    def test_position_changed_behind_index_is_a_fault(self):
        reg = _registry()
        reg[0].pos = Position(3, 3)
        with pytest.raises(InternalConsistencyError):
            reg.verify(GridMap.open_area(4, 4))

    def test_dead_unit_left_in_index_is_a_fault(self):
        reg = _registry()
        reg[0].alive = False
        with pytest.raises(InternalConsistencyError):
            reg.verify(GridMap.open_area(4, 4))
