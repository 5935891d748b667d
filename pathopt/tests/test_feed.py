"""Tests for feed and spindle normalization."""

from __future__ import annotations

import pytest

from pathopt.moves.records import Machine, Move, MoveMode
from pathopt.optimize.feed import enforce_spindle, feedrate_multiplier, limit_feedrate


@pytest.fixture()
def machine() -> Machine:
    return Machine([
        Move(),
        Move(0, 0, -1, mode=MoveMode.LINEAR, feedrate=300.0),
        Move(5, 0, -1, mode=MoveMode.LINEAR, feedrate=1500.0),
        Move(5, 0, 5, mode=MoveMode.RAPID, feedrate=1500.0),
    ])


class TestLimitFeedrate:
    def test_clamps_only_above_ceiling(self, machine: Machine) -> None:
        assert limit_feedrate(machine, 1000.0) == 2
        assert [m.feedrate for m in machine.moves] == [0.0, 300.0, 1000.0, 1000.0]

    def test_idempotent(self, machine: Machine) -> None:
        limit_feedrate(machine, 1000.0)
        once = list(machine.moves)
        assert limit_feedrate(machine, 1000.0) == 0
        assert machine.moves == once


class TestFeedrateMultiplier:
    def test_scales_every_move(self, machine: Machine) -> None:
        feedrate_multiplier(machine, 1.5)
        assert [m.feedrate for m in machine.moves] == pytest.approx(
            [0.0, 450.0, 2250.0, 2250.0]
        )

    def test_positions_unchanged(self, machine: Machine) -> None:
        before = [m.position for m in machine.moves]
        feedrate_multiplier(machine, 0.5)
        assert [m.position for m in machine.moves] == before


class TestEnforceSpindle:
    def test_overwrites_every_move(self, machine: Machine) -> None:
        enforce_spindle(machine, True, False, 12000.0)
        for m in machine.moves:
            assert m.spindle_enabled is True
            assert m.spindle_clockwise is False
            assert m.spindle_speed == 12000.0

    def test_idempotent(self, machine: Machine) -> None:
        enforce_spindle(machine, True, True, 8000.0)
        once = list(machine.moves)
        enforce_spindle(machine, True, True, 8000.0)
        assert machine.moves == once
