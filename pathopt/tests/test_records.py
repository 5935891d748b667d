"""Tests for the move data model and travel summary."""

from __future__ import annotations

import dataclasses

import pytest

from pathopt.errors import EmptyToolpath
from pathopt.moves.records import Machine, Move, MoveMode
from pathopt.moves.stats import travel_summary


# ---------------------------------------------------------------------------
# Move records
# ---------------------------------------------------------------------------


class TestMove:
    def test_defaults_are_null_move(self) -> None:
        m = Move()
        assert m.position == (0.0, 0.0, 0.0)
        assert m.mode is MoveMode.RAPID
        assert m.feedrate == 0.0
        assert m.spindle_enabled is False

    def test_immutable(self) -> None:
        m = Move(1.0, 2.0, 3.0)
        with pytest.raises(dataclasses.FrozenInstanceError):
            m.x = 5.0  # type: ignore[misc]

    def test_moved_returns_copy(self) -> None:
        m = Move(1.0, 2.0, 3.0, mode=MoveMode.LINEAR, feedrate=50.0)
        up = m.moved(z=10.0, mode=MoveMode.RAPID)
        assert up.position == (1.0, 2.0, 10.0)
        assert up.feedrate == 50.0
        assert m.z == 3.0

    @pytest.mark.parametrize(
        "mode,straight",
        [
            (MoveMode.RAPID, True),
            (MoveMode.LINEAR, True),
            (MoveMode.ARC_CW, False),
            (MoveMode.ARC_CCW, False),
        ],
    )
    def test_is_straight(self, mode: MoveMode, straight: bool) -> None:
        assert Move(mode=mode).is_straight is straight


# ---------------------------------------------------------------------------
# Machine context
# ---------------------------------------------------------------------------


class TestMachine:
    def test_negative_tolerance_rejected(self) -> None:
        with pytest.raises(ValueError, match="non-negative"):
            Machine(tolerance=-0.1)

    def test_first_and_last(self) -> None:
        machine = Machine([Move(), Move(0, 0, 5)])
        assert machine.first() == Move()
        assert machine.last().z == 5

    def test_empty_fails_fast(self) -> None:
        machine = Machine()
        with pytest.raises(EmptyToolpath):
            machine.first()
        with pytest.raises(EmptyToolpath):
            machine.last()

    def test_max_z_never_negative(self) -> None:
        assert Machine([Move(0, 0, -2)]).max_z() == 0.0
        assert Machine().max_z() == 0.0
        assert Machine([Move(), Move(0, 0, 7.5)]).max_z() == 7.5


# ---------------------------------------------------------------------------
# Travel summary
# ---------------------------------------------------------------------------


class TestTravelSummary:
    def test_lengths_by_mode(self) -> None:
        moves = [
            Move(),
            Move(0, 0, 5, mode=MoveMode.RAPID),
            Move(3, 4, 5, mode=MoveMode.RAPID),
            Move(3, 4, 0, mode=MoveMode.LINEAR, feedrate=100.0),
            Move(0, 0, 0, mode=MoveMode.ARC_CW, feedrate=100.0),
        ]
        summary = travel_summary(moves)
        assert summary.moves == 5
        assert summary.rapid_length == pytest.approx(10.0)
        assert summary.linear_length == pytest.approx(5.0)
        assert summary.arcs == 1
        assert summary.total_length == pytest.approx(15.0)

    @pytest.mark.parametrize("moves", [[], [Move(1, 1, 1)]])
    def test_short_toolpath(self, moves: list[Move]) -> None:
        summary = travel_summary(moves)
        assert summary.moves == len(moves)
        assert summary.total_length == 0.0
        assert summary.arcs == 0

    def test_str(self) -> None:
        summary = travel_summary([Move(), Move(0, 0, 2)])
        assert str(summary) == "2 moves, rapid 2.000, linear 0.000, 0 arc(s)"
