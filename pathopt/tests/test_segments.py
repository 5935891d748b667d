"""Tests for redundant-segment collapse."""

from __future__ import annotations

from pathopt.moves.records import Machine, Move, MoveMode
from pathopt.optimize.segments import collapse_segments

R = MoveMode.RAPID
L = MoveMode.LINEAR


def rapid(x: float, y: float, z: float) -> Move:
    return Move(x, y, z, mode=R)


def linear(x: float, y: float, z: float, feed: float = 100.0) -> Move:
    return Move(x, y, z, mode=L, feedrate=feed)


class TestCollapseSegments:
    def test_colinear_moves_collapse(self) -> None:
        machine = Machine([
            rapid(0, 0, 5),
            linear(1, 0, 5),
            linear(2, 0, 5),
            linear(3, 0, 5),
        ])
        assert collapse_segments(machine) == 2
        assert machine.moves == [rapid(0, 0, 5), linear(3, 0, 5)]

    def test_diagonal_moves_collapse(self) -> None:
        machine = Machine([
            rapid(0, 0, 5),
            linear(1, 1, 5),
            linear(2, 2, 5),
            linear(3, 3, 5),
        ])
        collapse_segments(machine)
        assert machine.moves == [rapid(0, 0, 5), linear(3, 3, 5)]

    def test_zero_length_move_dropped(self) -> None:
        machine = Machine([rapid(0, 0, 5), linear(1, 0, 5), linear(1, 0, 5)])
        assert collapse_segments(machine) == 1
        assert machine.moves == [rapid(0, 0, 5), linear(1, 0, 5)]

    def test_null_move_at_origin_dropped(self) -> None:
        machine = Machine([Move(), rapid(0, 0, 5)])
        collapse_segments(machine)
        assert machine.moves == [rapid(0, 0, 5)]

    def test_direction_change_kept(self) -> None:
        moves = [rapid(0, 0, 5), linear(1, 0, 5), linear(1, 1, 5)]
        machine = Machine(list(moves))
        assert collapse_segments(machine) == 0
        assert machine.moves == moves

    def test_mode_change_kept(self) -> None:
        moves = [rapid(0, 0, 5), rapid(1, 0, 5), linear(2, 0, 5)]
        machine = Machine(list(moves))
        assert collapse_segments(machine) == 0
        assert machine.moves == moves

    def test_arc_passed_through(self) -> None:
        arc = Move(2, 0, 5, mode=MoveMode.ARC_CW, feedrate=100.0)
        moves = [rapid(0, 0, 5), linear(1, 0, 5), arc, linear(3, 0, 5)]
        machine = Machine(list(moves))
        assert collapse_segments(machine) == 0
        assert machine.moves[2] is arc
        assert machine.moves == moves

    def test_zero_length_arc_kept(self) -> None:
        circle = Move(1, 0, 5, mode=MoveMode.ARC_CCW, feedrate=100.0)
        moves = [rapid(0, 0, 5), linear(1, 0, 5), circle]
        machine = Machine(list(moves))
        collapse_segments(machine)
        assert machine.moves == moves
