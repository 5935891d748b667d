"""Tests for return-to-origin synthesis."""

from __future__ import annotations

import pytest

from pathopt.errors import EmptyToolpath
from pathopt.moves.records import Machine, Move, MoveMode
from pathopt.optimize.origin import return_to_origin

R = MoveMode.RAPID
L = MoveMode.LINEAR


def appended(machine: Machine, before: int) -> list[Move]:
    return machine.moves[before:]


class TestReturnToOrigin:
    def test_already_home(self) -> None:
        machine = Machine([Move(), Move(0, 0, 5, mode=R), Move(0, 0, 0, mode=R)])
        assert return_to_origin(machine) == 0
        assert len(machine) == 3

    def test_above_origin(self) -> None:
        machine = Machine([Move(), Move(0, 0, 5, mode=R)])
        assert return_to_origin(machine) == 1
        (down,) = appended(machine, 2)
        assert down.position == (0, 0, 0)
        assert down.mode is R

    def test_at_safety_height(self) -> None:
        machine = Machine([Move(), Move(0, 0, 5, mode=R), Move(10, 10, 5, mode=R)])
        assert return_to_origin(machine) == 2
        steps = appended(machine, 3)
        assert [m.position for m in steps] == [(0, 0, 5), (0, 0, 0)]
        assert all(m.mode is R for m in steps)

    def test_from_working_depth(self) -> None:
        machine = Machine([
            Move(),
            Move(0, 0, 5, mode=R),
            Move(10, 10, 5, mode=R),
            Move(10, 10, 0, mode=L, feedrate=100.0),
        ])
        assert return_to_origin(machine) == 3
        steps = appended(machine, 4)
        assert [m.position for m in steps] == [(10, 10, 5), (0, 0, 5), (0, 0, 0)]
        assert all(m.mode is R for m in steps)

    def test_carries_spindle_state(self) -> None:
        last = Move(3, 3, 5, mode=R, spindle_enabled=True, spindle_speed=9000.0)
        machine = Machine([Move(), Move(0, 0, 5, mode=R), Move(3, 0, 5), last])
        return_to_origin(machine)
        assert all(m.spindle_enabled for m in appended(machine, 4))
        assert all(m.spindle_speed == 9000.0 for m in appended(machine, 4))

    def test_empty_toolpath(self) -> None:
        with pytest.raises(EmptyToolpath):
            return_to_origin(Machine())
