"""Move records -- the vocabulary every optimization pass works on.

A *toolpath* is a plain ``list[Move]`` whose order is the execution order
on the physical machine.  Every move carries absolute **machine**
coordinates plus the modal state active while it executes (mode, feed,
spindle).

Records are immutable, slotted dataclasses.  Passes never edit a move in
place; they build an updated copy with :meth:`Move.moved` and store it
back into the toolpath, so a copy held by a caller is never affected by a
later pass.

Index 0 of every toolpath is the *null move*: the machine's initial
position as reported by the path generator.  Route grouping keeps it as
the head of the rebuilt toolpath.
"""

from __future__ import annotations

import enum
from dataclasses import dataclass, field, replace
from typing import Any

from pathopt.errors import EmptyToolpath

# ---------------------------------------------------------------------------
# Type aliases
# ---------------------------------------------------------------------------

Toolpath = list["Move"]
"""Ordered move sequence, index 0 is the null move."""

Position = tuple[float, float, float]


# ---------------------------------------------------------------------------
# Move modes
# ---------------------------------------------------------------------------


class MoveMode(enum.Enum):
    """Motion mode of a single move.

    ``RAPID`` and ``LINEAR`` are *straight* moves.  Arcs are opaque to
    every geometry-aware pass and are always passed through untouched.
    """

    RAPID = "rapid"
    LINEAR = "linear"
    ARC_CW = "arc_cw"
    ARC_CCW = "arc_ccw"

    @property
    def is_straight(self) -> bool:
        return self in (MoveMode.RAPID, MoveMode.LINEAR)


# ---------------------------------------------------------------------------
# Move record
# ---------------------------------------------------------------------------


@dataclass(frozen=True, slots=True)
class Move:
    """One record of the toolpath: target position plus machine state.

    Parameters
    ----------
    x, y, z : float
        Absolute target position in machine units.  Negative z is below
        the stock surface.
    mode : MoveMode
        Motion mode used to reach the target.
    feedrate : float
        Controlled feed rate.  Only meaningful for ``LINEAR`` moves.
    spindle_enabled, spindle_clockwise : bool
        Spindle state while the move executes.
    spindle_speed : float
        Spindle speed while the move executes.
    """

    x: float = 0.0
    y: float = 0.0
    z: float = 0.0
    mode: MoveMode = MoveMode.RAPID
    feedrate: float = 0.0
    spindle_enabled: bool = False
    spindle_clockwise: bool = True
    spindle_speed: float = 0.0

    @property
    def position(self) -> Position:
        return (self.x, self.y, self.z)

    @property
    def is_straight(self) -> bool:
        return self.mode.is_straight

    def moved(self, **changes: Any) -> Move:
        """Return a copy with *changes* applied (e.g. ``z=5.0``)."""
        return replace(self, **changes)


# ---------------------------------------------------------------------------
# Machine context
# ---------------------------------------------------------------------------


@dataclass
class Machine:
    """Owner of the toolpath being optimized.

    Parameters
    ----------
    moves : Toolpath
        The toolpath.  Passes replace or rebuild this list.
    tolerance : float
        Distance below which two X or Y coordinates are considered the
        same point during route grouping.
    """

    moves: Toolpath = field(default_factory=list)
    tolerance: float = 0.0001

    def __post_init__(self) -> None:
        if self.tolerance < 0:
            raise ValueError(
                f"tolerance must be non-negative, got {self.tolerance}"
            )

    def __len__(self) -> int:
        return len(self.moves)

    def first(self) -> Move:
        """Return the null move or raise ``EmptyToolpath``."""
        if not self.moves:
            raise EmptyToolpath("Toolpath is empty, no initial move")
        return self.moves[0]

    def last(self) -> Move:
        """Return the final move or raise ``EmptyToolpath``."""
        if not self.moves:
            raise EmptyToolpath("Toolpath is empty, no final move")
        return self.moves[-1]

    def max_z(self) -> float:
        """Highest z in the toolpath, never below 0.0."""
        return max(0.0, max((m.z for m in self.moves), default=0.0))
