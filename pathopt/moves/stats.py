"""Travel summary of a toolpath.

Used to report what a pipeline run gained: rapid and feed travel before
and after optimization.  Arc moves are counted but their length is not
measured (arcs are opaque to this package).

Usage::

    from pathopt.moves.stats import travel_summary
    before = travel_summary(machine.moves)
    print(f"feed travel: {before.linear_length:.1f}")
"""

from __future__ import annotations

from dataclasses import dataclass

import numpy as np

from pathopt.moves.records import MoveMode, Toolpath


@dataclass(frozen=True)
class TravelSummary:
    """Aggregate travel of a toolpath.

    Attributes
    ----------
    moves : int
        Number of records, including the null move.
    rapid_length : float
        Total straight-line length of ``RAPID`` moves.
    linear_length : float
        Total straight-line length of ``LINEAR`` moves.
    arcs : int
        Number of arc moves (not measured).
    """

    moves: int
    rapid_length: float
    linear_length: float
    arcs: int

    @property
    def total_length(self) -> float:
        return self.rapid_length + self.linear_length

    def __str__(self) -> str:
        return (
            f"{self.moves} moves, rapid {self.rapid_length:.3f}, "
            f"linear {self.linear_length:.3f}, {self.arcs} arc(s)"
        )


def travel_summary(moves: Toolpath) -> TravelSummary:
    """Measure *moves*.

    Segment ``i`` runs from move ``i - 1`` to move ``i``; the null move at
    index 0 only provides the start position.
    """
    if len(moves) < 2:
        return TravelSummary(
            moves=len(moves), rapid_length=0.0, linear_length=0.0, arcs=0,
        )

    pts = np.array([m.position for m in moves], dtype=np.float64)
    lengths = np.linalg.norm(np.diff(pts, axis=0), axis=1)
    modes = np.array([m.mode.value for m in moves[1:]])

    return TravelSummary(
        moves=len(moves),
        rapid_length=float(lengths[modes == MoveMode.RAPID.value].sum()),
        linear_length=float(lengths[modes == MoveMode.LINEAR.value].sum()),
        arcs=int(np.count_nonzero(
            (modes == MoveMode.ARC_CW.value) | (modes == MoveMode.ARC_CCW.value)
        )),
    )
