"""Route grouping -- re-sequence drill/route operations.

Splits the toolpath into *groups*: everything from a dive below z=0 up to
(not including) the move that brings the tool back above z=0.  Groups are
then visited nearest-first starting at the origin, and the travel between
them is regenerated at safety height.

The pass is deliberately conservative.  It refuses to run when the
toolpath moves z together with x or y, when it cannot tell which height
or feedrate to use for regenerated moves, or when the toolpath ends with
the tool still down.  In each case the toolpath is left untouched.

Grouping details
----------------
The dive move is both the group's *entry* (where the regenerated travel
leads to) and its first interior move, so the original descent is kept
verbatim after the regenerated one.  Moves between two groups (the travel
after a lift) accumulate into the following group, and the first of them
becomes that group's entry.  Moves before the first dive are dropped,
except for the null move at index 0.
"""

from __future__ import annotations

import logging
import math

from pathopt.errors import (
    AmbiguousFeedrate,
    DrillFeedrateUndetected,
    EmptyToolpath,
    GeometryViolation,
    SafetyHeightUndetected,
    UnterminatedSequence,
)
from pathopt.moves.records import Machine, Move, MoveMode, Position, Toolpath

logger = logging.getLogger(__name__)

Group = list[Move]
"""A dive-to-lift unit; ``group[0]`` is the entry position."""


# ---------------------------------------------------------------------------
# Partitioning
# ---------------------------------------------------------------------------


def _partition(moves: Toolpath) -> tuple[list[Group], float, float]:
    """Split *moves* into groups and collect pass parameters.

    Returns
    -------
    tuple
        ``(groups, safety_height, drill_feedrate)``.

    Raises
    ------
    GeometryViolation, AmbiguousFeedrate, SafetyHeightUndetected,
    DrillFeedrateUndetected, UnterminatedSequence
        On any precondition failure.
    """
    groups: list[Group] = []
    current: Group = []
    safety_height = 0.0
    drill_feedrate = 0.0
    started = False
    last_x, last_y, last_z = 0.0, 0.0, 0.0

    for idx, m in enumerate(moves):
        same_xy = m.x == last_x and m.y == last_y
        if m.z != last_z and not same_xy:
            raise GeometryViolation(
                f"Complex z-motion at move {idx}: "
                f"({last_x:g}, {last_y:g}, {last_z:g}) -> "
                f"({m.x:g}, {m.y:g}, {m.z:g})"
            )

        if same_xy and last_z < 0 <= m.z:
            # Lift out of the material closes the group; the lift itself
            # is regenerated as travel to the next group.
            if started:
                groups.append(current)
            current = []
        else:
            if same_xy and last_z >= 0 > m.z:
                started = True
                current.append(m)
                if m.mode is MoveMode.LINEAR and m.feedrate > 0:
                    if drill_feedrate and m.feedrate != drill_feedrate:
                        raise AmbiguousFeedrate(
                            f"Multiple drill feedrates detected: "
                            f"{drill_feedrate:g} and {m.feedrate:g}"
                        )
                    drill_feedrate = m.feedrate
            if started:
                current.append(m)

        safety_height = max(safety_height, m.z)
        last_x, last_y, last_z = m.x, m.y, m.z

    if safety_height <= 0:
        raise SafetyHeightUndetected("Unable to detect safety height")
    if not drill_feedrate:
        raise DrillFeedrateUndetected("Unable to detect drill feedrate")

    if len(current) == 1:
        p = current[0]
        if (
            p.x != 0
            or p.y != 0
            or p.z != safety_height
            or last_z != safety_height
        ):
            raise UnterminatedSequence(
                f"Incomplete final drill set ending at "
                f"({p.x:g}, {p.y:g}, {p.z:g})"
            )
    elif current:
        raise UnterminatedSequence(
            f"Incomplete final drill set of {len(current)} moves"
        )

    return groups, safety_height, drill_feedrate


# ---------------------------------------------------------------------------
# Ordering
# ---------------------------------------------------------------------------


def order_groups(
    groups: list[Group], start: Position = (0.0, 0.0, 0.0),
) -> list[Group]:
    """Greedy nearest-neighbour ordering of *groups*.

    From *start*, repeatedly take the remaining group whose entry is
    closest (3-D Euclidean distance), then continue from that entry.
    Ties go to the group found first.
    """
    remaining = list(groups)
    ordered: list[Group] = []
    cur = start

    while remaining:
        selected = 0
        best = math.dist(cur, remaining[0][0].position)
        for idx in range(1, len(remaining)):
            d = math.dist(cur, remaining[idx][0].position)
            if d < best:
                selected, best = idx, d
        group = remaining.pop(selected)
        ordered.append(group)
        cur = group[0].position

    return ordered


# ---------------------------------------------------------------------------
# Reconstruction
# ---------------------------------------------------------------------------


class _Router:
    """Appends groups to a new toolpath, regenerating travel moves."""

    def __init__(
        self,
        head: Move,
        tolerance: float,
        safety_height: float,
        drill_feedrate: float,
    ) -> None:
        self.moves: Toolpath = [head]
        self.tolerance = tolerance
        self.safety_height = safety_height
        self.drill_feedrate = drill_feedrate

    def add_group(self, group: Group) -> None:
        self.move_to(group[0])
        self.moves.extend(group[1:])

    def move_to(self, target: Move) -> None:
        cur = self.moves[-1]

        if (
            abs(cur.x - target.x) < self.tolerance
            and abs(cur.y - target.y) < self.tolerance
        ):
            if cur.x != target.x or cur.y != target.y:
                # Close enough to skip the lift, but land exactly.
                self.moves.append(
                    cur.moved(x=target.x, y=target.y, mode=MoveMode.LINEAR)
                )
            if target.z != self.safety_height:
                self.moves.append(target)
            return

        rise = cur.moved(z=self.safety_height, mode=MoveMode.RAPID)
        travel = rise.moved(x=target.x, y=target.y)
        descend = travel.moved(
            z=target.z, mode=MoveMode.LINEAR, feedrate=self.drill_feedrate,
        )
        self.moves.extend((rise, travel, descend))


# ---------------------------------------------------------------------------
# Public API
# ---------------------------------------------------------------------------


def route_grouping(machine: Machine) -> int:
    """Re-sequence drill groups nearest-first from the origin.

    Parameters
    ----------
    machine : Machine
        Machine context.  ``machine.moves`` is replaced only on success.

    Returns
    -------
    int
        Number of groups in the re-sequenced toolpath.

    Raises
    ------
    EmptyToolpath
        If the toolpath has no null move.
    GeometryViolation
        If any move changes z together with x or y.
    AmbiguousFeedrate
        If dives use more than one positive feedrate.
    SafetyHeightUndetected
        If no move rises above z=0.
    DrillFeedrateUndetected
        If no dive carries a positive feedrate.
    UnterminatedSequence
        If the toolpath ends inside a group.
    """
    if not machine.moves:
        raise EmptyToolpath("Route grouping needs at least the initial move")

    groups, safety_height, drill_feedrate = _partition(machine.moves)
    logger.debug(
        "Route grouping: %d group(s), safety height %g, drill feed %g",
        len(groups),
        safety_height,
        drill_feedrate,
    )

    router = _Router(
        machine.first(), machine.tolerance, safety_height, drill_feedrate,
    )
    for group in order_groups(groups):
        router.add_group(group)

    machine.moves = router.moves
    logger.info("Route grouping: re-sequenced %d group(s)", len(groups))
    return len(groups)
