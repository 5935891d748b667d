"""Redundant-segment collapse.

Path generators often emit a straight cut as several short moves in the
same direction.  The controller interpolates straight lines by itself, so
the intermediate waypoints only cost planner time.

Directions are compared with exact float equality, not the machine
tolerance used by route grouping: only moves whose unit vectors are
bit-identical are merged.
"""

from __future__ import annotations

import logging
import math

from pathopt.moves.records import Machine, Toolpath

logger = logging.getLogger(__name__)

_Vector = tuple[float, float, float]


def _unit(dx: float, dy: float, dz: float) -> _Vector:
    norm = math.sqrt(dx * dx + dy * dy + dz * dz)
    return (dx / norm, dy / norm, dz / norm)


def collapse_segments(machine: Machine) -> int:
    """Drop no-op moves and merge consecutive same-direction moves.

    For every straight move:

    - zero displacement from the previous position: dropped;
    - same unit direction as the previously kept move, and the previously
      kept record is a straight move with the same mode: that record is
      replaced by this one, extending the segment;
    - otherwise: kept, and its direction becomes the reference.

    Arc moves are kept untouched and do not reset the reference direction.
    The running position always follows the input moves.

    Returns
    -------
    int
        Number of moves removed.
    """
    out: Toolpath = []
    pos_x, pos_y, pos_z = 0.0, 0.0, 0.0
    last_vec: _Vector = (0.0, 0.0, 0.0)

    for m in machine.moves:
        dx, dy, dz = m.x - pos_x, m.y - pos_y, m.z - pos_z
        pos_x, pos_y, pos_z = m.x, m.y, m.z

        if not m.is_straight:
            out.append(m)
            continue

        if dx == 0 and dy == 0 and dz == 0:
            continue

        vec = _unit(dx, dy, dz)
        prev = out[-1] if out else None
        if (
            vec == last_vec
            and prev is not None
            and prev.is_straight
            and prev.mode is m.mode
        ):
            out[-1] = m
        else:
            out.append(m)
            last_vec = vec

    removed = len(machine.moves) - len(out)
    machine.moves = out
    logger.info("Segment collapse: %d move(s) removed", removed)
    return removed
