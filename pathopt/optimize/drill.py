"""Drill-speed memoization.

Repeated plunges at the same X/Y travel through material that an earlier
plunge already removed.  This pass remembers the deepest point reached at
every location and uses rapid moves for the already-drilled part.
"""

from __future__ import annotations

import logging

from pathopt.moves.records import Machine, MoveMode, Toolpath

logger = logging.getLogger(__name__)


def drill_speed(machine: Machine) -> int:
    """Rapid through previously drilled depth.

    A move is a *plunge* when it keeps the previous move's X and Y, lowers
    z, and is ``LINEAR``.  For a plunge at a location that has been
    drilled below z=0 before:

    - if the target is no deeper than the recorded depth, the whole move
      becomes ``RAPID``;
    - otherwise a ``RAPID`` move to the recorded depth is inserted before
      the original move, which is kept as-is to cut the new material.

    Parameters
    ----------
    machine : Machine
        Machine context; ``machine.moves`` is rebuilt.

    Returns
    -------
    int
        Number of plunges that were converted or split.
    """
    # Deepest plunge per exact (x, y).  Only depths below 0 count.
    drilled: dict[tuple[float, float], float] = {}
    out: Toolpath = []
    changed = 0
    last_x, last_y, last_z = 0.0, 0.0, 0.0

    for m in machine.moves:
        is_plunge = (
            m.x == last_x
            and m.y == last_y
            and m.z < last_z
            and m.mode is MoveMode.LINEAR
        )
        last_x, last_y, last_z = m.x, m.y, m.z

        if not is_plunge:
            out.append(m)
            continue

        key = (m.x, m.y)
        depth = drilled.get(key, 0.0)
        drilled[key] = min(depth, m.z)

        if depth >= 0.0:
            out.append(m)
        elif m.z >= depth:
            out.append(m.moved(mode=MoveMode.RAPID))
            changed += 1
        else:
            out.append(m.moved(z=depth, mode=MoveMode.RAPID))
            out.append(m)
            changed += 1

    machine.moves = out
    logger.info("Drill memoization: %d plunge(s) sped up", changed)
    return changed
