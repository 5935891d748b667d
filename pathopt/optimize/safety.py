"""Safety-height detection and override."""

from __future__ import annotations

import logging

from pathopt.errors import SafetyHeightConflict, SafetyHeightUndetected
from pathopt.moves.records import Machine, Toolpath

logger = logging.getLogger(__name__)


def detect_heights(moves: Toolpath) -> tuple[float, float]:
    """Return ``(max_z, next_z)`` for *moves*.

    ``max_z`` is the highest z (the current safety height) and ``next_z``
    the highest distinct z below it (the lower feed height).  Both start
    at 0.0, so neither is ever negative.
    """
    max_z, next_z = 0.0, 0.0
    for m in moves:
        if m.z > max_z:
            next_z = max_z
            max_z = m.z
        if next_z < m.z < max_z:
            next_z = m.z
    return max_z, next_z


def set_safety_height(machine: Machine, height: float) -> int:
    """Move the safety height to *height*.

    Every move that keeps the previous move's X and Y and sits at the
    current safety height (the highest z in the toolpath) is moved to
    *height*.

    Parameters
    ----------
    machine : Machine
        Machine context.  Unchanged if an error is raised.
    height : float
        New safety height.

    Returns
    -------
    int
        Number of rewritten moves.

    Raises
    ------
    SafetyHeightUndetected
        If no move rises above z=0.
    SafetyHeightConflict
        If *height* does not clear the lower feed height.
    """
    max_z, next_z = detect_heights(machine.moves)
    if max_z <= 0:
        raise SafetyHeightUndetected(
            "No move rises above z=0, nothing to rewrite"
        )
    if height <= next_z:
        raise SafetyHeightConflict(height, next_z)

    rewritten = 0
    last_x, last_y = 0.0, 0.0
    for idx, m in enumerate(machine.moves):
        if m.x == last_x and m.y == last_y and m.z == max_z:
            machine.moves[idx] = m.moved(z=height)
            rewritten += 1
        last_x, last_y = m.x, m.y

    logger.info(
        "Safety height %g -> %g: %d move(s) rewritten",
        max_z,
        height,
        rewritten,
    )
    return rewritten
