"""Lift-speed promotion: pure upward z moves never cut, so rapid them."""

from __future__ import annotations

import logging

from pathopt.moves.records import Machine, MoveMode

logger = logging.getLogger(__name__)


def lift_speed(machine: Machine) -> int:
    """Set ``RAPID`` on every straight move that only raises z.

    Only the mode changes; feedrate and spindle state are kept.  Arc
    moves are left alone even when they end directly above their start.
    Returns the number of promoted moves.
    """
    promoted = 0
    last_x, last_y, last_z = 0.0, 0.0, 0.0
    for idx, m in enumerate(machine.moves):
        if (
            m.mode is MoveMode.LINEAR
            and m.x == last_x
            and m.y == last_y
            and m.z > last_z
        ):
            machine.moves[idx] = m.moved(mode=MoveMode.RAPID)
            promoted += 1
        last_x, last_y, last_z = m.x, m.y, m.z

    logger.info("Lift speed: %d lift(s) promoted to rapid", promoted)
    return promoted
