"""Return-to-origin synthesis."""

from __future__ import annotations

import logging

from pathopt.moves.records import Machine, MoveMode

logger = logging.getLogger(__name__)


def return_to_origin(machine: Machine) -> int:
    """Append the rapid moves needed to end at (0, 0, 0).

    The tool travels over to the origin at the toolpath's highest z, so
    it never crosses the stock at working depth:

    - already at (0, 0, 0): nothing appended;
    - above or below the origin: straight down/up to it;
    - at the highest z: over to the origin, then down;
    - anywhere else: up to the highest z, over, then down.

    New moves copy the last move's feed and spindle state.

    Returns
    -------
    int
        Number of appended moves.

    Raises
    ------
    EmptyToolpath
        If the toolpath is empty.
    """
    last = machine.last()
    max_z = machine.max_z()

    if last.x == 0 and last.y == 0:
        if last.z == 0:
            return 0
        steps = [last.moved(z=0.0, mode=MoveMode.RAPID)]
    elif last.z == max_z:
        over = last.moved(x=0.0, y=0.0, mode=MoveMode.RAPID)
        steps = [over, over.moved(z=0.0)]
    else:
        rise = last.moved(z=max_z, mode=MoveMode.RAPID)
        over = rise.moved(x=0.0, y=0.0)
        steps = [rise, over, over.moved(z=0.0)]

    machine.moves.extend(steps)
    logger.info("Return to origin: %d move(s) appended", len(steps))
    return len(steps)
