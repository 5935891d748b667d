"""Feed and spindle normalization over the whole toolpath."""

from __future__ import annotations

import logging

from pathopt.moves.records import Machine

logger = logging.getLogger(__name__)


def limit_feedrate(machine: Machine, feed: float) -> int:
    """Clamp every feedrate above *feed* down to *feed*.

    Returns the number of clamped moves.
    """
    clamped = 0
    for idx, m in enumerate(machine.moves):
        if m.feedrate > feed:
            machine.moves[idx] = m.moved(feedrate=feed)
            clamped += 1
    logger.info("Feed limit %g: %d move(s) clamped", feed, clamped)
    return clamped


def feedrate_multiplier(machine: Machine, factor: float) -> None:
    """Scale every feedrate by *factor*."""
    machine.moves = [m.moved(feedrate=m.feedrate * factor) for m in machine.moves]
    logger.info("Feedrate multiplied by %g", factor)


def enforce_spindle(
    machine: Machine, enabled: bool, clockwise: bool, speed: float,
) -> None:
    """Overwrite the spindle state of every move."""
    machine.moves = [
        m.moved(
            spindle_enabled=enabled,
            spindle_clockwise=clockwise,
            spindle_speed=speed,
        )
        for m in machine.moves
    ]
    logger.info(
        "Spindle enforced: %s %s at %g",
        "on" if enabled else "off",
        "CW" if clockwise else "CCW",
        speed,
    )
