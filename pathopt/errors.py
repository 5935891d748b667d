"""Errors raised by optimization passes.

Fallible passes check every precondition before touching the toolpath,
so catching any of these means the toolpath is exactly as it was before
the pass was called.
"""

from __future__ import annotations


class OptimizationError(Exception):
    """Base class for all pass failures."""

    pass


class EmptyToolpath(OptimizationError):
    """Raised when a pass needs a first or last move and there is none."""

    pass


class GeometryViolation(OptimizationError):
    """A move changes z together with x or y ("complex z-motion")."""

    pass


class AmbiguousFeedrate(OptimizationError):
    """More than one distinct drill feedrate was found."""

    pass


class DrillFeedrateUndetected(OptimizationError):
    """No downward linear move carries a positive feedrate."""

    pass


class SafetyHeightUndetected(OptimizationError):
    """No move ever rises above z=0, so there is no traverse height."""

    pass


class UnterminatedSequence(OptimizationError):
    """The toolpath ends in the middle of a drill group."""

    pass


class SafetyHeightConflict(OptimizationError):
    """Requested safety height does not clear the lower feed height.

    Parameters
    ----------
    height : float
        The requested safety height.
    conflicting_height : float
        The highest z below the current safety height.
    """

    def __init__(self, height: float, conflicting_height: float) -> None:
        self.height = height
        self.conflicting_height = conflicting_height
        super().__init__(
            f"New safety height {height:g} collides with lower feed "
            f"height of {conflicting_height:g}"
        )
