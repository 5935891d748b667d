"""Pipeline driver -- run optimization passes in a configured order.

Passes never depend on each other's internal state, so a pipeline is just
an ordered list of ``PassStep`` objects (usually loaded from YAML, see
``pathopt.configs.loader``).  Each step names a registered pass and
carries its parameters.

Failure policy:
    Only route grouping and safety-height override can fail, and both
    leave the toolpath untouched when they do.  A failing step marked
    ``required`` stops the pipeline by re-raising; any other failing step
    is logged, recorded in the report, and skipped.

Usage::

    from pathopt.configs import load_config
    from pathopt.optimize.pipeline import optimize

    report = optimize(machine, load_config())
    print(report.after)
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Any, Callable, Iterable

from pathopt.errors import OptimizationError
from pathopt.moves.records import Machine
from pathopt.moves.stats import TravelSummary, travel_summary
from pathopt.optimize.drill import drill_speed
from pathopt.optimize.feed import enforce_spindle, feedrate_multiplier, limit_feedrate
from pathopt.optimize.lift import lift_speed
from pathopt.optimize.origin import return_to_origin
from pathopt.optimize.routing import route_grouping
from pathopt.optimize.safety import set_safety_height
from pathopt.optimize.segments import collapse_segments
from pathopt.utils.logging_config import log_context

if TYPE_CHECKING:
    from pathopt.configs.loader import OptimizerConfig, PassStep

logger = logging.getLogger(__name__)


# ---------------------------------------------------------------------------
# Registry
# ---------------------------------------------------------------------------


@dataclass(frozen=True)
class PassSpec:
    """A registered pass: callable plus its keyword parameters and types."""

    func: Callable[..., Any]
    params: dict[str, type] = field(default_factory=dict)


PASSES: dict[str, PassSpec] = {
    "drill_speed": PassSpec(drill_speed),
    "route_grouping": PassSpec(route_grouping),
    "lift_speed": PassSpec(lift_speed),
    "collapse_segments": PassSpec(collapse_segments),
    "limit_feedrate": PassSpec(limit_feedrate, {"feed": float}),
    "feedrate_multiplier": PassSpec(feedrate_multiplier, {"factor": float}),
    "enforce_spindle": PassSpec(
        enforce_spindle,
        {"enabled": bool, "clockwise": bool, "speed": float},
    ),
    "set_safety_height": PassSpec(set_safety_height, {"height": float}),
    "return_to_origin": PassSpec(return_to_origin),
}


# ---------------------------------------------------------------------------
# Report
# ---------------------------------------------------------------------------


@dataclass
class PipelineReport:
    """Outcome of a pipeline run.

    Attributes
    ----------
    applied : list[str]
        Names of passes that completed, in order.
    skipped : dict[str, str]
        Failed optional passes mapped to their error message.
    before, after : TravelSummary
        Travel summary of the toolpath before and after the run.
    """

    applied: list[str]
    skipped: dict[str, str]
    before: TravelSummary
    after: TravelSummary


# ---------------------------------------------------------------------------
# Driver
# ---------------------------------------------------------------------------


def run_pipeline(machine: Machine, steps: Iterable[PassStep]) -> PipelineReport:
    """Run *steps* on *machine* in order.

    Parameters
    ----------
    machine : Machine
        Machine context, rewritten by each pass.
    steps : Iterable[PassStep]
        Validated pass steps.

    Returns
    -------
    PipelineReport
        Applied and skipped passes plus before/after travel.

    Raises
    ------
    KeyError
        If a step names an unregistered pass.
    OptimizationError
        If a ``required`` step fails.
    """
    before = travel_summary(machine.moves)
    logger.info("Pipeline start: %s", before)

    applied: list[str] = []
    skipped: dict[str, str] = {}

    for step in steps:
        spec = PASSES[step.name]
        with log_context(step=step.name):
            try:
                spec.func(machine, **step.params)
            except OptimizationError as exc:
                if step.required:
                    logger.error("Required pass failed: %s", exc)
                    raise
                logger.warning("Pass skipped: %s", exc)
                skipped[step.name] = str(exc)
                continue
        applied.append(step.name)

    after = travel_summary(machine.moves)
    logger.info("Pipeline done: %s", after)
    return PipelineReport(
        applied=applied, skipped=skipped, before=before, after=after,
    )


def optimize(machine: Machine, config: OptimizerConfig) -> PipelineReport:
    """Apply *config*'s tolerance to *machine* and run its steps."""
    machine.tolerance = config.tolerance_mm
    return run_pipeline(machine, config.steps)
