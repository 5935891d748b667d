"""
Optimization passes.

Each pass is a function taking the ``Machine`` context (plus scalar
parameters) and rewriting ``machine.moves``.  Passes can run in any
order; ``pipeline.run_pipeline`` runs a configured sequence.
"""

from pathopt.optimize.drill import drill_speed
from pathopt.optimize.feed import enforce_spindle, feedrate_multiplier, limit_feedrate
from pathopt.optimize.lift import lift_speed
from pathopt.optimize.origin import return_to_origin
from pathopt.optimize.pipeline import PASSES, PipelineReport, optimize, run_pipeline
from pathopt.optimize.routing import order_groups, route_grouping
from pathopt.optimize.safety import detect_heights, set_safety_height
from pathopt.optimize.segments import collapse_segments

__all__ = [
    "PASSES",
    "PipelineReport",
    "collapse_segments",
    "detect_heights",
    "drill_speed",
    "enforce_spindle",
    "feedrate_multiplier",
    "lift_speed",
    "limit_feedrate",
    "optimize",
    "order_groups",
    "return_to_origin",
    "route_grouping",
    "run_pipeline",
    "set_safety_height",
]
