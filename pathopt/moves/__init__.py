"""
Toolpath data model.

Defines the move record every optimization pass reads and writes, the
machine context owning the toolpath, and a travel summary helper.

All coordinates are absolute machine coordinates.
"""

from pathopt.moves.records import Machine, Move, MoveMode, Position, Toolpath
from pathopt.moves.stats import TravelSummary, travel_summary

__all__ = [
    "Machine",
    "Move",
    "MoveMode",
    "Position",
    "Toolpath",
    "TravelSummary",
    "travel_summary",
]
