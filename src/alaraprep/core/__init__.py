"""Solver-side containers filled by the preprocessing steps."""

from alaraprep.core.groups import GroupStructure
from alaraprep.core.intervals import Interval, IntervalSet
from alaraprep.core.roots import Contribution, Root, RootList

__all__ = [
    "GroupStructure",
    "Interval",
    "IntervalSet",
    "Contribution",
    "Root",
    "RootList",
]
