"""Spatial intervals that receive the resolved flux spectra."""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import List

import numpy as np

logger = logging.getLogger(__name__)


@dataclass
class Interval:
    """A single spatial interval and the flux spectra assigned to it."""

    name: str
    volume: float = 1.0
    fluxes: List[np.ndarray] = field(default_factory=list)


class IntervalSet:
    """
    Ordered collection of intervals.

    Each call to :meth:`store_matrix` hands every interval its own row of the
    matrix, multiplied by the flux description's scale factor, as that
    interval's next flux spectrum.
    """

    def __init__(self, intervals: List[Interval]):
        self.intervals = list(intervals)

    @classmethod
    def uniform(cls, count: int, prefix: str = "interval") -> "IntervalSet":
        """Create ``count`` unit-volume intervals named ``prefix_<n>``."""
        return cls([Interval(name=f"{prefix}_{i}") for i in range(count)])

    def count(self) -> int:
        return len(self.intervals)

    def __len__(self) -> int:
        return len(self.intervals)

    def __iter__(self):
        return iter(self.intervals)

    def __getitem__(self, index: int) -> Interval:
        return self.intervals[index]

    def store_matrix(self, matrix: np.ndarray, scale: float) -> None:
        matrix = np.asarray(matrix, dtype=float)
        if matrix.shape[0] != len(self.intervals):
            raise ValueError(
                f"Flux matrix has {matrix.shape[0]} rows for {len(self.intervals)} intervals"
            )
        for interval, row in zip(self.intervals, matrix):
            interval.fluxes.append(scale * row)
        logger.debug(f"Stored flux in {len(self.intervals)} intervals (scale {scale:g})")

    def flux_array(self, flux_index: int) -> np.ndarray:
        """Stack one flux spectrum from every interval into a matrix."""
        return np.vstack([interval.fluxes[flux_index] for interval in self.intervals])
