"""Energy group structure shared by the flux preprocessing steps."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import List, Sequence


@dataclass
class GroupStructure:
    """
    Number of energy groups in the problem and the number of flux
    descriptions each interval will hold.

    ``boundaries_eV`` is optional; when given it must be strictly monotonic
    (ALARA orders groups from high to low energy, so either direction is
    accepted) and fixes the group count.
    """

    num_groups: int
    boundaries_eV: List[float] = field(default_factory=list)
    num_fluxes: int = 0

    def __post_init__(self) -> None:
        if self.num_groups <= 0:
            raise ValueError("Number of groups must be positive.")
        if self.boundaries_eV:
            pairs = list(zip(self.boundaries_eV, self.boundaries_eV[1:]))
            increasing = all(b2 > b1 for b1, b2 in pairs)
            decreasing = all(b2 < b1 for b1, b2 in pairs)
            if not (increasing or decreasing):
                raise ValueError("Energy boundaries must be strictly monotonic.")
            if len(self.boundaries_eV) - 1 != self.num_groups:
                raise ValueError("Energy boundaries do not match the group count.")

    @classmethod
    def from_boundaries(cls, boundaries_eV: Sequence[float]) -> "GroupStructure":
        boundaries = [float(b) for b in boundaries_eV]
        return cls(num_groups=len(boundaries) - 1, boundaries_eV=boundaries)

    def get_num_groups(self) -> int:
        return self.num_groups

    def set_num_fluxes(self, num_fluxes: int) -> None:
        self.num_fluxes = num_fluxes
