"""
Flat isotope list handed to the activation solver.

Each :class:`Root` is one isotope label together with every contribution
made to it: which mixture and which declared component produced how much
number density. Merging two lists never drops a contribution; roots with the
same label are combined by pooling their contributions.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Dict, Iterable, Iterator, List, Optional

if TYPE_CHECKING:
    from alaraprep.composition.component import Component
    from alaraprep.composition.mixture import Mixture


@dataclass(frozen=True)
class Contribution:
    """Number density a single component adds to an isotope [atoms/cm3]."""

    density: float
    mixture: Optional["Mixture"] = field(default=None, compare=False)
    component: Optional["Component"] = field(default=None, compare=False)


@dataclass
class Root:
    """An isotope at the root of a transmutation chain."""

    label: str
    contributions: List[Contribution] = field(default_factory=list)

    @classmethod
    def single(cls, label: str, density: float, mixture=None, component=None) -> "Root":
        return cls(label, [Contribution(density, mixture, component)])

    @property
    def density(self) -> float:
        """Total number density over all contributions."""
        return sum(c.density for c in self.contributions)


class RootList:
    """Collection of :class:`Root` objects keyed by label, in first-seen order."""

    def __init__(self, roots: Optional[List[Root]] = None):
        self._roots: Dict[str, Root] = {}
        self.extend(roots or [])

    def _add(self, root: Root) -> None:
        existing = self._roots.get(root.label)
        if existing is None:
            self._roots[root.label] = Root(root.label, list(root.contributions))
        else:
            existing.contributions.extend(root.contributions)

    def extend(self, roots: Iterable[Root]) -> "RootList":
        """Add the contributions of ``roots`` to this list in place."""
        for root in roots:
            self._add(root)
        return self

    def merge(self, other: "RootList") -> "RootList":
        """Return a new list holding the contributions of both lists."""
        return RootList(list(self._roots.values())).extend(other)

    def __iter__(self) -> Iterator[Root]:
        return iter(self._roots.values())

    def __len__(self) -> int:
        return len(self._roots)

    def __contains__(self, label: str) -> bool:
        return label in self._roots

    def __getitem__(self, label: str) -> Root:
        return self._roots[label]

    @property
    def labels(self) -> List[str]:
        return list(self._roots)

    def total_density(self, label: str) -> float:
        root = self._roots.get(label)
        return root.density if root is not None else 0.0

    def num_contributions(self) -> int:
        return sum(len(r.contributions) for r in self._roots.values())

    def to_dict(self) -> Dict[str, float]:
        """Total number density by isotope label."""
        return {label: root.density for label, root in self._roots.items()}
