"""
Mixtures: named compositions assigned to zones of the problem.

A mixture keeps its declared components in order and accumulates two running
totals: the declared volume fraction (as components are added) and the total
mass density (as elements are expanded).
"""

from __future__ import annotations

import logging
from typing import Dict, Iterable, List, Mapping, Optional, Sequence, Set, Union

from alaraprep.composition.component import Component, ComponentKind, CompositionList
from alaraprep.errors import MixtureNotFoundError, SimilarCycleError

logger = logging.getLogger(__name__)


class Mixture:
    """A named mixture and its composition list."""

    def __init__(self, name: str, components: Optional[Iterable[Component]] = None):
        self.name = name
        self.components = CompositionList()
        self.volume_fraction = 0.0
        self.total_density = 0.0
        for component in components or []:
            self.add_component(component)

    def __repr__(self) -> str:
        return f"Mixture({self.name!r}, {len(self.components)} components)"

    @classmethod
    def from_lines(cls, name: str, lines: Iterable[str]) -> "Mixture":
        """Build a mixture from body lines of a ``mixture ... end`` block."""
        mixture = cls(name)
        for line in lines:
            tokens = line.split("#", 1)[0].split()
            if tokens:
                mixture.add_component(Component.from_tokens(tokens))
        return mixture

    def add_component(self, component: Component) -> Component:
        self.components.append(component)
        self.increment_volume_fraction(component.volume_fraction)
        return component

    def increment_volume_fraction(self, fraction: float) -> None:
        self.volume_fraction += fraction

    def increment_total_density(self, density: float) -> None:
        self.total_density += density

    def has_similar(self) -> bool:
        return self.components.find_kind(ComponentKind.SIMILAR) is not None

    def replace_similar(self, index: int, other: Union["Mixture", CompositionList]) -> int:
        """
        Splice a scaled copy of another composition in place of a similar
        component.

        Every copied component has its volume fraction multiplied by the
        fraction declared on the similar component. Components after the
        similar one follow the spliced copies unchanged.

        Parameters
        ----------
        index : int
            Position of the similar component in this mixture.
        other : Mixture or CompositionList
            Composition being referenced.

        Returns
        -------
        int
            Position of the last spliced component, from which traversal or
            further insertion continues.
        """
        similar = self.components[index]
        if similar.kind is not ComponentKind.SIMILAR:
            raise ValueError(f"Component {index} of mixture {self.name} is not a similar reference")

        source = other.components if isinstance(other, Mixture) else other
        scale = similar.volume_fraction
        copies = [component.scaled(scale) for component in source]

        logger.debug(f"Replacing similar {similar.name} in mixture {self.name} "
                     f"with {len(copies)} components scaled by {scale:g}")
        return self.components.splice(index, copies)


def resolve_similar(mixtures: Union[Mapping[str, Mixture], Sequence[Mixture]]) -> None:
    """
    Replace every similar component of every mixture, in place.

    A referenced mixture is itself resolved before it is copied, so chains of
    references collapse to plain components. This has to run before
    expansion, which does not understand similar components.

    Raises
    ------
    MixtureNotFoundError
        A similar component names an undefined mixture.
    SimilarCycleError
        A mixture refers back to itself through similar components.
    """
    if isinstance(mixtures, Mapping):
        by_name: Dict[str, Mixture] = dict(mixtures)
    else:
        by_name = {m.name: m for m in mixtures}

    resolved: Set[str] = set()

    def _resolve(mixture: Mixture, visiting: List[str]) -> None:
        if mixture.name in resolved:
            return
        if mixture.name in visiting:
            cycle = " -> ".join(visiting + [mixture.name])
            raise SimilarCycleError(f"Similar mixtures refer to each other: {cycle}", mixture.name)

        visiting = visiting + [mixture.name]
        index = mixture.components.find_kind(ComponentKind.SIMILAR)
        while index is not None:
            ref_name = mixture.components[index].name
            if ref_name not in by_name:
                raise MixtureNotFoundError(
                    f"Mixture {mixture.name} is similar to undefined mixture {ref_name}.", ref_name
                )
            other = by_name[ref_name]
            _resolve(other, visiting)
            last = mixture.replace_similar(index, other)
            index = mixture.components.find_kind(ComponentKind.SIMILAR, last + 1)
        resolved.add(mixture.name)

    for mixture in by_name.values():
        _resolve(mixture, [])
