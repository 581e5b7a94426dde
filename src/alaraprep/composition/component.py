"""
Mixture components and the ordered list that holds them.

A component is one line of a mixture definition: a material, an element, an
isotope, a reference to another mixture (``like``/``similar``), or a target
element/isotope for reverse calculations.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field, replace
from enum import Enum
from typing import Iterable, Iterator, List, Optional, Sequence

from alaraprep.composition.density import AbsoluteDensity, Density, density_from_signed

logger = logging.getLogger(__name__)


class ComponentKind(Enum):
    """Kinds of mixture component."""

    MATERIAL = "material"
    ELEMENT = "element"
    ISOTOPE = "isotope"
    SIMILAR = "similar"
    TARGET_ELEMENT = "target_element"
    TARGET_ISOTOPE = "target_isotope"


# Keywords accepted at the start of a mixture body line
_KEYWORDS = {
    "material": ComponentKind.MATERIAL,
    "element": ComponentKind.ELEMENT,
    "isotope": ComponentKind.ISOTOPE,
    "like": ComponentKind.SIMILAR,
    "similar": ComponentKind.SIMILAR,
}

_TARGET_KEYWORDS = {
    "element": ComponentKind.TARGET_ELEMENT,
    "isotope": ComponentKind.TARGET_ISOTOPE,
}


@dataclass
class Component:
    """
    One declared constituent of a mixture.

    Attributes
    ----------
    kind : ComponentKind
        What the name refers to.
    name : str
        Library key, material name, isotope label or referenced mixture.
        Element and isotope names may carry a qualifier before a colon
        (``"region:fe"``); only the part after the colon names isotopes.
    density : Density
        Declared density, see :mod:`alaraprep.composition.density`.
    volume_fraction : float
        Fraction of the mixture volume occupied by this component.
    """

    kind: ComponentKind
    name: str
    density: Density = field(default_factory=lambda: AbsoluteDensity(0.0))
    volume_fraction: float = 1.0

    @classmethod
    def from_tokens(cls, tokens: Sequence[str]) -> "Component":
        """
        Build a component from the whitespace-split tokens of a mixture line.

        Examples
        --------
        >>> Component.from_tokens(["element", "fe", "-1.0", "0.5"]).kind
        <ComponentKind.ELEMENT: 'element'>
        >>> Component.from_tokens(["like", "steel", "0.25"]).volume_fraction
        0.25
        """
        tokens = list(tokens)
        if not tokens:
            raise ValueError("Empty mixture component line")

        keyword = tokens.pop(0).lower()
        if keyword == "target":
            if not tokens or tokens[0].lower() not in _TARGET_KEYWORDS:
                raise ValueError(f"Invalid target component: {' '.join(tokens)}")
            kind = _TARGET_KEYWORDS[tokens.pop(0).lower()]
        elif keyword in _KEYWORDS:
            kind = _KEYWORDS[keyword]
        else:
            raise ValueError(f"Unknown mixture component type: {keyword}")

        if kind is ComponentKind.SIMILAR:
            if len(tokens) != 2:
                raise ValueError(f"Expected '<mixture> <fraction>' after {keyword}")
            name, fraction = tokens[0], float(tokens[1])
            component = cls(kind, name, AbsoluteDensity(0.0), fraction)
        else:
            if len(tokens) != 3:
                raise ValueError(f"Expected '<name> <density> <fraction>' after {keyword}")
            name = tokens[0]
            component = cls(kind, name, density_from_signed(float(tokens[1])), float(tokens[2]))

        logger.debug(f"type: {component.kind.value} name: {component.name}, "
                     f"density {component.density}, volume fraction: {component.volume_fraction:g}")
        return component

    @property
    def isotope_prefix(self) -> str:
        """Name with any ``qualifier:`` prefix removed."""
        _, sep, tail = self.name.partition(":")
        return tail if sep else self.name

    def copy(self) -> "Component":
        return replace(self)

    def scaled(self, factor: float) -> "Component":
        """Copy with the volume fraction multiplied by ``factor``."""
        return replace(self, volume_fraction=self.volume_fraction * factor)


class CompositionList:
    """
    Ordered sequence of components belonging to one mixture.

    Components are addressed by position; splicing replaces one position
    with a run of components and reports where that run ends.
    """

    def __init__(self, components: Optional[Iterable[Component]] = None):
        self._components: List[Component] = list(components or [])

    def append(self, component: Component) -> Component:
        self._components.append(component)
        return component

    def __iter__(self) -> Iterator[Component]:
        return iter(self._components)

    def __len__(self) -> int:
        return len(self._components)

    def __getitem__(self, index: int) -> Component:
        return self._components[index]

    def find_kind(self, kind: ComponentKind, start: int = 0) -> Optional[int]:
        """Position of the first component of ``kind`` at or after ``start``."""
        for index in range(start, len(self._components)):
            if self._components[index].kind is kind:
                return index
        return None

    def position(self, component: Component) -> int:
        """0-based position of this exact component object, or -1."""
        for index, candidate in enumerate(self._components):
            if candidate is component:
                return index
        return -1

    def splice(self, index: int, components: Sequence[Component]) -> int:
        """
        Replace the component at ``index`` by ``components``.

        Returns the position of the last inserted component. An empty
        replacement removes the component and returns ``index - 1``.
        """
        self._components[index:index + 1] = list(components)
        return index + len(components) - 1
