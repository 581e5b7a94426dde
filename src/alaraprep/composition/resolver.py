"""
Expansion of mixtures into flat isotope lists.

Materials expand into their library elements, elements expand into their
library isotopes, and target isotopes pass through unchanged. The resulting
:class:`~alaraprep.core.roots.RootList` is what the activation solver
consumes.
"""

from __future__ import annotations

import logging
from typing import Dict, Iterable, Mapping, Optional, Union

from scipy.constants import Avogadro

from alaraprep.composition.component import Component, ComponentKind
from alaraprep.composition.density import ReferenceScaledDensity
from alaraprep.composition.library import NuclearLibraries
from alaraprep.composition.mixture import Mixture, resolve_similar
from alaraprep.core.roots import Root, RootList

logger = logging.getLogger(__name__)


class CompositionResolver:
    """
    Expands mixtures against a set of element and material libraries.

    Parameters
    ----------
    libraries : NuclearLibraries
        Element and material data, read-only during expansion.
    avogadro : float, optional
        Avogadro constant [1/mol]; defaults to the CODATA value.
    """

    def __init__(self, libraries: NuclearLibraries, avogadro: float = Avogadro):
        self.libraries = libraries
        self.avogadro = avogadro

    def expand(self, mixture: Mixture) -> RootList:
        """
        Expand every component of a mixture into one isotope list.

        Similar components must already have been replaced (see
        :func:`~alaraprep.composition.mixture.resolve_similar`). Isotope
        components are not expanded here; isotopes reach the solver as
        target isotopes or through element expansion.
        """
        roots = RootList()
        for component in mixture.components:
            kind = component.kind
            if kind is ComponentKind.MATERIAL:
                roots.extend(self.expand_material(mixture, component))
                logger.debug(f"Merged material {component.name} into root list for {mixture.name}")
            elif kind is ComponentKind.ELEMENT or kind is ComponentKind.TARGET_ELEMENT:
                roots.extend(self.expand_element(mixture, component, component))
                logger.debug(f"Merged element {component.name} into root list for {mixture.name}")
            elif kind is ComponentKind.TARGET_ISOTOPE:
                roots.extend([Root.single(component.name, component.density.as_signed(), mixture, component)])
                logger.debug(f"Merged isotope {component.name} into root list for {mixture.name}")
            elif kind is ComponentKind.SIMILAR:
                raise ValueError(
                    f"Mixture {mixture.name} still refers to similar mixture {component.name}; "
                    "resolve similar components before expansion"
                )
            elif kind is ComponentKind.ISOTOPE:
                logger.debug(f"Isotope {component.name} in {mixture.name} is not expanded")
        return roots

    def expand_material(self, mixture: Mixture, component: Component) -> RootList:
        """
        Expand a material component through the material library.

        The component density scales the library density of the material;
        each element of the material is then expanded with a density that
        multiplies the element library's own reference density.
        """
        logger.debug(f"Expanding material {component.name}")
        record = self.libraries.material(component.name)
        density = component.density.value * record.density
        logger.debug(f"Found material {record.name} with {len(record.elements)} elements")

        roots = RootList()
        for element in record.elements:
            factor = element.density * density * component.volume_fraction / 100.0
            transient = Component(
                ComponentKind.ELEMENT, element.name, ReferenceScaledDensity(factor), 1.0
            )
            roots.extend(self.expand_element(mixture, transient, component))
            logger.debug(f"Merged element {element.name} into root list for material {component.name}")
        return roots

    def expand_element(self, mixture: Mixture, element: Component,
                       owner: Optional[Component] = None) -> RootList:
        """
        Expand an element into its isotopes.

        Parameters
        ----------
        mixture : Mixture
            Mixture being expanded; its total density is incremented by
            ``density * volume_fraction`` of this element.
        element : Component
            Element to expand; may be a transient component built while
            expanding a material.
        owner : Component, optional
            Declared component the isotopes are attributed to. Defaults to
            ``element``.

        Returns
        -------
        RootList
            One root per library isotope, labelled ``<element>-<isotope>``
            with number density ``abundance% * N / 100`` where
            ``N = volume_fraction * density * N_A / A``.
        """
        owner = owner or element
        logger.debug(f"Expanding element {element.name}")
        entry = self.libraries.element(element.name)

        density = element.density.resolve(entry.density)
        n_density = element.volume_fraction * density * self.avogadro / entry.A
        mixture.increment_total_density(density * element.volume_fraction)

        logger.debug(f"Found element {element.name} with {entry.num_isotopes} isotopes in element library")
        prefix = element.isotope_prefix
        roots = RootList()
        for iso_name, abundance in entry.isotopes:
            label = f"{prefix}-{iso_name}"
            roots.extend([Root.single(label, abundance * n_density / 100.0, mixture, owner)])
            logger.debug(f"Merged isotope {label} into root list for element {element.name}")
        return roots


def expand_mixtures(
    mixtures: Union[Mapping[str, Mixture], Iterable[Mixture]],
    libraries: NuclearLibraries,
    avogadro: float = Avogadro,
) -> Dict[str, RootList]:
    """Resolve similar components, then expand each mixture by name."""
    if not isinstance(mixtures, Mapping):
        mixtures = {m.name: m for m in mixtures}
    resolve_similar(mixtures)
    resolver = CompositionResolver(libraries, avogadro)
    return {name: resolver.expand(mixture) for name, mixture in mixtures.items()}
