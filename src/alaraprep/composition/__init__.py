"""Mixture composition: libraries, components and expansion to isotopes."""

from alaraprep.composition.component import Component, ComponentKind, CompositionList
from alaraprep.composition.density import (
    AbsoluteDensity,
    Density,
    ReferenceScaledDensity,
    density_from_signed,
)
from alaraprep.composition.library import (
    ElementEntry,
    MaterialElement,
    MaterialRecord,
    NuclearLibraries,
    load_element_library,
    load_material_library,
    parse_element_library,
    parse_material_library,
)
from alaraprep.composition.mixture import Mixture, resolve_similar
from alaraprep.composition.resolver import CompositionResolver, expand_mixtures

__all__ = [
    "Component",
    "ComponentKind",
    "CompositionList",
    "AbsoluteDensity",
    "Density",
    "ReferenceScaledDensity",
    "density_from_signed",
    "ElementEntry",
    "MaterialElement",
    "MaterialRecord",
    "NuclearLibraries",
    "load_element_library",
    "load_material_library",
    "parse_element_library",
    "parse_material_library",
    "Mixture",
    "resolve_similar",
    "CompositionResolver",
    "expand_mixtures",
]
