"""
Element and material libraries.

Element library records::

    <key> <A> <Z> <density> <numIsotopes>
        <isotope> <abundance %>      (numIsotopes lines)

Material library records::

    <name> <density> <numElements>
        <element> <weight %> <Z>     (numElements lines)

Tokens are whitespace separated; a token starting with ``#`` comments out
the rest of its line. Both libraries are read completely when loaded and are
read-only afterwards.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from pathlib import Path
from types import MappingProxyType
from typing import Dict, List, Mapping, Optional, Tuple, Union

from alaraprep.config import LibrarySearchPath
from alaraprep.errors import (
    ElementNotFoundError,
    LibraryFormatError,
    LibraryOpenError,
    MaterialNotFoundError,
)

logger = logging.getLogger(__name__)

COMMENT_MARKER = "#"


@dataclass(frozen=True)
class ElementEntry:
    """Element library entry."""

    A: float
    Z: int
    density: float
    isotopes: Tuple[Tuple[str, float], ...] = ()

    @property
    def num_isotopes(self) -> int:
        return len(self.isotopes)

    @property
    def abundance_total(self) -> float:
        return sum(abundance for _, abundance in self.isotopes)


@dataclass(frozen=True)
class MaterialElement:
    """One element line of a material record."""

    name: str
    density: float  # weight percent of the material
    Z: int


@dataclass(frozen=True)
class MaterialRecord:
    """Material library record."""

    name: str
    density: float
    elements: Tuple[MaterialElement, ...] = ()


class _TokenStream:
    """Whitespace tokens of a library file with comments removed."""

    def __init__(self, text: str, source: str):
        self.source = source
        self._tokens: List[Tuple[str, int]] = []
        for lineno, line in enumerate(text.splitlines(), start=1):
            for token in line.split():
                if token.startswith(COMMENT_MARKER):
                    break
                self._tokens.append((token, lineno))
        self._pos = 0

    def at_end(self) -> bool:
        return self._pos >= len(self._tokens)

    def word(self, what: str) -> str:
        if self.at_end():
            raise LibraryFormatError(
                f"Library {self.source} ended while reading {what}", self.source
            )
        token, _ = self._tokens[self._pos]
        self._pos += 1
        return token

    def number(self, what: str, kind=float):
        token = self.word(what)
        try:
            return kind(token)
        except ValueError as err:
            _, lineno = self._tokens[self._pos - 1]
            raise LibraryFormatError(
                f"Library {self.source} line {lineno}: bad {what} '{token}'", self.source
            ) from err


def _read_text(path: Union[str, Path], search_path: Optional[LibrarySearchPath], kind: str) -> Tuple[str, Path]:
    resolved = (search_path or LibrarySearchPath()).resolve(path)
    try:
        with open(resolved, "r") as f:
            text = f.read()
    except OSError as err:
        raise LibraryOpenError(f"Unable to open {kind} library: {path}", str(path)) from err
    logger.info(f"Opened {kind} library {resolved}")
    return text, resolved


def parse_element_library(text: str, source: str = "<element library>") -> Dict[str, ElementEntry]:
    """Parse element library text. A repeated key replaces the earlier entry."""
    stream = _TokenStream(text, source)
    elements: Dict[str, ElementEntry] = {}
    while not stream.at_end():
        key = stream.word("element key")
        A = stream.number(f"A of {key}")
        Z = stream.number(f"Z of {key}", int)
        density = stream.number(f"density of {key}")
        num_isos = stream.number(f"isotope count of {key}", int)
        isotopes = []
        for _ in range(num_isos):
            iso = stream.word(f"isotope of {key}")
            isotopes.append((iso, stream.number(f"abundance of {key}-{iso}")))
        if key in elements:
            logger.debug(f"Element {key} redefined in {source}")
        elements[key] = ElementEntry(A=A, Z=Z, density=density, isotopes=tuple(isotopes))
    return elements


def parse_material_library(text: str, source: str = "<material library>") -> Dict[str, MaterialRecord]:
    """
    Parse material library text.

    Records are matched by name in file order, so the first record of a
    repeated name is the one kept; later ones are still consumed.
    """
    stream = _TokenStream(text, source)
    materials: Dict[str, MaterialRecord] = {}
    while not stream.at_end():
        name = stream.word("material name")
        density = stream.number(f"density of {name}")
        num_eles = stream.number(f"element count of {name}", int)
        elements = []
        for _ in range(num_eles):
            ele = stream.word(f"element of {name}")
            ele_dens = stream.number(f"density of {name}/{ele}")
            ele_z = stream.number(f"Z of {name}/{ele}", int)
            elements.append(MaterialElement(ele, ele_dens, ele_z))
        if name in materials:
            logger.debug(f"Skipping repeated material {name} in {source}")
            continue
        materials[name] = MaterialRecord(name=name, density=density, elements=tuple(elements))
    return materials


def load_element_library(path: Union[str, Path], search_path: Optional[LibrarySearchPath] = None) -> Dict[str, ElementEntry]:
    text, resolved = _read_text(path, search_path, "element")
    return parse_element_library(text, str(resolved))


def load_material_library(path: Union[str, Path], search_path: Optional[LibrarySearchPath] = None) -> Dict[str, MaterialRecord]:
    text, resolved = _read_text(path, search_path, "material")
    return parse_material_library(text, str(resolved))


class NuclearLibraries:
    """
    Read-only element and material data for one run.

    Built once before any mixture is expanded and passed to every
    :class:`~alaraprep.composition.resolver.CompositionResolver`.
    """

    def __init__(
        self,
        elements: Optional[Mapping[str, ElementEntry]] = None,
        materials: Optional[Mapping[str, MaterialRecord]] = None,
    ):
        self.elements: Mapping[str, ElementEntry] = MappingProxyType(dict(elements or {}))
        self.materials: Mapping[str, MaterialRecord] = MappingProxyType(dict(materials or {}))

    @classmethod
    def load(
        cls,
        element_lib: Union[str, Path, None] = None,
        material_lib: Union[str, Path, None] = None,
        search_path: Optional[LibrarySearchPath] = None,
    ) -> "NuclearLibraries":
        elements = load_element_library(element_lib, search_path) if element_lib else {}
        materials = load_material_library(material_lib, search_path) if material_lib else {}
        return cls(elements, materials)

    def element(self, key: str) -> ElementEntry:
        try:
            return self.elements[key]
        except KeyError:
            raise ElementNotFoundError(
                f"Could not find element {key} in element library.", key
            ) from None

    def material(self, name: str) -> MaterialRecord:
        try:
            return self.materials[name]
        except KeyError:
            raise MaterialNotFoundError(
                f"Could not find material {name} in material library.", name
            ) from None
