"""
ALARA Input/Output Module

Reads the parts of an ALARA input file that feed preprocessing (library
paths, mixtures, flux descriptions, interval volumes) and writes the data
files those parts refer to: element and material libraries, text flux files
and 1-D RTFLUX binaries.

References:
- ALARA User's Guide: https://svalinn.github.io/ALARA/
- P.P.H. Wilson, "ALARA: Analytic and Laplacian Adaptive Radioactivity
  Analysis", Ph.D. Thesis, University of Wisconsin-Madison, 1999.
"""

from __future__ import annotations

import logging
import struct
from dataclasses import dataclass, field
from pathlib import Path
from typing import Dict, Iterable, List, Mapping, Optional, Tuple, Union

import numpy as np

from alaraprep.composition.component import Component
from alaraprep.composition.library import ElementEntry, MaterialRecord
from alaraprep.composition.mixture import Mixture
from alaraprep.core.intervals import Interval, IntervalSet
from alaraprep.flux.descriptor import FluxDescriptor
from alaraprep.flux.rtflux import TITLE_LENGTH, group_blocks

logger = logging.getLogger(__name__)

# Keywords opening a block that runs until a line reading "end"
BLOCK_KEYWORDS = {
    "cooling",
    "dimension",
    "mat_loading",
    "mixture",
    "output",
    "pulsehistory",
    "reverse",
    "schedule",
    "skip_zones",
    "solve_zones",
    "spatial_norm",
    "volumes",
}


@dataclass
class ALARAInput:
    """Preprocessing-relevant content of an ALARA input file."""

    material_lib: str = ""
    element_lib: str = ""
    mixtures: Dict[str, Mixture] = field(default_factory=dict)
    fluxes: List[FluxDescriptor] = field(default_factory=list)
    volumes: List[Tuple[float, str]] = field(default_factory=list)

    def intervals(self) -> IntervalSet:
        """One interval per ``volumes`` entry."""
        return IntervalSet([
            Interval(name=f"{zone}_{i}", volume=volume)
            for i, (volume, zone) in enumerate(self.volumes)
        ])


def _strip_comments(text: str) -> Iterable[List[str]]:
    for line in text.split("\n"):
        if "#" in line:
            line = line[:line.index("#")]
        tokens = line.split()
        if tokens:
            yield tokens


def parse_alara_input(content: str) -> ALARAInput:
    """
    Parse ALARA input text.

    Only ``material_lib``, ``element_lib``, ``mixture``, ``flux`` and
    ``volumes`` are interpreted; other blocks and keywords are passed over.
    """
    result = ALARAInput()
    block: Optional[str] = None
    block_name = ""
    body: List[List[str]] = []

    for tokens in _strip_comments(content):
        keyword = tokens[0].lower()

        if block is not None:
            if keyword == "end":
                _close_block(result, block, block_name, body)
                block, body = None, []
            else:
                body.append(tokens)
            continue

        if keyword in BLOCK_KEYWORDS:
            block = keyword
            block_name = tokens[1] if len(tokens) > 1 else ""
        elif keyword == "material_lib" and len(tokens) > 1:
            result.material_lib = tokens[1]
        elif keyword == "element_lib" and len(tokens) > 1:
            result.element_lib = tokens[1]
        elif keyword == "flux":
            result.fluxes.append(FluxDescriptor.from_tokens(tokens[1:]))

    if block is not None:
        raise ValueError(f"ALARA input ended inside '{block} {block_name}' block")
    return result


def _close_block(result: ALARAInput, block: str, name: str, body: List[List[str]]) -> None:
    if block == "mixture":
        mixture = Mixture(name)
        for tokens in body:
            mixture.add_component(Component.from_tokens(tokens))
        result.mixtures[name] = mixture
        logger.debug(f"Read mixture {name} with {len(mixture.components)} components")
    elif block == "volumes":
        for tokens in body:
            if len(tokens) >= 2:
                result.volumes.append((float(tokens[0]), tokens[1]))


def read_alara_input(file_path: Union[str, Path]) -> ALARAInput:
    """
    Read and parse an ALARA input file.

    Examples
    --------
    >>> alara_input = read_alara_input("sample.alara")
    >>> sorted(alara_input.mixtures)
    ['mix_1']
    """
    file_path = Path(file_path)

    if not file_path.exists():
        raise FileNotFoundError(f"ALARA input file not found: {file_path}")

    with open(file_path, 'r') as f:
        content = f.read()

    return parse_alara_input(content)


# =============================================================================
# Library writers
# =============================================================================

def write_element_library(elements: Mapping[str, ElementEntry], file_path: Union[str, Path]) -> None:
    """Write an element library in the format read by the element loader."""
    with open(file_path, 'w') as f:
        for key, entry in elements.items():
            f.write(f"{key} {entry.A} {entry.Z} {entry.density} {entry.num_isotopes}\n")
            for iso, abundance in entry.isotopes:
                f.write(f"    {iso} {abundance}\n")


def write_material_library(materials: Iterable[MaterialRecord], file_path: Union[str, Path]) -> None:
    """Write a material library in the format read by the material loader."""
    with open(file_path, 'w') as f:
        for record in materials:
            f.write(f"{record.name} {record.density} {len(record.elements)}\n")
            for element in record.elements:
                f.write(f"    {element.name} {element.density} {element.Z}\n")


# =============================================================================
# Flux writers
# =============================================================================

def write_alara_flux(flux: np.ndarray, file_path: Union[str, Path]) -> None:
    """
    Write flux spectra in ALARA default (text) format.

    Parameters
    ----------
    flux : np.ndarray
        ``(n_intervals, n_groups)`` flux values [n/cm^2/s], groups ordered
        from high to low energy. A 1-D array is written as one interval.
    file_path : str or Path
        Output file path.
    """
    flux = np.atleast_2d(np.asarray(flux, dtype=float))
    with open(file_path, 'w') as f:
        for row in flux:
            f.write(" ".join(f"{val:.6e}" for val in row))
            f.write("\n")


def _record(payload: bytes, byteorder: str) -> bytes:
    marker = struct.pack(byteorder + "i", len(payload))
    return marker + payload + marker


def write_rtflux(
    flux: np.ndarray,
    file_path: Union[str, Path],
    title: str = "alaraprep",
    nblok: int = 1,
    ndim: int = 1,
    byteorder: str = "=",
) -> None:
    """
    Write a 1-D RTFLUX file.

    Parameters
    ----------
    flux : np.ndarray
        ``(ngrp, ninti)`` flux values, group-major as stored in the file.
    file_path : str or Path
        Output file path.
    title : str
        Title, truncated or padded to 24 characters.
    nblok : int
        Number of group blocks to split the data into.
    ndim : int
        Dimension code written to the header.
    byteorder : str
        ``"="`` (native), ``"<"`` or ``">"``.
    """
    flux = np.asarray(flux, dtype=float)
    ngrp, ninti = flux.shape
    title_bytes = title.encode("latin-1")[:TITLE_LENGTH].ljust(TITLE_LENGTH)

    with open(file_path, 'wb') as f:
        f.write(_record(struct.pack(byteorder + f"{TITLE_LENGTH}si", title_bytes, 0), byteorder))
        f.write(_record(
            struct.pack(byteorder + "6i2fi", ndim, ngrp, ninti, 1, 1, 0, 1.0, 0.0, nblok),
            byteorder,
        ))
        dtype = np.dtype(byteorder + "f8")
        for lo, hi in group_blocks(ngrp, nblok):
            block = np.ascontiguousarray(flux[lo:hi + 1, :], dtype=dtype)
            f.write(_record(block.tobytes(), byteorder))
