"""
Flux descriptions.

A flux description names a file of group-wise flux spectra, how it is
formatted, how many whole interval entries to skip at its start, and a
normalization applied to every value read from it. Schedules refer to
fluxes by name; :func:`find_flux` turns a name into a position in the flux
list.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from enum import Enum
from typing import Sequence

from alaraprep.errors import FLUX_FILE_WARNING, InvalidFluxFormatError

logger = logging.getLogger(__name__)

# Results of searching for a flux
FLUX_NOT_FOUND = -1
FLUX_BAD_FNAME = -2


class FluxFormat(Enum):
    """Flux file formats."""

    HEADER = 0   # placeholder description, carries no data
    DEFAULT = 1  # whitespace separated text, one interval after another
    RTFLUX = 2   # FORTRAN unformatted RTFLUX binary

    @classmethod
    def from_keyword(cls, keyword: str) -> "FluxFormat":
        """Select a format by the first letter of its keyword."""
        letter = keyword[:1].lower()
        if letter == "r":
            return cls.RTFLUX
        if letter == "d":
            return cls.DEFAULT
        raise InvalidFluxFormatError(f"Invalid flux type: {keyword}", keyword)


_KEYWORDS = {FluxFormat.DEFAULT: "default", FluxFormat.RTFLUX: "rtflux"}


@dataclass(frozen=True)
class FluxDescriptor:
    """
    One flux description.

    Attributes
    ----------
    flux_name : str
        Identifier used by schedules.
    file_name : str
        File holding the spectra.
    scale : float
        Normalization applied to every value.
    skip : int
        Number of whole interval entries (each ``num_groups`` values long)
        to skip before the first one read.
    format : FluxFormat
        File format.
    """

    flux_name: str = ""
    file_name: str = ""
    scale: float = 0.0
    skip: int = 0
    format: FluxFormat = FluxFormat.HEADER

    @classmethod
    def from_tokens(cls, tokens: Sequence[str]) -> "FluxDescriptor":
        """Build from ``<fluxName> <fileName> <scale> <skip> <format>``."""
        if len(tokens) != 5:
            raise ValueError(
                f"Flux description needs name, file, scale, skip and format: {' '.join(tokens)}"
            )
        name, file_name, scale, skip, keyword = tokens
        if int(skip) < 0:
            raise ValueError(f"Flux {name} skips a negative number of intervals: {skip}")
        return cls(
            flux_name=name,
            file_name=file_name,
            scale=float(scale),
            skip=int(skip),
            format=FluxFormat.from_keyword(keyword),
        )

    @classmethod
    def from_line(cls, line: str) -> "FluxDescriptor":
        """
        Parse a flux line, with or without the leading ``flux`` keyword.

        Examples
        --------
        >>> FluxDescriptor.from_line("flux fw fluxin 1e10 2 default").skip
        2
        """
        tokens = line.split("#", 1)[0].split()
        if tokens and tokens[0].lower() == "flux":
            tokens = tokens[1:]
        return cls.from_tokens(tokens)

    def to_alara(self) -> str:
        """Convert to ALARA input format."""
        keyword = _KEYWORDS.get(self.format, "default")
        return f"flux  {self.flux_name}  {self.file_name}  {self.scale}  {self.skip}  {keyword}"

    def check_file(self) -> bool:
        """Check that the flux file can be opened for reading."""
        try:
            with open(self.file_name, "r"):
                pass
        except OSError:
            logger.warning(
                f"[{FLUX_FILE_WARNING}] Unable to open flux file {self.file_name} for flux {self.flux_name}."
            )
            return False
        logger.debug(f"Opened flux file {self.file_name}.")
        return True


def find_flux(descriptors: Sequence[FluxDescriptor], name: str) -> int:
    """
    Position of the flux named ``name``.

    Returns
    -------
    int
        0-based position; :data:`FLUX_BAD_FNAME` if the description exists
        but its file cannot be opened; :data:`FLUX_NOT_FOUND` otherwise.
    """
    for index, descriptor in enumerate(descriptors):
        if descriptor.flux_name == name:
            if descriptor.check_file():
                return index
            return FLUX_BAD_FNAME
    return FLUX_NOT_FOUND
