"""
Fatal input errors raised while preprocessing ALARA problem input.

Every error carries a numeric ``code`` identifying its category and the
``name`` of the offending identifier (library path, element key, material
name, flux file). Nothing in the preprocessing pipeline catches these; they
propagate to the driver, which reports them and terminates the run.
"""

from __future__ import annotations


class AlaraPrepError(Exception):
    """Base class for fatal preprocessing errors."""

    code: int = 0

    def __init__(self, message: str, name: str = ""):
        super().__init__(message)
        self.name = name

    def __str__(self) -> str:
        return f"[{self.code}] {self.args[0]}"


# =============================================================================
# Library errors
# =============================================================================

class LibraryOpenError(AlaraPrepError):
    """An element or material library file could not be opened."""
    code = 110


class LibraryFormatError(AlaraPrepError):
    """A library file is truncated or holds a malformed numeric field."""
    code = 111


class ElementNotFoundError(AlaraPrepError):
    """An element key is not present in the element library."""
    code = 310


class MaterialNotFoundError(AlaraPrepError):
    """A material name is not present in the material library."""
    code = 311


class MixtureNotFoundError(AlaraPrepError):
    """A similar reference names a mixture that was never defined."""
    code = 312


class SimilarCycleError(AlaraPrepError):
    """Similar references between mixtures form a cycle."""
    code = 313


# =============================================================================
# Flux errors
# =============================================================================

class InvalidFluxFormatError(AlaraPrepError):
    """A flux description names an unknown file format."""
    code = 140


class FluxFileError(AlaraPrepError):
    """A flux data file could not be opened for reading."""
    code = 620


class InsufficientFluxDataError(AlaraPrepError):
    """A flux file does not contain enough data."""
    code = 622


class InsufficientGroupsError(InsufficientFluxDataError):
    """An RTFLUX file has fewer groups than the problem needs."""
    code = 623


class InsufficientIntervalsError(InsufficientFluxDataError):
    """An RTFLUX file has fewer intervals than skip plus the problem needs."""
    code = 623


class UnsupportedDimensionError(AlaraPrepError):
    """An RTFLUX file describes a 2-D or 3-D problem."""
    code = 624


class InvalidFluxHeaderError(AlaraPrepError):
    """An RTFLUX header holds a negative size or no group blocks."""
    code = 625


# Warning category for flux files failing their accessibility check.
FLUX_FILE_WARNING = 340
