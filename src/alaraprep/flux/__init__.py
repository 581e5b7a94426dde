"""Flux descriptions and reading of flux spectra into intervals."""

from alaraprep.flux.descriptor import (
    FLUX_BAD_FNAME,
    FLUX_NOT_FOUND,
    FluxDescriptor,
    FluxFormat,
    find_flux,
)
from alaraprep.flux.resolver import cross_reference, read_flux_matrix, read_text_flux
from alaraprep.flux.rtflux import RTFluxHeader, group_blocks, read_rtflux, read_rtflux_header

__all__ = [
    "FLUX_BAD_FNAME",
    "FLUX_NOT_FOUND",
    "FluxDescriptor",
    "FluxFormat",
    "find_flux",
    "cross_reference",
    "read_flux_matrix",
    "read_text_flux",
    "RTFluxHeader",
    "group_blocks",
    "read_rtflux",
    "read_rtflux_header",
]
