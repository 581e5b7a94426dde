"""alaraprep I/O module for ALARA input, library and flux files."""

from alaraprep.io.alara import (
    ALARAInput,
    parse_alara_input,
    read_alara_input,
    write_alara_flux,
    write_element_library,
    write_material_library,
    write_rtflux,
)

__all__ = [
    "ALARAInput",
    "parse_alara_input",
    "read_alara_input",
    "write_alara_flux",
    "write_element_library",
    "write_material_library",
    "write_rtflux",
]
