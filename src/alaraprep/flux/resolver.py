"""
Cross-referencing flux descriptions with the problem intervals.

For every flux description, in order, an ``intervals x groups`` matrix is
read from its file and handed to the interval container together with the
description's scale factor.
"""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Optional, Protocol, Sequence, Union

import numpy as np

from alaraprep.errors import FluxFileError, InsufficientFluxDataError, InvalidFluxFormatError
from alaraprep.flux.descriptor import FluxDescriptor, FluxFormat
from alaraprep.flux.rtflux import read_rtflux

logger = logging.getLogger(__name__)


class IntervalContainer(Protocol):
    def count(self) -> int: ...

    def store_matrix(self, matrix: np.ndarray, scale: float) -> None: ...


class GroupProvider(Protocol):
    def get_num_groups(self) -> int: ...

    def set_num_fluxes(self, num_fluxes: int) -> None: ...


def read_text_flux(
    path: Union[str, Path],
    num_intervals: int,
    num_groups: int,
    skip: int = 0,
    out: Optional[np.ndarray] = None,
) -> np.ndarray:
    """
    Read a default-format (text) flux file.

    The file holds whitespace separated values, ``num_groups`` per interval,
    one interval after another. The first ``skip`` intervals are discarded.

    Raises
    ------
    FluxFileError
        The file cannot be opened.
    InsufficientFluxDataError
        The file ends before ``(skip + num_intervals) * num_groups`` values
        or holds a value that is not a number.
    ValueError
        ``skip`` is negative.
    """
    if skip < 0:
        raise ValueError(f"Cannot skip a negative number of intervals: {skip}")
    try:
        with open(path, "r") as f:
            tokens = f.read().split()
    except OSError as err:
        raise FluxFileError(f"Unable to open flux file {path}.", str(path)) from err

    start = skip * num_groups
    stop = start + num_intervals * num_groups
    if len(tokens) < stop:
        raise InsufficientFluxDataError(f"Flux file {path} does not contain enough data.", str(path))

    try:
        values = np.array(tokens[start:stop], dtype=float)
    except ValueError as err:
        raise InsufficientFluxDataError(
            f"Flux file {path} contains data that is not a number.", str(path)
        ) from err

    if out is None:
        out = np.empty((num_intervals, num_groups))
    out[:, :] = values.reshape(num_intervals, num_groups)
    return out


def read_flux_matrix(
    descriptor: FluxDescriptor,
    num_intervals: int,
    num_groups: int,
    out: Optional[np.ndarray] = None,
    byteorder: str = "=",
) -> np.ndarray:
    """Read the matrix of one flux description according to its format."""
    if descriptor.format is FluxFormat.DEFAULT:
        return read_text_flux(descriptor.file_name, num_intervals, num_groups, descriptor.skip, out)
    if descriptor.format is FluxFormat.RTFLUX:
        return read_rtflux(
            descriptor.file_name, num_intervals, num_groups, descriptor.skip, out, byteorder
        )
    raise InvalidFluxFormatError(
        f"Flux {descriptor.flux_name} has no file format.", descriptor.flux_name
    )


def cross_reference(
    descriptors: Sequence[FluxDescriptor],
    intervals: IntervalContainer,
    groups: GroupProvider,
    byteorder: str = "=",
) -> None:
    """
    Read every flux description into the intervals.

    Parameters
    ----------
    descriptors : sequence of FluxDescriptor
        Flux descriptions in declaration order.
    intervals : IntervalContainer
        Receives one scaled ``(count(), num_groups)`` matrix per description.
    groups : GroupProvider
        Supplies the number of groups and is told how many fluxes there are.
    byteorder : str, optional
        Byte order of RTFLUX files.
    """
    num_intervals = intervals.count()
    num_groups = groups.get_num_groups()

    groups.set_num_fluxes(len(descriptors))
    logger.info(f"Assigning {len(descriptors)} fluxes to each interval")

    for descriptor in descriptors:
        logger.debug(f"Assigning flux {descriptor.flux_name}")
        matrix = np.zeros((num_intervals, num_groups))
        read_flux_matrix(descriptor, num_intervals, num_groups, matrix, byteorder)
        intervals.store_matrix(matrix, descriptor.scale)

    logger.info(f"Assigned {len(descriptors)} fluxes to each interval")
