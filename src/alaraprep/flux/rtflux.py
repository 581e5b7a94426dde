"""
RTFLUX Reader Module.

Reads 1-D RTFLUX files: FORTRAN unformatted sequential binary output of
discrete ordinates codes (DANTSYS, PARTISN). Every record is bracketed by a
4-byte record length. Record layout::

    1. title:      24 character title, one integer
    2. dimensions: ndim ngrp ninti nintj nintk iter (int), effk power (float),
                   nblok (int)
    3. nblok flux blocks, each holding a contiguous range of groups as
       doubles ordered group-major, interval-minor

Values are read in the byte order of the machine unless another one is
requested explicitly.
"""

from __future__ import annotations

import logging
import struct
from dataclasses import dataclass
from pathlib import Path
from typing import BinaryIO, List, Optional, Tuple, Union

import numpy as np

from alaraprep.errors import (
    FluxFileError,
    InsufficientFluxDataError,
    InsufficientGroupsError,
    InsufficientIntervalsError,
    InvalidFluxHeaderError,
    UnsupportedDimensionError,
)

logger = logging.getLogger(__name__)

MARKER_SIZE = 4
TITLE_LENGTH = 24


@dataclass
class RTFluxHeader:
    """
    RTFLUX title and dimension records.

    Attributes
    ----------
    title : str
        File title.
    user_id : int
        Integer following the title.
    ndim : int
        Number of spatial dimensions.
    ngrp : int
        Number of energy groups.
    ninti, nintj, nintk : int
        Intervals along the first, second and third dimension.
    iteration : int
        Iteration/flag integer written by the transport code.
    k_eff : float
        Effective multiplication factor.
    power : float
        Power normalization.
    nblok : int
        Number of group blocks.
    """

    title: str = ""
    user_id: int = 0
    ndim: int = 1
    ngrp: int = 0
    ninti: int = 0
    nintj: int = 0
    nintk: int = 0
    iteration: int = 0
    k_eff: float = 0.0
    power: float = 0.0
    nblok: int = 1


def group_blocks(ngrp: int, nblok: int) -> List[Tuple[int, int]]:
    """
    Inclusive group ranges covered by each block.

    Groups are divided into ``nblok`` blocks of ``ceil(ngrp / nblok)``
    groups; the last block holds what is left.
    """
    per_block = (ngrp - 1) // nblok + 1
    blocks = []
    for blk in range(nblok):
        lo = blk * per_block
        hi = min(ngrp - 1, (blk + 1) * per_block - 1)
        blocks.append((lo, hi))
    return blocks


class _RecordReader:
    """Reads bracketed FORTRAN records from a binary stream."""

    def __init__(self, stream: BinaryIO, source: str, byteorder: str = "="):
        self.stream = stream
        self.source = source
        self.byteorder = byteorder

    def _read(self, nbytes: int) -> bytes:
        data = self.stream.read(nbytes)
        if len(data) < nbytes:
            raise InsufficientFluxDataError(
                f"RTFLUX file: {self.source} is truncated", self.source
            )
        return data

    def marker(self) -> int:
        return struct.unpack(self.byteorder + "i", self._read(MARKER_SIZE))[0]

    def record(self, nbytes: int) -> bytes:
        """Payload of the next record; the length markers are only consumed."""
        leading = self.marker()
        payload = self._read(nbytes)
        self.marker()
        logger.debug(f"readRTFLUX: record length {leading}, read {nbytes} bytes")
        return payload


def _read_header(reader: _RecordReader) -> RTFluxHeader:
    order = reader.byteorder
    title, user_id = struct.unpack(order + f"{TITLE_LENGTH}si", reader.record(TITLE_LENGTH + 4))
    dims = struct.unpack(order + "6i2fi", reader.record(36))
    header = RTFluxHeader(
        title=title.rstrip(b"\x00 ").decode("latin-1").strip(),
        user_id=user_id,
        ndim=dims[0],
        ngrp=dims[1],
        ninti=dims[2],
        nintj=dims[3],
        nintk=dims[4],
        iteration=dims[5],
        k_eff=dims[6],
        power=dims[7],
        nblok=dims[8],
    )
    logger.debug(
        f"readRTFLUX: (ndim,ngrp,ninti,nintj,nintk,nblok) = ({header.ndim},{header.ngrp},"
        f"{header.ninti},{header.nintj},{header.nintk},{header.nblok})"
    )
    return header


def _open(path: Union[str, Path]) -> BinaryIO:
    try:
        return open(path, "rb")
    except OSError as err:
        raise FluxFileError(f"Unable to open RTFLUX file: {path}", str(path)) from err


def read_rtflux_header(path: Union[str, Path], byteorder: str = "=") -> RTFluxHeader:
    """Read only the title and dimension records of an RTFLUX file."""
    with _open(path) as stream:
        return _read_header(_RecordReader(stream, str(path), byteorder))


def read_rtflux(
    path: Union[str, Path],
    num_intervals: int,
    num_groups: int,
    skip: int = 0,
    out: Optional[np.ndarray] = None,
    byteorder: str = "=",
) -> np.ndarray:
    """
    Read a 1-D RTFLUX file into an interval-major flux matrix.

    Parameters
    ----------
    path : str or Path
        RTFLUX file.
    num_intervals : int
        Number of intervals in the problem.
    num_groups : int
        Number of groups needed by the problem.
    skip : int, optional
        Number of leading file intervals to skip.
    out : np.ndarray, optional
        ``(num_intervals, num_groups)`` array to fill in place.
    byteorder : str, optional
        ``"="`` (native, default), ``"<"`` or ``">"``.

    Returns
    -------
    np.ndarray
        ``out[interval, group] = flux[group, interval + skip]``.

    Raises
    ------
    UnsupportedDimensionError
        The file is 2- or 3-dimensional.
    InsufficientGroupsError
        The file has fewer than ``num_groups`` groups.
    InsufficientIntervalsError
        The file has fewer than ``skip + num_intervals`` intervals.
    InvalidFluxHeaderError
        The header holds a negative group or interval count, or fewer than
        one group block.
    ValueError
        ``skip`` is negative.
    """
    source = str(path)
    if skip < 0:
        raise ValueError(f"Cannot skip a negative number of intervals: {skip}")
    with _open(path) as stream:
        reader = _RecordReader(stream, source, byteorder)
        header = _read_header(reader)

        if header.ndim > 1:
            raise UnsupportedDimensionError(
                f"RTFLUX file: {source} is 2- or 3-dimensional.  Only 1-D files are supported.",
                source,
            )
        if header.nblok < 1 or header.ngrp < 0 or header.ninti < 0:
            raise InvalidFluxHeaderError(
                f"RTFLUX file: {source} has an invalid header (ngrp={header.ngrp}, "
                f"ninti={header.ninti}, nblok={header.nblok})",
                source,
            )
        if header.ngrp < num_groups:
            raise InsufficientGroupsError(
                f"RTFLUX file: {source} does not contain enough data - not enough groups", source
            )
        if header.ninti < skip + num_intervals:
            raise InsufficientIntervalsError(
                f"RTFLUX file: {source} does not contain enough data - not enough intervals", source
            )

        dtype = np.dtype(byteorder + "f8")
        flux_in = np.zeros((header.ngrp, header.ninti))
        for lo, hi in group_blocks(header.ngrp, header.nblok):
            rows = max(hi - lo + 1, 0)
            payload = reader.record(rows * header.ninti * dtype.itemsize)
            flux_in[lo:hi + 1, :] = np.frombuffer(payload, dtype=dtype).reshape(rows, header.ninti)

    logger.debug(
        f"readRTFLUX: reading {num_groups} groups in {num_intervals} volumes, skipping {skip} entries"
    )
    if out is None:
        out = np.empty((num_intervals, num_groups))
    out[:, :] = flux_in[:num_groups, skip:skip + num_intervals].T
    return out
