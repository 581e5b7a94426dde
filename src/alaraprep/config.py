"""
Run configuration for the preprocessing driver.

The preprocessing core takes everything it needs as arguments; this module
is where the driver gathers those arguments, including the data directory
search path used to locate library files given by bare name.
"""

from __future__ import annotations

import logging
import os
from dataclasses import dataclass, field
from pathlib import Path
from typing import List, Mapping, Optional, Union

from scipy.constants import Avogadro

logger = logging.getLogger(__name__)

DATADIR_ENV = "ALARA_DATADIR"


@dataclass
class LibrarySearchPath:
    """Ordered list of directories searched for library files."""

    directories: List[Path] = field(default_factory=list)

    def resolve(self, name: Union[str, Path]) -> Path:
        """
        Locate a library file.

        A path that exists as given wins; otherwise the first directory
        holding ``name`` is used. If nothing matches the name is returned
        unchanged so that opening it reports the original name.
        """
        path = Path(name)
        if path.exists() or path.is_absolute():
            return path
        for directory in self.directories:
            candidate = Path(directory) / path
            if candidate.exists():
                logger.debug(f"Found {name} in {directory}")
                return candidate
        return path


@dataclass
class PreprocessConfig:
    """
    Settings shared by the composition and flux preprocessing steps.

    Attributes
    ----------
    search_path : LibrarySearchPath
        Directories searched for element and material libraries.
    avogadro : float
        Avogadro constant used for number densities [1/mol].
    rtflux_byteorder : str
        Byte order of RTFLUX files: ``"="`` (native), ``"<"`` or ``">"``.
    log_level : int
        Logging level for the ``alaraprep`` namespace.
    """

    search_path: LibrarySearchPath = field(default_factory=LibrarySearchPath)
    avogadro: float = Avogadro
    rtflux_byteorder: str = "="
    log_level: int = logging.WARNING

    def __post_init__(self) -> None:
        if self.rtflux_byteorder not in ("=", "<", ">"):
            raise ValueError(f"Unknown byte order: {self.rtflux_byteorder!r}")

    @classmethod
    def from_env(cls, environ: Optional[Mapping[str, str]] = None, **kwargs) -> "PreprocessConfig":
        """Build a config whose search path comes from ``ALARA_DATADIR``."""
        environ = os.environ if environ is None else environ
        raw = environ.get(DATADIR_ENV, "")
        directories = [Path(p) for p in raw.split(os.pathsep) if p]
        return cls(search_path=LibrarySearchPath(directories), **kwargs)
