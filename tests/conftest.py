"""
Shared pytest fixtures for alaraprep tests.

Library and flux files are written into ``tmp_path`` so tests never depend
on the working directory.
"""

import logging

import pytest

from alaraprep.composition.library import NuclearLibraries, parse_element_library, parse_material_library

ELEMENT_LIBRARY = """\
# element library used by the tests
fe 55.845 26 7.874 4
    54 5.845
    56 91.754
    57 2.119
    58 0.282
cr 51.996 24 7.19 4
    50 4.345
    52 83.789
    53 9.501
    54 2.365
# synthetic element with round numbers
xx 10.0 5 5.0 2
    a 40.0
    b 60.0
zone:xx 10.0 5 5.0 2   # qualified key
    a 40.0
    b 60.0
"""

MATERIAL_LIBRARY = """\
# material library used by the tests
SS316 7.98 2
    fe 70.0 26
    cr 30.0 24
empty 1.0 0
steel 7.8 1
    fe 100.0 26
"""


@pytest.fixture
def element_lib_file(tmp_path):
    path = tmp_path / "elelib"
    path.write_text(ELEMENT_LIBRARY)
    return path


@pytest.fixture
def material_lib_file(tmp_path):
    path = tmp_path / "matlib"
    path.write_text(MATERIAL_LIBRARY)
    return path


@pytest.fixture
def libraries():
    return NuclearLibraries(
        parse_element_library(ELEMENT_LIBRARY),
        parse_material_library(MATERIAL_LIBRARY),
    )


@pytest.fixture
def reset_logging():
    yield
    logger = logging.getLogger("alaraprep")
    for handler in logger.handlers:
        handler.close()
    logger.handlers.clear()
    logger.setLevel(logging.NOTSET)
