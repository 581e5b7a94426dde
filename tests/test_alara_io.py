"""Tests for ALARA input parsing and data file writers."""

import numpy as np
import pytest

from alaraprep.composition.component import ComponentKind
from alaraprep.composition.density import ReferenceScaledDensity
from alaraprep.composition.library import (
    load_element_library,
    load_material_library,
    parse_element_library,
    parse_material_library,
)
from alaraprep.flux.descriptor import FluxFormat
from alaraprep.io.alara import (
    parse_alara_input,
    read_alara_input,
    write_alara_flux,
    write_element_library,
    write_material_library,
)

from conftest import ELEMENT_LIBRARY, MATERIAL_LIBRARY

SAMPLE_INPUT = """\
# first wall test problem
geometry rectangular

dimension x
    0.0
        2 1.0
        3 5.0
end

mat_loading
    zone_fw  mix_fw
end

mixture mix_fw
    material SS316  1.0  0.8   # structure
    element  cr    -1.0  0.1
    like     mix_b       0.1
end

mixture mix_b
    element fe  7.874  1.0
end

volumes
    1.0   zone_fw
    4.0   zone_fw
    2.5   zone_bz
end

flux  fw   fluxin   1e10  0  default
flux  rt   rtflux   1.0   2  rtflux

material_lib  matlib
element_lib   elelib
"""


@pytest.fixture
def sample_input():
    return parse_alara_input(SAMPLE_INPUT)


class TestParseAlaraInput:
    """Tests for parse_alara_input."""

    def test_libraries(self, sample_input):
        assert sample_input.material_lib == "matlib"
        assert sample_input.element_lib == "elelib"

    def test_mixtures(self, sample_input):
        assert list(sample_input.mixtures) == ["mix_fw", "mix_b"]

        mix_fw = sample_input.mixtures["mix_fw"]
        kinds = [c.kind for c in mix_fw.components]
        assert kinds == [ComponentKind.MATERIAL, ComponentKind.ELEMENT, ComponentKind.SIMILAR]
        assert mix_fw.volume_fraction == pytest.approx(1.0)
        assert isinstance(mix_fw.components[1].density, ReferenceScaledDensity)
        assert mix_fw.components[2].name == "mix_b"

    def test_fluxes(self, sample_input):
        assert [f.flux_name for f in sample_input.fluxes] == ["fw", "rt"]
        assert sample_input.fluxes[0].scale == 1e10
        assert sample_input.fluxes[1].format is FluxFormat.RTFLUX
        assert sample_input.fluxes[1].skip == 2

    def test_volumes_and_intervals(self, sample_input):
        assert sample_input.volumes == [(1.0, "zone_fw"), (4.0, "zone_fw"), (2.5, "zone_bz")]

        intervals = sample_input.intervals()
        assert intervals.count() == 3
        assert [i.name for i in intervals] == ["zone_fw_0", "zone_fw_1", "zone_bz_2"]
        assert intervals[1].volume == 4.0

    def test_other_blocks_ignored(self, sample_input):
        assert "dimension" not in sample_input.mixtures

    def test_unclosed_block(self):
        with pytest.raises(ValueError, match="mixture broken"):
            parse_alara_input("mixture broken\n    element fe 1.0 1.0\n")

    def test_bad_component(self):
        with pytest.raises(ValueError):
            parse_alara_input("mixture m\n    compound fe 1.0 1.0\nend\n")

    def test_read_file(self, tmp_path):
        path = tmp_path / "problem.alara"
        path.write_text(SAMPLE_INPUT)
        assert len(read_alara_input(path).mixtures) == 2

    def test_read_missing_file(self, tmp_path):
        with pytest.raises(FileNotFoundError):
            read_alara_input(tmp_path / "nothing.alara")


class TestWriters:
    """Written files are read back by the loaders."""

    def test_element_library(self, tmp_path):
        elements = parse_element_library(ELEMENT_LIBRARY)
        path = tmp_path / "elelib"
        write_element_library(elements, path)

        assert load_element_library(path) == elements

    def test_material_library(self, tmp_path):
        materials = parse_material_library(MATERIAL_LIBRARY)
        path = tmp_path / "matlib"
        write_material_library(materials.values(), path)

        assert load_material_library(path) == materials

    def test_flux_rows(self, tmp_path):
        flux = np.array([[1.5e10, 2.0e9], [3.0e8, 4.0e7]])
        path = tmp_path / "fluxin"
        write_alara_flux(flux, path)

        lines = path.read_text().splitlines()
        assert len(lines) == 2
        assert lines[0].split() == ["1.500000e+10", "2.000000e+09"]

    def test_flux_single_spectrum(self, tmp_path):
        path = tmp_path / "fluxin"
        write_alara_flux(np.array([1.0, 2.0, 3.0]), path)
        assert len(path.read_text().splitlines()) == 1
