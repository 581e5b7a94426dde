"""Tests for the alaraprep command-line interface."""

import json
import logging

import numpy as np
import pytest
from scipy.constants import Avogadro

from alaraprep.cli.app import build_parser, main
from alaraprep.io.alara import write_alara_flux, write_rtflux

from conftest import ELEMENT_LIBRARY, MATERIAL_LIBRARY

pytestmark = pytest.mark.usefixtures("reset_logging")


@pytest.fixture
def problem_dir(tmp_path):
    (tmp_path / "elelib").write_text(ELEMENT_LIBRARY)
    (tmp_path / "matlib").write_text(MATERIAL_LIBRARY)
    write_alara_flux(np.array([[1.0, 2.0], [3.0, 4.0], [5.0, 6.0]]), tmp_path / "fluxin")
    (tmp_path / "problem.alara").write_text(
        "mixture m\n"
        "    element xx 5.0 1.0\n"
        "end\n"
        "mixture n\n"
        "    like m 0.5\n"
        "end\n"
        "volumes\n"
        "    1.0 z\n"
        "    1.0 z\n"
        "end\n"
        f"flux f {tmp_path / 'fluxin'} 2.0 1 default\n"
        "element_lib elelib\n"
        "material_lib matlib\n"
    )
    return tmp_path


def test_parser_requires_command():
    with pytest.raises(SystemExit):
        build_parser().parse_args([])


def test_expand(problem_dir, monkeypatch):
    monkeypatch.chdir(problem_dir)
    output = problem_dir / "isotopes.json"

    assert main(["expand", "problem.alara", "--output", str(output)]) == 0

    data = json.loads(output.read_text())
    assert sorted(data) == ["m", "n"]
    n_density = 5.0 * Avogadro / 10.0
    assert data["m"]["total_density"] == pytest.approx(5.0)
    assert data["m"]["isotopes"]["xx-a"] == pytest.approx(0.4 * n_density)
    assert data["n"]["isotopes"]["xx-b"] == pytest.approx(0.5 * 0.6 * n_density)
    assert data["n"]["volume_fraction"] == pytest.approx(0.5)


def test_expand_uses_data_dir(problem_dir, tmp_path_factory, monkeypatch):
    """Bare library names are found through --data-dir."""
    monkeypatch.chdir(tmp_path_factory.mktemp("elsewhere"))
    output = problem_dir / "isotopes.json"

    code = main([
        "--data-dir", str(problem_dir),
        "expand", str(problem_dir / "problem.alara"), "--output", str(output),
    ])

    assert code == 0
    assert output.exists()


def test_expand_missing_element(problem_dir, monkeypatch, capsys):
    monkeypatch.chdir(problem_dir)
    (problem_dir / "bad.alara").write_text("mixture m\n    element qq 1.0 1.0\nend\n")

    code = main([
        "expand", "bad.alara", "--element-lib", "elelib",
        "--output", str(problem_dir / "out.json"),
    ])

    assert code == 1
    assert "[310]" in capsys.readouterr().err


def test_expand_missing_library(problem_dir, monkeypatch, capsys):
    monkeypatch.chdir(problem_dir)

    code = main(["expand", "problem.alara", "--element-lib", "no_such_lib"])

    assert code == 1
    assert "[110]" in capsys.readouterr().err


def test_flux(problem_dir):
    output = problem_dir / "fluxes.json"

    code = main([
        "flux", str(problem_dir / "problem.alara"), "--groups", "2", "--output", str(output),
    ])

    assert code == 0
    data = json.loads(output.read_text())
    assert data == {"f": [[6.0, 8.0], [10.0, 12.0]]}


def test_flux_not_enough_data(problem_dir, capsys):
    code = main([
        "flux", str(problem_dir / "problem.alara"), "--groups", "3",
        "--output", str(problem_dir / "fluxes.json"),
    ])

    assert code == 1
    assert "[622]" in capsys.readouterr().err


def test_rtflux_header(tmp_path, capsys):
    path = tmp_path / "rtflux"
    write_rtflux(np.ones((3, 4)), path, title="header test", byteorder=">")

    assert main(["--byteorder", ">", "rtflux-header", str(path)]) == 0

    out = capsys.readouterr().out
    assert "title: header test" in out
    assert "ngrp: 3" in out
    assert "intervals: 4 x 1 x 1" in out


def test_log_file(problem_dir):
    log_file = problem_dir / "run.log"

    main([
        "-vv", "--log-file", str(log_file),
        "flux", str(problem_dir / "problem.alara"), "--groups", "2",
        "--output", str(problem_dir / "fluxes.json"),
    ])

    assert "Assigning 1 fluxes" in log_file.read_text()


@pytest.mark.parametrize("flags, level", [([], logging.WARNING), (["-v"], logging.INFO), (["-vv"], logging.DEBUG)])
def test_verbosity_sets_log_level(tmp_path, flags, level):
    path = tmp_path / "rtflux"
    write_rtflux(np.ones((1, 1)), path)

    assert main(flags + ["rtflux-header", str(path)]) == 0
    assert logging.getLogger("alaraprep").level == level
