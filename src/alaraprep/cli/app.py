"""Command-line interface for alaraprep using argparse."""

from __future__ import annotations

import argparse
import json
import logging
import sys
from pathlib import Path
from typing import List, Optional

from alaraprep.composition.library import NuclearLibraries
from alaraprep.composition.resolver import expand_mixtures
from alaraprep.config import PreprocessConfig
from alaraprep.core.groups import GroupStructure
from alaraprep.errors import AlaraPrepError
from alaraprep.flux.resolver import cross_reference
from alaraprep.flux.rtflux import read_rtflux_header
from alaraprep.io.alara import read_alara_input
from alaraprep.logging_config import level_from_verbosity, setup_logging

logger = logging.getLogger(__name__)


def _config(args: argparse.Namespace) -> PreprocessConfig:
    config = PreprocessConfig.from_env(
        rtflux_byteorder=args.byteorder,
        log_level=level_from_verbosity(args.verbose),
    )
    config.search_path.directories[:0] = args.data_dir or []
    return config


def cmd_expand(args: argparse.Namespace, config: PreprocessConfig) -> None:
    problem = read_alara_input(args.input)

    libraries = NuclearLibraries.load(
        element_lib=args.element_lib or problem.element_lib or None,
        material_lib=args.material_lib or problem.material_lib or None,
        search_path=config.search_path,
    )
    roots = expand_mixtures(problem.mixtures, libraries, config.avogadro)

    output_data = {
        name: {
            "total_density": problem.mixtures[name].total_density,
            "volume_fraction": problem.mixtures[name].volume_fraction,
            "isotopes": root_list.to_dict(),
        }
        for name, root_list in roots.items()
    }
    Path(args.output).write_text(json.dumps(output_data, indent=2))
    print(f"Wrote isotope densities for {len(roots)} mixtures to {args.output}")


def cmd_flux(args: argparse.Namespace, config: PreprocessConfig) -> None:
    problem = read_alara_input(args.input)

    intervals = problem.intervals()
    groups = GroupStructure(num_groups=args.groups)
    cross_reference(problem.fluxes, intervals, groups, config.rtflux_byteorder)

    output_data = {
        descriptor.flux_name: intervals.flux_array(i).tolist()
        for i, descriptor in enumerate(problem.fluxes)
    }
    Path(args.output).write_text(json.dumps(output_data, indent=2))
    print(f"Wrote {groups.num_fluxes} fluxes for {intervals.count()} intervals to {args.output}")


def cmd_rtflux_header(args: argparse.Namespace, config: PreprocessConfig) -> None:
    header = read_rtflux_header(args.file, config.rtflux_byteorder)
    print(f"title: {header.title}")
    print(f"ndim: {header.ndim}  ngrp: {header.ngrp}  nblok: {header.nblok}")
    print(f"intervals: {header.ninti} x {header.nintj} x {header.nintk}")


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="ALARA material and flux input preprocessing")
    parser.add_argument("-v", "--verbose", action="count", default=0, help="Increase log detail")
    parser.add_argument("--log-file", type=Path, help="Also write the log to this file")
    parser.add_argument("--byteorder", choices=["=", "<", ">"], default="=",
                        help="Byte order of RTFLUX files (default: native)")
    parser.add_argument("--data-dir", type=Path, action="append",
                        help="Directory searched for library files (repeatable)")
    subparsers = parser.add_subparsers(dest="command", required=True)

    expand = subparsers.add_parser("expand", help="Expand mixtures into isotope number densities")
    expand.add_argument("input", type=Path, help="ALARA input file")
    expand.add_argument("--element-lib", help="Element library (overrides element_lib)")
    expand.add_argument("--material-lib", help="Material library (overrides material_lib)")
    expand.add_argument("--output", type=Path, default=Path("isotopes.json"))
    expand.set_defaults(func=cmd_expand)

    flux = subparsers.add_parser("flux", help="Read flux descriptions into the problem intervals")
    flux.add_argument("input", type=Path, help="ALARA input file")
    flux.add_argument("--groups", type=int, required=True, help="Number of energy groups")
    flux.add_argument("--output", type=Path, default=Path("fluxes.json"))
    flux.set_defaults(func=cmd_flux)

    header = subparsers.add_parser("rtflux-header", help="Print the dimensions of an RTFLUX file")
    header.add_argument("file", type=Path)
    header.set_defaults(func=cmd_rtflux_header)

    return parser


def main(argv: Optional[List[str]] = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)
    config = _config(args)
    setup_logging(config.log_level, str(args.log_file) if args.log_file else None)
    try:
        args.func(args, config)
    except AlaraPrepError as err:
        logger.error(str(err))
        print(f"ERROR {err}", file=sys.stderr)
        return 1
    return 0


if __name__ == "__main__":
    sys.exit(main())
