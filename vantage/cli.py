"""
Command-line entry point.

Reads one problem from stdin (or --input), prints
``peaks altitude_sum placed_sum`` on a single stdout line. Diagnostics and
log output go to stderr.
"""

import argparse
import logging
import sys
from typing import List, Optional

from vantage.config.settings import VantageConfig, load_config
from vantage.errors import CapacityError, InputFormatError
from vantage.search.runner import optimize_probe_placement
from vantage.terrain.loader import parse_problem

EXIT_OK = 0
EXIT_INPUT_ERROR = 2
EXIT_CAPACITY_ERROR = 3


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog='vantage',
        description='Exact probe placement maximizing observed cells on an altitude grid',
    )
    parser.add_argument('--input', '-i', default=None,
                        help='Problem file (default: read stdin)')
    parser.add_argument('--config', '-c', default=None,
                        help='YAML or JSON configuration file')
    parser.add_argument('--no-prune', action='store_true',
                        help='Disable upper-bound pruning (same result, slower)')
    parser.add_argument('--plot', default=None,
                        help='Save a PNG of the best placement to this path')
    parser.add_argument('--verbose', '-v', action='store_true',
                        help='Log run header and summary to stderr')
    parser.add_argument('--debug', action='store_true',
                        help='Log search details to stderr')
    return parser


def _resolve_config(args: argparse.Namespace) -> VantageConfig:
    config = load_config(args.config)
    if args.no_prune:
        config.solver.prune = False
    if args.plot is not None:
        config.visualization.output_path = args.plot
    if args.verbose:
        config.verbose = True
        if config.logging_level > logging.INFO:
            config.log_level = "INFO"
    if args.debug:
        config.verbose = True
        config.log_level = "DEBUG"
    return config


def main(argv: Optional[List[str]] = None) -> int:
    """
    Run the command-line tool.

    Returns:
        Process exit status: 0 on success, 2 for malformed input or
        configuration, 3 for capacity violations.
    """
    parser = build_parser()
    args = parser.parse_args(argv)
    try:
        config = _resolve_config(args)
    except (OSError, TypeError, ValueError) as e:
        print(f"error: configuration: {e}", file=sys.stderr)
        return EXIT_INPUT_ERROR

    logging.basicConfig(
        stream=sys.stderr,
        level=config.logging_level,
        format='%(levelname)s %(name)s: %(message)s',
    )

    try:
        if args.input is not None:
            with open(args.input, 'r') as f:
                problem = parse_problem(
                    f,
                    max_cells=config.solver.max_cells,
                    max_probes=config.solver.max_probes,
                )
        else:
            problem = parse_problem(
                sys.stdin,
                max_cells=config.solver.max_cells,
                max_probes=config.solver.max_probes,
            )
        result = optimize_probe_placement(
            problem.grid, problem.probes, config=config.solver, verbose=config.verbose,
        )
    except InputFormatError as e:
        print(f"error: input stage '{e.stage}': {e.message}", file=sys.stderr)
        return EXIT_INPUT_ERROR
    except CapacityError as e:
        stage = e.stage if e.stage is not None else "capacity"
        print(f"error: input stage '{stage}': {e.message}", file=sys.stderr)
        return EXIT_CAPACITY_ERROR
    except OSError as e:
        print(f"error: input stage 'open': {e}", file=sys.stderr)
        return EXIT_INPUT_ERROR

    print(result.format_line())

    if config.visualization.output_path:
        from vantage.visualization.plotting import save_placement_figure

        path = save_placement_figure(
            problem.grid,
            result.occupied_mask,
            result.visible_mask,
            config.visualization.output_path,
            title=f"Probe Placement ({result.format_line()})",
            dpi=config.visualization.dpi,
            figsize=config.visualization.figsize,
            cmap=config.visualization.cmap,
        )
        logging.getLogger(__name__).info("Placement figure saved to %s", path)

    return EXIT_OK


if __name__ == '__main__':
    sys.exit(main())
