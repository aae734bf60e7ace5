"""
Command-line interface for the N-body simulator.

Usage:
    gravsim                               # reads config.txt, writes output.csv
    gravsim my_system.txt -o orbits.csv
    gravsim my_system.txt --method euler --precision 12
    python -m gravsim --include-initial --quiet
"""

import argparse
import logging
import sys
from typing import List, Optional

from gravsim.config import ConfigError
from gravsim.simulation import run_file
from gravsim.system import METHODS

logger = logging.getLogger("gravsim.cli")


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="gravsim",
        description="Integrate a gravitational N-body system with the Euler-Cromer method.",
    )
    parser.add_argument(
        "config",
        nargs="?",
        default="config.txt",
        help="Configuration file (default: config.txt). Missing or body-less "
        "configurations simulate the default solar system.",
    )
    parser.add_argument(
        "-o", "--output", default="output.csv", help="Output CSV path (default: output.csv)"
    )
    parser.add_argument(
        "--method",
        choices=METHODS,
        default=METHODS[0],
        help="Integration method (default: euler_cromer)",
    )
    parser.add_argument(
        "--precision",
        type=int,
        default=6,
        help="Significant digits written per coordinate (default: 6)",
    )
    parser.add_argument(
        "--include-initial",
        action="store_true",
        help="Also write the barycentric starting positions as the first record",
    )
    parser.add_argument(
        "-q", "--quiet", action="store_true", help="Suppress progress messages"
    )
    parser.add_argument(
        "--log-level",
        default="INFO",
        choices=["DEBUG", "INFO", "WARNING", "ERROR"],
        help="Logging level (default: INFO)",
    )
    return parser


def main(argv: Optional[List[str]] = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)
    if args.precision < 1:
        parser.error("--precision must be at least 1")

    level = logging.WARNING if args.quiet else getattr(logging, args.log_level)
    logging.basicConfig(level=level, format="%(levelname)s: %(message)s")

    try:
        result = run_file(
            args.config,
            args.output,
            method=args.method,
            precision=args.precision,
            include_initial=args.include_initial,
            progress=not args.quiet,
        )
    except ConfigError as exc:
        logger.error("Error in config file %s: %s", args.config, exc)
        return 1

    logger.info(
        "Simulated %d bodies for %d steps (%g s).",
        len(result.system),
        result.steps,
        result.elapsed,
    )
    return 0


if __name__ == "__main__":
    sys.exit(main())
