#!/usr/bin/env python3
"""
Command-line interface for tower balance analysis.

Reads a tower description (one ``name (weight) -> child, ...`` line per node),
prints the name of the bottom program and the weight the single unbalanced
program would need for the whole tower to balance.
"""

import argparse
import logging
import sys
from pathlib import Path
from typing import List, Optional

from towerbalance.analysis import TowerAnalysis, TowerConfig, TowerReport
from towerbalance.exceptions import TowerError
from towerbalance.io import read_tower, write_json

LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"


def setup_argument_parser() -> argparse.ArgumentParser:
    """
    Configure and return the argument parser.

    Returns:
        Configured ArgumentParser instance.
    """
    parser = argparse.ArgumentParser(
        prog="towerbalance",
        description=__doc__,
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )
    parser.add_argument(
        "input",
        nargs="?",
        default=Path("example"),
        help="Path to the tower description (default: ./example)",
        type=Path,
    )

    analysis_group = parser.add_argument_group("analysis options")
    analysis_group.add_argument(
        "--no-validate",
        dest="validate",
        help="Skip checking that the input forms a single tree",
        action="store_false",
    )
    analysis_group.add_argument(
        "--lenient-parents",
        dest="strict_parents",
        help="Keep the last parent when a node is listed twice instead of failing",
        action="store_false",
    )

    output_group = parser.add_argument_group("output options")
    output_group.add_argument(
        "--json",
        dest="json_path",
        help="Also write the full report as JSON to this path",
        type=Path,
    )
    output_group.add_argument(
        "-v",
        "--verbose",
        help="Log every descent step and cache statistics",
        action="store_true",
    )
    return parser


def format_report(report: TowerReport) -> List[str]:
    lines = [f"Root = {report.root.name}"]
    correction = report.correction
    if correction is None:
        lines.append("Balanced: no weight correction needed")
    else:
        lines.append(
            f"Corrected weight = {correction.corrected_weight} "
            f"({correction.outlier} under {correction.parent})"
        )
    return lines


def main(argv: Optional[List[str]] = None) -> int:
    parser = setup_argument_parser()
    args = parser.parse_args(argv)

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format=LOG_FORMAT,
    )
    logger = logging.getLogger("towerbalance")

    config = TowerConfig(validate=args.validate, strict_parents=args.strict_parents)
    try:
        registry = read_tower(str(args.input))
        report = TowerAnalysis(config=config, logger=logger).run(registry)
    except OSError as e:
        print(f"error reading {args.input}: {e.strerror or e}", file=sys.stderr)
        return 1
    except TowerError as e:
        print(f"error during {e.stage}: {e}", file=sys.stderr)
        return 1

    for line in format_report(report):
        print(line)

    if args.json_path is not None:
        write_json(report, registry, str(args.json_path))
        logger.info("Report written to %s", args.json_path)
    return 0


if __name__ == "__main__":
    sys.exit(main())
