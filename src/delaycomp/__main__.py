"""Command-line entry point: python -m delaycomp WORKBOOK [-o OUTPUT]."""

from __future__ import annotations

import argparse
import sys
from pathlib import Path

from delaycomp.errors import DelayCompensationError
from delaycomp.logging_utils import get_logger
from delaycomp.pipeline import DEFAULT_OUTPUT, run


def main(argv=None) -> int:
    parser = argparse.ArgumentParser(
        prog="delaycomp",
        description="Render the UK rail delay-compensation composite figure",
    )
    parser.add_argument("workbook", type=Path, help="Workbook with Annual_Data and Periodic_Data sheets")
    parser.add_argument("-o", "--output", type=Path, default=Path(DEFAULT_OUTPUT), help="Destination image file")
    parser.add_argument("--log-level", default="INFO", help="Logging level (DEBUG, INFO, WARNING, ...)")
    args = parser.parse_args(argv)

    logger = get_logger(level=args.log_level)
    try:
        run(logger, args.workbook, args.output)
    except DelayCompensationError as exc:
        print(f"delaycomp: {exc}", file=sys.stderr)
        return 1
    return 0


if __name__ == "__main__":
    sys.exit(main())
