"""Command-line entry point: ``pipex infile cmd1 cmd2 outfile``."""

from __future__ import annotations

import os
import sys

from pipex.formatting import println
from pipex.pipeline import parse_argv

_EXPECTED_ARGS = 4


def main(argv: list[str] | None = None) -> int:
    """Run ``< infile cmd1 | cmd2 > outfile``; argument errors are reported."""
    args = sys.argv[1:] if argv is None else list(argv)
    if len(args) != _EXPECTED_ARGS:
        reason = (
            "not enough arguments"
            if len(args) < _EXPECTED_ARGS
            else "too many arguments"
        )
        println("Error : %s (got %d, expected 4)", reason, len(args))
        return 0
    if not os.access(args[0], os.R_OK):
        println("file %s is not usable !", args[0])
        return 0
    pipex = parse_argv(["pipex", *args], os.environ)
    try:
        pipex.resolve()
    except ValueError as exc:
        println("Error : %s", str(exc))
        return 1
    pipex.run()
    return 0


if __name__ == "__main__":
    sys.exit(main())