"""Command-line front end: print or export the trace of a bubble sort program."""

from __future__ import annotations

import argparse
import logging
import sys

from . import constants
from .api import generate_trace
from .errors import SimulationError
from .playback import TracePlayer
from .run_types import TraceConfig
from .samples import default_source
from .schema import dump_json
from .trace_types import ExecutionTrace


def _format_val(value) -> str:
    if isinstance(value, list):
        return "[" + ", ".join(str(v) for v in value) + "]"
    return repr(value)


def print_trace(trace: ExecutionTrace) -> None:
    for index, step in enumerate(trace):
        print(f"  #{index:<4} line {step.line_number:<4} {step.description}")
        for name, value in step.variables.items():
            print(f"        {name} = {_format_val(value)}")
        for line in step.output or ():
            print(f"        > {line}")


def main(argv: list[str] | None = None) -> int:
    parser = argparse.ArgumentParser(
        description="Step-by-step bubble sort trace simulator")
    parser.add_argument("file", nargs="?",
                        help="Source file to simulate")
    parser.add_argument("--language", "-l", default=constants.SUPPORTED_LANGUAGE,
                        help="Source language (default: javascript)")
    parser.add_argument("--json", action="store_true",
                        help="Print the trace as JSON")
    parser.add_argument("--breakpoint", "-b", type=int, action="append", default=[],
                        help="Breakpoint line; report where playback pauses")
    parser.add_argument("--verbose", "-v", action="store_true",
                        help="Log generation details")

    args = parser.parse_args(argv)
    logging.basicConfig(
        level=logging.INFO if args.verbose else logging.WARNING,
        format="%(name)s: %(message)s",
    )

    if not args.file:
        source = default_source(constants.SUPPORTED_LANGUAGE)
        if not args.json:
            print("No file provided. Using built-in demo:\n")
            print(source)
            print()
    else:
        with open(args.file) as f:
            source = f.read()

    try:
        trace = generate_trace(source, config=TraceConfig(language=args.language))
    except SimulationError as exc:
        print(str(exc), file=sys.stderr)
        return 1

    if args.json:
        print(dump_json(trace))
        return 0

    print("═══ Trace ═══")
    print_trace(trace)
    print(f"\n  {trace.stats.report()}")

    if args.breakpoint:
        player = TracePlayer(trace)
        for line in args.breakpoint:
            player.toggle_breakpoint(line)
        while not player.at_end:
            player.play()
            print(f"  stopped at step {player.position} (line {player.current.line_number})")
    return 0


if __name__ == "__main__":
    sys.exit(main())
