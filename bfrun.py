#!/usr/bin/env python3
"""
bfrun — run an embedded Brainfuck program on the bfvm machine

Usage:
    python bfrun.py [--program hello|cat] [--dump] [-v | -q] [--log-file PATH]

The program's ',' reads bytes from stdin and '.' writes bytes to stdout.
Log output goes to stderr.

Examples:
    python bfrun.py                          # prints "Hello World!"
    echo abc | python bfrun.py --program cat
    python bfrun.py --program hello --dump   # show the instruction text
    python bfrun.py -v --log-file run.log

Exit status: 0 on normal termination, 1 on a machine fault (unmatched
bracket, tape underflow, I/O failure), 2 on an internal error.
"""

import argparse
import logging
import os
import sys

# Allow running from project root without installing
sys.path.insert(0, os.path.dirname(os.path.abspath(__file__)))

from bfvm import __version__
from bfvm.channels import StreamSink, StreamSource
from bfvm.config import DEFAULT_LOGGER_NAME, DEFAULT_PROGRAM, EMBEDDED_PROGRAMS
from bfvm.errors import MachineError
from bfvm.loader import format_program
from bfvm.log_setup import setup_logging
from bfvm.machine import Machine


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="bfrun",
        description="Run an embedded Brainfuck program",
        epilog="Programs: " + ", ".join(
            f"{name} ({p['description']})" for name, p in EMBEDDED_PROGRAMS.items()),
    )
    parser.add_argument("--program", default=DEFAULT_PROGRAM,
                        choices=list(EMBEDDED_PROGRAMS.keys()),
                        help=f"Embedded program to run (default: {DEFAULT_PROGRAM})")
    parser.add_argument("--dump", action="store_true",
                        help="Print the program's instruction text and exit")
    parser.add_argument("--verbose", "-v", action="store_true",
                        help="Log run details to stderr")
    parser.add_argument("--quiet", "-q", action="store_true",
                        help="Only log errors")
    parser.add_argument("--log-file", default=None,
                        help="Also write a DEBUG log to this file")
    parser.add_argument("--version", action="version",
                        version=f"bfrun {__version__}")
    return parser


def main(argv=None, stdin=None, stdout=None) -> int:
    args = build_parser().parse_args(argv)

    if args.quiet:
        console_level = logging.ERROR
    elif args.verbose:
        console_level = logging.DEBUG
    else:
        console_level = logging.WARNING
    log = setup_logging(DEFAULT_LOGGER_NAME, console_level=console_level,
                        log_file=args.log_file, replace=True)

    profile = EMBEDDED_PROGRAMS[args.program]
    sink = StreamSink(stdout)

    try:
        vm = Machine.from_str(profile["source"],
                              stdin=StreamSource(stdin), stdout=sink)

        if args.dump:
            for byte in (format_program(vm.program) + "\n").encode("ascii"):
                sink.write_byte(byte)
            sink.flush()
            return 0

        log.info("Running '%s' (%d instructions)", args.program, len(vm.program))
        steps = vm.run()
        sink.flush()
        log.info("Terminated after %d steps", steps)

    except MachineError as e:
        log.error("Machine fault: %s", e)
        return 1
    except Exception as e:
        log.error("Internal error: %s", e, exc_info=args.verbose)
        return 2

    return 0


if __name__ == "__main__":
    sys.exit(main())
