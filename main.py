# main.py
from __future__ import annotations

import argparse
import sys
from dataclasses import dataclass
from pathlib import Path
from typing import Iterable, List, TextIO

from debug import Debug
from errors import EnigmaError, SettingError
from machine import Machine, Step
from suites import SUITES, build_suite
from utilities import (
    apply_settings,
    group_blocks,
    is_setting_line,
    load_config,
    preprocess_message,
)

# ────────────────────────────────────────────────────────────────────────
#  0. Configuration & logging
# ────────────────────────────────────────────────────────────────────────


debug = Debug()


@dataclass(slots=True)
class Config:
    """Runtime switches for one run of the simulator."""

    verbose: bool = False           # log every keystroke
    block: int = 5                  # display group size


def log_step(step: Step) -> None:
    """Observer for --verbose: one line per keystroke."""
    debug.log(
        "encipher",
        f"[{step.settings}] {step.symbol_in} -> {step.plugged_in}"
        f" -> {step.rotor_out} -> {step.symbol_out}",
    )


# ────────────────────────────────────────────────────────────────────────
#  1. Message processing
# ────────────────────────────────────────────────────────────────────────


def process(machine: Machine, lines: Iterable[str], out: TextIO, cfg: Config) -> None:
    """Run every message line of LINES through MACHINE, writing the
    converted text to OUT.

    '*' lines reconfigure the machine. The first line must be one of them,
    and nothing is written until it is read. Later blank lines are copied
    through.
    """
    configured = False
    for raw in lines:
        line = raw.strip()
        if is_setting_line(line):
            apply_settings(machine, line)
            configured = True
        elif not configured:
            raise SettingError(f"Input must start with a setting line, got {line!r}")
        elif not line:
            out.write("\n")
        else:
            converted = machine.convert(preprocess_message(line))
            out.write(group_blocks(converted, cfg.block) + "\n")

    if not configured:
        raise SettingError("No setting line in input")


# ────────────────────────────────────────────────────────────────────────
#  2. CLI helpers
# ────────────────────────────────────────────────────────────────────────


def parse_args(argv: List[str] | None = None) -> argparse.Namespace:
    p = argparse.ArgumentParser(description="Encrypt or decrypt messages with a rotor machine")
    p.add_argument("files", nargs="*", metavar="FILE", help="CONFIG [INPUT [OUTPUT]]; with --suite only INPUT [OUTPUT]. Input defaults to stdin, output to stdout.")
    p.add_argument("--suite", choices=sorted(SUITES), help="Use a built-in rotor catalog instead of a CONFIG file.")
    p.add_argument("--verbose", action="store_true", help="Log rotor settings and the signal path for every keystroke.")
    p.add_argument("--debug", action="append", default=[], choices=sorted(Debug.components), metavar="COMPONENT", help=f"Enable logging for a component ({', '.join(Debug.components)}). Repeatable.")
    p.add_argument("--block", type=int, default=5, help="Output group size. Default: 5")
    args = p.parse_args(argv)

    limit = 2 if args.suite else 3
    if not args.suite and not args.files:
        p.error("a CONFIG file is required unless --suite is given")
    if len(args.files) > limit:
        p.error(f"at most {limit} file arguments expected")
    if args.block < 1:
        p.error("--block must be positive")
    return args


# ────────────────────────────────────────────────────────────────────────
#  3. Main entry point
# ────────────────────────────────────────────────────────────────────────


def main(argv: List[str] | None = None) -> int:
    args = parse_args(argv)
    cfg = Config(verbose=args.verbose, block=args.block)

    # diagnostics only when asked for on the command line
    debug.toggle_global(bool(args.debug) or cfg.verbose)
    if args.debug:
        debug.enable(*args.debug)
    if cfg.verbose:
        debug.enable("encipher")

    files = list(args.files)
    try:
        machine = build_suite(args.suite) if args.suite else load_config(files.pop(0))
        if cfg.verbose:
            machine.observer = log_step

        lines: Iterable[str] = (
            Path(files[0]).read_text(encoding="utf-8").splitlines() if files else sys.stdin
        )
        if len(files) > 1:
            with open(files[1], "w", encoding="utf-8") as out:
                process(machine, lines, out, cfg)
        else:
            process(machine, lines, sys.stdout, cfg)
    except (EnigmaError, OSError) as excp:
        print(f"Error: {excp}", file=sys.stderr)
        return 1
    return 0


if __name__ == "__main__":
    sys.exit(main())
