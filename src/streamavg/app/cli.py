# src/streamavg/app/cli.py
from __future__ import annotations

import argparse
import logging
import sys
from pathlib import Path
from typing import IO, List, Optional

from dotenv import load_dotenv

from streamavg import PACKAGE_NAME, __version__
from streamavg.app.core.config import MODE_DESCRIPTIONS, ConfigError, load_defaults, make_config
from streamavg.app.core.logging import setup_logging
from streamavg.app.core.trace import trace_enabled
from streamavg.app.services.driver import StreamDriver
from streamavg.app.services.samples import open_source, parse_samples

PROG = "avg"
_log = logging.getLogger("streamavg.cli")


def _modes_help() -> str:
    rows = "\n".join(f"  {m.value} -- {desc}" for m, desc in MODE_DESCRIPTIONS.items())
    return "The following modes are supported:\n" + rows


def build_parser() -> argparse.ArgumentParser:
    p = argparse.ArgumentParser(
        prog=PROG,
        description="Compute averages of numbers read from DATAFILE (or stdin) and print them to stdout.",
        epilog=_modes_help(),
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )
    p.add_argument("data_file", nargs="?", metavar="DATAFILE", help="file of whitespace-separated numbers (default: stdin)")
    p.add_argument("-m", "--mode", metavar="MODE", help="set the runtime mode (default: CMA)")
    p.add_argument(
        "-I", "--show-intermediates",
        action="store_true", default=None,
        help="for compatible modes, show intermediate results, not just the final result",
    )
    p.add_argument("-W", "--window-size", type=int, metavar="W", help="for compatible modes, set a window size of W (default: 10)")
    p.add_argument("-c", "--config", metavar="PATH", help="YAML file with default settings (default: $AVG_CONFIG)")
    p.add_argument("-V", "--version", action="store_true", help="show version information")
    return p


def print_version(out: IO[str]) -> None:
    out.write(f"{PROG} ({PACKAGE_NAME}) Version {__version__}\n")


def _fail(parser: argparse.ArgumentParser, message: str, err: IO[str]) -> int:
    err.write(f"{message}\n\n")
    parser.print_help(err)
    return 1


def main(
    argv: Optional[List[str]] = None,
    stdin: Optional[IO[str]] = None,
    stdout: Optional[IO[str]] = None,
    stderr: Optional[IO[str]] = None,
) -> int:
    """
    Entry point for the `avg` command. Returns the process exit status.
    argparse exits on its own for --help (0) and unrecognized options (2).
    """
    stdout = stdout or sys.stdout
    stderr = stderr or sys.stderr

    load_dotenv()
    setup_logging("INFO" if trace_enabled() else "WARNING")

    parser = build_parser()
    args = parser.parse_args(argv)

    if args.version:
        print_version(stdout)
        return 0

    try:
        values = load_defaults(args.config)
        if args.mode is not None:
            values["mode"] = args.mode
        if args.window_size is not None:
            values["window_size"] = args.window_size
        if args.show_intermediates is not None:
            values["show_intermediates"] = args.show_intermediates
        if args.data_file:
            values["data_file"] = Path(args.data_file)
        config = make_config(**values)
    except ConfigError as ex:
        return _fail(parser, str(ex), stderr)

    _log.debug("Resolved config: %s", config)

    try:
        with open_source(config.data_file, stdin) as src:
            driver = StreamDriver(config)
            for line in driver.run_lines(parse_samples(src)):
                stdout.write(line + "\n")
    except ConfigError as ex:
        return _fail(parser, str(ex), stderr)
    except OSError as ex:
        stderr.write(f"{PROG}: {ex}\n")
        return 1

    stdout.flush()
    return 0


if __name__ == "__main__":
    sys.exit(main())
