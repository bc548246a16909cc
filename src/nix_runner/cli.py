from __future__ import annotations

import argparse
import json
import sys

from . import __version__
from .exceptions import NixRunnerError
from .invocation import DEFAULT_FLAKE, DEFAULT_NIX, build_invocation
from .load_config import load_config
from .load_script import load_script
from .logging_config import setup_logging

PROG = "nix-runner"


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog=PROG, description="An executor for runnable nix scripts"
    )
    parser.add_argument("--version", action="version", version=f"%(prog)s {__version__}")
    parser.add_argument(
        "--defaults", metavar="FILE", help="TOML file with [defaults] for the runner header"
    )
    parser.add_argument(
        "--json", action="store_true", help="Print the parsed header and body as JSON"
    )
    parser.add_argument("--nix", default=DEFAULT_NIX, help="nix executable (default: %(default)s)")
    parser.add_argument(
        "--flake", default=DEFAULT_FLAKE, help="Flake providing packages (default: %(default)s)"
    )
    parser.add_argument("-v", "--verbose", action="store_true", help="Enable debug logging")
    parser.add_argument("script", help="Script with a runner header")
    parser.add_argument(
        "args", nargs=argparse.REMAINDER, help="Arguments forwarded to the script"
    )
    return parser


def main(argv: list[str] | None = None) -> int:
    args = build_parser().parse_args(argv)
    if args.verbose:
        setup_logging("DEBUG")

    defaults = None
    if args.defaults:
        try:
            defaults = load_config(args.defaults)
        except (NixRunnerError, OSError) as e:
            print(f"{PROG}: error: {args.defaults}: {e}", file=sys.stderr)
            return 1

    try:
        parsed = load_script(args.script, defaults)
    except (NixRunnerError, OSError) as e:
        print(f"{PROG}: error: {args.script}: {e}", file=sys.stderr)
        return 1

    if args.json:
        print(json.dumps(parsed.to_dict(), indent=2))
        return 0

    invocation = build_invocation(
        parsed.config, args.script, args.args, nix=args.nix, flake=args.flake
    )
    print(invocation.shell_line)
    return 0

