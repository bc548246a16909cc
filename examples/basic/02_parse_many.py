"""
02_parse_many.py - Parse several scripts concurrently

Parsing is pure, so load_scripts() reads and parses each file on its own
worker thread and returns results in input order.

Try it:
    python examples/basic/02_parse_many.py path/to/a.sh path/to/b.sh
"""
# ruff: noqa: T201

import asyncio
import sys

from nix_runner import NixRunnerError, load_scripts, setup_logging


async def main(paths):
    setup_logging("DEBUG")
    try:
        results = await load_scripts(paths)
    except NixRunnerError as e:
        print(f"Failed: {e}")
        return

    for path, parsed in zip(paths, results):
        print(f"{path}: {parsed.config.command} with {len(parsed.config.packages)} packages")


if __name__ == "__main__":
    asyncio.run(main(sys.argv[1:]))
