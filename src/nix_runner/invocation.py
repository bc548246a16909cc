# nix_runner/invocation.py
"""
Translate a RunnerConfig into the `nix shell` command line that runs a script.

Nothing here executes anything; build_invocation() only describes the call
that an executor would make:

    nix shell [--ignore-environment] [--option K V]... [--override-flake OLD NEW]...
              [FLAKE#PKG]... --command COMMAND SCRIPT ARGS...
"""

from __future__ import annotations

import logging
import shlex
from collections.abc import Sequence
from dataclasses import dataclass
from pathlib import Path
from typing import Any

from .runner_config import RunnerConfig

logger = logging.getLogger(__name__)

DEFAULT_NIX = "nix"
DEFAULT_FLAKE = "nixpkgs"


@dataclass(frozen=True)
class ResolvedInvocation:
    """Fully resolved command line for one script run."""

    argv: tuple[str, ...]
    """Program and arguments, ready for an exec-style call."""

    script: str
    """Path of the script handed to the configured command."""

    args: tuple[str, ...] = ()
    """Trailing arguments forwarded to the script."""

    @property
    def shell_line(self) -> str:
        """argv quoted for display or for a POSIX shell."""
        return shlex.join(self.argv)

    def to_dict(self) -> dict[str, Any]:
        return {
            "argv": list(self.argv),
            "script": self.script,
            "args": list(self.args),
            "shell_line": self.shell_line,
        }


def build_invocation(
    config: RunnerConfig,
    script: str | Path,
    args: Sequence[str] = (),
    *,
    nix: str = DEFAULT_NIX,
    flake: str = DEFAULT_FLAKE,
) -> ResolvedInvocation:
    """
    Build the `nix shell` invocation for a parsed script.

    Args:
        config: Configuration parsed from the script header
        script: Path passed to config.command
        args: Extra arguments forwarded after the script path
        nix: Name or path of the nix executable
        flake: Flake that package names are resolved against
    """
    argv: list[str] = [nix, "shell"]
    if config.pure:
        argv.append("--ignore-environment")
    for key, value in config.options:
        argv += ["--option", key, value]
    for old_ref, new_ref in config.registries:
        argv += ["--override-flake", old_ref, new_ref]
    argv += [f"{flake}#{package}" for package in config.packages]
    argv += ["--command", config.command, str(script), *args]

    logger.debug(f"Resolved invocation: {shlex.join(argv)}")
    return ResolvedInvocation(argv=tuple(argv), script=str(script), args=tuple(args))
