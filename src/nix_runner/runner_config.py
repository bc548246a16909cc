# nix_runner/runner_config.py
from __future__ import annotations

import logging
from collections.abc import Callable, Iterable
from dataclasses import dataclass
from typing import Any

from .directives import Command, Directive, Option, Package, Purity, Registry
from .exceptions import ConfigValidationError
from .tokens import is_identifier, is_reference

logger = logging.getLogger(__name__)

DEFAULT_COMMAND = "bash"


@dataclass(frozen=True)
class RunnerConfig:
    """
    Immutable description of how a script should be run.
    Produced by reduce_directives() from a script header, optionally on top of
    defaults returned by load_config().
    """

    pure: bool = False
    """Clear the caller's environment. Overridden by the last #!pure."""

    options: tuple[tuple[str, str], ...] = ()
    """(key, value) pairs from #!nix-option, in file order. Duplicates kept."""

    registries: tuple[tuple[str, str], ...] = ()
    """(old_ref, new_ref) pairs from #!registry, in file order."""

    packages: tuple[str, ...] = ()
    """Package names from #!package, in file order. Duplicates kept."""

    command: str = DEFAULT_COMMAND
    """Interpreter used for the script body. Overridden by the last #!command."""

    def __post_init__(self) -> None:
        if not isinstance(self.pure, bool):
            logger.warning(f"Invalid config: pure must be a boolean, got {self.pure!r}")
            raise ConfigValidationError(f"pure must be a boolean, got {self.pure!r}")
        if not isinstance(self.command, str) or not is_identifier(self.command):
            logger.warning(f"Invalid config: command {self.command!r} is not a valid identifier")
            raise ConfigValidationError(f"command {self.command!r} is not a valid identifier")

        # Accept any sequence but always store tuples
        object.__setattr__(self, "packages", _packages(self.packages))
        object.__setattr__(self, "options", _pairs("option", self.options, is_identifier))
        object.__setattr__(self, "registries", _pairs("registry", self.registries, is_reference))

    def to_dict(self) -> dict[str, Any]:
        """Convert to JSON-serializable dict."""
        return {
            "pure": self.pure,
            "options": [list(p) for p in self.options],
            "registries": [list(p) for p in self.registries],
            "packages": list(self.packages),
            "command": self.command,
        }


def _packages(packages: Iterable[str]) -> tuple[str, ...]:
    if isinstance(packages, str):
        raise ConfigValidationError(f"packages must be a list of names, got {packages!r}")
    packages = tuple(packages)
    for package in packages:
        if not isinstance(package, str) or not is_identifier(package):
            logger.warning(f"Invalid config: package {package!r} is not a valid identifier")
            raise ConfigValidationError(f"package {package!r} is not a valid identifier")
    return packages


def _pairs(
    kind: str, pairs: Iterable[Iterable[str]], check: Callable[[str], bool]
) -> tuple[tuple[str, str], ...]:
    result = []
    for pair in pairs:
        if isinstance(pair, str) or not isinstance(pair, (tuple, list)):
            raise ConfigValidationError(f"{kind} entry {pair!r} must be a pair")
        if len(pair) != 2 or not all(isinstance(v, str) and check(v) for v in pair):
            logger.warning(f"Invalid config: malformed {kind} entry {pair!r}")
            raise ConfigValidationError(f"{kind} entry {pair!r} must be two valid tokens")
        result.append((pair[0], pair[1]))
    return tuple(result)


def reduce_directives(
    directives: Iterable[Directive], defaults: RunnerConfig | None = None
) -> RunnerConfig:
    """
    Fold directives, in order, into a RunnerConfig.

    Purity and Command replace the current value; Option, Registry and
    Package append. Without defaults the fold starts from RunnerConfig().
    Runs in a single pass over the directives.
    """
    base = defaults if defaults is not None else RunnerConfig()
    pure, command = base.pure, base.command
    options = list(base.options)
    registries = list(base.registries)
    packages = list(base.packages)

    for directive in directives:
        if isinstance(directive, Purity):
            pure = directive.value
        elif isinstance(directive, Command):
            command = directive.name
        elif isinstance(directive, Option):
            options.append((directive.key, directive.value))
        elif isinstance(directive, Registry):
            registries.append((directive.old_ref, directive.new_ref))
        elif isinstance(directive, Package):
            packages.append(directive.name)
        else:
            raise TypeError(f"Not a directive: {directive!r}")

    # One construction, so the collected values are validated once
    config = RunnerConfig(
        pure=pure, options=options, registries=registries, packages=packages, command=command
    )
    logger.debug(
        f"Reduced header to command='{config.command}' pure={config.pure} "
        f"({len(config.packages)} packages, {len(config.options)} options, "
        f"{len(config.registries)} registries)"
    )
    return config
