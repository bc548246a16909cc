from __future__ import annotations

import logging
from pathlib import Path
from typing import Any, BinaryIO

try:
    import tomllib as tomli  # Python 3.11+
except ImportError:
    import tomli  # <3.11

from .exceptions import ConfigValidationError
from .runner_config import RunnerConfig

logger = logging.getLogger(__name__)

_DEFAULT_KEYS = {"pure", "command", "packages", "options", "registries"}


# =====================================================================
#   Main loader
# =====================================================================
def load_config(path: str | Path | BinaryIO) -> RunnerConfig:
    """
    Load a TOML defaults file into the RunnerConfig that script headers are
    folded onto.

    Only the [defaults] table is read; a file without one yields RunnerConfig().
    """
    if not hasattr(path, "read"):
        config_path = Path(path).resolve()
        with open(config_path, "rb") as f:
            data = _load_toml(f, str(config_path))
    else:
        data = _load_toml(path, getattr(path, "name", "<stream>"))  # type: ignore[arg-type]

    defaults = data.get("defaults", {})
    if not isinstance(defaults, dict):
        raise ConfigValidationError("[defaults] must be a table")

    unknown = set(defaults) - _DEFAULT_KEYS
    if unknown:
        raise ConfigValidationError(
            f"Unknown keys in [defaults]: {sorted(unknown)}. Valid keys: {sorted(_DEFAULT_KEYS)}"
        )

    for key in ("packages", "options", "registries"):
        if key in defaults and not isinstance(defaults[key], list):
            raise ConfigValidationError(f"defaults.{key} must be an array")

    try:
        config = RunnerConfig(**defaults)
    except TypeError as e:
        raise ConfigValidationError(f"Invalid config in [defaults]: {e}") from None

    logger.debug(
        f"Loaded defaults (command='{config.command}', pure={config.pure}, "
        f"{len(config.packages)} packages)"
    )
    return config


def _load_toml(stream: BinaryIO, source: str) -> dict[str, Any]:
    try:
        return tomli.load(stream)
    except tomli.TOMLDecodeError as e:
        raise ConfigValidationError(f"Invalid TOML in {source}: {e}") from None
    except UnicodeDecodeError as e:
        raise ConfigValidationError(f"{source} is not valid UTF-8: {e}") from None
