from __future__ import annotations

import asyncio
import logging
from collections.abc import Iterable
from pathlib import Path
from typing import TextIO

from .exceptions import ScriptDecodeError
from .runner_config import RunnerConfig
from .script_parser import ParsedScript, parse

logger = logging.getLogger(__name__)


def load_script(path: str | Path | TextIO, defaults: RunnerConfig | None = None) -> ParsedScript:
    """
    Read a script and parse its runner header.

    Accepts a path or an open text stream. Newlines are kept exactly as
    written so '\\r\\n' scripts keep their body intact.

    Raises:
        ScriptDecodeError: If the file is not valid UTF-8
        ParseError: If the header is invalid
    """
    try:
        if not hasattr(path, "read"):
            script_path = Path(path)
            logger.debug(f"Reading script {script_path}")
            with open(script_path, encoding="utf-8", newline="") as f:
                text = f.read()
        else:
            text = path.read()  # type: ignore[union-attr]
    except UnicodeDecodeError as e:
        raise ScriptDecodeError(f"script is not valid UTF-8: {e}") from None

    return parse(text, defaults)


async def load_scripts(
    paths: Iterable[str | Path], defaults: RunnerConfig | None = None
) -> list[ParsedScript]:
    """
    Load many scripts concurrently, each on a worker thread.

    Results are returned in the order of paths. The first failure propagates.
    """
    paths = list(paths)
    logger.debug(f"Loading {len(paths)} scripts")
    return list(
        await asyncio.gather(*(asyncio.to_thread(load_script, p, defaults) for p in paths))
    )
