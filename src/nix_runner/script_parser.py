# nix_runner/script_parser.py
"""
Split a runnable script into its runner header and its body.

Expected layout:

    #!/usr/bin/env nix-runner          <- interpreter line, never inspected
    #!pure                             <- zero or more directive lines
    #!package hello
    <blank line>                       <- mandatory terminator
    hello --greeting hi                <- body, kept verbatim

parse() returns a ParsedScript holding the reduced RunnerConfig and the body,
or raises a ParseError subclass. It performs no I/O and keeps no state, so
independent scripts may be parsed concurrently without coordination.
"""

from __future__ import annotations

import logging
from collections.abc import Iterator
from dataclasses import dataclass
from typing import Any

from .directives import HEADER_MARKER, Directive, dispatch, is_directive_line
from .exceptions import (
    DirectiveError,
    IncompleteConsumptionError,
    MissingHeaderMarkerError,
    MissingTerminatorError,
)
from .runner_config import RunnerConfig, reduce_directives

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class HeaderBlock:
    """Directives collected from the top of a script and where the scan stopped."""

    directives: tuple[Directive, ...]

    rest: str
    """Input starting at the line that ended the block."""

    line: int
    """
    1-based line number of the first line in rest.
    When rest is empty this is the last line of the input.
    """

    error: DirectiveError | None = None
    """Why a '#!' line ended the block, if one did."""


@dataclass(frozen=True)
class ParsedScript:
    """Result of parse(): the runner configuration and the verbatim body."""

    config: RunnerConfig
    body: str
    directives: tuple[Directive, ...] = ()

    def __iter__(self) -> Iterator[Any]:
        # Allows `config, body = parse(text)`
        yield self.config
        yield self.body

    def to_dict(self) -> dict[str, Any]:
        """Convert to JSON-serializable dict."""
        return {
            "config": self.config.to_dict(),
            "directives": [d.to_line() for d in self.directives],
            "body": self.body,
        }


# ─────────────────────────────────────────────────────────────────────────────
# Line handling
# ─────────────────────────────────────────────────────────────────────────────
def _line_at(text: str, pos: int) -> tuple[str, int | None]:
    end = text.find("\n", pos)
    if end == -1:
        return text[pos:], None
    line = text[pos:end]
    if line.endswith("\r"):
        line = line[:-1]
    return line, end + 1


def split_line(text: str) -> tuple[str, str | None]:
    """
    Split off the first line of text.

    Returns the line without its ending ('\\n' or '\\r\\n') and the text after
    the ending, or None in place of the remainder when the line runs to end
    of input.
    """
    line, next_pos = _line_at(text, 0)
    return line, None if next_pos is None else text[next_pos:]


def skip_interpreter_line(text: str) -> str:
    """
    Drop the interpreter line and return what follows it.

    Raises:
        MissingHeaderMarkerError: If text does not start with '#!'
        MissingTerminatorError: If the interpreter line is the whole input
    """
    if not text.startswith(HEADER_MARKER):
        raise MissingHeaderMarkerError(f"script must start with '{HEADER_MARKER}'", line=1)
    _, rest = split_line(text)
    if rest is None:
        raise MissingTerminatorError(
            "expected a blank line after the interpreter line, found end of input", line=1
        )
    return rest


# ─────────────────────────────────────────────────────────────────────────────
# Header aggregation
# ─────────────────────────────────────────────────────────────────────────────
def collect_directives(text: str, first_line: int = 2) -> HeaderBlock:
    """
    Read consecutive directive lines from the start of text.

    Stops at the first blank line, non-directive line, malformed directive or
    end of input. Never raises; a directive that failed to parse is kept on
    HeaderBlock.error so the caller can decide whether it is fatal.
    """
    directives: list[Directive] = []
    pos = 0
    lineno = first_line

    while pos < len(text):
        line, next_pos = _line_at(text, pos)
        if not line or not is_directive_line(line):
            break
        try:
            directive = dispatch(line)
        except DirectiveError as e:
            return HeaderBlock(tuple(directives), text[pos:], lineno, e.at_line(lineno))
        directives.append(directive)
        lineno += 1
        pos = len(text) if next_pos is None else next_pos

    rest = text[pos:]
    if not rest:
        # Nothing left: point at the last line of the input
        lineno -= 1
    return HeaderBlock(tuple(directives), rest, lineno)


def expect_terminator(block: HeaderBlock) -> str:
    """
    Consume the blank line that closes the header and return the text after it.

    Raises:
        UnknownDirectiveError: If an unknown '#!' line ended the block
        MalformedArgumentError: If a directive with bad arguments ended the block
        MissingTerminatorError: If anything else follows the directives
    """
    line, after = split_line(block.rest)
    if line == "" and after is not None:
        return after

    if block.error is not None:
        raise block.error
    found = repr(line) if block.rest else "end of input"
    raise MissingTerminatorError(
        f"expected a blank line after the directive block, found {found}", line=block.line
    )


# ─────────────────────────────────────────────────────────────────────────────
# Body extraction
# ─────────────────────────────────────────────────────────────────────────────
def capture_body(text: str) -> tuple[str, str]:
    """Return (body, unconsumed). The body always runs to end of input."""
    return text, ""


def parse(text: str, defaults: RunnerConfig | None = None) -> ParsedScript:
    """
    Parse a script into its RunnerConfig and body.

    Args:
        text: Full script text, interpreter line included
        defaults: Base configuration the directives are folded onto
                  (RunnerConfig() when omitted)

    Raises:
        ParseError: One of its subclasses; no partial result is returned
    """
    rest = skip_interpreter_line(text)
    block = collect_directives(rest)
    after_header = expect_terminator(block)

    body, unconsumed = capture_body(after_header)
    if unconsumed:
        body_line = block.line + 1
        raise IncompleteConsumptionError(
            f"{len(unconsumed)} characters left after the body", line=body_line
        )

    config = reduce_directives(block.directives, defaults)
    logger.debug(
        f"Parsed {len(block.directives)} directives; body starts at line {block.line + 1} "
        f"({len(body)} chars)"
    )
    return ParsedScript(config=config, body=body, directives=block.directives)
