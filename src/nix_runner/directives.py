# nix_runner/directives.py
"""
Directive variants, per-kind recognizers and the line dispatcher.

A directive line is the header marker followed by a keyword and its
arguments, separated by exactly one space:

    #!pure
    #!command <identifier>
    #!package <identifier>
    #!nix-option <identifier> <identifier>
    #!registry <reference> <reference>

dispatch() classifies one line as exactly one directive or raises.
"""

from __future__ import annotations

from collections.abc import Callable, Iterable
from dataclasses import dataclass

from .exceptions import MalformedArgumentError, UnknownDirectiveError
from .tokens import Match, match_identifier, match_reference

HEADER_MARKER = "#!"


# ─────────────────────────────────────────────────────────────────────────────
# Directive variants
# ─────────────────────────────────────────────────────────────────────────────
@dataclass(frozen=True)
class Purity:
    """#!pure - run in an environment cleared of the caller's variables."""

    value: bool = True

    def to_line(self) -> str:
        return f"{HEADER_MARKER}pure"


@dataclass(frozen=True)
class Option:
    """#!nix-option <key> <value>"""

    key: str
    value: str

    def to_line(self) -> str:
        return f"{HEADER_MARKER}nix-option {self.key} {self.value}"


@dataclass(frozen=True)
class Registry:
    """#!registry <old-ref> <new-ref>"""

    old_ref: str
    new_ref: str

    def to_line(self) -> str:
        return f"{HEADER_MARKER}registry {self.old_ref} {self.new_ref}"


@dataclass(frozen=True)
class Package:
    """#!package <name>"""

    name: str

    def to_line(self) -> str:
        return f"{HEADER_MARKER}package {self.name}"


@dataclass(frozen=True)
class Command:
    """#!command <name>"""

    name: str

    def to_line(self) -> str:
        return f"{HEADER_MARKER}command {self.name}"


Directive = Purity | Option | Registry | Package | Command

Recognizer = Callable[[str | None, str], Directive]
"""Takes the argument text (None when the keyword stands alone) and the full line."""


# ─────────────────────────────────────────────────────────────────────────────
# Argument grammar
# ─────────────────────────────────────────────────────────────────────────────
def _token(
    text: str, matcher: Callable[[str], Match | None], what: str, line: str
) -> tuple[str, str]:
    m = matcher(text)
    if m is None:
        found = repr(text[0]) if text else "end of line"
        raise MalformedArgumentError(f"expected {what}, found {found} in {line!r}", line)
    return m


def _expect_end(rest: str, line: str) -> None:
    if rest:
        raise MalformedArgumentError(f"unexpected trailing text {rest!r} in {line!r}", line)


def _one(
    args: str | None, matcher: Callable[[str], Match | None], what: str, line: str
) -> str:
    token, rest = _token(args or "", matcher, what, line)
    _expect_end(rest, line)
    return token


def _pair(
    args: str | None, matcher: Callable[[str], Match | None], what: str, line: str
) -> tuple[str, str]:
    first, rest = _token(args or "", matcher, what, line)
    if not rest.startswith(" "):
        found = repr(rest[0]) if rest else "end of line"
        raise MalformedArgumentError(
            f"expected a space and a second {what}, found {found} in {line!r}", line
        )
    second, rest = _token(rest[1:], matcher, what, line)
    _expect_end(rest, line)
    return first, second


# ─────────────────────────────────────────────────────────────────────────────
# Recognizers
# ─────────────────────────────────────────────────────────────────────────────
def recognize_pure(args: str | None, line: str) -> Purity:
    if args is not None:
        raise MalformedArgumentError(f"'pure' takes no arguments in {line!r}", line)
    return Purity(True)


def recognize_command(args: str | None, line: str) -> Command:
    return Command(_one(args, match_identifier, "identifier", line))


def recognize_package(args: str | None, line: str) -> Package:
    return Package(_one(args, match_identifier, "identifier", line))


def recognize_nix_option(args: str | None, line: str) -> Option:
    key, value = _pair(args, match_identifier, "identifier", line)
    return Option(key, value)


def recognize_registry(args: str | None, line: str) -> Registry:
    old_ref, new_ref = _pair(args, match_reference, "reference", line)
    return Registry(old_ref, new_ref)


RECOGNIZERS: tuple[tuple[str, Recognizer], ...] = (
    ("nix-option", recognize_nix_option),
    ("registry", recognize_registry),
    ("pure", recognize_pure),
    ("command", recognize_command),
    ("package", recognize_package),
)
"""Keyword and recognizer pairs, in the order dispatch() tries them."""


def check_unambiguous(keywords: Iterable[str]) -> None:
    """
    Ensure no directive keyword is a prefix of another.

    Raises:
        ValueError: If two keywords collide
    """
    seen: list[str] = []
    for keyword in keywords:
        if not keyword or " " in keyword:
            raise ValueError(f"Invalid directive keyword {keyword!r}")
        for other in seen:
            if keyword.startswith(other) or other.startswith(keyword):
                raise ValueError(f"Directive keywords {other!r} and {keyword!r} share a prefix")
        seen.append(keyword)


check_unambiguous(keyword for keyword, _ in RECOGNIZERS)


# ─────────────────────────────────────────────────────────────────────────────
# Dispatcher
# ─────────────────────────────────────────────────────────────────────────────
def is_directive_line(line: str) -> bool:
    """True if the line carries the header marker."""
    return line.startswith(HEADER_MARKER)


def dispatch(line: str) -> Directive:
    """
    Classify a single line (without its line ending) as one directive.

    Raises:
        UnknownDirectiveError: If no directive keyword matches
        MalformedArgumentError: If the keyword matches but its arguments do not
    """
    if not is_directive_line(line):
        raise UnknownDirectiveError(f"expected a '{HEADER_MARKER}' directive, found {line!r}", line)

    payload = line[len(HEADER_MARKER) :]
    for keyword, recognize in RECOGNIZERS:
        if payload == keyword:
            return recognize(None, line)
        if payload.startswith(keyword + " "):
            return recognize(payload[len(keyword) + 1 :], line)

    raise UnknownDirectiveError(f"unknown directive {line!r}", line)
