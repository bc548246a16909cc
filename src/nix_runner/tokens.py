# nix_runner/tokens.py
"""
Character-class recognizers for directive arguments.

Two alphabets are recognized:

- identifier: ASCII letters, digits, '-', '_' and '.'. Used for command names,
  package names and option keys/values.
- reference: the identifier alphabet plus ':', '/', '?' and '='. Used for
  registry locators such as "github:NixOS/nixpkgs/abc123?dir=modules".

Each matcher consumes the longest non-empty run of matching characters and
returns it with the unconsumed remainder, or None when nothing matches.
"""

from __future__ import annotations

from collections.abc import Callable

IDENTIFIER_PUNCTUATION = frozenset("-_.")
REFERENCE_PUNCTUATION = IDENTIFIER_PUNCTUATION | frozenset(":/?=")

Match = tuple[str, str]
"""(matched token, remainder)"""


def is_identifier_char(c: str) -> bool:
    return (c.isascii() and c.isalnum()) or c in IDENTIFIER_PUNCTUATION


def is_reference_char(c: str) -> bool:
    return (c.isascii() and c.isalnum()) or c in REFERENCE_PUNCTUATION


def _take_while(predicate: Callable[[str], bool], text: str) -> Match | None:
    end = 0
    while end < len(text) and predicate(text[end]):
        end += 1
    if end == 0:
        return None
    return text[:end], text[end:]


def match_identifier(text: str) -> Match | None:
    """Match one identifier at the start of text."""
    return _take_while(is_identifier_char, text)


def match_reference(text: str) -> Match | None:
    """Match one registry reference at the start of text."""
    return _take_while(is_reference_char, text)


def is_identifier(value: str) -> bool:
    """True if the whole of value is a single identifier."""
    m = match_identifier(value)
    return m is not None and m[1] == ""


def is_reference(value: str) -> bool:
    """True if the whole of value is a single reference."""
    m = match_reference(value)
    return m is not None and m[1] == ""
