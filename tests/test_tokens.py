# tests/test_tokens.py
import pytest

from nix_runner.tokens import (
    is_identifier,
    is_identifier_char,
    is_reference,
    is_reference_char,
    match_identifier,
    match_reference,
)


@pytest.mark.parametrize("c", ["a", "Z", "0", "9", "-", "_", "."])
def test_identifier_chars(c):
    assert is_identifier_char(c)
    assert is_reference_char(c)


@pytest.mark.parametrize("c", [":", "/", "?", "="])
def test_reference_only_chars(c):
    assert not is_identifier_char(c)
    assert is_reference_char(c)


@pytest.mark.parametrize("c", [" ", "\t", "#", "!", "@", "é", "\r"])
def test_rejected_chars(c):
    assert not is_identifier_char(c)
    assert not is_reference_char(c)


def test_match_identifier_takes_longest_prefix():
    assert match_identifier("python3.11 rest") == ("python3.11", " rest")
    assert match_identifier("bash") == ("bash", "")


def test_match_identifier_requires_one_char():
    assert match_identifier("") is None
    assert match_identifier(" bash") is None


def test_match_identifier_stops_at_reference_chars():
    assert match_identifier("github:NixOS") == ("github", ":NixOS")


def test_match_reference_accepts_urls():
    ref = "github:NixOS/nixpkgs/abc123?dir=modules"
    assert match_reference(ref + " next") == (ref, " next")
    assert match_reference("") is None


def test_whole_token_checks():
    assert is_identifier("experimental-features")
    assert not is_identifier("two words")
    assert not is_identifier("")
    assert is_reference("path:/tmp/flake")
    assert not is_reference("path:/tmp/my flake")
